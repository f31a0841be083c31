"""领域协议定义

集中定义各层之间的接口契约（Protocol）。使用 typing.Protocol 而非 ABC，
每个生态的更新器、依赖树生成器、远端仓库目录服务只需实现对应方法即可接入，
无需继承。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pushbot.core.context import PushVersionContext
    from pushbot.core.models import (
        Dependencies,
        DependencyVersionChange,
        GitRepository,
        Kind,
        LocalRepository,
    )
    from pushbot.kind.dependency_tree import KindDependenciesCheck


# =========================================================================
# 生态更新器协议
# =========================================================================

class Updater(Protocol):
    """单个包管理生态的能力契约"""

    kind: Kind

    def is_applicable(self, repository: LocalRepository) -> bool:
        """仓库中存在该生态的清单文件时返回 True"""
        ...

    def add_push_versions_steps(
        self,
        repository: LocalRepository,
        dependency_config: Dependencies,
        changes: list[DependencyVersionChange],
    ) -> None:
        """从源仓库清单中提取候选变更，追加到 changes"""
        ...

    def push_versions(self, context: PushVersionContext) -> bool:
        """把上下文中的候选版本写入目标仓库清单，返回是否修改"""
        ...

    def pull_versions(self, repository: LocalRepository) -> bool:
        """调用生态自带的升级工具，退出码为 0 时返回 True"""
        ...

    def check_dependencies(
        self,
        repository: LocalRepository,
        changes: list[DependencyVersionChange],
    ) -> KindDependenciesCheck:
        """依据目标仓库的实际依赖树把候选划分为有效 / 无效"""
        ...


# =========================================================================
# 依赖树生成协议
# =========================================================================

class DependencyTreeGenerator(Protocol):
    """调用生态原生工具把完整依赖树导出到仓库内的文件"""

    def generate_dependency_tree(self, repository: LocalRepository, output_file_name: str) -> None:
        ...


# =========================================================================
# 远端仓库目录协议
# =========================================================================

class RepositoryDirectory(Protocol):
    """托管服务上的仓库查询"""

    def get_repository(self, owner: str, name: str) -> GitRepository | None:
        """按名称查找仓库，不存在返回 None，I/O 失败抛 OSError"""
        ...

    def list_repositories(self, owner: str) -> dict[str, GitRepository]:
        """列出组织 / 用户下的全部仓库，I/O 失败抛 OSError"""
        ...
