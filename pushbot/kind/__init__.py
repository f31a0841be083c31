"""包管理生态模块

- dependency_tree.py: 依赖树解析与候选校验
- generators.py: 调用原生工具导出依赖树
- npm.py: package.json 更新器
- registry.py: 按 is_applicable 选择更新器的注册表
"""

from pushbot.core.models import Kind
from pushbot.kind.dependency_tree import DependencyCheck, DependencyTree, KindDependenciesCheck
from pushbot.kind.npm import PackageJsonUpdater
from pushbot.kind.registry import UpdaterRegistry, default_registry

__all__ = [
    "Kind",
    "DependencyCheck",
    "DependencyTree",
    "KindDependenciesCheck",
    "PackageJsonUpdater",
    "UpdaterRegistry",
    "default_registry",
]
