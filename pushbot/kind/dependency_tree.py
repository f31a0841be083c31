"""依赖树与依赖校验

职责:
- 解析生态工具导出的依赖树文件 {name, version, children: [...]}
  （兼容 npm ls --json 的 dependencies 对象形式）
- 在依赖树中查找依赖名，给出 DependencyCheck 结论
- 生成 → 解析 → 删除 的临时文件作用域（任何退出路径都会删除）
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pushbot.utils.json_io import load_json

if TYPE_CHECKING:
    from pathlib import Path

    from pushbot.core.models import DependencyVersionChange, LocalRepository
    from pushbot.core.protocols import DependencyTreeGenerator

logger = logging.getLogger(__name__)

DEPENDENCY_TREE_FILE = ".dependency-tree.json"


@dataclass
class DependencyTree:
    """依赖树节点"""

    name: str
    version: str = ""
    children: list[DependencyTree] = field(default_factory=list)

    @classmethod
    def parse_tree(cls, node: Any, name: str = "") -> DependencyTree | None:
        """从 JSON 节点构建依赖树，根节点不是对象时返回 None

        只读取 name / version / children 三个字段，其余字段忽略；
        children 缺失时回退读取 npm 的 dependencies 对象（键为依赖名）。
        """
        if not isinstance(node, dict):
            return None
        tree = cls(
            name=_text(node.get("name")) or name,
            version=_text(node.get("version")),
        )
        children = node.get("children")
        if isinstance(children, list):
            for child in children:
                parsed = cls.parse_tree(child)
                if parsed is not None:
                    tree.children.append(parsed)
        else:
            dependencies = node.get("dependencies")
            if isinstance(dependencies, dict):
                for child_name, child in dependencies.items():
                    parsed = cls.parse_tree(child, name=child_name)
                    if parsed is not None:
                        tree.children.append(parsed)
        return tree

    def walk(self) -> Iterator[DependencyTree]:
        """广度优先遍历（不含根节点）"""
        queue = deque(self.children)
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children)

    def find(self, name: str) -> DependencyTree | None:
        for node in self.walk():
            if node.name == name:
                return node
        return None

    def dependency_check(self, name: str) -> DependencyCheck:
        """依赖名在树中存在即有效，结论携带解析到的版本"""
        node = self.find(name)
        if node is None:
            return DependencyCheck(name, valid=False, message=f"依赖树中不存在 {name}")
        return DependencyCheck(name, valid=True, version=node.version)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class DependencyCheck:
    """单个候选对一棵依赖树的校验结论"""

    name: str
    valid: bool
    version: str = ""
    message: str = ""


@dataclass(frozen=True)
class KindDependenciesCheck:
    """一批候选的汇总结论：valid 与 invalid 互斥且并集为输入"""

    valid_changes: list[DependencyVersionChange] = field(default_factory=list)
    invalid_changes: list[DependencyVersionChange] = field(default_factory=list)
    failed_checks: dict[str, DependencyCheck] = field(default_factory=dict)

    @classmethod
    def partition(
        cls,
        tree: DependencyTree | None,
        changes: list[DependencyVersionChange],
    ) -> KindDependenciesCheck:
        """按依赖树划分候选；树缺失时全部无效"""
        valid: list[DependencyVersionChange] = []
        invalid: list[DependencyVersionChange] = []
        failed: dict[str, DependencyCheck] = {}
        for change in changes:
            if tree is None:
                check = DependencyCheck(change.dependency, valid=False, message="没有可用的依赖树")
            else:
                check = tree.dependency_check(change.dependency)
            if check.valid:
                valid.append(change)
            else:
                invalid.append(change)
                failed[change.dependency] = check
        return cls(valid, invalid, dict(sorted(failed.items())))


@contextmanager
def generated_dependency_tree(
    repository: LocalRepository,
    generator: DependencyTreeGenerator,
    file_name: str = DEPENDENCY_TREE_FILE,
) -> Iterator[DependencyTree | None]:
    """生成并加载依赖树，退出作用域时删除临时文件

    生成器抛 OSError、文件缺失或格式错误时产出 None；删除失败只记日志。
    """
    path = repository.file(file_name)
    try:
        tree: DependencyTree | None = None
        try:
            generator.generate_dependency_tree(repository, file_name)
        except OSError as e:
            logger.warning("生成依赖树失败 %s: %s", repository.full_name, e)
        else:
            tree = _read_tree(path)
        yield tree
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("删除依赖树文件失败 %s: %s", path, e)


def _read_tree(path: Path) -> DependencyTree | None:
    tree: DependencyTree | None = None
    if path.is_file():
        try:
            tree = DependencyTree.parse_tree(load_json(path))
        except (OSError, ValueError) as e:
            logger.warning("解析依赖树失败 %s: %s", path, e)
    else:
        logger.warning("未生成依赖树文件: %s", path)
    return tree


def load_dependency_tree(
    repository: LocalRepository,
    generator: DependencyTreeGenerator,
    file_name: str = DEPENDENCY_TREE_FILE,
) -> DependencyTree | None:
    """生成 → 解析 → 删除，返回依赖树或 None"""
    with generated_dependency_tree(repository, generator, file_name) as tree:
        return tree
