"""npm 生态更新器 — package.json

职责:
- 从源仓库 package.json 提取候选变更（自身版本 + 按分组过滤的依赖）
- 把候选版本写入目标仓库 package.json 的所有分组
- 通过依赖树校验候选
- 调用 ncu 升级依赖
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pushbot.core.models import DependencySet, DependencyVersionChange, Kind, NpmDependencyKinds
from pushbot.kind.dependency_tree import (
    DEPENDENCY_TREE_FILE,
    KindDependenciesCheck,
    load_dependency_tree,
)
from pushbot.utils.json_io import load_json, save_pretty_json
from pushbot.utils.shell import CommandExecutor, run_status

if TYPE_CHECKING:
    from pushbot.core.context import PushVersionContext
    from pushbot.core.models import Dependencies, LocalRepository
    from pushbot.core.protocols import DependencyTreeGenerator

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
DEVELOPMENT_SUFFIX = "-development"


def is_development_version(version: str) -> bool:
    """开发版本（以 -development 结尾）不作为发布版本推送"""
    return version.endswith(DEVELOPMENT_SUFFIX)


class PackageJsonUpdater:
    """package.json 更新器"""

    kind = Kind.NPM

    def __init__(
        self,
        tree_generator: DependencyTreeGenerator,
        upgrade_cmd: str = "ncu --upgrade",
        executor: CommandExecutor | None = None,
    ) -> None:
        self.tree_generator = tree_generator
        self.upgrade_cmd = upgrade_cmd
        self._executor = executor

    def is_applicable(self, repository: LocalRepository) -> bool:
        return repository.file(PACKAGE_JSON).is_file()

    # ------------------------------------------------------------------
    # 提取候选
    # ------------------------------------------------------------------

    def add_push_versions_steps(
        self,
        repository: LocalRepository,
        dependency_config: Dependencies,
        changes: list[DependencyVersionChange],
    ) -> None:
        tree = self._load_manifest(repository)
        if tree is None:
            return

        name = _text_value(tree, "name")
        version = _text_value(tree, "version")
        if name and version:
            if is_development_version(version):
                logger.info("跳过 npm 包 %s 的开发版本 %s", name, version)
            else:
                changes.append(DependencyVersionChange(
                    Kind.NPM, name, version, NpmDependencyKinds.DEPENDENCIES,
                ))

        npm = dependency_config.npm
        if npm is None:
            return
        for dependency_key, dependency_set in npm.groups():
            self._add_update_dependency_steps(changes, tree, dependency_set, dependency_key)

    @staticmethod
    def _add_update_dependency_steps(
        changes: list[DependencyVersionChange],
        tree: dict[str, Any],
        dependency_set: DependencySet | None,
        dependency_key: str,
    ) -> None:
        if dependency_set is None:
            return
        dependencies = tree.get(dependency_key)
        if not isinstance(dependencies, dict):
            return
        matches = dependency_set.create_filter()
        for field_name, value in dependencies.items():
            # 非字符串值（对象等）跳过
            if matches(field_name) and isinstance(value, str):
                changes.append(DependencyVersionChange(Kind.NPM, field_name, value, dependency_key))

    # ------------------------------------------------------------------
    # 写入目标
    # ------------------------------------------------------------------

    def push_versions(self, context: PushVersionContext) -> bool:
        path = context.file(PACKAGE_JSON)
        tree = self._load_manifest(context.repository)
        if tree is None:
            return False

        modified = False
        for dependency_key in NpmDependencyKinds.DEPENDENCY_KEYS:
            dependencies = tree.get(dependency_key)
            if isinstance(dependencies, dict):
                if self._push_version_change(dependency_key, dependencies, context):
                    modified = True

        if modified:
            save_pretty_json(path, tree)
            context.updated_file(path)
        return modified

    @staticmethod
    def _push_version_change(
        dependency_key: str,
        dependencies: dict[str, Any],
        context: PushVersionContext,
    ) -> bool:
        name, value = context.name, context.value
        old = dependencies.get(name)
        if not isinstance(old, str) or old == value:
            return False
        dependencies[name] = value
        context.updated_version(dependency_key, name, value, old)
        logger.info(
            "%s: %s.%s %s -> %s",
            context.repository.full_name, dependency_key, name, old, value,
        )
        return True

    # ------------------------------------------------------------------
    # 升级 / 校验
    # ------------------------------------------------------------------

    def pull_versions(self, repository: LocalRepository) -> bool:
        status = run_status(
            self.upgrade_cmd, cwd=repository.dir,
            executor=self._executor, label="npm 升级",
        )
        return status == 0

    def check_dependencies(
        self,
        repository: LocalRepository,
        changes: list[DependencyVersionChange],
    ) -> KindDependenciesCheck:
        tree = load_dependency_tree(repository, self.tree_generator, DEPENDENCY_TREE_FILE)
        return KindDependenciesCheck.partition(tree, changes)

    # ------------------------------------------------------------------

    @staticmethod
    def _load_manifest(repository: LocalRepository) -> dict[str, Any] | None:
        """读取 package.json，缺失或无法解析时返回 None"""
        path = repository.file(PACKAGE_JSON)
        if not path.is_file():
            return None
        try:
            tree = load_json(path)
        except (OSError, ValueError) as e:
            logger.warning("解析 JSON 失败 %s: %s", path, e)
            return None
        if not isinstance(tree, dict):
            logger.warning("%s 根节点不是对象，忽略", path)
            return None
        return tree


def _text_value(tree: dict[str, Any], key: str) -> str:
    value = tree.get(key)
    return value if isinstance(value, str) else ""
