"""更新器注册表 — 按能力（is_applicable）分派，而非类继承"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pushbot.core.models import Kind

if TYPE_CHECKING:
    from pushbot.core.config import Config
    from pushbot.core.models import LocalRepository
    from pushbot.core.protocols import Updater
    from pushbot.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class UpdaterRegistry:
    """生态更新器注册表（保持注册顺序）"""

    def __init__(self) -> None:
        self._updaters: dict[Kind, Updater] = {}

    def register(self, updater: Updater) -> None:
        if updater.kind in self._updaters:
            logger.warning("覆盖已注册的更新器: %s", updater.kind.value)
        self._updaters[updater.kind] = updater

    def get(self, kind: Kind) -> Updater | None:
        return self._updaters.get(kind)

    def applicable(self, repository: LocalRepository) -> list[Updater]:
        """返回适用于该仓库的全部更新器（可能多个）"""
        return [u for u in self._updaters.values() if u.is_applicable(repository)]


def default_registry(config: Config, executor: CommandExecutor | None = None) -> UpdaterRegistry:
    """按配置构建内置更新器"""
    from pushbot.kind.generators import CommandTreeGenerator
    from pushbot.kind.npm import PackageJsonUpdater

    registry = UpdaterRegistry()
    registry.register(PackageJsonUpdater(
        tree_generator=CommandTreeGenerator(config.npm_tree_cmd, executor),
        upgrade_cmd=config.npm_upgrade_cmd,
        executor=executor,
    ))
    return registry
