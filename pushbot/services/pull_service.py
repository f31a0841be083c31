"""依赖升级服务 — 在每个仓库运行生态原生升级工具"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pushbot.core.models import LocalRepository
    from pushbot.kind.registry import UpdaterRegistry

logger = logging.getLogger(__name__)


class PullService:
    """升级工具调度"""

    def __init__(self, registry: UpdaterRegistry) -> None:
        self.registry = registry

    def pull_repository(self, repository: LocalRepository) -> bool:
        """运行所有适用生态的升级工具，全部成功才返回 True"""
        updaters = self.registry.applicable(repository)
        if not updaters:
            logger.info("%s 没有适用的生态，跳过", repository.full_name)
            return True
        ok = True
        for updater in updaters:
            if not updater.pull_versions(repository):
                logger.warning("%s: %s 升级失败", repository.full_name, updater.kind.value)
                ok = False
        return ok

    def pull(self, repositories: list[LocalRepository]) -> dict[str, bool]:
        """按输入顺序返回 {clone_url: 是否成功}"""
        return {r.clone_url: self.pull_repository(r) for r in repositories}
