"""版本推送服务

流程:
  解析仓库 → 同步 → 从源仓库提取候选 → 对每个目标仓库按生态校验
  → 把有效候选逐个写入清单，每个候选一个 PushVersionContext 账本

无效候选只作为数据上报，不会被应用；提交 / PR 由调用方基于
返回的上下文（标题、Change 列表、改写的文件）完成。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pushbot.core.context import PushVersionContext
from pushbot.core.models import DependencyVersionChange, Kind, LocalRepository

if TYPE_CHECKING:
    from pushbot.core.models import Projects
    from pushbot.kind.dependency_tree import KindDependenciesCheck
    from pushbot.kind.registry import UpdaterRegistry
    from pushbot.services.repo.resolver import RepositoryResolver
    from pushbot.services.repo.sync import RepositorySync

logger = logging.getLogger(__name__)


@dataclass
class RepositoryPushResult:
    """单个目标仓库的推送结果"""

    repository: LocalRepository
    checks: dict[Kind, KindDependenciesCheck] = field(default_factory=dict)
    contexts: list[PushVersionContext] = field(default_factory=list)  # 仅包含实际改写了文件的上下文

    @property
    def modified(self) -> bool:
        return bool(self.contexts)

    @property
    def invalid_changes(self) -> list[DependencyVersionChange]:
        return [c for check in self.checks.values() for c in check.invalid_changes]


class PushService:
    """版本推送服务"""

    def __init__(
        self,
        registry: UpdaterRegistry,
        projects: Projects,
        resolver: RepositoryResolver | None = None,
        syncer: RepositorySync | None = None,
    ) -> None:
        self.registry = registry
        self.projects = projects
        self.resolver = resolver
        self.syncer = syncer

    def collect_changes(self, sources: list[LocalRepository]) -> list[DependencyVersionChange]:
        """从源仓库提取候选（同一候选只保留一次，保持首次出现顺序）"""
        changes: list[DependencyVersionChange] = []
        for source in sources:
            found: list[DependencyVersionChange] = []
            for updater in self.registry.applicable(source):
                updater.add_push_versions_steps(source, self.projects.dependencies, found)
            logger.info("源仓库 %s 提取到 %d 个候选", source.full_name, len(found))
            changes.extend(found)
        return list(dict.fromkeys(changes))

    def push_to_repository(
        self,
        target: LocalRepository,
        changes: list[DependencyVersionChange],
    ) -> RepositoryPushResult:
        """校验并应用候选到一个目标仓库"""
        result = RepositoryPushResult(repository=target)
        by_kind: dict[Kind, list[DependencyVersionChange]] = {}
        for change in changes:
            by_kind.setdefault(change.kind, []).append(change)

        for kind, kind_changes in by_kind.items():
            updater = self.registry.get(kind)
            if updater is None or not updater.is_applicable(target):
                continue
            check = updater.check_dependencies(target, kind_changes)
            result.checks[kind] = check
            for change in check.invalid_changes:
                failed = check.failed_checks.get(change.dependency)
                logger.warning(
                    "%s: 候选 %s 校验未通过: %s",
                    target.full_name, change, failed.message if failed else "",
                )
            for change in check.valid_changes:
                context = PushVersionContext(repository=target, step=change)
                if updater.push_versions(context):
                    logger.info("%s: %s", target.full_name, context.create_title())
                    result.contexts.append(context)
        return result

    def resolve_targets(self) -> list[LocalRepository]:
        """解析并同步目标仓库，同步失败的仓库被剔除"""
        if self.resolver is None:
            return []
        repositories = self.resolver.resolve(self.projects)
        if self.syncer is None:
            return repositories
        status = self.syncer.sync_all(repositories)
        ready = []
        for repository in repositories:
            if status.get(repository.clone_url):
                ready.append(repository)
            else:
                logger.warning("仓库同步失败，跳过: %s", repository.full_name)
        return ready

    def push(
        self,
        sources: list[LocalRepository],
        targets: list[LocalRepository] | None = None,
    ) -> list[RepositoryPushResult]:
        """把源仓库的候选推送到全部目标仓库（不会推回源仓库本身）"""
        changes = self.collect_changes(sources)
        if not changes:
            logger.info("没有可推送的候选")
            return []
        if targets is None:
            targets = self.resolve_targets()

        source_keys = {s.remote_key for s in sources}
        source_dirs = {s.dir.resolve() for s in sources}
        results = []
        for target in targets:
            if target.remote_key in source_keys or target.dir.resolve() in source_dirs:
                continue
            results.append(self.push_to_repository(target, changes))
        return results
