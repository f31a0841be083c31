"""服务容器 — 按 Config 懒加载各协作者

依赖关系（→ 表示依赖）:
  push     → registry, projects, resolver, sync
  pull     → registry
  resolver → directory

用法:
    container = ServiceContainer(config=Config.from_file("pushbot.yml"))
    results = container.push.push(sources)

测试时可直接替换 executor / directory 等实例:
    container = ServiceContainer(config, executor=FakeExecutor())
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pushbot.core.config import Config
    from pushbot.core.models import LocalRepository, Projects
    from pushbot.core.protocols import RepositoryDirectory
    from pushbot.kind.registry import UpdaterRegistry
    from pushbot.services.pull_service import PullService
    from pushbot.services.push_service import PushService
    from pushbot.services.repo.resolver import RepositoryResolver
    from pushbot.services.repo.sync import RepositorySync
    from pushbot.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器 — 同一容器内的实例共享"""

    def __init__(
        self,
        config: Config | None = None,
        *,
        executor: CommandExecutor | None = None,
        directory: RepositoryDirectory | None = None,
        projects: Projects | None = None,
    ) -> None:
        if config is None:
            from pushbot.core.config import get_config
            config = get_config()
        self._config = config
        self._instances: dict[str, object] = {}
        if executor is not None:
            self._instances["executor"] = executor
        if directory is not None:
            self._instances["directory"] = directory
        if projects is not None:
            self._instances["projects"] = projects

    @property
    def config(self) -> Config:
        return self._config

    @property
    def executor(self) -> CommandExecutor:
        if "executor" not in self._instances:
            from pushbot.utils.shell import get_executor
            self._instances["executor"] = get_executor()
        return self._instances["executor"]  # type: ignore[return-value]

    @property
    def projects(self) -> Projects:
        """项目配置，找不到时抛 ProjectNotFoundError"""
        if "projects" not in self._instances:
            from pushbot.core.projects import load_projects
            self._instances["projects"] = load_projects(
                self._config.config_file, self._config.source_dir,
            )
        return self._instances["projects"]  # type: ignore[return-value]

    @property
    def directory(self) -> RepositoryDirectory:
        if "directory" not in self._instances:
            from pushbot.services.repo.github import GitHubDirectory
            self._instances["directory"] = GitHubDirectory(
                api_url=self._config.github_api_url,
                token=self._config.github_token,
            )
        return self._instances["directory"]  # type: ignore[return-value]

    @property
    def registry(self) -> UpdaterRegistry:
        if "registry" not in self._instances:
            from pushbot.kind.registry import default_registry
            self._instances["registry"] = default_registry(self._config, self.executor)
        return self._instances["registry"]  # type: ignore[return-value]

    @property
    def resolver(self) -> RepositoryResolver:
        if "resolver" not in self._instances:
            from pushbot.services.repo.resolver import RepositoryResolver
            self._instances["resolver"] = RepositoryResolver(
                work_dir=self._config.resolve_work_dir(),
                directory=self.directory,
            )
        return self._instances["resolver"]  # type: ignore[return-value]

    @property
    def sync(self) -> RepositorySync:
        if "sync" not in self._instances:
            from pushbot.services.repo.sync import RepositorySync
            self._instances["sync"] = RepositorySync(
                main_branch=self._config.main_branch,
                pull_disabled=self._config.pull_disabled,
                max_workers=self._config.max_workers,
                executor=self.executor,
            )
        return self._instances["sync"]  # type: ignore[return-value]

    @property
    def push(self) -> PushService:
        if "push" not in self._instances:
            from pushbot.services.push_service import PushService
            self._instances["push"] = PushService(
                registry=self.registry,
                projects=self.projects,
                resolver=self.resolver,
                syncer=self.sync,
            )
        return self._instances["push"]  # type: ignore[return-value]

    @property
    def pull(self) -> PullService:
        if "pull" not in self._instances:
            from pushbot.services.pull_service import PullService
            self._instances["pull"] = PullService(registry=self.registry)
        return self._instances["pull"]  # type: ignore[return-value]

    def repositories(self, *, sync: bool = False) -> list[LocalRepository]:
        """解析项目中的全部仓库，sync=True 时同步后只返回成功的仓库"""
        projects = self.projects
        if sync:
            return self.push.resolve_targets()
        return self.resolver.resolve(projects)


# ---- 全局单例 ----

_global: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer（未初始化时按当前配置创建）"""
    global _global  # noqa: PLW0603
    if _global is None:
        _global = ServiceContainer()
    return _global


def set_container(container: ServiceContainer) -> None:
    """替换全局容器（CLI 入口或测试使用）"""
    global _global  # noqa: PLW0603
    _global = container


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    _global = None
