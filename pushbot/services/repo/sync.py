"""本地工作副本同步 — clone 或刷新

已有 .git 时按顺序执行 stash → checkout 主分支 → pull（可禁用），
任一步失败即停止该仓库的后续步骤；没有 .git 时创建父目录并 clone。
重复执行是安全的：中断后下次运行会重新 clone 或重新走刷新流程。
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from pushbot.utils.shell import CommandExecutor, run_status

if TYPE_CHECKING:
    from pushbot.core.models import LocalRepository

logger = logging.getLogger(__name__)


class RepositorySync:
    """仓库同步器"""

    def __init__(
        self,
        main_branch: str = "master",
        pull_disabled: bool = False,
        max_workers: int = 1,
        executor: CommandExecutor | None = None,
    ) -> None:
        self.main_branch = main_branch
        self.pull_disabled = pull_disabled
        self.max_workers = max(1, max_workers)
        self._executor = executor

    def _git(self, repository: LocalRepository, *args: str, cwd: str = "") -> bool:
        status = run_status(
            ["git", *args], cwd=cwd or repository.dir,
            executor=self._executor, label=f"git {args[0]}",
        )
        return status == 0

    def sync(self, repository: LocalRepository) -> bool:
        """同步单个仓库，返回是否全部步骤成功"""
        directory = repository.dir
        if (directory / ".git").exists():
            if not self._git(repository, "stash"):
                return False
            if not self._git(repository, "checkout", self.main_branch):
                return False
            if self.pull_disabled:
                return True
            logger.debug("拉取: %s (%s)", directory, repository.clone_url)
            return self._git(repository, "pull")

        parent = directory.parent
        parent.mkdir(parents=True, exist_ok=True)
        logger.info("克隆: %s -> %s", repository.full_name, directory)
        return self._git(repository, "clone", repository.clone_url, directory.name, cwd=str(parent))

    def sync_all(self, repositories: list[LocalRepository]) -> dict[str, bool]:
        """同步全部仓库，结果按输入顺序以 clone URL 为键返回"""
        if self.max_workers == 1:
            return {r.clone_url: self.sync(r) for r in repositories}

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self.sync, r) for r in repositories]
            return {r.clone_url: f.result() for r, f in zip(repositories, futures)}
