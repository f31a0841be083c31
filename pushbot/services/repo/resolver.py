"""仓库集合解析

把项目配置中的 GitHub 组织与显式 git 仓库合并为一个有序、按 clone URL
去重的 LocalRepository 列表。

优先级（先登记者保留，后来的重复项直接丢弃）:
  1. 按配置顺序处理组织；组织内先解析显式命名仓库，再按过滤器筛选列表
  2. 最后追加显式 git 仓库

本地目录布局:
  <work_dir>/github/<org>/<repo>
  <work_dir>/git/<name>
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pushbot.core.models import GithubOrganisation, GitRepository, LocalRepository, Projects

if TYPE_CHECKING:
    from pushbot.core.protocols import RepositoryDirectory
    from pushbot.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class RepositoryResolver:
    """仓库集合解析器"""

    def __init__(self, work_dir: str | Path, directory: RepositoryDirectory | None = None) -> None:
        self.work_dir = Path(work_dir)
        self.directory = directory

    def resolve(self, projects: Projects) -> list[LocalRepository]:
        """解析全部仓库，返回去重后的有序列表"""
        found: dict[str, LocalRepository] = {}
        github_dir = self.work_dir / "github"
        git_dir = self.work_dir / "git"

        if projects.organisations:
            if self.directory is None:
                logger.warning("未配置仓库目录服务，忽略 %d 个 GitHub 组织", len(projects.organisations))
            else:
                for organisation in projects.organisations:
                    self._add_organisation(self.directory, found, organisation, github_dir / organisation.name)

        for repo in projects.git:
            _add_repository(found, git_dir, repo)

        logger.info("共解析到 %d 个仓库", len(found))
        return list(found.values())

    @staticmethod
    def _add_organisation(
        directory: RepositoryDirectory,
        found: dict[str, LocalRepository],
        organisation: GithubOrganisation,
        org_dir: Path,
    ) -> None:
        org_name = organisation.name
        names: set[str] = set()

        for name in organisation.repositories:
            if not name or name in names:
                continue
            names.add(name)
            try:
                repo = directory.get_repository(org_name, name)
            except (OSError, ValueError) as e:
                logger.warning("GitHub 仓库 %s/%s 查询失败: %s", org_name, name, e)
                continue
            if repo is None:
                logger.warning("GitHub 仓库 %s/%s 不存在", org_name, name)
                continue
            _add_repository(found, org_dir, repo)

        matches = organisation.create_filter()
        try:
            listing = directory.list_repositories(org_name)
        except (OSError, ValueError) as e:
            logger.warning("加载组织 %s 的仓库列表失败: %s", org_name, e)
            return
        for name, repo in listing.items():
            if name not in names and matches(name):
                names.add(name)
                _add_repository(found, org_dir, repo)


def _add_repository(found: dict[str, LocalRepository], parent_dir: Path, repo: GitRepository) -> None:
    """按 clone URL 登记，已存在则丢弃"""
    if repo.clone_url in found:
        logger.debug("重复仓库已忽略: %s (%s)", repo.display_name, repo.clone_url)
        return
    found[repo.clone_url] = LocalRepository(repo=repo, dir=parent_dir / repo.name)


def bind_directory(path: str | Path, executor: CommandExecutor | None = None) -> LocalRepository:
    """把已有本地目录绑定为 LocalRepository，clone URL 取自 remote.origin.url"""
    from pushbot.utils.shell import get_executor

    directory = Path(path).resolve()
    clone_url = ""
    if (directory / ".git").exists():
        r = (executor or get_executor()).execute(
            ["git", "config", "--get", "remote.origin.url"], cwd=directory,
        )
        if r.success:
            clone_url = r.stdout.strip()
    return LocalRepository.from_directory(directory, clone_url)


def find_repository(repositories: list[LocalRepository], name: str) -> LocalRepository | None:
    """按仓库名查找，找不到返回 None"""
    for repository in repositories:
        if repository.name == name:
            return repository
    return None


def repository_link(repository: LocalRepository | None, label: str = "") -> str:
    """返回仓库的 markdown 链接，没有网页地址时返回 `label`"""
    if repository is not None:
        label = label or repository.full_name
        if repository.html_url:
            return f"[{label}]({repository.html_url})"
    return f"`{label}`"
