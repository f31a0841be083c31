"""仓库服务模块

- github.py: GitHub 仓库目录（按名查找 / 列出组织仓库）
- resolver.py: 合并组织与显式配置，按 clone URL 去重得到本地仓库列表
- sync.py: clone 或刷新本地工作副本
"""

from pushbot.services.repo.github import GitHubDirectory
from pushbot.services.repo.resolver import RepositoryResolver, find_repository, repository_link
from pushbot.services.repo.sync import RepositorySync

__all__ = [
    "GitHubDirectory",
    "RepositoryResolver",
    "RepositorySync",
    "find_repository",
    "repository_link",
]
