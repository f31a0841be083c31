"""GitHub 仓库目录 — REST API 查询

组织端点优先，组织不存在时回退到用户端点；列表按 per_page=100 分页。
"""

from __future__ import annotations

import json
import logging
import urllib.error
from typing import Any
from urllib.parse import quote

from pushbot.core.models import GitRepository
from pushbot.utils.net import read_url

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class GitHubDirectory:
    """基于 GitHub REST API 的仓库目录"""

    def __init__(self, api_url: str = "https://api.github.com", token: str = "") -> None:
        self.api_url = api_url.rstrip("/")
        self.token = token

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path: str) -> Any:
        return json.loads(read_url(f"{self.api_url}{path}", headers=self._headers()))

    @staticmethod
    def _to_repository(data: dict[str, Any]) -> GitRepository:
        return GitRepository(
            name=data.get("name", ""),
            clone_url=data.get("clone_url", ""),
            html_url=data.get("html_url", ""),
            full_name=data.get("full_name", ""),
        )

    def get_repository(self, owner: str, name: str) -> GitRepository | None:
        """按名称查找仓库，404 返回 None"""
        try:
            data = self._get(f"/repos/{quote(owner)}/{quote(name)}")
        except urllib.error.HTTPError as e:
            if e.code == 404:
                return None
            raise
        return self._to_repository(data)

    def list_repositories(self, owner: str) -> dict[str, GitRepository]:
        """列出组织（或用户）下的全部仓库，按名称索引"""
        try:
            return self._list_pages(f"/orgs/{quote(owner)}/repos")
        except urllib.error.HTTPError as e:
            if e.code != 404:
                raise
        logger.debug("%s 不是组织，按用户查询", owner)
        return self._list_pages(f"/users/{quote(owner)}/repos")

    def _list_pages(self, path: str) -> dict[str, GitRepository]:
        result: dict[str, GitRepository] = {}
        page = 1
        while True:
            items = self._get(f"{path}?per_page={PAGE_SIZE}&page={page}")
            if not isinstance(items, list):
                break
            for item in items:
                repo = self._to_repository(item)
                if repo.name:
                    result[repo.name] = repo
            if len(items) < PAGE_SIZE:
                break
            page += 1
        return result
