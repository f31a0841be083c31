"""GitHubDirectory 测试 — 替换 read_url，不访问网络"""

from __future__ import annotations

import io
import json
import urllib.error

import pytest

import pushbot.services.repo.github as github_mod
from pushbot.services.repo.github import PAGE_SIZE, GitHubDirectory


def _item(name: str) -> dict:
    return {
        "name": name,
        "full_name": f"acme/{name}",
        "clone_url": f"https://github.com/acme/{name}.git",
        "html_url": f"https://github.com/acme/{name}",
    }


def _http_error(url: str, code: int) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(url, code, "error", {}, io.BytesIO(b""))  # type: ignore[arg-type]


class FakeApi:
    def __init__(self, routes: dict[str, object]) -> None:
        self.routes = routes
        self.requests: list[tuple[str, dict[str, str]]] = []

    def __call__(self, url: str, *, headers=None, timeout: int = 60) -> bytes:
        self.requests.append((url, headers or {}))
        for prefix, response in self.routes.items():
            if url.startswith(prefix):
                if isinstance(response, int):
                    raise _http_error(url, response)
                if callable(response):
                    response = response(url)
                return json.dumps(response).encode()
        raise _http_error(url, 404)


@pytest.fixture()
def api(monkeypatch: pytest.MonkeyPatch):
    def install(routes: dict[str, object]) -> FakeApi:
        fake = FakeApi(routes)
        monkeypatch.setattr(github_mod, "read_url", fake)
        return fake
    return install


class TestGetRepository:
    def test_found(self, api) -> None:
        fake = api({"https://api.github.com/repos/acme/web": _item("web")})
        repo = GitHubDirectory(token="t0k").get_repository("acme", "web")
        assert repo is not None
        assert repo.clone_url == "https://github.com/acme/web.git"
        assert repo.full_name == "acme/web"
        assert fake.requests[0][1]["Authorization"] == "Bearer t0k"

    def test_not_found(self, api) -> None:
        api({})
        assert GitHubDirectory().get_repository("acme", "ghost") is None

    def test_server_error_raises(self, api) -> None:
        api({"https://api.github.com/repos/acme/web": 500})
        with pytest.raises(urllib.error.HTTPError):
            GitHubDirectory().get_repository("acme", "web")


class TestListRepositories:
    def test_paginates(self, api) -> None:
        first = [_item(f"r{i}") for i in range(PAGE_SIZE)]

        def pages(url: str) -> list:
            return first if url.endswith("page=1") else [_item("last")]

        fake = api({"https://api.github.com/orgs/acme/repos": pages})
        repos = GitHubDirectory().list_repositories("acme")
        assert len(repos) == PAGE_SIZE + 1
        assert "last" in repos
        assert len(fake.requests) == 2

    def test_falls_back_to_user(self, api) -> None:
        api({
            "https://api.github.com/orgs/jdoe/repos": 404,
            "https://api.github.com/users/jdoe/repos": [_item("dotfiles")],
        })
        assert list(GitHubDirectory().list_repositories("jdoe")) == ["dotfiles"]

    def test_io_failure_raises(self, api) -> None:
        api({"https://api.github.com/orgs/acme/repos": 403})
        with pytest.raises(OSError):
            GitHubDirectory().list_repositories("acme")
