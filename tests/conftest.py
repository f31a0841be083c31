"""测试公共夹具 — 假命令执行器与仓库构造"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pushbot.core.models import GitRepository, LocalRepository
from pushbot.utils.shell import CommandResult


class FakeExecutor:
    """记录调用的假执行器

    handler(args, cwd) 返回 CommandResult；未提供时所有命令成功。
    """

    def __init__(self, handler: Callable[[list[str], Path], CommandResult] | None = None) -> None:
        self.calls: list[tuple[list[str], Path]] = []
        self._handler = handler

    def execute(self, cmd, *, cwd=".", env=None) -> CommandResult:
        args = cmd.split() if isinstance(cmd, str) else list(cmd)
        self.calls.append((args, Path(cwd)))
        if self._handler is None:
            return CommandResult(returncode=0)
        return self._handler(args, Path(cwd))

    def commands(self) -> list[str]:
        return [" ".join(args) for args, _ in self.calls]


@pytest.fixture()
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def make_repo(tmp_path: Path) -> Callable[..., LocalRepository]:
    """在 tmp_path 下创建仓库目录，可选写入 package.json"""

    def _make(name: str = "app", package_json: dict[str, Any] | None = None) -> LocalRepository:
        directory = tmp_path / "repos" / name
        directory.mkdir(parents=True, exist_ok=True)
        if package_json is not None:
            write_json(directory / "package.json", package_json)
        repo = GitRepository(
            name=name,
            clone_url=f"https://example.com/acme/{name}.git",
            html_url=f"https://example.com/acme/{name}",
            full_name=f"acme/{name}",
        )
        return LocalRepository(repo=repo, dir=directory)

    return _make


@pytest.fixture()
def make_executor() -> Callable[..., FakeExecutor]:
    """按 handler 构造 FakeExecutor"""
    return FakeExecutor
