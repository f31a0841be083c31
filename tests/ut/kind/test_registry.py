"""更新器注册表与依赖树生成器测试"""

from __future__ import annotations

from pushbot.core.config import Config
from pushbot.core.models import Kind
from pushbot.kind.generators import CommandTreeGenerator
from pushbot.kind.npm import PackageJsonUpdater
from pushbot.kind.registry import UpdaterRegistry, default_registry
from pushbot.utils.shell import CommandResult


class _AlwaysUpdater:
    kind = Kind.NPM

    def is_applicable(self, repository) -> bool:
        return True


class TestUpdaterRegistry:
    def test_default_registry_has_npm(self) -> None:
        registry = default_registry(Config())
        assert isinstance(registry.get(Kind.NPM), PackageJsonUpdater)

    def test_applicable_selects_by_predicate(self, make_repo) -> None:
        registry = default_registry(Config())
        assert registry.applicable(make_repo("js", {"name": "js"})) == [registry.get(Kind.NPM)]
        assert registry.applicable(make_repo("plain")) == []

    def test_register_replaces_same_kind(self, make_repo) -> None:
        registry = default_registry(Config())
        custom = _AlwaysUpdater()
        registry.register(custom)
        assert registry.get(Kind.NPM) is custom
        assert registry.applicable(make_repo("plain")) == [custom]

    def test_empty_registry(self, make_repo) -> None:
        registry = UpdaterRegistry()
        assert registry.get(Kind.NPM) is None
        assert registry.applicable(make_repo("x", {})) == []


class TestCommandTreeGenerator:
    def test_writes_stdout(self, make_repo, make_executor) -> None:
        executor = make_executor(lambda args, cwd: CommandResult(0, stdout='{"name": "app"}'))
        repo = make_repo("app", {})
        CommandTreeGenerator("npm ls --json --all", executor).generate_dependency_tree(repo, "tree.json")
        assert (repo.dir / "tree.json").read_text() == '{"name": "app"}'
        assert executor.calls == [(["npm", "ls", "--json", "--all"], repo.dir)]

    def test_nonzero_exit_with_output_still_written(self, make_repo, make_executor) -> None:
        executor = make_executor(lambda args, cwd: CommandResult(1, stdout='{"name": "app"}', stderr="peer dep"))
        repo = make_repo("app", {})
        CommandTreeGenerator("npm ls --json", executor).generate_dependency_tree(repo, "tree.json")
        assert (repo.dir / "tree.json").exists()

    def test_empty_stdout_writes_nothing(self, make_repo, make_executor) -> None:
        executor = make_executor(lambda args, cwd: CommandResult(127, stderr="npm: not found"))
        repo = make_repo("app", {})
        CommandTreeGenerator("npm ls --json", executor).generate_dependency_tree(repo, "tree.json")
        assert not (repo.dir / "tree.json").exists()
