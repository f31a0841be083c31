"""项目配置加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from pushbot.core.exceptions import ConfigError, ProjectNotFoundError
from pushbot.core.models import NpmDependencyKinds
from pushbot.core.projects import load_projects, parse_projects

PROJECTS_YAML = """
github:
  organisations:
    - name: acme
      repositories:
        - name: web
        - api
      includes: ["lib-*"]
      excludes: ["lib-legacy"]
git:
  - name: tools
    cloneUrl: https://git.example.com/tools.git
    htmlUrl: https://git.example.com/tools
  - cloneUrl: https://git.example.com/misc.git
dependencies:
  npm:
    dependencies:
      includes: ["@acme/*"]
    devDependencies:
      includes: ["*"]
      excludes: ["typescript"]
"""


class TestLoadProjects:
    def test_relative_path_resolved_against_source_dir(self, tmp_path: Path) -> None:
        (tmp_path / ".pushbot.yml").write_text(PROJECTS_YAML, encoding="utf-8")
        projects = load_projects(".pushbot.yml", tmp_path)

        assert [o.name for o in projects.organisations] == ["acme"]
        org = projects.organisations[0]
        assert org.repositories == ["web", "api"]
        assert org.includes == ["lib-*"]
        assert org.excludes == ["lib-legacy"]

        assert [g.name for g in projects.git] == ["tools", "misc"]
        assert projects.git[0].html_url == "https://git.example.com/tools"

    def test_dependency_sets(self, tmp_path: Path) -> None:
        (tmp_path / "p.yml").write_text(PROJECTS_YAML, encoding="utf-8")
        npm = load_projects("p.yml", tmp_path).dependencies.npm
        assert npm is not None
        groups = dict(npm.groups())
        assert groups[NpmDependencyKinds.DEPENDENCIES].includes == ["@acme/*"]
        assert groups[NpmDependencyKinds.DEV_DEPENDENCIES].excludes == ["typescript"]
        assert groups[NpmDependencyKinds.PEER_DEPENDENCIES] is None

    def test_missing_file_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectNotFoundError, match="项目配置不存在"):
            load_projects("nope.yml", tmp_path)

    def test_not_found_is_config_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_projects("nope.yml", tmp_path)

    def test_unreachable_url(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        import pushbot.core.projects as projects_mod

        def boom(url: str, **kwargs):
            raise OSError("connection refused")

        monkeypatch.setattr(projects_mod, "read_url", boom)
        with pytest.raises(ConfigError, match="无法打开 URL"):
            load_projects("https://example.com/pushbot.yml", tmp_path)

    def test_url_content(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        import pushbot.core.projects as projects_mod

        monkeypatch.setattr(projects_mod, "read_url", lambda url, **kw: PROJECTS_YAML.encode())
        projects = load_projects("https://example.com/pushbot.yml", tmp_path)
        assert len(projects.git) == 2

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "bad.yml").write_text("git: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError, match="格式错误"):
            load_projects("bad.yml", tmp_path)


class TestParseProjects:
    def test_empty(self) -> None:
        projects = parse_projects({})
        assert projects.organisations == []
        assert projects.git == []
        assert projects.dependencies.npm is None

    def test_git_without_clone_url(self) -> None:
        with pytest.raises(ConfigError, match="cloneUrl"):
            parse_projects({"git": [{"name": "x"}]})

    def test_organisation_without_name(self) -> None:
        with pytest.raises(ConfigError, match="name"):
            parse_projects({"github": {"organisations": [{"repositories": ["a"]}]}})

    @pytest.mark.parametrize("data, where", [
        ({"git": ["https://git.example.com/tools.git"]}, "git"),
        ({"git": {"cloneUrl": "https://git.example.com/tools.git"}}, "git"),
        ({"github": ["acme"]}, "github"),
        ({"github": {"organisations": {"name": "acme"}}}, "github.organisations"),
        ({"github": {"organisations": ["acme"]}}, "github.organisations"),
        ({"github": {"organisations": [{"name": "acme", "includes": "lib-*"}]}}, "acme.includes"),
        ({"dependencies": ["npm"]}, "dependencies"),
        ({"dependencies": {"npm": ["*"]}}, "dependencies.npm"),
        ({"dependencies": {"npm": {"dependencies": ["*"]}}}, "npm.dependencies"),
        ({"dependencies": {"npm": {"devDependencies": {"includes": "*"}}}}, "npm.devDependencies.includes"),
        (["git"], "根节点"),
    ])
    def test_wrong_value_types(self, data, where: str) -> None:
        with pytest.raises(ConfigError, match=where):
            parse_projects(data)

    def test_wrong_types_in_file(self, tmp_path: Path) -> None:
        (tmp_path / "p.yml").write_text("git:\n  - https://git.example.com/tools.git\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="git"):
            load_projects("p.yml", tmp_path)
