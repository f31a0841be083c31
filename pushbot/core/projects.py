"""项目配置加载

项目配置描述要处理哪些仓库（GitHub 组织 / 显式 git 仓库）以及
每个依赖分组的过滤策略。配置可来自本地文件或 http(s) URL，
两者都找不到时中止运行。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from pushbot.core.exceptions import ConfigError, ProjectNotFoundError
from pushbot.core.models import (
    Dependencies,
    DependencySet,
    GithubOrganisation,
    GitRepository,
    NpmDependencies,
    Projects,
)
from pushbot.utils.net import is_http_url, read_url
from pushbot.utils.yaml_io import load_yaml, parse_yaml

logger = logging.getLogger(__name__)


def load_projects(config_file: str, source_dir: str | Path = ".") -> Projects:
    """按路径或 URL 加载项目配置

    Raises:
        ProjectNotFoundError: 文件不存在且不是 URL
        ConfigError: URL 读取失败或 YAML 格式错误
    """
    path = Path(config_file)
    source = Path(source_dir)
    if source.is_dir() and not path.is_absolute():
        path = source / config_file

    try:
        if path.is_file():
            logger.info("加载项目配置: %s", path)
            return parse_projects(load_yaml(path))

        if is_http_url(config_file):
            try:
                content = read_url(config_file)
            except OSError as e:
                raise ConfigError(f"无法打开 URL {config_file}: {e}") from e
            logger.info("加载项目配置: %s", config_file)
            return parse_projects(parse_yaml(content, source=config_file))
    except yaml.YAMLError as e:
        raise ConfigError(f"项目配置格式错误 {config_file}: {e}") from e

    raise ProjectNotFoundError(f"项目配置不存在: {path.resolve()}")


def parse_projects(data: Any) -> Projects:
    """把 YAML 字典转换为 Projects

    Raises:
        ConfigError: 结构或取值类型不符合预期
    """
    if data is None:
        data = {}
    _expect(data, dict, "根节点")
    github = _expect(data.get("github") or {}, dict, "github")
    organisations = [
        _parse_organisation(o)
        for o in _expect(github.get("organisations") or [], list, "github.organisations")
    ]
    git = [_parse_git_repository(g) for g in _expect(data.get("git") or [], list, "git")]
    return Projects(
        organisations=organisations,
        git=git,
        dependencies=_parse_dependencies(_expect(data.get("dependencies") or {}, dict, "dependencies")),
    )


def _expect(value: Any, expected: type, where: str) -> Any:
    if not isinstance(value, expected):
        kind = "映射" if expected is dict else "列表"
        raise ConfigError(f"项目配置 {where} 应为{kind}: {value!r}")
    return value


def _string_list(value: Any, where: str) -> list[str]:
    items = _expect(value or [], list, where)
    return [str(i) for i in items]


def _parse_organisation(entry: Any) -> GithubOrganisation:
    _expect(entry, dict, "github.organisations[]")
    name = entry.get("name", "")
    if not name:
        raise ConfigError("GitHub organisation 缺少 name")
    names: list[str] = []
    for r in _expect(entry.get("repositories") or [], list, f"{name}.repositories"):
        repo_name = r.get("name", "") if isinstance(r, dict) else str(r)
        if repo_name:
            names.append(repo_name)
    return GithubOrganisation(
        name=str(name),
        repositories=names,
        includes=_string_list(entry.get("includes"), f"{name}.includes"),
        excludes=_string_list(entry.get("excludes"), f"{name}.excludes"),
    )


def _parse_git_repository(entry: Any) -> GitRepository:
    _expect(entry, dict, "git[]")
    clone_url = entry.get("cloneUrl", "")
    if not clone_url or not isinstance(clone_url, str):
        raise ConfigError(f"git 仓库缺少 cloneUrl: {entry}")
    name = entry.get("name") or clone_url.rstrip("/").split("/")[-1].removesuffix(".git")
    return GitRepository(
        name=name,
        clone_url=clone_url,
        html_url=entry.get("htmlUrl", ""),
        full_name=entry.get("fullName", ""),
    )


def _parse_set(entry: Any, where: str) -> DependencySet | None:
    if entry is None:
        return None
    _expect(entry, dict, where)
    return DependencySet(
        includes=_string_list(entry.get("includes"), f"{where}.includes"),
        excludes=_string_list(entry.get("excludes"), f"{where}.excludes"),
    )


def _parse_dependencies(data: dict[str, Any]) -> Dependencies:
    npm = data.get("npm")
    if npm is None:
        return Dependencies()
    _expect(npm, dict, "dependencies.npm")
    return Dependencies(
        npm=NpmDependencies(
            dependencies=_parse_set(npm.get("dependencies"), "npm.dependencies"),
            dev_dependencies=_parse_set(npm.get("devDependencies"), "npm.devDependencies"),
            peer_dependencies=_parse_set(npm.get("peerDependencies"), "npm.peerDependencies"),
        )
    )
