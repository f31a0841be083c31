"""核心数据模型

仓库、依赖过滤配置、候选版本变更等实体集中定义，
其他模块统一从此处导入。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from urllib.parse import urlsplit

from pushbot.core.filters import NameFilter

# =========================================================================
# 生态类型
# =========================================================================


class Kind(str, Enum):
    """包管理生态标识"""

    NPM = "npm"


class NpmDependencyKinds:
    """package.json 中的依赖分组键"""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"

    DEPENDENCY_KEYS = (DEPENDENCIES, DEV_DEPENDENCIES, PEER_DEPENDENCIES)


# =========================================================================
# 候选变更
# =========================================================================


@dataclass(frozen=True)
class DependencyVersionChange:
    """一个待推送的 (依赖名, 新版本) 单元，创建后不可变"""

    kind: Kind
    dependency: str
    version: str
    scope: str = NpmDependencyKinds.DEPENDENCIES  # direct / dev / peer 分组键

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.dependency}@{self.version} ({self.scope})"


# =========================================================================
# 依赖过滤配置
# =========================================================================


@dataclass
class DependencySet:
    """某一依赖分组的 includes / excludes 策略"""

    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)

    def create_filter(self) -> NameFilter:
        return NameFilter.of(self.includes, self.excludes)


@dataclass
class NpmDependencies:
    """npm 各依赖分组的过滤配置，未配置的分组不产生候选"""

    dependencies: DependencySet | None = None
    dev_dependencies: DependencySet | None = None
    peer_dependencies: DependencySet | None = None

    def groups(self) -> list[tuple[str, DependencySet | None]]:
        """按 direct → dev → peer 顺序返回 (分组键, 过滤配置)"""
        return [
            (NpmDependencyKinds.DEPENDENCIES, self.dependencies),
            (NpmDependencyKinds.DEV_DEPENDENCIES, self.dev_dependencies),
            (NpmDependencyKinds.PEER_DEPENDENCIES, self.peer_dependencies),
        ]


@dataclass
class Dependencies:
    """按生态划分的依赖过滤配置"""

    npm: NpmDependencies | None = None


# =========================================================================
# 仓库
# =========================================================================


@dataclass
class GitRepository:
    """远端仓库描述（来自 GitHub 组织或显式 git 配置）"""

    name: str
    clone_url: str
    html_url: str = ""
    full_name: str = ""

    @property
    def display_name(self) -> str:
        return self.full_name or self.name


@dataclass
class GithubOrganisation:
    """GitHub 组织（或用户）配置：显式仓库名 + 列表过滤"""

    name: str
    repositories: list[str] = field(default_factory=list)
    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)

    def create_filter(self) -> NameFilter:
        return NameFilter.of(self.includes, self.excludes)


@dataclass
class Projects:
    """项目配置：仓库来源 + 依赖过滤"""

    organisations: list[GithubOrganisation] = field(default_factory=list)
    git: list[GitRepository] = field(default_factory=list)
    dependencies: Dependencies = field(default_factory=Dependencies)


@dataclass(eq=False)
class LocalRepository:
    """绑定到一个远端仓库的本地工作副本，以 clone URL 为身份"""

    repo: GitRepository
    dir: Path

    @property
    def clone_url(self) -> str:
        return self.repo.clone_url

    @property
    def name(self) -> str:
        return self.repo.name

    @property
    def full_name(self) -> str:
        return self.repo.display_name

    @property
    def html_url(self) -> str:
        return self.repo.html_url

    @property
    def remote_key(self) -> str:
        return remote_key(self.clone_url)

    def file(self, name: str) -> Path:
        """仓库目录下的文件路径"""
        return self.dir / name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalRepository):
            return NotImplemented
        return self.clone_url == other.clone_url

    def __hash__(self) -> int:
        return hash(self.clone_url)

    @classmethod
    def from_directory(cls, path: str | Path, clone_url: str = "") -> LocalRepository:
        """绑定已有本地目录，无远端地址时以目录 URI 作为身份"""
        directory = Path(path).resolve()
        repo = GitRepository(
            name=directory.name,
            clone_url=clone_url or directory.as_uri(),
        )
        return cls(repo=repo, dir=directory)


# scp 形式: [user@]host:path
_SCP_LIKE = re.compile(r"^(?:[\w.-]+@)?([\w.-]+):(?!//)(.+)$")


def remote_key(url: str) -> str:
    """把 https / ssh / scp 形式的 clone URL 归一为 host/path

    git@github.com:acme/x.git 与 https://github.com/acme/x 得到同一个键；
    无法识别的地址（如 file URI）原样返回。
    """
    text = url.strip()
    parsed = urlsplit(text)
    if parsed.scheme and parsed.netloc:
        host, path = parsed.hostname or "", parsed.path
    else:
        m = _SCP_LIKE.match(text)
        if m is None:
            return text
        host, path = m.group(1), m.group(2)
    path = path.strip("/").removesuffix(".git")
    return f"{host.lower()}/{path}"
