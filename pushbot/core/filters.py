"""名称过滤器 — includes / excludes 通配符策略

名称命中任一 include 且不命中任何 exclude 时匹配。
include 为空时不匹配任何名称，需要全部匹配请写 "*"。
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from fnmatch import fnmatchcase


def _matches_any(name: str, patterns: Iterable[str]) -> bool:
    return any(fnmatchcase(name, p) for p in patterns)


@dataclass(frozen=True)
class NameFilter:
    """通配符名称过滤器（大小写敏感）"""

    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()

    @classmethod
    def of(cls, includes: Iterable[str] | None, excludes: Iterable[str] | None = None) -> NameFilter:
        return cls(tuple(includes or ()), tuple(excludes or ()))

    def matches(self, name: str) -> bool:
        if not name:
            return False
        return _matches_any(name, self.includes) and not _matches_any(name, self.excludes)

    def __call__(self, name: str) -> bool:
        return self.matches(name)
