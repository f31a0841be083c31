"""推送上下文 — 单次 (kind, name, value) 推送尝试的变更账本

每次向一个目标仓库推送一个候选版本时新建一个 PushVersionContext，
更新器在改写清单字段时追加 Change（只追加、保持插入顺序），
提交 / PR 层据此生成标题和变更说明。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pushbot.core.models import DependencyVersionChange, Kind, LocalRepository

TITLE_PREFIX = "fix(version): update "


@dataclass(frozen=True)
class Change:
    """一个实际被改写的清单字段"""

    dependency_key: str   # 所在分组，如 dependencies / devDependencies
    name: str
    new_value: str
    old_value: str


@dataclass
class PushVersionContext:
    """单次推送尝试的作用域"""

    repository: LocalRepository
    step: DependencyVersionChange
    changes: list[Change] = field(default_factory=list)
    updated_files: list[Path] = field(default_factory=list)

    @property
    def kind(self) -> Kind:
        return self.step.kind

    @property
    def name(self) -> str:
        return self.step.dependency

    @property
    def value(self) -> str:
        return self.step.version

    @property
    def dir(self) -> Path:
        return self.repository.dir

    def file(self, name: str) -> Path:
        return self.repository.file(name)

    def updated_version(self, dependency_key: str, name: str, new_value: str, old_value: str) -> None:
        """记录一次字段改写"""
        self.changes.append(Change(dependency_key, name, new_value, old_value))

    def updated_file(self, path: Path) -> None:
        """记录被改写的文件（同一文件只记一次）"""
        if path not in self.updated_files:
            self.updated_files.append(path)

    def change(self, name: str) -> Change | None:
        """返回该依赖名的第一条 Change，没有则返回 None"""
        for change in self.changes:
            if change.name == name:
                return change
        return None

    def create_title(self) -> str:
        return f"{self.create_title_prefix()}{self.value}"

    def create_title_prefix(self) -> str:
        """不含版本值的标题前缀，用于识别同一依赖已打开的 PR"""
        return f"{TITLE_PREFIX}{self.name} to "

    def __str__(self) -> str:
        return f"PushVersionContext(kind={self.kind.value}, name={self.name}, value={self.value})"
