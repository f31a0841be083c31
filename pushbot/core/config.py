"""集中配置管理

运行参数（工作目录、主分支、外部工具命令、GitHub 访问）统一在此定义，
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pushbot.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

GITHUB_TOKEN_ENV = "PUSHBOT_GITHUB_TOKEN"


@dataclass
class Config:
    """全局运行配置"""

    # 目录
    config_file: str = ".pushbot.yml"    # 项目配置（路径或 URL）
    source_dir: str = "."                # 相对路径的基准目录
    work_dir: str = ".pushbot-repos"     # 目标仓库本地工作副本根目录

    # 同步
    main_branch: str = "master"
    pull_disabled: bool = False
    max_workers: int = 1

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_token: str = ""

    # npm 工具
    npm_tree_cmd: str = "npm ls --json --all"
    npm_upgrade_cmd: str = "ncu --upgrade"

    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.github_token:
            self.github_token = os.getenv(GITHUB_TOKEN_ENV, "")

    @classmethod
    def from_file(cls, path: str = "configs/pushbot.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def resolve_work_dir(self) -> Path:
        """计算工作目录：相对路径以 source_dir 为基准，目录不存在时创建"""
        work_dir = Path(self.work_dir)
        if not work_dir.is_absolute():
            source = Path(self.source_dir)
            if source.is_dir():
                work_dir = source / work_dir
        work_dir.mkdir(parents=True, exist_ok=True)
        return work_dir


# 全局单例，import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/pushbot.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
