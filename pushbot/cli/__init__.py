"""pushbot 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import click

from pushbot import __version__
from pushbot.core.config import init_config
from pushbot.core.exceptions import PushBotError
from pushbot.services.container import ServiceContainer, get_container, set_container
from pushbot.utils.logger import setup_logging

F = TypeVar("F", bound=Callable[..., Any])


def _svc() -> ServiceContainer:
    """获取全局服务容器的快捷方式"""
    return get_container()


def handle_errors(func: F) -> F:
    """把业务异常转换为 click 友好输出"""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PushBotError as e:
            raise click.ClickException(f"[{e.code}] {e}") from e

    return wrapper  # type: ignore[return-value]


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default="configs/pushbot.yml", help="运行配置文件路径")
@click.option("--projects", "-p", "projects", default="", help="项目配置文件路径或 URL（覆盖配置）")
@click.option("--work-dir", default="", help="本地工作副本根目录（覆盖配置）")
def main(config_path: str, projects: str, work_dir: str) -> None:
    """pushbot - 跨仓库依赖版本推送工具"""
    setup_logging(
        level=os.getenv("PUSHBOT_LOG_LEVEL", "INFO"),
        json_output=os.getenv("PUSHBOT_LOG_JSON", "") == "1",
    )
    cfg = init_config(config_path)
    if projects:
        cfg.config_file = projects
    if work_dir:
        cfg.work_dir = work_dir
    set_container(ServiceContainer(cfg))


# 注册各领域子命令
from pushbot.cli.cmd_repo import register as _reg_repo  # noqa: E402
from pushbot.cli.cmd_push import register as _reg_push  # noqa: E402
from pushbot.cli.cmd_pull import register as _reg_pull  # noqa: E402

_reg_repo(main)
_reg_push(main)
_reg_pull(main)
