"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，git / npm / ncu 等外部工具
均经由此处调用，测试时注入假执行器即可，无需 patch subprocess。

外部工具调用是同步阻塞的，不设超时。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 给定工作目录和命令行，返回退出码及输出"""

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str | Path = ".",
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str | Path = ".",
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        args = shlex.split(cmd) if isinstance(cmd, str) else cmd
        try:
            r = subprocess.run(
                args, capture_output=True, text=True,
                cwd=str(cwd), env=env, check=False,
            )
        except FileNotFoundError as e:
            # 可执行文件不存在时按 shell 惯例返回 127
            return CommandResult(returncode=127, stderr=str(e))
        except OSError as e:
            # 无执行权限、cwd 不存在等
            return CommandResult(returncode=126, stderr=str(e))
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


# =========================================================================
# 全局默认执行器（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


# =========================================================================
# 便捷函数
# =========================================================================

def run_status(
    cmd: str | list[str], *, cwd: str | Path = ".",
    executor: CommandExecutor | None = None,
    label: str = "cmd",
) -> int:
    """执行命令并返回退出码，失败只记日志不抛异常"""
    ex = executor or get_executor()
    logger.debug("  %s: %s (cwd=%s)", label, cmd, cwd)
    r = ex.execute(cmd, cwd=cwd)
    if not r.success:
        logger.warning("%s失败 (rc=%d, cwd=%s): %s", label, r.returncode, cwd, r.stderr[:300])
    return r.returncode

