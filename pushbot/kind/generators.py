"""依赖树生成器 — 运行生态原生命令并把输出写入仓库内文件"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pushbot.utils.shell import CommandExecutor, get_executor

if TYPE_CHECKING:
    from pushbot.core.models import LocalRepository

logger = logging.getLogger(__name__)


class CommandTreeGenerator:
    """执行命令，把 stdout 写入 <仓库目录>/<output_file_name>

    npm ls 在存在 peer 依赖告警时退出码非 0 但仍输出完整 JSON，
    因此只要 stdout 非空就写文件；stdout 为空时不写，由调用方视为无依赖树。
    """

    def __init__(self, command: str, executor: CommandExecutor | None = None) -> None:
        self.command = command
        self._executor = executor

    @property
    def executor(self) -> CommandExecutor:
        return self._executor or get_executor()

    def generate_dependency_tree(self, repository: LocalRepository, output_file_name: str) -> None:
        logger.debug("生成依赖树: %s -> %s", repository.full_name, output_file_name)
        r = self.executor.execute(self.command, cwd=repository.dir)
        if not r.success:
            logger.warning(
                "依赖树命令退出码 %d (%s): %s",
                r.returncode, repository.full_name, r.stderr[:300],
            )
        if not r.stdout.strip():
            return
        repository.file(output_file_name).write_text(r.stdout, encoding="utf-8")
