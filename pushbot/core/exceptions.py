"""统一异常体系

所有业务异常继承 PushBotError。只有配置 I/O 类错误会中止运行，
其余失败（仓库查找、同步、校验、升级工具）以返回值形式上报。
CLI 层据此输出友好提示。
"""

from __future__ import annotations


class PushBotError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(PushBotError):
    """配置文件内容无效或无法读取"""

    code = "CONFIG_ERROR"


class ProjectNotFoundError(ConfigError):
    """项目配置文件按路径和 URL 均找不到"""

    code = "PROJECT_NOT_FOUND"


class ValidationError(PushBotError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []

