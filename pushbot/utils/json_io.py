"""JSON 文件读写工具

清单文件（package.json 等）按原键顺序读入，保存时统一两空格缩进 +
结尾换行，使改写后的 diff 只包含真正变化的行。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pushbot.utils.yaml_io import atomic_write

logger = logging.getLogger(__name__)


def load_json(path: str | Path) -> Any:
    """读取 JSON 文件（dict 保持文件中的键顺序）

    异常:
        OSError: 文件不存在或不可读
        ValueError: JSON 格式错误（json.JSONDecodeError）
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def dumps_pretty(data: Any) -> str:
    """序列化为稳定的美化 JSON 文本"""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def save_pretty_json(path: str | Path, data: Any) -> None:
    """原子写入美化 JSON"""
    p = Path(path)
    try:
        atomic_write(p, dumps_pretty(data))
    except OSError as e:
        logger.error("写入文件失败: %s, 错误: %s", path, e)
        raise
