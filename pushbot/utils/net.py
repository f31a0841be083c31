"""网络工具 — URL 校验与读取"""

from __future__ import annotations

import urllib.request
from urllib.parse import urlparse

from pushbot.core.exceptions import ValidationError

_ALLOWED_SCHEMES = frozenset(("http", "https"))


def is_http_url(text: str) -> bool:
    """判断字符串是否为 http/https URL"""
    return urlparse(text).scheme in _ALLOWED_SCHEMES


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def read_url(url: str, *, headers: dict[str, str] | None = None, timeout: int = 60) -> bytes:
    """读取 URL 内容，网络错误以 OSError（URLError 子类）抛出"""
    validate_url_scheme(url, context="read")
    req = urllib.request.Request(url)
    for key, value in (headers or {}).items():
        req.add_header(key, value)
    with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
        data: bytes = resp.read()
    return data
