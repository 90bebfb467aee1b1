"""Text utility helpers."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_CAMEL_RE = re.compile(r"([a-z])([A-Z])")


def normalize_whitespace(value: str) -> str:
    """Collapse repeated whitespace and trim ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def humanize_key(value: str) -> str:
    """Turn a key segment like ``backdrop-filter`` into ``Backdrop filter``."""
    spaced = _CAMEL_RE.sub(r"\1 \2", value.replace("-", " ")).lower()
    return spaced[:1].upper() + spaced[1:]


def ellipsize(value: str, width: int) -> str:
    """Shorten long strings while preserving suffix visibility."""
    if width <= 0:
        return ""
    if len(value) <= width:
        return value
    if width <= 1:
        return "…"
    return f"{value[: width - 1]}…"


def byte_length(value: str) -> int:
    return len(value.encode("utf-8"))
