"""HTML parsing helpers built around justhtml."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import Any
from urllib.parse import urljoin

from justhtml import JustHTML

from .text import normalize_whitespace

Node = Any
LOGGER = logging.getLogger(__name__)


def parse_document(html: str) -> JustHTML:
    """Parse HTML without sanitization to preserve style blocks and attributes."""
    return JustHTML(html, sanitize=False, safe=False)


def query(node: Node, selector: str) -> list[Node]:
    """Return all selector matches; selector errors propagate to the caller."""
    if not hasattr(node, "query"):
        return []
    return list(node.query(selector))


def first(node: Node, selector: str) -> Node | None:
    """Return the first selector match or None."""
    matches = all_nodes(node, selector)
    return matches[0] if matches else None


def all_nodes(node: Node, selector: str) -> list[Node]:
    """Return all selector matches, guarding selector/runtime errors."""
    try:
        return query(node, selector)
    except Exception:
        debug_log(f"selector rejected: {selector}")
        return []


def text(node: Node | None) -> str:
    """Extract normalized text from a node."""
    if node is None:
        return ""
    try:
        if hasattr(node, "to_text"):
            return normalize_whitespace(node.to_text())
        if hasattr(node, "data") and isinstance(node.data, str):
            return normalize_whitespace(node.data)
    except Exception:
        return ""
    return ""


def raw_text(node: Node | None) -> str:
    """Concatenate the raw data of direct text children (e.g. a style block)."""
    if node is None:
        return ""
    parts: list[str] = []
    for child in getattr(node, "children", None) or []:
        if getattr(child, "name", None) == "#text":
            data = getattr(child, "data", None)
            if isinstance(data, str):
                parts.append(data)
    return "".join(parts)


def attr(node: Node | None, name: str) -> str | None:
    """Get an element attribute by name."""
    if node is None:
        return None
    attrs = getattr(node, "attrs", None)
    if not isinstance(attrs, dict):
        return None
    value = attrs.get(name)
    if value is None:
        return None
    return str(value)


def set_attr(node: Node, name: str, value: str) -> bool:
    """Set an element attribute; returns False for nodes without attributes."""
    attrs = getattr(node, "attrs", None)
    if attrs is None and hasattr(node, "attrs"):
        attrs = {}
        node.attrs = attrs
    if not isinstance(attrs, dict):
        return False
    attrs[name] = value
    return True


def class_tokens(node: Node | None) -> tuple[str, ...]:
    """Return element classes as tokenized tuple."""
    class_attr = attr(node, "class")
    if not class_attr:
        return ()
    return tuple(token for token in class_attr.split() if token)


def append_classes(node: Node, classes: Iterable[str]) -> bool:
    """Append class tokens not already present, creating the attribute if absent."""
    present = set(class_tokens(node))
    added: list[str] = []
    for token in classes:
        if token and token not in present:
            present.add(token)
            added.append(token)
    if not added:
        return False
    existing = attr(node, "class") or ""
    joined = " ".join(added)
    combined = f"{existing} {joined}" if existing.strip() else joined
    return set_attr(node, "class", combined)


def to_html(doc: Node) -> str:
    """Serialize a parsed document (or node) back to markup without reformatting."""
    if hasattr(doc, "to_html"):
        return str(doc.to_html(pretty=False))
    root = getattr(doc, "root", None)
    if root is not None and hasattr(root, "to_html"):
        return str(root.to_html(pretty=False))
    return ""


def strip_markup(fragment: str) -> str:
    """Reduce an HTML fragment to normalized plain text."""
    if "<" not in fragment and "&" not in fragment:
        return normalize_whitespace(fragment)
    doc = parse_document(f"<body>{fragment}</body>")
    return text(first(doc, "body"))


def safe_join_url(base: str, href: str | None) -> str | None:
    """Join relative URLs against a base URL."""
    if not href:
        return None
    return urljoin(base, href.strip())


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get("BASELINESCAN_DEBUG", "").strip() == "1"


def debug_log(message: str) -> None:
    """Emit debug logs to stderr in debug mode only."""
    if debug_enabled():
        LOGGER.debug("%s", message)
