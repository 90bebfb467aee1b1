"""CSS feature scanner built on tinycss2."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
from typing import TYPE_CHECKING, Any

import tinycss2

from .model import ResolvedFeature
from .resolve import feature_from_lookup_key
from .util.html import debug_log

if TYPE_CHECKING:
    from .support_data import SupportDatabase

LOGGER = logging.getLogger(__name__)

Node = Any

PSEUDO_CLASSES = "pseudo-classes"
PSEUDO_ELEMENTS = "pseudo-elements"


def property_key(prop: str) -> str:
    return f"css.properties.{prop}"


def property_value_key(prop: str, value: str) -> str:
    return f"css.properties.{prop}.{value}"


def at_rule_key(name: str) -> str:
    return f"css.at-rules.{name}"


def pseudo_key(kind: str, name: str) -> str:
    return f"css.selectors.{kind}.{name}"


def _iter_value_identifiers(tokens: Iterable[Node]) -> Iterator[str]:
    for token in tokens:
        if token.type == "ident":
            yield token.lower_value
        elif token.type == "function":
            yield from _iter_value_identifiers(token.arguments)
        elif token.type in ("() block", "[] block", "{} block"):
            yield from _iter_value_identifiers(token.content)


def _iter_pseudo_keys(tokens: Iterable[Node]) -> Iterator[str]:
    colons = 0
    for token in tokens:
        if token.type == "literal" and token.value == ":":
            colons += 1
            continue
        if colons and token.type in ("ident", "function"):
            kind = PSEUDO_ELEMENTS if colons >= 2 else PSEUDO_CLASSES
            name = token.lower_value if token.type == "ident" else token.lower_name
            yield pseudo_key(kind, name)
        if token.type == "function":
            # :is(), :not(), :has() etc. carry nested selectors.
            yield from _iter_pseudo_keys(token.arguments)
        colons = 0


def _iter_declaration_keys(declaration: Node) -> Iterator[str]:
    prop = declaration.lower_name
    yield property_key(prop)
    if prop.startswith("--"):
        return
    for identifier in _iter_value_identifiers(declaration.value):
        yield property_value_key(prop, identifier)


def _iter_node_keys(nodes: Iterable[Node]) -> Iterator[str]:
    for node in nodes:
        node_type = node.type
        if node_type == "declaration":
            yield from _iter_declaration_keys(node)
        elif node_type == "at-rule":
            yield at_rule_key(node.lower_at_keyword)
            if node.content is not None:
                yield from _iter_node_keys(_parse_block(node.content))
        elif node_type == "qualified-rule":
            yield from _iter_pseudo_keys(node.prelude)
            yield from _iter_node_keys(_parse_block(node.content))
        elif node_type == "error":
            debug_log(f"skipped CSS rule: {node.kind} ({node.message})")
        # Comments and whitespace carry no features.


def _parse_block(content: list[Node]) -> list[Node]:
    return tinycss2.parse_blocks_contents(content, skip_comments=True, skip_whitespace=True)


def iter_lookup_keys(css: str) -> Iterator[str]:
    """Yield lookup keys for a stylesheet in document order (duplicates included)."""
    rules = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    yield from _iter_node_keys(rules)


def iter_inline_lookup_keys(style: str) -> Iterator[str]:
    """Yield lookup keys for a ``style`` attribute parsed as a declaration list."""
    nodes = tinycss2.parse_declaration_list(style, skip_comments=True, skip_whitespace=True)
    for node in nodes:
        if node.type == "declaration":
            yield from _iter_declaration_keys(node)


def scan_css_features(css: str, database: SupportDatabase) -> list[ResolvedFeature]:
    """Detect CSS features; each lookup key is attempted once per scan.

    Never raises: un-parseable input yields an empty list.
    """
    if not css.strip():
        return []

    features: list[ResolvedFeature] = []
    attempted: set[str] = set()
    try:
        for lookup_key in iter_lookup_keys(css):
            if lookup_key in attempted:
                continue
            attempted.add(lookup_key)
            feature = feature_from_lookup_key(lookup_key, database.lookup(lookup_key))
            if feature is not None:
                features.append(feature)
    except Exception as exc:
        LOGGER.debug("CSS parsing failed, no CSS features reported: %r", exc)
        return []
    return features
