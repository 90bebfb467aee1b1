"""Annotate page markup with Baseline highlight classes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
import logging
from typing import TYPE_CHECKING, Any

from .constants import CSS_FEATURES_ATTR, FEATURE_ATTR, INLINE_FEATURES_ATTR, STATUS_ATTR
from .model import ResolvedFeature
from .resolve import feature_from_lookup_key, format_feature_name
from .scan_css import iter_inline_lookup_keys, iter_lookup_keys
from .util.html import (
    all_nodes,
    append_classes,
    attr,
    parse_document,
    query,
    raw_text,
    set_attr,
    to_html,
)

if TYPE_CHECKING:
    from .support_data import SupportDatabase

LOGGER = logging.getLogger(__name__)


def _selector_map(features: Sequence[ResolvedFeature]) -> dict[str, ResolvedFeature]:
    selectors: dict[str, ResolvedFeature] = {}
    for feature in features:
        if feature.selector and feature.highlight_class and feature.selector not in selectors:
            selectors[feature.selector] = feature
    return selectors


def _highlight_elements(doc: Any, features: Sequence[ResolvedFeature]) -> None:
    for selector, feature in _selector_map(features).items():
        try:
            nodes = query(doc, selector)
        except Exception as exc:
            LOGGER.warning("Invalid selector %r skipped: %s", selector, exc)
            continue
        for node in nodes:
            append_classes(node, [feature.highlight_class or ""])
            set_attr(node, FEATURE_ATTR, feature.name)
            set_attr(node, STATUS_ATTR, feature.status)


def _feature_name(lookup_key: str, database: SupportDatabase | None) -> str | None:
    if database is None:
        return format_feature_name(lookup_key)
    feature = feature_from_lookup_key(lookup_key, database.lookup(lookup_key))
    return feature.name if feature is not None else None


def _matched_classes(
    walk: Callable[[str], Iterator[str]],
    css: str,
    highlight_by_name: dict[str, str],
    database: SupportDatabase | None = None,
) -> list[str]:
    classes: list[str] = []
    try:
        for lookup_key in walk(css):
            name = _feature_name(lookup_key, database)
            highlight = highlight_by_name.get(name) if name else None
            if highlight and highlight not in classes:
                classes.append(highlight)
    except Exception as exc:
        LOGGER.warning("CSS parsing failed in highlighter: %r", exc)
    return classes


def _mark(node: Any, classes: Iterable[str], count_attr: str) -> None:
    classes = list(classes)
    if not classes:
        return
    append_classes(node, classes)
    set_attr(node, count_attr, str(len(classes)))


def highlight_html_features(
    html: str,
    features: Sequence[ResolvedFeature],
    database: SupportDatabase | None = None,
) -> str:
    """Return the full document with highlight classes and data attributes injected.

    Steps are independent: catalogued elements, ``<style>`` blocks, then
    elements carrying an inline ``style`` attribute. With a ``database``, CSS
    lookup keys only match when they resolve to a known Baseline tier.
    """
    doc = parse_document(html)

    _highlight_elements(doc, features)

    highlight_by_name: dict[str, str] = {}
    for feature in features:
        if feature.highlight_class and feature.name not in highlight_by_name:
            highlight_by_name[feature.name] = feature.highlight_class

    for style_node in all_nodes(doc, "style"):
        css = raw_text(style_node)
        if css.strip():
            _mark(
                style_node,
                _matched_classes(iter_lookup_keys, css, highlight_by_name, database),
                CSS_FEATURES_ATTR,
            )

    for node in all_nodes(doc, "[style]"):
        inline_style = attr(node, "style") or ""
        if inline_style.strip():
            _mark(
                node,
                _matched_classes(
                    iter_inline_lookup_keys, inline_style, highlight_by_name, database
                ),
                INLINE_FEATURES_ATTR,
            )

    return to_html(doc)
