"""HTML feature scanner over the static selector catalog."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .constants import HTML_FEATURES
from .model import CatalogEntry, ResolvedFeature
from .resolve import feature_from_entry
from .util.html import all_nodes, debug_log, parse_document

if TYPE_CHECKING:
    from .support_data import SupportDatabase


def scan_document_features(
    doc: Any,
    database: SupportDatabase,
    catalog: Sequence[CatalogEntry] = HTML_FEATURES,
) -> list[ResolvedFeature]:
    """Emit one feature per catalog entry with at least one matching node."""
    features: list[ResolvedFeature] = []
    for entry in catalog:
        if not all_nodes(doc, entry.selector):
            continue
        support = database.lookup(entry.feature_key)
        if support is None:
            debug_log(f"no support data for {entry.feature_key} ({entry.selector})")
            continue
        features.append(feature_from_entry(support, selector=entry.selector))
    return features


def scan_html_features(
    html: str,
    database: SupportDatabase,
    catalog: Sequence[CatalogEntry] = HTML_FEATURES,
) -> list[ResolvedFeature]:
    """Detect catalogued HTML features in raw markup."""
    return scan_document_features(parse_document(html), database, catalog)
