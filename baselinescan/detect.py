"""Feature detection entry point: HTML + CSS scan, then merge."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .model import ResolvedFeature
from .resolve import merge_features
from .scan_css import scan_css_features
from .scan_html import scan_html_features

if TYPE_CHECKING:
    from .support_data import SupportDatabase


def detect_baseline_features(
    html: str,
    css: str,
    database: SupportDatabase,
) -> list[ResolvedFeature]:
    """Return the deduplicated, name-sorted features used by a page."""
    html_features = scan_html_features(html, database)
    css_features = scan_css_features(css, database)
    return merge_features(html_features, css_features)
