"""Map support tiers to display records and merge detections."""

from __future__ import annotations

from collections.abc import Iterable

from .constants import (
    HIGHLIGHT_CLASS_MAP,
    LIMITED_AVAILABILITY,
    NEWLY_AVAILABLE,
    UNKNOWN_STATUS,
    WIDELY_AVAILABLE,
)
from .model import CSS_DESCRIPTION_PREFIX, BaselineStatus, ResolvedFeature, SupportEntry
from .util.text import humanize_key


def status_for_baseline(baseline: object) -> BaselineStatus | None:
    """Translate a web-features ``baseline`` value; None when unrecognised."""
    if baseline is False:
        return LIMITED_AVAILABILITY
    if baseline == "high":
        return WIDELY_AVAILABLE
    if baseline == "low":
        return NEWLY_AVAILABLE
    return None


def highlight_class_for(status: str) -> str | None:
    return HIGHLIGHT_CLASS_MAP.get(status)


def format_feature_name(lookup_key: str) -> str:
    """Display name for a lookup key, from its last dotted segment."""
    segment = lookup_key.rsplit(".", maxsplit=1)[-1] or lookup_key
    return humanize_key(segment)


def feature_from_entry(entry: SupportEntry, selector: str | None = None) -> ResolvedFeature:
    """Build an HTML-origin feature; entries without a usable tier become Unknown."""
    status = status_for_baseline(entry.baseline) if entry.has_status else None
    resolved_status: BaselineStatus = status or UNKNOWN_STATUS
    return ResolvedFeature(
        name=entry.name or entry.key,
        status=resolved_status,
        description=entry.description,
        selector=selector,
        highlight_class=highlight_class_for(resolved_status),
    )


def feature_from_lookup_key(lookup_key: str, entry: SupportEntry | None) -> ResolvedFeature | None:
    """Build a CSS-origin feature, only when the entry carries a known tier."""
    if entry is None or not entry.has_status:
        return None
    status = status_for_baseline(entry.baseline)
    if status is None:
        return None
    return ResolvedFeature(
        name=format_feature_name(lookup_key),
        status=status,
        description=f"{CSS_DESCRIPTION_PREFIX}{lookup_key}",
        highlight_class=highlight_class_for(status),
    )


def merge_features(*feature_lists: Iterable[ResolvedFeature]) -> list[ResolvedFeature]:
    """Ordered first-write-wins merge by name, then sort by name.

    Lists are consumed in argument order, so callers pass HTML-origin features
    before CSS-origin ones.
    """
    seen: set[str] = set()
    merged: list[ResolvedFeature] = []
    for features in feature_lists:
        for feature in features:
            if feature.name in seen:
                continue
            seen.add(feature.name)
            merged.append(feature)
    # Code point order: upper-case names sort before lower-case ones.
    return sorted(merged, key=lambda feature: feature.name)
