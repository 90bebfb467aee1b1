"""Tally resolved features by Baseline status."""

from __future__ import annotations

from collections.abc import Iterable

from .constants import LIMITED_AVAILABILITY, NEWLY_AVAILABLE, WIDELY_AVAILABLE
from .model import BaselineSummary, ResolvedFeature


def compute_baseline_summary(features: Iterable[ResolvedFeature]) -> BaselineSummary:
    """Count features per status.

    Unknown entries count toward ``total`` but toward no bucket.
    """
    widely = newly = limited = total = 0
    for feature in features:
        total += 1
        if feature.status == WIDELY_AVAILABLE:
            widely += 1
        elif feature.status == NEWLY_AVAILABLE:
            newly += 1
        elif feature.status == LIMITED_AVAILABILITY:
            limited += 1
    return BaselineSummary(
        widely_available=widely,
        newly_available=newly,
        limited_availability=limited,
        total=total,
    )
