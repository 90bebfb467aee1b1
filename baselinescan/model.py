"""Data models for feature detection and scan results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from .util.html import strip_markup

BaselineStatus = Literal[
    "Widely available",
    "Newly available",
    "Limited availability",
    "Unknown",
]
BaselineTier = Union[Literal["high", "low"], bool, None]

CSS_DESCRIPTION_PREFIX = "CSS feature: "


@dataclass(frozen=True)
class CatalogEntry:
    selector: str
    feature_key: str


@dataclass(frozen=True)
class SupportEntry:
    key: str
    name: str | None
    description: str | None
    has_status: bool
    baseline: BaselineTier


@dataclass(frozen=True)
class ResolvedFeature:
    name: str
    status: BaselineStatus
    description: str | None = None
    selector: str | None = None
    highlight_class: str | None = None

    @property
    def is_css_feature(self) -> bool:
        return self.description is not None and self.description.startswith(CSS_DESCRIPTION_PREFIX)

    def plain_description(self) -> str:
        """Description with markup stripped, for plain-text display."""
        return strip_markup(self.description or "")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "status": self.status}
        if self.description is not None:
            data["description"] = self.description
        if self.selector is not None:
            data["selector"] = self.selector
        if self.highlight_class is not None:
            data["highlightClass"] = self.highlight_class
        return data


@dataclass(frozen=True)
class BaselineSummary:
    widely_available: int = 0
    newly_available: int = 0
    limited_availability: int = 0
    total: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "widelyAvailable": self.widely_available,
            "newlyAvailable": self.newly_available,
            "limitedAvailability": self.limited_availability,
            "total": self.total,
        }


@dataclass(frozen=True)
class StylesheetLink:
    url: str
    cross_origin: bool


@dataclass(frozen=True)
class ScanResult:
    url: str
    html_length: int
    css_length: int
    stylesheets: int
    inline_blocks: int
    snippet: str
    css_snippet: str
    baseline_features: list[ResolvedFeature]
    highlighted_html: str
    summary: BaselineSummary
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "htmlLength": self.html_length,
            "cssLength": self.css_length,
            "stylesheets": self.stylesheets,
            "inlineBlocks": self.inline_blocks,
            "snippet": self.snippet,
            "cssSnippet": self.css_snippet,
            "baselineFeatures": [feature.to_dict() for feature in self.baseline_features],
            "highlightedHtmlContent": self.highlighted_html,
            "baselineSummary": self.summary.to_dict(),
            "warnings": list(self.warnings),
        }
