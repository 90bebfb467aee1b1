"""Constants used across pybaselinescan."""

from __future__ import annotations

from typing import Final

from .model import BaselineStatus, CatalogEntry

WEB_FEATURES_DATA_URL: Final[str] = "https://unpkg.com/web-features/data.json"

DATA_PATH_ENV: Final[str] = "BASELINESCAN_DATA"

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
STYLESHEET_TIMEOUT_SECONDS: Final[float] = 5.0
DATA_TIMEOUT_SECONDS: Final[float] = 30.0
MAX_STYLESHEET_WORKERS: Final[int] = 8

MAX_HTML_BYTES: Final[int] = 5 * 1024 * 1024
MAX_CSS_BYTES: Final[int] = 5 * 1024 * 1024
SNIPPET_LENGTH: Final[int] = 400

USER_AGENT: Final[str] = "Mozilla/5.0 (compatible; pybaselinescan/{version})"

WIDELY_AVAILABLE: Final[BaselineStatus] = "Widely available"
NEWLY_AVAILABLE: Final[BaselineStatus] = "Newly available"
LIMITED_AVAILABILITY: Final[BaselineStatus] = "Limited availability"
UNKNOWN_STATUS: Final[BaselineStatus] = "Unknown"

HIGHLIGHT_CLASS_MAP: Final[dict[str, str]] = {
    WIDELY_AVAILABLE: "highlight-widely-available",
    NEWLY_AVAILABLE: "highlight-newly-available",
    LIMITED_AVAILABILITY: "highlight-limited-availability",
}

STATUS_ICON_MAP: Final[dict[str, str]] = {
    WIDELY_AVAILABLE: "✅",
    NEWLY_AVAILABLE: "⚡",
    LIMITED_AVAILABILITY: "❌",
    UNKNOWN_STATUS: "﹖",
}

STATUS_STYLE_MAP: Final[dict[str, str]] = {
    WIDELY_AVAILABLE: "green",
    NEWLY_AVAILABLE: "yellow",
    LIMITED_AVAILABILITY: "red",
    UNKNOWN_STATUS: "dim",
}

FEATURE_ATTR: Final[str] = "data-baseline-feature"
STATUS_ATTR: Final[str] = "data-baseline-status"
CSS_FEATURES_ATTR: Final[str] = "data-baseline-css-features"
INLINE_FEATURES_ATTR: Final[str] = "data-baseline-inline-features"

# BCD namespaces; any other key is treated as a web-features id.
COMPAT_KEY_PREFIXES: Final[tuple[str, ...]] = (
    "api.",
    "css.",
    "html.",
    "http.",
    "javascript.",
    "svg.",
    "webdriver.",
)

HTML_FEATURES: Final[tuple[CatalogEntry, ...]] = (
    CatalogEntry("dialog", "dialog"),
    CatalogEntry("details", "details"),
    CatalogEntry("summary", "details"),
    CatalogEntry("picture", "picture"),
    CatalogEntry("source", "picture"),
    CatalogEntry("video", "video"),
    CatalogEntry("audio", "audio"),
    CatalogEntry("canvas", "canvas-2d"),
    CatalogEntry("svg", "svg"),
    CatalogEntry("template", "template"),
    CatalogEntry("slot", "slot"),
    CatalogEntry("search", "search"),
    CatalogEntry("datalist", "datalist"),
    CatalogEntry("meter", "meter"),
    CatalogEntry("progress", "progress"),
    CatalogEntry("output", "output"),
    CatalogEntry('input[type="date"]', "input-date-time"),
    CatalogEntry('input[type="datetime-local"]', "input-date-time"),
    CatalogEntry('input[type="time"]', "input-date-time"),
    CatalogEntry('input[type="color"]', "input-color"),
    CatalogEntry('input[type="range"]', "input-range"),
    CatalogEntry("[draggable]", "drag-and-drop"),
    CatalogEntry("[popover]", "popover"),
    CatalogEntry("[inert]", "inert"),
    CatalogEntry("[inputmode]", "inputmode"),
    CatalogEntry("[enterkeyhint]", "enterkeyhint"),
    CatalogEntry('[hidden="until-found"]', "hidden-until-found"),
    CatalogEntry('img[loading="lazy"]', "loading-lazy"),
    CatalogEntry('iframe[loading="lazy"]', "loading-lazy"),
    CatalogEntry('img[decoding="async"]', "image-decoding"),
    CatalogEntry('link[rel="modulepreload"]', "modulepreload"),
    CatalogEntry('script[type="module"]', "js-modules"),
    CatalogEntry('script[type="importmap"]', "import-maps"),
)
