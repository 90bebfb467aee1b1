"""Scan orchestration: fetch a page and its stylesheets, then detect features."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from .constants import DEFAULT_TIMEOUT_SECONDS, SNIPPET_LENGTH, STYLESHEET_TIMEOUT_SECONDS
from .exceptions import InvalidUrlError
from .highlight import highlight_html_features
from .http import fetch_html, fetch_stylesheets
from .model import ScanResult, StylesheetLink
from .resolve import merge_features
from .scan_css import scan_css_features
from .scan_html import scan_document_features
from .summary import compute_baseline_summary
from .util.html import all_nodes, attr, debug_log, parse_document, raw_text, safe_join_url
from .util.text import byte_length

if TYPE_CHECKING:
    from .support_data import SupportDatabase

_DEFAULT_PORTS = {"http": 80, "https": 443}


def validate_url(url: str) -> str:
    """Return the stripped URL, or raise InvalidUrlError for non-http(s) input."""
    candidate = url.strip()
    try:
        parts = urlsplit(candidate)
    except ValueError as exc:
        raise InvalidUrlError(url) from exc
    if parts.scheme not in _DEFAULT_PORTS or not parts.hostname:
        raise InvalidUrlError(url)
    return candidate


def _origin(url: str) -> tuple[str, str, int | None]:
    parts = urlsplit(url)
    try:
        port = parts.port
    except ValueError:
        port = None
    return parts.scheme, (parts.hostname or "").lower(), port or _DEFAULT_PORTS.get(parts.scheme)


def extract_inline_styles(doc: Any) -> list[str]:
    """Text of every non-empty ``<style>`` block, in document order."""
    styles: list[str] = []
    for node in all_nodes(doc, "style"):
        css = raw_text(node)
        if css.strip():
            styles.append(css)
    return styles


def extract_stylesheet_links(doc: Any, base_url: str) -> list[StylesheetLink]:
    """Resolve ``<link rel="stylesheet">`` hrefs against the page URL."""
    page_origin = _origin(base_url)
    links: list[StylesheetLink] = []
    seen: set[str] = set()
    for node in all_nodes(doc, "link[href]"):
        rel_tokens = (attr(node, "rel") or "").lower().split()
        if "stylesheet" not in rel_tokens:
            continue
        href = safe_join_url(base_url, attr(node, "href"))
        if not href or urlsplit(href).scheme not in _DEFAULT_PORTS or href in seen:
            debug_log(f"stylesheet link skipped: {attr(node, 'href')}")
            continue
        seen.add(href)
        links.append(StylesheetLink(url=href, cross_origin=_origin(href) != page_origin))
    return links


def scan_document(
    url: str,
    html: str,
    stylesheet_texts: Sequence[str],
    database: SupportDatabase,
    *,
    warnings: Sequence[str] = (),
) -> ScanResult:
    """Build a ScanResult from already-fetched markup and linked stylesheet texts."""
    doc = parse_document(html)
    inline_styles = extract_inline_styles(doc)
    linked_styles = [css for css in stylesheet_texts if css]
    all_css = "\n".join([*inline_styles, *linked_styles])

    features = merge_features(
        scan_document_features(doc, database),
        scan_css_features(all_css, database),
    )

    return ScanResult(
        url=url,
        html_length=byte_length(html),
        css_length=byte_length(all_css),
        stylesheets=len(linked_styles),
        inline_blocks=len(inline_styles),
        snippet=html[:SNIPPET_LENGTH],
        css_snippet=all_css[:SNIPPET_LENGTH],
        baseline_features=features,
        highlighted_html=highlight_html_features(html, features, database),
        summary=compute_baseline_summary(features),
        warnings=list(warnings),
    )


def scan_url(
    url: str,
    database: SupportDatabase,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    stylesheet_timeout: float = STYLESHEET_TIMEOUT_SECONDS,
) -> ScanResult:
    """Fetch a page plus its linked stylesheets and scan them."""
    target = validate_url(url)
    html = fetch_html(target, timeout=timeout)

    links = extract_stylesheet_links(parse_document(html), target)
    texts = fetch_stylesheets(links, timeout=stylesheet_timeout)

    warnings: list[str] = []
    missing = sum(1 for text in texts if not text)
    if missing:
        warnings.append(f"{missing} of {len(links)} stylesheets could not be fetched or were empty.")

    return scan_document(target, html, texts, database, warnings=warnings)
