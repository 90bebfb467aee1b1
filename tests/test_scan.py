from __future__ import annotations

from collections.abc import Sequence

import pytest

import baselinescan.scan as scan_module
from baselinescan.exceptions import InvalidUrlError, NetworkError
from baselinescan.model import StylesheetLink
from baselinescan.scan import (
    extract_inline_styles,
    extract_stylesheet_links,
    scan_document,
    scan_url,
    validate_url,
)
from baselinescan.support_data import SupportDatabase
from baselinescan.util.html import parse_document

PAGE = """
<!doctype html>
<html><head>
  <link rel="stylesheet" href="/css/site.css">
  <link rel="preload stylesheet" href="https://cdn.example.net/kit.css">
  <link rel="icon" href="/favicon.ico">
  <link rel="stylesheet" href="/css/site.css">
  <style>.grid { display: grid }</style>
  <style>   </style>
</head>
<body><dialog>Hi</dialog></body></html>
"""


@pytest.mark.parametrize(
    "url",
    ["https://example.com", "http://example.com:8080/path?q=1", "  https://example.com/  "],
)
def test_validate_url_accepts_http_urls(url: str) -> None:
    assert validate_url(url) == url.strip()


@pytest.mark.parametrize(
    "url",
    ["", "example.com", "ftp://example.com/file", "javascript:alert(1)", "https://", "http://[::1"],
)
def test_validate_url_rejects_other_input(url: str) -> None:
    with pytest.raises(InvalidUrlError):
        validate_url(url)


def test_extract_stylesheet_links_resolves_and_dedupes() -> None:
    links = extract_stylesheet_links(parse_document(PAGE), "https://example.com/blog/post")

    assert links == [
        StylesheetLink("https://example.com/css/site.css", cross_origin=False),
        StylesheetLink("https://cdn.example.net/kit.css", cross_origin=True),
    ]


def test_extract_stylesheet_links_compares_full_origin() -> None:
    html = """
    <head>
      <link rel="stylesheet" href="http://example.com/a.css">
      <link rel="stylesheet" href="https://example.com:443/b.css">
      <link rel="stylesheet" href="https://example.com:8443/c.css">
      <link rel="stylesheet" href="data:text/css,a{}">
    </head>
    """

    links = extract_stylesheet_links(parse_document(html), "https://example.com/")

    assert [(link.url.rsplit("/", 1)[-1], link.cross_origin) for link in links] == [
        ("a.css", True),
        ("b.css", False),
        ("c.css", True),
    ]


def test_extract_inline_styles_skips_blank_blocks() -> None:
    styles = extract_inline_styles(parse_document(PAGE))

    assert styles == [".grid { display: grid }"]


def test_scan_document_builds_result(database: SupportDatabase) -> None:
    linked = ["a { gap: 1rem }", "", "b { backdrop-filter: blur(2px) }"]

    result = scan_document(
        "https://example.com/", PAGE, linked, database, warnings=["1 of 3 stylesheets"]
    )

    assert [feature.name for feature in result.baseline_features] == [
        "<dialog>",
        "Backdrop filter",
        "Gap",
        "Grid",
    ]
    assert result.inline_blocks == 1
    assert result.stylesheets == 2
    assert result.html_length == len(PAGE.encode("utf-8"))
    assert result.css_length == len(
        ".grid { display: grid }\na { gap: 1rem }\nb { backdrop-filter: blur(2px) }"
    )
    assert result.snippet == PAGE[:400]
    assert result.css_snippet.startswith(".grid { display: grid }\na { gap")
    assert result.summary.total == 4
    assert result.summary.widely_available == 3
    assert result.summary.newly_available == 1
    assert "highlight-widely-available" in result.highlighted_html
    assert result.warnings == ["1 of 3 stylesheets"]


def test_scan_result_to_dict_uses_camel_case_keys(database: SupportDatabase) -> None:
    result = scan_document("https://example.com/", "<body><dialog></dialog></body>", [], database)

    payload = result.to_dict()

    assert list(payload) == [
        "url",
        "htmlLength",
        "cssLength",
        "stylesheets",
        "inlineBlocks",
        "snippet",
        "cssSnippet",
        "baselineFeatures",
        "highlightedHtmlContent",
        "baselineSummary",
        "warnings",
    ]
    assert payload["cssLength"] == 0
    assert payload["baselineFeatures"][0]["name"] == "<dialog>"
    assert payload["baselineFeatures"][0]["highlightClass"] == "highlight-widely-available"
    assert payload["baselineSummary"] == {
        "widelyAvailable": 1,
        "newlyAvailable": 0,
        "limitedAvailability": 0,
        "total": 1,
    }


def test_scan_url_fetches_page_and_stylesheets(
    database: SupportDatabase, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: dict[str, object] = {}

    def _fake_fetch_html(url: str, timeout: float) -> str:
        calls["html"] = (url, timeout)
        return PAGE

    def _fake_fetch_stylesheets(links: Sequence[StylesheetLink], timeout: float) -> list[str]:
        calls["css"] = ([link.url for link in links], timeout)
        return ["a { gap: 1rem }", ""]

    monkeypatch.setattr(scan_module, "fetch_html", _fake_fetch_html)
    monkeypatch.setattr(scan_module, "fetch_stylesheets", _fake_fetch_stylesheets)

    result = scan_url(" https://example.com/ ", database, timeout=4.0, stylesheet_timeout=2.0)

    assert calls["html"] == ("https://example.com/", 4.0)
    assert calls["css"] == (
        ["https://example.com/css/site.css", "https://cdn.example.net/kit.css"],
        2.0,
    )
    assert result.url == "https://example.com/"
    assert result.stylesheets == 1
    assert result.warnings == ["1 of 2 stylesheets could not be fetched or were empty."]
    assert "Gap" in [feature.name for feature in result.baseline_features]


def test_scan_url_rejects_invalid_url_before_fetching(
    database: SupportDatabase, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        scan_module, "fetch_html", lambda *_args, **_kwargs: pytest.fail("should not fetch")
    )

    with pytest.raises(InvalidUrlError):
        scan_url("not a url", database)


def test_scan_url_propagates_page_errors(
    database: SupportDatabase, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _boom(url: str, timeout: float) -> str:
        raise NetworkError(url, cause="ConnectError")

    monkeypatch.setattr(scan_module, "fetch_html", _boom)

    with pytest.raises(NetworkError):
        scan_url("https://example.com/", database)
