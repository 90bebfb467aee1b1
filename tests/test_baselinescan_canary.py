from __future__ import annotations

import pytest

from baselinescan.http import fetch_html, use_shared_client
from baselinescan.scan import extract_stylesheet_links, scan_url
from baselinescan.support_data import load_support_database
from baselinescan.util.html import parse_document


@pytest.mark.canary
def test_live_scan_against_published_support_data() -> None:
    """
    Canary test: download the published web-features data and scan a real page.

    This is intentionally a single, live-network test to detect upstream data format changes.
    """
    url = "https://developer.mozilla.org/en-US/docs/Web/HTML/Element/dialog"

    with use_shared_client():
        database = load_support_database()
        assert database.feature_count > 500
        assert database.compat_key_count > 1000

        dialog = database.lookup("dialog")
        assert dialog is not None
        assert dialog.has_status
        assert dialog.baseline in ("high", "low", False)

        grid = database.lookup("css.properties.display.grid")
        assert grid is not None
        assert grid.baseline == "high"

        html = fetch_html(url)
        assert extract_stylesheet_links(parse_document(html), url)

        result = scan_url(url, database)

    assert result.css_length > 0
    assert result.baseline_features
    assert result.summary.total == len(result.baseline_features)
    assert any(feature.is_css_feature for feature in result.baseline_features)
    assert result.highlighted_html
