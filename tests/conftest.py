from __future__ import annotations

from typing import Any

import pytest

from baselinescan.support_data import SupportDatabase


def _compat(*keys: str, baseline: object = "high") -> dict[str, dict[str, object]]:
    return {key: {"baseline": baseline} for key in keys}


WEB_FEATURES_PAYLOAD: dict[str, Any] = {
    "browsers": {},
    "features": {
        "dialog": {
            "kind": "feature",
            "name": "<dialog>",
            "description": "The <dialog> element represents a modal or non-modal dialog box.",
            "description_html": (
                "The <code>&lt;dialog&gt;</code> element represents a modal or "
                "non-modal dialog box."
            ),
            "status": {
                "baseline": "high",
                "by_compat_key": _compat("html.elements.dialog"),
            },
        },
        "details": {
            "kind": "feature",
            "name": "<details> and <summary>",
            "description": "Disclosure widgets.",
            "status": {"baseline": "high"},
        },
        "popover": {
            "kind": "feature",
            "name": "Popover",
            "description": "The popover attribute.",
            "status": {"baseline": "low"},
        },
        "search": {
            "kind": "feature",
            "name": "<search>",
            "description": "Search landmark element.",
        },
        "canvas-2d": {
            "kind": "feature",
            "name": "Canvas 2D",
            "status": {"baseline": "high"},
        },
        "canvas": {"kind": "moved", "redirect_target": "canvas-2d"},
        "old-layout": {"kind": "split", "redirect_targets": ["grid", "flexbox-gap"]},
        "inert": {
            "kind": "feature",
            "name": "inert",
            "status": {"baseline": False},
        },
        "backdrop-filter": {
            "kind": "feature",
            "name": "Backdrop filter",
            "status": {
                "baseline": "low",
                "by_compat_key": _compat("css.properties.backdrop-filter", baseline="low"),
            },
        },
        "grid": {
            "kind": "feature",
            "name": "Grid",
            "status": {
                "baseline": "high",
                "by_compat_key": _compat(
                    "css.properties.display.grid",
                    "css.properties.grid-template-columns",
                ),
            },
        },
        "flexbox-gap": {
            "kind": "feature",
            "name": "Flexbox gap",
            "status": {
                "baseline": "high",
                "by_compat_key": {
                    **_compat("css.properties.gap"),
                    # Also listed by "grid"; the first feature wins.
                    "css.properties.display.grid": {"baseline": "low"},
                },
            },
        },
        "has": {
            "kind": "feature",
            "name": ":has()",
            "status": {
                "baseline": "low",
                "by_compat_key": _compat("css.selectors.pseudo-classes.has", baseline="low"),
            },
        },
        "backdrop": {
            "kind": "feature",
            "name": "::backdrop",
            "status": {
                "baseline": "high",
                "by_compat_key": _compat("css.selectors.pseudo-elements.backdrop"),
            },
        },
        "container-queries": {
            "kind": "feature",
            "name": "Container queries",
            "status": {
                "baseline": "low",
                "by_compat_key": _compat("css.at-rules.container", baseline="low"),
            },
        },
        "anchor-positioning": {
            "kind": "feature",
            "name": "Anchor positioning",
            "status": {
                "baseline": False,
                "by_compat_key": _compat("css.properties.anchor-name", baseline=False),
            },
        },
        "mystery": {
            "kind": "feature",
            "name": "Mystery",
            "status": {"by_compat_key": {"css.properties.mystery": {}}},
        },
    },
    "groups": {},
    "snapshots": {},
}


@pytest.fixture
def support_payload() -> dict[str, Any]:
    return WEB_FEATURES_PAYLOAD


@pytest.fixture
def database() -> SupportDatabase:
    return SupportDatabase.from_payload(WEB_FEATURES_PAYLOAD)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BASELINESCAN_DATA", raising=False)
    monkeypatch.delenv("BASELINESCAN_DEBUG", raising=False)
