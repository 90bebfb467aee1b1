"""HTTP client layer for pybaselinescan."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
import concurrent.futures
from contextlib import contextmanager
import contextvars
from contextvars import ContextVar
import json
import logging
from typing import Any

import httpx

from ._version import __version__
from .constants import (
    DATA_TIMEOUT_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_CSS_BYTES,
    MAX_HTML_BYTES,
    MAX_STYLESHEET_WORKERS,
    STYLESHEET_TIMEOUT_SECONDS,
    USER_AGENT,
    WEB_FEATURES_DATA_URL,
)
from .exceptions import (
    BaselineScanError,
    ContentError,
    ContentTooLargeError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
)
from .model import StylesheetLink
from .util.text import byte_length

LOGGER = logging.getLogger(__name__)

_SHARED_CLIENT: ContextVar[httpx.Client | None] = ContextVar(
    "pybaselinescan_shared_client", default=None
)


def _build_headers(accept: str = "text/html,application/xhtml+xml") -> dict[str, str]:
    return {
        "User-Agent": USER_AGENT.format(version=__version__),
        "Accept": accept,
    }


@contextmanager
def use_shared_client(
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Iterator[httpx.Client]:
    """Provide a reusable HTTP client for all fetches within a CLI run."""
    with httpx.Client(timeout=timeout, follow_redirects=True, headers=_build_headers()) as client:
        token = _SHARED_CLIENT.set(client)
        try:
            yield client
        finally:
            _SHARED_CLIENT.reset(token)


def _read_body(response: httpx.Response, max_bytes: int | None) -> str:
    """Read a streamed body, aborting as soon as it passes ``max_bytes``."""
    if response.status_code != 200:
        raise HttpStatusError(response.status_code, str(response.url))

    chunks: list[bytes] = []
    size = 0
    for chunk in response.iter_bytes():
        size += len(chunk)
        if max_bytes is not None and size > max_bytes:
            raise ContentTooLargeError(str(response.url), size, max_bytes)
        chunks.append(chunk)

    return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")


def _get(url: str, *, timeout: float, accept: str, max_bytes: int | None = None) -> str:
    """GET a text body with deterministic behavior and friendly failures."""
    shared_client = _SHARED_CLIENT.get()
    headers = _build_headers(accept)
    retry_once = True
    while True:
        try:
            if shared_client is None:
                with httpx.Client(
                    timeout=timeout, follow_redirects=True, headers=headers
                ) as client, client.stream("GET", url) as response:
                    return _read_body(response, max_bytes)
            with shared_client.stream(
                "GET", url, headers=headers, timeout=timeout
            ) as response:
                return _read_body(response, max_bytes)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(url) from exc
        except httpx.ConnectError as exc:
            if retry_once:
                retry_once = False
                continue
            raise NetworkError(url, cause=exc.__class__.__name__) from exc
        except httpx.RequestError as exc:
            raise NetworkError(url, cause=exc.__class__.__name__) from exc


def fetch_html(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Fetch the page to scan, capped at MAX_HTML_BYTES."""
    body = _get(
        url,
        timeout=timeout,
        accept="text/html,application/xhtml+xml",
        max_bytes=MAX_HTML_BYTES,
    )
    if not body.strip():
        raise ContentError(url, detail="empty HTML content")
    return body


def fetch_stylesheet(
    url: str,
    timeout: float = STYLESHEET_TIMEOUT_SECONDS,
    *,
    cross_origin: bool = False,
) -> str:
    """Fetch a stylesheet; cross-origin failures yield an empty string."""
    try:
        # Servers often mislabel CSS, so the content type is not checked.
        return _get(url, timeout=timeout, accept="text/css,*/*;q=0.1", max_bytes=MAX_CSS_BYTES)
    except BaselineScanError as exc:
        if cross_origin:
            LOGGER.debug("Cross-origin stylesheet %s skipped: %s", url, exc)
            return ""
        raise


def _fetch_link(link: StylesheetLink, timeout: float) -> str:
    try:
        return fetch_stylesheet(link.url, timeout, cross_origin=link.cross_origin)
    except BaselineScanError as exc:
        LOGGER.warning("Stylesheet %s could not be fetched: %s", link.url, exc)
        return ""


def fetch_stylesheets(
    links: Sequence[StylesheetLink],
    timeout: float = STYLESHEET_TIMEOUT_SECONDS,
    *,
    max_workers: int = MAX_STYLESHEET_WORKERS,
) -> list[str]:
    """Fetch stylesheets in parallel, returning texts in link order.

    Every link fails independently: an error contributes an empty string.
    Sheets that would push the combined size past MAX_CSS_BYTES are dropped.
    """
    if not links:
        return []

    results: list[str] = [""] * len(links)
    with concurrent.futures.ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(links)))
    ) as executor:
        future_to_index = {
            executor.submit(contextvars.copy_context().run, _fetch_link, link, timeout): index
            for index, link in enumerate(links)
        }
        for future in concurrent.futures.as_completed(future_to_index):
            results[future_to_index[future]] = future.result()

    total = 0
    for index, body in enumerate(results):
        size = byte_length(body)
        if total + size > MAX_CSS_BYTES:
            LOGGER.warning(
                "Stylesheet %s dropped: combined CSS would exceed %d bytes",
                links[index].url,
                MAX_CSS_BYTES,
            )
            results[index] = ""
            continue
        total += size
    return results


def fetch_support_payload(
    url: str = WEB_FEATURES_DATA_URL,
    timeout: float = DATA_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    """Download the web-features data.json payload."""
    raw = _get(url, timeout=timeout, accept="application/json")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ContentError(url, detail="invalid JSON") from exc
    if not isinstance(payload, dict):
        raise ContentError(url, detail="unexpected JSON payload")
    return payload
