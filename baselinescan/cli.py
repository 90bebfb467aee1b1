"""Console script for baselinescan."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from ._version import __version__ as _version
from .constants import DATA_PATH_ENV, DEFAULT_TIMEOUT_SECONDS
from .exceptions import BaselineScanError
from .http import use_shared_client
from .render_basic import render_scan
from .scan import scan_url
from .support_data import load_support_database
from .util.html import debug_enabled


def _configure_logging() -> None:
    logger = logging.getLogger("baselinescan")
    logger.setLevel(logging.DEBUG if debug_enabled() else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@click.argument("url", metavar="<url>", type=click.STRING)
@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(_version, "-v", "--version")
@click.option(
    "--data",
    "data_path",
    metavar="PATH",
    envvar=DATA_PATH_ENV,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Local web-features data.json (downloaded when omitted).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the scan result as JSON.")
@click.option(
    "--html-out",
    metavar="FILE",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the highlighted HTML to FILE.",
)
@click.option("--full", is_flag=True, help="Include feature descriptions.")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT_SECONDS,
    show_default=True,
    help="Page request timeout in seconds.",
)
def main(
    url: str,
    data_path: Path | None,
    as_json: bool,
    html_out: Path | None,
    full: bool,
    timeout: float,
) -> None:
    """
    Scan a web page for Baseline web-platform features

    \b
    Example usages:
        baselinescan https://example.com
        baselinescan https://example.com --full
        baselinescan https://example.com --json --html-out highlighted.html
    """
    _configure_logging()
    try:
        with use_shared_client(timeout=timeout):
            database = load_support_database(data_path)
            result = scan_url(url, database, timeout=timeout)
    except BaselineScanError as exc:
        raise click.ClickException(str(exc)) from exc

    if html_out is not None:
        html_out.write_text(result.highlighted_html, encoding="utf-8")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    Console().print(render_scan(result, full=full))
