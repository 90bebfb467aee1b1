"""Rich renderer for scan results."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .constants import STATUS_ICON_MAP, STATUS_STYLE_MAP, UNKNOWN_STATUS
from .model import BaselineSummary, ResolvedFeature, ScanResult
from .util.text import ellipsize

FULL_MODE_HINT = "Run with --full to see feature descriptions."


def _summary_line(summary: BaselineSummary) -> Text:
    line = Text(f"{summary.total} features: ")
    line.append(f"✅ {summary.widely_available} widely", style="green")
    line.append("  ")
    line.append(f"⚡ {summary.newly_available} newly", style="yellow")
    line.append("  ")
    line.append(f"❌ {summary.limited_availability} limited", style="red")
    return line


def _status_cell(feature: ResolvedFeature) -> Text:
    icon = STATUS_ICON_MAP.get(feature.status, STATUS_ICON_MAP[UNKNOWN_STATUS])
    style = STATUS_STYLE_MAP.get(feature.status, STATUS_STYLE_MAP[UNKNOWN_STATUS])
    return Text(f"{icon} {feature.status}", style=style)


def _feature_table(features: list[ResolvedFeature]) -> Table:
    table = Table(expand=True, show_lines=False)
    table.add_column("Feature", style="bold")
    table.add_column("Status")
    table.add_column("Origin")
    table.add_column("Selector", style="cyan")
    for feature in features:
        table.add_row(
            Text(feature.name),
            _status_cell(feature),
            "CSS" if feature.is_css_feature else "HTML",
            Text(feature.selector or ""),
        )
    return table


def render_scan(result: ScanResult, *, full: bool = False) -> Group:
    """Render a scan result as a Rich renderable group."""
    lines: list[object] = []

    lines.append(_summary_line(result.summary))
    lines.append(
        Text(
            f"HTML {result.html_length} bytes, CSS {result.css_length} bytes "
            f"({result.stylesheets} stylesheets, {result.inline_blocks} inline blocks)",
            style="dim",
        )
    )
    for warning in result.warnings:
        lines.append(Text(warning, style="yellow"))

    lines.append(Text(""))
    if result.baseline_features:
        lines.append(_feature_table(result.baseline_features))
    else:
        lines.append(Text("No Baseline features detected.", style="dim"))

    if full:
        described = [f for f in result.baseline_features if f.description]
        if described:
            lines.append(Text(""))
            lines.append(Text("Descriptions", style="bold"))
        for feature in described:
            line = Text(f"{feature.name}: ", style="bold")
            line.append(ellipsize(feature.plain_description(), 240), style="not bold")
            lines.append(line)
    elif result.baseline_features:
        lines.append(Text(""))
        lines.append(Text(FULL_MODE_HINT, style="dim"))

    return Group(Panel(Group(*lines), border_style="blue", title=Text(result.url)))
