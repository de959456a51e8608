"""Render helpers for the zeroclaw CLI."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from zeroclaw.ui.console import get_console


def render_banner(title: str, subtitle: str) -> None:
    console = get_console()
    panel = Panel(
        Group(Text(subtitle, style="subtitle")),
        title=Text(title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)
    console.print()


def render_step_header(
    step_idx: int | None,
    step_total: int | None,
    title: str,
    description: str,
) -> None:
    console = get_console()
    if step_idx is not None and step_total is not None:
        panel_title = f"Step {step_idx}/{step_total} · {title}"
    else:
        panel_title = title
    content = []
    if description:
        content.append(Text(description, style="subtitle"))
    panel = Panel(
        Group(*content),
        title=Text(panel_title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_options(options: Sequence[str], selected: int) -> None:
    console = get_console()
    for index, label in enumerate(options, start=1):
        marker = "[x]" if index - 1 == selected else "[ ]"
        style = "selected" if index - 1 == selected else "value"
        console.print(Text(f"{index:>2} {marker} {label}", style=style))


def render_info(text: str) -> None:
    console = get_console()
    console.print(text, style="info", markup=False)


def render_warning(text: str) -> None:
    console = get_console()
    console.print(text, style="warning", markup=False)


def render_success(text: str) -> None:
    console = get_console()
    console.print(text, style="success", markup=False)


def render_error(text: str) -> None:
    console = get_console()
    panel = Panel(
        Text(text, style="error"),
        box=box.ROUNDED,
        border_style="error",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_summary_table(rows: Mapping[str, str] | Sequence[tuple[str, str]], title: str = "Summary") -> None:
    console = get_console()
    table = Table(
        show_header=False,
        box=None,
        pad_edge=False,
    )
    table.add_column(style="label", no_wrap=True, justify="right")
    table.add_column(style="value")

    items = rows.items() if hasattr(rows, "items") else rows
    for key, value in items:
        label = Text(str(key), style="label")
        value_text = Text(str(value), style="value")
        if str(key).lower() in {"config", "workspace"}:
            value_text.stylize("path")
        table.add_row(label, value_text)

    panel = Panel(
        table,
        title=Text(title, style="step"),
        title_align="left",
        border_style="border",
        box=box.ROUNDED,
        padding=(0, 2),
        expand=True,
    )
    console.print()
    console.print(panel)


def render_validation_panel(title: str, issues: Sequence[str], *, style: str) -> None:
    console = get_console()
    lines = []
    for issue in issues:
        lines.append(Text(f"- {issue}", style=style))
    panel = Panel(
        Group(*lines),
        title=Text(title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_lines(title: str, lines: Sequence[str]) -> None:
    console = get_console()
    panel = Panel(
        Group(*[Text(line, style="value") for line in lines]),
        title=Text(title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)
