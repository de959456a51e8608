"""Rich theme for the zeroclaw CLI."""

from __future__ import annotations

from rich.theme import Theme

THEME = Theme(
    {
        "accent": "bright_cyan",
        "title": "bold bright_cyan",
        "subtitle": "dim",
        "step": "bold bright_cyan",
        "border": "grey50",
        "info": "dim",
        "warning": "yellow3",
        "success": "green3",
        "error": "bold red3",
        "label": "dim",
        "value": "white",
        "path": "cyan",
        "selected": "bold bright_cyan",
        "disabled": "grey42",
    }
)
