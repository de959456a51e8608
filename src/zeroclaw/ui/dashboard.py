"""Textual app for the read-only dashboard."""

from __future__ import annotations

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Static

from zeroclaw.config import Config
from zeroclaw.dashboard.actions import run
from zeroclaw.dashboard.state import DashboardState, MenuItem


class DashboardApp(App):
    CSS_PATH = "styles.tcss"
    TITLE = "zeroclaw dashboard"
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("escape", "quit", "Quit"),
        ("up", "move(-1)", "Up"),
        ("down", "move(1)", "Down"),
        ("enter", "run_selected", "Run"),
    ]

    def __init__(self, config: Config, state: DashboardState | None = None) -> None:
        super().__init__()
        self.config = config
        self.dashboard = state or DashboardState()

    def compose(self) -> ComposeResult:
        with Horizontal(id="dashboard-layout"):
            self.menu = Static("", id="dashboard-menu")
            self.menu.border_title = "Menu"
            yield self.menu
            with VerticalScroll(id="dashboard-output"):
                self.output = Static("")
                yield self.output
        yield Static("↑↓ select · enter run · q quit", id="key-hint")

    def on_mount(self) -> None:
        self._render()

    def action_move(self, delta: int) -> None:
        self.dashboard.move(delta)
        self._render()

    def action_run_selected(self) -> None:
        item = self.dashboard.selected_item()
        self.dashboard.output = [item.title, "", "Running..."]
        self._render()
        self.run_worker(self._run_item(item), exclusive=True)

    async def _run_item(self, item: MenuItem) -> None:
        self.dashboard.output = await run(item, self.config)
        self._render()

    def _render(self) -> None:
        menu_lines = [
            f"{'›' if index == self.dashboard.selected else ' '} {item.title}"
            for index, item in enumerate(self.dashboard.items)
        ]
        self.menu.update(Text("\n".join(menu_lines)))
        self.output.update(Text("\n".join(self.dashboard.output)))


def run_dashboard(config: Config) -> None:
    DashboardApp(config).run()
