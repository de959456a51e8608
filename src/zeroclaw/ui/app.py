"""Textual TUI entrypoint for the onboarding wizard."""

from __future__ import annotations

from textual.app import App

from zeroclaw.ui.screens import WizardScreen
from zeroclaw.wizard.flow import ModelFetcher
from zeroclaw.wizard.state import WizardState


class WizardUIError(RuntimeError):
    """The TUI stopped on an unhandled error; the terminal is already restored."""


class WizardApp(App[WizardState]):
    CSS_PATH = "styles.tcss"
    TITLE = "zeroclaw onboard"

    def __init__(self, state: WizardState, fetcher: ModelFetcher | None = None) -> None:
        super().__init__()
        self.state = state
        self.fetcher = fetcher

    async def on_mount(self) -> None:
        await self.push_screen(WizardScreen(self.state, self.fetcher))


def run_tui_wizard(state: WizardState, fetcher: ModelFetcher | None = None) -> WizardState:
    """Run the full-screen wizard; returns once done, cancelled or quit.

    Textual owns raw mode and the alternate screen and releases both on
    every exit path before this function returns or raises.
    """
    app = WizardApp(state, fetcher)
    app.run()
    if app.return_code not in (None, 0):
        raise WizardUIError(f"Wizard UI exited with code {app.return_code}")
    return state
