"""Textual screen for the onboarding wizard."""

from __future__ import annotations

import asyncio
import logging

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Static

from zeroclaw.tunnel import TunnelChoice
from zeroclaw.wizard.flow import ModelCatalogResult, ModelFetcher, apply_model_catalog, fetch_model_catalog
from zeroclaw.wizard.router import dispatch, intent_for_key
from zeroclaw.wizard.state import ModelRequest, WizardState, WizardStep
from zeroclaw.wizard.steps import (
    SECRET,
    SELECT,
    field_prompt,
    get_step,
    options_for,
    step_position,
    summary_rows,
)

logger = logging.getLogger(__name__)

CURSOR = "▏"


def _footer_hint() -> Static:
    return Static("↑↓ navigate · tab/space toggle · enter confirm · esc cancel", id="key-hint")


def _checkbox(flag: bool, label: str) -> str:
    return f"{'[x]' if flag else '[ ]'} {label}"


def _option_lines(options: list[str], selected: int) -> list[str]:
    return [f"{'›' if index == selected else ' '} {label}" for index, label in enumerate(options)]


def _buffer_line(state: WizardState, step_id: WizardStep) -> str:
    value = state.raw_text(step_id)
    if get_step(step_id).kind == SECRET and value:
        value = "•" * len(value)
    if not value and get_step(step_id).placeholder:
        return f"> {CURSOR}  ({get_step(step_id).placeholder})"
    return f"> {value}{CURSOR}"


def step_body(state: WizardState) -> list[str]:
    """Plain-text lines describing the current step's inputs."""
    step_id = state.step
    step = get_step(step_id)
    if step_id == WizardStep.WELCOME:
        found = "found" if state.config_exists() else "not found"
        return [
            step.description,
            "",
            f"Config: {state.config_path} ({found})",
            "",
            "Press Enter to begin.",
        ]
    if step_id == WizardStep.WORKSPACE_SETUP:
        lines = [
            f"{'(•)' if state.use_default_workspace else '( )'} Default: {state.workspace_dir}",
            f"{'( )' if state.use_default_workspace else '(•)'} Custom path",
        ]
        if not state.use_default_workspace:
            lines.extend(["", _buffer_line(state, step_id)])
        return lines
    if step_id == WizardStep.MODEL_SELECTION and state.loading:
        return [f"Fetching models for {state.provider}..."]
    if step_id == WizardStep.SECRETS_ENCRYPT_CHOICE:
        return [_checkbox(state.secrets_encrypt, "Encrypt secrets at rest")]
    if step_id == WizardStep.TUNNEL_PRIMARY_ENTRY and state.tunnel_choice == TunnelChoice.TAILSCALE:
        return [_checkbox(state.tunnel_toggle, "Enable Funnel (public access)")]
    if step_id == WizardStep.CONFIRMATION:
        width = max(len(label) for label, _ in summary_rows(state))
        lines = [f"{label.rjust(width)}  {value}" for label, value in summary_rows(state)]
        return lines + ["", "Press Enter to write the configuration."]
    if step.kind == SELECT:
        lines = _option_lines(options_for(state, step_id), state.selected(step_id))
        if step_id == WizardStep.HARDWARE_SELECTION:
            lines.extend(["", _checkbox(state.hardware_datasheets, "Index datasheets into the workspace (tab)")])
        elif step_id == WizardStep.MEMORY_SELECTION:
            lines.extend(["", _checkbox(state.memory_auto_save, "Auto-save conversations (tab)")])
        return lines
    return [field_prompt(state, step_id), "", _buffer_line(state, step_id)]


class WizardScreen(Screen):
    """Single surface redrawn from the answer store after every key."""

    def __init__(self, state: WizardState, fetcher: ModelFetcher | None = None) -> None:
        super().__init__()
        self.state = state
        self.fetcher = fetcher
        self._inflight: ModelRequest | None = None

    def compose(self) -> ComposeResult:
        self.surface = Container(id="wizard-surface", classes="surface")
        with self.surface:
            self.description = Static("", id="wizard-description")
            yield self.description
            self.body = Static("", id="wizard-body")
            yield self.body
            self.status = Static("", id="wizard-status")
            yield self.status
        yield _footer_hint()

    def on_mount(self) -> None:
        self.result_queue: asyncio.Queue[ModelCatalogResult] = asyncio.Queue()
        self.set_interval(0.2, self._drain_results)
        self._refresh()

    def on_key(self, event: events.Key) -> None:
        routed = intent_for_key(self.state, event.key, event.character)
        if routed is None:
            return
        event.stop()
        intent, char = routed
        dispatch(self.state, intent, char)
        if self.state.cancelled or self.state.finished:
            self.app.exit(self.state)
            return
        self._start_fetch()
        self._refresh()

    def _start_fetch(self) -> None:
        request = self.state.pending_models
        if request is None or request == self._inflight:
            return
        self._inflight = request
        self.run_worker(self._fetch_models(request), group="models", exclusive=True)

    async def _fetch_models(self, request: ModelRequest) -> None:
        result = await fetch_model_catalog(request, self.fetcher)
        self.result_queue.put_nowait(result)

    def _drain_results(self) -> None:
        changed = False
        while not self.result_queue.empty():
            result = self.result_queue.get_nowait()
            changed = apply_model_catalog(self.state, result) or changed
            if result.request == self._inflight:
                self._inflight = None
        if changed:
            self._refresh()

    def _refresh(self) -> None:
        step = get_step(self.state.step)
        index, total = step_position(self.state.step)
        title = step.title if index is None else f"Step {index}/{total} · {step.title}"
        self.surface.border_title = title
        self.description.update(Text(step.description, style="dim"))
        self.body.update(Text("\n".join(step_body(self.state))))
        self.status.update(Text(self.state.status_message, style="dim"))
