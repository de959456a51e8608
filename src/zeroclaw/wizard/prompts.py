"""Line-prompt front end for the wizard, for terminals without a TUI."""

from __future__ import annotations

import asyncio

import typer

from zeroclaw.memory import backend_key_from_choice, memory_backend_profile
from zeroclaw.tunnel import TunnelChoice
from zeroclaw.ui.progress import status_spinner
from zeroclaw.ui.render import (
    render_info,
    render_options,
    render_step_header,
    render_summary_table,
    render_warning,
)
from zeroclaw.wizard.flow import ModelFetcher, advance, apply_model_catalog, fetch_model_catalog
from zeroclaw.wizard.state import WizardState, WizardStep
from zeroclaw.wizard.steps import (
    INFO,
    SECRET,
    SELECT,
    TEXT,
    field_prompt,
    get_step,
    options_for,
    step_position,
    summary_rows,
)


def _prompt_index(prompt: str, count: int, default: int) -> int:
    while True:
        response = typer.prompt(f"{prompt} (1-{count})", default=str(default + 1))
        try:
            value = int(response)
        except ValueError:
            render_warning("Please enter a number.")
            continue
        if 1 <= value <= count:
            return value - 1
        render_warning(f"Choose a number between 1 and {count}.")


def _prompt_line(prompt: str, *, secret: bool = False, default: str = "") -> str:
    response = typer.prompt(prompt, default=default, show_default=bool(default), hide_input=secret)
    return response.strip()


def _prompt_yes_no(prompt: str, default: bool = False) -> bool:
    default_value = "y" if default else "n"
    while True:
        response = typer.prompt(f"{prompt} (y/n)", default=default_value)
        normalized = response.strip().lower()
        if normalized in {"y", "yes"}:
            return True
        if normalized in {"n", "no"}:
            return False
        render_warning("Please enter y or n.")


def _resolve_models(state: WizardState, fetcher: ModelFetcher | None) -> None:
    request = state.pending_models
    if request is None:
        return
    with status_spinner(f"Fetching models for {request.provider}"):
        result = asyncio.run(fetch_model_catalog(request, fetcher))
    apply_model_catalog(state, result)
    render_info(state.status_message)


def _ask(state: WizardState, fetcher: ModelFetcher | None) -> None:
    step_id = state.step
    step = get_step(step_id)
    index, total = step_position(step_id)
    render_step_header(index, total, step.title, step.description)

    if step_id == WizardStep.WORKSPACE_SETUP:
        state.use_default_workspace = _prompt_yes_no(f"Use default workspace ({state.workspace_dir})?", True)
        if not state.use_default_workspace:
            state.set_text(step_id, _prompt_line("Workspace path", default=step.placeholder))
        return
    if step_id == WizardStep.SECRETS_ENCRYPT_CHOICE:
        state.secrets_encrypt = _prompt_yes_no("Encrypt secrets?", state.secrets_encrypt)
        return
    if step_id == WizardStep.TUNNEL_PRIMARY_ENTRY and state.tunnel_choice == TunnelChoice.TAILSCALE:
        state.tunnel_toggle = _prompt_yes_no("Enable Tailscale Funnel (public access)?", state.tunnel_toggle)
        return
    if step_id == WizardStep.CONFIRMATION:
        render_summary_table(summary_rows(state), title="Review")
        if not _prompt_yes_no("Write this configuration?", True):
            state.cancelled = True
        return
    if step.kind == SELECT:
        if step_id == WizardStep.MODEL_SELECTION:
            _resolve_models(state, fetcher)
        options = options_for(state, step_id)
        render_options(options, state.selected(step_id))
        state.select(step_id, _prompt_index("Choice", len(options), state.selected(step_id)))
        if step_id == WizardStep.HARDWARE_SELECTION:
            state.hardware_datasheets = _prompt_yes_no("Index datasheets into the workspace?", state.hardware_datasheets)
        elif step_id == WizardStep.MEMORY_SELECTION:
            backend = backend_key_from_choice(state.selected(step_id))
            default = memory_backend_profile(backend).auto_save_default
            state.memory_auto_save = _prompt_yes_no("Auto-save conversations to memory?", default)
            state.memory_auto_save_overridden = True
        return
    if step.kind in (TEXT, SECRET):
        state.set_text(step_id, _prompt_line(field_prompt(state, step_id), secret=step.kind == SECRET))
        return
    if step.kind == INFO:
        typer.prompt("Press Enter to continue", default="", show_default=False)


def run_prompt_wizard(state: WizardState, fetcher: ModelFetcher | None = None) -> WizardState:
    """Drive the step graph with typer prompts until done or cancelled."""
    while not state.finished and not state.cancelled:
        previous = state.step
        _ask(state, fetcher)
        if state.cancelled:
            break
        if advance(state) == previous:
            render_warning("A value is required to continue.")
    return state
