"""Translate key presses into wizard intents and apply them."""

from __future__ import annotations

from enum import Enum
import logging

from zeroclaw.memory import backend_key_from_choice, memory_backend_profile
from zeroclaw.tunnel import TunnelChoice
from zeroclaw.wizard.flow import advance
from zeroclaw.wizard.state import WizardState, WizardStep
from zeroclaw.wizard.steps import accepts_text, options_for

logger = logging.getLogger(__name__)

BACKSPACE = "\b"


class Intent(str, Enum):
    CONFIRM = "confirm"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    TOGGLE_OPTION = "toggle_option"
    TEXT_INPUT = "text_input"
    CANCEL = "cancel"


def dispatch(state: WizardState, intent: Intent, char: str | None = None) -> WizardStep:
    """Apply ``intent`` to the store and return the (possibly new) step.

    ``char`` carries the edit for ``TEXT_INPUT``: a printable character to
    append, or ``BACKSPACE`` to drop the last one.
    """
    if state.cancelled or state.finished:
        return state.step
    if intent == Intent.CONFIRM:
        return advance(state)
    if intent == Intent.CANCEL:
        state.cancelled = True
        logger.info("Wizard cancelled at %s", state.step.value)
        return state.step
    if intent in (Intent.MOVE_UP, Intent.MOVE_DOWN):
        _move(state, -1 if intent == Intent.MOVE_UP else 1)
    elif intent == Intent.TOGGLE_OPTION:
        _toggle(state)
    elif intent == Intent.TEXT_INPUT and char:
        _edit_text(state, char)
    return state.step


def _move(state: WizardState, delta: int) -> None:
    step = state.step
    if step == WizardStep.WORKSPACE_SETUP:
        state.use_default_workspace = delta < 0
        return
    count = len(options_for(state, step))
    if count == 0:
        return
    current = state.selected(step)
    target = current + delta
    if target < 0 or target > count - 1:
        return
    state.select(step, target)
    if step == WizardStep.MEMORY_SELECTION:
        state.memory_auto_save = memory_backend_profile(backend_key_from_choice(target)).auto_save_default
        state.memory_auto_save_overridden = False


def _toggle(state: WizardState) -> None:
    step = state.step
    if step == WizardStep.WORKSPACE_SETUP:
        state.use_default_workspace = not state.use_default_workspace
    elif step == WizardStep.TUNNEL_PRIMARY_ENTRY and state.tunnel_choice == TunnelChoice.TAILSCALE:
        state.tunnel_toggle = not state.tunnel_toggle
    elif step == WizardStep.SECRETS_ENCRYPT_CHOICE:
        state.secrets_encrypt = not state.secrets_encrypt
    elif step == WizardStep.HARDWARE_SELECTION:
        state.hardware_datasheets = not state.hardware_datasheets
    elif step == WizardStep.MEMORY_SELECTION:
        state.memory_auto_save = not state.memory_auto_save
        state.memory_auto_save_overridden = True


def _edit_text(state: WizardState, char: str) -> None:
    step = state.step
    if not accepts_text(state, step):
        return
    buffer = state.raw_text(step)
    if char == BACKSPACE:
        state.set_text(step, buffer[:-1])
    elif char.isprintable():
        state.set_text(step, buffer + char)


def intent_for_key(state: WizardState, key: str, character: str | None = None) -> tuple[Intent, str | None] | None:
    """Map a terminal key event onto an intent, or ``None`` to ignore it."""
    typing = accepts_text(state, state.step)
    if key == "enter":
        return Intent.CONFIRM, None
    if key in ("escape", "ctrl+c"):
        return Intent.CANCEL, None
    if key == "up":
        return Intent.MOVE_UP, None
    if key == "down":
        return Intent.MOVE_DOWN, None
    if key == "tab":
        return Intent.TOGGLE_OPTION, None
    if key == "backspace":
        return (Intent.TEXT_INPUT, BACKSPACE) if typing else None
    if key == "space":
        return (Intent.TEXT_INPUT, " ") if typing else (Intent.TOGGLE_OPTION, None)
    if typing and character and character.isprintable():
        return Intent.TEXT_INPUT, character
    if key == "q":
        return Intent.CANCEL, None
    return None
