from __future__ import annotations

from zeroclaw.tunnel import TunnelChoice
from zeroclaw.wizard.router import BACKSPACE, Intent, dispatch, intent_for_key
from zeroclaw.wizard.state import WizardState, WizardStep


def test_moves_clamp_without_wrapping(state: WizardState) -> None:
    state.step = WizardStep.TUNNEL_SELECTION
    dispatch(state, Intent.MOVE_UP)
    assert state.selected(WizardStep.TUNNEL_SELECTION) == 0
    for _ in range(10):
        dispatch(state, Intent.MOVE_DOWN)
    assert state.selected(WizardStep.TUNNEL_SELECTION) == len(TunnelChoice) - 1


def test_text_editing(state: WizardState) -> None:
    state.step = WizardStep.MODEL_CUSTOM_ENTRY
    for char in "gpt-x":
        dispatch(state, Intent.TEXT_INPUT, char)
    dispatch(state, Intent.TEXT_INPUT, BACKSPACE)
    assert state.raw_text(WizardStep.MODEL_CUSTOM_ENTRY) == "gpt-"

    state.step = WizardStep.TUNNEL_SELECTION
    dispatch(state, Intent.TEXT_INPUT, "z")
    assert state.raw_text(WizardStep.TUNNEL_SELECTION) == ""


def test_workspace_toggle_gates_typing(state: WizardState) -> None:
    state.step = WizardStep.WORKSPACE_SETUP
    dispatch(state, Intent.TEXT_INPUT, "x")
    assert state.raw_text(WizardStep.WORKSPACE_SETUP) == ""
    dispatch(state, Intent.MOVE_DOWN)
    assert not state.use_default_workspace
    dispatch(state, Intent.TEXT_INPUT, "x")
    assert state.raw_text(WizardStep.WORKSPACE_SETUP) == "x"
    dispatch(state, Intent.TOGGLE_OPTION)
    assert state.use_default_workspace


def test_toggles(state: WizardState) -> None:
    state.step = WizardStep.SECRETS_ENCRYPT_CHOICE
    dispatch(state, Intent.TOGGLE_OPTION)
    assert state.secrets_encrypt is False

    state.step = WizardStep.HARDWARE_SELECTION
    dispatch(state, Intent.TOGGLE_OPTION)
    assert state.hardware_datasheets is True

    state.step = WizardStep.TUNNEL_PRIMARY_ENTRY
    state.tunnel_choice = TunnelChoice.TAILSCALE
    dispatch(state, Intent.TOGGLE_OPTION)
    assert state.tunnel_toggle is True
    dispatch(state, Intent.TEXT_INPUT, "x")
    assert state.raw_text(WizardStep.TUNNEL_PRIMARY_ENTRY) == ""


def test_memory_move_resets_auto_save(state: WizardState) -> None:
    state.step = WizardStep.MEMORY_SELECTION
    dispatch(state, Intent.TOGGLE_OPTION)
    assert state.memory_auto_save is False
    assert state.memory_auto_save_overridden
    dispatch(state, Intent.MOVE_DOWN)
    assert state.memory_auto_save is True
    assert not state.memory_auto_save_overridden


def test_cancel_freezes_state(state: WizardState) -> None:
    dispatch(state, Intent.CANCEL)
    assert state.cancelled
    dispatch(state, Intent.CONFIRM)
    assert state.step == WizardStep.WELCOME


def test_key_mapping(state: WizardState) -> None:
    state.step = WizardStep.TUNNEL_SELECTION
    assert intent_for_key(state, "enter") == (Intent.CONFIRM, None)
    assert intent_for_key(state, "escape") == (Intent.CANCEL, None)
    assert intent_for_key(state, "q", "q") == (Intent.CANCEL, None)
    assert intent_for_key(state, "space", " ") == (Intent.TOGGLE_OPTION, None)
    assert intent_for_key(state, "backspace") is None
    assert intent_for_key(state, "x", "x") is None

    state.step = WizardStep.API_KEY_ENTRY
    assert intent_for_key(state, "q", "q") == (Intent.TEXT_INPUT, "q")
    assert intent_for_key(state, "space", " ") == (Intent.TEXT_INPUT, " ")
    assert intent_for_key(state, "backspace") == (Intent.TEXT_INPUT, BACKSPACE)
