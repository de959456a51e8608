"""Wizard step registry: titles, input kinds and option labels."""

from __future__ import annotations

from dataclasses import dataclass

from zeroclaw.catalog import CUSTOM_MODEL_SENTINEL, curated_models_for_provider
from zeroclaw.channels import CHANNEL_FIELD_PROMPTS, ChannelChoice
from zeroclaw.hardware import HARDWARE_CHOICES
from zeroclaw.memory import selectable_memory_backends
from zeroclaw.tunnel import TUNNEL_FIELD_PROMPTS, TunnelChoice
from zeroclaw.wizard.state import OnboardingMode, ToolModeChoice, WizardState, WizardStep
from zeroclaw.workspace import STYLE_LABELS

INFO = "info"
SELECT = "select"
TEXT = "text"
SECRET = "secret"
TOGGLE = "toggle"

CONFIG_MODE_OPTIONS = ["Full onboarding (overwrite config)", "Update provider only (keep everything else)"]
TOOL_MODE_OPTIONS = ["Sovereign (local only)", "Composio (managed OAuth)"]
CUSTOM_MODEL_LABEL = "Custom model id..."


@dataclass(frozen=True)
class Step:
    step_id: WizardStep
    title: str
    description: str
    kind: str
    placeholder: str = ""


_REGISTRY: dict[WizardStep, Step] = {}


def register_step(step: Step) -> None:
    _REGISTRY[step.step_id] = step


def get_step(step_id: WizardStep) -> Step:
    return _REGISTRY[step_id]


for _step in (
    Step(WizardStep.WELCOME, "Welcome", "Set up your zeroclaw agent in a few steps.", INFO),
    Step(
        WizardStep.CONFIG_MODE_SELECTION,
        "Existing configuration",
        "A config already exists. Choose how much of it to replace.",
        SELECT,
    ),
    Step(
        WizardStep.WORKSPACE_SETUP,
        "Workspace",
        "Where the agent keeps its config, memory and personalization files.",
        TOGGLE,
        "~/agents/my-agent",
    ),
    Step(WizardStep.PROVIDER_TIER_SELECTION, "Provider category", "Pick a group of model providers.", SELECT),
    Step(WizardStep.PROVIDER_SELECTION, "Provider", "Pick the provider that serves your model.", SELECT),
    Step(
        WizardStep.CUSTOM_PROVIDER_URL_ENTRY,
        "Custom provider",
        "Base URL of an OpenAI-compatible API.",
        TEXT,
        "https://my-gateway.example.com/v1",
    ),
    Step(
        WizardStep.PROVIDER_ENDPOINT_ENTRY,
        "Provider endpoint",
        "Base URL of your self-hosted server.",
        TEXT,
        "http://localhost:8000/v1",
    ),
    Step(WizardStep.API_KEY_ENTRY, "API key", "Leave blank for local providers that need no key.", SECRET),
    Step(WizardStep.MODEL_SELECTION, "Model", "Curated and live models for this provider.", SELECT),
    Step(WizardStep.MODEL_CUSTOM_ENTRY, "Custom model", "Exact model id as the provider expects it.", TEXT),
    Step(WizardStep.CHANNEL_SELECTION, "Channel", "Where the agent talks to you besides the CLI.", SELECT),
    Step(WizardStep.CHANNEL_TOKEN_ENTRY, "Channel credentials", "Primary credential for the channel.", SECRET),
    Step(WizardStep.CHANNEL_AUX_ENTRY, "Channel settings", "Second field for the channel.", TEXT),
    Step(WizardStep.TUNNEL_SELECTION, "Tunnel", "Expose the gateway beyond this machine.", SELECT),
    Step(WizardStep.TUNNEL_PRIMARY_ENTRY, "Tunnel credentials", "Primary tunnel setting.", SECRET),
    Step(WizardStep.TUNNEL_SECONDARY_ENTRY, "Tunnel settings", "Optional tunnel setting.", TEXT),
    Step(WizardStep.TOOL_MODE_SELECTION, "Tool mode", "How the agent reaches external services.", SELECT),
    Step(WizardStep.COMPOSIO_API_KEY_ENTRY, "Composio", "Composio API key (optional).", SECRET),
    Step(
        WizardStep.SECRETS_ENCRYPT_CHOICE,
        "Secrets",
        "Encrypt API keys and tokens stored on disk.",
        TOGGLE,
    ),
    Step(WizardStep.HARDWARE_SELECTION, "Hardware", "Physical devices the agent may control.", SELECT),
    Step(WizardStep.MEMORY_SELECTION, "Memory", "How the agent stores long-term memory.", SELECT),
    Step(WizardStep.PROJECT_USER_ENTRY, "Your name", "How the agent should address you.", TEXT, "$USER"),
    Step(WizardStep.PROJECT_TIMEZONE_ENTRY, "Timezone", "IANA timezone name.", TEXT, "UTC"),
    Step(WizardStep.PROJECT_AGENT_ENTRY, "Agent name", "What the agent calls itself.", TEXT, "ZeroClaw"),
    Step(WizardStep.PROJECT_STYLE_SELECTION, "Communication style", "Default tone of replies.", SELECT),
    Step(WizardStep.PROJECT_STYLE_CUSTOM_ENTRY, "Custom style", "Describe the tone in one line.", TEXT),
    Step(WizardStep.CONFIRMATION, "Confirm", "Review the answers and write the configuration.", INFO),
    Step(WizardStep.DONE, "Done", "Configuration written.", INFO),
):
    register_step(_step)


def options_for(state: WizardState, step_id: WizardStep) -> list[str]:
    """Labels of the selectable list shown on ``step_id`` (empty for text steps)."""
    if step_id == WizardStep.CONFIG_MODE_SELECTION:
        return list(CONFIG_MODE_OPTIONS)
    if step_id == WizardStep.PROVIDER_TIER_SELECTION:
        return list(state.provider_tiers)
    if step_id == WizardStep.PROVIDER_SELECTION:
        return [f"{provider.name} · {provider.description}" for provider in state.current_tier_providers]
    if step_id == WizardStep.MODEL_SELECTION:
        return [_model_label(state, model) for model in state.available_models]
    if step_id == WizardStep.CHANNEL_SELECTION:
        return [choice.label for choice in ChannelChoice]
    if step_id == WizardStep.TUNNEL_SELECTION:
        return [choice.label for choice in TunnelChoice]
    if step_id == WizardStep.TOOL_MODE_SELECTION:
        return list(TOOL_MODE_OPTIONS)
    if step_id == WizardStep.HARDWARE_SELECTION:
        return list(HARDWARE_CHOICES)
    if step_id == WizardStep.MEMORY_SELECTION:
        return [profile.label for profile in selectable_memory_backends()]
    if step_id == WizardStep.PROJECT_STYLE_SELECTION:
        return list(STYLE_LABELS)
    return []


def _model_label(state: WizardState, model: str) -> str:
    if model == CUSTOM_MODEL_SENTINEL:
        return CUSTOM_MODEL_LABEL
    for item in curated_models_for_provider(state.provider):
        if item.value == model and item.description:
            return f"{model} · {item.description}"
    return model


def field_prompt(state: WizardState, step_id: WizardStep) -> str:
    """Channel and tunnel entry steps label their buffer per choice."""
    if step_id in (WizardStep.CHANNEL_TOKEN_ENTRY, WizardStep.CHANNEL_AUX_ENTRY):
        primary, aux = CHANNEL_FIELD_PROMPTS.get(state.channel_choice, ("", ""))
        return primary if step_id == WizardStep.CHANNEL_TOKEN_ENTRY else aux
    if step_id in (WizardStep.TUNNEL_PRIMARY_ENTRY, WizardStep.TUNNEL_SECONDARY_ENTRY):
        primary, secondary = TUNNEL_FIELD_PROMPTS.get(state.tunnel_choice, ("", ""))
        return primary if step_id == WizardStep.TUNNEL_PRIMARY_ENTRY else secondary
    return get_step(step_id).description


def accepts_text(state: WizardState, step_id: WizardStep) -> bool:
    """Whether character edits go to ``step_id``'s buffer right now."""
    step = get_step(step_id)
    if step_id == WizardStep.WORKSPACE_SETUP:
        return not state.use_default_workspace
    if step_id == WizardStep.TUNNEL_PRIMARY_ENTRY:
        return state.tunnel_choice != TunnelChoice.TAILSCALE
    return step.kind in (TEXT, SECRET)


def step_position(step_id: WizardStep) -> tuple[int | None, int]:
    numbered = [step for step in WizardStep if step not in (WizardStep.WELCOME, WizardStep.DONE)]
    if step_id not in numbered:
        return None, len(numbered)
    return numbered.index(step_id) + 1, len(numbered)


def summary_rows(state: WizardState) -> list[tuple[str, str]]:
    rows = [
        ("Mode", "Full onboarding" if state.mode == OnboardingMode.FULL_ONBOARDING else "Update provider only"),
        ("Config", str(state.config_path)),
        ("Workspace", str(state.workspace_dir)),
        ("Provider", state.provider or "openrouter"),
        ("Model", state.model or "(provider default)"),
        ("API key", "set" if state.api_key.strip() else "not set"),
    ]
    if state.api_url:
        rows.append(("Endpoint", state.api_url))
    if state.mode != OnboardingMode.FULL_ONBOARDING:
        return rows
    rows.extend(
        [
            ("Channel", state.channel_choice.label),
            ("Tunnel", state.tunnel_choice.label),
            ("Tool mode", TOOL_MODE_OPTIONS[1] if state.tool_mode == ToolModeChoice.COMPOSIO else TOOL_MODE_OPTIONS[0]),
            ("Encrypt secrets", "yes" if state.secrets_encrypt else "no"),
            ("Hardware", HARDWARE_CHOICES[state.hardware_choice] if 0 <= state.hardware_choice < len(HARDWARE_CHOICES) else "-"),
            ("Memory", _memory_label(state.memory_choice)),
            ("Auto-save", "on" if state.memory_auto_save else "off"),
        ]
    )
    return rows


def _memory_label(index: int) -> str:
    backends = selectable_memory_backends()
    if 0 <= index < len(backends):
        return backends[index].label
    return "-"
