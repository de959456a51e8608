"""Turn a finished wizard session into a saved configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import os

from zeroclaw.catalog import default_model_for_provider
from zeroclaw.channels import ChannelChoice, ChannelsConfig
from zeroclaw.config import (
    DEFAULT_PROVIDER,
    ComposioConfig,
    Config,
    SecretsConfig,
    load_config,
    persist_active_workspace_dir,
    save_config,
)
from zeroclaw.hardware import DiscoveredDevice, config_from_wizard_choice, discover_hardware
from zeroclaw.memory import backend_key_from_choice, memory_config_defaults_for_backend
from zeroclaw.tunnel import build_tunnel_config
from zeroclaw.wizard.state import OnboardingMode, ToolModeChoice, WizardState, WizardStep
from zeroclaw.workspace import (
    DEFAULT_AGENT_NAME,
    DEFAULT_TIMEZONE,
    DEFAULT_USER_NAME,
    ProjectContext,
    communication_style_for,
    scaffold_workspace,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalizeResult:
    config: Config
    # channel listeners should be started once onboarding exits
    autostart_channels: bool


def build_config(state: WizardState, devices: list[DiscoveredDevice] | None = None) -> Config:
    """Assemble the configuration document without touching disk for writes.

    In update-provider mode an existing document is loaded as the base;
    ``ConfigParseError`` propagates when it is unreadable.
    """
    provider = state.provider.strip() or DEFAULT_PROVIDER
    model = state.model.strip() or default_model_for_provider(provider)

    if state.mode == OnboardingMode.UPDATE_PROVIDER_ONLY and state.config_path.exists():
        config = load_config(state.config_path)
        config.workspace_dir = state.workspace_dir
        config.config_path = state.config_path
    else:
        config = Config(workspace_dir=state.workspace_dir, config_path=state.config_path)

    api_key = state.api_key.strip()
    config.default_provider = provider
    config.default_model = model
    config.api_url = state.api_url
    config.api_key = api_key or None

    if state.mode == OnboardingMode.FULL_ONBOARDING:
        config.channels_config = ChannelsConfig.from_selection(state.channel_config)
        config.tunnel = build_tunnel_config(
            state.tunnel_choice,
            state.text(WizardStep.TUNNEL_PRIMARY_ENTRY),
            state.text(WizardStep.TUNNEL_SECONDARY_ENTRY),
            state.tunnel_toggle,
        )
        if state.tool_mode == ToolModeChoice.COMPOSIO:
            composio_key = state.text(WizardStep.COMPOSIO_API_KEY_ENTRY)
            config.composio = ComposioConfig(enabled=True, api_key=composio_key or None)
        else:
            config.composio = ComposioConfig()
        config.secrets = SecretsConfig(encrypt=state.secrets_encrypt)
        found = discover_hardware() if devices is None else devices
        hardware = config_from_wizard_choice(state.hardware_choice, found)
        config.hardware = replace(hardware, workspace_datasheets=state.hardware_datasheets)
        memory = memory_config_defaults_for_backend(backend_key_from_choice(state.memory_choice))
        config.memory = replace(memory, auto_save=state.memory_auto_save)
    return config


def project_context(state: WizardState) -> ProjectContext:
    return ProjectContext(
        user_name=state.text(WizardStep.PROJECT_USER_ENTRY) or os.getenv("USER") or DEFAULT_USER_NAME,
        timezone=state.text(WizardStep.PROJECT_TIMEZONE_ENTRY) or DEFAULT_TIMEZONE,
        agent_name=state.text(WizardStep.PROJECT_AGENT_ENTRY) or DEFAULT_AGENT_NAME,
        communication_style=communication_style_for(
            state.selected(WizardStep.PROJECT_STYLE_SELECTION),
            state.text(WizardStep.PROJECT_STYLE_CUSTOM_ENTRY),
        ),
    )


def finalize_config(state: WizardState, devices: list[DiscoveredDevice] | None = None) -> FinalizeResult:
    if state.step != WizardStep.DONE:
        raise ValueError(f"Wizard is not finished (current step: {state.step.value}).")
    if state.cancelled:
        raise ValueError("Wizard was cancelled.")

    logger.info("Finalizing %s onboarding for provider %s", state.mode.value, state.provider or DEFAULT_PROVIDER)
    config = build_config(state, devices)
    save_config(config)
    persist_active_workspace_dir(state.config_dir)

    autostart = False
    if state.mode == OnboardingMode.FULL_ONBOARDING:
        scaffold_workspace(config.workspace_dir, project_context(state))
        configured = config.channels_config.channels_except_webhook()
        autostart = bool(configured) and config.api_key is not None
        if autostart:
            logger.info("Channels to autostart: %s", ", ".join(choice.value for choice in configured))
    return FinalizeResult(config=config, autostart_channels=autostart)


def configured_channel_labels(config: Config) -> list[str]:
    return [choice.label for choice in config.channels_config.channels()] or [ChannelChoice.CLI_ONLY.label]
