"""Answer store for one onboarding session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from zeroclaw.catalog import ProviderInfo, get_provider_tiers
from zeroclaw.channels import ChannelChoice, ChannelConfig
from zeroclaw.config import RuntimeDirs, resolve_runtime_dirs
from zeroclaw.hardware import DEFAULT_HARDWARE_CHOICE
from zeroclaw.tunnel import TunnelChoice


class WizardStep(str, Enum):
    WELCOME = "welcome"
    CONFIG_MODE_SELECTION = "config_mode_selection"
    WORKSPACE_SETUP = "workspace_setup"
    PROVIDER_TIER_SELECTION = "provider_tier_selection"
    PROVIDER_SELECTION = "provider_selection"
    CUSTOM_PROVIDER_URL_ENTRY = "custom_provider_url_entry"
    PROVIDER_ENDPOINT_ENTRY = "provider_endpoint_entry"
    API_KEY_ENTRY = "api_key_entry"
    MODEL_SELECTION = "model_selection"
    MODEL_CUSTOM_ENTRY = "model_custom_entry"
    CHANNEL_SELECTION = "channel_selection"
    CHANNEL_TOKEN_ENTRY = "channel_token_entry"
    CHANNEL_AUX_ENTRY = "channel_aux_entry"
    TUNNEL_SELECTION = "tunnel_selection"
    TUNNEL_PRIMARY_ENTRY = "tunnel_primary_entry"
    TUNNEL_SECONDARY_ENTRY = "tunnel_secondary_entry"
    TOOL_MODE_SELECTION = "tool_mode_selection"
    COMPOSIO_API_KEY_ENTRY = "composio_api_key_entry"
    SECRETS_ENCRYPT_CHOICE = "secrets_encrypt_choice"
    HARDWARE_SELECTION = "hardware_selection"
    MEMORY_SELECTION = "memory_selection"
    PROJECT_USER_ENTRY = "project_user_entry"
    PROJECT_TIMEZONE_ENTRY = "project_timezone_entry"
    PROJECT_AGENT_ENTRY = "project_agent_entry"
    PROJECT_STYLE_SELECTION = "project_style_selection"
    PROJECT_STYLE_CUSTOM_ENTRY = "project_style_custom_entry"
    CONFIRMATION = "confirmation"
    DONE = "done"


class OnboardingMode(str, Enum):
    FULL_ONBOARDING = "full"
    UPDATE_PROVIDER_ONLY = "update_provider"


class ToolModeChoice(str, Enum):
    SOVEREIGN = "sovereign"
    COMPOSIO = "composio"


def _default_selections() -> dict[WizardStep, int]:
    return {
        WizardStep.CONFIG_MODE_SELECTION: 1,
        WizardStep.HARDWARE_SELECTION: DEFAULT_HARDWARE_CHOICE,
        WizardStep.PROJECT_STYLE_SELECTION: 1,
    }


@dataclass(frozen=True)
class ModelRequest:
    provider: str
    api_key: str
    api_url: str | None


@dataclass
class WizardState:
    config_dir: Path
    config_path: Path
    workspace_dir: Path
    force: bool = False
    step: WizardStep = WizardStep.WELCOME
    mode: OnboardingMode = OnboardingMode.FULL_ONBOARDING
    provider: str = ""
    api_url: str | None = None
    api_key: str = ""
    model: str = ""
    channel_choice: ChannelChoice = ChannelChoice.CLI_ONLY
    # holds the one channel sub-config for channel_choice, if any
    channel_config: ChannelConfig | None = None
    tunnel_choice: TunnelChoice = TunnelChoice.NONE
    tool_mode: ToolModeChoice = ToolModeChoice.SOVEREIGN
    secrets_encrypt: bool = True
    hardware_datasheets: bool = False
    memory_auto_save: bool = True
    # set when the operator toggled auto-save on the current backend
    memory_auto_save_overridden: bool = False
    tunnel_toggle: bool = False
    use_default_workspace: bool = True
    hardware_choice: int = DEFAULT_HARDWARE_CHOICE
    memory_choice: int = 0
    provider_tiers: list[str] = field(default_factory=list)
    current_tier_providers: list[ProviderInfo] = field(default_factory=list)
    available_models: list[str] = field(default_factory=list)
    selections: dict[WizardStep, int] = field(default_factory=_default_selections)
    inputs: dict[WizardStep, str] = field(default_factory=dict)
    pending_models: ModelRequest | None = None
    loading: bool = False
    status_message: str = ""
    cancelled: bool = False

    @classmethod
    def create(cls, *, force: bool = False, dirs: RuntimeDirs | None = None) -> "WizardState":
        dirs = dirs or resolve_runtime_dirs()
        return cls(
            config_dir=dirs.config_dir,
            config_path=dirs.config_path,
            workspace_dir=dirs.workspace_dir,
            force=force,
            provider_tiers=get_provider_tiers(),
        )

    def selected(self, step: WizardStep) -> int:
        return self.selections.get(step, 0)

    def select(self, step: WizardStep, index: int) -> None:
        self.selections[step] = index

    def raw_text(self, step: WizardStep) -> str:
        return self.inputs.get(step, "")

    def text(self, step: WizardStep) -> str:
        """First line of the step's buffer, trimmed."""
        lines = self.raw_text(step).splitlines()
        return lines[0].strip() if lines else ""

    def set_text(self, step: WizardStep, value: str) -> None:
        self.inputs[step] = value

    def config_exists(self) -> bool:
        return self.config_path.exists()

    @property
    def finished(self) -> bool:
        return self.step == WizardStep.DONE
