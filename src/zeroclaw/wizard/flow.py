"""Step transition engine for the onboarding wizard."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Awaitable, Callable

from zeroclaw.catalog import (
    CUSTOM_MODEL_SENTINEL,
    CUSTOM_PROVIDER_PREFIX,
    curated_models_for_provider,
    get_provider_tiers,
    get_providers_for_tier,
    merge_model_candidates,
)
from zeroclaw.catalog.live import CatalogFetchError, fetch_live_models
from zeroclaw.channels import ChannelChoice, build_channel_config
from zeroclaw.config import CONFIG_FILENAME, resolve_config_dir_for_workspace
from zeroclaw.memory import backend_key_from_choice, memory_backend_profile
from zeroclaw.tunnel import TunnelChoice
from zeroclaw.wizard.state import ModelRequest, OnboardingMode, ToolModeChoice, WizardState, WizardStep
from zeroclaw.workspace import CUSTOM_STYLE_INDEX

logger = logging.getLogger(__name__)

# Self-hosted servers without a fixed public endpoint.
ENDPOINT_PROVIDERS = frozenset({"llamacpp", "sglang", "vllm", "osaurus"})

ModelFetcher = Callable[[str, str, "str | None"], Awaitable[list[str]]]


def advance(state: WizardState) -> WizardStep:
    """Apply the current step's answer and move to the next step.

    Invalid input (an empty required field, a model list still loading)
    leaves ``state.step`` where it is.
    """
    current = state.step
    next_step = _next_step(state, current)
    if next_step != current:
        logger.debug("Wizard step %s -> %s", current.value, next_step.value)
    state.step = next_step
    return next_step


def _next_step(state: WizardState, step: WizardStep) -> WizardStep:
    if step == WizardStep.WELCOME:
        if state.config_exists() and not state.force:
            return WizardStep.CONFIG_MODE_SELECTION
        state.mode = OnboardingMode.FULL_ONBOARDING
        return WizardStep.WORKSPACE_SETUP
    if step == WizardStep.CONFIG_MODE_SELECTION:
        if state.selected(step) == 0:
            state.mode = OnboardingMode.FULL_ONBOARDING
        else:
            state.mode = OnboardingMode.UPDATE_PROVIDER_ONLY
        return WizardStep.WORKSPACE_SETUP
    if step == WizardStep.WORKSPACE_SETUP:
        _apply_workspace(state)
        state.provider_tiers = get_provider_tiers()
        return WizardStep.PROVIDER_TIER_SELECTION
    if step == WizardStep.PROVIDER_TIER_SELECTION:
        state.current_tier_providers = get_providers_for_tier(state.selected(step))
        if not state.current_tier_providers:
            return WizardStep.CUSTOM_PROVIDER_URL_ENTRY
        state.select(WizardStep.PROVIDER_SELECTION, 0)
        return WizardStep.PROVIDER_SELECTION
    if step == WizardStep.PROVIDER_SELECTION:
        providers = state.current_tier_providers
        if not providers:
            return step
        index = min(state.selected(step), len(providers) - 1)
        state.provider = providers[index].provider_id
        state.api_url = None
        if state.provider in ENDPOINT_PROVIDERS:
            return WizardStep.PROVIDER_ENDPOINT_ENTRY
        return WizardStep.API_KEY_ENTRY
    if step == WizardStep.CUSTOM_PROVIDER_URL_ENTRY:
        url = state.text(step).rstrip("/")
        if not url:
            return step
        state.provider = f"{CUSTOM_PROVIDER_PREFIX}{url}"
        state.api_url = None
        return WizardStep.API_KEY_ENTRY
    if step == WizardStep.PROVIDER_ENDPOINT_ENTRY:
        url = state.text(step).rstrip("/")
        if not url:
            return step
        state.api_url = url
        return WizardStep.API_KEY_ENTRY
    if step == WizardStep.API_KEY_ENTRY:
        state.api_key = state.text(step)
        request_models(state)
        return WizardStep.MODEL_SELECTION
    if step == WizardStep.MODEL_SELECTION:
        if state.loading or not state.available_models:
            return step
        index = min(state.selected(step), len(state.available_models) - 1)
        model = state.available_models[index]
        if model == CUSTOM_MODEL_SENTINEL:
            return WizardStep.MODEL_CUSTOM_ENTRY
        state.model = model
        return WizardStep.CHANNEL_SELECTION
    if step == WizardStep.MODEL_CUSTOM_ENTRY:
        model = state.text(step)
        if not model:
            return step
        state.model = model
        return WizardStep.CHANNEL_SELECTION
    if step == WizardStep.CHANNEL_SELECTION:
        state.channel_choice = ChannelChoice.from_index(state.selected(step))
        state.channel_config = None
        if state.channel_choice == ChannelChoice.CLI_ONLY:
            return WizardStep.TUNNEL_SELECTION
        return WizardStep.CHANNEL_TOKEN_ENTRY
    if step == WizardStep.CHANNEL_TOKEN_ENTRY:
        if state.channel_choice == ChannelChoice.WEBHOOK:
            return WizardStep.CHANNEL_AUX_ENTRY
        if state.channel_choice == ChannelChoice.CLI_ONLY:
            return WizardStep.TUNNEL_SELECTION
        return WizardStep.CHANNEL_AUX_ENTRY
    if step == WizardStep.CHANNEL_AUX_ENTRY:
        state.channel_config = build_channel_config(
            state.channel_choice,
            state.text(WizardStep.CHANNEL_TOKEN_ENTRY),
            state.text(WizardStep.CHANNEL_AUX_ENTRY),
        )
        return WizardStep.TUNNEL_SELECTION
    if step == WizardStep.TUNNEL_SELECTION:
        state.tunnel_choice = TunnelChoice.from_index(state.selected(step))
        if state.tunnel_choice == TunnelChoice.NONE:
            return WizardStep.TOOL_MODE_SELECTION
        return WizardStep.TUNNEL_PRIMARY_ENTRY
    if step == WizardStep.TUNNEL_PRIMARY_ENTRY:
        if state.tunnel_choice == TunnelChoice.CLOUDFLARE:
            return WizardStep.TOOL_MODE_SELECTION
        return WizardStep.TUNNEL_SECONDARY_ENTRY
    if step == WizardStep.TUNNEL_SECONDARY_ENTRY:
        return WizardStep.TOOL_MODE_SELECTION
    if step == WizardStep.TOOL_MODE_SELECTION:
        if state.selected(step) == 1:
            state.tool_mode = ToolModeChoice.COMPOSIO
            return WizardStep.COMPOSIO_API_KEY_ENTRY
        state.tool_mode = ToolModeChoice.SOVEREIGN
        return WizardStep.SECRETS_ENCRYPT_CHOICE
    if step == WizardStep.COMPOSIO_API_KEY_ENTRY:
        return WizardStep.SECRETS_ENCRYPT_CHOICE
    if step == WizardStep.SECRETS_ENCRYPT_CHOICE:
        return WizardStep.HARDWARE_SELECTION
    if step == WizardStep.HARDWARE_SELECTION:
        state.hardware_choice = state.selected(step)
        return WizardStep.MEMORY_SELECTION
    if step == WizardStep.MEMORY_SELECTION:
        state.memory_choice = state.selected(step)
        if not state.memory_auto_save_overridden:
            profile = memory_backend_profile(backend_key_from_choice(state.memory_choice))
            state.memory_auto_save = profile.auto_save_default
        return WizardStep.PROJECT_USER_ENTRY
    if step == WizardStep.PROJECT_USER_ENTRY:
        return WizardStep.PROJECT_TIMEZONE_ENTRY
    if step == WizardStep.PROJECT_TIMEZONE_ENTRY:
        return WizardStep.PROJECT_AGENT_ENTRY
    if step == WizardStep.PROJECT_AGENT_ENTRY:
        return WizardStep.PROJECT_STYLE_SELECTION
    if step == WizardStep.PROJECT_STYLE_SELECTION:
        if state.selected(step) == CUSTOM_STYLE_INDEX:
            return WizardStep.PROJECT_STYLE_CUSTOM_ENTRY
        return WizardStep.CONFIRMATION
    if step == WizardStep.PROJECT_STYLE_CUSTOM_ENTRY:
        return WizardStep.CONFIRMATION
    if step == WizardStep.CONFIRMATION:
        return WizardStep.DONE
    return WizardStep.DONE


def _apply_workspace(state: WizardState) -> None:
    if state.use_default_workspace:
        return
    raw = state.text(WizardStep.WORKSPACE_SETUP)
    if not raw:
        return
    config_dir, workspace_dir = resolve_config_dir_for_workspace(Path(raw).expanduser())
    state.config_dir = config_dir
    state.workspace_dir = workspace_dir
    state.config_path = config_dir / CONFIG_FILENAME
    logger.info("Using custom workspace %s", workspace_dir)


def request_models(state: WizardState) -> ModelRequest:
    """Record a pending catalog lookup; the caller runs it and applies the result."""
    request = ModelRequest(provider=state.provider, api_key=state.api_key, api_url=state.api_url)
    state.pending_models = request
    state.available_models = []
    state.loading = True
    state.status_message = "Fetching models..."
    return request


@dataclass(frozen=True)
class ModelCatalogResult:
    request: ModelRequest
    live_models: list[str] = field(default_factory=list)
    error: str | None = None


async def fetch_model_catalog(
    request: ModelRequest,
    fetcher: ModelFetcher | None = None,
) -> ModelCatalogResult:
    fetch = fetcher or fetch_live_models
    try:
        live = await fetch(request.provider, request.api_key, request.api_url)
    except CatalogFetchError as exc:
        logger.warning("Live model fetch failed: %s", exc)
        return ModelCatalogResult(request=request, error=str(exc))
    except Exception as exc:
        logger.exception("Model fetcher failed for %s", request.provider)
        return ModelCatalogResult(request=request, error=str(exc) or type(exc).__name__)
    return ModelCatalogResult(request=request, live_models=list(live))


def apply_model_catalog(state: WizardState, result: ModelCatalogResult) -> bool:
    """Merge a finished lookup into the store. Stale results are dropped."""
    if state.pending_models != result.request:
        logger.debug("Dropping stale model catalog result for %s", result.request.provider)
        return False
    curated = [item.value for item in curated_models_for_provider(result.request.provider)]
    state.available_models = merge_model_candidates(result.request.provider, curated, result.live_models)
    if result.error is None:
        state.status_message = "Loaded live + curated model catalog"
    else:
        state.status_message = f"Live fetch unavailable: {result.error}"
    state.select(WizardStep.MODEL_SELECTION, 0)
    state.pending_models = None
    state.loading = False
    return True
