"""Read-only dashboard views over the stored configuration."""

from __future__ import annotations

from dataclasses import fields
import logging
from typing import Awaitable, Callable

from zeroclaw import __version__
from zeroclaw.catalog import all_providers, curated_models_for_provider, default_model_for_provider
from zeroclaw.catalog.live import CatalogFetchError, fetch_live_models
from zeroclaw.channels import CHANNEL_CONFIG_TYPES, ChannelChoice
from zeroclaw.config import DEFAULT_PROVIDER, ComposioConfig, Config, SecretsConfig
from zeroclaw.dashboard.state import MenuItem
from zeroclaw.hardware import HardwareConfig, discover_hardware
from zeroclaw.memory import MemoryConfig
from zeroclaw.tunnel import TunnelChoice

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, str, "str | None"], Awaitable[list[str]]]

SCHEMA_PREVIEW_LINES = 120
MODELS_PREVIEW = 20

# Fields a channel cannot run without.
_REQUIRED_CHANNEL_FIELDS: dict[ChannelChoice, tuple[str, ...]] = {
    ChannelChoice.TELEGRAM: ("bot_token",),
    ChannelChoice.DISCORD: ("bot_token",),
    ChannelChoice.SLACK: ("bot_token",),
    ChannelChoice.IMESSAGE: ("allowed_contacts",),
    ChannelChoice.MATRIX: ("homeserver", "access_token"),
    ChannelChoice.SIGNAL: ("account", "http_url"),
    ChannelChoice.WHATSAPP: ("access_token", "phone_number_id"),
    ChannelChoice.LINQ: ("api_token",),
    ChannelChoice.IRC: ("server", "nickname"),
    ChannelChoice.WEBHOOK: ("port",),
    ChannelChoice.NEXTCLOUD_TALK: ("base_url", "app_token"),
    ChannelChoice.DINGTALK: ("client_id", "client_secret"),
    ChannelChoice.QQ_OFFICIAL: ("app_id", "app_secret"),
    ChannelChoice.LARK: ("app_id", "app_secret"),
    ChannelChoice.FEISHU: ("app_id", "app_secret"),
    ChannelChoice.NOSTR: ("private_key",),
}


def _provider(config: Config) -> str:
    return (config.default_provider or DEFAULT_PROVIDER).strip()


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


async def run(item: MenuItem, config: Config, *, fetcher: Fetcher | None = None) -> list[str]:
    """Lines for ``item``: title, blank line, then content.

    Collaborator failures become an error line rather than an exception.
    """
    if item == MenuItem.HOME:
        return [
            "ZeroClaw Dashboard",
            "",
            "This dashboard provides read-only views of the stored configuration.",
            "Select a menu item and press Enter.",
        ]
    if item == MenuItem.STATUS:
        return status_lines(config)
    if item == MenuItem.PROVIDERS:
        return provider_lines(config)
    if item == MenuItem.CONFIG_SCHEMA:
        return config_schema_lines()
    if item == MenuItem.CHANNELS:
        return channel_lines(config)
    if item == MenuItem.CHANNEL_DOCTOR:
        return channel_doctor_lines(config)
    if item == MenuItem.TUNNEL:
        return tunnel_lines(config)
    if item == MenuItem.MODELS_LIST:
        return models_list_lines(config)
    if item == MenuItem.MODELS_STATUS:
        return models_status_lines(config)
    if item == MenuItem.MODELS_REFRESH:
        return await models_refresh_lines(config, fetcher)
    if item == MenuItem.DOCTOR:
        return doctor_lines(config)
    if item == MenuItem.MEMORY_STATS:
        return memory_stats_lines(config)
    if item == MenuItem.HARDWARE_DISCOVER:
        return hardware_discover_lines()
    return [item.title, "", "Not available."]


def status_lines(config: Config) -> list[str]:
    return [
        "Status",
        "",
        f"Version: {__version__}",
        f"Workspace: {config.workspace_dir}",
        f"Config: {config.config_path}",
        f"Provider: {_provider(config)}",
        f"Model: {config.default_model or '(default)'}",
        f"Memory backend: {config.memory.backend}",
        f"Auto-save: {'on' if config.memory.auto_save else 'off'}",
    ]


def provider_lines(config: Config) -> list[str]:
    providers = all_providers()
    active = _provider(config).lower()
    lines = ["Providers", "", f"Total providers: {len(providers)}"]
    for provider in providers:
        marker = " [active]" if provider.provider_id.lower() == active else ""
        local_tag = " [local]" if (provider.base_url or "").startswith("http://localhost") else ""
        lines.append(f"- {provider.provider_id}: {provider.name}{local_tag}{marker}")
    if active.startswith("custom:"):
        lines.append(f"- {active} [active]")
    return lines


def config_schema_lines() -> list[str]:
    sections = [
        ("config", Config),
        ("composio", ComposioConfig),
        ("secrets", SecretsConfig),
        ("hardware", HardwareConfig),
        ("memory", MemoryConfig),
    ]
    sections.extend((f"channels_config.{choice.value}", config_type) for choice, config_type in CHANNEL_CONFIG_TYPES.items())
    body: list[str] = []
    for name, section_type in sections:
        body.append(f"[{name}]")
        for item in fields(section_type):
            if item.name in ("extra", "loaded_sections"):
                continue
            body.append(f"  {item.name}: {item.type}")
    lines = ["Config Schema", "", f"Previewing first {SCHEMA_PREVIEW_LINES} lines:"]
    lines.extend(body[:SCHEMA_PREVIEW_LINES])
    return lines


def channel_lines(config: Config) -> list[str]:
    lines = ["Channels", "", f"CLI: {'configured' if config.channels_config.cli else 'disabled'}"]
    for choice in CHANNEL_CONFIG_TYPES:
        state = "configured" if config.channels_config.get(choice) is not None else "not configured"
        lines.append(f"{choice.label}: {state}")
    return lines


def channel_doctor_lines(config: Config) -> list[str]:
    lines = ["Channel Doctor", ""]
    configured = config.channels_config.channels()
    if not configured:
        lines.append("No channels besides CLI are configured.")
        return lines
    for choice in configured:
        section = config.channels_config.get(choice)
        missing = [name for name in _REQUIRED_CHANNEL_FIELDS.get(choice, ()) if not getattr(section, name, None)]
        if missing:
            lines.append(f"{choice.label}: missing {', '.join(missing)}")
        else:
            lines.append(f"{choice.label}: ok")
    return lines


def tunnel_lines(config: Config) -> list[str]:
    tunnel = config.tunnel
    lines = ["Tunnel", "", f"Provider: {tunnel.provider}"]
    if tunnel.provider == TunnelChoice.NONE.value:
        lines.append("Gateway is reachable on this machine only.")
    elif tunnel.settings is None:
        lines.append(f"No settings stored for {tunnel.provider}.")
    else:
        for item in fields(tunnel.settings):
            value = getattr(tunnel.settings, item.name)
            if item.name in ("token", "auth_token") and value:
                value = "(set)"
            lines.append(f"{item.name}: {value if value is not None else '-'}")
    return lines


def models_list_lines(config: Config) -> list[str]:
    provider = _provider(config)
    models = curated_models_for_provider(provider)
    lines = [
        "Models List (curated)",
        "",
        f"Provider: {provider}",
        f"Curated models: {len(models)}",
    ]
    for index, item in enumerate(models[:MODELS_PREVIEW], start=1):
        lines.append(f"{index}. {item.value} - {item.description}")
    if not models:
        lines.append("No curated models available.")
    return lines


def models_status_lines(config: Config) -> list[str]:
    provider = _provider(config)
    selected = config.default_model or default_model_for_provider(provider)
    return [
        "Models Status",
        "",
        f"Provider: {provider}",
        f"Configured model: {selected}",
        f"Curated entries: {len(curated_models_for_provider(provider))}",
    ]


async def models_refresh_lines(config: Config, fetcher: Fetcher | None = None) -> list[str]:
    provider = _provider(config)
    fetch = fetcher or fetch_live_models
    try:
        models = await fetch(provider, config.api_key or "", config.api_url)
    except CatalogFetchError as exc:
        logger.warning("Model refresh failed for %s: %s", provider, exc)
        return ["Models Refresh (run)", "", f"Model refresh failed for provider {provider}: {exc}"]
    lines = [
        "Models Refresh (run)",
        "",
        f"Model refresh completed for provider: {provider}",
        f"Live models: {len(models)}",
    ]
    lines.extend(f"- {model}" for model in models[:MODELS_PREVIEW])
    if len(models) > MODELS_PREVIEW:
        lines.append(f"... {len(models) - MODELS_PREVIEW} more")
    return lines


def doctor_lines(config: Config) -> list[str]:
    return [
        "Doctor (readonly quick checks)",
        "",
        f"Config file exists: {_yes_no(config.config_path.exists())}",
        f"Workspace exists: {_yes_no(config.workspace_dir.exists())}",
        f"API key configured: {_yes_no(config.api_key is not None)}",
        f"Configured channels: {len(config.channels_config.channels())}",
        f"Secrets encrypted: {_yes_no(config.secrets.encrypt)}",
        f"Composio enabled: {_yes_no(config.composio.enabled)}",
    ]


def memory_stats_lines(config: Config) -> list[str]:
    memory = config.memory
    return [
        "Memory Stats",
        "",
        f"Backend: {memory.backend}",
        f"Auto-save: {'on' if memory.auto_save else 'off'}",
        f"Retention days: {memory.conversation_retention_days}",
        f"Embedding: {memory.embedding_provider}/{memory.embedding_model} (dim={memory.embedding_dimensions})",
        f"Workspace: {config.workspace_dir}",
    ]


def hardware_discover_lines() -> list[str]:
    lines = ["Hardware Discover (run)", ""]
    devices = discover_hardware()
    if not devices:
        lines.append("No devices found.")
        return lines
    lines.append(f"Devices found: {len(devices)}")
    for device in devices:
        lines.append(f"- {device.name} ({device.transport}) {device.path or ''}".rstrip())
    return lines
