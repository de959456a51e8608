"""Stored config validation helpers."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

from zeroclaw.catalog import CUSTOM_PROVIDER_PREFIX, find_provider
from zeroclaw.channels import CHANNEL_CONFIG_TYPES
from zeroclaw.config import Config, ConfigParseError, load_config
from zeroclaw.memory import selectable_memory_backends
from zeroclaw.tunnel import TunnelChoice


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    config: Config | None
    errors: list[ValidationIssue]
    warnings: list[ValidationIssue]


def load_and_validate_config(path: Path) -> ValidationResult:
    if not path.exists():
        return ValidationResult(
            config=None,
            errors=[ValidationIssue("config", f"Config not found: {path}")],
            warnings=[],
        )
    try:
        config = load_config(path)
    except ConfigParseError as exc:
        return ValidationResult(
            config=None,
            errors=[ValidationIssue("config", exc.reason)],
            warnings=[],
        )
    raw = json.loads(path.read_text(encoding="utf-8"))
    return validate_config(config, raw)


def validate_config(config: Config, raw: dict[str, Any] | None = None) -> ValidationResult:
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    raw = raw or {}

    provider = (config.default_provider or "").strip()
    if not provider:
        errors.append(ValidationIssue("default_provider", "Missing default_provider."))
    elif provider.startswith(CUSTOM_PROVIDER_PREFIX):
        if not provider[len(CUSTOM_PROVIDER_PREFIX):]:
            errors.append(ValidationIssue("default_provider", "Custom provider is missing its URL."))
    elif find_provider(provider) is None:
        warnings.append(ValidationIssue("default_provider", f"Unknown provider '{provider}'."))

    if not (config.default_model or "").strip():
        warnings.append(ValidationIssue("default_model", "No default_model; the provider default will be used."))

    if config.api_key is None:
        warnings.append(ValidationIssue("api_key", "No API key configured."))
    elif not config.api_key.strip():
        errors.append(ValidationIssue("api_key", "api_key must be omitted rather than empty."))

    for key in raw:
        if key in config.extra:
            warnings.append(ValidationIssue(key, "Unrecognized key kept as-is."))

    channels = raw.get("channels_config") or {}
    known_channels = {choice.value for choice in CHANNEL_CONFIG_TYPES} | {"cli"}
    for key in channels:
        if key not in known_channels:
            warnings.append(ValidationIssue(f"channels_config.{key}", "Unknown channel."))

    tunnel = config.tunnel
    valid_tunnels = {choice.value for choice in TunnelChoice}
    if tunnel.provider not in valid_tunnels:
        errors.append(ValidationIssue("tunnel.provider", f"Unknown tunnel provider '{tunnel.provider}'."))
    elif tunnel.provider != TunnelChoice.NONE.value and tunnel.settings is None:
        errors.append(ValidationIssue(f"tunnel.{tunnel.provider}", "Tunnel provider selected without settings."))

    backends = {profile.key for profile in selectable_memory_backends()}
    if config.memory.backend not in backends:
        errors.append(ValidationIssue("memory.backend", f"Unknown memory backend '{config.memory.backend}'."))
    weights = config.memory.vector_weight + config.memory.keyword_weight
    if abs(weights - 1.0) > 1e-6:
        warnings.append(ValidationIssue("memory", "vector_weight + keyword_weight should equal 1.0."))

    if config.composio.enabled and not config.composio.api_key:
        warnings.append(ValidationIssue("composio.api_key", "Composio is enabled without an API key."))

    return ValidationResult(config=config, errors=errors, warnings=warnings)
