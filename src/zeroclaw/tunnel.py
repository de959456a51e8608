"""Tunnel choices and the ``tunnel`` config section."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class TunnelChoice(str, Enum):
    NONE = "none"
    CLOUDFLARE = "cloudflare"
    TAILSCALE = "tailscale"
    NGROK = "ngrok"
    CUSTOM = "custom"

    @classmethod
    def from_index(cls, index: int) -> "TunnelChoice":
        members = list(cls)
        if 0 <= index < len(members):
            return members[index]
        return cls.NONE

    @property
    def label(self) -> str:
        return TUNNEL_LABELS[self]


TUNNEL_LABELS: dict[TunnelChoice, str] = {
    TunnelChoice.NONE: "None (local only)",
    TunnelChoice.CLOUDFLARE: "Cloudflare Tunnel",
    TunnelChoice.TAILSCALE: "Tailscale",
    TunnelChoice.NGROK: "ngrok",
    TunnelChoice.CUSTOM: "Custom",
}

TUNNEL_FIELD_PROMPTS: dict[TunnelChoice, tuple[str, str]] = {
    TunnelChoice.CLOUDFLARE: ("Tunnel token", ""),
    TunnelChoice.TAILSCALE: ("Space toggles Funnel (public access)", "Hostname (optional)"),
    TunnelChoice.NGROK: ("Auth token", "Domain (optional)"),
    TunnelChoice.CUSTOM: ("Start command", "Health URL (optional)"),
}


@dataclass(frozen=True)
class CloudflareTunnelConfig:
    token: str


@dataclass(frozen=True)
class TailscaleTunnelConfig:
    funnel: bool = False
    hostname: str | None = None


@dataclass(frozen=True)
class NgrokTunnelConfig:
    auth_token: str
    domain: str | None = None


@dataclass(frozen=True)
class CustomTunnelConfig:
    start_command: str
    health_url: str | None = None
    url_pattern: str | None = None


_SECTION_TYPES: dict[TunnelChoice, type] = {
    TunnelChoice.CLOUDFLARE: CloudflareTunnelConfig,
    TunnelChoice.TAILSCALE: TailscaleTunnelConfig,
    TunnelChoice.NGROK: NgrokTunnelConfig,
    TunnelChoice.CUSTOM: CustomTunnelConfig,
}


@dataclass(frozen=True)
class TunnelConfig:
    """Provider tag plus at most one provider-specific section."""

    provider: str = TunnelChoice.NONE.value
    settings: Any = None

    @property
    def cloudflare(self) -> CloudflareTunnelConfig | None:
        return self.settings if isinstance(self.settings, CloudflareTunnelConfig) else None

    @property
    def tailscale(self) -> TailscaleTunnelConfig | None:
        return self.settings if isinstance(self.settings, TailscaleTunnelConfig) else None

    @property
    def ngrok(self) -> NgrokTunnelConfig | None:
        return self.settings if isinstance(self.settings, NgrokTunnelConfig) else None

    @property
    def custom(self) -> CustomTunnelConfig | None:
        return self.settings if isinstance(self.settings, CustomTunnelConfig) else None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"provider": self.provider}
        for choice in _SECTION_TYPES:
            section = self.settings if self.provider == choice.value else None
            payload[choice.value] = asdict(section) if section is not None else None
        return payload

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "TunnelConfig":
        provider = str(raw.get("provider") or TunnelChoice.NONE.value)
        settings = None
        for choice, section_type in _SECTION_TYPES.items():
            if provider == choice.value and isinstance(raw.get(choice.value), dict):
                settings = section_type(**raw[choice.value])
        return cls(provider=provider, settings=settings)


def build_tunnel_config(choice: TunnelChoice, primary: str, secondary: str, toggle: bool) -> TunnelConfig:
    if choice == TunnelChoice.CLOUDFLARE:
        return TunnelConfig(provider=choice.value, settings=CloudflareTunnelConfig(token=primary))
    if choice == TunnelChoice.TAILSCALE:
        return TunnelConfig(
            provider=choice.value,
            settings=TailscaleTunnelConfig(funnel=toggle, hostname=secondary or None),
        )
    if choice == TunnelChoice.NGROK:
        return TunnelConfig(
            provider=choice.value,
            settings=NgrokTunnelConfig(auth_token=primary, domain=secondary or None),
        )
    if choice == TunnelChoice.CUSTOM:
        return TunnelConfig(
            provider=choice.value,
            settings=CustomTunnelConfig(start_command=primary, health_url=secondary or None),
        )
    return TunnelConfig()
