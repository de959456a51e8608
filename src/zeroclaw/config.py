"""Configuration document, runtime paths and persistence."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import json
import logging
import os
from pathlib import Path
from typing import Any

from zeroclaw.channels import ChannelsConfig
from zeroclaw.hardware import HardwareConfig
from zeroclaw.memory import MemoryConfig
from zeroclaw.storage import read_json, write_json
from zeroclaw.tunnel import TunnelConfig

logger = logging.getLogger(__name__)

HOME_ENV = "ZEROCLAW_HOME"
CONFIG_FILENAME = "config.json"
ACTIVE_WORKSPACE_FILENAME = "active_workspace.json"
WORKSPACE_DIRNAME = "workspace"
DEFAULT_PROVIDER = "openrouter"

_SECTIONS = ("channels_config", "tunnel", "composio", "secrets", "hardware", "memory")


class ConfigParseError(ValueError):
    """An existing config document could not be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse config at {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class ComposioConfig:
    enabled: bool = False
    api_key: str | None = None
    entity_id: str = "default"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ComposioConfig":
        return cls(
            enabled=bool(raw.get("enabled", False)),
            api_key=raw.get("api_key"),
            entity_id=str(raw.get("entity_id") or "default"),
        )


@dataclass(frozen=True)
class SecretsConfig:
    encrypt: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"encrypt": self.encrypt}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SecretsConfig":
        return cls(encrypt=bool(raw.get("encrypt", True)))


_SECTION_TYPES: dict[str, Any] = {
    "channels_config": ChannelsConfig,
    "tunnel": TunnelConfig,
    "composio": ComposioConfig,
    "secrets": SecretsConfig,
    "hardware": HardwareConfig,
    "memory": MemoryConfig,
}


@dataclass
class Config:
    workspace_dir: Path
    config_path: Path
    api_key: str | None = None
    api_url: str | None = None
    default_provider: str | None = DEFAULT_PROVIDER
    default_model: str | None = None
    default_temperature: float = 0.7
    channels_config: ChannelsConfig = field(default_factory=ChannelsConfig)
    tunnel: TunnelConfig = field(default_factory=TunnelConfig)
    composio: ComposioConfig = field(default_factory=ComposioConfig)
    secrets: SecretsConfig = field(default_factory=SecretsConfig)
    hardware: HardwareConfig = field(default_factory=HardwareConfig)
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    # top-level keys this version does not model, written back untouched
    extra: dict[str, Any] = field(default_factory=dict)
    loaded_sections: dict[str, tuple[Any, Any]] = field(default_factory=dict, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        payload = dict(self.extra)
        payload.update(
            {
                "workspace_dir": str(self.workspace_dir),
                "config_path": str(self.config_path),
                "api_key": self.api_key,
                "api_url": self.api_url,
                "default_provider": self.default_provider,
                "default_model": self.default_model,
                "default_temperature": self.default_temperature,
            }
        )
        for name in _SECTIONS:
            value = getattr(self, name)
            loaded = self.loaded_sections.get(name)
            if loaded is not None and loaded[0] == value:
                payload[name] = loaded[1]
            else:
                payload[name] = value.to_dict()
        return payload

    @classmethod
    def from_dict(cls, raw: dict[str, Any], *, config_path: Path) -> "Config":
        workspace = raw.get("workspace_dir")
        config = cls(
            workspace_dir=Path(workspace) if workspace else config_path.parent / WORKSPACE_DIRNAME,
            config_path=config_path,
            api_key=raw.get("api_key"),
            api_url=raw.get("api_url"),
            default_provider=raw.get("default_provider"),
            default_model=raw.get("default_model"),
            default_temperature=float(raw.get("default_temperature", 0.7)),
        )
        for name, section_type in _SECTION_TYPES.items():
            section = raw.get(name)
            if section is None:
                continue
            if not isinstance(section, dict):
                raise ValueError(f"'{name}' must be an object")
            value = section_type.from_dict(section)
            setattr(config, name, value)
            config.loaded_sections[name] = (value, section)
        modeled = {
            "workspace_dir",
            "config_path",
            "api_key",
            "api_url",
            "default_provider",
            "default_model",
            "default_temperature",
            *_SECTIONS,
        }
        config.extra = {key: value for key, value in raw.items() if key not in modeled}
        return config


@dataclass(frozen=True)
class RuntimeDirs:
    config_dir: Path
    workspace_dir: Path
    config_path: Path


def home_dir() -> Path:
    override = os.getenv(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".zeroclaw"


def resolve_config_dir_for_workspace(workspace: Path) -> tuple[Path, Path]:
    """Return ``(config_dir, workspace_dir)`` for a user-supplied workspace path."""
    if workspace.name == WORKSPACE_DIRNAME:
        return workspace.parent, workspace
    return workspace, workspace / WORKSPACE_DIRNAME


def runtime_dirs_for(config_dir: Path) -> RuntimeDirs:
    return RuntimeDirs(
        config_dir=config_dir,
        workspace_dir=config_dir / WORKSPACE_DIRNAME,
        config_path=config_dir / CONFIG_FILENAME,
    )


def resolve_runtime_dirs() -> RuntimeDirs:
    root = home_dir()
    marker = root / ACTIVE_WORKSPACE_FILENAME
    if marker.exists():
        try:
            data = read_json(marker)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable %s: %s", marker, exc)
        else:
            config_dir = data.get("config_dir") if isinstance(data, dict) else None
            if isinstance(config_dir, str) and config_dir:
                return runtime_dirs_for(Path(config_dir))
    return runtime_dirs_for(root)


def persist_active_workspace_dir(config_dir: Path) -> Path:
    marker = home_dir() / ACTIVE_WORKSPACE_FILENAME
    write_json(marker, {"config_dir": str(config_dir)})
    logger.info("Active config directory set to %s", config_dir)
    return marker


def load_config(path: Path) -> Config:
    try:
        raw = read_json(path)
    except (OSError, ValueError) as exc:
        raise ConfigParseError(path, str(exc)) from exc
    if not isinstance(raw, dict):
        raise ConfigParseError(path, "config must be a JSON object")
    try:
        config = Config.from_dict(raw, config_path=path)
    except (TypeError, ValueError) as exc:
        raise ConfigParseError(path, str(exc)) from exc
    logger.debug("Loaded config from %s", path)
    return config


def save_config(config: Config) -> None:
    write_json(config.config_path, config.to_dict())
    logger.info("Saved config to %s", config.config_path)
