"""Memory backend profiles and the ``memory`` config section."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

DEFAULT_MEMORY_BACKEND = "sqlite"


@dataclass(frozen=True)
class MemoryBackendProfile:
    key: str
    label: str
    auto_save_default: bool
    uses_sqlite_hygiene: bool
    sqlite_based: bool


_BACKENDS: tuple[MemoryBackendProfile, ...] = (
    MemoryBackendProfile(
        key="sqlite",
        label="SQLite with vector search (recommended)",
        auto_save_default=True,
        uses_sqlite_hygiene=True,
        sqlite_based=True,
    ),
    MemoryBackendProfile(
        key="lucid",
        label="Lucid memory bridge (SQLite fallback)",
        auto_save_default=True,
        uses_sqlite_hygiene=True,
        sqlite_based=True,
    ),
    MemoryBackendProfile(
        key="markdown",
        label="Markdown files",
        auto_save_default=True,
        uses_sqlite_hygiene=False,
        sqlite_based=False,
    ),
    MemoryBackendProfile(
        key="none",
        label="None (stateless)",
        auto_save_default=False,
        uses_sqlite_hygiene=False,
        sqlite_based=False,
    ),
)


def selectable_memory_backends() -> list[MemoryBackendProfile]:
    return list(_BACKENDS)


def memory_backend_profile(key: str) -> MemoryBackendProfile:
    for profile in _BACKENDS:
        if profile.key == key:
            return profile
    return _BACKENDS[0]


def backend_key_from_choice(index: int) -> str:
    if 0 <= index < len(_BACKENDS):
        return _BACKENDS[index].key
    return DEFAULT_MEMORY_BACKEND


@dataclass(frozen=True)
class MemoryConfig:
    backend: str = DEFAULT_MEMORY_BACKEND
    auto_save: bool = True
    hygiene_enabled: bool = True
    archive_after_days: int = 7
    purge_after_days: int = 30
    conversation_retention_days: int = 30
    embedding_provider: str = "none"
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536
    vector_weight: float = 0.7
    keyword_weight: float = 0.3
    min_relevance_score: float = 0.4
    embedding_cache_size: int = 10000
    chunk_max_tokens: int = 512
    response_cache_enabled: bool = False
    response_cache_ttl_minutes: int = 60
    response_cache_max_entries: int = 5000
    snapshot_enabled: bool = False
    snapshot_on_hygiene: bool = False
    auto_hydrate: bool = True
    sqlite_open_timeout_secs: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "MemoryConfig":
        known = {item.name for item in fields(cls)}
        return cls(**{key: value for key, value in raw.items() if key in known})


def memory_config_defaults_for_backend(backend: str) -> MemoryConfig:
    profile = memory_backend_profile(backend)
    hygiene = profile.uses_sqlite_hygiene
    return MemoryConfig(
        backend=profile.key,
        auto_save=profile.auto_save_default,
        hygiene_enabled=hygiene,
        archive_after_days=7 if hygiene else 0,
        purge_after_days=30 if hygiene else 0,
        embedding_cache_size=10000 if profile.sqlite_based else 0,
    )
