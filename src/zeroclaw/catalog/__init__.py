"""Curated provider and model catalog."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Iterable

logger = logging.getLogger(__name__)

CATALOG_PATH_ENV = "ZEROCLAW_PROVIDER_CATALOG_PATH"
CUSTOM_MODEL_SENTINEL = "__custom_model__"
CUSTOM_PROVIDER_PREFIX = "custom:"
FALLBACK_DEFAULT_MODEL = "anthropic/claude-sonnet-4.6"
API_STYLES = {"openai", "anthropic", "ollama", "none"}


@dataclass(frozen=True)
class CatalogItem:
    value: str
    name: str
    description: str
    is_default: bool


@dataclass(frozen=True)
class ProviderInfo:
    provider_id: str
    name: str
    description: str
    api_style: str
    base_url: str | None
    models: tuple[CatalogItem, ...]

    @property
    def default_model(self) -> str:
        for item in self.models:
            if item.is_default:
                return item.value
        if self.models:
            return self.models[0].value
        return FALLBACK_DEFAULT_MODEL


@dataclass(frozen=True)
class ProviderTier:
    label: str
    providers: tuple[ProviderInfo, ...]


def load_provider_catalog() -> tuple[list[ProviderTier], str | None]:
    """Load provider tiers, honoring ``ZEROCLAW_PROVIDER_CATALOG_PATH``.

    Returns the tiers and an optional warning when the override could
    not be used and the built-in catalog was loaded instead.
    """
    override = os.getenv(CATALOG_PATH_ENV)
    if override:
        try:
            data = json.loads(Path(override).read_text(encoding="utf-8"))
            return _validate_catalog(data), None
        except (OSError, ValueError) as exc:
            logger.warning("Provider catalog override %s failed: %s", override, exc)
            return _builtin_tiers(), f"Catalog override failed ({CATALOG_PATH_ENV}). Using built-in catalog."
    return _builtin_tiers(), None


@lru_cache(maxsize=1)
def _builtin_tiers_cached() -> tuple[ProviderTier, ...]:
    data = resources.files(__name__).joinpath("providers.json").read_text(encoding="utf-8")
    return tuple(_validate_catalog(json.loads(data)))


def _builtin_tiers() -> list[ProviderTier]:
    return list(_builtin_tiers_cached())


def _validate_catalog(data: Any) -> list[ProviderTier]:
    if not isinstance(data, dict) or not isinstance(data.get("tiers"), list):
        raise ValueError("Catalog must be an object with a 'tiers' list.")
    tiers: list[ProviderTier] = []
    for tier_idx, raw_tier in enumerate(data["tiers"]):
        if not isinstance(raw_tier, dict):
            raise ValueError(f"Tier {tier_idx} must be an object.")
        label = raw_tier.get("label")
        if not isinstance(label, str) or not label.strip():
            raise ValueError(f"Tier {tier_idx} missing 'label'.")
        providers = [
            _validate_provider(raw, f"{tier_idx}.{idx}") for idx, raw in enumerate(raw_tier.get("providers") or [])
        ]
        tiers.append(ProviderTier(label=label.strip(), providers=tuple(providers)))
    if not tiers:
        raise ValueError("Catalog is empty.")
    return tiers


def _validate_provider(raw: Any, where: str) -> ProviderInfo:
    if not isinstance(raw, dict):
        raise ValueError(f"Provider {where} must be an object.")
    provider_id = raw.get("id")
    if not isinstance(provider_id, str) or not provider_id.strip():
        raise ValueError(f"Provider {where} missing 'id'.")
    api_style = raw.get("api_style", "openai")
    if api_style not in API_STYLES:
        raise ValueError(f"Provider {provider_id} has unknown api_style '{api_style}'.")
    models: list[CatalogItem] = []
    for idx, item in enumerate(raw.get("models") or []):
        if not isinstance(item, dict) or not isinstance(item.get("id"), str):
            raise ValueError(f"Provider {provider_id} model {idx} missing 'id'.")
        description = item.get("description")
        models.append(
            CatalogItem(
                value=item["id"].strip(),
                name=str(item.get("name") or item["id"]).strip(),
                description=description.strip() if isinstance(description, str) else "",
                is_default=bool(item.get("default", False)),
            )
        )
    base_url = raw.get("base_url")
    return ProviderInfo(
        provider_id=provider_id.strip(),
        name=str(raw.get("name") or provider_id).strip(),
        description=str(raw.get("description") or ""),
        api_style=api_style,
        base_url=base_url if isinstance(base_url, str) and base_url else None,
        models=tuple(models),
    )


def get_provider_tiers() -> list[str]:
    tiers, _ = load_provider_catalog()
    return [tier.label for tier in tiers]


def get_providers_for_tier(tier_idx: int) -> list[ProviderInfo]:
    tiers, _ = load_provider_catalog()
    if 0 <= tier_idx < len(tiers):
        return list(tiers[tier_idx].providers)
    return []


def all_providers() -> list[ProviderInfo]:
    tiers, _ = load_provider_catalog()
    return [provider for tier in tiers for provider in tier.providers]


def find_provider(provider_id: str) -> ProviderInfo | None:
    for provider in all_providers():
        if provider.provider_id == provider_id:
            return provider
    return None


def curated_models_for_provider(provider_id: str) -> list[CatalogItem]:
    provider = find_provider(provider_id)
    return list(provider.models) if provider else []


def default_model_for_provider(provider_id: str) -> str:
    provider = find_provider(provider_id)
    return provider.default_model if provider else FALLBACK_DEFAULT_MODEL


def merge_model_candidates(
    provider_id: str,
    curated: Iterable[str],
    live: Iterable[str] = (),
) -> list[str]:
    """Sorted, deduplicated candidate ids with the custom sentinel last."""
    candidates = {model.strip() for model in curated if model.strip()}
    candidates.update(model.strip() for model in live if model.strip())
    if not candidates:
        candidates.add(default_model_for_provider(provider_id))
    return [*sorted(candidates), CUSTOM_MODEL_SENTINEL]
