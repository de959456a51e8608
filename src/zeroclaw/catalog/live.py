"""Live model listing against provider APIs."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import httpx

from zeroclaw.catalog import CUSTOM_PROVIDER_PREFIX, find_provider

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_TIMEOUT_S = 10.0


@dataclass
class CatalogFetchError(RuntimeError):
    provider: str
    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.provider}: HTTP {self.status_code} {self.message}".rstrip()
        return f"{self.provider}: {self.message}"


def _resolve_endpoint(provider_id: str, base_url: str | None) -> tuple[str, str]:
    if provider_id.startswith(CUSTOM_PROVIDER_PREFIX):
        return "openai", provider_id[len(CUSTOM_PROVIDER_PREFIX):]
    provider = find_provider(provider_id)
    if provider is None:
        raise CatalogFetchError(provider_id, "unknown provider")
    base = base_url or provider.base_url
    if provider.api_style == "none" or not base:
        raise CatalogFetchError(provider_id, "live model listing is not supported")
    return provider.api_style, base


async def fetch_live_models(
    provider_id: str,
    api_key: str,
    base_url: str | None = None,
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    client: httpx.AsyncClient | None = None,
) -> list[str]:
    """Return model ids reported by the provider, in response order."""
    api_style, base = _resolve_endpoint(provider_id, base_url)
    base = base.rstrip("/")
    headers: dict[str, str] = {}
    if api_style == "anthropic":
        if not api_key:
            raise CatalogFetchError(provider_id, "API key required")
        url = f"{base}/v1/models"
        headers["x-api-key"] = api_key
        headers["anthropic-version"] = ANTHROPIC_VERSION
    elif api_style == "ollama":
        url = f"{base}/api/tags"
    else:
        url = f"{base}/models"
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=timeout_s)
    try:
        response = await http.get(url, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise CatalogFetchError(provider_id, str(exc) or type(exc).__name__) from exc
    except ValueError as exc:
        # non-ASCII key or URL that cannot go on the wire
        raise CatalogFetchError(provider_id, f"invalid request: {exc}") from exc
    finally:
        if owns_client:
            await http.aclose()

    if response.status_code < 200 or response.status_code >= 300:
        raise CatalogFetchError(provider_id, response.reason_phrase, status_code=response.status_code)
    try:
        data = response.json()
    except ValueError as exc:
        raise CatalogFetchError(provider_id, "response is not JSON") from exc

    models = _extract_ids(data, api_style)
    logger.info("Fetched %d live model(s) for %s", len(models), provider_id)
    return models


def _extract_ids(data: Any, api_style: str) -> list[str]:
    if not isinstance(data, dict):
        return []
    key, id_field = ("models", "name") if api_style == "ollama" else ("data", "id")
    items = data.get(key)
    if not isinstance(items, list):
        return []
    ids: list[str] = []
    for item in items:
        if isinstance(item, dict) and isinstance(item.get(id_field), str):
            ids.append(item[id_field])
    return ids
