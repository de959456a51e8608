from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from zeroclaw.catalog import (
    CATALOG_PATH_ENV,
    CUSTOM_MODEL_SENTINEL,
    FALLBACK_DEFAULT_MODEL,
    default_model_for_provider,
    get_provider_tiers,
    get_providers_for_tier,
    load_provider_catalog,
    merge_model_candidates,
)
from zeroclaw.catalog.live import CatalogFetchError, fetch_live_models
from zeroclaw.wizard.flow import apply_model_catalog, fetch_model_catalog, request_models
from zeroclaw.wizard.state import WizardState


def test_builtin_tiers(home: Path) -> None:
    tiers = get_provider_tiers()
    assert len(tiers) == 6
    assert tiers[-1].startswith("Custom")
    assert get_providers_for_tier(len(tiers) - 1) == []
    assert get_providers_for_tier(99) == []
    assert get_providers_for_tier(0)[0].provider_id == "openrouter"


def test_catalog_override(home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps({"tiers": [{"label": "Only", "providers": [{"id": "acme", "models": [{"id": "m1"}]}]}]}),
        encoding="utf-8",
    )
    monkeypatch.setenv(CATALOG_PATH_ENV, str(path))
    tiers, warning = load_provider_catalog()
    assert warning is None
    assert [tier.label for tier in tiers] == ["Only"]
    assert default_model_for_provider("acme") == "m1"


def test_broken_override_falls_back(home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "catalog.json"
    path.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv(CATALOG_PATH_ENV, str(path))
    tiers, warning = load_provider_catalog()
    assert warning is not None
    assert len(tiers) == 6


def test_merge_model_candidates(home: Path) -> None:
    assert merge_model_candidates("openrouter", ["a", "b"], ["b", "c"]) == ["a", "b", "c", CUSTOM_MODEL_SENTINEL]
    assert merge_model_candidates("openrouter", [" ", ""], []) == [
        default_model_for_provider("openrouter"),
        CUSTOM_MODEL_SENTINEL,
    ]
    assert merge_model_candidates("nobody", [], []) == [FALLBACK_DEFAULT_MODEL, CUSTOM_MODEL_SENTINEL]


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_openai_style_listing(home: Path) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [{"id": "x/one"}, {"id": "x/two"}, {"name": "skip"}]})

    async with _client(handler) as client:
        models = await fetch_live_models("openrouter", "sk-1", client=client)
    assert models == ["x/one", "x/two"]
    assert str(seen[0].url) == "https://openrouter.ai/api/v1/models"
    assert seen[0].headers["Authorization"] == "Bearer sk-1"


@pytest.mark.asyncio
async def test_endpoint_override_and_ollama(home: Path) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"models": [{"name": "llama3.2:latest"}]})

    async with _client(handler) as client:
        models = await fetch_live_models("ollama", "", "http://gpu-box:11434/", client=client)
    assert models == ["llama3.2:latest"]
    assert seen == ["http://gpu-box:11434/api/tags"]


@pytest.mark.asyncio
async def test_anthropic_listing(home: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["x-api-key"] == "sk-ant"
        assert "anthropic-version" in request.headers
        return httpx.Response(200, json={"data": [{"id": "claude-x"}]})

    async with _client(handler) as client:
        assert await fetch_live_models("anthropic", "sk-ant", client=client) == ["claude-x"]
        with pytest.raises(CatalogFetchError):
            await fetch_live_models("anthropic", "", client=client)


@pytest.mark.asyncio
async def test_custom_provider_uses_its_url(home: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://gw.example.com/v1/models"
        return httpx.Response(200, json={"data": [{"id": "gw-model"}]})

    async with _client(handler) as client:
        assert await fetch_live_models("custom:https://gw.example.com/v1", "", client=client) == ["gw-model"]


@pytest.mark.asyncio
async def test_fetch_errors(home: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "nope"})

    async with _client(handler) as client:
        with pytest.raises(CatalogFetchError) as excinfo:
            await fetch_live_models("openai", "bad", client=client)
        assert excinfo.value.status_code == 401
        with pytest.raises(CatalogFetchError):
            await fetch_live_models("bedrock", "key", client=client)
        with pytest.raises(CatalogFetchError):
            await fetch_live_models("nobody", "key", client=client)


@pytest.mark.asyncio
async def test_catalog_failure_keeps_curated_models(state: WizardState) -> None:
    async def failing(provider: str, api_key: str, api_url: str | None) -> list[str]:
        raise CatalogFetchError(provider, "offline")

    state.provider = "openrouter"
    request = request_models(state)
    result = await fetch_model_catalog(request, failing)
    assert apply_model_catalog(state, result)
    assert state.status_message.startswith("Live fetch unavailable")
    assert "anthropic/claude-sonnet-4.6" in state.available_models
    assert state.available_models[-1] == CUSTOM_MODEL_SENTINEL
    assert not state.loading


@pytest.mark.asyncio
async def test_stale_catalog_result_is_dropped(state: WizardState) -> None:
    async def live(provider: str, api_key: str, api_url: str | None) -> list[str]:
        return [f"{provider}/live"]

    state.provider = "openrouter"
    stale = request_models(state)
    state.provider = "openai"
    fresh = request_models(state)

    assert not apply_model_catalog(state, await fetch_model_catalog(stale, live))
    assert state.loading
    assert apply_model_catalog(state, await fetch_model_catalog(fresh, live))
    assert state.status_message == "Loaded live + curated model catalog"
    assert "openai/live" in state.available_models
    assert "openrouter/live" not in state.available_models


@pytest.mark.asyncio
async def test_unsendable_key_becomes_catalog_error(home: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": []})

    async with _client(handler) as client:
        with pytest.raises(CatalogFetchError):
            await fetch_live_models("openrouter", "sk-ключ", client=client)
        with pytest.raises(CatalogFetchError):
            await fetch_live_models("anthropic", "sk-ключ", client=client)


@pytest.mark.asyncio
async def test_unexpected_fetcher_error_still_applies(state: WizardState) -> None:
    async def broken(provider: str, api_key: str, api_url: str | None) -> list[str]:
        raise RuntimeError("boom")

    state.provider = "openrouter"
    result = await fetch_model_catalog(request_models(state), broken)
    assert result.error == "boom"
    assert apply_model_catalog(state, result)
    assert not state.loading
    assert state.status_message == "Live fetch unavailable: boom"
    assert state.available_models[-1] == CUSTOM_MODEL_SENTINEL
