from __future__ import annotations

from pathlib import Path

import pytest

from zeroclaw.catalog.live import CatalogFetchError
from zeroclaw.channels import ChannelsConfig, TelegramConfig
from zeroclaw.config import Config
from zeroclaw.dashboard.actions import run
from zeroclaw.dashboard.state import DashboardState, MenuItem
from zeroclaw.tunnel import TunnelChoice, build_tunnel_config


@pytest.fixture
def config(home: Path) -> Config:
    return Config(
        workspace_dir=home / "workspace",
        config_path=home / "config.json",
        api_key="sk-test",
        default_model="anthropic/claude-sonnet-4.6",
        channels_config=ChannelsConfig.from_selection(TelegramConfig(bot_token="")),
        tunnel=build_tunnel_config(TunnelChoice.NGROK, "tok_1", "", False),
    )


async def _live(provider: str, api_key: str, api_url: str | None) -> list[str]:
    return [f"{provider}/m{index}" for index in range(25)]


async def _offline(provider: str, api_key: str, api_url: str | None) -> list[str]:
    raise CatalogFetchError(provider, "offline")


def test_menu_navigation() -> None:
    state = DashboardState()
    state.move(-1)
    assert state.selected_item() == MenuItem.HOME
    for _ in range(50):
        state.move(1)
    assert state.selected_item() == MenuItem.HARDWARE_DISCOVER


@pytest.mark.asyncio
@pytest.mark.parametrize("item", list(MenuItem))
async def test_every_item_renders(config: Config, item: MenuItem) -> None:
    lines = await run(item, config, fetcher=_live)
    assert lines[0]
    assert lines[1] == ""
    assert len(lines) > 2


@pytest.mark.asyncio
async def test_channel_doctor_reports_missing_fields(config: Config) -> None:
    lines = await run(MenuItem.CHANNEL_DOCTOR, config)
    assert "Telegram: missing bot_token" in lines


@pytest.mark.asyncio
async def test_tunnel_masks_token(config: Config) -> None:
    lines = await run(MenuItem.TUNNEL, config)
    assert "auth_token: (set)" in lines
    assert not any("tok_1" in line for line in lines)


@pytest.mark.asyncio
async def test_models_refresh(config: Config) -> None:
    lines = await run(MenuItem.MODELS_REFRESH, config, fetcher=_live)
    assert "Live models: 25" in lines
    assert lines[-1] == "... 5 more"

    lines = await run(MenuItem.MODELS_REFRESH, config, fetcher=_offline)
    assert lines[-1].startswith("Model refresh failed for provider openrouter")
