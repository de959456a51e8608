from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import drive
from zeroclaw.config import ACTIVE_WORKSPACE_FILENAME, ConfigParseError, load_config, resolve_runtime_dirs
from zeroclaw.wizard import WizardState, WizardStep, finalize_config

TELEGRAM = 1
WEBHOOK = 10
NGROK = 3
NO_MEMORY = 3


def _full_run(state: WizardState, **extra_texts: str) -> WizardState:
    texts = {
        WizardStep.API_KEY_ENTRY: "sk-test",
        WizardStep.CHANNEL_TOKEN_ENTRY: "abc123",
        WizardStep.CHANNEL_AUX_ENTRY: "alice",
        WizardStep.TUNNEL_PRIMARY_ENTRY: "tok_1",
        WizardStep.PROJECT_USER_ENTRY: "Sam",
        WizardStep.PROJECT_AGENT_ENTRY: "Claw",
    }
    texts.update({WizardStep[key.upper()]: value for key, value in extra_texts.items()})
    return drive(
        state,
        selections={
            WizardStep.CHANNEL_SELECTION: TELEGRAM,
            WizardStep.TUNNEL_SELECTION: NGROK,
            WizardStep.MEMORY_SELECTION: NO_MEMORY,
        },
        texts=texts,
    )


def test_finalize_requires_done(state: WizardState) -> None:
    with pytest.raises(ValueError):
        finalize_config(state, devices=[])
    assert not state.config_path.exists()


def test_full_onboarding_writes_everything(state: WizardState, home: Path) -> None:
    _full_run(state)
    result = finalize_config(state, devices=[])

    raw = json.loads(state.config_path.read_text(encoding="utf-8"))
    assert raw["default_provider"] == "openrouter"
    assert raw["api_key"] == "sk-test"
    assert raw["channels_config"]["telegram"]["bot_token"] == "abc123"
    assert raw["channels_config"]["telegram"]["allowed_users"] == ["alice"]
    assert raw["tunnel"]["provider"] == "ngrok"
    assert raw["tunnel"]["ngrok"]["auth_token"] == "tok_1"
    assert raw["memory"]["backend"] == "none"
    assert raw["memory"]["auto_save"] is False
    assert raw["secrets"]["encrypt"] is True
    assert raw["hardware"]["enabled"] is False

    workspace = state.workspace_dir
    for name in ("IDENTITY.md", "USER.md", "MEMORY.md"):
        assert (workspace / name).exists()
    assert "Claw" in (workspace / "IDENTITY.md").read_text(encoding="utf-8")
    assert "Sam" in (workspace / "USER.md").read_text(encoding="utf-8")
    assert (home / ACTIVE_WORKSPACE_FILENAME).exists()
    assert result.autostart_channels is True


def test_existing_workspace_files_are_kept(state: WizardState) -> None:
    identity = state.workspace_dir / "IDENTITY.md"
    identity.parent.mkdir(parents=True)
    identity.write_text("mine\n", encoding="utf-8")
    _full_run(state)
    finalize_config(state, devices=[])
    assert identity.read_text(encoding="utf-8") == "mine\n"


def test_no_autostart_without_key_or_for_webhook(home: Path) -> None:
    state = _full_run(WizardState.create(), api_key_entry="")
    assert finalize_config(state, devices=[]).autostart_channels is False

    state = drive(
        WizardState.create(force=True),
        selections={WizardStep.CHANNEL_SELECTION: WEBHOOK},
        texts={WizardStep.API_KEY_ENTRY: "sk-test"},
    )
    result = finalize_config(state, devices=[])
    assert result.config.channels_config.channels() != []
    assert result.autostart_channels is False


def test_custom_workspace_becomes_active(home: Path, tmp_path: Path) -> None:
    state = WizardState.create()
    state.use_default_workspace = False
    drive(state, texts={WizardStep.WORKSPACE_SETUP: str(tmp_path / "agent" / "workspace")})
    finalize_config(state, devices=[])

    dirs = resolve_runtime_dirs()
    assert dirs.config_dir == tmp_path / "agent"
    assert dirs.config_path.exists()
    assert (tmp_path / "agent" / "workspace" / "IDENTITY.md").exists()


def test_update_mode_only_touches_provider(state: WizardState) -> None:
    _full_run(state)
    finalize_config(state, devices=[])
    before = json.loads(state.config_path.read_text(encoding="utf-8"))
    before["plugins"] = {"keep": True}
    state.config_path.write_text(json.dumps(before), encoding="utf-8")

    update = WizardState.create()
    drive(
        update,
        selections={WizardStep.PROVIDER_TIER_SELECTION: 4, WizardStep.PROVIDER_SELECTION: 0},
        texts={WizardStep.API_KEY_ENTRY: ""},
    )
    assert update.finished
    finalize_config(update, devices=[])

    after = json.loads(update.config_path.read_text(encoding="utf-8"))
    assert after["default_provider"] == "ollama"
    assert after["api_key"] is None
    for section in ("channels_config", "tunnel", "composio", "secrets", "hardware", "memory", "plugins"):
        assert after[section] == before[section], section


def test_update_mode_with_broken_config(state: WizardState) -> None:
    state.config_path.parent.mkdir(parents=True, exist_ok=True)
    state.config_path.write_text("{broken", encoding="utf-8")
    drive(state)
    with pytest.raises(ConfigParseError):
        finalize_config(state, devices=[])
    assert state.config_path.read_text(encoding="utf-8") == "{broken"


def test_load_config_rejects_wrong_shapes(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config(path)
    path.write_text(json.dumps({"memory": "sqlite"}), encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config(path)


def test_load_config_rejects_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_bytes(b'{"default_provider": "\xff\xfe"}')
    with pytest.raises(ConfigParseError):
        load_config(path)


def test_unreadable_marker_is_ignored(home: Path) -> None:
    home.mkdir(parents=True)
    (home / ACTIVE_WORKSPACE_FILENAME).write_bytes(b'{"config_dir": "\xff"}')
    assert resolve_runtime_dirs().config_dir == home
