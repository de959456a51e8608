from __future__ import annotations

import json
import os
from pathlib import Path
import subprocess
import sys

from zeroclaw.config import Config, save_config


def _run_cli(home: Path, *args: str) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONDONTWRITEBYTECODE"] = "1"
    env["ZEROCLAW_HOME"] = str(home)
    return subprocess.run(
        [sys.executable, "-m", "zeroclaw.cli", *args],
        capture_output=True,
        text=True,
        env=env,
    )


def test_validator_exit_codes(tmp_path: Path) -> None:
    valid_path = tmp_path / "valid.json"
    save_config(Config(workspace_dir=tmp_path / "workspace", config_path=valid_path))
    result_valid = _run_cli(tmp_path / "home", "config", "validate", "--path", str(valid_path))
    assert result_valid.returncode == 0

    invalid_path = tmp_path / "invalid.json"
    invalid_path.write_text("{}", encoding="utf-8")
    result_invalid = _run_cli(tmp_path / "home", "config", "validate", "--path", str(invalid_path))
    assert result_invalid.returncode == 1

    broken_path = tmp_path / "broken.json"
    broken_path.write_text("{broken", encoding="utf-8")
    assert _run_cli(tmp_path / "home", "config", "validate", "--path", str(broken_path)).returncode == 1
    assert (tmp_path / "home" / "logs" / "zeroclaw.log").exists()


def test_show_and_dashboard_need_a_config(tmp_path: Path) -> None:
    home = tmp_path / "home"
    assert _run_cli(home, "dashboard").returncode == 1
    assert _run_cli(home, "config", "show").returncode == 1

    save_config(Config(workspace_dir=home / "workspace", config_path=home / "config.json", api_key="sk-secret"))
    shown = _run_cli(home, "config", "show")
    assert shown.returncode == 0
    assert "openrouter" in shown.stdout
    assert "sk-secret" not in shown.stdout


def test_validate_reports_unknown_tunnel(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    save_config(Config(workspace_dir=tmp_path / "workspace", config_path=path))
    raw = json.loads(path.read_text(encoding="utf-8"))
    raw["tunnel"] = {"provider": "wormhole"}
    path.write_text(json.dumps(raw), encoding="utf-8")
    result = _run_cli(tmp_path / "home", "config", "validate", "--path", str(path))
    assert result.returncode == 1
