"""Storage helpers for config documents."""

from __future__ import annotations

import json
from pathlib import Path
import tempfile
from typing import Any


def write_json(path: Path, payload: dict) -> None:
    """Write ``payload`` as pretty JSON via temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=True)
    fd, tmp = tempfile.mkstemp(suffix=".json", prefix=f"{path.stem}_", dir=path.parent)
    try:
        with open(fd, "w", encoding="utf-8") as handle:
            handle.write(f"{data}\n")
        Path(tmp).replace(path)
    except Exception:
        Path(tmp).unlink(missing_ok=True)
        raise


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_text_if_missing(path: Path, content: str) -> bool:
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True
