from __future__ import annotations

from pathlib import Path

import pytest

from zeroclaw.catalog import CATALOG_PATH_ENV
from zeroclaw.config import HOME_ENV
from zeroclaw.wizard.flow import ModelCatalogResult, advance, apply_model_catalog
from zeroclaw.wizard.state import WizardState, WizardStep


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "home"
    monkeypatch.setenv(HOME_ENV, str(root))
    monkeypatch.delenv(CATALOG_PATH_ENV, raising=False)
    return root


@pytest.fixture
def state(home: Path) -> WizardState:
    return WizardState.create()


def drive(
    state: WizardState,
    selections: dict[WizardStep, int] | None = None,
    texts: dict[WizardStep, str] | None = None,
    *,
    live_models: list[str] | None = None,
    limit: int = 60,
) -> WizardState:
    """Confirm every step, answering from ``selections`` and ``texts``.

    Model lookups are resolved inline with ``live_models``.
    """
    selections = selections or {}
    texts = texts or {}
    for _ in range(limit):
        if state.finished:
            break
        step = state.step
        if step in selections:
            state.select(step, selections[step])
        if step in texts:
            state.set_text(step, texts[step])
        if advance(state) == step:
            raise AssertionError(f"Wizard stuck at {step.value}")
        if state.pending_models is not None:
            apply_model_catalog(
                state,
                ModelCatalogResult(request=state.pending_models, live_models=list(live_models or [])),
            )
    return state
