from __future__ import annotations

import asyncio

import pytest

from zeroclaw.ui.app import WizardApp
from zeroclaw.wizard.state import WizardState, WizardStep


@pytest.mark.asyncio
async def test_model_fetch_runs_as_screen_worker(state: WizardState) -> None:
    release = asyncio.Event()

    async def gated(provider: str, api_key: str, api_url: str | None) -> list[str]:
        await release.wait()
        return ["x/live"]

    state.provider = "openrouter"
    state.step = WizardStep.API_KEY_ENTRY
    app = WizardApp(state, gated)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()
        assert state.step == WizardStep.MODEL_SELECTION
        assert state.loading

        workers = [worker for worker in app.workers if worker.group == "models"]
        assert len(workers) == 1
        assert workers[0].node is app.screen

        release.set()
        for _ in range(50):
            await pilot.pause(0.1)
            if not state.loading:
                break
        assert not state.loading
        assert "x/live" in state.available_models
