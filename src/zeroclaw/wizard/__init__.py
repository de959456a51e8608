"""Onboarding wizard package."""

from zeroclaw.wizard.finalize import FinalizeResult, finalize_config
from zeroclaw.wizard.flow import advance
from zeroclaw.wizard.state import WizardState, WizardStep

__all__ = ["FinalizeResult", "WizardState", "WizardStep", "advance", "finalize_config"]
