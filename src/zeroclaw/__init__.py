"""Onboarding wizard and dashboard for zeroclaw agents."""

__version__ = "0.4.0"
