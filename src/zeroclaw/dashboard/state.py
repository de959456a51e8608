"""Menu state for the read-only dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MenuItem(str, Enum):
    HOME = "Home"
    STATUS = "Status"
    PROVIDERS = "Providers"
    CONFIG_SCHEMA = "Config Schema"
    CHANNELS = "Channels"
    CHANNEL_DOCTOR = "Channel Doctor"
    TUNNEL = "Tunnel"
    MODELS_LIST = "Models List"
    MODELS_STATUS = "Models Status"
    MODELS_REFRESH = "Models Refresh (run)"
    DOCTOR = "Doctor (readonly)"
    MEMORY_STATS = "Memory Stats"
    HARDWARE_DISCOVER = "Hardware Discover (run)"

    @property
    def title(self) -> str:
        return self.value


def _initial_output() -> list[str]:
    return [
        "ZeroClaw Dashboard",
        "",
        "Use ↑/↓ to select, Enter to run, q to quit.",
    ]


@dataclass
class DashboardState:
    items: list[MenuItem] = field(default_factory=lambda: list(MenuItem))
    selected: int = 0
    output: list[str] = field(default_factory=_initial_output)

    def move(self, delta: int) -> None:
        target = self.selected + delta
        if 0 <= target < len(self.items):
            self.selected = target

    def selected_item(self) -> MenuItem:
        if 0 <= self.selected < len(self.items):
            return self.items[self.selected]
        return MenuItem.HOME
