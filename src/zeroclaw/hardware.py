"""Hardware discovery and the ``hardware`` config section."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

HARDWARE_CHOICES = [
    "Native GPIO (Raspberry Pi and similar)",
    "Serial tethered board (Arduino, ESP32, Nucleo)",
    "Probe (SWD/JTAG)",
    "Software only",
]
DEFAULT_HARDWARE_CHOICE = 3
DEFAULT_BAUD_RATE = 115200

_SERIAL_PATTERNS = ("ttyUSB*", "ttyACM*", "cu.usbmodem*", "cu.usbserial*")


@dataclass(frozen=True)
class DiscoveredDevice:
    name: str
    transport: str
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HardwareConfig:
    enabled: bool = False
    transport: str = "none"
    serial_port: str | None = None
    baud_rate: int = DEFAULT_BAUD_RATE
    probe_target: str | None = None
    workspace_datasheets: bool = False
    discovered: list[DiscoveredDevice] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["discovered"] = [device.to_dict() for device in self.discovered]
        return payload

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "HardwareConfig":
        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in raw.items() if key in known}
        values["discovered"] = [
            DiscoveredDevice(**item) for item in raw.get("discovered") or [] if isinstance(item, dict)
        ]
        return cls(**values)


def discover_hardware(dev_root: Path = Path("/dev"), sys_root: Path = Path("/sys")) -> list[DiscoveredDevice]:
    """Best-effort scan for serial boards, probes and GPIO chips."""
    devices: list[DiscoveredDevice] = []
    try:
        for pattern in _SERIAL_PATTERNS:
            for path in sorted(dev_root.glob(pattern)):
                devices.append(DiscoveredDevice(name=path.name, transport="serial", path=str(path)))
        gpio_dir = sys_root / "class" / "gpio"
        if gpio_dir.is_dir():
            for path in sorted(gpio_dir.glob("gpiochip*")):
                devices.append(DiscoveredDevice(name=path.name, transport="native", path=str(path)))
    except OSError as exc:
        logger.warning("Hardware discovery failed: %s", exc)
    logger.debug("Discovered %d hardware device(s)", len(devices))
    return devices


def config_from_wizard_choice(choice: int, devices: list[DiscoveredDevice]) -> HardwareConfig:
    if choice == 0:
        return HardwareConfig(enabled=True, transport="native", discovered=list(devices))
    if choice == 1:
        serial = next((device for device in devices if device.transport == "serial"), None)
        return HardwareConfig(
            enabled=True,
            transport="serial",
            serial_port=serial.path if serial else None,
            discovered=list(devices),
        )
    if choice == 2:
        probe = next((device for device in devices if device.transport == "probe"), None)
        return HardwareConfig(
            enabled=True,
            transport="probe",
            probe_target=probe.name if probe else None,
            discovered=list(devices),
        )
    return HardwareConfig(discovered=list(devices))
