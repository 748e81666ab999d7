"""
Device records for the smart home simulator.

Every device is one ``Device`` record. The fields the scheduler and the
accrual engine care about live on the record itself; everything that only
matters to one kind of device sits in a kind-specific configuration object
selected by ``Device.kind``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union


class DeviceKind(Enum):
    CAMERA = "Smart Camera"
    PLUG = "Smart Plug"
    LAMP = "Smart Lamp"
    COLOR_LAMP = "Smart Color Lamp"

    @property
    def display_name(self) -> str:
        return self.value


DEFAULT_VOLTAGE = 220
DEFAULT_KELVIN = 4000
DEFAULT_BRIGHTNESS = 100
UNSPECIFIED_COLOR = "Not Specified"


@dataclass
class CameraConfig:
    megabytes_per_second: float = 0.0


@dataclass
class PlugConfig:
    ampere: float = 0.0
    voltage: int = DEFAULT_VOLTAGE

    @property
    def plugged(self) -> bool:
        """An ampere of zero means nothing is plugged in."""
        return self.ampere > 0


@dataclass
class LampConfig:
    kelvin: int = DEFAULT_KELVIN
    brightness: int = DEFAULT_BRIGHTNESS


@dataclass
class ColorLampConfig(LampConfig):
    color_code: str = UNSPECIFIED_COLOR
    color_mode: bool = False


DeviceConfig = Union[CameraConfig, PlugConfig, LampConfig, ColorLampConfig]


@dataclass(eq=False)
class Device:
    """
    A live device.

    ``name`` is the registry key and may change through a rename; the record
    itself keeps its identity, so references held elsewhere stay valid.
    ``pending_switch_time`` is the single scheduled toggle, if any.
    ``accrual_start_time`` is set only while the device is accruing usage and
    ``total_accrued`` only ever grows.
    """

    name: str
    kind: DeviceKind
    config: DeviceConfig
    is_on: bool = False
    pending_switch_time: datetime | None = None
    accrual_start_time: datetime | None = None
    total_accrued: float = field(default=0.0)

    @property
    def status(self) -> str:
        return "on" if self.is_on else "off"

    @property
    def is_lamp(self) -> bool:
        return self.kind in (DeviceKind.LAMP, DeviceKind.COLOR_LAMP)


def new_camera(name: str, megabytes_per_second: float) -> Device:
    return Device(name, DeviceKind.CAMERA, CameraConfig(megabytes_per_second))


def new_plug(name: str, ampere: float = 0.0, voltage: int = DEFAULT_VOLTAGE) -> Device:
    return Device(name, DeviceKind.PLUG, PlugConfig(ampere, voltage))


def new_lamp(
    name: str,
    kelvin: int = DEFAULT_KELVIN,
    brightness: int = DEFAULT_BRIGHTNESS,
) -> Device:
    return Device(name, DeviceKind.LAMP, LampConfig(kelvin, brightness))


def new_color_lamp(
    name: str,
    kelvin: int = DEFAULT_KELVIN,
    brightness: int = DEFAULT_BRIGHTNESS,
    color_code: str | None = None,
) -> Device:
    config = ColorLampConfig(kelvin, brightness)
    if color_code is not None:
        config.color_code = color_code
        config.color_mode = True
    return Device(name, DeviceKind.COLOR_LAMP, config)
