"""
Typed command payloads.

Each command line parses into exactly one of these. By the time a payload
exists its values have been validated, so the engine can apply it without
further checks on syntax or ranges.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class SetInitialTime:
    time: datetime


@dataclass(frozen=True)
class AddCamera:
    name: str
    megabytes_per_second: float
    is_on: bool = False


@dataclass(frozen=True)
class AddPlug:
    name: str
    is_on: bool = False
    ampere: float | None = None


@dataclass(frozen=True)
class AddLamp:
    name: str
    is_on: bool = False
    kelvin: int | None = None
    brightness: int | None = None


@dataclass(frozen=True)
class AddColorLamp:
    name: str
    is_on: bool = False
    kelvin: int | None = None
    brightness: int | None = None
    color_code: str | None = None


@dataclass(frozen=True)
class Remove:
    name: str


@dataclass(frozen=True)
class Rename:
    old_name: str
    new_name: str


@dataclass(frozen=True)
class SwitchNow:
    name: str
    turn_on: bool


@dataclass(frozen=True)
class ScheduleSwitch:
    name: str
    time: datetime


@dataclass(frozen=True)
class AdvanceTo:
    time: datetime


@dataclass(frozen=True)
class SkipMinutes:
    minutes: int


@dataclass(frozen=True)
class NoOpAdvance:
    pass


@dataclass(frozen=True)
class Report:
    pass


@dataclass(frozen=True)
class PlugIn:
    name: str
    ampere: float


@dataclass(frozen=True)
class PlugOut:
    name: str


@dataclass(frozen=True)
class SetKelvin:
    name: str
    kelvin: int


@dataclass(frozen=True)
class SetBrightness:
    name: str
    brightness: int


@dataclass(frozen=True)
class SetWhite:
    name: str
    kelvin: int
    brightness: int


@dataclass(frozen=True)
class SetColorCode:
    name: str
    color_code: str


@dataclass(frozen=True)
class SetColor:
    name: str
    color_code: str
    brightness: int


Command = Union[
    SetInitialTime,
    AddCamera,
    AddPlug,
    AddLamp,
    AddColorLamp,
    Remove,
    Rename,
    SwitchNow,
    ScheduleSwitch,
    AdvanceTo,
    SkipMinutes,
    NoOpAdvance,
    Report,
    PlugIn,
    PlugOut,
    SetKelvin,
    SetBrightness,
    SetWhite,
    SetColorCode,
    SetColor,
]
