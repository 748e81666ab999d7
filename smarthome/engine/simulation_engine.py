"""
Simulation engine for the smart home simulator.

``SmartHomeEngine`` owns the whole simulated world: one clock, one device
registry, the accrual engine and the switch scheduler. Nothing lives at
module level, so every engine is independent of every other.

Each operation is available as a method that raises an ``EngineError`` when
it cannot be carried out. ``execute`` is the boundary for command payloads:
it never raises for those errors and instead returns a ``CommandResult``
holding either the failure or the events the command produced.
"""

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from smarthome.commands import models
from smarthome.config import Settings
from smarthome.devices.models import (
    Device,
    DeviceKind,
    new_camera,
    new_color_lamp,
    new_lamp,
    new_plug,
)
from smarthome.engine.accrual import AccrualEngine
from smarthome.engine.clock import VirtualClock
from smarthome.engine.errors import (
    AlreadyPlugged,
    EngineError,
    ErrorKind,
    NothingPlugged,
    WrongKind,
)
from smarthome.engine.registry import DeviceRegistry
from smarthome.engine.scheduler import SwitchRecord, SwitchScheduler

logger = logging.getLogger(__name__)

Event = dict[str, Any]


@dataclass(frozen=True)
class ReportSnapshot:
    """The clock and a copy of every live device, in registry order."""

    time: datetime
    devices: list[Device]


@dataclass
class CommandResult:
    command: models.Command
    events: list[Event] = field(default_factory=list)
    error: EngineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind | None:
        return None if self.error is None else self.error.kind


def error_event(error: EngineError) -> Event:
    return {"event_type": "command.error", "kind": error.kind, "message": error.message}


def _switch_events(records: list[SwitchRecord]) -> list[Event]:
    return [
        {
            "event_type": "device.switched",
            "name": record.name,
            "is_on": record.is_on,
            "timestamp": record.time,
        }
        for record in records
    ]


class SmartHomeEngine:
    """
    The engine context: every piece of simulated state, and the operations on it.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.clock = VirtualClock()
        self.registry = DeviceRegistry()
        self.accrual = AccrualEngine()
        self.scheduler = SwitchScheduler(self.clock, self.registry, self.accrual)

        self._handlers: dict[type, Callable[[Any], list[Event]]] = {
            models.SetInitialTime: self._handle_set_initial_time,
            models.AddCamera: self._handle_add_camera,
            models.AddPlug: self._handle_add_plug,
            models.AddLamp: self._handle_add_lamp,
            models.AddColorLamp: self._handle_add_color_lamp,
            models.Remove: self._handle_remove,
            models.Rename: lambda c: self._quiet(self.rename, c.old_name, c.new_name),
            models.SwitchNow: lambda c: self._quiet(self.switch_now, c.name, c.turn_on),
            models.ScheduleSwitch: lambda c: self._quiet(self.schedule_switch, c.name, c.time),
            models.AdvanceTo: lambda c: _switch_events(self.advance_to(c.time)),
            models.SkipMinutes: lambda c: _switch_events(self.skip_minutes(c.minutes)),
            models.NoOpAdvance: lambda c: _switch_events(self.nop()),
            models.Report: self._handle_report,
            models.PlugIn: lambda c: self._quiet(self.plug_in, c.name, c.ampere),
            models.PlugOut: lambda c: self._quiet(self.plug_out, c.name),
            models.SetKelvin: lambda c: self._quiet(self.set_kelvin, c.name, c.kelvin),
            models.SetBrightness: lambda c: self._quiet(
                self.set_brightness, c.name, c.brightness
            ),
            models.SetWhite: lambda c: self._quiet(
                self.set_white, c.name, c.kelvin, c.brightness
            ),
            models.SetColorCode: lambda c: self._quiet(
                self.set_color_code, c.name, c.color_code
            ),
            models.SetColor: lambda c: self._quiet(
                self.set_color, c.name, c.color_code, c.brightness
            ),
        }

    # -----------------------------------------------------------------
    # Command boundary
    # -----------------------------------------------------------------

    def execute(self, command: models.Command) -> CommandResult:
        """
        Apply a command payload.

        Engine errors are captured in the result; the engine state is left as
        it was before the failing step.
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {type(command).__name__}")

        try:
            events = handler(command)
        except EngineError as exc:
            logger.debug("%s failed: %s", type(command).__name__, exc.message)
            return CommandResult(command, [error_event(exc)], exc)

        return CommandResult(command, events)

    # -----------------------------------------------------------------
    # Clock
    # -----------------------------------------------------------------

    def set_initial_time(self, moment: datetime) -> None:
        self.clock.set_initial(moment)

    def now(self) -> datetime:
        return self.clock.now()

    def advance_to(self, moment: datetime) -> list[SwitchRecord]:
        return self.scheduler.advance_to(moment)

    def skip_minutes(self, minutes: int) -> list[SwitchRecord]:
        return self.scheduler.skip(minutes)

    def nop(self) -> list[SwitchRecord]:
        return self.scheduler.nop()

    # -----------------------------------------------------------------
    # Registry
    # -----------------------------------------------------------------

    def add_device(self, device: Device, is_on: bool = False) -> Device:
        """
        Register a new device, switched off, then bring it to ``is_on``.

        Raises:
            DuplicateName: if the name is taken.
            Uninitialized: if the clock has not been started.
        """
        now = self.clock.now()
        self.registry.add(device)
        if is_on:
            self.accrual.on_transition(device, True, now)
        return device

    def remove(self, name: str) -> Device:
        """
        Remove a device and return a snapshot of its final state.

        The device is switched off on the way out, which settles any usage it
        was still accruing. A pending switch is simply discarded.
        """
        device = self.registry.find(name)
        self.accrual.on_transition(device, False, self.clock.now())
        self.registry.remove(name)
        return copy.deepcopy(device)

    def rename(self, old_name: str, new_name: str) -> Device:
        return self.registry.rename(old_name, new_name)

    def find(self, name: str) -> Device:
        return self.registry.find(name)

    def switch_now(self, name: str, turn_on: bool) -> None:
        self.scheduler.switch_now(self.registry.find(name), turn_on)

    def schedule_switch(self, name: str, moment: datetime) -> None:
        self.scheduler.schedule(self.registry.find(name), moment)

    def report(self) -> ReportSnapshot:
        return ReportSnapshot(
            time=self.clock.now(),
            devices=[copy.deepcopy(device) for device in self.registry.sorted()],
        )

    # -----------------------------------------------------------------
    # Plugs
    # -----------------------------------------------------------------

    def plug_in(self, name: str, ampere: float) -> None:
        """
        Plug a load into a plug. If the plug is on, it starts consuming.

        Raises:
            WrongKind: if the device is not a plug.
            AlreadyPlugged: if something is plugged in already.
        """
        plug = self._plug(name)
        if plug.config.plugged:
            raise AlreadyPlugged()

        with self.accrual.transition(plug, self.clock.now()):
            plug.config.ampere = ampere

    def plug_out(self, name: str) -> None:
        """
        Unplug a plug's load, settling the energy it used while on.

        Raises:
            WrongKind: if the device is not a plug.
            NothingPlugged: if the plug is empty.
        """
        plug = self._plug(name)
        if not plug.config.plugged:
            raise NothingPlugged()

        with self.accrual.transition(plug, self.clock.now()):
            plug.config.ampere = 0.0

    # -----------------------------------------------------------------
    # Lamps
    # -----------------------------------------------------------------

    def set_kelvin(self, name: str, kelvin: int) -> None:
        lamp = self._lamp(name)
        lamp.config.kelvin = kelvin
        if lamp.kind is DeviceKind.COLOR_LAMP:
            lamp.config.color_mode = False

    def set_brightness(self, name: str, brightness: int) -> None:
        self._lamp(name).config.brightness = brightness

    def set_white(self, name: str, kelvin: int, brightness: int) -> None:
        self._lamp(name)
        self.set_kelvin(name, kelvin)
        self.set_brightness(name, brightness)

    def set_color_code(self, name: str, color_code: str) -> None:
        lamp = self._color_lamp(name)
        lamp.config.color_code = color_code
        lamp.config.color_mode = True

    def set_color(self, name: str, color_code: str, brightness: int) -> None:
        lamp = self._color_lamp(name)
        lamp.config.color_code = color_code
        lamp.config.color_mode = True
        lamp.config.brightness = brightness

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    def _plug(self, name: str) -> Device:
        device = self.registry.find(name)
        if device.kind is not DeviceKind.PLUG:
            raise WrongKind.expected(DeviceKind.PLUG.display_name)
        return device

    def _lamp(self, name: str) -> Device:
        device = self.registry.find(name)
        if not device.is_lamp:
            raise WrongKind.expected(DeviceKind.LAMP.display_name)
        return device

    def _color_lamp(self, name: str) -> Device:
        device = self.registry.find(name)
        if device.kind is not DeviceKind.COLOR_LAMP:
            raise WrongKind.expected(DeviceKind.COLOR_LAMP.display_name)
        return device

    @staticmethod
    def _quiet(operation: Callable[..., Any], *args: Any) -> list[Event]:
        operation(*args)
        return []

    def _handle_set_initial_time(self, command: models.SetInitialTime) -> list[Event]:
        self.set_initial_time(command.time)
        return [{"event_type": "clock.initialized", "timestamp": self.clock.now()}]

    def _handle_add_camera(self, command: models.AddCamera) -> list[Event]:
        self.add_device(
            new_camera(command.name, command.megabytes_per_second), command.is_on
        )
        return []

    def _handle_add_plug(self, command: models.AddPlug) -> list[Event]:
        plug = new_plug(command.name, command.ampere or 0.0, self.settings.voltage)
        self.add_device(plug, command.is_on)
        return []

    def _handle_add_lamp(self, command: models.AddLamp) -> list[Event]:
        lamp = new_lamp(
            command.name,
            command.kelvin if command.kelvin is not None else self.settings.kelvin,
            command.brightness if command.brightness is not None else self.settings.brightness,
        )
        self.add_device(lamp, command.is_on)
        return []

    def _handle_add_color_lamp(self, command: models.AddColorLamp) -> list[Event]:
        lamp = new_color_lamp(
            command.name,
            command.kelvin if command.kelvin is not None else self.settings.kelvin,
            command.brightness if command.brightness is not None else self.settings.brightness,
            command.color_code,
        )
        self.add_device(lamp, command.is_on)
        return []

    def _handle_remove(self, command: models.Remove) -> list[Event]:
        return [{"event_type": "device.removed", "device": self.remove(command.name)}]

    def _handle_report(self, command: models.Report) -> list[Event]:
        snapshot = self.report()
        return [
            {
                "event_type": "report",
                "timestamp": snapshot.time,
                "devices": snapshot.devices,
            }
        ]
