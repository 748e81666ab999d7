"""
Switch scheduler for the smart home simulator.

This is the only place where simulated time moves. Moving the clock to a
target works in two phases:

1. Catch up: while the earliest pending switch lies strictly before the
   target, move the clock to that instant and fire every switch due there.
2. Land: move the clock to the target itself and fire the switches due
   exactly at it.

Switches sharing an instant fire together, in registry order, and the
registry is re-sorted after each batch. No pending switch between the old and
the new time is ever skipped, and every toggle settles accrual at the instant
it actually happened rather than at the end of the jump.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from smarthome.devices.models import Device
from smarthome.engine.accrual import AccrualEngine
from smarthome.engine.clock import VirtualClock
from smarthome.engine.errors import (
    InvalidValue,
    NoChange,
    NonMonotonic,
    NothingToSwitch,
    PastTime,
)
from smarthome.engine.registry import DeviceRegistry
from smarthome.engine.timestamps import format_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwitchRecord:
    """A switch that fired, kept for tracing."""

    name: str
    is_on: bool
    time: datetime


class SwitchScheduler:
    """
    Fires pending device switches in chronological order as the clock moves.
    """

    def __init__(
        self,
        clock: VirtualClock,
        registry: DeviceRegistry,
        accrual: AccrualEngine,
    ) -> None:
        self.clock = clock
        self.registry = registry
        self.accrual = accrual

    def advance_to(self, target: datetime) -> list[SwitchRecord]:
        """
        Move the clock to ``target``, firing every switch due on the way.

        Raises:
            NoChange: if ``target`` is the current time.
            NonMonotonic: if ``target`` is before the current time.
        """
        current = self.clock.now()

        if target == current:
            raise NoChange()
        if target < current:
            raise NonMonotonic()

        fired: list[SwitchRecord] = []

        while True:
            first = self.registry.first_pending_switch_time()
            if first is None or first >= target:
                break
            fired.extend(self._step(first))

        fired.extend(self._step(target))
        return fired

    def skip(self, minutes: int) -> list[SwitchRecord]:
        """
        Advance the clock by a number of minutes.

        Raises:
            NoChange: if ``minutes`` is zero.
            NonMonotonic: if ``minutes`` is negative.
            InvalidValue: if the new time is past the last representable date.
        """
        if minutes == 0:
            raise NoChange("There is nothing to skip!")
        if minutes < 0:
            raise NonMonotonic()

        try:
            target = self.clock.now() + timedelta(minutes=minutes)
        except OverflowError:
            raise InvalidValue("Time is out of range!") from None

        return self.advance_to(target)

    def nop(self) -> list[SwitchRecord]:
        """
        Jump straight to the next pending switch and fire it.

        Raises:
            NothingToSwitch: if no device has a pending switch.
        """
        first = self.registry.first_pending_switch_time()
        if first is None:
            raise NothingToSwitch()
        return self._step(first)

    def schedule(self, device: Device, moment: datetime) -> None:
        """
        Give ``device`` a pending switch at ``moment``, replacing any earlier one.

        A switch at the current instant is accepted; it fires on the next
        clock move rather than immediately.

        Raises:
            PastTime: if ``moment`` is before the current time.
        """
        if moment < self.clock.now():
            raise PastTime()

        device.pending_switch_time = moment
        self.registry.sort()
        logger.debug(
            "%s scheduled to switch at %s", device.name, format_timestamp(moment)
        )

    def switch_now(self, device: Device, turn_on: bool) -> None:
        """
        Switch a device directly, cancelling any pending switch it had.

        Raises:
            NoChange: if the device is already in the requested state.
        """
        if device.is_on == turn_on:
            raise NoChange(f"This device is already switched {device.status}!")

        self.accrual.on_transition(device, turn_on, self.clock.now())
        device.pending_switch_time = None
        self.registry.sort()
        logger.debug("%s switched %s directly", device.name, device.status)

    def _step(self, moment: datetime) -> list[SwitchRecord]:
        self.clock.move_to(moment)

        fired = [self._fire(device, moment) for device in self.registry.due(moment)]

        self.registry.sort()
        return fired

    def _fire(self, device: Device, moment: datetime) -> SwitchRecord:
        self.accrual.on_transition(device, not device.is_on, moment)
        device.pending_switch_time = None
        logger.debug(
            "%s switched %s at %s", device.name, device.status, format_timestamp(moment)
        )
        return SwitchRecord(device.name, device.is_on, moment)
