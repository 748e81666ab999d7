"""
Accrual engine for the smart home simulator.

Cameras use storage while they are on; plugs consume energy while they are
on and something is plugged in. Each device kind that accrues anything has a
rule: a predicate saying whether the device is currently accruing, and a
formula turning elapsed whole minutes into an amount.

The engine watches every state change that could start or stop accrual.
Entering the accruing condition stamps the start time; leaving it adds the
amount for the elapsed interval to the device's running total. Totals are
kept unrounded.
"""

import copy
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime

from smarthome.devices.models import Device, DeviceConfig, DeviceKind
from smarthome.engine.timestamps import format_timestamp, minutes_between

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccrualRule:
    is_accruing: Callable[[Device], bool]
    amount: Callable[[DeviceConfig, int], float]


def _camera_storage(config, minutes: int) -> float:
    return config.megabytes_per_second * minutes


def _plug_energy(config, minutes: int) -> float:
    return (config.ampere * config.voltage * minutes) / 60


DEFAULT_RULES: dict[DeviceKind, AccrualRule] = {
    DeviceKind.CAMERA: AccrualRule(
        is_accruing=lambda device: device.is_on,
        amount=_camera_storage,
    ),
    DeviceKind.PLUG: AccrualRule(
        is_accruing=lambda device: device.is_on and device.config.plugged,
        amount=_plug_energy,
    ),
}


class AccrualEngine:
    """
    Keeps per-device usage totals correct across toggles and time jumps.

    Kinds without a rule never accrue.
    """

    def __init__(self, rules: dict[DeviceKind, AccrualRule] | None = None) -> None:
        self.rules = dict(DEFAULT_RULES if rules is None else rules)

    def is_accruing(self, device: Device) -> bool:
        rule = self.rules.get(device.kind)
        return rule is not None and rule.is_accruing(device)

    @contextmanager
    def transition(self, device: Device, now: datetime) -> Iterator[Device]:
        """
        Wrap a state change that may start or stop accrual.

        The amount for a closing interval is computed from the configuration
        in force before the change, so unplugging a load still bills it for
        the time it was running.
        """
        was_accruing = self.is_accruing(device)
        config_before = copy.copy(device.config)

        yield device

        accruing = self.is_accruing(device)

        if was_accruing and not accruing:
            self._flush(device, config_before, now)
        elif accruing and not was_accruing:
            device.accrual_start_time = now
            logger.debug(
                "%s started accruing at %s", device.name, format_timestamp(now)
            )

    def on_transition(self, device: Device, new_on_state: bool, now: datetime) -> None:
        """Switch a device on or off, settling accrual for the change."""
        with self.transition(device, now):
            device.is_on = new_on_state

    def _flush(self, device: Device, config: DeviceConfig, now: datetime) -> None:
        rule = self.rules[device.kind]
        minutes = minutes_between(device.accrual_start_time, now)
        amount = rule.amount(config, minutes)

        device.total_accrued += amount
        device.accrual_start_time = None
        logger.debug(
            "%s accrued %.2f over %d minute(s), total %.2f",
            device.name,
            amount,
            minutes,
            device.total_accrued,
        )
