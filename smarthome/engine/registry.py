"""
Device registry for the smart home simulator.

The registry keeps every live device in one list that is always ordered by
pending switch time: earliest first, devices without a pending switch last.
Ties keep whatever relative order they had before the sort, which means
devices sharing a switch instant fire in the order they were lined up.

The order is re-derived with a full stable sort after every mutation that
can affect it. Callers never see the list in an unsorted state.
"""

import logging
from collections.abc import Iterator
from datetime import datetime

from smarthome.devices.models import Device
from smarthome.engine.errors import DuplicateName, NotFound, SameName
from smarthome.engine.timestamps import format_timestamp

logger = logging.getLogger(__name__)


def _switch_order(device: Device) -> tuple[bool, datetime]:
    pending = device.pending_switch_time
    if pending is None:
        return (True, datetime.min)
    return (False, pending)


class DeviceRegistry:
    """
    All live devices, keyed by name and ordered by pending switch time.

    The registry hands out live references: changes made through a device
    returned by ``find`` are visible immediately. Anything that changes a
    pending switch time must be followed by ``sort``.
    """

    def __init__(self) -> None:
        self._devices: list[Device] = []
        self._by_name: dict[str, Device] = {}

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[Device]:
        return iter(list(self._devices))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def add(self, device: Device) -> None:
        """
        Register a new device.

        Raises:
            DuplicateName: if a device with the same name already exists.
        """
        if device.name in self._by_name:
            raise DuplicateName()

        self._devices.append(device)
        self._by_name[device.name] = device
        self.sort()
        logger.debug("Registered %s %s", device.kind.display_name, device.name)

    def remove(self, name: str) -> Device:
        """
        Drop a device from the registry and return it.

        Raises:
            NotFound: if no device has that name.
        """
        device = self.find(name)
        self._devices = [d for d in self._devices if d is not device]
        del self._by_name[name]
        logger.debug("Removed %s", name)
        return device

    def rename(self, old_name: str, new_name: str) -> Device:
        """
        Change a device's key in place.

        Schedule, accrual state and registry position are untouched.

        Raises:
            SameName: if both names are equal.
            NotFound: if ``old_name`` is not registered.
            DuplicateName: if ``new_name`` is already taken.
        """
        if old_name == new_name:
            raise SameName()

        device = self.find(old_name)

        if new_name in self._by_name:
            raise DuplicateName()

        del self._by_name[old_name]
        device.name = new_name
        self._by_name[new_name] = device
        logger.debug("Renamed %s to %s", old_name, new_name)
        return device

    def find(self, name: str) -> Device:
        """
        Return the live device registered under ``name``.

        Raises:
            NotFound: if no device has that name.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise NotFound() from None

    def sort(self) -> None:
        """Re-derive the switch-time order. The sort is stable."""
        self._devices.sort(key=_switch_order)

    def sorted(self) -> list[Device]:
        """Return the devices in switch-time order."""
        return list(self._devices)

    def first_pending_switch_time(self) -> datetime | None:
        """The earliest pending switch time, or ``None`` if nothing is scheduled."""
        if not self._devices:
            return None
        return self._devices[0].pending_switch_time

    def due(self, moment: datetime) -> list[Device]:
        """
        Devices whose pending switch is at or before ``moment``.

        They are returned in registry order, which is the order they fire in.
        """
        due: list[Device] = []
        for device in self._devices:
            # Unscheduled devices sort last, so nothing after one can be due.
            if device.pending_switch_time is None:
                break
            if device.pending_switch_time > moment:
                break
            due.append(device)

        if due:
            logger.debug(
                "%d switch(es) due at %s", len(due), format_timestamp(moment)
            )
        return due
