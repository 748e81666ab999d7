"""
Virtual clock for the smart home simulator.

This clock exists to decouple device schedules from wall-clock time.
Commands move it explicitly; nothing in the simulator ever sleeps or reads
the host's time.

The clock only records and moves the current instant. Firing the switches
that fall due while time moves is the job of the switch scheduler, which is
the only caller of ``move_to``.
"""

import logging
from datetime import datetime

from smarthome.engine.errors import AlreadySet, NonMonotonic, Uninitialized
from smarthome.engine.timestamps import format_timestamp

logger = logging.getLogger(__name__)


class VirtualClock:
    """
    A single monotonic simulated instant.

    The initial time is set exactly once, before anything else happens, and
    also becomes the current time. From then on the current time may only
    move forwards.
    """

    def __init__(self) -> None:
        self._initial_time: datetime | None = None
        self._current_time: datetime | None = None

    @property
    def is_initialized(self) -> bool:
        return self._initial_time is not None

    def set_initial(self, moment: datetime) -> None:
        """
        Set the initial time and start the clock there.

        Raises:
            AlreadySet: if the initial time was set before.
        """
        if self._initial_time is not None:
            raise AlreadySet()

        self._initial_time = moment
        self._current_time = moment
        logger.debug("Clock initialised at %s", format_timestamp(moment))

    def now(self) -> datetime:
        """
        Return the current simulated time.

        Raises:
            Uninitialized: if no initial time has been set.
        """
        if self._current_time is None:
            raise Uninitialized()
        return self._current_time

    def initial(self) -> datetime:
        """
        Return the time the simulation started at.

        Raises:
            Uninitialized: if no initial time has been set.
        """
        if self._initial_time is None:
            raise Uninitialized()
        return self._initial_time

    def move_to(self, moment: datetime) -> None:
        """
        Move the clock to ``moment``.

        Staying at the current instant is allowed here; refusing a
        zero-length advance is a decision for the command layer.

        Raises:
            NonMonotonic: if ``moment`` is before the current time.
        """
        current = self.now()

        if moment < current:
            raise NonMonotonic(
                f"Cannot move clock backwards from {format_timestamp(current)} "
                f"to {format_timestamp(moment)}"
            )

        if moment != current:
            logger.debug(
                "Clock moved from %s to %s",
                format_timestamp(current),
                format_timestamp(moment),
            )
        self._current_time = moment
