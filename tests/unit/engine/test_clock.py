"""
Unit tests for smarthome/engine/clock.py
"""

from datetime import datetime, timedelta

import pytest

from smarthome.engine.clock import VirtualClock
from smarthome.engine.errors import AlreadySet, ErrorKind, NonMonotonic, Uninitialized

T0 = datetime(2023, 3, 31, 14, 0, 0)


class TestVirtualClock:
    """Test suite for the VirtualClock class."""

    def test_initialization(self):
        """Test that a new clock has no time yet."""
        clock = VirtualClock()
        assert clock.is_initialized is False

    def test_now_before_initial_raises(self):
        """Test that reading the clock before setting it fails."""
        clock = VirtualClock()

        with pytest.raises(Uninitialized) as exc_info:
            clock.now()

        assert exc_info.value.kind is ErrorKind.UNINITIALIZED

    def test_initial_before_set_raises(self):
        """Test that the initial time cannot be read before it is set."""
        with pytest.raises(Uninitialized):
            VirtualClock().initial()

    def test_set_initial_sets_both_times(self):
        """Test that set_initial starts the clock at the initial time."""
        clock = VirtualClock()
        clock.set_initial(T0)

        assert clock.is_initialized is True
        assert clock.now() == T0
        assert clock.initial() == T0

    def test_set_initial_twice_raises(self):
        """Test that the initial time can only be set once."""
        clock = VirtualClock()
        clock.set_initial(T0)

        with pytest.raises(AlreadySet):
            clock.set_initial(T0 + timedelta(hours=1))

        assert clock.initial() == T0
        assert clock.now() == T0

    def test_move_to_future(self):
        """Test moving the clock forwards."""
        clock = VirtualClock()
        clock.set_initial(T0)

        clock.move_to(T0 + timedelta(minutes=5))

        assert clock.now() == T0 + timedelta(minutes=5)
        assert clock.initial() == T0, "Initial time must never change"

    def test_move_to_same_time_is_allowed(self):
        """Test that staying at the current instant is not an error at this layer."""
        clock = VirtualClock()
        clock.set_initial(T0)

        clock.move_to(T0)

        assert clock.now() == T0

    def test_move_backwards_raises(self):
        """Test that the clock refuses to go backwards and keeps its time."""
        clock = VirtualClock()
        clock.set_initial(T0)
        clock.move_to(T0 + timedelta(minutes=10))

        with pytest.raises(NonMonotonic) as exc_info:
            clock.move_to(T0)

        assert "Cannot move clock backwards" in str(exc_info.value)
        assert "from 2023-03-31_14:10:00 to 2023-03-31_14:00:00" in str(exc_info.value)
        assert clock.now() == T0 + timedelta(minutes=10)

    def test_move_before_initial_raises(self):
        """Test that moving an unset clock fails."""
        with pytest.raises(Uninitialized):
            VirtualClock().move_to(T0)


def test_clock_is_deterministic():
    """Test that two clocks given the same moves agree."""
    clock1 = VirtualClock()
    clock2 = VirtualClock()

    for clock in (clock1, clock2):
        clock.set_initial(T0)
        clock.move_to(T0 + timedelta(minutes=10))
        clock.move_to(T0 + timedelta(minutes=20))

    assert clock1.now() == clock2.now()


def test_monotonic_over_many_moves():
    """Test that successful moves never decrease the time."""
    clock = VirtualClock()
    clock.set_initial(T0)
    seen = [clock.now()]

    for offset in (1, 1, 5, 30, 30, 31, 600):
        clock.move_to(T0 + timedelta(minutes=offset))
        seen.append(clock.now())

    assert seen == sorted(seen)
