"""
Timestamp helpers for the virtual clock.

Simulated time is a naive ``datetime``. Commands spell it as
``yyyy-MM-dd_HH:mm:ss``; every field but the year may drop its leading zero
on input, output is always zero padded.
"""

from datetime import datetime

from smarthome.engine.errors import TimeFormat

TIME_FORMAT = "%Y-%m-%d_%H:%M:%S"
MISSING = "null"


def parse_timestamp(text: str) -> datetime:
    """
    Parse a command timestamp.

    Raises:
        TimeFormat: if the text does not match ``yyyy-MM-dd_HH:mm:ss``.
    """
    try:
        return datetime.strptime(text.strip(), TIME_FORMAT)
    except (ValueError, AttributeError):
        raise TimeFormat() from None


def format_timestamp(moment: datetime | None) -> str:
    """Render a timestamp, or ``null`` when there is none."""
    if moment is None:
        return MISSING
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}_"
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )


def minutes_between(start: datetime | None, end: datetime | None) -> int:
    """
    Whole minutes between two instants.

    Partial minutes are truncated and the result is never negative. A missing
    endpoint counts as no elapsed time.
    """
    if start is None or end is None:
        return 0
    return int(abs((end - start).total_seconds()) // 60)
