# smarthome/output/command_adapter.py
from __future__ import annotations
from typing import Iterable

from smarthome.engine.timestamps import format_timestamp
from .base import Adapter


class CommandAdapter(Adapter):
    """Echo commands and report their success or failure."""

    event_types = ("command.received", "clock.initialized", "command.error", "run.aborted")

    def transform(self, event: dict) -> Iterable[str]:
        lines: list[str] = []
        event_type = event.get("event_type")

        if event_type == "command.received":
            lines.append(f"COMMAND: {event.get('line', '')}")

        elif event_type == "clock.initialized":
            ts = format_timestamp(event.get("timestamp"))
            lines.append(f"SUCCESS: Time has been set to {ts}!")

        elif event_type in ("command.error", "run.aborted"):
            lines.append(f"ERROR: {event.get('message', 'Erroneous command!')}")

        return lines
