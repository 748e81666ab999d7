# smarthome/output/adapter.py
from pathlib import Path
from typing import Iterable

from .base import Adapter
from .command_adapter import CommandAdapter
from .device_adapter import DeviceAdapter


TRACE_PREFIX = "TRACE:"


class OutputAdapter:
    """Dispatch events to the adapter that renders their event type."""

    def __init__(self, adapters: Iterable[Adapter] | None = None):
        if adapters is None:
            adapters = (CommandAdapter(), DeviceAdapter())

        self.adapters: dict[str, Adapter] = {}
        for adapter in adapters:
            for event_type in adapter.event_types:
                self.adapters[event_type] = adapter

    def transform(self, event: dict) -> list[str]:
        adapter = self.adapters.get(event.get("event_type"))
        if adapter:
            return list(adapter.transform(event))
        return []


def write_output_lines(events: Iterable[dict], output_file_path: str, include_trace: bool = False) -> None:
    """
    Render events and write them to a file, one line per output line.

    TRACE lines are only written when ``include_trace`` is set.
    """
    adapter = OutputAdapter()
    output_file = Path(output_file_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with output_file.open("w", encoding="utf-8") as f:
        for event in events:
            for line in adapter.transform(event):
                if not include_trace and line.startswith(TRACE_PREFIX):
                    continue
                f.write(line + "\n")
