# smarthome/output/device_adapter.py
from __future__ import annotations
from typing import Iterable

from smarthome.devices.models import Device, DeviceKind
from smarthome.engine.timestamps import format_timestamp
from .base import Adapter


def describe_device(device: Device) -> str:
    """One-line description of a device, as shown in reports."""
    head = f"{device.kind.display_name} {device.name} is {device.status}"
    tail = (
        ", and its time to switch its status is "
        f"{format_timestamp(device.pending_switch_time)}."
    )
    config = device.config

    if device.kind is DeviceKind.CAMERA:
        body = f" and used {device.total_accrued:.2f} MB of storage so far (excluding current status)"
    elif device.kind is DeviceKind.PLUG:
        body = f" and consumed {device.total_accrued:.2f}W so far (excluding current device)"
    elif device.kind is DeviceKind.COLOR_LAMP:
        color = config.color_code if config.color_mode else f"{config.kelvin}K"
        body = f" and its color value is {color} with {config.brightness}% brightness"
    else:
        body = f" and its kelvin value is {config.kelvin}K with {config.brightness}% brightness"

    return head + body + tail


class DeviceAdapter(Adapter):
    """Transform removals, reports and fired switches into text."""

    event_types = ("device.removed", "report.header", "report", "device.switched")

    def transform(self, event: dict) -> Iterable[str]:
        lines: list[str] = []
        event_type = event.get("event_type")

        if event_type == "device.removed":
            lines.append("SUCCESS: Information about removed smart device is as follows:")
            lines.append(describe_device(event["device"]))

        elif event_type == "report.header":
            lines.append("ZReport:")

        elif event_type == "report":
            lines.append(f"Time is:\t{format_timestamp(event.get('timestamp'))}")
            lines.extend(describe_device(device) for device in event.get("devices", []))

        elif event_type == "device.switched":
            status = "on" if event.get("is_on") else "off"
            ts = format_timestamp(event.get("timestamp"))
            lines.append(f"TRACE: {event.get('name')} switched {status} at {ts}")

        return lines
