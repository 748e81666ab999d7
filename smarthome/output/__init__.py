# smarthome/output/__init__.py
from .base import Adapter
from .adapter import OutputAdapter, TRACE_PREFIX, write_output_lines
from .command_adapter import CommandAdapter
from .device_adapter import DeviceAdapter, describe_device

__all__ = [
    "Adapter",
    "OutputAdapter",
    "TRACE_PREFIX",
    "write_output_lines",
    "CommandAdapter",
    "DeviceAdapter",
    "describe_device",
]
