"""
Smart home simulator core package.

This package simulates cameras, plugs, lamps and colour lamps whose on/off
state evolves over a virtual timeline driven by a batch of commands.
The engine provides:
- SmartHomeEngine
- VirtualClock
- DeviceRegistry
- SwitchScheduler
- AccrualEngine
- EventBus
- CommandRunner
"""

from smarthome.engine.accrual import AccrualEngine
from smarthome.engine.clock import VirtualClock
from smarthome.engine.event_bus import EventBus
from smarthome.engine.registry import DeviceRegistry
from smarthome.engine.scheduler import SwitchScheduler

# Expose core engine components
from smarthome.engine.simulation_engine import CommandResult, SmartHomeEngine
from smarthome.engine.command_runner import CommandRunner
