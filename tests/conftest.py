"""Test configuration and fixtures."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from smarthome.engine.simulation_engine import SmartHomeEngine  # noqa: E402


@pytest.fixture
def t0() -> datetime:
    """Base simulated time used across engine tests."""
    return datetime(2023, 3, 31, 14, 0, 0)


@pytest.fixture
def at(t0):
    """Build timestamps as minute offsets from ``t0``."""

    def _at(minutes: int, seconds: int = 0) -> datetime:
        return t0 + timedelta(minutes=minutes, seconds=seconds)

    return _at


@pytest.fixture
def engine(t0) -> SmartHomeEngine:
    """A fresh engine with its clock started at ``t0``."""
    eng = SmartHomeEngine()
    eng.set_initial_time(t0)
    return eng


@pytest.fixture
def write_commands(tmp_path):
    """Write tab-separated command lines to a file and return its path."""

    def _write(lines: list[str], name: str = "commands.txt") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def smarthome_environment(monkeypatch):
    """Set SMARTHOME_* environment overrides for a test."""
    monkeypatch.setenv("SMARTHOME_VOLTAGE", "110")
    monkeypatch.setenv("SMARTHOME_LOG_LEVEL", "debug")
    yield
