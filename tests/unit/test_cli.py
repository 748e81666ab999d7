"""Unit tests for smarthome.cli module.

These tests verify CLI orchestration behaviour, not engine internals.
"""

from unittest.mock import Mock

import pytest

from smarthome.cli import main
from smarthome.engine.errors import StartupError

START = "SetInitialTime\t2023-03-31_14:00:00"


@pytest.fixture
def mock_runner(monkeypatch):
    """Replace CommandRunner in the CLI with a mock."""
    runner = Mock()
    monkeypatch.setattr(
        "smarthome.cli.CommandRunner",
        lambda command_path, event_bus, settings: runner,
    )
    return runner


# ---------------------------------------------------------------------
# Argument and file handling
# ---------------------------------------------------------------------

def test_main_returns_1_when_commands_not_found(capsys):
    result = main(["does_not_exist.txt"])
    assert result == 1
    err = capsys.readouterr().err
    assert "Command file not found" in err


def test_main_requires_commands_argument():
    with pytest.raises(SystemExit):
        main([])


def test_main_returns_2_when_settings_invalid(write_commands, tmp_path, capsys):
    settings = tmp_path / "settings.yaml"
    settings.write_text("bogus: 1\n", encoding="utf-8")

    result = main([str(write_commands([START])), "--config", str(settings)])

    assert result == 2
    assert "Failed to load settings" in capsys.readouterr().err


@pytest.mark.parametrize("source", ["flag", "settings"])
def test_main_returns_2_on_unknown_log_level(write_commands, tmp_path, capsys, source):
    argv = [str(write_commands([START]))]
    if source == "flag":
        argv += ["--log-level", "loud"]
    else:
        settings = tmp_path / "settings.yaml"
        settings.write_text("log_level: loud\n", encoding="utf-8")
        argv += ["--config", str(settings)]

    result = main(argv)

    assert result == 2
    err = capsys.readouterr().err
    assert "Failed to load settings: Unknown log level: loud" in err


def test_main_returns_2_when_load_fails(mock_runner, write_commands, capsys):
    mock_runner.load.side_effect = ValueError("Command file contains no commands")

    result = main([str(write_commands([START]))])

    assert result == 2
    assert "Failed to load commands" in capsys.readouterr().err


# ---------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------

def test_main_returns_3_on_startup_error(mock_runner, write_commands, capsys):
    mock_runner.run.side_effect = StartupError("First command must be set initial time!")

    result = main([str(write_commands(["Nop"]))])

    assert result == 3
    assert "Simulation aborted" in capsys.readouterr().err


def test_main_prints_to_stdout(write_commands, capsys):
    path = write_commands([START, "Add\tSmartLamp\tLamp1", "ZReport"])

    result = main([str(path)])

    assert result == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "COMMAND: " + START,
        "SUCCESS: Time has been set to 2023-03-31_14:00:00!",
        "COMMAND: Add\tSmartLamp\tLamp1",
        "COMMAND: ZReport",
        "Time is:\t2023-03-31_14:00:00",
        "Smart Lamp Lamp1 is off and its kelvin value is 4000K with 100% brightness, "
        "and its time to switch its status is null.",
    ]


def test_main_writes_output_file(write_commands, tmp_path, capsys):
    path = write_commands([START, "Nop"])
    output = tmp_path / "out" / "output.txt"

    result = main([str(path), str(output)])

    assert result == 0
    assert capsys.readouterr().out == ""
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[2:5] == ["COMMAND: Nop", "ERROR: There is nothing to switch!", "ZReport:"]


def test_main_writes_output_even_when_aborted(write_commands, tmp_path):
    output = tmp_path / "output.txt"

    result = main([str(write_commands(["Nop"])), str(output)])

    assert result == 3
    assert output.read_text(encoding="utf-8").splitlines() == [
        "COMMAND: Nop",
        "ERROR: First command must be set initial time! Program is going to terminate!",
    ]


# ---------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------

def test_practice_mode_hides_trace_lines(write_commands, capsys):
    path = write_commands(
        [START, "Add\tSmartLamp\tL", "SetSwitchTime\tL\t2023-03-31_14:05:00", "SkipMinutes\t10"]
    )

    assert main([str(path), "--mode", "practice"]) == 0
    assert "TRACE:" not in capsys.readouterr().out


def test_training_mode_shows_trace_lines(write_commands, capsys):
    path = write_commands(
        [START, "Add\tSmartLamp\tL", "SetSwitchTime\tL\t2023-03-31_14:05:00", "SkipMinutes\t10"]
    )

    assert main([str(path), "--mode", "training"]) == 0
    assert "TRACE: L switched on at 2023-03-31_14:05:00" in capsys.readouterr().out
