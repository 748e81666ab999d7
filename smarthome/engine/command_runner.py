"""
Command runner for the smart home simulator.

Responsibilities:

- Load a command file (tab-separated text, or YAML with a ``commands`` list)
- Start the clock from the mandatory first ``SetInitialTime`` command
- Feed every following command through the engine, in file order
- Publish everything that happens on the EventBus
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from smarthome.commands.parser import (
    INITIAL_COMMAND,
    REPORT_COMMAND,
    SEPARATOR,
    command_word,
    parse_command,
    tokenize,
)
from smarthome.commands import models
from smarthome.config import Settings
from smarthome.engine.errors import EngineError, StartupError, TimeFormat
from smarthome.engine.event_bus import EventBus
from smarthome.engine.simulation_engine import SmartHomeEngine, error_event

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
FIRST_COMMAND_MESSAGE = "First command must be set initial time! Program is going to terminate!"
INITIAL_FORMAT_MESSAGE = "Format of the initial date is wrong! Program is going to terminate!"


def _yaml_line(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, list):
        return SEPARATOR.join(str(token) for token in entry)
    raise ValueError(f"Command entries must be strings or lists, got {type(entry).__name__}")


class CommandRunner:
    """
    Executes one command file against a fresh engine.
    """

    def __init__(
        self,
        command_path: Path,
        event_bus: EventBus,
        settings: Settings | None = None,
    ) -> None:
        self.command_path = command_path
        self.event_bus = event_bus
        self.settings = settings or Settings()
        self.engine = SmartHomeEngine(self.settings)
        self.lines: list[str] = []

    def load(self) -> None:
        """
        Read the command file and keep its non-blank lines, trimmed.
        """
        with self.command_path.open("r", encoding=self.settings.encoding) as fh:
            if self.command_path.suffix.lower() in YAML_SUFFIXES:
                raw = self._load_yaml(fh)
            else:
                raw = fh.read().splitlines()

        self.lines = [line.strip() for line in raw if line.strip()]

        if not self.lines:
            raise ValueError("Command file contains no commands")

    def _load_yaml(self, fh) -> list[str]:
        document = yaml.safe_load(fh)

        if not isinstance(document, dict):
            raise ValueError("Command file must be a YAML mapping (dict)")

        if "commands" not in document:
            raise ValueError("Command file is missing a 'commands' section")

        if not isinstance(document["commands"], list):
            raise ValueError("'commands' must be a list of commands")

        return [_yaml_line(entry) for entry in document["commands"]]

    def run(self, close_bus: bool = False) -> None:
        """
        Run every loaded command.

        Args:
            close_bus: whether to close the EventBus after execution

        Raises:
            StartupError: if the first command cannot start the clock. The
                reason is published before raising.
        """
        if not self.lines:
            raise ValueError("No commands loaded; call load() first")

        self._start(self.lines[0])

        for line in self.lines[1:]:
            self.execute_line(line)

        if command_word(self.lines[-1]) != REPORT_COMMAND:
            self.event_bus.publish({"event_type": "report.header"})
            for event in self.engine.execute(models.Report()).events:
                self.event_bus.publish(event)

        if close_bus:
            self.event_bus.close()

    def execute_line(self, line: str) -> None:
        """Echo, parse and execute a single command line."""
        self.event_bus.publish({"event_type": "command.received", "line": line})

        try:
            command = parse_command(line)
        except EngineError as exc:
            self.event_bus.publish(error_event(exc))
            return

        # A second SetInitialTime reaches the engine and fails as AlreadySet.
        for event in self.engine.execute(command).events:
            self.event_bus.publish(event)

    def _start(self, line: str) -> None:
        self.event_bus.publish({"event_type": "command.received", "line": line})

        args = tokenize(line)
        if args[0] != INITIAL_COMMAND or len(args) != 2:
            self._abort(FIRST_COMMAND_MESSAGE)

        try:
            command = parse_command(line)
        except TimeFormat:
            self._abort(INITIAL_FORMAT_MESSAGE)

        for event in self.engine.execute(command).events:
            self.event_bus.publish(event)
        logger.info("Simulation started at %s", args[1])

    def _abort(self, message: str) -> None:
        self.event_bus.publish({"event_type": "run.aborted", "message": message})
        raise StartupError(message)
