# smarthome/cli.py

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List
import signal

import yaml

from smarthome.config import check_log_level, load_settings
from smarthome.engine.command_runner import CommandRunner
from smarthome.engine.errors import StartupError
from smarthome.engine.event_bus import EventBus
from smarthome.output.adapter import TRACE_PREFIX, OutputAdapter, write_output_lines


def main(argv: list[str] | None = None) -> int | None:
    parser = argparse.ArgumentParser(
        prog="smart-home-sim",
        description="Run a smart home command file against a simulated clock",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "commands",
        type=Path,
        help="Path to the command file (tab-separated text or YAML)",
    )
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=None,
        help="Path to the output file; lines go to stdout when omitted",
    )
    parser.add_argument(
        "--mode",
        choices=["practice", "training"],
        default="practice",
        help=(
            "Select mode: 'practice' for the plain command log, "
            "'training' adds a TRACE: line for every switch the clock fires"
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML settings file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for engine diagnostics (overrides settings)",
    )

    args = parser.parse_args(argv)

    if not args.commands.exists():
        print(f"Command file not found: {args.commands}", file=sys.stderr)
        return 1

    try:
        settings = load_settings(args.config)
        log_level = check_log_level(args.log_level or settings.log_level)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Failed to load settings: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Initialize components
    event_bus = EventBus()
    adapter = OutputAdapter()
    include_trace = args.mode == "training"

    events: List[dict[str, Any]] = []

    def handle_event(event: dict[str, Any]) -> None:
        events.append(event)

        if args.output is not None:
            return

        for line in adapter.transform(event):
            if not include_trace and line.startswith(TRACE_PREFIX):
                continue
            print(line)

    event_bus.subscribe(handle_event)

    runner = CommandRunner(command_path=args.commands, event_bus=event_bus, settings=settings)

    try:
        runner.load()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Failed to load commands: {exc}", file=sys.stderr)
        return 2

    exit_code = 0
    try:
        runner.run(close_bus=True)
    except StartupError as exc:
        print(f"Simulation aborted: {exc}", file=sys.stderr)
        exit_code = 3

    # The output file is written even when the run aborted at startup
    if args.output is not None:
        try:
            write_output_lines(events, str(args.output), include_trace=include_trace)
        except OSError as exc:
            print(f"Failed to write output file: {exc}", file=sys.stderr)
            return 4

    return exit_code


if __name__ == "__main__":

    signal.signal(signal.SIGPIPE, signal.SIG_DFL)  # Ignore broken pipe
    sys.exit(main())
