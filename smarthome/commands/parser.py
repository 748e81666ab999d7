"""
Command line parser.

Commands are TAB-separated: a command word followed by its arguments. The
parser checks the argument count for each command word, converts every
argument to its typed value and returns a command payload. Any problem is
raised as an ``EngineError`` so it can be reported like any other command
failure.
"""

from collections.abc import Callable

from smarthome.commands import models
from smarthome.devices import validation
from smarthome.engine.errors import ErroneousCommand
from smarthome.engine.timestamps import parse_timestamp

SEPARATOR = "\t"
INITIAL_COMMAND = "SetInitialTime"
REPORT_COMMAND = "ZReport"


def tokenize(line: str) -> list[str]:
    return line.strip().split(SEPARATOR)


def command_word(line: str) -> str:
    return tokenize(line)[0]


def _expect(args: list[str], *counts: int) -> None:
    if len(args) not in counts:
        raise ErroneousCommand()


# ---------------------------------------------------------------------
# Add
# ---------------------------------------------------------------------

def _add_camera(args: list[str]) -> models.Command:
    _expect(args, 4, 5)
    is_on = validation.parse_status(args[4]) if len(args) == 5 else False
    return models.AddCamera(
        name=args[2],
        megabytes_per_second=validation.parse_megabytes(args[3]),
        is_on=is_on,
    )


def _add_plug(args: list[str]) -> models.Command:
    _expect(args, 3, 4, 5)
    is_on = validation.parse_status(args[3]) if len(args) >= 4 else False
    ampere = validation.parse_ampere(args[4]) if len(args) == 5 else None
    return models.AddPlug(name=args[2], is_on=is_on, ampere=ampere)


def _add_lamp(args: list[str]) -> models.Command:
    _expect(args, 3, 4, 6)
    is_on = validation.parse_status(args[3]) if len(args) >= 4 else False

    if len(args) == 6:
        return models.AddLamp(
            name=args[2],
            is_on=is_on,
            kelvin=validation.parse_kelvin(args[4]),
            brightness=validation.parse_brightness(args[5]),
        )
    return models.AddLamp(name=args[2], is_on=is_on)


def _add_color_lamp(args: list[str]) -> models.Command:
    _expect(args, 3, 4, 6)
    is_on = validation.parse_status(args[3]) if len(args) >= 4 else False

    if len(args) < 6:
        return models.AddColorLamp(name=args[2], is_on=is_on)

    if validation.is_color_code(args[4]):
        color_code = validation.parse_color_code(args[4])
        return models.AddColorLamp(
            name=args[2],
            is_on=is_on,
            brightness=validation.parse_brightness(args[5]),
            color_code=color_code,
        )

    return models.AddColorLamp(
        name=args[2],
        is_on=is_on,
        kelvin=validation.parse_kelvin(args[4]),
        brightness=validation.parse_brightness(args[5]),
    )


ADD_PARSERS: dict[str, Callable[[list[str]], models.Command]] = {
    "SmartCamera": _add_camera,
    "SmartPlug": _add_plug,
    "SmartLamp": _add_lamp,
    "SmartColorLamp": _add_color_lamp,
}


def _add(args: list[str]) -> models.Command:
    if len(args) < 3:
        raise ErroneousCommand()

    parser = ADD_PARSERS.get(args[1])
    if parser is None:
        raise ErroneousCommand()
    return parser(args)


# ---------------------------------------------------------------------
# Everything else
# ---------------------------------------------------------------------

def _set_initial_time(args: list[str]) -> models.Command:
    _expect(args, 2)
    return models.SetInitialTime(parse_timestamp(args[1]))


def _remove(args: list[str]) -> models.Command:
    _expect(args, 2)
    return models.Remove(args[1])


def _rename(args: list[str]) -> models.Command:
    _expect(args, 3)
    return models.Rename(args[1], args[2])


def _switch(args: list[str]) -> models.Command:
    _expect(args, 3)
    return models.SwitchNow(args[1], validation.parse_status(args[2]))


def _set_switch_time(args: list[str]) -> models.Command:
    _expect(args, 3)
    return models.ScheduleSwitch(args[1], parse_timestamp(args[2]))


def _set_time(args: list[str]) -> models.Command:
    _expect(args, 2)
    return models.AdvanceTo(parse_timestamp(args[1]))


def _skip_minutes(args: list[str]) -> models.Command:
    _expect(args, 2)
    return models.SkipMinutes(validation.parse_minutes(args[1]))


def _nop(args: list[str]) -> models.Command:
    _expect(args, 1)
    return models.NoOpAdvance()


def _report(args: list[str]) -> models.Command:
    _expect(args, 1)
    return models.Report()


def _plug_in(args: list[str]) -> models.Command:
    _expect(args, 3)
    return models.PlugIn(args[1], validation.parse_ampere(args[2]))


def _plug_out(args: list[str]) -> models.Command:
    _expect(args, 2)
    return models.PlugOut(args[1])


def _set_kelvin(args: list[str]) -> models.Command:
    _expect(args, 3)
    return models.SetKelvin(args[1], validation.parse_kelvin(args[2]))


def _set_brightness(args: list[str]) -> models.Command:
    _expect(args, 3)
    return models.SetBrightness(args[1], validation.parse_brightness(args[2]))


def _set_white(args: list[str]) -> models.Command:
    _expect(args, 4)
    return models.SetWhite(
        args[1],
        validation.parse_kelvin(args[2]),
        validation.parse_brightness(args[3]),
    )


def _set_color_code(args: list[str]) -> models.Command:
    _expect(args, 3)
    return models.SetColorCode(args[1], validation.parse_color_code(args[2]))


def _set_color(args: list[str]) -> models.Command:
    _expect(args, 4)
    return models.SetColor(
        args[1],
        validation.parse_color_code(args[2]),
        validation.parse_brightness(args[3]),
    )


PARSERS: dict[str, Callable[[list[str]], models.Command]] = {
    INITIAL_COMMAND: _set_initial_time,
    "Add": _add,
    "Remove": _remove,
    "ChangeName": _rename,
    "Switch": _switch,
    "SetSwitchTime": _set_switch_time,
    "SetTime": _set_time,
    "SkipMinutes": _skip_minutes,
    "Nop": _nop,
    REPORT_COMMAND: _report,
    "PlugIn": _plug_in,
    "PlugOut": _plug_out,
    "SetKelvin": _set_kelvin,
    "SetBrightness": _set_brightness,
    "SetWhite": _set_white,
    "SetColorCode": _set_color_code,
    "SetColor": _set_color,
}


def parse_command(line: str) -> models.Command:
    """
    Turn one command line into a typed command.

    Raises:
        EngineError: ``ErroneousCommand`` for unknown commands or wrong
            argument counts, ``TimeFormat`` for bad timestamps and
            ``InvalidValue`` for out-of-range device values.
    """
    args = tokenize(line)
    parser = PARSERS.get(args[0])
    if parser is None:
        raise ErroneousCommand()
    return parser(args)
