"""
Value validation for device configuration.

Command arguments arrive as text. These helpers turn them into typed values
and enforce the ranges each device kind accepts, so the engine only ever
sees values it can use as-is.
"""

from smarthome.engine.errors import ErroneousCommand, InvalidValue

MIN_KELVIN = 2000
MAX_KELVIN = 6500
MIN_BRIGHTNESS = 0
MAX_BRIGHTNESS = 100
MAX_COLOR_CODE = 0xFFFFFF
COLOR_PREFIX = "0x"


def _to_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ErroneousCommand() from None


def _to_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        raise ErroneousCommand() from None


def parse_status(text: str) -> bool:
    """``On``/``Off`` in any case; anything else is an erroneous command."""
    status = text.strip().lower()
    if status == "on":
        return True
    if status == "off":
        return False
    raise ErroneousCommand()


def parse_kelvin(text: str) -> int:
    kelvin = _to_int(text)
    if not MIN_KELVIN <= kelvin <= MAX_KELVIN:
        raise InvalidValue(
            f"Kelvin value must be in range of {MIN_KELVIN}K-{MAX_KELVIN}K!"
        )
    return kelvin


def parse_brightness(text: str) -> int:
    brightness = _to_int(text)
    if not MIN_BRIGHTNESS <= brightness <= MAX_BRIGHTNESS:
        raise InvalidValue(
            f"Brightness must be in range of {MIN_BRIGHTNESS}%-{MAX_BRIGHTNESS}%!"
        )
    return brightness


def is_color_code(text: str) -> bool:
    return text.strip().startswith(COLOR_PREFIX)


def parse_color_code(text: str) -> str:
    """
    Validate a ``0x``-prefixed hexadecimal colour code.

    The code is returned as written, since reports echo it back verbatim.
    """
    code = text.strip()
    if not code.startswith(COLOR_PREFIX):
        raise ErroneousCommand()

    try:
        value = int(code[len(COLOR_PREFIX):], 16)
    except ValueError:
        raise ErroneousCommand() from None

    if not 0 <= value <= MAX_COLOR_CODE:
        raise InvalidValue("Color code value must be in range of 0x0-0xFFFFFF!")
    return code


def parse_ampere(text: str) -> float:
    ampere = _to_float(text)
    if not ampere > 0:
        raise InvalidValue("Ampere value must be a positive number!")
    return ampere


def parse_megabytes(text: str) -> float:
    megabytes = _to_float(text)
    if not megabytes > 0:
        raise InvalidValue("Megabyte value must be a positive number!")
    return megabytes


def parse_minutes(text: str) -> int:
    """Whole minutes to skip. Sign is left for the clock to judge."""
    return _to_int(text)
