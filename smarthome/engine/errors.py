"""
Error taxonomy for the smart home simulator.

Every failure a command can run into is an ``EngineError``. None of them are
fatal: the engine reports the error for the offending command and carries on
with the next one. The ``kind`` attribute lets callers branch on the failure
without parsing messages; the message is the text shown to the user.

Only ``StartupError`` ends a run, and it is raised by the command runner,
never by the engine itself.
"""

from enum import Enum


class ErrorKind(Enum):
    """Discriminator for every recoverable error the engine reports."""

    ALREADY_SET = "already_set"
    UNINITIALIZED = "uninitialized"
    NON_MONOTONIC = "non_monotonic"
    NO_CHANGE = "no_change"
    NOTHING_TO_SWITCH = "nothing_to_switch"
    DUPLICATE_NAME = "duplicate_name"
    NOT_FOUND = "not_found"
    SAME_NAME = "same_name"
    PAST_TIME = "past_time"
    TIME_FORMAT = "time_format"
    ERRONEOUS_COMMAND = "erroneous_command"
    INVALID_VALUE = "invalid_value"
    WRONG_KIND = "wrong_kind"
    ALREADY_PLUGGED = "already_plugged"
    NOTHING_PLUGGED = "nothing_plugged"


class EngineError(ValueError):
    """
    Base class for recoverable command errors.

    Subclasses pin ``kind`` and a default message; callers may pass a more
    specific message where the wording depends on state.
    """

    kind: ErrorKind = ErrorKind.ERRONEOUS_COMMAND
    default_message: str = "Erroneous command!"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadySet(EngineError):
    kind = ErrorKind.ALREADY_SET
    default_message = "Erroneous command!"


class Uninitialized(EngineError):
    kind = ErrorKind.UNINITIALIZED
    default_message = "Initial time has not been set yet!"


class NonMonotonic(EngineError):
    kind = ErrorKind.NON_MONOTONIC
    default_message = "Time cannot be reversed!"


class NoChange(EngineError):
    kind = ErrorKind.NO_CHANGE
    default_message = "There is nothing to change!"


class NothingToSwitch(EngineError):
    kind = ErrorKind.NOTHING_TO_SWITCH
    default_message = "There is nothing to switch!"


class DuplicateName(EngineError):
    kind = ErrorKind.DUPLICATE_NAME
    default_message = "There is already a smart device with same name!"


class NotFound(EngineError):
    kind = ErrorKind.NOT_FOUND
    default_message = "There is not such a device!"


class SameName(EngineError):
    kind = ErrorKind.SAME_NAME
    default_message = "Both of the names are the same, nothing changed!"


class PastTime(EngineError):
    kind = ErrorKind.PAST_TIME
    default_message = "Switch time cannot be in the past!"


class TimeFormat(EngineError):
    kind = ErrorKind.TIME_FORMAT
    default_message = "Time format is not correct!"


class ErroneousCommand(EngineError):
    kind = ErrorKind.ERRONEOUS_COMMAND
    default_message = "Erroneous command!"


class InvalidValue(EngineError):
    kind = ErrorKind.INVALID_VALUE
    default_message = "Value is out of range!"


class WrongKind(EngineError):
    kind = ErrorKind.WRONG_KIND
    default_message = "This device is not of the requested type!"

    @classmethod
    def expected(cls, display_name: str) -> "WrongKind":
        return cls(f"This device is not a {display_name.lower()}!")


class AlreadyPlugged(EngineError):
    kind = ErrorKind.ALREADY_PLUGGED
    default_message = "There is already an item plugged in to that plug!"


class NothingPlugged(EngineError):
    kind = ErrorKind.NOTHING_PLUGGED
    default_message = "This plug has no item to plug out from that plug!"


class StartupError(RuntimeError):
    """
    Raised when a command file cannot start a simulation.

    This is the only condition that aborts a run: the first command is not a
    well-formed ``SetInitialTime`` or its timestamp cannot be parsed.
    """
