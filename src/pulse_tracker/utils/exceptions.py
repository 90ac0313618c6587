"""Error kinds and the exception type raised across the pulse tracker."""

from enum import Enum


class ErrorKind(str, Enum):
    """Enumeration of error conditions surfaced by the tracker."""

    INSUFFICIENT_INPUT = "insufficient_input"
    INVALID_INPUT = "invalid_input"
    OUT_OF_BOUNDS = "out_of_bounds"
    FILE_CREATE = "file_create"
    FILE_READ = "file_read"
    FILE_WRITE = "file_write"
    CONFIGURATION = "configuration"

    @property
    def is_fatal(self) -> bool:
        """Whether the condition must terminate the session."""
        return self in _FATAL_KINDS


_FATAL_KINDS = frozenset(
    {
        ErrorKind.FILE_CREATE,
        ErrorKind.FILE_READ,
        ErrorKind.FILE_WRITE,
        ErrorKind.CONFIGURATION,
    }
)


class PulseTrackerError(Exception):
    """Base exception for all pulse tracker errors."""

    pass


class TrackerError(PulseTrackerError):
    """
    Raised for any tracker failure, tagged with its kind.

    Attributes:
        kind: The error condition.
        message: Human-readable description shown to the user.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"TrackerError({self.kind.value!r}, {self.message!r})"


def insufficient(message: str) -> TrackerError:
    """Build an insufficient-input error."""
    return TrackerError(ErrorKind.INSUFFICIENT_INPUT, message)


def invalid(message: str) -> TrackerError:
    """Build an invalid-input error."""
    return TrackerError(ErrorKind.INVALID_INPUT, message)


def out_of_bounds(message: str) -> TrackerError:
    """Build an out-of-bounds error."""
    return TrackerError(ErrorKind.OUT_OF_BOUNDS, message)
