"""Exceptions raised by the timecode calculations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .framerate import FrameRate


class TimecodeError(Exception):
    """Raised when an error occurred in timecode calculation."""


class InvalidFrameRate(TimecodeError, ValueError):
    """Raised for a custom frame rate outside (0, 1000] or an unknown rate."""


class InvalidFormat(TimecodeError, ValueError):
    """Raised when a string or a stored value has no recognizable shape."""


class ComponentOutOfRange(TimecodeError, ValueError):
    """Raised when a timecode component is outside its valid band.

    Args:
        component (str): One of "hours", "minutes", "seconds" or "frames".
        value (int): The rejected value.
        limit (int | None): The exclusive upper bound of the component, None
            for hours which are unbounded.
    """

    def __init__(self, component: str, value: int, limit: int | None) -> None:
        self.component = component
        self.value = value
        self.limit = limit
        if limit is None:
            message = f"{component} must not be negative, got {value}"
        else:
            message = f"{component} must be 0-{limit - 1}, got {value}"
        super().__init__(message)


class FrameRateMismatch(TimecodeError):
    """Raised when two Timecodes with different frame rates are combined.

    Args:
        left (FrameRate): Frame rate of the left operand.
        right (FrameRate): Frame rate of the right operand.
        operation (str): The attempted operation, used in the message.
    """

    def __init__(self, left: FrameRate, right: FrameRate, operation: str) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot {operation} timecodes with different frame rates: "
            f"{left.display_name} and {right.display_name}"
        )


class ArithmeticOverflow(TimecodeError, OverflowError):
    """Raised when a frame count leaves the signed 64-bit range."""
