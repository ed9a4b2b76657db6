"""Frame accurate timecode calculations for video post-production."""

import logging

from .errors import (
    ArithmeticOverflow,
    ComponentOutOfRange,
    FrameRateMismatch,
    InvalidFormat,
    InvalidFrameRate,
    TimecodeError,
)
from .framerate import FrameRate
from .helpers import Components
from .timecode import Timecode, TimecodeBuilder

__version__ = "1.0.0"

__all__ = [
    "ArithmeticOverflow",
    "ComponentOutOfRange",
    "Components",
    "FrameRate",
    "FrameRateMismatch",
    "InvalidFormat",
    "InvalidFrameRate",
    "Timecode",
    "TimecodeBuilder",
    "TimecodeError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
