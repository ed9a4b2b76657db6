"""Timecode class for handling timecode calculations."""

# Standard Library Imports
from __future__ import annotations

import logging
import math
import re
import sys
from fractions import Fraction
from typing import Any

from .errors import (
    ArithmeticOverflow,
    ComponentOutOfRange,
    FrameRateMismatch,
    InvalidFormat,
)
from .framerate import FrameRate
from .helpers import Components, components_to_frames, frames_to_components

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

logger = logging.getLogger(__name__)

FRAMES_MIN = -(2**63)
FRAMES_MAX = 2**63 - 1

SCHEMA_VERSION = 1

_FRAME_COUNT_RE = re.compile(r"\d+", re.ASCII)
_TIMECODE_RE = re.compile(r"(\d{1,2}):(\d{1,2}):(\d{1,2})([:;])(\d{1,2})", re.ASCII)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _checked(frames: int) -> int:
    if not FRAMES_MIN <= frames <= FRAMES_MAX:
        raise ArithmeticOverflow(
            f"Frame count {frames} does not fit in a signed 64-bit integer"
        )
    return frames


def _round_half_away(value: Fraction) -> int:
    rounded = math.floor(abs(value) + Fraction(1, 2))
    return -rounded if value < 0 else rounded

#%%
class Timecode:
    """The main timecode class.

    Does all the calculation over frames, so the main data it holds is frames,
    then when required it converts the frames to a timecode by using the frame
    rate. Timecodes are immutable, every operation returns a new instance.

    Args:
        framerate (FrameRate | str | float): The frame rate of the Timecode
            instance. Anything accepted by :meth:`FrameRate.coerce`, so
            "29.97 DF", "fps24" or 25 work as well as ``FrameRate.FPS_25``.
        start_timecode (None | str | Timecode): The start timecode. A str is
            parsed with :meth:`parse`, the frame count of a Timecode is
            reused as is. Takes priority over ``frames`` and
            ``start_seconds``.
        start_seconds (None | float | Fraction): A duration in seconds,
            rounded to the nearest frame.
        frames (None | int): The total frame count, may be negative.

    If none of ``start_timecode``, ``frames`` and ``start_seconds`` is given
    the Timecode is at frame 0.
    """

    __slots__ = ("_frames", "_framerate")

    def __init__(
        self,
        framerate: FrameRate | str | float,
        start_timecode: str | Timecode | None = None,
        start_seconds: None | float | Fraction = None,
        frames: int | None = None,
    ) -> None:
        framerate = FrameRate.coerce(framerate)
        object.__setattr__(self, "_framerate", framerate)
        object.__setattr__(
            self,
            "_frames",
            self._dispatch_frames(
                framerate,
                start_timecode=start_timecode,
                start_seconds=start_seconds,
                frames=frames,
            ),
        )

    @staticmethod
    def _dispatch_frames(framerate: FrameRate, **kwargs) -> int:
        """Helper to dispatch the arguments to get the Timecode frames count.

        Args:
            framerate (FrameRate): The frame rate to interpret the values with.
            kwargs (dict): dictionary of possible input values to set the frame
            count. The following order of priority applies:
                1. start_timecode: Timecode string, or Timecode object.
                2. frames: frames count of the Timecode.
                3. start_seconds: float or fraction in seconds.

        Returns:
            int: The frame count.
        """
        if (start_timecode := kwargs.get("start_timecode")) is not None:
            if isinstance(start_timecode, Timecode):
                return start_timecode.frames
            return Timecode.parse(start_timecode, framerate).frames
        if (frames := kwargs.get("frames")) is not None:
            if not _is_int(frames):
                raise TypeError(
                    f"{__class__.__name__}.frames should be an integer, "
                    f"not a {frames.__class__.__name__}"
                )
            return frames
        if (start_seconds := kwargs.get("start_seconds")) is not None:
            try:
                seconds = Fraction(start_seconds)
            except ValueError:
                raise InvalidFormat(f"Invalid duration: {start_seconds!r}") from None
            except OverflowError:
                raise ArithmeticOverflow(
                    f"Duration {start_seconds!r} is out of range"
                ) from None
            return _checked(
                _round_half_away(seconds * framerate.exact_frames_per_second)
            )
        return 0

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{__class__.__name__} instances are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{__class__.__name__} instances are immutable")

    def __reduce__(self):
        return (self.__class__, (self._framerate, None, None, self._frames))

    ####

    @classmethod
    def from_frames(cls, frames: int, framerate: FrameRate) -> Self:
        """Create a Timecode from a frame count.

        Args:
            frames (int): The frame count, may be negative.
            framerate (FrameRate): The frame rate.

        Returns:
            Timecode: The new Timecode.
        """
        return cls(framerate, frames=frames)

    @classmethod
    def from_components(
        cls,
        hours: int,
        minutes: int,
        seconds: int,
        frames: int,
        framerate: FrameRate,
    ) -> Self:
        """Create a Timecode from its displayed components.

        For drop frame rates the components are read as drop frame labels.

        Args:
            hours (int): The hours portion of the Timecode, unbounded.
            minutes (int): The minutes portion, 0-59.
            seconds (int): The seconds portion, 0-59.
            frames (int): The frames portion, 0 to the nominal frame rate - 1.
            framerate (FrameRate): The frame rate.

        Raises:
            ComponentOutOfRange: If a component is out of its range.
            ArithmeticOverflow: If the frame count does not fit in a signed
                64-bit integer.

        Returns:
            Timecode: The new Timecode.
        """
        framerate = FrameRate.coerce(framerate)
        nominal = framerate.nominal_frame_rate
        for name, value, limit in (
            ("hours", hours, None),
            ("minutes", minutes, 60),
            ("seconds", seconds, 60),
            ("frames", frames, nominal),
        ):
            if not _is_int(value):
                raise TypeError(
                    f"{name} should be an integer, not a {value.__class__.__name__}"
                )
            if value < 0 or (limit is not None and value >= limit):
                raise ComponentOutOfRange(name, value, limit)

        total = components_to_frames(
            hours, minutes, seconds, frames, nominal, framerate.is_drop_frame
        )
        return cls(framerate, frames=_checked(total))

    @classmethod
    def from_seconds(cls, seconds: float | Fraction, framerate: FrameRate) -> Self:
        """Create a Timecode from a duration in seconds.

        The duration is rounded to the nearest frame, halves away from zero.

        Args:
            seconds (float | Fraction): The duration in seconds.
            framerate (FrameRate): The frame rate.

        Raises:
            InvalidFormat: If the duration is NaN.
            ArithmeticOverflow: If the duration is infinite or too long to
                count in a signed 64-bit integer.

        Returns:
            Timecode: The new Timecode.
        """
        return cls(framerate, start_seconds=seconds)

    @classmethod
    def zero(cls, framerate: FrameRate) -> Self:
        """Return a Timecode at frame 0."""
        return cls(framerate, frames=0)

    @classmethod
    def parse(cls, timecode: str, framerate: FrameRate) -> Self:
        """Parse a timecode string.

        Accepts "HH:MM:SS:FF", "HH:MM:SS;FF" or a bare frame count, each
        optionally prefixed with "-" and surrounded by whitespace. The given
        frame rate decides how the string is read, the frame separator does
        not.

        Args:
            timecode (str): The string to parse.
            framerate (FrameRate): The frame rate.

        Raises:
            InvalidFormat: If the string does not look like a timecode.
            ComponentOutOfRange: If a component is out of range for the
                frame rate.
            ArithmeticOverflow: If the frame count does not fit in a signed
                64-bit integer.

        Returns:
            Timecode: The new Timecode.
        """
        if not isinstance(timecode, str):
            raise InvalidFormat(
                f"Timecode should be a str, not a {timecode.__class__.__name__}"
            )
        framerate = FrameRate.coerce(framerate)

        text = timecode.strip()
        negative = text.startswith("-")
        unsigned = text[1:] if negative else text

        if _FRAME_COUNT_RE.fullmatch(unsigned):
            try:
                frames = int(unsigned)
            except ValueError:
                # past the int string conversion limit
                raise ArithmeticOverflow(
                    "Frame count does not fit in a signed 64-bit integer"
                ) from None
        else:
            (hrs, mins, secs, frs), delimiter = cls.parse_timecode(unsigned)
            if (delimiter == ";") != framerate.is_drop_frame:
                logger.debug(
                    "%r uses the %r separator, reading it as %s",
                    timecode,
                    delimiter,
                    framerate.display_name,
                )
            frames = cls.from_components(hrs, mins, secs, frs, framerate).frames

        if negative:
            frames = -frames
        frames = _checked(frames)
        logger.debug("parsed %r at %s as %d frames", timecode, framerate, frames)
        return cls(framerate, frames=frames)

    @classmethod
    def parse_timecode(cls, timecode: str) -> tuple[Components, str]:
        """Split an unsigned "HH:MM:SS:FF" or "HH:MM:SS;FF" string.

        No range checks are done here, see :meth:`from_components`.

        Args:
            timecode (str): The string to split.

        Raises:
            InvalidFormat: If the string does not match.

        Returns:
            (Components, str): The components and the frame separator.
        """
        match = _TIMECODE_RE.fullmatch(timecode)
        if match is None:
            raise InvalidFormat(
                f"Invalid timecode format {timecode!r}. "
                "Expected HH:MM:SS:FF or HH:MM:SS;FF"
            )
        hrs, mins, secs, delimiter, frs = match.groups()
        return Components(int(hrs), int(mins), int(secs), int(frs)), delimiter

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Timecode from its stored representation.

        Args:
            data (dict): A dict as returned by :meth:`to_dict`.

        Raises:
            InvalidFormat: If the version is unknown or a field is missing.
            InvalidFrameRate: If the stored frame rate is invalid.

        Returns:
            Timecode: The stored Timecode.
        """
        if not isinstance(data, dict):
            raise InvalidFormat(f"Expected a dict, not a {data.__class__.__name__}")
        version = data.get("version")
        if version != SCHEMA_VERSION:
            raise InvalidFormat(f"Unsupported timecode schema version: {version!r}")
        try:
            frames = data["frames"]
            frame_rate = data["frame_rate"]
        except KeyError as e:
            raise InvalidFormat(f"Missing timecode field: {e.args[0]}") from None
        if not _is_int(frames):
            raise InvalidFormat(f"Stored frame count should be an integer: {frames!r}")
        return cls(FrameRate.from_dict(frame_rate), frames=frames)

    def to_dict(self) -> dict[str, Any]:
        """Return the stored representation of this Timecode.

        Returns:
            dict: A JSON compatible dict with a schema version.
        """
        return {
            "version": SCHEMA_VERSION,
            "frames": self._frames,
            "frame_rate": self._framerate.to_dict(),
        }

    ####

    @property
    def frames(self) -> int:
        """Return the frame count, negative for negative durations."""
        return self._frames

    @property
    def framerate(self) -> FrameRate:
        return self._framerate

    @property
    def is_negative(self) -> bool:
        return self._frames < 0

    @property
    def components(self) -> Components:
        """Return the displayed components of the absolute frame count.

        For drop frame these are the drop frame labels.

        Returns:
            Components: hours, minutes, seconds and frames.
        """
        return frames_to_components(
            abs(self._frames),
            self._framerate.nominal_frame_rate,
            self._framerate.is_drop_frame,
        )

    @property
    def hours(self) -> int:
        return self.components.hours

    @property
    def minutes(self) -> int:
        return self.components.minutes

    @property
    def seconds(self) -> int:
        return self.components.seconds

    @property
    def frame_component(self) -> int:
        """Return the frames part of the timecode."""
        return self.components.frames

    @property
    def frame_delimiter(self) -> str:
        """Return the frame separator, ";" for drop frame and ":" otherwise."""
        return ";" if self._framerate.is_drop_frame else ":"

    @property
    def duration_in_seconds(self) -> float:
        """Return the duration in seconds at the true frame rate."""
        return float(self.exact_duration())

    def exact_duration(self) -> Fraction:
        """Return the duration in seconds as an exact fraction."""
        return Fraction(self._frames) / self._framerate.exact_frames_per_second

    ####

    def converting_rate(self, framerate: FrameRate) -> Self:
        """Return the same frame count displayed at another frame rate.

        Use this when the media is the same but displayed at a different
        rate.

        Args:
            framerate (FrameRate): The new frame rate.

        Returns:
            Timecode: The converted Timecode.
        """
        return self.__class__(framerate, frames=self._frames)

    def converting_duration(self, framerate: FrameRate) -> Self:
        """Return the same real-world duration at another frame rate.

        Args:
            framerate (FrameRate): The new frame rate.

        Returns:
            Timecode: The converted Timecode, rounded to the nearest frame.
        """
        return self.__class__(framerate, start_seconds=self.exact_duration())

    def next_frame(self) -> Self:
        """Return the Timecode one frame later."""
        return self + 1

    def previous_frame(self) -> Self:
        """Return the Timecode one frame earlier."""
        return self - 1

    def formatted(self, always_show_sign: bool = False) -> str:
        """Format the Timecode as a string.

        Args:
            always_show_sign (bool): If True, "+" is shown for positive and
                zero Timecodes.

        Returns:
            str: e.g. "01:02:03:04", "01:02:03;04" for drop frame or
                "-00:30:00:00".
        """
        if self._frames < 0:
            sign = "-"
        elif always_show_sign:
            sign = "+"
        else:
            sign = ""

        hrs, mins, secs, frs = self.components
        return (
            f"{sign}{hrs:02d}:{mins:02d}:{secs:02d}"
            f"{self.frame_delimiter}{frs:02d}"
        )

    ####

    def _other_frames(self, other: object, operation: str) -> int | None:
        """Return the frame count of the other operand, or None if unsupported.

        Args:
            other (int | str | Timecode): An int frame count, a str parsed at
                the frame rate of this Timecode, or a Timecode with the same
                frame rate.
            operation (str): Used in the mismatch error message.

        Raises:
            FrameRateMismatch: If other is a Timecode with another frame rate.
        """
        if isinstance(other, Timecode):
            if other._framerate != self._framerate:
                raise FrameRateMismatch(self._framerate, other._framerate, operation)
            return other._frames
        if _is_int(other):
            return other
        if isinstance(other, str):
            return Timecode.parse(other, self._framerate)._frames
        return None

    def __eq__(self, other: object) -> bool:
        """Override the equality operator.

        Args:
            other (int | str | Timecode): Either an int representing the
                number of frames, a str representing a Timecode at the frame
                rate of this one, or a Timecode with the same frame rate.

        Raises:
            FrameRateMismatch: If other is a Timecode with another frame rate.

        Returns:
            bool: True if the other is equal to this Timecode instance.
        """
        frames = self._other_frames(other, "compare")
        if frames is None:
            return NotImplemented
        return self._frames == frames

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other: int | str | Timecode) -> bool:
        frames = self._other_frames(other, "compare")
        if frames is None:
            return NotImplemented
        return self._frames < frames

    def __le__(self, other: int | str | Timecode) -> bool:
        frames = self._other_frames(other, "compare")
        if frames is None:
            return NotImplemented
        return self._frames <= frames

    def __gt__(self, other: int | str | Timecode) -> bool:
        frames = self._other_frames(other, "compare")
        if frames is None:
            return NotImplemented
        return self._frames > frames

    def __ge__(self, other: int | str | Timecode) -> bool:
        frames = self._other_frames(other, "compare")
        if frames is None:
            return NotImplemented
        return self._frames >= frames

    def __hash__(self) -> int:
        return hash((self._frames, self._framerate))

    def __add__(self, other: int | Timecode) -> Self:
        """Return a new Timecode with the given timecode or frames added to this one.

        Args:
            other (int | Timecode): Either an int value or a Timecode with the
                same frame rate in which the frames are used for the
                calculation.

        Raises:
            FrameRateMismatch: If other is a Timecode with another frame rate.
            ArithmeticOverflow: If the result does not fit in 64 bits.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        if isinstance(other, str):
            return NotImplemented
        frames = self._other_frames(other, "add")
        if frames is None:
            return NotImplemented
        return self.__class__(self._framerate, frames=_checked(self._frames + frames))

    def __radd__(self, other: int) -> Self:
        if not _is_int(other):
            return NotImplemented
        return self.__add__(other)

    def __sub__(self, other: int | Timecode) -> Self:
        """Return a new Timecode instance with subtracted value.

        The result is negative when other is bigger than this Timecode.

        Args:
            other (int | Timecode): The number to subtract, either an integer or
                another Timecode with the same frame rate.

        Raises:
            FrameRateMismatch: If other is a Timecode with another frame rate.
            ArithmeticOverflow: If the result does not fit in 64 bits.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        if isinstance(other, str):
            return NotImplemented
        frames = self._other_frames(other, "subtract")
        if frames is None:
            return NotImplemented
        return self.__class__(self._framerate, frames=_checked(self._frames - frames))

    def __mul__(self, other: int) -> Self:
        """Return a new Timecode instance with multiplied value.

        Args:
            other (int): The integer multiplier.

        Raises:
            ArithmeticOverflow: If the result does not fit in 64 bits.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        if not _is_int(other):
            return NotImplemented
        return self.__class__(self._framerate, frames=_checked(self._frames * other))

    def __rmul__(self, other: int) -> Self:
        return self.__mul__(other)

    def __truediv__(self, other: int) -> Self:
        """Return a new Timecode instance with divided value.

        The frame count is truncated toward zero.

        Args:
            other (int): The integer divisor.

        Raises:
            ZeroDivisionError: If other is zero.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        if not _is_int(other):
            return NotImplemented
        quotient = abs(self._frames) // abs(other)
        if (self._frames < 0) != (other < 0):
            quotient = -quotient
        return self.__class__(self._framerate, frames=_checked(quotient))

    def __neg__(self) -> Self:
        return self.__class__(self._framerate, frames=_checked(-self._frames))

    def __abs__(self) -> Self:
        return self.__class__(self._framerate, frames=_checked(abs(self._frames)))

    def __float__(self) -> float:
        """Convert this Timecode instance to a float representation (seconds).

        Returns:
            float: The duration in seconds.
        """
        return self.duration_in_seconds

    def __str__(self) -> str:
        """Return the actual Timecode as a string.

        Returns:
            str: The string of this Timecode.
        """
        return self.formatted()

    def __repr__(self) -> str:
        """Return the string representation of this Timecode instance.

        Returns:
            str: The string representation of this Timecode instance.
        """
        # use frames= as that is agnostic to drop_frame
        return f"{__class__.__name__}({self._framerate!r}, frames={self._frames})"
####

#%%
class TimecodeBuilder:
    """Helper class to pre-configure instantiation of Timecodes.

    A list of kwargs of class Timecode can be provided to the builder, which
    will be used when the builder instance is called to create new Timecodes.
    Typically this binds the project frame rate once::

        project_tc = TimecodeBuilder(framerate=FrameRate.FPS_29_97_DF)
        start = project_tc("01:00:00;00")

    Args:
        kwargs (dict): list of pre-configured arguments for the Timecodes
        instantiated by calling this builder. Refer to Timecode docu.
    """

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs

    def __call__(self, *args, **kwargs) -> Timecode:
        """Create a Timecode combining the preconfigured and user arguments.

        Positional arguments are read after the frame rate: a
        ``start_timecode`` when the builder holds the frame rate.

        Returns:
            Timecode: timecode instance given the arguments.
        """
        kwargs = self.kwargs | kwargs
        if args and "framerate" in kwargs:
            kwargs["start_timecode"] = args[0]
            args = args[1:]
        return Timecode(*args, **kwargs)
####
