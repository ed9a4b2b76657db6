"""FrameRate class describing the constant frame rates a Timecode runs at."""

from __future__ import annotations

import logging
import math
import sys
from fractions import Fraction
from numbers import Real
from typing import Any, ClassVar

from .errors import InvalidFrameRate

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

logger = logging.getLogger(__name__)

MAX_CUSTOM_FRAME_RATE = 1000

# Only the named rates and FrameRate.custom construct instances.
_CONSTRUCT = object()

#%%
class FrameRate:
    """A constant video frame rate.

    The supported rates are the named broadcast and film rates exposed as
    class attributes (``FrameRate.FPS_24``, ``FrameRate.FPS_29_97_DF`` ...)
    plus any custom rate created with :meth:`custom`. Instances are
    immutable and hashable; two rates are equal when they are the same
    named rate, or when both are custom with the same value.

    Do not instantiate this class directly, use the named rates or
    :meth:`custom`.
    """

    FPS_23_976: ClassVar[FrameRate]
    FPS_24: ClassVar[FrameRate]
    FPS_25: ClassVar[FrameRate]
    FPS_29_97_DF: ClassVar[FrameRate]
    FPS_29_97_NDF: ClassVar[FrameRate]
    FPS_30: ClassVar[FrameRate]
    FPS_50: ClassVar[FrameRate]
    FPS_59_94: ClassVar[FrameRate]
    FPS_60: ClassVar[FrameRate]

    _standard_rates: ClassVar[dict[str, FrameRate]] = {}

    __slots__ = (
        "_key",
        "_custom_value",
        "_exact_fps",
        "_nominal",
        "_drop_frame",
        "_display_name",
        "_accessibility_name",
    )

    def __init__(
        self,
        key: str,
        exact_fps: Fraction,
        nominal: int,
        drop_frame: bool = False,
        display_name: str | None = None,
        accessibility_name: str | None = None,
        custom_value: float | None = None,
        *,
        _token: object = None,
    ) -> None:
        if _token is not _CONSTRUCT:
            raise TypeError(
                f"{__class__.__name__} cannot be instantiated directly, use "
                f"the named rates or {__class__.__name__}.custom()"
            )
        set_ = object.__setattr__
        set_(self, "_key", key)
        set_(self, "_custom_value", custom_value)
        set_(self, "_exact_fps", exact_fps)
        set_(self, "_nominal", nominal)
        set_(self, "_drop_frame", drop_frame)
        set_(self, "_display_name", display_name or str(exact_fps))
        set_(
            self,
            "_accessibility_name",
            accessibility_name or f"{self._display_name} frames per second",
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{__class__.__name__} instances are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{__class__.__name__} instances are immutable")

    ####

    @classmethod
    def custom(cls, rate: float) -> Self:
        """Create a custom frame rate.

        Args:
            rate (float): Frames per second, must be bigger than zero and not
                bigger than 1000.

        Raises:
            InvalidFrameRate: If the rate is not a real number or is out of
                range.

        Returns:
            FrameRate: The custom frame rate.
        """
        if isinstance(rate, bool) or not isinstance(rate, Real):
            raise InvalidFrameRate(
                f"Custom frame rate should be a number, not a "
                f"{rate.__class__.__name__}"
            )
        rate = float(rate)
        # NaN fails both comparisons
        if not 0 < rate <= MAX_CUSTOM_FRAME_RATE:
            raise InvalidFrameRate(
                f"Custom frame rate must be in (0, {MAX_CUSTOM_FRAME_RATE}], "
                f"got {rate}"
            )
        # Round half away from zero, never below one frame per second.
        nominal = max(1, math.floor(rate + 0.5))
        display_name = f"{rate:.3g}"
        logger.debug("created custom frame rate %s (nominal %d)", rate, nominal)
        return cls(
            "custom",
            Fraction(rate),
            nominal,
            display_name=display_name,
            accessibility_name=f"{display_name} frames per second, custom",
            custom_value=rate,
            _token=_CONSTRUCT,
        )

    @classmethod
    def all_standard_rates(cls) -> list[FrameRate]:
        """Return the named frame rates in display order.

        Returns:
            list[FrameRate]: Every frame rate except custom ones.
        """
        return list(cls._standard_rates.values())

    @classmethod
    def from_fps(cls, fps: float) -> FrameRate:
        """Match a detected media frame rate to a named frame rate.

        29.97 is matched to the non-drop variant, the drop frame display is
        a choice the user makes. Rates that do not match any named rate
        become custom rates.

        Args:
            fps (float): Frames per second as reported by the media.

        Raises:
            InvalidFrameRate: If fps is not a number or is out of range.

        Returns:
            FrameRate: The matching frame rate.
        """
        try:
            fps = float(fps)
        except (TypeError, ValueError):
            raise InvalidFrameRate(f"Invalid frame rate: {fps!r}") from None
        candidates = (
            (23.976, Fraction(24000, 1001), cls.FPS_23_976),
            (24.0, None, cls.FPS_24),
            (25.0, None, cls.FPS_25),
            (29.97, Fraction(30000, 1001), cls.FPS_29_97_NDF),
            (30.0, None, cls.FPS_30),
            (50.0, None, cls.FPS_50),
            (59.94, Fraction(60000, 1001), cls.FPS_59_94),
            (60.0, None, cls.FPS_60),
        )
        for label, exact, rate in candidates:
            if abs(fps - label) < 0.01:
                return rate
            if exact is not None and abs(fps - float(exact)) < 0.001:
                return rate
        return cls.custom(fps)

    @classmethod
    def coerce(cls, value: FrameRate | str | float | Fraction | tuple[int, int]) -> FrameRate:
        """Convert the given value to a FrameRate.

        Args:
            value (FrameRate | str | float | Fraction | tuple[int, int]): A
                FrameRate is returned as is. A str can be a key like
                "fps29_97_df", a display name like "29.97 DF" or a number. A
                number, Fraction or (numerator, denominator) tuple is matched
                with :meth:`from_fps`.

        Raises:
            InvalidFrameRate: If the value can not be converted.

        Returns:
            FrameRate: The frame rate.
        """
        if isinstance(value, FrameRate):
            return value

        if isinstance(value, str):
            text = value.strip()
            lowered = text.lower()
            for rate in cls._standard_rates.values():
                if lowered in (rate.key, rate.display_name.lower()):
                    return rate
            try:
                return cls.from_fps(float(Fraction(text)))
            except (ValueError, ZeroDivisionError):
                raise InvalidFrameRate(f"Unknown frame rate: {value!r}") from None

        if isinstance(value, (tuple, list)):
            try:
                numerator, denominator = map(int, value)
                return cls.from_fps(float(Fraction(numerator, denominator)))
            except (ValueError, TypeError, ZeroDivisionError):
                raise InvalidFrameRate(f"Unknown frame rate: {value!r}") from None

        if isinstance(value, Real) and not isinstance(value, bool):
            if not 0 < value <= MAX_CUSTOM_FRAME_RATE:
                raise InvalidFrameRate(f"Invalid frame rate: {value}")
            return cls.from_fps(float(value))

        raise InvalidFrameRate(
            f"Type {value.__class__.__name__} can not be used as a frame rate."
        )

    ####

    @property
    def key(self) -> str:
        """Stable identifier of the rate, "custom" for custom rates."""
        return self._key

    @property
    def is_custom(self) -> bool:
        return self._custom_value is not None

    @property
    def custom_value(self) -> float | None:
        """The custom frames per second value, None for named rates."""
        return self._custom_value

    @property
    def nominal_frame_rate(self) -> int:
        """The integer frame rate used for timecode display.

        29.97 displays as if it were 30fps.

        Returns:
            int: Frames per second used for component math.
        """
        return self._nominal

    @property
    def frames_per_second(self) -> float:
        """The true frames per second, e.g. 23.976... for 24000/1001."""
        return float(self._exact_fps)

    @property
    def exact_frames_per_second(self) -> Fraction:
        """The true frames per second as an exact ratio."""
        return self._exact_fps

    @property
    def is_drop_frame(self) -> bool:
        """True only for the 29.97 drop frame display."""
        return self._drop_frame

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def accessibility_name(self) -> str:
        return self._accessibility_name

    ####

    def to_dict(self) -> dict[str, Any]:
        """Return the stored representation of this frame rate.

        Returns:
            dict: ``{"type": key}`` and, for custom rates, ``"custom_value"``.
        """
        if self.is_custom:
            return {"type": "custom", "custom_value": self._custom_value}
        return {"type": self._key}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FrameRate:
        """Create a frame rate from its stored representation.

        Args:
            data (dict): A dict as returned by :meth:`to_dict`.

        Raises:
            InvalidFrameRate: If the type is unknown or the custom value is
                missing or invalid.

        Returns:
            FrameRate: The frame rate.
        """
        try:
            rate_type = data["type"]
        except (KeyError, TypeError):
            raise InvalidFrameRate(f"Frame rate type missing in {data!r}") from None

        if rate_type == "custom":
            if "custom_value" not in data:
                raise InvalidFrameRate("Custom frame rate value missing")
            return cls.custom(data["custom_value"])

        try:
            return cls._standard_rates[rate_type]
        except (KeyError, TypeError):
            raise InvalidFrameRate(f"Unknown frame rate type: {rate_type!r}") from None

    ####

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrameRate):
            return NotImplemented
        return (self._key, self._custom_value) == (other._key, other._custom_value)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((self._key, self._custom_value))

    def __str__(self) -> str:
        return self._display_name

    def __repr__(self) -> str:
        if self.is_custom:
            return f"{__class__.__name__}.custom({self._custom_value!r})"
        return f"{__class__.__name__}.{self._key.upper().replace('FPS', 'FPS_', 1)}"

    def __reduce__(self):
        if self.is_custom:
            return (FrameRate.custom, (self._custom_value,))
        return (_standard_rate, (self._key,))
####


def _standard_rate(key: str) -> FrameRate:
    return FrameRate._standard_rates[key]


def _register(name: str, key: str, exact_fps: Fraction, nominal: int,
              display_name: str, accessibility_name: str,
              drop_frame: bool = False) -> None:
    rate = FrameRate(
        key,
        exact_fps,
        nominal,
        drop_frame=drop_frame,
        display_name=display_name,
        accessibility_name=accessibility_name,
        _token=_CONSTRUCT,
    )
    FrameRate._standard_rates[key] = rate
    setattr(FrameRate, name, rate)


_register("FPS_23_976", "fps23_976", Fraction(24000, 1001), 24,
          "23.976", "23.976 frames per second")
_register("FPS_24", "fps24", Fraction(24), 24, "24", "24 frames per second")
_register("FPS_25", "fps25", Fraction(25), 25, "25", "25 frames per second")
_register("FPS_29_97_DF", "fps29_97_df", Fraction(30000, 1001), 30,
          "29.97 DF", "29.97 drop frame", drop_frame=True)
_register("FPS_29_97_NDF", "fps29_97_ndf", Fraction(30000, 1001), 30,
          "29.97 NDF", "29.97 non-drop frame")
_register("FPS_30", "fps30", Fraction(30), 30, "30", "30 frames per second")
_register("FPS_50", "fps50", Fraction(50), 50, "50", "50 frames per second")
_register("FPS_59_94", "fps59_94", Fraction(60000, 1001), 60,
          "59.94", "59.94 frames per second")
_register("FPS_60", "fps60", Fraction(60), 60, "60", "60 frames per second")
