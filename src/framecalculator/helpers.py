"""Helpers converting between frame counts and timecode components."""

from __future__ import annotations

from typing import NamedTuple

# 29.97 DF skips the labels 00 and 01 at the start of every minute except
# every 10th minute.
DROP_FRAMES_PER_MINUTE = 2


class Components(NamedTuple):
    """Hours, minutes, seconds and frames of a displayed timecode."""

    hours: int
    minutes: int
    seconds: int
    frames: int


def frames_to_components(frames: int, nominal_rate: int, drop_frame: bool = False) -> Components:
    """Convert a frame count to displayed timecode components.

    Args:
        frames (int): An absolute (non negative) frame count.
        nominal_rate (int): The integer frame rate used for display.
        drop_frame (bool): If True the drop frame labels are used.

    Raises:
        ValueError: If frames is negative. The sign of a timecode is applied
            when formatting, never here.

    Returns:
        Components: The components of the timecode.
    """
    if frames < 0:
        raise ValueError(f"Frame count should not be negative, got {frames}")

    if drop_frame:
        frames += _skipped_labels(frames, nominal_rate)

    return _split(frames, nominal_rate)


def components_to_frames(
    hours: int,
    minutes: int,
    seconds: int,
    frames: int,
    nominal_rate: int,
    drop_frame: bool = False,
) -> int:
    """Convert displayed timecode components to a frame count.

    For drop frame, the components are read as drop frame labels and the
    labels that never were real frames are removed from the count.

    Args:
        hours (int): The hours portion of the Timecode.
        minutes (int): The minutes portion of the Timecode.
        seconds (int): The seconds portion of the Timecode.
        frames (int): The frames portion of the Timecode.
        nominal_rate (int): The integer frame rate used for display.
        drop_frame (bool): If True the components are drop frame labels.

    Returns:
        int: The number of frames.
    """
    frames_per_minute = nominal_rate * 60
    frames_per_hour = frames_per_minute * 60

    frame_number = (
        (frames_per_hour * hours)
        + (frames_per_minute * minutes)
        + (nominal_rate * seconds)
        + frames
    )

    if drop_frame:
        total_minutes = (60 * hours) + minutes
        frame_number -= DROP_FRAMES_PER_MINUTE * (total_minutes - (total_minutes // 10))

    return frame_number


def _skipped_labels(frames: int, nominal_rate: int) -> int:
    """Return the number of drop frame labels skipped before this frame."""
    frames_per_minute = nominal_rate * 60
    # 9 of the 10 minutes in a block lose their first labels
    frames_per_10_minutes = frames_per_minute * 10 - DROP_FRAMES_PER_MINUTE * 9

    blocks, remainder = divmod(frames, frames_per_10_minutes)
    skipped = blocks * 9 * DROP_FRAMES_PER_MINUTE

    # the first minute of a block keeps all its labels
    if remainder >= frames_per_minute:
        frames_per_drop_minute = frames_per_minute - DROP_FRAMES_PER_MINUTE
        extra_minutes = (remainder - frames_per_minute) // frames_per_drop_minute
        skipped += (1 + extra_minutes) * DROP_FRAMES_PER_MINUTE

    return skipped


def _split(frame_number: int, nominal_rate: int) -> Components:
    total_seconds, frs = divmod(frame_number, nominal_rate)
    total_minutes, secs = divmod(total_seconds, 60)
    hrs, mins = divmod(total_minutes, 60)
    return Components(hrs, mins, secs, frs)
