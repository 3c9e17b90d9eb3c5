"""SRT timestamp parsing, formatting and millisecond arithmetic.

WHY: Every allocated word boundary is produced by adding milliseconds to a
textual timecode. Doing that arithmetic on integer milliseconds, and only
converting to text at the edges, keeps the chain of word intervals free of
floating-point drift.

HOW: parse_timestamp() and format_timestamp() convert between the fixed
"HH:MM:SS,mmm" text form and the Timestamp record. timestamp_to_ms() and
ms_to_timestamp() convert between the record and an integer millisecond
offset from 00:00:00,000. duration_ms() and add_ms() are built on top.

RULES:
- Only "HH:MM:SS,mmm" with exactly 2, 2, 2 and 3 ASCII digits is accepted
- Minutes and seconds above 59 are rejected
- Surrounding whitespace is stripped before matching
- ms_to_timestamp() clamps negatives to zero and rounds halves up
- duration_ms() may return a negative value; callers decide what it means
"""

from __future__ import annotations

import math
import re
from datetime import timedelta

from srt_word_splitter.core.ir import Timestamp

_TIMESTAMP_RE = re.compile(r"([0-9]{2}):([0-9]{2}):([0-9]{2}),([0-9]{3})")

_MS_PER_HOUR = 3_600_000
_MS_PER_MINUTE = 60_000
_MS_PER_SECOND = 1_000


class MalformedTimestamp(ValueError):
    """Raised when a timecode does not match "HH:MM:SS,mmm".

    RULES:
    - text holds the offending input exactly as received
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid timestamp format: {text!r} (expected HH:MM:SS,mmm)")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending .5 towards positive infinity.

    Python's round() uses banker's rounding; allocation shares and smoothing
    steps need the same tie-breaking everywhere, so all of them go through
    this helper.
    """
    return int(math.floor(value + 0.5))


def parse_timestamp(text: str) -> Timestamp:
    """Parse an SRT timecode string into a Timestamp.

    Args:
        text: Timecode such as "00:01:02,345".

    Returns:
        The parsed Timestamp.

    Raises:
        MalformedTimestamp: On wrong separators, digit counts, non-digits,
            or minutes/seconds outside 0-59.
    """
    if not isinstance(text, str):
        raise MalformedTimestamp(str(text))
    match = _TIMESTAMP_RE.fullmatch(text.strip())
    if match is None:
        raise MalformedTimestamp(text)

    hours, minutes, seconds, milliseconds = (int(g) for g in match.groups())
    if minutes > 59 or seconds > 59:
        raise MalformedTimestamp(text)

    return Timestamp(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        milliseconds=milliseconds,
    )


def format_timestamp(timestamp: Timestamp) -> str:
    """Format a Timestamp as "HH:MM:SS,mmm" with zero padding."""
    return "{:02d}:{:02d}:{:02d},{:03d}".format(
        timestamp.hours,
        timestamp.minutes,
        timestamp.seconds,
        timestamp.milliseconds,
    )


def timestamp_to_ms(timestamp: Timestamp) -> int:
    """Total milliseconds since 00:00:00,000."""
    return (
        timestamp.hours * _MS_PER_HOUR
        + timestamp.minutes * _MS_PER_MINUTE
        + timestamp.seconds * _MS_PER_SECOND
        + timestamp.milliseconds
    )


def ms_to_timestamp(total_ms: float) -> Timestamp:
    """Decompose a millisecond offset into a Timestamp.

    RULES:
    - Negative input is clamped to zero
    - Fractional input is rounded to the nearest millisecond (halves up)
    - timestamp_to_ms(ms_to_timestamp(x)) == max(0, round_half_up(x))
    """
    ms = max(0, round_half_up(total_ms))
    return Timestamp(
        hours=ms // _MS_PER_HOUR,
        minutes=(ms % _MS_PER_HOUR) // _MS_PER_MINUTE,
        seconds=(ms % _MS_PER_MINUTE) // _MS_PER_SECOND,
        milliseconds=ms % _MS_PER_SECOND,
    )


def duration_ms(start: str, end: str) -> int:
    """Milliseconds from start to end; negative when end precedes start."""
    return timestamp_to_ms(parse_timestamp(end)) - timestamp_to_ms(parse_timestamp(start))


def add_ms(text: str, delta: float) -> str:
    """Shift a timecode by delta milliseconds, clamping at 00:00:00,000."""
    total = timestamp_to_ms(parse_timestamp(text)) + delta
    return format_timestamp(ms_to_timestamp(total))


# ---------------------------------------------------------------------------
# Bridges to the srt library, which models timecodes as timedelta
# ---------------------------------------------------------------------------

def timedelta_to_timestamp(value: timedelta) -> str:
    """Convert a timedelta (as produced by srt.parse) to canonical text."""
    return format_timestamp(ms_to_timestamp(value / timedelta(milliseconds=1)))


def timestamp_to_timedelta(text: str) -> timedelta:
    """Convert canonical timecode text to a timedelta for srt.compose."""
    return timedelta(milliseconds=timestamp_to_ms(parse_timestamp(text)))
