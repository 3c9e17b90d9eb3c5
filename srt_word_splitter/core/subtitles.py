"""Reading and composing SRT subtitles with the srt library.

WHY: The allocator works on SentenceInterval records with canonical
"HH:MM:SS,mmm" timecodes. This module is the only place that knows about
the SRT container: block layout, numbering, and timedelta timecodes.

HOW: srt.parse() splits the file into Subtitle objects; their timedelta
timecodes are converted to canonical text and wrapped as
SentenceIntervals. On the way out, WordIntervals become srt.Subtitle
objects and srt.compose() renders them without renumbering.

RULES:
- Entries without an index line or with blank text are skipped with a
  warning
- Multi-line entry text is kept, joined with "\\n"
- strict=False skips unparseable blocks; strict=True raises
  SubtitleParseError
- compose_srt() keeps the word indices it is given
- Files are read as UTF-8 (a leading BOM is tolerated)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import srt

from srt_word_splitter.core.ir import SentenceInterval, WordInterval
from srt_word_splitter.core.timecode import timedelta_to_timestamp, timestamp_to_timedelta

logger = logging.getLogger(__name__)


class SubtitleParseError(ValueError):
    """Raised when a subtitle file cannot be read or parsed."""


def parse_srt_content(content: str, strict: bool = False) -> list[SentenceInterval]:
    """Parse SRT text into sentence intervals.

    Args:
        content: Full SRT file content.
        strict: Raise on malformed blocks instead of skipping them.

    Returns:
        One SentenceInterval per non-empty entry, in file order.

    Raises:
        SubtitleParseError: In strict mode, if srt rejects the content.
    """
    content = content.lstrip("\ufeff")
    try:
        subtitles = list(srt.parse(content, ignore_errors=not strict))
    except srt.SRTParseError as e:
        raise SubtitleParseError("Could not parse SRT content: {}".format(e)) from e

    entries: list[SentenceInterval] = []
    for sub in subtitles:
        if sub.index is None:
            logger.warning(
                "Skipping subtitle entry at %s without an index line",
                timedelta_to_timestamp(sub.start),
            )
            continue
        text = sub.content.strip()
        if not text:
            logger.warning("Skipping subtitle entry %s with empty text", sub.index)
            continue
        entries.append(SentenceInterval(
            ordinal=sub.index,
            start_time=timedelta_to_timestamp(sub.start),
            end_time=timedelta_to_timestamp(sub.end),
            text=text,
        ))
    return entries


def read_srt_file(path: str | Path, strict: bool = False) -> list[SentenceInterval]:
    """Read and parse an SRT file.

    Raises:
        SubtitleParseError: If the file is missing, unreadable, not UTF-8,
            or (in strict mode) malformed.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SubtitleParseError("Failed to read SRT file {}: {}".format(path, e)) from e
    return parse_srt_content(content, strict=strict)


def compose_srt(words: Sequence[WordInterval]) -> str:
    """Render word intervals as SRT text, one cue per word."""
    subtitles = [
        srt.Subtitle(
            index=word.index,
            start=timestamp_to_timedelta(word.start_time),
            end=timestamp_to_timedelta(word.end_time),
            content=word.word,
        )
        for word in words
    ]
    return srt.compose(subtitles, reindex=False)


def validate_srt_file(path: str | Path) -> bool:
    """True if the file parses and holds at least one non-empty entry."""
    try:
        return len(read_srt_file(path)) > 0
    except SubtitleParseError:
        return False
