"""Intermediate representation dataclasses for sentence and word timing.

WHY: The splitter reads sentence-level subtitle entries and produces one
cue per word. The parser, segmenter, allocator and formatters each see a
different slice of that data. A small set of well-typed records keeps
those stages decoupled.

HOW: Four dataclasses:
  Timestamp        — one SRT timecode split into its fields
  SentenceInterval — one subtitle entry as read from the input file
  WordToken        — one word produced by the segmenter
  WordInterval     — one word with its allocated on-screen time

RULES:
- Timecodes travel as canonical "HH:MM:SS,mmm" strings between stages
- SentenceInterval and WordToken are read-only inputs (frozen)
- WordInterval.duration is in integer milliseconds and always matches
  its start/end once returned from a public operation
- WordInterval.index and sentence_position are assigned by the batch
  allocator
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Timestamp:
    """An SRT timecode split into hours, minutes, seconds and milliseconds.

    RULES:
    - milliseconds in [0, 999], seconds and minutes in [0, 59]
    - hours is unbounded (but only < 100 round-trips through the text form)
    """

    hours: int
    minutes: int
    seconds: int
    milliseconds: int


@dataclass(frozen=True)
class SentenceInterval:
    """One subtitle entry: its ordinal, time span and displayed text.

    end_time normally follows start_time. A reversed entry is tolerated
    by the allocator and surfaces only as a span diagnostic.
    """

    ordinal: int
    start_time: str
    end_time: str
    text: str


@dataclass(frozen=True)
class WordToken:
    """A word cut from a sentence by the segmenter.

    WHY: The allocator distributes a sentence's time by character count,
    so each token carries its own length next to the text.

    RULES:
    - length counts characters (code points), never bytes
    - position is the offset in the cleaned sentence; informational only
    """

    word: str
    length: int
    position: int


@dataclass
class WordInterval:
    """A single word with its allocated display interval.

    RULES:
    - index: 1-based within a sentence until the batch allocator
      renumbers it across the whole file
    - start_time / end_time: canonical "HH:MM:SS,mmm" strings
    - duration: milliseconds between start_time and end_time
    - original_ordinal: ordinal of the sentence this word came from, as
      numbered in the subtitle file (may repeat or skip)
    - sentence_position: 0-based position of that sentence in the batch;
      the key that groups a sentence's words, since ordinals need not be
      unique
    """

    index: int
    word: str
    start_time: str
    end_time: str
    duration: int
    original_ordinal: int
    sentence_position: int = 0
