"""Word-level time allocation, batch renumbering and duration smoothing.

WHY: A subtitle entry gives one time span for a whole sentence. To show
the sentence one word at a time, that span has to be cut into a gapless
chain of word intervals whose total equals the original span, with each
word's share proportional to its character count.

HOW: TimeAllocator holds the per-word duration limits and exposes three
steps that run in order:
  1. allocate()     — one sentence → proportional, clamped word intervals;
                      the last word absorbs all rounding drift
  2. allocate_all() — every sentence, concatenated and renumbered 1..M
  3. smooth()       — one forward sweep that softens abrupt duration jumps
                      between neighbouring words

RULES:
- Durations are integer milliseconds; shares round halves up
- The last word of a sentence ends exactly at the sentence end, even if
  that puts its duration outside [min, max] (floored at zero)
- A realized span off by more than SPAN_TOLERANCE_MS is logged as a
  warning, never raised
- allocate_all() rejects mismatched input lengths with InputMismatch
  before doing any work
- smooth() never mutates its input; by default it sweeps across sentence
  boundaries, which can move a sentence's final end time
- The allocator is a plain value: no module-level instance exists
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import groupby

from srt_word_splitter.config import DEFAULT_MAX_WORD_DURATION, DEFAULT_MIN_WORD_DURATION, validate_durations
from srt_word_splitter.core.ir import SentenceInterval, WordInterval, WordToken
from srt_word_splitter.core.timecode import add_ms, duration_ms, round_half_up

logger = logging.getLogger(__name__)

# Allowed difference between a sentence's duration and its realized word span.
SPAN_TOLERANCE_MS = 1

# A word is smoothed when it deviates from its neighbours' mean by more than this fraction.
SMOOTHING_THRESHOLD = 0.3


class InputMismatch(ValueError):
    """Raised when sentence and token-list counts differ in a batch call.

    RULES:
    - Raised before any sentence is allocated, so no partial output exists
    """

    def __init__(self, sentence_count: int, token_list_count: int) -> None:
        self.sentence_count = sentence_count
        self.token_list_count = token_list_count
        super().__init__(
            "Sentence count ({}) does not match token list count ({})".format(
                sentence_count, token_list_count
            )
        )


@dataclass
class SpanDrift:
    """A sentence whose realized word span differs from its own duration."""

    ordinal: int | None
    expected_ms: int
    actual_ms: int

    @property
    def drift_ms(self) -> int:
        return abs(self.actual_ms - self.expected_ms)


def check_span(
    words: Sequence[WordInterval],
    expected_ms: int,
    sentence: SentenceInterval | None = None,
) -> SpanDrift | None:
    """Compare a word chain's realized span with the expected duration.

    WHY: Clamping to the minimum duration can push a sentence's words past
    its end, and smoothing can move boundaries between sentences. Both are
    accepted behaviour, but they should be visible.

    HOW: Measures first.start_time → last.end_time. When the difference
    exceeds SPAN_TOLERANCE_MS a WARNING is logged with the sentence timing
    and text, and per-word detail is logged at DEBUG.

    Returns:
        A SpanDrift when the tolerance is exceeded, otherwise None.
    """
    if not words:
        return None

    first = words[0]
    last = words[-1]
    actual = duration_ms(first.start_time, last.end_time)
    if abs(actual - expected_ms) <= SPAN_TOLERANCE_MS:
        return None

    drift = SpanDrift(
        ordinal=sentence.ordinal if sentence is not None else first.original_ordinal,
        expected_ms=expected_ms,
        actual_ms=actual,
    )
    logger.warning(
        "Span drift in entry %s: expected %dms, got %dms (off by %dms)",
        drift.ordinal, expected_ms, actual, drift.drift_ms,
    )
    if sentence is not None:
        logger.warning(
            "  original timing %s --> %s, text: %r",
            sentence.start_time, sentence.end_time, sentence.text,
        )
    logger.warning("  allocated timing %s --> %s", first.start_time, last.end_time)
    for position, word in enumerate(words, 1):
        logger.debug(
            "  %d. %r (%s --> %s, %dms)",
            position, word.word, word.start_time, word.end_time, word.duration,
        )
    return drift


def find_span_drift(
    sentences: Sequence[SentenceInterval],
    words: Sequence[WordInterval],
) -> list[SpanDrift]:
    """Report sentences whose final word span no longer matches their duration.

    Intended for word lists that have already been smoothed. Words are
    matched to sentences by sentence_position, the sentence's index in
    the sequence, so repeated or missing ordinals do not merge entries.
    Sentences without words are ignored. Nothing is logged here.
    """
    by_position: dict[int, list[WordInterval]] = {}
    for word in words:
        by_position.setdefault(word.sentence_position, []).append(word)

    drifts: list[SpanDrift] = []
    for position, sentence in enumerate(sentences):
        group = by_position.get(position)
        if not group:
            continue
        expected = duration_ms(sentence.start_time, sentence.end_time)
        actual = duration_ms(group[0].start_time, group[-1].end_time)
        if abs(actual - expected) > SPAN_TOLERANCE_MS:
            drifts.append(SpanDrift(
                ordinal=sentence.ordinal,
                expected_ms=expected,
                actual_ms=actual,
            ))
    return drifts


class TimeAllocator:
    """Distributes sentence durations over their words.

    WHY: Callers construct and pass an allocator explicitly so different
    limits can coexist in one process (e.g. per-file settings) without any
    shared state.

    RULES:
    - min_word_duration >= 0 and max_word_duration >= min_word_duration,
      otherwise ValueError at construction
    - All methods are pure functions of their arguments and the limits
    """

    def __init__(
        self,
        min_word_duration: int = DEFAULT_MIN_WORD_DURATION,
        max_word_duration: int = DEFAULT_MAX_WORD_DURATION,
    ) -> None:
        validate_durations(min_word_duration, max_word_duration)
        self.min_word_duration = min_word_duration
        self.max_word_duration = max_word_duration

    def __repr__(self) -> str:
        return "TimeAllocator(min_word_duration={}, max_word_duration={})".format(
            self.min_word_duration, self.max_word_duration
        )

    def allocate(
        self,
        sentence: SentenceInterval,
        tokens: Sequence[WordToken],
    ) -> list[WordInterval]:
        """Split one sentence's time span across its words.

        HOW: Each word gets round(length / total_length * sentence_duration)
        milliseconds, clamped to [min, max]. Words are laid end to end from
        the sentence start. The last word instead takes whatever remains up
        to the sentence end (never less than zero), so rounding drift never
        accumulates past the sentence.

        Args:
            sentence: The subtitle entry being split.
            tokens: Its words, in reading order.

        Returns:
            Word intervals with sentence-local 1-based indices, or an empty
            list when there are no tokens or they have no characters.

        Raises:
            MalformedTimestamp: If the sentence timecodes are invalid.
        """
        if not tokens:
            return []

        total_length = sum(token.length for token in tokens)
        if total_length == 0:
            return []

        total_ms = duration_ms(sentence.start_time, sentence.end_time)

        words: list[WordInterval] = []
        cursor = sentence.start_time
        last = len(tokens) - 1

        for i, token in enumerate(tokens):
            if i == last:
                word_ms = max(0, duration_ms(cursor, sentence.end_time))
            else:
                share = round_half_up((token.length / total_length) * total_ms)
                word_ms = min(self.max_word_duration, max(self.min_word_duration, share))

            end = add_ms(cursor, word_ms)
            words.append(WordInterval(
                index=i + 1,
                word=token.word,
                start_time=cursor,
                end_time=end,
                duration=word_ms,
                original_ordinal=sentence.ordinal,
            ))
            cursor = end

        check_span(words, total_ms, sentence)
        return words

    def allocate_all(
        self,
        sentences: Sequence[SentenceInterval],
        token_lists: Sequence[Sequence[WordToken]],
    ) -> list[WordInterval]:
        """Allocate every sentence and number the words 1..M across the batch.

        Raises:
            InputMismatch: If the two sequences differ in length.
            MalformedTimestamp: If any sentence timecode is invalid.
        """
        if len(sentences) != len(token_lists):
            raise InputMismatch(len(sentences), len(token_lists))

        all_words: list[WordInterval] = []
        next_index = 1
        for position, (sentence, tokens) in enumerate(zip(sentences, token_lists)):
            for word in self.allocate(sentence, tokens):
                word.index = next_index
                word.sentence_position = position
                next_index += 1
                all_words.append(word)

        logger.debug("Allocated %d words across %d entries", len(all_words), len(sentences))
        return all_words

    def smooth(
        self,
        words: Sequence[WordInterval],
        per_sentence: bool = False,
    ) -> list[WordInterval]:
        """Soften abrupt duration changes between neighbouring words.

        HOW: See _sweep(). With per_sentence=False (the default) the sweep
        runs over the whole flattened sequence, so the first and last words
        of interior sentences are compared with the neighbouring sentence's
        words. With per_sentence=True each run of words sharing a
        sentence_position is swept on its own and every sentence keeps its
        exact span.

        Returns:
            New WordInterval objects, same length and order as the input.
            Running smooth() on its own output is not a no-op in general.
        """
        if not per_sentence:
            return _sweep(words)

        smoothed: list[WordInterval] = []
        for _, group in groupby(words, key=lambda w: w.sentence_position):
            smoothed.extend(_sweep(list(group)))
        return smoothed


def _sweep(words: Sequence[WordInterval]) -> list[WordInterval]:
    """One forward smoothing pass over the interior words of a sequence.

    HOW: For each interior word c with neighbours p (already swept) and n
    (not yet swept), avg = (p.duration + n.duration) / 2. If c deviates
    from avg by more than SMOOTHING_THRESHOLD * avg, its duration becomes
    round((c + avg) / 2), its end is recomputed from its start, and that
    end is carried forward as the next word's start. The next word's end
    stays where it was.

    RULES:
    - The first and last words are never resized (only the last may have
      its start moved by the carry)
    - While sweeping, a word whose start was moved but which was not itself
      resized keeps its previous duration for the neighbour averages
    - The returned words have durations re-derived from their final
      start/end times
    """
    count = len(words)
    starts = [w.start_time for w in words]
    ends = [w.end_time for w in words]
    durations = [w.duration for w in words]

    for i in range(1, count - 1):
        avg = (durations[i - 1] + durations[i + 1]) / 2
        if abs(durations[i] - avg) > SMOOTHING_THRESHOLD * avg:
            durations[i] = round_half_up((durations[i] + avg) / 2)
            ends[i] = add_ms(starts[i], durations[i])
            starts[i + 1] = ends[i]

    return [
        WordInterval(
            index=word.index,
            word=word.word,
            start_time=starts[i],
            end_time=ends[i],
            duration=duration_ms(starts[i], ends[i]),
            original_ordinal=word.original_ordinal,
            sentence_position=word.sentence_position,
        )
        for i, word in enumerate(words)
    ]


def allocate_time(
    sentence: SentenceInterval,
    tokens: Sequence[WordToken],
    min_word_duration: int = DEFAULT_MIN_WORD_DURATION,
    max_word_duration: int = DEFAULT_MAX_WORD_DURATION,
) -> list[WordInterval]:
    """Convenience wrapper: allocate one sentence with a throwaway allocator."""
    return TimeAllocator(min_word_duration, max_word_duration).allocate(sentence, tokens)


def batch_allocate_time(
    sentences: Sequence[SentenceInterval],
    token_lists: Sequence[Sequence[WordToken]],
    min_word_duration: int = DEFAULT_MIN_WORD_DURATION,
    max_word_duration: int = DEFAULT_MAX_WORD_DURATION,
) -> list[WordInterval]:
    """Convenience wrapper: allocate a batch with a throwaway allocator."""
    return TimeAllocator(min_word_duration, max_word_duration).allocate_all(sentences, token_lists)
