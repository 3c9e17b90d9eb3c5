"""End-to-end processing of one subtitle file.

WHY: The CLI, tests and library users all need the same pipeline: read a
subtitle file, cut every entry into words, allocate time, smooth, and
write the result. Keeping it in one class means the CLI stays a thin
argument layer.

HOW: SRTProcessor takes a ProcessConfig plus optional Segmenter and
TimeAllocator instances (built from the config when omitted) and runs:
  read → segment → allocate_all → smooth → drift scan → format → write
process() reports the outcome as a ProcessResult rather than raising, so
callers can print a summary either way.

RULES:
- Input errors (missing file, bad timecodes, mismatched batches) and
  output that fails schema validation become a failed ProcessResult with
  the error message; they are logged
- A file without any usable entries is a failure
- Smoothing is on by default and sweeps across entry boundaries unless
  smooth_per_sentence is set
- Entries whose span changed after smoothing are counted in
  drifted_entries
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import jsonschema

from srt_word_splitter.config import (
    DEFAULT_MAX_WORD_DURATION,
    DEFAULT_MIN_WORD_DURATION,
    DEFAULT_USER_DICT,
    OUTPUT_SUFFIX,
)
from srt_word_splitter.core.allocator import TimeAllocator, find_span_drift
from srt_word_splitter.core.ir import SentenceInterval, WordInterval
from srt_word_splitter.core.segmenter import Segmenter
from srt_word_splitter.core.subtitles import read_srt_file
from srt_word_splitter.core.timecode import round_half_up
from srt_word_splitter.formatters import FORMATTERS

logger = logging.getLogger(__name__)

# Rough characters-per-word ratio for Chinese text, used only for estimates.
_CHARS_PER_WORD_ESTIMATE = 2.5


@dataclass
class ProcessConfig:
    """Settings for one processing run."""

    input_file: str
    output_file: str
    min_word_duration: int = DEFAULT_MIN_WORD_DURATION
    max_word_duration: int = DEFAULT_MAX_WORD_DURATION
    smooth: bool = True
    smooth_per_sentence: bool = False
    output_format: str = "srt"


@dataclass
class ProcessResult:
    """Outcome of SRTProcessor.process()."""

    success: bool
    input_file: str
    output_file: str
    original_entries: int
    processed_entries: int
    total_words: int
    processing_time_ms: int
    message: str
    drifted_entries: int = 0


@dataclass
class FileStats:
    """Quick size statistics for a subtitle file."""

    total_entries: int
    total_characters: int
    average_entry_length: float
    estimated_words: int


class SRTProcessor:
    """Runs the full split pipeline for one input file.

    Args:
        config: Paths, duration limits and smoothing options.
        segmenter: Word segmenter; a jieba-backed Segmenter by default.
        allocator: Time allocator; built from the config limits by default.
    """

    def __init__(
        self,
        config: ProcessConfig,
        segmenter: Segmenter | None = None,
        allocator: TimeAllocator | None = None,
    ) -> None:
        self.config = config
        self.segmenter = segmenter if segmenter is not None else Segmenter(DEFAULT_USER_DICT)
        self.allocator = allocator if allocator is not None else TimeAllocator(
            config.min_word_duration, config.max_word_duration
        )

    def process(self) -> ProcessResult:
        """Split the configured input file and write the output file.

        Returns:
            A ProcessResult; success is False when any step failed, with the
            error in message.
        """
        started = time.monotonic()
        cfg = self.config

        try:
            if cfg.output_format not in FORMATTERS:
                raise ValueError(
                    "Unknown output format '{}'. Available: {}".format(
                        cfg.output_format, ", ".join(sorted(FORMATTERS))
                    )
                )

            logger.info("Reading %s", cfg.input_file)
            entries = read_srt_file(cfg.input_file)
            if not entries:
                raise ValueError("No valid subtitle entries found in input file")
            logger.info("Parsed %d subtitle entries", len(entries))

            token_lists = self.segmenter.batch_segment([e.text for e in entries])
            total_words = sum(len(tokens) for tokens in token_lists)
            logger.info("Segmented into %d words", total_words)

            words = self.allocator.allocate_all(entries, token_lists)

            drifted = 0
            if cfg.smooth:
                logger.info("Smoothing word durations")
                words = self.allocator.smooth(words, per_sentence=cfg.smooth_per_sentence)
                drifts = find_span_drift(entries, words)
                drifted = len(drifts)
                for drift in drifts:
                    logger.info(
                        "Entry %s span changed by smoothing: %dms -> %dms",
                        drift.ordinal, drift.expected_ms, drift.actual_ms,
                    )

            formatter = FORMATTERS[cfg.output_format]()
            outputs = formatter.format(words, Path(cfg.input_file).name)

            out_path = Path(cfg.output_file)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(outputs[0].content, encoding="utf-8")
            logger.info("Wrote %s", out_path)

        except (OSError, ValueError, jsonschema.ValidationError) as e:
            logger.error("Processing failed for %s: %s", cfg.input_file, e)
            return ProcessResult(
                success=False,
                input_file=cfg.input_file,
                output_file=cfg.output_file,
                original_entries=0,
                processed_entries=0,
                total_words=0,
                processing_time_ms=_elapsed_ms(started),
                message="Processing failed: {}".format(e),
            )

        elapsed = _elapsed_ms(started)
        return ProcessResult(
            success=True,
            input_file=cfg.input_file,
            output_file=cfg.output_file,
            original_entries=len(entries),
            processed_entries=len(words),
            total_words=total_words,
            processing_time_ms=elapsed,
            message="Done: {} entries split into {} words in {}ms".format(
                len(entries), total_words, elapsed
            ),
            drifted_entries=drifted,
        )

    def process_single_entry(self, entry: SentenceInterval) -> list[WordInterval]:
        """Segment and allocate one entry, without renumbering or smoothing."""
        return self.allocator.allocate(entry, self.segmenter.segment(entry.text))

    def validate_input(self) -> tuple[bool, str]:
        """Check that the input file exists and has usable entries.

        Returns:
            (valid, message)
        """
        try:
            entries = read_srt_file(self.config.input_file)
        except ValueError as e:
            return False, "Input validation failed: {}".format(e)
        if not entries:
            return False, "No valid subtitle entries found in input file"
        return True, "Input is valid with {} subtitle entries".format(len(entries))

    @staticmethod
    def default_output_path(input_file: str | Path, extension: str | None = None) -> Path:
        """Derive ``{dir}/{stem}_segmented{ext}`` from the input path.

        Args:
            input_file: The source subtitle file.
            extension: Output extension including the dot; defaults to the
                input's own extension.
        """
        source = Path(input_file)
        ext = extension if extension is not None else source.suffix
        return source.with_name("{}{}{}".format(source.stem, OUTPUT_SUFFIX, ext))

    @staticmethod
    def file_stats(input_file: str | Path) -> FileStats:
        """Count entries and characters in a subtitle file.

        Raises:
            SubtitleParseError: If the file cannot be read.
        """
        entries = read_srt_file(input_file)
        total_entries = len(entries)
        total_characters = sum(len(e.text) for e in entries)
        average = total_characters / total_entries if total_entries else 0.0
        return FileStats(
            total_entries=total_entries,
            total_characters=total_characters,
            average_entry_length=round(average, 2),
            estimated_words=round_half_up(total_characters / _CHARS_PER_WORD_ESTIMATE),
        )


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def process_srt_file(config: ProcessConfig) -> ProcessResult:
    """Convenience wrapper: build an SRTProcessor and run it."""
    return SRTProcessor(config).process()
