"""Command-line interface for the SRT word splitter.

WHY: Users need a single command that takes a sentence-level subtitle file
and writes a word-per-cue version next to it, plus quick ways to check a
file before processing it.

HOW: Uses argparse. The top-level options run the split pipeline through
SRTProcessor; the ``validate`` and ``stats`` sub-commands inspect a file
without writing anything. Status messages go to stderr; logging is set up
here and nowhere else.

RULES:
- ``-i/--input`` is required unless a sub-command is given
- Output defaults to {stem}_segmented.srt (or .json) next to the input
- --max-duration below --min-duration is a usage error
- A missing input file is an error; a non-.srt extension only warns
- Exit codes: 0 = success, 1 = failure (2 = argparse usage error)
- --verbose raises logging to INFO; otherwise only warnings are shown
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from srt_word_splitter import __version__
from srt_word_splitter.config import (
    DEFAULT_MAX_WORD_DURATION,
    DEFAULT_MIN_WORD_DURATION,
    SUBTITLE_EXTENSIONS,
)
from srt_word_splitter.core.subtitles import SubtitleParseError, validate_srt_file
from srt_word_splitter.formatters import FORMATTERS
from srt_word_splitter.processor import FileStats, ProcessConfig, ProcessResult, SRTProcessor


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _error(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr, flush=True)


def _print_stats(path: Path, stats: FileStats) -> None:
    _status("File statistics: {}".format(path))
    _status("  Entries: {}".format(stats.total_entries))
    _status("  Characters: {}".format(stats.total_characters))
    _status("  Average entry length: {} characters".format(stats.average_entry_length))
    _status("  Estimated words: {}".format(stats.estimated_words))


def _print_result(result: ProcessResult) -> None:
    if result.success:
        _status("Done!")
        _status("  Input: {}".format(result.input_file))
        _status("  Output: {}".format(result.output_file))
        _status("  Original entries: {}".format(result.original_entries))
        _status("  Words: {}".format(result.total_words))
        if result.drifted_entries:
            _status("  Entries with shifted timing after smoothing: {}".format(
                result.drifted_entries
            ))
        _status("  Time: {}ms".format(result.processing_time_ms))
    else:
        _error(result.message)


def _run_validate(file: str) -> int:
    path = Path(file).resolve()
    _status("Validating {}".format(path))
    if not validate_srt_file(path):
        _error("Not a valid SRT file, or the file does not exist")
        return 1
    _status("SRT file is valid")
    _print_stats(path, SRTProcessor.file_stats(path))
    return 0


def _run_stats(file: str) -> int:
    path = Path(file).resolve()
    try:
        stats = SRTProcessor.file_stats(path)
    except SubtitleParseError as e:
        _error(str(e))
        return 1
    _print_stats(path, stats)
    return 0


def _run_process(args: argparse.Namespace) -> int:
    input_path = Path(args.input).resolve()
    if not input_path.is_file():
        _error("File not found: {}".format(input_path))
        return 1
    if input_path.suffix.lower() not in SUBTITLE_EXTENSIONS:
        _status("Warning: input file does not have an .srt extension")

    if args.output:
        output_path = Path(args.output).resolve()
    else:
        extension = Path(FORMATTERS[args.format].suffix).suffix
        output_path = SRTProcessor.default_output_path(input_path, extension)

    if args.stats:
        try:
            _print_stats(input_path, SRTProcessor.file_stats(input_path))
        except SubtitleParseError as e:
            _error(str(e))
            return 1

    config = ProcessConfig(
        input_file=str(input_path),
        output_file=str(output_path),
        min_word_duration=args.min_duration,
        max_word_duration=args.max_duration,
        smooth=args.smooth,
        smooth_per_sentence=args.smooth_per_sentence,
        output_format=args.format,
    )

    _status("Processing {}...".format(input_path.name))
    result = SRTProcessor(config).process()
    _print_result(result)
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="srt-word-splitter",
        description="Split sentence-level SRT subtitles into one cue per word, "
                    "keeping each sentence's total on-screen time.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    parser.add_argument(
        "-i", "--input",
        default=None,
        help="Path to the input SRT file.",
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Path to the output file (default: <input stem>_segmented.<ext>).",
    )

    parser.add_argument(
        "--min-duration",
        type=int,
        default=DEFAULT_MIN_WORD_DURATION,
        help="Minimum display time per word in ms (default: %(default)s).",
    )

    parser.add_argument(
        "--max-duration",
        type=int,
        default=DEFAULT_MAX_WORD_DURATION,
        help="Maximum display time per word in ms (default: %(default)s).",
    )

    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS.keys()),
        default="srt",
        help="Output format (default: %(default)s).",
    )

    parser.add_argument(
        "--smooth",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Smooth abrupt duration changes between neighbouring words "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "--smooth-per-sentence",
        action="store_true",
        default=False,
        help="Smooth within each subtitle entry only, so entries keep their exact timing.",
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        default=False,
        help="Print input file statistics before processing.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Show detailed processing information.",
    )

    subparsers = parser.add_subparsers(dest="command")

    validate_parser = subparsers.add_parser("validate", help="Check that a file is valid SRT.")
    validate_parser.add_argument("file", help="Path to the SRT file.")

    stats_parser = subparsers.add_parser("stats", help="Show statistics for an SRT file.")
    stats_parser.add_argument("file", help="Path to the SRT file.")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Always exits via sys.exit with the command's exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    if args.command == "validate":
        sys.exit(_run_validate(args.file))
    if args.command == "stats":
        sys.exit(_run_stats(args.file))

    if not args.input:
        parser.error("the following arguments are required: -i/--input")
    if args.min_duration < 0:
        parser.error("--min-duration must be non-negative")
    if args.max_duration < args.min_duration:
        parser.error("--max-duration must not be below --min-duration")

    sys.exit(_run_process(args))


if __name__ == "__main__":
    main()
