"""Configuration defaults, output naming, and .env loading.

WHY: Centralizes the values users most often tune (per-word display
limits, the segmentation dictionary) so the CLI, the processor and the
allocator agree on the same defaults, and so they can be overridden per
machine without editing code.

HOW: python-dotenv loads the .env file on import. Defaults are
module-level constants read from the environment with hardcoded
fallbacks. validate_durations() gives one clear error for bad limits.

RULES:
- SRT_MIN_WORD_DURATION / SRT_MAX_WORD_DURATION override the 200/3000 ms
  defaults
- SRT_SEGMENT_USER_DICT points at an optional jieba user dictionary
- Default output file: {stem}_segmented{ext} next to the input
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the tool is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Per-word display limits (milliseconds)
# ---------------------------------------------------------------------------

DEFAULT_MIN_WORD_DURATION = int(os.getenv("SRT_MIN_WORD_DURATION", "200"))
DEFAULT_MAX_WORD_DURATION = int(os.getenv("SRT_MAX_WORD_DURATION", "3000"))

# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------

DEFAULT_USER_DICT = os.getenv("SRT_SEGMENT_USER_DICT", "").strip() or None
"""Path to a jieba user dictionary, or None to use the bundled one."""

# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

OUTPUT_SUFFIX = "_segmented"
"""Inserted between the input stem and the extension for default output paths."""

SUBTITLE_EXTENSIONS: set[str] = {".srt"}


def validate_durations(min_word_duration: int, max_word_duration: int) -> None:
    """Check a pair of per-word display limits.

    RULES:
    - min_word_duration must be >= 0
    - max_word_duration must be >= min_word_duration

    Raises:
        ValueError: With a message naming the offending values.
    """
    if min_word_duration < 0:
        raise ValueError(
            "Minimum word duration must be non-negative, got {}ms".format(min_word_duration)
        )
    if max_word_duration < min_word_duration:
        raise ValueError(
            "Maximum word duration ({}ms) must not be below the minimum ({}ms)".format(
                max_word_duration, min_word_duration
            )
        )
