"""Output formatter registry.

WHY: The CLI and processor need a single lookup to find a formatter by
name. A central dict makes adding a format one import and one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["srt"]()``.

RULES:
- Keys are the values accepted by the CLI's --format option
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from srt_word_splitter.formatters.srt_words import SRTWordsFormatter
from srt_word_splitter.formatters.word_timings import WordTimingsFormatter

if TYPE_CHECKING:
    from srt_word_splitter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "srt": SRTWordsFormatter,
    "json": WordTimingsFormatter,
}
