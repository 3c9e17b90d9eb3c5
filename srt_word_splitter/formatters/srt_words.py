"""Word-level SRT formatter — one subtitle cue per word.

WHY: This is the splitter's primary output: the input subtitle file with
every sentence replaced by consecutive single-word cues that together
cover the sentence's original time span.

HOW: Delegates rendering to compose_srt(), which builds srt.Subtitle
objects from the word intervals and composes them without renumbering.

RULES:
- Cue numbers are the word intervals' global indices
- Cue text is the word itself
- Output suffix: "_segmented.srt"; media type "application/x-subrip"
"""

from __future__ import annotations

from collections.abc import Sequence

from srt_word_splitter.config import OUTPUT_SUFFIX
from srt_word_splitter.core.ir import WordInterval
from srt_word_splitter.core.subtitles import compose_srt
from srt_word_splitter.formatters.base import BaseFormatter, FormatterOutput


class SRTWordsFormatter(BaseFormatter):
    """Formatter producing a word-per-cue SRT file."""

    suffix = "{}.srt".format(OUTPUT_SUFFIX)

    @property
    def name(self) -> str:
        return "Word-level SRT"

    def format(
        self,
        words: Sequence[WordInterval],
        source_filename: str = "",
    ) -> list[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=self.suffix,
                content=compose_srt(words),
                media_type="application/x-subrip",
            )
        ]
