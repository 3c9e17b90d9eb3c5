"""Word segmentation with jieba.

WHY: Chinese subtitles have no spaces between words, so splitting a
sentence into displayable words needs a dictionary-based segmenter. The
allocator only needs each word's text and character count.

HOW: Segmenter owns a private jieba.Tokenizer, initialized on first use
(optionally with a user dictionary). segment() collapses whitespace, cuts
the text, drops whitespace-only pieces and records each word's length and
offset.

RULES:
- Blank input → empty list
- Whitespace-only pieces are skipped but still advance the position
- length is len(word) after stripping, i.e. a character count
- No tokenizer is shared between Segmenter instances
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

import jieba

from srt_word_splitter.core.ir import WordToken

logger = logging.getLogger(__name__)

# jieba reports dictionary loading on stderr at DEBUG level
jieba.setLogLevel(logging.WARNING)

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class SegmentStats:
    """Summary of one segmentation run."""

    total_words: int
    total_characters: int
    average_word_length: float
    segments: list[WordToken] = field(default_factory=list)


class Segmenter:
    """Splits sentences into WordTokens.

    Args:
        user_dict: Optional path to a jieba user dictionary, loaded the
            first time the segmenter is used.
    """

    def __init__(self, user_dict: str | None = None) -> None:
        self.user_dict = user_dict
        self._tokenizer = jieba.Tokenizer()
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        self._tokenizer.initialize()
        if self.user_dict:
            logger.info("Loading user dictionary %s", self.user_dict)
            self._tokenizer.load_userdict(self.user_dict)
        self._initialized = True

    def segment(self, text: str) -> list[WordToken]:
        """Cut text into words with their character counts and offsets."""
        if not text or not text.strip():
            return []

        self._ensure_initialized()
        clean = _WHITESPACE_RE.sub(" ", text.strip())

        tokens: list[WordToken] = []
        position = 0
        for piece in self._tokenizer.lcut(clean):
            word = piece.strip()
            if word:
                tokens.append(WordToken(word=word, length=len(word), position=position))
            position += len(piece)
        return tokens

    def batch_segment(self, texts: Sequence[str]) -> list[list[WordToken]]:
        return [self.segment(text) for text in texts]

    def segment_stats(self, text: str) -> SegmentStats:
        """Segment text and summarize word count and lengths."""
        segments = self.segment(text)
        total_words = len(segments)
        total_characters = sum(s.length for s in segments)
        average = total_characters / total_words if total_words else 0.0
        return SegmentStats(
            total_words=total_words,
            total_characters=total_characters,
            average_word_length=round(average, 2),
            segments=segments,
        )

    @staticmethod
    def validate_segmentation(original_text: str, segments: Sequence[WordToken]) -> bool:
        """True if the words, joined, reproduce the text ignoring whitespace."""
        rebuilt = "".join(s.word for s in segments)
        return _WHITESPACE_RE.sub("", original_text) == _WHITESPACE_RE.sub("", rebuilt)
