"""Shared test fixtures for the srt_word_splitter test suite.

WHY: Several test modules need the same subtitle file, the same sentence
records and a deterministic segmenter. Centralizing them here keeps the
expected timings in one place.

HOW: SAMPLE_SRT is a three-entry subtitle file whose first entry is the
worked allocation example (3000ms over words of lengths 2, 2, 1, 2).
SpaceSegmenter splits on whitespace so pipeline tests do not depend on
jieba's dictionary.

RULES:
- File-based fixtures write into tmp_path.
- SpaceSegmenter reports positions in the original text, like Segmenter.
"""

from typing import List

import pytest

from srt_word_splitter.core.ir import SentenceInterval, WordToken
from srt_word_splitter.core.segmenter import Segmenter


SAMPLE_SRT = """1
00:00:01,000 --> 00:00:04,000
我们 今天 去 公园

2
00:00:04,500 --> 00:00:06,000
hello world

3
00:00:06,000 --> 00:00:09,000
split into single words
"""


class SpaceSegmenter(Segmenter):
    """Whitespace segmenter with the same output shape as Segmenter."""

    def segment(self, text: str) -> List[WordToken]:
        tokens: List[WordToken] = []
        position = 0
        for word in text.split():
            position = text.index(word, position)
            tokens.append(WordToken(word=word, length=len(word), position=position))
            position += len(word)
        return tokens


@pytest.fixture
def example_sentence():
    """The worked example: 3000ms from 00:00:01,000 to 00:00:04,000."""
    return SentenceInterval(
        ordinal=1,
        start_time="00:00:01,000",
        end_time="00:00:04,000",
        text="我们今天去公园",
    )


@pytest.fixture
def example_tokens():
    """Words of 2, 2, 1 and 2 characters."""
    return [
        WordToken(word="我们", length=2, position=0),
        WordToken(word="今天", length=2, position=2),
        WordToken(word="去", length=1, position=4),
        WordToken(word="公园", length=2, position=5),
    ]


@pytest.fixture
def space_segmenter():
    return SpaceSegmenter()


@pytest.fixture
def sample_srt_path(tmp_path):
    path = tmp_path / "sample.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture
def sample_srt_text():
    return SAMPLE_SRT
