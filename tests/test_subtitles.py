"""Tests for srt_word_splitter.core.subtitles.

WHY: The subtitle module is the boundary between SRT files and the
allocator's records. Parsing must hand over canonical timecodes and
stripped text; composing must keep the word numbering.

HOW: Uses the sample_srt_text fixture plus small inline documents, and
tmp_path for file round-trips.
"""

import logging

import pytest

from srt_word_splitter.core.ir import SentenceInterval, WordInterval
from srt_word_splitter.core.subtitles import (
    SubtitleParseError,
    compose_srt,
    parse_srt_content,
    read_srt_file,
    validate_srt_file,
)


def _words():
    return [
        WordInterval(index=5, word="你好", start_time="00:00:01,000", end_time="00:00:01,500",
                     duration=500, original_ordinal=2),
        WordInterval(index=6, word="世界", start_time="00:00:01,500", end_time="00:00:02,250",
                     duration=750, original_ordinal=2),
    ]


class TestParse:
    def test_sample(self, sample_srt_text):
        entries = parse_srt_content(sample_srt_text)
        assert len(entries) == 3
        assert entries[0] == SentenceInterval(
            ordinal=1,
            start_time="00:00:01,000",
            end_time="00:00:04,000",
            text="我们 今天 去 公园",
        )
        assert entries[1].start_time == "00:00:04,500"
        assert [e.ordinal for e in entries] == [1, 2, 3]

    def test_multiline_text(self):
        content = "1\n00:00:00,000 --> 00:00:01,000\nline one\nline two\n"
        entries = parse_srt_content(content)
        assert entries[0].text == "line one\nline two"

    def test_leading_bom(self, sample_srt_text):
        entries = parse_srt_content("\ufeff" + sample_srt_text)
        assert len(entries) == 3
        assert entries[0].ordinal == 1

    def test_entry_without_index_is_skipped(self, caplog):
        content = (
            "1\n00:00:00,000 --> 00:00:01,000\nab cd\n\n"
            "00:00:01,000 --> 00:00:02,000\nef gh\n"
        )
        with caplog.at_level(logging.WARNING, logger="srt_word_splitter.core.subtitles"):
            entries = parse_srt_content(content)

        assert [(e.ordinal, e.text) for e in entries] == [(1, "ab cd")]
        assert "without an index line" in caplog.text

    def test_only_entry_without_index(self):
        assert parse_srt_content("00:00:00,000 --> 00:00:01,000\nab cd\n") == []

    def test_garbage_lenient(self):
        assert parse_srt_content("this is not a subtitle file") == []

    def test_garbage_strict(self):
        with pytest.raises(SubtitleParseError, match="Could not parse SRT content"):
            parse_srt_content("this is not a subtitle file", strict=True)


class TestReadFile:
    def test_read(self, sample_srt_path):
        assert len(read_srt_file(sample_srt_path)) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(SubtitleParseError, match="Failed to read SRT file"):
            read_srt_file(tmp_path / "missing.srt")

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.srt"
        path.write_bytes(b"1\n00:00:00,000 --> 00:00:01,000\ncaf\xe9\n")
        with pytest.raises(SubtitleParseError):
            read_srt_file(path)


class TestValidate:
    def test_valid(self, sample_srt_path):
        assert validate_srt_file(sample_srt_path)

    def test_missing(self, tmp_path):
        assert not validate_srt_file(tmp_path / "missing.srt")

    def test_empty(self, tmp_path):
        path = tmp_path / "empty.srt"
        path.write_text("", encoding="utf-8")
        assert not validate_srt_file(path)


class TestCompose:
    def test_keeps_indices(self):
        content = compose_srt(_words())
        assert content.startswith("5\n00:00:01,000 --> 00:00:01,500\n你好\n\n")
        assert "6\n00:00:01,500 --> 00:00:02,250\n世界\n" in content

    def test_empty(self):
        assert compose_srt([]) == ""

    def test_composed_file_reads_back(self, tmp_path):
        out = tmp_path / "out.srt"
        out.write_text(compose_srt(_words()), encoding="utf-8")

        entries = read_srt_file(out)
        assert [(e.ordinal, e.text) for e in entries] == [(5, "你好"), (6, "世界")]
        assert entries[1].end_time == "00:00:02,250"
