"""Word timings JSON formatter — machine-readable per-word intervals.

WHY: Editing tools and scripts that animate captions want the allocated
word timings as data rather than as SRT text, including the traceability
back to the source entry that SRT cannot carry.

HOW: Builds one dict per word interval, wraps them with the source
filename and a word count, validates the result against
word_timings_schema.json with jsonschema, and serializes with indent=2.

RULES:
- Timecodes are kept in canonical "HH:MM:SS,mmm" text form
- duration_ms is the interval length in milliseconds
- original_index is the ordinal of the source subtitle entry
- Output suffix: "_segmented.json"; media type "application/json"
- Every output is schema-validated before it is returned
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import jsonschema

from srt_word_splitter.config import OUTPUT_SUFFIX
from srt_word_splitter.core.ir import WordInterval
from srt_word_splitter.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "word_timings_schema.json"

_CACHED_SCHEMA: dict | None = None


def _get_schema() -> dict:
    """Load and cache the word timings JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _word_to_dict(word: WordInterval) -> dict[str, Any]:
    return {
        "index": word.index,
        "word": word.word,
        "start": word.start_time,
        "end": word.end_time,
        "duration_ms": word.duration,
        "original_index": word.original_ordinal,
    }


class WordTimingsFormatter(BaseFormatter):
    """Formatter producing a JSON document of word intervals."""

    suffix = "{}.json".format(OUTPUT_SUFFIX)

    @property
    def name(self) -> str:
        return "Word timings JSON"

    def format(
        self,
        words: Sequence[WordInterval],
        source_filename: str = "",
    ) -> list[FormatterOutput]:
        """Serialize word intervals to schema-validated JSON.

        Raises:
            jsonschema.ValidationError: If the generated document does not
                conform to word_timings_schema.json.
        """
        output_dict: dict[str, Any] = {
            "source": source_filename,
            "word_count": len(words),
            "words": [_word_to_dict(w) for w in words],
        }

        jsonschema.validate(instance=output_dict, schema=_get_schema())

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=json.dumps(output_dict, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
