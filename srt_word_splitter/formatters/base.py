"""Abstract base formatter and output container.

WHY: The splitter can emit word timings in more than one file format, but
every format consumes the same list of WordIntervals. A shared base class
lets the processor and CLI treat formats generically.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. FormatterOutput bundles a file suffix with its content and MIME
type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list so a format may produce several files
- ``suffix`` starts with an underscore, e.g. ``"_segmented.srt"``
- The caller prepends the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from srt_word_splitter.core.ir import WordInterval


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: Appended to the source stem,
                e.g. ``"_segmented.srt"`` → ``"episode_segmented.srt"``.
        content: The file content.
        media_type: MIME type for the content.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    Subclasses set ``suffix`` so callers can name the output file before
    formatting anything.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    suffix: str = ""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Word-level SRT'."""

    @abstractmethod
    def format(
        self,
        words: Sequence[WordInterval],
        source_filename: str = "",
    ) -> list[FormatterOutput]:
        """Convert allocated word intervals into one or more output files.

        Args:
            words: Word intervals in display order, globally indexed.
            source_filename: Name of the subtitle file they came from.

        Returns:
            List of FormatterOutput objects.
        """
