"""Abstract base formatter and output container.

WHY: The pipeline, the HTTP layer, and the CLI hand a word list to a
formatter and get back a file-shaped result. A fixed interface keeps
those callers ignorant of how cues are built or rendered.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. FormatterOutput bundles the rendered content with its file suffix
and MIME type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``suffix`` starts with a dot, e.g. ``".srt"``
- The caller is responsible for prepending the output filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from assembly_captions.core.ir import CaptionSettings, Word


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix, e.g. ``".srt"``.
        content: The rendered file content.
        media_type: MIME type for the content.
        cue_count: Number of cues rendered into ``content``.
    """

    suffix: str
    content: str
    media_type: str
    cue_count: int = 0


class BaseFormatter(ABC):
    """Abstract base for subtitle formatters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SubRip'."""

    @abstractmethod
    def format(self, words: Sequence[Word], settings: CaptionSettings) -> FormatterOutput:
        """Convert a finished word list into subtitle file content.

        Args:
            words: Transcribed words in time order.
            settings: Validated per-request caption options.
        """
