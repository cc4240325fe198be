"""SubRip (.srt) rendering.

WHY: SRT is the caption format every editor and player accepts. The
renderer is kept separate from segmentation so any cue list, from either
caption mode, renders the same way.

HOW: render_srt() numbers cues from 1 on every call, formats both
timecodes, and joins the blocks with a blank line. SRTFormatter wires
segmentation and rendering together behind the BaseFormatter interface.

RULES:
- Indices are 1-based and contiguous, recomputed on each render
- Each block is "index\\nstart --> end\\ntext\\n"; blocks are joined by "\\n"
- An empty cue list renders as an empty string
- Media type: "application/x-subrip"
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from assembly_captions.config import PREVIEW_LINES
from assembly_captions.core.ir import CaptionSettings, Cue, Word
from assembly_captions.core.segmenter import segment_with_settings
from assembly_captions.core.timecode import format_timecode
from assembly_captions.formatters.base import BaseFormatter, FormatterOutput

SRT_MEDIA_TYPE = "application/x-subrip"


def render_srt(cues: Iterable[Cue]) -> str:
    """Render cues as SRT text."""
    blocks = [
        "{}\n{} --> {}\n{}\n".format(
            index, format_timecode(cue.start), format_timecode(cue.end), cue.text
        )
        for index, cue in enumerate(cues, 1)
    ]
    return "\n".join(blocks)


def build_preview(srt: str, max_lines: int = PREVIEW_LINES) -> str:
    """Return the first ``max_lines`` lines of the SRT text."""
    return "\n".join(srt.split("\n")[:max_lines])


class SRTFormatter(BaseFormatter):
    """Segments words per the request settings and renders SubRip text."""

    @property
    def name(self) -> str:
        return "SubRip"

    def format(self, words: Sequence[Word], settings: CaptionSettings) -> FormatterOutput:
        cues = segment_with_settings(words, settings)
        return FormatterOutput(
            suffix=".srt",
            content=render_srt(cues),
            media_type=SRT_MEDIA_TYPE,
            cue_count=len(cues),
        )
