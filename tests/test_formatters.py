"""Unit tests for SRT rendering, previews, and the formatter registry."""

import re

from assembly_captions.core.ir import CaptionSettings, Cue
from assembly_captions.formatters import FORMATTERS
from assembly_captions.formatters.srt import SRTFormatter, build_preview, render_srt

_TIMING_RE = re.compile(r"^\d{2,}:\d{2}:\d{2},\d{3} --> \d{2,}:\d{2}:\d{2},\d{3}$")


def _parse_srt_blocks(srt_content):
    """Split SRT text into (index, timing, text) tuples."""
    blocks = []
    for block in srt_content.strip("\n").split("\n\n"):
        if not block:
            continue
        index, timing, text = block.split("\n", 2)
        blocks.append((index, timing, text))
    return blocks


class TestRenderSRT:

    def test_example_layout(self):
        cues = [Cue(0.0, 1.0, "hi there"), Cue(5.0, 5.4, "friend")]
        assert render_srt(cues) == (
            "1\n00:00:00,000 --> 00:00:01,000\nhi there\n"
            "\n"
            "2\n00:00:05,000 --> 00:00:05,400\nfriend\n"
        )

    def test_empty(self):
        assert render_srt([]) == ""

    def test_indices_are_contiguous(self):
        cues = [Cue(float(i), float(i) + 0.5, "cue {}".format(i)) for i in range(25)]
        blocks = _parse_srt_blocks(render_srt(cues))
        assert [b[0] for b in blocks] == [str(i) for i in range(1, 26)]

    def test_numbering_ignores_content(self):
        """Dropping a cue upstream still renumbers from 1 without gaps."""
        cues = [Cue(0.0, 1.0, "a"), Cue(2.0, 3.0, "b"), Cue(4.0, 5.0, "c")]
        kept = [c for c in cues if c.text != "b"]
        blocks = _parse_srt_blocks(render_srt(kept))
        assert [(b[0], b[2]) for b in blocks] == [("1", "a"), ("2", "c")]

    def test_timing_lines_are_well_formed(self):
        cues = [Cue(0.123, 61.5, "x"), Cue(3661.234, 3662.0, "y")]
        for _, timing, _ in _parse_srt_blocks(render_srt(cues)):
            assert _TIMING_RE.match(timing)


class TestBuildPreview:

    def test_first_fifteen_lines(self):
        cues = [Cue(float(i), float(i) + 0.5, "line {}".format(i)) for i in range(10)]
        srt = render_srt(cues)
        preview = build_preview(srt)
        assert preview.split("\n") == srt.split("\n")[:15]
        assert srt.startswith(preview)

    def test_short_srt_is_returned_whole(self):
        srt = render_srt([Cue(0.0, 1.0, "hi")])
        assert build_preview(srt) == srt

    def test_custom_line_count(self):
        srt = render_srt([Cue(0.0, 1.0, "hi"), Cue(2.0, 3.0, "yo")])
        assert build_preview(srt, max_lines=2) == "1\n00:00:00,000 --> 00:00:01,000"


class TestSRTFormatter:

    def test_registered(self):
        assert FORMATTERS["srt"] is SRTFormatter
        assert SRTFormatter().name == "SubRip"

    def test_grouped_output(self, sample_words):
        output = SRTFormatter().format(sample_words, CaptionSettings())
        assert output.suffix == ".srt"
        assert output.media_type == "application/x-subrip"
        assert output.cue_count == 2
        assert output.content.startswith("1\n00:00:00,000 --> 00:00:01,000\nhi there\n\n2\n")

    def test_word_output(self, sample_words):
        output = SRTFormatter().format(sample_words, CaptionSettings(mode="word"))
        assert output.cue_count == 3
        texts = [b[2] for b in _parse_srt_blocks(output.content)]
        assert texts == ["hi", "there", "friend"]

    def test_no_words(self):
        output = SRTFormatter().format([], CaptionSettings())
        assert output.content == ""
        assert output.cue_count == 0
