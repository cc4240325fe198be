"""Caption segmentation — timestamped words into subtitle cues.

WHY: A flat list of word timings is unreadable as subtitles. Viewers need
either one word at a time (kinetic/karaoke style) or short phrases that
break at pauses and never run longer than a line.

HOW: Two strategies share one entry point, segment_words():
  segment_per_word — one Cue per Word, timing copied verbatim
  segment_by_gaps  — one linear scan with a running cue as a local
                     accumulator; the running cue is flushed when the next
                     word would push it past max_cue_chars or when the
                     silence before the next word exceeds max_gap_s

RULES:
- Empty input produces an empty list, never an error
- Words whose text is empty or whitespace are skipped, so no cue is blank
- Both flush comparisons are strictly greater-than; equality appends
- A single word longer than max_cue_chars becomes its own cue, unsplit
- Output order always follows input order
- Never mutates the input words
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from assembly_captions.config import DEFAULT_MAX_CUE_CHARS, DEFAULT_MAX_GAP_S
from assembly_captions.core.ir import CaptionMode, CaptionSettings, Cue, Word


def segment_per_word(words: Iterable[Word]) -> list[Cue]:
    """Emit exactly one cue per word with identical start, end, and text."""
    return [Cue(start=w.start, end=w.end, text=w.text) for w in words if w.text.strip()]


def segment_by_gaps(
    words: Iterable[Word],
    max_cue_chars: int = DEFAULT_MAX_CUE_CHARS,
    max_gap_s: float = DEFAULT_MAX_GAP_S,
) -> list[Cue]:
    """Group words into phrase cues split on length and silence.

    The running cue's ``end`` is always the end of the last word appended
    to it, so ``word.start - running.end`` is the gap to the previous word.

    Args:
        words: Words in time order.
        max_cue_chars: Longest text a merged cue may reach.
        max_gap_s: Longest silence (seconds) bridged inside one cue.

    Returns:
        Cues in input order, non-overlapping when the input is.
    """
    cues: list[Cue] = []
    running: Cue | None = None

    for word in words:
        if not word.text.strip():
            continue
        if running is None:
            running = Cue(start=word.start, end=word.end, text=word.text)
            continue

        too_long = len(running.text) + 1 + len(word.text) > max_cue_chars
        too_far = word.start - running.end > max_gap_s

        if too_long or too_far:
            cues.append(running)
            running = Cue(start=word.start, end=word.end, text=word.text)
        else:
            running = Cue(
                start=running.start,
                end=word.end,
                text=running.text + " " + word.text,
            )

    if running is not None:
        cues.append(running)

    return cues


def segment_words(
    words: Sequence[Word],
    mode: CaptionMode | str = CaptionMode.SPACE,
    max_cue_chars: int = DEFAULT_MAX_CUE_CHARS,
    max_gap_s: float = DEFAULT_MAX_GAP_S,
) -> list[Cue]:
    """Dispatch to the segmentation strategy named by ``mode``.

    Raises:
        ValueError: if ``mode`` is not a CaptionMode value.
    """
    mode = CaptionMode(mode)
    if mode is CaptionMode.WORD:
        return segment_per_word(words)
    return segment_by_gaps(words, max_cue_chars=max_cue_chars, max_gap_s=max_gap_s)


def segment_with_settings(words: Sequence[Word], settings: CaptionSettings) -> list[Cue]:
    """Segment ``words`` using a validated CaptionSettings."""
    return segment_words(
        words,
        mode=settings.mode,
        max_cue_chars=settings.max_cue_chars,
        max_gap_s=settings.max_gap_s,
    )
