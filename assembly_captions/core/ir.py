"""Intermediate representation for transcripts and captions.

WHY: The job client, the segmenter, and the renderer are independent
stages. They only share these small value types, so each stage can be
tested on its own and the transcription provider can be swapped without
touching caption logic.

HOW: Three frozen dataclasses and one enum:
  Word            — one transcribed token with timing in seconds
  Cue             — one subtitle display unit built from one or more Words
  CaptionMode     — "word" (one cue per word) or "space" (grouped)
  CaptionSettings — per-request options, validated on construction

RULES:
- All times are float seconds (converted from provider milliseconds)
- Word and Cue are immutable once built
- CaptionSettings is request-scoped; there is no process-wide settings object
- Invalid thresholds raise InputError, never get clamped silently
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from assembly_captions.config import (
    AUTO_LANGUAGE,
    DEFAULT_MAX_CUE_CHARS,
    DEFAULT_MAX_GAP_S,
    MAX_CUE_CHARS_LIMIT,
    MAX_GAP_S_LIMIT,
)
from assembly_captions.errors import InputError


@dataclass(frozen=True)
class Word:
    """A single transcribed word.

    RULES:
    - text: the word as returned by the provider
    - start / end: float seconds, start >= 0
    """

    text: str
    start: float
    end: float


@dataclass(frozen=True)
class Cue:
    """A subtitle display unit.

    RULES:
    - start <= end
    - text is non-empty; grouped cues join words with a single space
    """

    start: float
    end: float
    text: str


class CaptionMode(str, enum.Enum):
    """Caption grouping strategy.

    Inherits from str so values serialize cleanly to JSON and compare
    equal to the raw form field.
    """

    WORD = "word"
    SPACE = "space"


@dataclass(frozen=True)
class CaptionSettings:
    """Per-request caption options.

    WHY: The grouped-mode thresholds come from the caller. Pathological
    values (zero-length cues, negative gaps) would produce nonsense output,
    so they are rejected up front with a message the caller can act on.

    RULES:
    - language: ISO code passed through to the provider, or "auto"
    - mode: CaptionMode (plain strings are coerced)
    - max_cue_chars: 1..10,000
    - max_gap_s: finite, 0..3600 seconds (0 splits on any positive gap)
    - Numeric strings (raw form fields) are parsed; anything unparseable
      is an InputError, never a bare TypeError/ValueError
    """

    language: str = AUTO_LANGUAGE
    mode: CaptionMode = CaptionMode.SPACE
    max_cue_chars: int = DEFAULT_MAX_CUE_CHARS
    max_gap_s: float = DEFAULT_MAX_GAP_S

    def __post_init__(self) -> None:
        try:
            mode = CaptionMode(self.mode)
        except ValueError:
            valid = ", ".join(m.value for m in CaptionMode)
            raise InputError(
                "Unknown caption mode '{}'. Valid modes: {}".format(self.mode, valid)
            )
        object.__setattr__(self, "mode", mode)

        language = (self.language or "").strip() or AUTO_LANGUAGE
        object.__setattr__(self, "language", language)

        chars = self.max_cue_chars
        if isinstance(chars, str):
            try:
                chars = int(chars.strip())
            except ValueError:
                raise InputError(
                    "max_cue_chars must be an integer (got '{}')".format(self.max_cue_chars)
                ) from None
        if isinstance(chars, bool) or not isinstance(chars, int):
            raise InputError("max_cue_chars must be an integer")
        if not 1 <= chars <= MAX_CUE_CHARS_LIMIT:
            raise InputError(
                "max_cue_chars must be between 1 and {:,} (got {})".format(
                    MAX_CUE_CHARS_LIMIT, chars
                )
            )
        object.__setattr__(self, "max_cue_chars", chars)

        if isinstance(self.max_gap_s, bool):
            raise InputError("max_gap_s must be a number of seconds")
        try:
            gap = float(self.max_gap_s)
        except (TypeError, ValueError):
            raise InputError(
                "max_gap_s must be a number of seconds (got {!r})".format(self.max_gap_s)
            ) from None
        if not math.isfinite(gap) or not 0 <= gap <= MAX_GAP_S_LIMIT:
            raise InputError(
                "max_gap_s must be between 0 and {:g} seconds (got {})".format(
                    MAX_GAP_S_LIMIT, self.max_gap_s
                )
            )
        object.__setattr__(self, "max_gap_s", gap)


@dataclass(frozen=True)
class CaptionResult:
    """Successful pipeline output: the SRT text and its first lines."""

    filename: str
    srt: str
    preview: str
