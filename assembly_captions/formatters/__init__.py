"""Subtitle formatter registry.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["srt"]()``.

RULES:
- SubRip is the only supported subtitle format
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from assembly_captions.formatters.srt import SRTFormatter, build_preview, render_srt

if TYPE_CHECKING:
    from assembly_captions.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "srt": SRTFormatter,
}

__all__ = ["FORMATTERS", "SRTFormatter", "build_preview", "render_srt"]
