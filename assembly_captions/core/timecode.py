"""SRT timecode formatting."""

from __future__ import annotations

import math
from decimal import Decimal


def format_timecode(seconds: float) -> str:
    """Convert float seconds to an SRT timecode ``HH:MM:SS,mmm``.

    Milliseconds are truncated from the fractional part, never rounded, so
    ``1.9999`` becomes ``00:00:01,999``. The offset is read through its
    shortest decimal form so that ``3661.234`` keeps its ``234`` ms instead
    of losing one to binary representation error.

    Raises:
        ValueError: if ``seconds`` is negative or not finite.
    """
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(
            "Timecode requires a finite, non-negative offset (got {!r})".format(seconds)
        )

    total_ms = int(Decimal(str(seconds)) * 1000)
    total_s, ms = divmod(total_ms, 1000)
    h, rem = divmod(total_s, 3600)
    m, s = divmod(rem, 60)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(h, m, s, ms)
