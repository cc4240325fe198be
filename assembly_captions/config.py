"""Configuration constants, polling bounds, and .env loading.

WHY: Polling bounds, caption thresholds, and API defaults are plain data
that operators tune without touching logic. Keeping them in one module
means the job client, the segmenter, the HTTP layer, and the CLI all read
the same values.

HOW: python-dotenv loads the .env file on import. Every constant reads its
environment variable with a hard-coded fallback. load_api_key() gives a
clear error when the key is missing.

RULES:
- API key is loaded from .env via python-dotenv, never hardcoded
- POLL_MAX_ATTEMPTS x POLL_INTERVAL_S is the worst-case wait per request
- Caption defaults (60 chars, 0.8s gap) match the grouped-mode thresholds
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Provider API
# ---------------------------------------------------------------------------

ASSEMBLYAI_BASE_URL = os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2")

# ---------------------------------------------------------------------------
# Polling bounds
# ---------------------------------------------------------------------------

POLL_MAX_ATTEMPTS = int(os.getenv("POLL_MAX_ATTEMPTS", "60"))
POLL_INTERVAL_S = float(os.getenv("POLL_INTERVAL_S", "3.0"))

# ---------------------------------------------------------------------------
# Caption defaults
# ---------------------------------------------------------------------------

AUTO_LANGUAGE = "auto"
"""Sentinel language hint: omit language_code and let the provider detect."""

DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", AUTO_LANGUAGE)
DEFAULT_MODE = os.getenv("DEFAULT_MODE", "space")
DEFAULT_MAX_CUE_CHARS = int(os.getenv("DEFAULT_MAX_CUE_CHARS", "60"))
DEFAULT_MAX_GAP_S = float(os.getenv("DEFAULT_MAX_GAP_S", "0.8"))

# Upper bounds for per-request thresholds
MAX_CUE_CHARS_LIMIT = 10_000
MAX_GAP_S_LIMIT = 3600.0

PREVIEW_LINES = 15
OUTPUT_FILENAME = "captions.srt"

# ---------------------------------------------------------------------------
# Supported upload extensions
# ---------------------------------------------------------------------------

SUPPORTED_AUDIO_FORMATS: set[str] = {
    ".aac", ".flac", ".m4a", ".mp3", ".mp4",
    ".ogg", ".opus", ".wav", ".webm", ".wma",
}
"""Audio/video file extensions the CLI accepts (lowercase, with dot)."""


def load_api_key() -> str:
    """Load the transcription provider API key from the environment.

    WHY: Every provider call is authenticated. Loading the key from the
    environment (via .env) keeps it out of source code.

    RULES:
    - Reads TRANSCRIBE_API_KEY
    - Raises ValueError if the key is missing or empty
    """
    key = os.getenv("TRANSCRIBE_API_KEY", "").strip()
    if not key:
        raise ValueError(
            "Transcription API key not configured. "
            "Add TRANSCRIBE_API_KEY to the .env file in the app folder."
        )
    return key
