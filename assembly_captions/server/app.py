"""FastAPI application exposing audio-to-SRT transcription.

WHY: Browser front ends and scripts need one HTTP call that takes an audio
upload and returns finished captions. FastAPI gives multipart parsing,
response validation, and OpenAPI docs for free.

HOW: POST /api/transcribe reads the upload and form fields, builds a
CaptionSettings, and awaits generate_captions(). The handler is async, so a
slow transcription yields the event loop at every poll and sleep and other
requests keep being served. Pipeline errors are turned into {"error": ...}
bodies by an exception handler.

RULES:
- Success body: {filename, srt, preview}; failure body: {error}
- InputError → 400, JobTimeoutError → 504, other pipeline errors → 500
- A missing file is reported as InputError, not a FastAPI 422
- Numeric form fields arrive as text and are parsed by CaptionSettings, so
  a non-numeric value is a 400 {error}, not a FastAPI 422
- No state is kept between requests
"""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from assembly_captions import __version__
from assembly_captions.config import DEFAULT_LANGUAGE, DEFAULT_MODE, OUTPUT_FILENAME
from assembly_captions.core.ir import CaptionSettings
from assembly_captions.errors import CaptionError, InputError, JobTimeoutError
from assembly_captions.pipeline import generate_captions
from assembly_captions.server.models import CaptionResponse, ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Assembly Captions API",
    description=(
        "Upload an audio file and receive SubRip (.srt) captions built from "
        "word-level timestamps, one cue per word or grouped into phrases."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


def _status_for(exc: CaptionError) -> int:
    if isinstance(exc, InputError):
        return 400
    if isinstance(exc, JobTimeoutError):
        return 504
    return 500


@app.exception_handler(CaptionError)
async def caption_error_handler(request: Request, exc: CaptionError) -> JSONResponse:
    """Render any pipeline failure as a single {"error": ...} body."""
    return JSONResponse(status_code=_status_for(exc), content={"error": str(exc)})


# ---------------------------------------------------------------------------
# Endpoints: Transcription
# ---------------------------------------------------------------------------


@app.post(
    "/api/transcribe",
    response_model=CaptionResponse,
    tags=["transcription"],
    summary="Transcribe audio into SRT captions",
    description=(
        "Upload an audio file. The file is transcribed with word timestamps, "
        "grouped into caption cues, and returned as SubRip text together with "
        "a short preview. The request blocks until the transcript is ready."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "No file uploaded or invalid settings"},
        500: {"model": ErrorResponse, "description": "Upload, submit, or transcription failure"},
        504: {"model": ErrorResponse, "description": "Timed out waiting for the transcript"},
    },
)
async def transcribe(
    file: Annotated[
        Optional[UploadFile],
        File(description="Audio file to transcribe."),
    ] = None,
    language: Annotated[
        str,
        Form(description="Language code (e.g. 'en') or 'auto' for detection."),
    ] = DEFAULT_LANGUAGE,
    mode: Annotated[
        str,
        Form(description="'word' for one cue per word, 'space' for grouped phrases."),
    ] = DEFAULT_MODE,
    max_chars: Annotated[
        Optional[str],
        Form(description="Longest grouped cue text in characters (default 60)."),
    ] = None,
    max_gap: Annotated[
        Optional[str],
        Form(description="Longest silence in seconds bridged inside one cue (default 0.8)."),
    ] = None,
) -> CaptionResponse:
    overrides = {}
    if max_chars:
        overrides["max_cue_chars"] = max_chars
    if max_gap:
        overrides["max_gap_s"] = max_gap
    try:
        settings = CaptionSettings(language=language, mode=mode, **overrides)
    except InputError:
        logger.exception("Rejected caption settings")
        raise

    audio = await file.read() if file is not None else b""

    try:
        result = await generate_captions(audio, settings, filename=OUTPUT_FILENAME)
    except CaptionError:
        raise
    except ValueError as exc:
        # Provider misconfiguration, e.g. a missing API key
        logger.exception("Transcription service is not configured")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return CaptionResponse(filename=result.filename, srt=result.srt, preview=result.preview)


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Entry point for the assembly-captions-api console script."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    uvicorn.run(app, host=host, port=port)
