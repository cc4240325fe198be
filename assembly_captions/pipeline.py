"""Request orchestration — audio bytes to SRT result.

WHY: The HTTP endpoint and the CLI both run the same sequence: validate
the payload, transcribe, segment, render, preview. Keeping that sequence
here means both front ends produce identical output and log failures the
same way.

HOW: generate_captions() builds (or receives) a TranscriptionJobClient,
awaits the finished word list, runs the SRT formatter with the request's
CaptionSettings, and wraps the text in a CaptionResult. When no provider
is supplied an AssemblyAIClient is opened for the duration of the call.

RULES:
- Empty audio raises InputError before any remote call
- Subtitle generation only starts after a fully completed transcript
- Every CaptionError is logged once here and re-raised unchanged
- No partial results are ever returned
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from assembly_captions.api.client import AssemblyAIClient
from assembly_captions.api.provider import TranscriptionProvider
from assembly_captions.config import OUTPUT_FILENAME
from assembly_captions.core.ir import CaptionResult, CaptionSettings, Word
from assembly_captions.core.jobs import TranscriptionJobClient
from assembly_captions.errors import CaptionError, InputError
from assembly_captions.formatters.srt import SRTFormatter, build_preview

logger = logging.getLogger(__name__)


def build_result(
    words: list[Word],
    settings: CaptionSettings,
    filename: str = OUTPUT_FILENAME,
) -> CaptionResult:
    """Segment and render a finished word list."""
    output = SRTFormatter().format(words, settings)
    logger.debug(
        "Rendered %d cue(s) from %d word(s) in %s mode",
        output.cue_count, len(words), settings.mode.value,
    )
    return CaptionResult(
        filename=filename,
        srt=output.content,
        preview=build_preview(output.content),
    )


async def generate_captions(
    audio: bytes | None,
    settings: CaptionSettings | None = None,
    provider: TranscriptionProvider | None = None,
    job_client: TranscriptionJobClient | None = None,
    filename: str = OUTPUT_FILENAME,
    on_status: Callable[[str], None] | None = None,
) -> CaptionResult:
    """Transcribe ``audio`` and return SRT captions.

    Args:
        audio: Raw audio file bytes.
        settings: Caption options; defaults to CaptionSettings().
        provider: Provider to transcribe with. Ignored when ``job_client``
            is given. Defaults to a fresh AssemblyAIClient.
        job_client: Pre-configured job client (custom poll bounds, tests).
        filename: Name reported in the result.
        on_status: Optional progress callback.

    Raises:
        CaptionError: any input, upload, submit, job, or timeout failure.
    """
    settings = settings or CaptionSettings()

    try:
        if not audio:
            raise InputError("No file uploaded")

        if job_client is not None:
            words = await job_client.transcribe(audio, settings.language, on_status)
        elif provider is not None:
            words = await TranscriptionJobClient(provider).transcribe(
                audio, settings.language, on_status
            )
        else:
            async with AssemblyAIClient() as client:
                words = await TranscriptionJobClient(client).transcribe(
                    audio, settings.language, on_status
                )
    except CaptionError:
        logger.exception("Caption generation failed")
        raise

    return build_result(words, settings, filename)
