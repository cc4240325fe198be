"""Transcription job client — upload, submit, and poll until a terminal state.

WHY: Remote transcription is slow and asynchronous: the provider hands back
a job ID and the transcript only appears after some number of polls. The
caption pipeline needs a plain "audio in, words out" call, so this module
hides the job protocol behind one awaitable.

HOW: TranscriptionJobClient.transcribe() walks an explicit state machine
recorded on a TranscriptionJob:

    SUBMITTING → QUEUED / PROCESSING (poll loop) → COMPLETED | ERRORED | TIMED_OUT

The poll loop is bounded: at most ``max_polls`` status requests, with a
fixed ``poll_interval_s`` sleep between consecutive polls. On success
provider millisecond timings are converted to seconds.

RULES:
- Upload/submit failures raise UploadError/SubmitError, never retried
- status "error" raises JobFailedError at once, never a timeout
- Bound exhausted without a terminal status raises JobTimeoutError
- The loop suspends only at the provider round-trip and the sleep, so
  cancelling the surrounding task stops it at one of those points
- Language "auto" is sent as no language_code (provider auto-detects)
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from assembly_captions.api.models import (
    STATUS_COMPLETED,
    STATUS_ERROR,
    STATUS_QUEUED,
    JobSnapshot,
    ProviderWord,
    SubmitRequest,
)
from assembly_captions.api.provider import TranscriptionProvider
from assembly_captions.config import AUTO_LANGUAGE, POLL_INTERVAL_S, POLL_MAX_ATTEMPTS
from assembly_captions.core.ir import Word
from assembly_captions.errors import (
    InputError,
    JobFailedError,
    JobTimeoutError,
    SubmitError,
    UploadError,
)

logger = logging.getLogger(__name__)


class JobPhase(str, enum.Enum):
    """Phases of one transcription job.

    RULES:
    - SUBMITTING covers both the upload and the submit request
    - COMPLETED, ERRORED, TIMED_OUT are terminal
    """

    SUBMITTING = "submitting"
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERRORED = "errored"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (JobPhase.COMPLETED, JobPhase.ERRORED, JobPhase.TIMED_OUT)


@dataclass
class TranscriptionJob:
    """State of one in-flight job. Lives only for the current request."""

    phase: JobPhase = JobPhase.SUBMITTING
    upload_url: str | None = None
    job_id: str | None = None
    polls: int = 0
    words: list[Word] = field(default_factory=list)


def language_code_for(language: str | None) -> str | None:
    """Map a language hint to the provider's language_code (None for auto)."""
    if not language or language.strip().lower() == AUTO_LANGUAGE:
        return None
    return language.strip()


def words_from_provider(provider_words: list[ProviderWord]) -> list[Word]:
    """Convert provider millisecond timings to seconds, preserving order."""
    return [
        Word(text=w.text, start=w.start_ms / 1000, end=w.end_ms / 1000)
        for w in provider_words
    ]


class TranscriptionJobClient:
    """Turns audio bytes into a finished word list via a TranscriptionProvider.

    Args:
        provider: Any TranscriptionProvider (AssemblyAIClient in production).
        max_polls: Poll bound; defaults to POLL_MAX_ATTEMPTS.
        poll_interval_s: Fixed sleep between polls; defaults to POLL_INTERVAL_S.
        sleep: Awaitable sleep function, swappable in tests.
    """

    def __init__(
        self,
        provider: TranscriptionProvider,
        max_polls: int = POLL_MAX_ATTEMPTS,
        poll_interval_s: float = POLL_INTERVAL_S,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if max_polls < 1:
            raise ValueError("max_polls must be at least 1")
        if poll_interval_s < 0:
            raise ValueError("poll_interval_s must not be negative")
        self._provider = provider
        self._max_polls = max_polls
        self._poll_interval_s = poll_interval_s
        self._sleep = sleep

    async def transcribe(
        self,
        audio: bytes,
        language: str = AUTO_LANGUAGE,
        on_status: Callable[[str], None] | None = None,
        job: TranscriptionJob | None = None,
    ) -> list[Word]:
        """Upload, submit, and poll until the transcript is ready.

        Args:
            audio: Raw audio file bytes.
            language: ISO language code or "auto".
            on_status: Optional callback for human-readable progress.
            job: Optional TranscriptionJob to record state on; a fresh one
                is used when omitted.

        Returns:
            Words in transcript order with timings in seconds.

        Raises:
            InputError: ``audio`` is empty.
            UploadError, SubmitError, JobFailedError, JobTimeoutError.
        """
        if not audio:
            raise InputError("No file uploaded")

        job = job if job is not None else TranscriptionJob()
        job.phase = JobPhase.SUBMITTING

        await self._submit(job, audio, language, on_status)
        snapshot = await self._poll(job, on_status)

        job.words = words_from_provider(snapshot.words)
        logger.info(
            "Job %s completed after %d poll(s) with %d word(s)",
            job.job_id, job.polls, len(job.words),
        )
        return job.words

    async def _submit(
        self,
        job: TranscriptionJob,
        audio: bytes,
        language: str,
        on_status: Callable[[str], None] | None,
    ) -> None:
        if on_status:
            on_status("Uploading audio...")
        try:
            upload_url = await self._provider.upload_audio(audio)
        except Exception as exc:
            job.phase = JobPhase.ERRORED
            raise UploadError("Audio upload failed: {}".format(exc)) from exc
        if not upload_url:
            job.phase = JobPhase.ERRORED
            raise UploadError("Audio upload returned no upload reference")
        job.upload_url = upload_url

        if on_status:
            on_status("Requesting transcription...")
        request = SubmitRequest(
            audio_url=upload_url,
            language_code=language_code_for(language),
            word_timestamps=True,
        )
        try:
            job_id = await self._provider.submit_job(request)
        except Exception as exc:
            job.phase = JobPhase.ERRORED
            raise SubmitError("Transcription request failed: {}".format(exc)) from exc
        if not job_id:
            job.phase = JobPhase.ERRORED
            raise SubmitError("Transcription request returned no job ID")
        job.job_id = job_id
        job.phase = JobPhase.QUEUED
        logger.info("Submitted transcription job %s", job_id)

    async def _poll(
        self,
        job: TranscriptionJob,
        on_status: Callable[[str], None] | None,
    ) -> JobSnapshot:
        while job.polls < self._max_polls:
            job.polls += 1
            try:
                snapshot = await self._provider.get_job(job.job_id)
            except Exception as exc:
                job.phase = JobPhase.ERRORED
                raise JobFailedError("Transcription failed: {}".format(exc)) from exc

            if snapshot.status == STATUS_COMPLETED:
                job.phase = JobPhase.COMPLETED
                if on_status:
                    on_status("Transcription complete.")
                return snapshot

            if snapshot.status == STATUS_ERROR:
                job.phase = JobPhase.ERRORED
                logger.error(
                    "Job %s reported error: %s", job.job_id, snapshot.error_message
                )
                raise JobFailedError("Transcription failed")

            job.phase = JobPhase.QUEUED if snapshot.status == STATUS_QUEUED else JobPhase.PROCESSING
            if on_status:
                on_status(
                    "Transcription {} (poll {}/{})...".format(
                        snapshot.status, job.polls, self._max_polls
                    )
                )
            if job.polls < self._max_polls:
                await self._sleep(self._poll_interval_s)

        job.phase = JobPhase.TIMED_OUT
        raise JobTimeoutError(
            "Timed out waiting for transcript {} after {} polls".format(job.job_id, job.polls)
        )
