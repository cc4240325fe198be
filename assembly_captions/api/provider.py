"""Abstract transcription provider — the adapter boundary.

WHY: The polling state machine only needs three operations: upload bytes,
submit a job, read a job's status. Putting them behind an ABC lets tests
drive the job client with a scripted fake and lets another provider be
dropped in without touching segmentation or rendering.

RULES:
- Implementations raise their own exceptions; the job client maps any
  failure to the pipeline error taxonomy
- get_job() performs exactly one round-trip; it never sleeps or retries
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from assembly_captions.api.models import JobSnapshot, SubmitRequest


class TranscriptionProvider(ABC):
    """Remote speech-to-text service with an asynchronous job API."""

    @abstractmethod
    async def upload_audio(self, data: bytes) -> str:
        """Upload raw audio bytes and return an opaque upload reference."""

    @abstractmethod
    async def submit_job(self, request: SubmitRequest) -> str:
        """Request transcription of an uploaded reference and return the job ID."""

    @abstractmethod
    async def get_job(self, job_id: str) -> JobSnapshot:
        """Fetch the current status of a job."""
