"""Shared test fixtures for the assembly_captions test suite.

WHY: The job client, pipeline, and API tests all need the same sample
transcript and a provider that replays a scripted sequence of statuses
without touching the network.

HOW: ScriptedProvider implements TranscriptionProvider in memory. Each
get_job() call pops the next scripted status. Fixtures provide the sample
words in both provider (milliseconds) and IR (seconds) form.

RULES:
- No test performs real HTTP
- Sample timings match the "hi there / friend" example: the 4.0s gap
  before "friend" splits it into its own cue
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from assembly_captions.api.models import JobSnapshot, ProviderWord, SubmitRequest
from assembly_captions.api.provider import TranscriptionProvider
from assembly_captions.core.ir import Word


SAMPLE_PROVIDER_WORDS: List[Dict[str, Any]] = [
    {"text": "hi",     "start": 0,    "end": 500,  "confidence": 0.98},
    {"text": "there",  "start": 600,  "end": 1000, "confidence": 0.97},
    {"text": "friend", "start": 5000, "end": 5400, "confidence": 0.95},
]

SAMPLE_WORDS: List[Word] = [
    Word(text="hi", start=0.0, end=0.5),
    Word(text="there", start=0.6, end=1.0),
    Word(text="friend", start=5.0, end=5.4),
]


class ScriptedProvider(TranscriptionProvider):
    """In-memory provider that replays scripted job statuses.

    Args:
        statuses: Status string for each successive get_job() call.
        words: Word dicts returned with the "completed" status.
        upload_url / job_id: Values returned by upload/submit; pass "" to
            simulate an unusable reference.
        upload_exc / submit_exc / poll_exc: Exceptions to raise instead.
    """

    def __init__(
        self,
        statuses: List[str],
        words: Optional[List[Dict[str, Any]]] = None,
        upload_url: str = "https://cdn.example/upload/abc",
        job_id: str = "job-123",
        upload_exc: Optional[Exception] = None,
        submit_exc: Optional[Exception] = None,
        poll_exc: Optional[Exception] = None,
    ) -> None:
        self.statuses = list(statuses)
        self.words = SAMPLE_PROVIDER_WORDS if words is None else words
        self.upload_url = upload_url
        self.job_id = job_id
        self.upload_exc = upload_exc
        self.submit_exc = submit_exc
        self.poll_exc = poll_exc
        self.uploads: List[bytes] = []
        self.requests: List[SubmitRequest] = []
        self.polled: List[str] = []

    async def upload_audio(self, data: bytes) -> str:
        self.uploads.append(data)
        if self.upload_exc:
            raise self.upload_exc
        return self.upload_url

    async def submit_job(self, request: SubmitRequest) -> str:
        self.requests.append(request)
        if self.submit_exc:
            raise self.submit_exc
        return self.job_id

    async def get_job(self, job_id: str) -> JobSnapshot:
        self.polled.append(job_id)
        if self.poll_exc:
            raise self.poll_exc
        status = self.statuses.pop(0)
        words = []
        if status == "completed":
            words = [ProviderWord.from_dict(w) for w in self.words]
        error = "Audio file is corrupt" if status == "error" else None
        return JobSnapshot(id=job_id, status=status, words=words, error_message=error)


@pytest.fixture
def sample_words() -> List[Word]:
    return list(SAMPLE_WORDS)

