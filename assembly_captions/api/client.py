"""Async HTTP client for the AssemblyAI v2 transcription API.

WHY: The pipeline needs to upload audio, create a transcription job, and
read its status. This module keeps every HTTP detail (endpoints, auth
header, JSON shapes) behind the TranscriptionProvider interface so the job
client never sees a URL.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. AssemblyAIClient is an
async context manager — enter it to get an authenticated client, exit to
close the connection pool. Each provider operation is one request:
upload_audio → submit_job → get_job (called repeatedly by the job client).

RULES:
- Always use the async context manager (async with AssemblyAIClient(...) as client:)
- Auth is the raw key in the "authorization" header (no Bearer prefix)
- Non-2xx responses raise ProviderAPIError; nothing is retried here
- api_key defaults to load_api_key() from .env
"""

from __future__ import annotations

import logging

import httpx

from assembly_captions.api.models import JobSnapshot, SubmitRequest
from assembly_captions.api.provider import TranscriptionProvider
from assembly_captions.config import ASSEMBLYAI_BASE_URL, load_api_key

logger = logging.getLogger(__name__)


class ProviderAPIError(Exception):
    """Raised when the provider returns an error response.

    WHY: Callers need a typed exception to distinguish API rejections from
    network errors.

    RULES:
    - Always include status_code and message
    - message is the response body text or a summary
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Transcription API error {status_code}: {message}")


class AssemblyAIClient(TranscriptionProvider):
    """Async AssemblyAI provider.

    RULES:
    - Use as: async with AssemblyAIClient() as client: ...
    - base_url defaults to ASSEMBLYAI_BASE_URL from config
    - transport is only overridden in tests (httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or load_api_key()
        self._base_url = (base_url or ASSEMBLYAI_BASE_URL).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> AssemblyAIClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"authorization": self._api_key},
            timeout=httpx.Timeout(300.0, connect=30.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "AssemblyAIClient must be used as an async context manager: "
                "async with AssemblyAIClient() as client: ..."
            )
        return self._client

    async def upload_audio(self, data: bytes) -> str:
        """POST raw bytes to /upload and return the ``upload_url``."""
        client = self._ensure_client()
        logger.debug("Uploading %d bytes", len(data))

        resp = await client.post(
            "/upload",
            content=data,
            headers={"content-type": "application/octet-stream"},
        )
        if resp.status_code not in (200, 201):
            raise ProviderAPIError(resp.status_code, resp.text)

        return resp.json().get("upload_url") or ""

    async def submit_job(self, request: SubmitRequest) -> str:
        """POST /transcript and return the job ``id``."""
        client = self._ensure_client()

        resp = await client.post("/transcript", json=request.to_dict())
        if resp.status_code not in (200, 201):
            raise ProviderAPIError(resp.status_code, resp.text)

        return resp.json().get("id") or ""

    async def get_job(self, job_id: str) -> JobSnapshot:
        """GET /transcript/{id} once and parse the status."""
        client = self._ensure_client()

        resp = await client.get(f"/transcript/{job_id}")
        if resp.status_code != 200:
            raise ProviderAPIError(resp.status_code, resp.text)

        return JobSnapshot.from_dict(resp.json())
