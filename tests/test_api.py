"""Tests for the FastAPI transcription endpoint.

WHY: The endpoint is the contract browser clients depend on: field names,
defaults, status codes, and the {error} body shape.

HOW: FastAPI TestClient drives the app in-process. The pipeline call is
patched with an AsyncMock (either returning a CaptionResult or raising a
pipeline error), and one test runs the real pipeline against the
ScriptedProvider.

RULES:
- The remote provider is never called
- Each test patches its own pipeline behavior
"""

from __future__ import annotations

import io
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from assembly_captions.core.ir import CaptionMode, CaptionResult, CaptionSettings
from assembly_captions.core.jobs import TranscriptionJobClient
from assembly_captions.errors import (
    JobFailedError,
    JobTimeoutError,
    SubmitError,
    UploadError,
)
from assembly_captions.pipeline import generate_captions
from assembly_captions.server.app import app

from tests.conftest import ScriptedProvider

_RESULT = CaptionResult(
    filename="captions.srt",
    srt="1\n00:00:00,000 --> 00:00:01,000\nhi there\n",
    preview="1\n00:00:00,000 --> 00:00:01,000\nhi there\n",
)


@pytest.fixture
def client():
    return TestClient(app)


def _make_audio_file(name: str = "talk.mp3", content: bytes = b"fake audio data"):
    return ("file", (name, io.BytesIO(content), "audio/mpeg"))


def _patch_pipeline(**kwargs):
    return patch(
        "assembly_captions.server.app.generate_captions",
        new=AsyncMock(**kwargs),
    )


# ---------------------------------------------------------------------------
# POST /api/transcribe
# ---------------------------------------------------------------------------


class TestTranscribe:

    def test_success_body(self, client):
        with _patch_pipeline(return_value=_RESULT):
            resp = client.post("/api/transcribe", files=[_make_audio_file()])
        assert resp.status_code == 200
        assert resp.json() == {
            "filename": "captions.srt",
            "srt": _RESULT.srt,
            "preview": _RESULT.preview,
        }

    def test_defaults_passed_to_pipeline(self, client):
        with _patch_pipeline(return_value=_RESULT) as mock:
            client.post("/api/transcribe", files=[_make_audio_file(content=b"abc")])
        audio, settings = mock.await_args.args
        assert audio == b"abc"
        assert settings.language == "auto"
        assert settings.mode is CaptionMode.SPACE
        assert settings.max_cue_chars == 60
        assert settings.max_gap_s == 0.8

    def test_form_fields_passed_to_pipeline(self, client):
        with _patch_pipeline(return_value=_RESULT) as mock:
            client.post(
                "/api/transcribe",
                files=[_make_audio_file()],
                data={"language": "en", "mode": "word", "max_chars": "32", "max_gap": "1.5"},
            )
        settings = mock.await_args.args[1]
        assert settings == CaptionSettings(
            language="en", mode="word", max_cue_chars=32, max_gap_s=1.5
        )

    def test_missing_file_is_400(self, client):
        with patch("assembly_captions.pipeline.AssemblyAIClient") as provider_cls:
            resp = client.post("/api/transcribe", data={"language": "en"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "No file uploaded"}
        provider_cls.assert_not_called()

    def test_empty_file_is_400(self, client):
        resp = client.post("/api/transcribe", files=[_make_audio_file(content=b"")])
        assert resp.status_code == 400
        assert resp.json()["error"] == "No file uploaded"

    def test_invalid_mode_is_400(self, client):
        with _patch_pipeline(return_value=_RESULT) as mock:
            resp = client.post(
                "/api/transcribe", files=[_make_audio_file()], data={"mode": "sentence"}
            )
        assert resp.status_code == 400
        assert "Unknown caption mode" in resp.json()["error"]
        mock.assert_not_awaited()

    def test_invalid_threshold_is_400(self, client):
        resp = client.post(
            "/api/transcribe", files=[_make_audio_file()], data={"max_chars": "0"}
        )
        assert resp.status_code == 400
        assert "max_cue_chars" in resp.json()["error"]

    @pytest.mark.parametrize("field, value, setting", [
        ("max_chars", "abc", "max_cue_chars"),
        ("max_gap", "soon", "max_gap_s"),
    ])
    def test_non_numeric_threshold_is_400(self, client, field, value, setting):
        with _patch_pipeline(return_value=_RESULT) as mock:
            resp = client.post(
                "/api/transcribe", files=[_make_audio_file()], data={field: value}
            )
        assert resp.status_code == 400
        assert set(resp.json()) == {"error"}
        assert setting in resp.json()["error"]
        mock.assert_not_awaited()

    def test_blank_threshold_uses_default(self, client):
        with _patch_pipeline(return_value=_RESULT) as mock:
            resp = client.post(
                "/api/transcribe",
                files=[_make_audio_file()],
                data={"max_chars": "", "max_gap": ""},
            )
        assert resp.status_code == 200
        assert mock.await_args.args[1] == CaptionSettings()

    @pytest.mark.parametrize("exc", [
        UploadError("Audio upload failed"),
        SubmitError("Transcription request failed"),
        JobFailedError("Transcription failed"),
    ])
    def test_remote_failures_are_500(self, client, exc):
        with _patch_pipeline(side_effect=exc):
            resp = client.post("/api/transcribe", files=[_make_audio_file()])
        assert resp.status_code == 500
        assert resp.json() == {"error": str(exc)}

    def test_timeout_is_504(self, client):
        with _patch_pipeline(side_effect=JobTimeoutError("Timed out waiting for transcript")):
            resp = client.post("/api/transcribe", files=[_make_audio_file()])
        assert resp.status_code == 504
        assert "Timed out" in resp.json()["error"]

    def test_missing_api_key_is_500(self, client, monkeypatch):
        monkeypatch.delenv("TRANSCRIBE_API_KEY", raising=False)
        resp = client.post("/api/transcribe", files=[_make_audio_file()])
        assert resp.status_code == 500
        assert "TRANSCRIBE_API_KEY" in resp.json()["error"]

    def test_real_pipeline_with_scripted_provider(self, client):
        provider = ScriptedProvider(["queued", "processing", "completed"])
        job_client = TranscriptionJobClient(provider, sleep=AsyncMock())

        async def _pipeline(audio, settings, filename):
            return await generate_captions(
                audio, settings, job_client=job_client, filename=filename
            )

        with patch("assembly_captions.server.app.generate_captions", new=_pipeline):
            resp = client.post(
                "/api/transcribe", files=[_make_audio_file()], data={"mode": "space"}
            )
        assert resp.status_code == 200
        body = resp.json()
        assert body["srt"].startswith("1\n00:00:00,000 --> 00:00:01,000\nhi there\n\n2\n")
        assert body["preview"] == "\n".join(body["srt"].split("\n")[:15])


# ---------------------------------------------------------------------------
# GET /health and OpenAPI
# ---------------------------------------------------------------------------


class TestHealthCheck:

    def test_health_returns_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": "0.1.0"}


class TestOpenAPISchema:

    def test_schema_lists_endpoints(self, client):
        schema = client.get("/openapi.json").json()
        assert schema["info"]["title"] == "Assembly Captions API"
        assert "post" in schema["paths"]["/api/transcribe"]
        assert "/health" in schema["paths"]

    def test_endpoints_have_descriptions_and_tags(self, client):
        schema = client.get("/openapi.json").json()
        for path, methods in schema["paths"].items():
            for method, op in methods.items():
                assert "summary" in op, "Missing summary for {} {}".format(method.upper(), path)
                assert "description" in op, "Missing description for {} {}".format(method.upper(), path)
                assert "tags" in op, "Missing tags for {} {}".format(method.upper(), path)
