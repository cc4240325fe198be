"""Pydantic response models for the HTTP API.

WHY: The endpoint needs typed schemas for response serialization and
automatic OpenAPI documentation.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Success and failure bodies have disjoint shapes: {filename, srt, preview}
  vs {error}
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CaptionResponse(BaseModel):
    """Successful transcription result."""

    filename: str = Field(description="Suggested download filename.")
    srt: str = Field(description="Full SubRip subtitle text.")
    preview: str = Field(description="First 15 lines of the subtitle text.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "filename": "captions.srt",
                "srt": "1\n00:00:00,000 --> 00:00:01,000\nhi there\n\n"
                       "2\n00:00:05,000 --> 00:00:05,400\nfriend\n",
                "preview": "1\n00:00:00,000 --> 00:00:01,000\nhi there\n\n"
                           "2\n00:00:05,000 --> 00:00:05,400\nfriend\n",
            }
        ]
    }}


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - error is always a single human-readable message
    """

    error: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
