"""Transcription provider package — async HTTP interface to AssemblyAI.

WHY: The pipeline needs to upload audio, create transcription jobs, and
poll their status. This package keeps all provider communication behind
the TranscriptionProvider interface.

RULES:
- All HTTP calls to the provider go through AssemblyAIClient
- Response data is parsed into the dataclasses in models.py
"""

from assembly_captions.api.client import AssemblyAIClient, ProviderAPIError
from assembly_captions.api.models import JobSnapshot, ProviderWord, SubmitRequest
from assembly_captions.api.provider import TranscriptionProvider

__all__ = [
    "AssemblyAIClient",
    "JobSnapshot",
    "ProviderAPIError",
    "ProviderWord",
    "SubmitRequest",
    "TranscriptionProvider",
]
