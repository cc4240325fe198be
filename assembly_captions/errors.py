"""Exception taxonomy for the caption pipeline.

WHY: The HTTP layer and the CLI both need to turn a failure into a single
user-visible message and a status. Typed exceptions let them do that
without string matching.

RULES:
- Every fatal pipeline failure is a CaptionError subclass
- None of these are retried inside the package
- JobTimeoutError is also a TimeoutError so generic handlers still see it
"""

from __future__ import annotations


class CaptionError(Exception):
    """Base class for all pipeline failures surfaced to the caller."""


class InputError(CaptionError, ValueError):
    """Raised when the request is unusable before any remote call.

    Covers a missing audio payload and out-of-range caption settings.
    """


class UploadError(CaptionError):
    """Raised when the provider upload fails or returns no usable reference."""


class SubmitError(CaptionError):
    """Raised when the provider rejects the transcription request."""


class JobFailedError(CaptionError):
    """Raised when the provider reports the job status as "error"."""


class JobTimeoutError(CaptionError, TimeoutError):
    """Raised when the poll bound is exhausted without a terminal status.

    RULES:
    - Message includes the job ID and the number of polls made
    """
