"""Provider request and response dataclasses.

WHY: The job client must not depend on any provider's JSON layout. These
dataclasses are the internal contract between a concrete provider and the
polling loop: what a submit request carries, and what one status poll
returns.

HOW: Each dataclass has a from_dict()/to_dict() helper for the AssemblyAI
v2 JSON shapes. Other providers build the same objects from their own
payloads.

RULES:
- Word timings stay in integer milliseconds here; the job client converts
- JobSnapshot.words is only populated when status is "completed"
- SubmitRequest.language_code is None for auto-detection and is then
  omitted from the wire body
"""

from __future__ import annotations

from dataclasses import dataclass, field

STATUS_QUEUED = "queued"
STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_ERROR = "error"


@dataclass
class ProviderWord:
    """One word from a provider transcript, timings in milliseconds."""

    text: str
    start_ms: int
    end_ms: int

    @classmethod
    def from_dict(cls, data: dict) -> ProviderWord:
        """Parse an AssemblyAI word object ``{text, start, end, ...}``.

        ``start_ms``/``end_ms`` keys are accepted as well, so fixtures written
        against the provider-neutral shape parse the same way.
        """
        start = data["start_ms"] if "start_ms" in data else data["start"]
        end = data["end_ms"] if "end_ms" in data else data["end"]
        return cls(text=data["text"], start_ms=start, end_ms=end)


@dataclass
class SubmitRequest:
    """Body of a "transcribe this upload" request."""

    audio_url: str
    language_code: str | None = None
    word_timestamps: bool = True

    def to_dict(self) -> dict:
        body: dict = {
            "audio_url": self.audio_url,
            "word_timestamps": self.word_timestamps,
        }
        if self.language_code:
            body["language_code"] = self.language_code
        return body


@dataclass
class JobSnapshot:
    """Status of a transcription job at one poll.

    RULES:
    - status is one of: "queued", "processing", "completed", "error"
      (unknown values are treated as still running)
    - error_message is only meaningful when status is "error"
    """

    id: str
    status: str
    words: list[ProviderWord] = field(default_factory=list)
    error_message: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> JobSnapshot:
        return cls(
            id=data.get("id", ""),
            status=data["status"],
            words=[ProviderWord.from_dict(w) for w in data.get("words") or []],
            error_message=data.get("error"),
        )
