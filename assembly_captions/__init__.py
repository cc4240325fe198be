"""Assembly Captions — audio uploads to SubRip captions via AssemblyAI.

WHY: Speech-to-text providers return word timings, not subtitles. This
package turns one uploaded audio file into ready-to-use .srt text, either
one cue per word or grouped into readable phrases.

HOW: Three-stage pipeline — transcribe (job client polling a provider),
segment (words into cues), render (cues into SRT). Each stage is
independently testable.

RULES:
- Stages share only the IR types in core/ir.py
- The provider sits behind api.provider.TranscriptionProvider
- Nothing is persisted; every request is self-contained
"""

__version__ = "0.1.0"
