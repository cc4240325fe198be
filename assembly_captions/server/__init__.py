"""HTTP API package — FastAPI app for audio-to-SRT transcription."""
