"""Core pipeline stages: IR types, timecodes, segmentation, job polling.

RULES:
- Nothing in core/ performs HTTP directly; the job client talks to a
  TranscriptionProvider
- Segmentation and timecode formatting are pure functions
"""
