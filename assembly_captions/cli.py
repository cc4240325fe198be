"""Command-line interface for Assembly Captions.

WHY: Users need a way to caption a local audio file from the terminal
without running the HTTP server. The CLI wires file validation, the
transcription job client, caption segmentation, and SRT output behind a
single command.

HOW: Uses argparse for the input file, language, caption mode, thresholds,
and poll bounds. Runs the async pipeline via asyncio.run(). Status messages
go to stderr; the .srt file is saved next to the source (or to --output
or --output-dir) and the preview is printed to stdout. --serve starts the
HTTP API instead.

RULES:
- Positional argument: input audio file path (required unless --serve)
- --output names the .srt file exactly and overwrites it; --output-dir
  keeps the {stem}.srt naming
- Validates file extension against SUPPORTED_AUDIO_FORMATS before any API call
- Output naming: {stem}.srt, numeric suffix on conflict ({stem}-2.srt)
- Status output goes to stderr (not stdout)
- Exit codes: 0 success, 1 error, 130 cancelled
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from assembly_captions.api.client import AssemblyAIClient
from assembly_captions.config import (
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_CUE_CHARS,
    DEFAULT_MAX_GAP_S,
    DEFAULT_MODE,
    POLL_INTERVAL_S,
    POLL_MAX_ATTEMPTS,
    SUPPORTED_AUDIO_FORMATS,
)
from assembly_captions.core.ir import CaptionMode, CaptionSettings
from assembly_captions.core.jobs import TranscriptionJobClient
from assembly_captions.errors import CaptionError
from assembly_captions.pipeline import generate_captions


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. interview.srt)
    - Conflict: insert counter before the suffix (interview-2.srt)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    counter = 2
    while True:
        candidate = output_dir / "{}-{}{}".format(stem, counter, suffix)
        if not candidate.exists():
            return candidate
        counter += 1


def _fail(message: str) -> None:
    print("Error: {}".format(message), file=sys.stderr)
    sys.exit(1)


async def _run_pipeline(args: argparse.Namespace) -> None:
    """Validate inputs, transcribe, and save the .srt file.

    RULES:
    - Validate file existence and extension before any API call
    - Invalid thresholds are reported before any API call
    - On success the file path goes to stderr and the preview to stdout
    """
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    ext = input_path.suffix.lower()
    if ext not in SUPPORTED_AUDIO_FORMATS:
        _fail("Unsupported file type '{}'. Supported formats: {}".format(
            ext, ", ".join(sorted(SUPPORTED_AUDIO_FORMATS))
        ))

    if args.output:
        output_path = Path(args.output).resolve()
        output_dir = output_path.parent
    else:
        output_path = None
        output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    try:
        settings = CaptionSettings(
            language=args.language,
            mode=args.mode,
            max_cue_chars=args.max_chars,
            max_gap_s=args.max_gap,
        )
    except CaptionError as e:
        _fail(str(e))

    audio = input_path.read_bytes()
    _status("Loaded {} ({:,} bytes)".format(input_path.name, len(audio)))

    if output_path is None:
        output_path = _resolve_output_path(input_path.stem, ".srt", output_dir)

    try:
        async with AssemblyAIClient() as client:
            job_client = TranscriptionJobClient(
                client,
                max_polls=args.max_polls,
                poll_interval_s=args.poll_interval,
            )
            result = await generate_captions(
                audio,
                settings,
                job_client=job_client,
                filename=output_path.name,
                on_status=_status,
            )
    except CaptionError as e:
        _fail(str(e))
    except ValueError as e:
        # Config errors (missing API key)
        _fail(str(e))

    output_path.write_text(result.srt, encoding="utf-8")
    _status("")
    _status("Done! Saved {}".format(output_path))
    print(result.preview)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional: input_file (optional here; main() requires it unless --serve)
    - Optional: --language, --mode, --max-chars, --max-gap
    - Optional: --output or --output-dir (mutually exclusive)
    - Optional: --max-polls, --poll-interval, --serve, --verbose
    - No prefix abbreviations, so --output never resolves to --output-dir
    """
    parser = argparse.ArgumentParser(
        prog="assembly_captions",
        description="Transcribe an audio file with AssemblyAI and save SRT captions.",
        allow_abbrev=False,
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="Path to the audio file to transcribe.",
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the HTTP API instead of transcribing a file.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show pipeline log records on stderr.",
    )

    parser.add_argument(
        "--language",
        default=DEFAULT_LANGUAGE,
        help="Language code, or 'auto' to let the provider detect (default: %(default)s).",
    )

    parser.add_argument(
        "--mode",
        choices=[m.value for m in CaptionMode],
        default=DEFAULT_MODE,
        help="'word' for one cue per word, 'space' for grouped phrases (default: %(default)s).",
    )

    parser.add_argument(
        "--max-chars",
        type=int,
        default=DEFAULT_MAX_CUE_CHARS,
        help="Longest grouped cue in characters (default: %(default)s).",
    )

    parser.add_argument(
        "--max-gap",
        type=float,
        default=DEFAULT_MAX_GAP_S,
        help="Longest silence in seconds kept inside one cue (default: %(default)s).",
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--output",
        default=None,
        metavar="PATH",
        help="Path of the .srt file to write (overwritten if it exists).",
    )
    output.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save {stem}.srt in (default: same as input file).",
    )

    parser.add_argument(
        "--max-polls",
        type=int,
        default=POLL_MAX_ATTEMPTS,
        help="Status checks before giving up (default: %(default)s).",
    )

    parser.add_argument(
        "--poll-interval",
        type=float,
        default=POLL_INTERVAL_S,
        help="Seconds between status checks (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m assembly_captions``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Failures reach the user once, as the "Error: ..." line; pipeline
      log records are only shown with --verbose
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.serve:
        from assembly_captions.server.app import run_api
        run_api()
        return
    if args.input_file is None:
        parser.error("input_file is required unless --serve is given")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.CRITICAL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    try:
        asyncio.run(_run_pipeline(args))
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
