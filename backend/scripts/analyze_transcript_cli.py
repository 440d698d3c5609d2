#!/usr/bin/env python3
"""
CLI tool to run the highlight pipeline on a transcript JSON file.

The input is either a list of segments or an object with a "segments" key.
Each segment carries "text", "start" (or "offset") and "duration" (or "end").

Usage:
    python scripts/analyze_transcript_cli.py <transcript.json> [--clip-length 35] [--clip-count 3]

Example:
    python scripts/analyze_transcript_cli.py ~/captions/talk.json --output-dir ./output --debug
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hookclip.pipeline import ConfigurationError, analyze_transcript


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)


def load_segments(path: Path) -> list:
    """Read segments from a transcript JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Transcript not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("segments", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of segments in {path}")
    return data


def analyze_file(
    transcript_path: Path,
    output_dir: Path,
    clip_length: float,
    clip_count: int,
    language: str = None,
    debug: bool = False,
) -> Path:
    """
    Analyze a transcript file and write highlights JSON.

    Returns the path of the written file.
    """
    segments = load_segments(transcript_path)
    logger.info(f"Analyzing: {transcript_path} ({len(segments)} segments)")

    output_dir.mkdir(parents=True, exist_ok=True)

    result = analyze_transcript(
        segments,
        clip_length_seconds=clip_length,
        clip_count=clip_count,
        language=language,
        debug_dir=output_dir / "debug" if debug else None,
    )

    if result.is_empty:
        logger.warning("No transcript text found, nothing to highlight")

    output_file = output_dir / "highlights.json"
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump({
            "transcript_path": str(transcript_path),
            **result.to_dict(),
        }, f, indent=2, ensure_ascii=False)

    logger.info(f"Highlights written to: {output_file}")
    if result.debug_path:
        logger.info(f"Debug JSON written to: {result.debug_path}")
    for i, highlight in enumerate(result.highlights):
        logger.info(
            f"  {i+1}. {highlight.start:.1f}s - {highlight.end:.1f}s "
            f"(confidence: {highlight.confidence:.2f}) {highlight.hook}"
        )

    return output_file


def main():
    parser = argparse.ArgumentParser(
        description="Find highlight clips in a transcript JSON file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Three 35-second clips (default)
    python scripts/analyze_transcript_cli.py talk.json

    # Two 60-second clips from a Spanish transcript, with debug JSON
    python scripts/analyze_transcript_cli.py charla.json --clip-length 60 --clip-count 2 --language es --debug
        """
    )

    parser.add_argument(
        "transcript_path",
        type=Path,
        help="Path to transcript JSON file"
    )

    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=Path("./hookclip_output"),
        help="Output directory (default: ./hookclip_output)"
    )

    parser.add_argument(
        "--clip-length", "-l",
        type=float,
        default=35.0,
        help="Target clip length in seconds (10-90)"
    )

    parser.add_argument(
        "--clip-count", "-n",
        type=int,
        default=3,
        help="Maximum number of highlights (1-6)"
    )

    parser.add_argument(
        "--language",
        default=None,
        help="Transcript language tag (default: en)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Also write a debug JSON with every pipeline decision"
    )

    args = parser.parse_args()

    try:
        analyze_file(
            transcript_path=args.transcript_path,
            output_dir=args.output_dir,
            clip_length=args.clip_length,
            clip_count=args.clip_count,
            language=args.language,
            debug=args.debug,
        )
    except (FileNotFoundError, ValueError, ConfigurationError) as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
