"""
Main entry point for the Poster Event Extractor.

Usage:
    python main.py --text path/to/poster.txt
    python main.py --batch path/to/texts/ --output results/ --now 2025-03-01T09:00
"""

import argparse
import logging
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

# Add the poster_events package to the path
sys.path.insert(0, str(Path(__file__).parent))

from poster_events import EventExtractor, EventCandidate


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler('poster_events.log', encoding='utf-8')
        ]
    )


def get_text_files(path: str) -> List[str]:
    """
    Get list of OCR text files from path.

    Args:
        path: File path or directory path

    Returns:
        List of text file paths
    """
    path_obj = Path(path)

    if path_obj.is_file():
        if path_obj.suffix.lower() == '.txt':
            return [str(path_obj)]
        else:
            raise ValueError(f"Unsupported text file: {path_obj.suffix}")

    elif path_obj.is_dir():
        text_files = list(path_obj.glob('*.txt')) + list(path_obj.glob('*.TXT'))
        return [str(f) for f in sorted(set(text_files))]

    else:
        raise FileNotFoundError(f"Path not found: {path}")


def parse_now(value: Optional[str]) -> Optional[datetime]:
    """Parse the reference instant from an ISO 8601 string."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid --now value, expected ISO 8601: {value}")


def extract_single_file(extractor: EventExtractor, text_path: str,
                        now: Optional[datetime] = None, output_dir: str = None,
                        format: str = 'json') -> List[EventCandidate]:
    """
    Extract events from a single OCR text file.

    Args:
        extractor: EventExtractor instance
        text_path: Path to the text file
        now: Reference instant for year-less dates
        output_dir: Optional output directory for results
        format: Export format

    Returns:
        List of event candidates
    """
    print(f"\nExtracting: {Path(text_path).name}")
    print("-" * 50)

    text = Path(text_path).read_text(encoding='utf-8')
    events = extractor.extract(text, now)

    for index, event in enumerate(events, start=1):
        when = event.date.strftime('%Y-%m-%d %H:%M') if event.has_time else event.date.strftime('%Y-%m-%d')
        kind = event.source_kind.value if event.source_kind else 'fallback'
        print(f"[{index}/{len(events)}] {event.title} | {when} | {kind}")

    if output_dir:
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        out_file = output_path / f"{Path(text_path).stem}_events.{format}"
        if extractor.export_results(events, str(out_file), format):
            print(f"Results saved to: {out_file}")

    return events


def extract_batch(extractor: EventExtractor, text_paths: List[str],
                  now: Optional[datetime] = None, output_dir: str = None,
                  format: str = 'json') -> dict:
    """
    Extract events from several OCR text files.

    Returns:
        Batch summary dictionary
    """
    print(f"\nStarting batch extraction of {len(text_paths)} files")
    print("=" * 60)

    kinds = {}
    total_events = 0
    timed_events = 0
    failed = []

    for text_path in text_paths:
        try:
            events = extract_single_file(extractor, text_path, now, output_dir, format)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error extracting {text_path}: {e}")
            failed.append(text_path)
            continue

        total_events += len(events)
        for event in events:
            kind = event.source_kind.value if event.source_kind else 'fallback'
            kinds[kind] = kinds.get(kind, 0) + 1
            if event.has_time:
                timed_events += 1

    summary = {
        'files_processed': len(text_paths) - len(failed),
        'files_failed': failed,
        'events_found': total_events,
        'events_with_time': timed_events,
        'kinds': dict(sorted(kinds.items())),
    }

    print("\nBatch Extraction Results")
    print("=" * 40)
    print(f"Files: {summary['files_processed']} ({len(failed)} failed)")
    print(f"Events: {summary['events_found']} ({summary['events_with_time']} with a time)")
    print(f"Kinds: {summary['kinds']}")

    if output_dir:
        summary_file = Path(output_dir) / 'batch_summary.json'
        summary_file.parent.mkdir(parents=True, exist_ok=True)
        with open(summary_file, 'w', encoding='utf-8') as f:
            json.dump(summary, f, ensure_ascii=False, indent=2)
        print(f"Batch summary exported to: {summary_file}")

    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Poster Event Extractor - Turn OCR text from posters into calendar event candidates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --text poster.txt
  python main.py --batch texts/ --output results/
  python main.py --text poster.txt --now 2025-03-01T09:00 --format csv --output out/
        """
    )

    # Input arguments
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument('--text', type=str, help='Single OCR text file to process')
    input_group.add_argument('--batch', type=str, help='Directory containing OCR text files')

    # Configuration arguments
    parser.add_argument('--output', type=str, help='Output directory for results')
    parser.add_argument('--now', type=str,
                        help='Reference instant in ISO 8601 (or set POSTER_EVENTS_NOW)')
    parser.add_argument('--window', type=int, default=200,
                        help='Maximum character distance between a date and its time')
    parser.add_argument('--format', choices=['json', 'csv'], default='json',
                        help='Export format')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    try:
        now = parse_now(args.now or os.getenv('POSTER_EVENTS_NOW'))
        extractor = EventExtractor(proximity_window=args.window)

        if args.text:
            text_paths = get_text_files(args.text)
            extract_single_file(extractor, text_paths[0], now, args.output, args.format)

        elif args.batch:
            text_paths = get_text_files(args.batch)
            if not text_paths:
                raise ValueError(f"No text files found in: {args.batch}")

            extract_batch(extractor, text_paths, now, args.output, args.format)

        print("\nExtraction complete!")
        return 0

    except KeyboardInterrupt:
        print("\nExtraction interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Error: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
