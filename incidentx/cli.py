"""
Command-line interface for Incident Extract.
"""

import argparse
import json
import sys
from pathlib import Path

from incidentx.batch import process_directory
from incidentx.classifier import build_vocabulary, is_relevant, matched_terms
from incidentx.config import Config, load_config
from incidentx.extractor import extract_incident, is_accepted
from incidentx.log import configure_logging, get_logger
from incidentx.model import CorpusError, MongoDBError, OutputError
from incidentx.ocr import check_ocr_dependencies, make_recognizer
from incidentx.writers import write_outputs

logger = get_logger(__name__)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """
    Apply command-line options on top of the loaded configuration.

    Args:
        config: Loaded configuration
        args: Command-line arguments

    Returns:
        The updated configuration
    """
    if args.directory:
        config.input.directory = args.directory
    if args.json:
        config.output.json_path = args.json
    if args.csv:
        config.output.csv_path = args.csv
    if args.ndjson:
        config.output.ndjson_path = args.ndjson
    if args.workers is not None:
        config.performance.workers = args.workers
    if args.ocr_lang:
        config.ocr.lang = args.ocr_lang
    if args.ocr_timeout is not None:
        config.ocr.timeout = args.ocr_timeout
    return config


def process_command(args: argparse.Namespace) -> int:
    """
    Process command-line arguments.

    Args:
        args: Command-line arguments

    Returns:
        Exit code
    """
    # Load configuration
    config = apply_overrides(load_config(args.config), args)

    # Set up logging
    configure_logging(config, args.log_level)

    if args.command == "ocr":
        if not check_ocr_dependencies():
            return 1
        print(make_recognizer(config)(args.image))
        return 0
    elif args.command == "extract":
        text = Path(args.file).read_text(encoding="utf-8")
        source = args.source or Path(args.file).name
        vocabulary = build_vocabulary(config.extraction.extra_terms)

        incident = extract_incident(
            text,
            source,
            fallback_chars=config.extraction.description_chars,
            max_victims=config.extraction.max_victims,
        )
        result = {
            "relevant": is_relevant(text, vocabulary),
            "matched_terms": matched_terms(text, vocabulary),
            "accepted": is_accepted(incident),
            "incident": incident,
        }
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0
    else:
        # Default command (process a corpus directory)
        if not config.output.json_path and not config.output.csv_path and not config.output.ndjson_path:
            logger.error("At least one output format must be specified")
            return 1

        directory = config.input.directory
        logger.info(f"Processing images in {directory}")

        try:
            incidents = process_directory(directory, config)
        except CorpusError as e:
            logger.error(f"Cannot read corpus: {e}")
            return 1

        try:
            write_outputs(incidents, config)
        except (OutputError, MongoDBError) as e:
            logger.error(f"Cannot write incidents: {e}")
            return 1

        print(f"Total events recorded: {len(incidents)}")
        return 0


def main() -> int:
    """
    Main entry point.

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(description="Incident Extract")
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Logging level")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Default command (process a corpus directory)
    parser.add_argument("--dir", dest="directory", help="Directory of scanned page images")
    parser.add_argument("--json", help="JSON output file")
    parser.add_argument("--csv", help="CSV output file")
    parser.add_argument("--ndjson", help="NDJSON output file")
    parser.add_argument("--workers", type=int, help="Number of worker threads")
    parser.add_argument("--ocr-lang", help="Tesseract language")
    parser.add_argument("--ocr-timeout", type=float, help="Per-image OCR timeout in seconds")

    # OCR command
    ocr_parser = subparsers.add_parser("ocr", help="Print the recognized text of one image")
    ocr_parser.add_argument("image", help="Image file")

    # Extract command
    extract_parser = subparsers.add_parser("extract", help="Extract an incident from a text file")
    extract_parser.add_argument("file", help="UTF-8 text file with recognized text")
    extract_parser.add_argument("--source", help="Source name recorded in the incident")

    args = parser.parse_args()

    try:
        return process_command(args)
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
