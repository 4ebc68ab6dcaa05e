#!/usr/bin/env python3
"""
HAR Extractor

Unpacks HAR captures into a directory tree that mirrors the captured URLs,
one output folder per HAR file.

Usage:
    python extract_har.py
    python extract_har.py --input-dir captures --output-dir output
    python extract_har.py --input-dir session.har --keep-zero-byte-files
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables from .env file
load_dotenv()

from har_extract.extractor import extract_all
from har_extract.models import ExtractConfig


# ============================================================================
# LOGGING SETUP
# ============================================================================

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================================
# CONFIGURATION
# ============================================================================

ENV_VARS = {
    'input_dir': 'HAR_INPUT_DIR',
    'output_dir': 'HAR_OUTPUT_DIR',
    'remove_zero_byte_files': 'HAR_REMOVE_ZERO_BYTE_FILES',
    'max_filename_length': 'HAR_MAX_FILENAME_LENGTH',
}


def build_config(args: argparse.Namespace) -> ExtractConfig:
    """
    Merge command-line flags over environment variables.

    Options set by neither fall back to the ExtractConfig defaults.

    Raises:
        ValidationError: If a value can't be coerced
    """
    values = {}
    for field, env_var in ENV_VARS.items():
        value = os.getenv(env_var)
        if value:
            values[field] = value

    if args.input_dir is not None:
        values['input_dir'] = args.input_dir
    if args.output_dir is not None:
        values['output_dir'] = args.output_dir
    if args.keep_zero_byte_files:
        values['remove_zero_byte_files'] = False
    if args.max_filename_length is not None:
        values['max_filename_length'] = args.max_filename_length

    return ExtractConfig(**values)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Extract HAR files into a browsable directory tree',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python extract_har.py --input-dir input --output-dir output
  python extract_har.py --input-dir capture.har --max-filename-length 120

Environment variables (also read from .env):
  HAR_INPUT_DIR, HAR_OUTPUT_DIR, HAR_REMOVE_ZERO_BYTE_FILES, HAR_MAX_FILENAME_LENGTH
        """
    )
    parser.add_argument(
        '--input-dir',
        type=str,
        default=None,
        help='Directory of HAR files, or a single HAR file (default: input)'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help='Root folder for extracted files (default: output)'
    )
    parser.add_argument(
        '--keep-zero-byte-files',
        action='store_true',
        help='Keep empty response bodies instead of deleting them'
    )
    parser.add_argument(
        '--max-filename-length',
        type=int,
        default=None,
        help='Truncate file names longer than this (default: 250)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser.parse_args(argv)


# ============================================================================
# MAIN PIPELINE
# ============================================================================

def main(argv=None):
    """Main entry point"""
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = build_config(args)
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    logger.info("=" * 70)
    logger.info("HAR EXTRACTOR")
    logger.info("=" * 70)
    logger.info(f"Input: {config.input_dir}")
    logger.info(f"Output: {config.output_dir}")
    logger.info(f"Remove 0-byte files: {config.remove_zero_byte_files}")
    logger.info("")

    try:
        run = extract_all(config)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("\nExtraction interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Extraction failed: {e}", exc_info=True)
        return 1

    # ========================================================================
    # SUMMARY
    # ========================================================================
    failed_archives = run.failed_archives

    print("\n" + "=" * 70)
    if failed_archives:
        print("⚠️  HAR EXTRACTION FINISHED WITH ERRORS")
    else:
        print("✅ All HAR files extracted successfully!")
    print("=" * 70)
    print(f"HAR files: {len(run.archives)}")
    print(f"Saved files: {run.saved}")
    print(f"Removed 0-byte files: {run.removed}")
    if run.failed_entries:
        print(f"Failed entries: {run.failed_entries}")
    for archive in failed_archives:
        print(f"   - {archive.har_file.name}: {archive.error}")
    print("=" * 70)

    return 1 if failed_archives else 0


if __name__ == "__main__":
    sys.exit(main())
