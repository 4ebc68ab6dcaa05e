"""
Runs extraction over every HAR file in the input location.
"""

import logging
from pathlib import Path

from .models import ArchiveSummary, ExtractConfig, RunSummary
from .parser import HARParseError, find_har_files, load_har_entries
from .paths import OutputFolderAllocator
from .writer import write_entry

logger = logging.getLogger(__name__)


def extract_archive(har_path: Path, allocator: OutputFolderAllocator, config: ExtractConfig) -> ArchiveSummary:
    """
    Extract a single HAR file into a fresh output folder.

    A HAR file that fails to load is skipped as a whole. Folders that were
    already created are left in place.

    Args:
        har_path: HAR file to extract
        allocator: Output folder allocator shared across the run
        config: Run configuration

    Returns:
        ArchiveSummary with saved/removed/failed counts
    """
    summary = ArchiveSummary(har_file=har_path)

    try:
        output_dir = allocator.allocate(har_path.stem)
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Could not create output folder for {har_path.name}: {e}")
        summary.error = str(e)
        return summary

    summary.output_dir = output_dir
    logger.info(f"Extracting HAR: {har_path.name} -> {output_dir}")

    try:
        entries = load_har_entries(har_path)
    except HARParseError as e:
        logger.error(f"Skipping {har_path.name}: {e}")
        summary.error = str(e)
        return summary

    for entry in entries:
        summary.record(write_entry(entry, output_dir, config))

    logger.info(f"HAR extraction complete: {har_path.name}")
    logger.info(f"Saved files: {summary.saved}, Removed 0-byte files: {summary.removed}")
    if summary.failed:
        logger.warning(f"Failed entries: {summary.failed}")

    return summary


def extract_all(config: ExtractConfig) -> RunSummary:
    """
    Extract every HAR file found in config.input_dir, one at a time.

    Raises:
        FileNotFoundError: If the input location doesn't exist
    """
    har_files = find_har_files(config.input_dir)
    logger.info(f"Found {len(har_files)} HAR file(s) in {config.input_dir}")

    config.output_dir.mkdir(parents=True, exist_ok=True)
    allocator = OutputFolderAllocator(config.output_dir)

    run = RunSummary()
    for har_path in har_files:
        run.archives.append(extract_archive(har_path, allocator, config))

    return run
