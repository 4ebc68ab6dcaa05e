"""
Writes decoded response bodies to disk.
"""

import base64
import binascii
import logging
from pathlib import Path

from .models import (
    ContentEncoding,
    EntryResult,
    ExtractConfig,
    FailureKind,
    HAREntry,
    WriteStatus,
)
from .paths import MalformedURLError, build_relative_path

logger = logging.getLogger(__name__)


def decode_content(entry: HAREntry) -> bytes:
    """
    Get the raw bytes of an entry's response body.

    Base64 bodies may omit their '=' padding or contain line breaks.

    Raises:
        binascii.Error: If a base64 body is malformed
    """
    if entry.encoding == ContentEncoding.BASE64:
        data = ''.join(entry.text.split()).rstrip('=')
        return base64.b64decode(data + '=' * (-len(data) % 4))
    return entry.text.encode('utf-8', errors='replace')


def _failed(entry: HAREntry, failure: FailureKind, error: Exception, path: Path = None) -> EntryResult:
    return EntryResult(
        status=WriteStatus.FAILED,
        url=entry.url,
        path=path,
        failure=failure,
        error=str(error),
    )


def write_entry(entry: HAREntry, output_dir: Path, config: ExtractConfig) -> EntryResult:
    """
    Write one entry's body below output_dir.

    Never raises for per-entry problems; they come back as a FAILED result
    so the caller can carry on with the next entry.

    Args:
        entry: Entry to write
        output_dir: Archive output folder
        config: Run configuration (filename limit, zero-byte policy)

    Returns:
        EntryResult with status SAVED, REMOVED or FAILED
    """
    try:
        relative_path = build_relative_path(entry.url, config.max_filename_length)
    except MalformedURLError as e:
        logger.warning(f"Skipping entry: {e}")
        return _failed(entry, FailureKind.MALFORMED_URL, e)

    file_path = Path(output_dir) / relative_path

    try:
        content = decode_content(entry)
    except binascii.Error as e:
        logger.warning(f"Skipping undecodable body for {entry.url}: {e}")
        return _failed(entry, FailureKind.DECODE, e, file_path)

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)

        if config.remove_zero_byte_files and file_path.stat().st_size == 0:
            file_path.unlink()
            logger.info(f"Removed 0-byte file: {file_path}")
            return EntryResult(status=WriteStatus.REMOVED, url=entry.url, path=file_path)
    except OSError as e:
        logger.error(f"Failed to write file: {file_path}: {e}")
        return _failed(entry, FailureKind.FILESYSTEM, e, file_path)

    logger.info(f"Saved: {file_path}")
    return EntryResult(status=WriteStatus.SAVED, url=entry.url, path=file_path)
