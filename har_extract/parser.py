"""
HAR loading and archive discovery.
"""

import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from .models import ContentEncoding, HAREntry

logger = logging.getLogger(__name__)

HAR_EXTENSION = '.har'


class HARParseError(ValueError):
    """Raised when a HAR file cannot be read as a HAR document."""


# ============================================================================
# HAR LOADING AND VALIDATION
# ============================================================================

def load_har_file(har_path: Path) -> dict:
    """
    Load HAR file from disk with validation.

    Args:
        har_path: Path to HAR file

    Returns:
        HAR data dict

    Raises:
        HARParseError: If the file is unreadable or not a HAR document
    """
    try:
        with open(har_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise HARParseError(f"HAR file is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise HARParseError(f"Could not read HAR file {har_path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('log'), dict) \
            or not isinstance(data['log'].get('entries'), list):
        raise HARParseError("Invalid HAR format: missing log.entries")

    return data


def parse_har_entries(har_data: dict) -> List[HAREntry]:
    """
    Convert raw HAR entries into HAREntry models, keeping their order.

    Missing bodies become empty text. Any encoding marker other than
    base64 is treated as plain text.

    Raises:
        HARParseError: If an entry, or its request/response/content,
            isn't an object, or url/text isn't a string
    """
    entries = []
    for idx, entry in enumerate(har_data['log']['entries']):
        try:
            request = entry.get('request') or {}
            content = (entry.get('response') or {}).get('content') or {}

            encoding = ContentEncoding.IDENTITY
            if content.get('encoding') == ContentEncoding.BASE64.value:
                encoding = ContentEncoding.BASE64

            entries.append(HAREntry(
                url=request.get('url') or '',
                text=content.get('text') or '',
                encoding=encoding,
            ))
        except (AttributeError, TypeError, ValidationError) as e:
            raise HARParseError(f"Invalid HAR entry #{idx}: {e}") from e
    return entries


def load_har_entries(har_path: Path) -> List[HAREntry]:
    """Load a HAR file and return its entries."""
    har_data = load_har_file(har_path)
    entries = parse_har_entries(har_data)
    logger.debug(f"Loaded {len(entries)} entries from {har_path}")
    return entries


# ============================================================================
# ARCHIVE DISCOVERY
# ============================================================================

def is_har_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() == HAR_EXTENSION


def find_har_files(location: Path) -> List[Path]:
    """
    Find HAR files to extract.

    Args:
        location: A directory to scan (non-recursive) or a single HAR file

    Returns:
        HAR file paths sorted by name

    Raises:
        FileNotFoundError: If location doesn't exist
    """
    location = Path(location)
    if not location.exists():
        raise FileNotFoundError(f"Input location not found: {location}")

    if location.is_file():
        return [location] if is_har_file(location) else []

    return sorted((p for p in location.iterdir() if is_har_file(p)), key=lambda p: p.name)
