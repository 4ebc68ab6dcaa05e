"""
URL to file path mapping and output folder allocation.
"""

import logging
import posixpath
import re
from pathlib import Path
from typing import Set
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILENAME_LENGTH = 250
INDEX_FILE = 'index.html'

# Windows-reserved and shell-significant characters
RESERVED_CHARS = re.compile(r'[<>:"|?*%,!&()]')


class MalformedURLError(ValueError):
    """Raised when an entry URL can't be mapped to a file path."""


# ============================================================================
# SANITIZATION
# ============================================================================

def sanitize_file_name(name: str) -> str:
    """Replace reserved characters with '-'."""
    return RESERVED_CHARS.sub('-', name)


def truncate_file_name(name: str, max_length: int = DEFAULT_MAX_FILENAME_LENGTH) -> str:
    """
    Cut a file name down to max_length, keeping its extension.

    Examples:
        truncate_file_name('a' * 300 + '.js', 10) → 'aaaaaaa.js'
    """
    if len(name) <= max_length:
        return name

    ext = posixpath.splitext(name)[1]
    if len(ext) >= max_length:
        return name[:max_length]
    return name[:max_length - len(ext)] + ext


# ============================================================================
# URL MAPPING
# ============================================================================

def _resolve_dot_segments(path: str) -> str:
    """
    Resolve '.' and '..' the way browsers do.

    Examples:
        /a/../b.txt → /b.txt
        /docs/.     → /docs/
        /../x.js    → /x.js
    """
    if not path:
        return path

    resolved = posixpath.normpath('/' + path)
    is_dir = path.endswith('/') or posixpath.basename(path) in ('.', '..')
    if is_dir and not resolved.endswith('/'):
        resolved += '/'
    return resolved


def build_relative_path(url: str, max_filename_length: int = DEFAULT_MAX_FILENAME_LENGTH) -> str:
    """
    Map a captured URL to a relative file path.

    Directory-like paths get an index.html file. A query string is folded
    into that index.html name; on paths with an explicit extension it is
    dropped, so /app.js?v=1 and /app.js?v=2 share one file.

    Examples:
        https://a.com            → index.html
        https://a.com/docs       → docs/index.html
        https://a.com/x?y=1      → x/-y=1-index.html
        https://a.com/app.js?v=1 → app.js

    Args:
        url: Absolute request URL
        max_filename_length: Limit for the final path segment

    Returns:
        POSIX-style relative path

    Raises:
        MalformedURLError: If the URL can't be parsed or isn't absolute
    """
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise MalformedURLError(f"Invalid URL {url!r}: {e}") from e

    if not parsed.scheme or not parsed.netloc:
        raise MalformedURLError(f"URL missing scheme or host: {url!r}")

    pathname = _resolve_dot_segments(parsed.path).lstrip('/')

    if not pathname or pathname.endswith('/'):
        pathname += INDEX_FILE
    if not posixpath.splitext(pathname)[1]:
        pathname += '/' + INDEX_FILE

    if parsed.query and (pathname == INDEX_FILE or pathname.endswith('/' + INDEX_FILE)):
        safe_query = sanitize_file_name('?' + parsed.query)
        pathname = pathname[:-len(INDEX_FILE)] + f"{safe_query}-{INDEX_FILE}"

    # a query can still carry '..' segments
    parts = [sanitize_file_name(p) for p in pathname.split('/') if p not in ('', '.', '..')]
    parts[-1] = truncate_file_name(parts[-1], max_filename_length)

    return '/'.join(parts)


# ============================================================================
# OUTPUT FOLDERS
# ============================================================================

class OutputFolderAllocator:
    """
    Hands out one unused folder per archive under a base directory.

    A folder counts as taken if it exists on disk or was already handed
    out by this allocator, so name clashes get _new(1), _new(2), ...
    """

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)
        self._allocated: Set[Path] = set()

    def _is_taken(self, folder: Path) -> bool:
        return folder in self._allocated or folder.exists()

    def allocate(self, folder_name: str) -> Path:
        folder = self.base_dir / folder_name
        counter = 1
        while self._is_taken(folder):
            folder = self.base_dir / f"{folder_name}_new({counter})"
            counter += 1

        self._allocated.add(folder)
        logger.debug(f"Allocated output folder {folder}")
        return folder
