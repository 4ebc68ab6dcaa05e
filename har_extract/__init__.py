"""
HAR Extract - Unpack HAR captures into a browsable directory tree.

This package provides tools for:
- Loading HAR files and reading their request/response entries
- Mapping captured URLs to safe, length-bounded file paths
- Writing decoded response bodies under a per-archive output folder
"""

__version__ = "1.0.0"
