"""
Pydantic models for HAR extraction runs.
"""

from pydantic import BaseModel, Field
from pathlib import Path
from typing import Optional, List
from enum import Enum


class ContentEncoding(str, Enum):
    """Response body encodings"""
    IDENTITY = "identity"
    BASE64 = "base64"


class WriteStatus(str, Enum):
    """Outcome of writing a single entry"""
    SAVED = "saved"
    REMOVED = "removed"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why an entry was skipped"""
    FILESYSTEM = "filesystem"
    MALFORMED_URL = "malformed_url"
    DECODE = "decode"


class HAREntry(BaseModel):
    """Single request/response pair from a HAR file"""
    url: str = Field(description="Absolute request URL")
    text: str = Field(default="", description="Response body as stored in the HAR")
    encoding: ContentEncoding = Field(default=ContentEncoding.IDENTITY, description="Response body encoding")


class ExtractConfig(BaseModel):
    """Run configuration, fixed at startup"""
    input_dir: Path = Field(default=Path("input"), description="HAR file or directory of HAR files")
    output_dir: Path = Field(default=Path("output"), description="Root for per-archive output folders")
    remove_zero_byte_files: bool = Field(default=True, description="Delete empty files after writing")
    max_filename_length: int = Field(default=250, gt=0, description="Maximum file name length")


class EntryResult(BaseModel):
    """Result of writing one entry"""
    status: WriteStatus
    url: str
    path: Optional[Path] = None
    failure: Optional[FailureKind] = None
    error: Optional[str] = None


class ArchiveSummary(BaseModel):
    """Per-archive extraction counts"""
    har_file: Path
    output_dir: Optional[Path] = None
    saved: int = 0
    removed: int = 0
    failed: int = 0
    error: Optional[str] = Field(default=None, description="Set when the whole archive was skipped")

    @property
    def ok(self) -> bool:
        return self.error is None

    def record(self, result: EntryResult) -> None:
        if result.status == WriteStatus.SAVED:
            self.saved += 1
        elif result.status == WriteStatus.REMOVED:
            self.removed += 1
        else:
            self.failed += 1


class RunSummary(BaseModel):
    """Totals for a whole run"""
    archives: List[ArchiveSummary] = Field(default_factory=list)

    @property
    def saved(self) -> int:
        return sum(a.saved for a in self.archives)

    @property
    def removed(self) -> int:
        return sum(a.removed for a in self.archives)

    @property
    def failed_entries(self) -> int:
        return sum(a.failed for a in self.archives)

    @property
    def failed_archives(self) -> List[ArchiveSummary]:
        return [a for a in self.archives if not a.ok]
