"""Value objects produced by one ingestion run."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class FileRecord:
    """One included source file."""

    path: str  # relative to the scan root, forward slashes
    content: str  # raw or line-numbered
    language: str
    line_count: int
    size: int  # bytes on disk


class DiagnosticKind(str, Enum):
    UNREADABLE_DIRECTORY = "unreadable_directory"
    UNENCODABLE_PATH = "unencodable_path"
    OVERSIZED_FILE = "oversized_file"
    UNREADABLE_FILE = "unreadable_file"
    UNDECODABLE_FILE = "undecodable_file"
    INVALID_PATTERN = "invalid_pattern"
    OUTPUT_NOT_SAVED = "output_not_saved"
    PROGRESS_CALLBACK_FAILED = "progress_callback_failed"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable, per-item problem recorded during a run."""

    kind: DiagnosticKind
    path: str
    message: str


@dataclass(frozen=True)
class IngestionResult:
    """Rendered summary and tree plus the records they were built from.

    Totals are derived from ``files`` on every access.
    """

    summary: str = ""
    directory_structure: str = ""
    files: Tuple[FileRecord, ...] = ()

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_lines(self) -> int:
        return sum(record.line_count for record in self.files)

    @property
    def total_characters(self) -> int:
        return sum(len(record.content) for record in self.files)


@dataclass(frozen=True)
class PipelineResult:
    """Externally visible outcome of one pipeline run."""

    success: bool
    content: str = ""
    output: IngestionResult = field(default_factory=IngestionResult)
    error: Optional[str] = None
    diagnostics: Tuple[Diagnostic, ...] = ()
    output_path: Optional[Path] = None

    @classmethod
    def failure(cls, error: str, diagnostics: Tuple[Diagnostic, ...] = ()) -> "PipelineResult":
        return cls(success=False, error=error, diagnostics=diagnostics)
