from pathlib import Path
from typing import List, Optional

from codedigest.core.diagnostics import DiagnosticsCollector
from codedigest.core.languages import language_for
from codedigest.core.models import DiagnosticKind, FileRecord
from codedigest.utils.file_processor import FileProcessor
from codedigest.utils.format import format_size


LINE_NUMBER_WIDTH = 6
LINE_NUMBER_SEPARATOR = "|"


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only; a trailing newline yields a final empty segment."""
    return text.split("\n")


def number_lines(text: str) -> str:
    """Prefix every ``\\n``-delimited segment with its right-aligned 1-based number."""
    return "\n".join(
        f"{index:>{LINE_NUMBER_WIDTH}}{LINE_NUMBER_SEPARATOR}{line}"
        for index, line in enumerate(split_lines(text), 1)
    )


# ============================================================================
# File Reader
# ============================================================================


class FileReader:
    """Reads discovered files into FileRecords, skipping what cannot be used."""

    def __init__(
        self,
        root: Path,
        max_file_size: int,
        show_line_numbers: bool = True,
        diagnostics: Optional[DiagnosticsCollector] = None,
    ):
        """
        Initialize file reader.

        Args:
            root: Scan root that record paths are made relative to
            max_file_size: Largest size in bytes that is still read
            show_line_numbers: Prefix each line with its number
            diagnostics: Collector for per-file warnings
        """
        self.root = root
        self.max_file_size = max_file_size
        self.show_line_numbers = show_line_numbers
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticsCollector()

    def read(self, path: Path) -> Optional[FileRecord]:
        """
        Read one file.

        Returns:
            FileRecord, or None when the file is oversized, unreadable or not text
        """
        relative_path = FileProcessor.relative_posix(path, self.root)

        try:
            size = path.stat().st_size
        except OSError as error:
            self.diagnostics.warn(DiagnosticKind.UNREADABLE_FILE, relative_path, f"Cannot read file {path}: {error}")
            return None

        if size > self.max_file_size:
            self.diagnostics.warn(
                DiagnosticKind.OVERSIZED_FILE,
                relative_path,
                f"Skipping large file: {path} ({format_size(size)} > {format_size(self.max_file_size)})",
            )
            return None

        try:
            data = path.read_bytes()
        except OSError as error:
            self.diagnostics.warn(DiagnosticKind.UNREADABLE_FILE, relative_path, f"Cannot read file {path}: {error}")
            return None

        if b"\x00" in data:
            self.diagnostics.warn(
                DiagnosticKind.UNDECODABLE_FILE, relative_path, f"Skipping binary file: {path} (contains NUL bytes)"
            )
            return None

        try:
            raw = data.decode("utf-8")
        except UnicodeDecodeError as error:
            self.diagnostics.warn(
                DiagnosticKind.UNDECODABLE_FILE, relative_path, f"Cannot decode file {path} as UTF-8: {error.reason}"
            )
            return None

        content = number_lines(raw) if self.show_line_numbers else raw
        return FileRecord(
            path=relative_path,
            content=content,
            language=language_for(FileProcessor.extension_of(path)),
            line_count=len(split_lines(raw)),
            size=len(data),
        )

    def read_all(self, paths: List[Path], cancel_token=None) -> List[FileRecord]:
        """Read ``paths`` in order, checking ``cancel_token`` before each file."""
        records: List[FileRecord] = []
        for path in paths:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            record = self.read(path)
            if record is not None:
                records.append(record)
        return records
