import os
from pathlib import Path
from typing import Iterable, List, Optional

from codedigest.core.diagnostics import CancellationToken, DiagnosticsCollector
from codedigest.core.errors import DiscoveryError
from codedigest.core.models import DiagnosticKind
from codedigest.core.path_matcher import PathMatcher
from codedigest.utils.file_processor import FileProcessor


# ============================================================================
# File Discoverer
# ============================================================================


class FileDiscoverer:
    """Walks a scan root depth-first and collects source files."""

    def __init__(
        self,
        diagnostics: Optional[DiagnosticsCollector] = None,
        cancel_token: Optional[CancellationToken] = None,
    ):
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticsCollector()
        self.cancel_token = cancel_token

    def discover(self, root: Path, matcher: PathMatcher, allowed_extensions: Iterable[str]) -> List[Path]:
        """
        Collect files under ``root`` that pass the ignore patterns and the allow-list.

        Entries are visited in the order the filesystem yields them. Ignored
        directories are not descended into. Symlinks are skipped.

        Args:
            root: Absolute scan root
            matcher: Compiled ignore patterns
            allowed_extensions: Suffixes (with dot) of files to keep

        Returns:
            Absolute file paths in traversal order

        Raises:
            DiscoveryError: If ``root`` itself cannot be listed
            IngestionCancelled: If the cancellation token fires mid-walk
        """
        extensions = frozenset(ext.lower() for ext in allowed_extensions)
        try:
            entries = self._list(root)
        except OSError as error:
            raise DiscoveryError(f"Cannot read directory {root}: {error}") from error

        found: List[Path] = []
        self._walk(root, root, entries, matcher, extensions, found)
        return found

    @staticmethod
    def _list(directory: Path) -> List[os.DirEntry]:
        with os.scandir(directory) as it:
            return list(it)

    def _walk(
        self,
        root: Path,
        directory: Path,
        entries: List[os.DirEntry],
        matcher: PathMatcher,
        extensions: frozenset,
        found: List[Path],
    ) -> None:
        for entry in entries:
            if self.cancel_token is not None:
                self.cancel_token.raise_if_cancelled()

            entry_path = directory / entry.name
            relative_path = FileProcessor.relative_posix(entry_path, root)
            if matcher.matches(relative_path, entry.name):
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file(follow_symlinks=False)
            except OSError:
                continue

            if is_dir:
                if self._unencodable(relative_path):
                    continue
                try:
                    children = self._list(entry_path)
                except OSError as error:
                    self.diagnostics.warn(
                        DiagnosticKind.UNREADABLE_DIRECTORY,
                        relative_path,
                        f"Cannot read directory {entry_path}: {error}",
                    )
                    continue
                self._walk(root, entry_path, children, matcher, extensions, found)
            elif is_file and FileProcessor.extension_of(entry_path) in extensions:
                if self._unencodable(relative_path):
                    continue
                found.append(entry_path)

    def _unencodable(self, relative_path: str) -> bool:
        """
        Record and report a path whose name is not valid UTF-8.

        Such names come back from the OS as lone surrogates and cannot be
        written to the UTF-8 artifact, so the entry (and anything below it)
        is left out.
        """
        try:
            relative_path.encode("utf-8")
        except UnicodeEncodeError:
            display = FileProcessor.display_path(relative_path)
            self.diagnostics.warn(
                DiagnosticKind.UNENCODABLE_PATH,
                display,
                f"Skipping path that is not valid UTF-8: {display}",
            )
            return True
        return False
