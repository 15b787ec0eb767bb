"""Per-run collection of recoverable problems."""

import threading
from typing import List, Tuple

from codedigest.core.errors import IngestionCancelled
from codedigest.core.models import Diagnostic, DiagnosticKind
from codedigest.utils.logger import get_logger


class DiagnosticsCollector:
    """Accumulates Diagnostic records for one run and mirrors them to the log."""

    def __init__(self):
        self._records: List[Diagnostic] = []
        self.logger = get_logger()

    def warn(self, kind: DiagnosticKind, path: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, path=path, message=message)
        self._records.append(diagnostic)
        self.logger.warning(f"{message} [{kind.value}: {path}]")
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self._records if d.kind == kind]

    def snapshot(self) -> Tuple[Diagnostic, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)


class CancellationToken:
    """Cooperative cancellation flag; ``cancel()`` may be called from any thread."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise IngestionCancelled("Ingestion cancelled")
