"""
Tests for codedigest.core.diagnostics module.
"""

import threading

import pytest

from codedigest.core.diagnostics import CancellationToken, DiagnosticsCollector
from codedigest.core.errors import DigestError, IngestionCancelled
from codedigest.core.models import Diagnostic, DiagnosticKind


@pytest.mark.unit
class TestDiagnosticsCollector:
    """Tests for DiagnosticsCollector class."""

    def test_warn_records_and_returns_diagnostic(self, diagnostics):
        diagnostic = diagnostics.warn(DiagnosticKind.OVERSIZED_FILE, "big.py", "Skipping large file")

        assert diagnostic == Diagnostic(DiagnosticKind.OVERSIZED_FILE, "big.py", "Skipping large file")
        assert diagnostics.snapshot() == (diagnostic,)
        assert len(diagnostics) == 1

    def test_warnings_are_logged(self, diagnostics, mocker):
        warning = mocker.patch.object(diagnostics.logger, "warning")

        diagnostics.warn(DiagnosticKind.UNREADABLE_DIRECTORY, "secret", "Cannot read directory")

        warning.assert_called_once_with("Cannot read directory [unreadable_directory: secret]")

    def test_of_kind_filters_and_keeps_order(self, diagnostics):
        diagnostics.warn(DiagnosticKind.UNREADABLE_FILE, "a.py", "m")
        diagnostics.warn(DiagnosticKind.OVERSIZED_FILE, "b.py", "m")
        diagnostics.warn(DiagnosticKind.UNREADABLE_FILE, "c.py", "m")

        assert [d.path for d in diagnostics.of_kind(DiagnosticKind.UNREADABLE_FILE)] == ["a.py", "c.py"]
        assert diagnostics.of_kind(DiagnosticKind.INVALID_PATTERN) == []

    def test_snapshot_is_immutable_copy(self, diagnostics):
        snapshot = diagnostics.snapshot()
        diagnostics.warn(DiagnosticKind.UNREADABLE_FILE, "a.py", "m")

        assert snapshot == ()
        assert len(diagnostics.snapshot()) == 1


@pytest.mark.unit
class TestCancellationToken:
    """Tests for CancellationToken class."""

    def test_starts_uncancelled(self):
        token = CancellationToken()

        assert token.is_cancelled is False
        token.raise_if_cancelled()

    def test_cancel_raises(self):
        token = CancellationToken()
        token.cancel()

        assert token.is_cancelled is True
        with pytest.raises(IngestionCancelled, match="Ingestion cancelled"):
            token.raise_if_cancelled()

    def test_cancelled_is_a_digest_error(self):
        assert issubclass(IngestionCancelled, DigestError)

    def test_cancel_from_another_thread(self):
        token = CancellationToken()

        worker = threading.Thread(target=token.cancel)
        worker.start()
        worker.join()

        assert token.is_cancelled is True
