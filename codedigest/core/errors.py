"""Exceptions raised inside the ingestion pipeline."""


class DigestError(Exception):
    """Base class for run-fatal ingestion errors."""


class DiscoveryError(DigestError):
    """The scan root is missing, not a directory, or cannot be listed."""


class IngestionCancelled(DigestError):
    """The run was cancelled through its CancellationToken."""
