"""
codedigest - Summarize a source tree into one line-numbered XML document.
"""

__version__ = "0.1.0"

# Package-level exports for convenience
from codedigest.cli import main
from codedigest.core.config import ConfigValidator, IngestionConfig, build_config
from codedigest.core.diagnostics import CancellationToken, DiagnosticsCollector
from codedigest.core.discoverer import FileDiscoverer
from codedigest.core.errors import DigestError, DiscoveryError, IngestionCancelled
from codedigest.core.languages import language_for
from codedigest.core.models import Diagnostic, DiagnosticKind, FileRecord, IngestionResult, PipelineResult
from codedigest.core.path_matcher import PathMatcher, matches
from codedigest.core.pipeline import IngestionPipeline, PipelineStage, generate_digest
from codedigest.core.reader import FileReader
from codedigest.services.summary import SummaryBuilder
from codedigest.services.tree import TreeBuilder
from codedigest.services.xml_serializer import XmlSerializer, escape_xml
from codedigest.utils.format import format_size, parse_size


__all__ = [
    "IngestionConfig",
    "ConfigValidator",
    "build_config",
    "IngestionPipeline",
    "PipelineStage",
    "generate_digest",
    "PathMatcher",
    "matches",
    "FileDiscoverer",
    "FileReader",
    "TreeBuilder",
    "SummaryBuilder",
    "XmlSerializer",
    "escape_xml",
    "language_for",
    "FileRecord",
    "IngestionResult",
    "PipelineResult",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticsCollector",
    "CancellationToken",
    "DigestError",
    "DiscoveryError",
    "IngestionCancelled",
    "format_size",
    "parse_size",
    "main",
]
