import os
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional

from codedigest.core.config import IngestionConfig, build_config
from codedigest.core.diagnostics import CancellationToken, DiagnosticsCollector
from codedigest.core.discoverer import FileDiscoverer
from codedigest.core.errors import DiscoveryError
from codedigest.core.models import DiagnosticKind, IngestionResult, PipelineResult
from codedigest.core.path_matcher import PathMatcher
from codedigest.core.reader import FileReader
from codedigest.services.summary import SummaryBuilder
from codedigest.services.tree import TreeBuilder
from codedigest.services.xml_serializer import XmlSerializer
from codedigest.utils.file_processor import FileProcessor
from codedigest.utils.format import format_size
from codedigest.utils.logger import get_logger


ProgressCallback = Callable[[str, Optional[int]], None]


class PipelineStage(str, Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    READING = "reading"
    BUILDING_TREE = "building_tree"
    SUMMARIZING = "summarizing"
    SERIALIZING = "serializing"
    DONE = "done"
    FAILED = "failed"


# ============================================================================
# Ingestion Pipeline
# ============================================================================


class IngestionPipeline:
    """Main orchestrator: discover, read, build tree, summarize, serialize."""

    def __init__(
        self,
        config: IngestionConfig,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Ingestion configuration for this run
            progress_callback: Called with (message, percent); advisory only
            cancel_token: Checked during discovery and before each file read
        """
        self.config = config
        self.progress_callback = progress_callback
        self.cancel_token = cancel_token
        self.logger = get_logger()
        self.stage = PipelineStage.IDLE
        self.stage_history: List[PipelineStage] = [PipelineStage.IDLE]
        self.tree_builder = TreeBuilder()
        self.summary_builder = SummaryBuilder()
        self.serializer = XmlSerializer()

    def run(self) -> PipelineResult:
        """
        Execute one ingestion run.

        Never raises: fatal problems are returned as ``success=False`` with
        the error message, and nothing is written to disk.
        """
        diagnostics = DiagnosticsCollector()
        start_time = time.time()
        self.stage_history = [PipelineStage.IDLE]
        root = self.config.root

        try:
            self._advance(PipelineStage.DISCOVERING, diagnostics, "Scanning workspace...", 10)
            self.logger.info(f"Starting codebase analysis: {root}")
            self._check_root(root)
            matcher = PathMatcher(self._ignore_patterns(), diagnostics)
            discoverer = FileDiscoverer(diagnostics, self.cancel_token)
            paths = discoverer.discover(root, matcher, self.config.allowed_extensions)
            self._notify(diagnostics, f"Found {len(paths)} files...", 30)
            self.logger.info(f"✓ Found {len(paths)} files to analyze")

            self._advance(PipelineStage.READING, diagnostics, "Reading file contents...", 50)
            reader = FileReader(root, self.config.max_file_size, self.config.show_line_numbers, diagnostics)
            records = tuple(reader.read_all(paths, self.cancel_token))
            self.logger.info(f"✓ Processed {len(records)} files")

            self._advance(PipelineStage.BUILDING_TREE, diagnostics, "Building directory tree...", 70)
            tree = self.tree_builder.build(record.path for record in records)

            self._advance(PipelineStage.SUMMARIZING, diagnostics, "Creating summary...", 80)
            summary = self.summary_builder.summarize(records)

            self._advance(PipelineStage.SERIALIZING, diagnostics, "Building output...", 90)
            output = IngestionResult(summary=summary, directory_structure=tree, files=records)
            content = self.serializer.serialize(summary, tree, records)

            if self.cancel_token is not None:
                self.cancel_token.raise_if_cancelled()
            output_path = self._save(content, diagnostics)

            self._advance(PipelineStage.DONE, diagnostics, "Complete!", 100)
            self.logger.notice(
                f"Analysis complete in {time.time() - start_time:.1f}s: "
                f"{output.total_files} files, {output.total_lines} lines, "
                f"{output.total_characters} characters"
            )
            return PipelineResult(
                success=True,
                content=content,
                output=output,
                diagnostics=diagnostics.snapshot(),
                output_path=output_path,
            )

        except Exception as error:
            self._set_stage(PipelineStage.FAILED)
            self.logger.error(f"Codebase analysis failed: {error}", exc_info=not isinstance(error, DiscoveryError))
            return PipelineResult.failure(str(error) or type(error).__name__, diagnostics.snapshot())

    def _ignore_patterns(self) -> List[str]:
        """Configured patterns plus the artifact itself, so reruns do not ingest it."""
        patterns = list(self.config.ignore_patterns)
        if self.config.output_file_name:
            patterns.append(self.config.output_file_name)
        return patterns

    @staticmethod
    def _check_root(root: Path) -> None:
        if not root.exists():
            raise DiscoveryError(f"Root directory does not exist: {root}")
        if not root.is_dir():
            raise DiscoveryError(f"Root path is not a directory: {root}")
        if not os.access(root, os.R_OK | os.X_OK):
            raise DiscoveryError(f"Root directory is not readable: {root}")

    def _save(self, content: str, diagnostics: DiagnosticsCollector) -> Optional[Path]:
        """Persist the artifact at the scan root; a failed write is only a warning."""
        if not self.config.output_file_name:
            return None
        try:
            output_path = FileProcessor.write_artifact(content, self.config.root, self.config.output_file_name)
        except (OSError, UnicodeEncodeError) as error:
            diagnostics.warn(
                DiagnosticKind.OUTPUT_NOT_SAVED,
                self.config.output_file_name,
                f"Could not save output: {error}",
            )
            return None
        self.logger.info(f"Saved output to: {output_path} ({format_size(len(content.encode('utf-8')))})")
        return output_path

    def _set_stage(self, stage: PipelineStage) -> None:
        self.stage = stage
        self.stage_history.append(stage)
        self.logger.debug(f"Pipeline stage: {stage.value}")

    def _advance(self, stage: PipelineStage, diagnostics: DiagnosticsCollector, message: str, percent: int) -> None:
        self._set_stage(stage)
        self._notify(diagnostics, message, percent)

    def _notify(self, diagnostics: DiagnosticsCollector, message: str, percent: Optional[int]) -> None:
        if self.progress_callback is None:
            return
        try:
            self.progress_callback(message, percent)
        except Exception as error:
            diagnostics.warn(
                DiagnosticKind.PROGRESS_CALLBACK_FAILED,
                self.stage.value,
                f"Progress callback raised {type(error).__name__}: {error}",
            )


def generate_digest(
    root,
    overrides: Optional[Mapping[str, Any]] = None,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> PipelineResult:
    """
    Build the config from defaults plus ``overrides`` and run the pipeline.

    Invalid overrides come back as a failed result rather than an exception.
    """
    try:
        config = build_config(root, overrides)
    except ValueError as error:
        get_logger().error(f"Invalid configuration: {error}")
        return PipelineResult.failure(str(error))
    return IngestionPipeline(config, progress_callback, cancel_token).run()
