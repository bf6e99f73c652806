"""
Export pipeline.

Runs one export from a repository snapshot file to a Turtle file:

    1. Parse the snapshot (SnapshotParser)
    2. Open the output, truncating any previous content (TurtleExporter)
    3. Declare the upper vocabulary
    4. Traverse the schemas
    5. Declare the instance prefixes
    6. Traverse the instances

Usage Example:
    ```python
    from core.config import ExportConfig
    from core.services.pipeline import ExportPipeline

    pipeline = ExportPipeline(ExportConfig(show_progress=False))
    result = pipeline.execute("repository.json", "repository.ttl")
    print(result.stats.get_summary())
    ```

Failure Behavior:
    A fatal mapping error or a cancellation stops the run. Everything
    written before that point stays in the output file and is valid Turtle
    up to its last line; the file is not removed.

Thread Safety:
    A pipeline run uses one output file from a single thread. Use separate
    pipeline instances for concurrent exports to different files.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol, Union, runtime_checkable
import logging
import time

from core.config import ExportConfig
from formats.repository import RepositorySnapshot, RepositoryTraversal, SnapshotParser
from formats.turtle import TurtleExporter, TurtleExportError
from shared.models import ExportResult, SchemaRegistry

from .cancellation import (
    CancellationToken,
    PipelineCancelledException,
    SimpleCancellationToken,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Pipeline State
# =============================================================================

class PipelineState(str, Enum):
    """State of an export pipeline."""
    IDLE = "idle"
    PARSING = "parsing"
    EXPORTING_SCHEMAS = "exporting_schemas"
    EXPORTING_INSTANCES = "exporting_instances"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class PipelineStats:
    """
    Statistics collected during pipeline execution.

    Attributes:
        schemas: Number of schemas mapped
        classes: Number of classes and enumerations mapped
        classes_excluded: Number of navigation relationships left out
        instances: Number of instances mapped
        triples_written: Statement lines written
        prefixes_written: Prefix lines written
        skipped_items: Values and instances skipped as unwritable
        errors: Number of snapshot parse errors
        warnings: Warning messages collected
        duration_seconds: Total execution time
        state: Current pipeline state
    """
    schemas: int = 0
    classes: int = 0
    classes_excluded: int = 0
    instances: int = 0
    triples_written: int = 0
    prefixes_written: int = 0
    skipped_items: int = 0
    errors: int = 0
    warnings: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    state: PipelineState = PipelineState.IDLE

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)
        logger.warning(message)

    def update_from(self, result: ExportResult) -> None:
        self.schemas = result.schemas_mapped
        self.classes = result.classes_mapped
        self.classes_excluded = result.classes_excluded
        self.instances = result.total_instances
        self.triples_written = result.triples_written
        self.prefixes_written = result.prefixes_written
        self.skipped_items = len(result.skipped_items)

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Pipeline Statistics:",
            f"  State: {self.state.value}",
            f"  Schemas: {self.schemas}",
            f"  Classes: {self.classes} ({self.classes_excluded} navigation relationships excluded)",
            f"  Instances: {self.instances:,}",
            f"  Triples written: {self.triples_written:,}",
            f"  Skipped items: {self.skipped_items}",
            f"  Parse errors: {self.errors}",
            f"  Warnings: {len(self.warnings)}",
        ]
        if self.duration_seconds > 0:
            rate = self.triples_written / self.duration_seconds if self.triples_written else 0
            lines.append(f"  Duration: {self.duration_seconds:.2f}s ({rate:.0f} triples/sec)")
        return "\n".join(lines)


@dataclass
class PipelineResult:
    """
    Result from pipeline execution.

    Attributes:
        export_result: Counts and skipped items of the export (None if it never started)
        stats: Execution statistics
        success: Whether execution completed successfully
        error: Error message if failed
        exception: The exception that stopped the run, if any
        output_path: Path to the Turtle file
    """
    export_result: Optional[ExportResult] = None
    stats: PipelineStats = field(default_factory=PipelineStats)
    success: bool = True
    error: Optional[str] = None
    exception: Optional[BaseException] = None
    output_path: Optional[Path] = None


# =============================================================================
# Progress Callback Protocol
# =============================================================================

@runtime_checkable
class ProgressCallback(Protocol):
    """Protocol for progress callbacks."""

    def __call__(self, stats: PipelineStats) -> None:
        """Called with current statistics after each stage."""
        ...


# =============================================================================
# Export Pipeline
# =============================================================================

class ExportPipeline:
    """
    Snapshot to Turtle export orchestrator.

    Example:
        pipeline = ExportPipeline(config)
        token = SimpleCancellationToken()
        result = pipeline.execute("in.json", "out.ttl", cancellation_token=token)
    """

    def __init__(self, config: Optional[ExportConfig] = None):
        """
        Initialize the pipeline.

        Args:
            config: Export configuration (uses defaults if None)
        """
        self.config = config or ExportConfig()
        self._stats = PipelineStats()

    def execute(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path],
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> PipelineResult:
        """
        Parse a snapshot file and export it.

        Args:
            input_path: Path to the snapshot JSON file
            output_path: Path of the Turtle file to write
            progress_callback: Optional progress callback
            cancellation_token: Optional cancellation token

        Returns:
            PipelineResult with export counts and statistics
        """
        start_time = time.time()
        self._stats = PipelineStats(state=PipelineState.PARSING)
        result = PipelineResult(stats=self._stats, output_path=Path(output_path))

        try:
            logger.info(f"Starting export of: {input_path}")
            parse_result = SnapshotParser(strict_mode=self.config.strict).parse_file(input_path)
            self._stats.errors = len(parse_result.errors)
            for warning in parse_result.warnings:
                self._stats.add_warning(warning)
            for error in parse_result.errors:
                self._stats.add_warning(str(error))

            if parse_result.snapshot is None:
                result.success = False
                result.error = parse_result.errors[0].message if parse_result.errors else "No snapshot parsed"
                self._stats.state = PipelineState.FAILED
                return result
            if progress_callback:
                progress_callback(self._stats)

            self._run(parse_result.snapshot, result, progress_callback, cancellation_token)
        finally:
            self._stats.duration_seconds = time.time() - start_time
            logger.info(self._stats.get_summary())

        return result

    def export_snapshot(
        self,
        snapshot: RepositorySnapshot,
        output_path: Union[str, Path],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> PipelineResult:
        """
        Export an already parsed snapshot.

        Returns:
            PipelineResult with export counts and statistics
        """
        start_time = time.time()
        self._stats = PipelineStats()
        result = PipelineResult(stats=self._stats, output_path=Path(output_path))
        try:
            self._run(snapshot, result, None, cancellation_token)
        finally:
            self._stats.duration_seconds = time.time() - start_time
        return result

    def _run(
        self,
        snapshot: RepositorySnapshot,
        result: PipelineResult,
        progress_callback: Optional[ProgressCallback],
        cancellation_token: Optional[CancellationToken],
    ) -> None:
        config = self.config
        # Every schema is resolvable before the first one is mapped
        registry = SchemaRegistry(snapshot.schemas)
        exporter: Optional[TurtleExporter] = None

        try:
            exporter = TurtleExporter.open(
                result.output_path,
                registry=registry,
                base_iri=config.base_iri,
                ec_iri=config.ec_iri,
                element_class=config.element_class,
                code_spec_class=config.code_spec_class,
                strict=config.strict,
            )
            result.export_result = exporter.result

            traversal = RepositoryTraversal(
                snapshot,
                show_progress=config.show_progress,
                cancellation_token=cancellation_token,
            )
            traversal.register_handler(exporter)

            exporter.declare_vocabulary()

            self._stats.state = PipelineState.EXPORTING_SCHEMAS
            traversal.export_schemas()
            self._report(exporter, progress_callback)

            self._stats.state = PipelineState.EXPORTING_INSTANCES
            exporter.write_instance_prefixes(traversal.repository_id)
            traversal.export_instances()
            self._report(exporter, progress_callback)

            self._stats.state = PipelineState.COMPLETED
            result.success = True

        except PipelineCancelledException as e:
            self._stats.state = PipelineState.CANCELLED
            result.success = False
            result.error = "Pipeline cancelled"
            result.exception = e
            logger.info("Export cancelled by user; output is complete up to its last line")

        except TurtleExportError as e:
            self._stats.state = PipelineState.FAILED
            result.success = False
            result.error = str(e)
            result.exception = e
            logger.error(f"Export failed: {e}")

        finally:
            if exporter is not None:
                exporter.close()
                self._stats.update_from(exporter.result)
                for warning in exporter.result.warnings:
                    self._stats.add_warning(warning)

    def _report(self, exporter: TurtleExporter, progress_callback: Optional[ProgressCallback]) -> None:
        self._stats.update_from(exporter.result)
        if progress_callback:
            progress_callback(self._stats)


# =============================================================================
# Export
# =============================================================================

__all__ = [
    # State & Results
    "PipelineState",
    "PipelineStats",
    "PipelineResult",
    # Cancellation
    "CancellationToken",
    "SimpleCancellationToken",
    "PipelineCancelledException",
    # Callbacks
    "ProgressCallback",
    # Pipeline
    "ExportPipeline",
]
