"""
Shared runtime services (export pipeline, cancellation).

This package provides core services for:
- Export pipeline execution (core.services.pipeline)
- Cancellation handling

The pipeline module depends on the format packages, which themselves use
the cancellation types, so it is imported explicitly:

    from core.services.pipeline import ExportPipeline
"""

from .cancellation import (
    CancellationToken,
    SimpleCancellationToken,
    PipelineCancelledException,
    setup_cancellation_handler,
    restore_default_handler,
)

__all__ = [
    # Cancellation
    "CancellationToken",
    "SimpleCancellationToken",
    "PipelineCancelledException",
    "setup_cancellation_handler",
    "restore_default_handler",
]
