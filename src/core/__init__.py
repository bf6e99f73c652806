"""
Core utilities and cross-cutting concerns for the ECSchema Turtle Exporter.

This module provides shared infrastructure components used by the CLI and
the export pipeline, including:

- Export configuration (ExportConfig)
- Input validation (InputValidator)
- Cancellation handling (core.services)
- The export pipeline (core.services.pipeline)

Usage:
    from core import ExportConfig, InputValidator
    from core.services import SimpleCancellationToken, setup_cancellation_handler
    from core.services.pipeline import ExportPipeline
"""

# Input validation
from .validators import InputValidator

# Export configuration
from .config import ExportConfig


__all__ = [
    # Input validation
    "InputValidator",
    # Configuration
    "ExportConfig",
]
