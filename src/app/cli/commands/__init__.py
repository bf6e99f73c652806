"""
CLI command implementations.

This package contains split command modules for better organization:
- base.py: Base command class and protocols
- unified/: Commands that read or check exports
    - export.py: ExportCommand
    - validate.py: ValidateCommand
- common.py: Common commands (vocabulary, compare)
"""

from .base import (
    BaseCommand,
    IExportPipeline,
    exit_code_for_error,
    print_export_summary,
)

from .common import (
    VocabularyCommand,
    CompareCommand,
)

from .unified import (
    ExportCommand,
    ValidateCommand,
)


__all__ = [
    # Base
    'BaseCommand',
    'IExportPipeline',
    'exit_code_for_error',
    'print_export_summary',
    # Common
    'VocabularyCommand',
    'CompareCommand',
    # Unified
    'ExportCommand',
    'ValidateCommand',
]
