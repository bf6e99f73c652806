"""
Base command class and protocols.

This module contains the base command class that all CLI commands inherit from,
as well as protocol definitions for dependency injection.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from ..helpers import (
    load_optional_config,
    setup_logging,
    print_header,
    print_footer,
)
from shared.models import ExportResult
from constants import ExitCode


logger = logging.getLogger(__name__)


# ============================================================================
# Helper Utilities
# ============================================================================

def print_export_summary(result: ExportResult, heading: Optional[str] = None) -> None:
    """Print a consistent summary for an export result."""
    if heading:
        print_header(heading)
    print(result.get_summary())
    if heading:
        print_footer()


def exit_code_for_error(error: BaseException) -> ExitCode:
    """Map an exception raised while preparing a command to an exit code."""
    if isinstance(error, FileNotFoundError):
        return ExitCode.FILE_NOT_FOUND
    if isinstance(error, PermissionError):
        return ExitCode.PERMISSION_DENIED
    if isinstance(error, (ValueError, TypeError)):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.ERROR


# ============================================================================
# Protocols for Dependency Injection
# ============================================================================

class IExportPipeline(Protocol):
    """Protocol for the snapshot export pipeline."""

    def execute(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path],
        progress_callback: Any = None,
        cancellation_token: Any = None,
    ) -> Any:
        """Export a snapshot file to a Turtle file."""
        ...


# ============================================================================
# Base Command Class
# ============================================================================

class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides common functionality like configuration loading and logging setup.
    Subclasses should implement the execute() method.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        pipeline: Optional[IExportPipeline] = None,
    ):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file. When omitted the
                default config.json is used if it exists.
            pipeline: Optional export pipeline (for dependency injection).
        """
        self.config_path = config_path
        self._pipeline = pipeline
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Lazy-load configuration."""
        if self._config is None:
            self._config = load_optional_config(self.config_path)
        return self._config

    def resolve_config_path(self, args: argparse.Namespace) -> None:
        """Take the --config argument, if given, over the constructor path."""
        config_arg = getattr(args, 'config', None)
        if config_arg:
            self.config_path = config_arg
            self._config = None

    def setup_logging_from_config(self, allow_missing: bool = True) -> None:
        """Setup logging configuration, falling back gracefully if config is absent."""
        log_config: Dict[str, Any] = {}

        try:
            log_config = self.config.get('logging', {})
        except FileNotFoundError:
            if not allow_missing:
                raise
            self._config = {}
        except (ValueError, PermissionError, IOError) as exc:
            if not allow_missing:
                raise
            print(f"Warning: Could not load logging configuration: {exc}")
            self._config = {}

        setup_logging(config=log_config)

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
        pass


__all__ = [
    'BaseCommand',
    'IExportPipeline',
    'print_export_summary',
    'exit_code_for_error',
]
