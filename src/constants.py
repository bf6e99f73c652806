"""
Centralized configuration constants for the ECSchema Turtle Exporter.

This module provides a single source of truth for all configuration constants,
default values, and limits used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    MAPPING_ERROR = 4
    FILE_NOT_FOUND = 5
    PERMISSION_DENIED = 6
    CANCELLED = 7


# ============================================================================
# Processing Limits
# ============================================================================

class ProcessingLimits:
    """Processing and traversal limits."""

    MAX_INHERITANCE_DEPTH: Final[int] = 64
    """Maximum base-class chain length before the chain is treated as cyclic."""

    PROGRESS_MIN_ITEMS: Final[int] = 10
    """Progress bars are disabled for runs with fewer items than this."""


# ============================================================================
# Namespace Defaults
# ============================================================================

class NamespaceConfig:
    """IRI defaults for the generated namespaces."""

    EC_IRI: Final[str] = "http://www.example.org/ec#"
    """IRI of the upper (ec) vocabulary."""

    BASE_IRI: Final[str] = "http://www.example.org/"
    """Base IRI for schema and instance namespaces."""

    SCHEMA_PATH: Final[str] = "schemas/{schema_key}#"
    """Schema namespace path, relative to the base IRI."""

    REPOSITORY_PATH: Final[str] = "repository/{repository_id}/"
    """Instance namespace root path, relative to the base IRI."""

    ELEMENT_CLASS: Final[str] = "BisCore:Element"
    """Class that declares the Code properties of every element."""

    CODE_SPEC_CLASS: Final[str] = "BisCore:CodeSpec"
    """Class used as the rdf:type of code spec instances."""


# ============================================================================
# File Extensions
# ============================================================================

class FileExtensions:
    """Supported file extensions."""

    SNAPSHOT_EXTENSIONS: Final[tuple] = ('.json',)
    """Valid repository snapshot extensions."""

    TTL_EXTENSIONS: Final[tuple] = ('.ttl', '.turtle', '.n3')
    """Valid Turtle output extensions."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""
