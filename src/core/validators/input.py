"""
Input validation utilities for the ECSchema Turtle Exporter.

This module provides centralized validation with consistent error messages for:
- Snapshot, Turtle and configuration file paths
- Output file paths
- Namespace IRIs used in the generated prefixes

Security features:
- Path traversal detection (.. components)
- Symlink detection (reject or warn)
- Extension validation

Usage:
    from core.validators import InputValidator

    snapshot_path = InputValidator.validate_input_snapshot_path("repository.json")
    output_path = InputValidator.validate_output_file_path("out.ttl", allowed_extensions=[".ttl"])
    base_iri = InputValidator.validate_namespace_iri("http://www.example.org/")
"""

import os
import logging
from pathlib import Path
from typing import Any, List, Optional
from urllib.parse import urlparse

from constants import FileExtensions

logger = logging.getLogger(__name__)


class InputValidator:
    """
    Centralized validation for CLI and pipeline inputs.

    All validators raise TypeError for values of the wrong type and
    ValueError for malformed values; file validators additionally raise
    FileNotFoundError and PermissionError.
    """

    SNAPSHOT_EXTENSIONS = list(FileExtensions.SNAPSHOT_EXTENSIONS)
    TTL_EXTENSIONS = list(FileExtensions.TTL_EXTENSIONS)
    JSON_EXTENSIONS = ['.json']

    @staticmethod
    def _require_path_string(path: Any) -> str:
        if isinstance(path, Path):
            path = str(path)
        if not isinstance(path, str):
            raise TypeError(f"File path must be string, got {type(path).__name__}")
        if not path.strip():
            raise ValueError("File path cannot be empty")
        return path.strip()

    @staticmethod
    def _check_path_traversal(path_str: str) -> None:
        """
        Reject paths with '..' components.

        Raises:
            ValueError: If path traversal detected
        """
        normalized = path_str.replace('\\', '/')
        if any(part == '..' for part in normalized.split('/')):
            raise ValueError(
                f"Path traversal detected in path: {path_str}. "
                f"Paths containing '..' are not allowed."
            )

    @staticmethod
    def _check_symlink(path_obj: Path, strict: bool = True) -> None:
        """
        Check if path is a symlink.

        Raises:
            ValueError: If symlink detected and strict is True
        """
        try:
            is_symlink = path_obj.is_symlink()
        except OSError:
            if strict:
                raise ValueError(f"Cannot verify symlink status for: {path_obj}")
            return
        if is_symlink:
            msg = f"Symlink detected: {path_obj}. Please use the actual file path instead."
            if strict:
                raise ValueError(msg)
            logger.warning(msg)

    @staticmethod
    def _check_extension(path_obj: Path, allowed_extensions: Optional[List[str]]) -> None:
        if not allowed_extensions:
            return
        normalized_extensions = [
            ext.lower() if ext.startswith('.') else f'.{ext.lower()}'
            for ext in allowed_extensions
        ]
        if path_obj.suffix.lower() not in normalized_extensions:
            raise ValueError(
                f"Invalid file extension: '{path_obj.suffix}'. "
                f"Expected one of: {', '.join(normalized_extensions)}"
            )

    @classmethod
    def validate_file_path(
        cls,
        path: Any,
        allowed_extensions: Optional[List[str]] = None,
        check_exists: bool = True,
        reject_symlinks: bool = True,
    ) -> Path:
        """
        Validate an input file path.

        Args:
            path: Path to validate
            allowed_extensions: List of allowed extensions (e.g., ['.json'])
            check_exists: Whether to verify file exists and is readable
            reject_symlinks: If True, raise on symlinks; if False, warn only

        Returns:
            Validated Path object (resolved to absolute path)

        Raises:
            TypeError: If path is not a string
            ValueError: If path is empty, has invalid extension, traversal detected, or symlink found
            FileNotFoundError: If file doesn't exist (when check_exists=True)
            PermissionError: If file is not readable (when check_exists=True)
        """
        path = cls._require_path_string(path)
        cls._check_path_traversal(path)

        unresolved = Path(path)
        cls._check_symlink(unresolved, strict=reject_symlinks)
        path_obj = unresolved.resolve()

        if check_exists:
            if not path_obj.exists():
                raise FileNotFoundError(f"File not found: {path_obj}")
            if not path_obj.is_file():
                raise ValueError(f"Path is not a file: {path_obj}")

        cls._check_extension(path_obj, allowed_extensions)

        if check_exists and not os.access(path_obj, os.R_OK):
            raise PermissionError(f"File is not readable: {path_obj}")

        return path_obj

    @classmethod
    def validate_input_snapshot_path(cls, path: Any, reject_symlinks: bool = True) -> Path:
        """Validate a repository snapshot path (must exist, JSON extension)."""
        return cls.validate_file_path(
            path,
            allowed_extensions=cls.SNAPSHOT_EXTENSIONS,
            check_exists=True,
            reject_symlinks=reject_symlinks,
        )

    @classmethod
    def validate_input_ttl_path(cls, path: Any, reject_symlinks: bool = True) -> Path:
        """Validate an existing Turtle file path."""
        return cls.validate_file_path(
            path,
            allowed_extensions=cls.TTL_EXTENSIONS,
            check_exists=True,
            reject_symlinks=reject_symlinks,
        )

    @classmethod
    def validate_output_file_path(
        cls,
        path: Any,
        allowed_extensions: Optional[List[str]] = None,
        reject_symlinks: bool = True,
    ) -> Path:
        """
        Validate output file path for writing.

        The file does not need to exist. Missing parent directories are
        created by the writer, but an existing parent must be writable.

        Returns:
            Validated Path object

        Raises:
            TypeError: If path is not a string
            ValueError: If path is empty, has invalid extension, or traversal detected
            PermissionError: If the file or its directory is not writable
        """
        path = cls._require_path_string(path)
        cls._check_path_traversal(path)

        unresolved = Path(path)
        if unresolved.exists():
            cls._check_symlink(unresolved, strict=reject_symlinks)
        path_obj = unresolved.resolve()

        if path_obj.is_dir():
            raise ValueError(f"Output path is a directory: {path_obj}")
        cls._check_extension(path_obj, allowed_extensions)

        parent_dir = path_obj.parent
        if parent_dir.exists() and not os.access(parent_dir, os.W_OK):
            raise PermissionError(f"Cannot write to directory: {parent_dir}")
        if path_obj.exists() and not os.access(path_obj, os.W_OK):
            raise PermissionError(f"File exists but is not writable: {path_obj}")

        return path_obj

    @classmethod
    def validate_config_file_path(cls, path: Any) -> Path:
        """
        Validate configuration file path.

        Configuration files must be existing, readable JSON files; symlinks
        are rejected.
        """
        return cls.validate_file_path(
            path,
            allowed_extensions=cls.JSON_EXTENSIONS,
            check_exists=True,
            reject_symlinks=True,
        )

    @staticmethod
    def validate_namespace_iri(iri: Any) -> str:
        """
        Validate an IRI used as a namespace root.

        The IRI must be absolute (http or https) and end with '/' or '#' so
        that appending local names yields well-formed IRIs.

        Raises:
            TypeError: If iri is not a string
            ValueError: If iri is not an absolute http(s) IRI ending in '/' or '#'
        """
        if not isinstance(iri, str):
            raise TypeError(f"Namespace IRI must be string, got {type(iri).__name__}")
        iri = iri.strip()
        parsed = urlparse(iri)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"Namespace IRI must be an absolute http(s) IRI: '{iri}'")
        if not iri.endswith(('/', '#')):
            raise ValueError(f"Namespace IRI must end with '/' or '#': '{iri}'")
        if any(c in iri for c in '<>" {}|\\^`'):
            raise ValueError(f"Namespace IRI contains characters not allowed in IRIs: '{iri}'")
        return iri
