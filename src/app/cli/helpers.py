"""
Shared pieces of the ecschema-turtle commands.

The configuration file is JSON with an "export" section (namespaces,
classes, progress, strict mode) and a "logging" section:

    {"level": "INFO", "file": "logs/app.log", "format": "text",
     "rotation": {"enabled": true, "max_mb": 10, "backup_count": 5}}

Without a "file" the exporter logs to the console only.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

from constants import LoggingConfig

# Handlers installed by setup_logging; replaced on every call
_handlers: List[logging.Handler] = []


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
                                 .strftime(LoggingConfig.JSON_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _build_formatter(format_style: str) -> logging.Formatter:
    if format_style == "json":
        return JSONFormatter()
    return logging.Formatter(fmt=LoggingConfig.LOG_FORMAT, datefmt=LoggingConfig.DATE_FORMAT)


def _build_file_handler(path: Path, rotation: Dict[str, Any]) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rotation.get("enabled", LoggingConfig.ROTATION_ENABLED):
        return logging.FileHandler(path, encoding="utf-8")
    max_mb = _positive_int(rotation.get("max_mb"), LoggingConfig.MAX_LOG_FILE_MB)
    return RotatingFileHandler(
        path,
        maxBytes=max_mb * 1024 * 1024,
        backupCount=_positive_int(rotation.get("backup_count"), LoggingConfig.LOG_BACKUP_COUNT),
        encoding="utf-8",
    )


def setup_logging(*, config: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """
    Configure the root logger from the "logging" section of the configuration.

    A console handler is always installed. A log file is added when the
    section names one; if it cannot be opened the run continues with the
    console alone.

    Returns:
        The log file path, or None when logging to the console only.
    """
    settings = config or {}
    level_name = str(settings.get("level", LoggingConfig.DEFAULT_LOG_LEVEL)).upper()
    format_style = str(settings.get("format", LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if format_style not in LoggingConfig.SUPPORTED_FORMATS:
        format_style = LoggingConfig.DEFAULT_FORMAT_STYLE
    formatter = _build_formatter(format_style)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = settings.get("file") or settings.get("log_file")
    if log_file:
        rotation = settings.get("rotation")
        try:
            handlers.append(_build_file_handler(Path(log_file), rotation if isinstance(rotation, dict) else {}))
        except OSError as e:
            print(f"Warning: Could not open log file {log_file}: {e}")
            log_file = None

    root_logger = logging.getLogger()
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _handlers.append(handler)
    logging.captureWarnings(True)

    if log_file:
        logging.getLogger(__name__).info(f"Logging to: {log_file}")
    return str(log_file) if log_file else None


def get_default_config_path() -> str:
    """config.json in the project root, next to config.sample.json."""
    return str(Path(__file__).resolve().parents[3] / "config.json")


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load the JSON configuration file.

    Raises:
        ValueError: If the path is empty, is a symlink, or the file is not a JSON object.
        FileNotFoundError: If the file does not exist.
        PermissionError: If the file cannot be read.
    """
    from core.validators import InputValidator

    if not config_path:
        raise ValueError("config_path cannot be empty")
    try:
        validated_path = InputValidator.validate_config_file_path(config_path)
    except FileNotFoundError:
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Copy config.sample.json to config.json or pass --config"
        )

    try:
        with open(validated_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {validated_path} at line {e.lineno}, column {e.colno}: {e.msg}")
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {validated_path}: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config).__name__}")
    return config


def load_optional_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the configuration file, or return an empty configuration.

    An explicitly given path must exist. The default path is optional.
    """
    if config_path:
        return load_config(config_path)
    default_path = get_default_config_path()
    if Path(default_path).exists():
        return load_config(default_path)
    return {}


def default_output_path(input_path: str, suffix: str = ".ttl") -> str:
    """repository.json -> repository.ttl"""
    return str(Path(input_path).with_suffix(suffix))


def print_header(title: str, width: int = 60) -> None:
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    print("=" * width + "\n")
