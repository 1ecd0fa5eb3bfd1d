"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Logging setup
- Console output formatting
- Error-kind to exit code mapping
"""

import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from ...constants import ExitCode, LoggingConfig
from ...core.errors import ErrorKind, VocabularyBuildError

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JSONFormatter(logging.Formatter):
    """A lightweight JSON formatter for structured logging."""

    _RESERVED_FIELDS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "process",
        "processName",
    }

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - custom JSON body
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            LoggingConfig.JSON_DATE_FORMAT
        )
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Include any extra fields supplied via LoggerAdapter/extra
        for key, value in record.__dict__.items():
            if key in self._RESERVED_FIELDS or key.startswith("_"):
                continue
            if key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    global _MANAGED_HANDLERS
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS = []


def _coerce_positive_int(value: Any, default: int) -> int:
    """Convert config-provided values to positive integers."""
    try:
        numeric = int(value)
        return numeric if numeric > 0 else default
    except (TypeError, ValueError):
        return default


def _create_file_handler(
    path: str,
    rotation_enabled: bool,
    max_bytes: int,
    backup_count: int
) -> Handler:
    """Create a file or rotating file handler."""
    if rotation_enabled and max_bytes > 0:
        return RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=max(backup_count, 1),
            encoding='utf-8'
        )
    return logging.FileHandler(path, encoding='utf-8')


def setup_logging(
    level: Optional[LogLevel] = None,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Setup logging configuration with fallback locations.
    
    Console output goes to stderr so generated code written to stdout stays
    clean. If the log file location fails (permission denied, disk full,
    etc.), attempts to write to fallback locations in order:
    1. Requested location
    2. System temp directory
    3. User home directory
    4. Console-only (final fallback)
    
    Args:
        level: Log level; overrides the config's ``level``.
        log_file: Log file path; overrides the config's ``file``.
        config: Optional logging configuration dictionary with keys
            level, file, format (text|json) and rotation
            ({enabled, max_mb, backup_count}).
        
    Returns:
        The actual log file path used, or None if logging to console only.
    """
    config_dict = dict(config or {})

    resolved_level = str(level or config_dict.get('level') or LoggingConfig.DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, resolved_level.upper(), logging.INFO)

    file_path = log_file if log_file is not None else config_dict.get('file')

    format_style = str(config_dict.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if format_style not in LoggingConfig.SUPPORTED_FORMATS:
        format_style = LoggingConfig.DEFAULT_FORMAT_STYLE

    formatter: logging.Formatter
    if format_style == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=LoggingConfig.LOG_FORMAT, datefmt=LoggingConfig.DATE_FORMAT)

    rotation_cfg = config_dict.get('rotation') if isinstance(config_dict.get('rotation'), dict) else {}
    rotation_enabled = rotation_cfg.get('enabled')
    if rotation_enabled is None:
        rotation_enabled = LoggingConfig.ROTATION_ENABLED
    max_mb = _coerce_positive_int(rotation_cfg.get('max_mb'), LoggingConfig.MAX_LOG_FILE_MB)
    backup_count = _coerce_positive_int(rotation_cfg.get('backup_count'), LoggingConfig.LOG_BACKUP_COUNT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers: List[Handler] = [console_handler]
    actual_log_file = None

    if file_path:
        log_filename = os.path.basename(file_path) or LoggingConfig.DEFAULT_LOG_FILENAME
        fallback_locations = [
            file_path,
            os.path.join(tempfile.gettempdir(), log_filename),
            os.path.join(Path.home(), log_filename),
        ]
        for fallback_path in fallback_locations:
            try:
                log_dir = os.path.dirname(fallback_path)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)
                file_handler = _create_file_handler(
                    fallback_path,
                    rotation_enabled=bool(rotation_enabled),
                    max_bytes=max_mb * 1024 * 1024,
                    backup_count=backup_count,
                )
            except OSError as exc:
                print(f"  Could not create log at {fallback_path}: {exc}", file=sys.stderr)
                continue
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
            actual_log_file = fallback_path
            if fallback_path != file_path:
                print(f"Note: Using fallback log file: {fallback_path}", file=sys.stderr)
            break
        else:
            print("Warning: Could not write log file to any location", file=sys.stderr)
            print(f"  Requested: {file_path}", file=sys.stderr)
            print("  Logging to console only", file=sys.stderr)

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    logging.captureWarnings(True)
    root_logger.setLevel(log_level)

    for handler in handlers:
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    if actual_log_file:
        logging.getLogger(__name__).info(f"Logging to: {actual_log_file}")

    return actual_log_file


# ============================================================================
# Output helpers
# ============================================================================

def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with the given title."""
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    """Print a footer line."""
    print("=" * width + "\n")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    print(f"✗ {message}", file=sys.stderr)


# ============================================================================
# Exit codes
# ============================================================================

_EXIT_CODES: Dict[ErrorKind, ExitCode] = {
    ErrorKind.CONFIGURATION: ExitCode.CONFIG_ERROR,
    ErrorKind.NETWORK: ExitCode.NETWORK_ERROR,
    ErrorKind.PARSE: ExitCode.PARSE_ERROR,
    ErrorKind.UNRECOGNIZED_FORMAT: ExitCode.PARSE_ERROR,
    ErrorKind.GENERATION: ExitCode.GENERATION_ERROR,
}


def exit_code_for(error: Optional[VocabularyBuildError]) -> ExitCode:
    """Map a build error (or its absence) to a CLI exit code."""
    if error is None:
        return ExitCode.SUCCESS
    return _EXIT_CODES.get(error.kind, ExitCode.ERROR)
