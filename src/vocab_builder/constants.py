"""
Centralized configuration constants for vocab-builder.

This module provides a single source of truth for all configuration constants,
default values, and naming rules used throughout the application.
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
    - 2: Usage error (argparse)
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    USAGE_ERROR = 2
    CONFIG_ERROR = 3
    NETWORK_ERROR = 4
    FILE_NOT_FOUND = 5
    PARSE_ERROR = 6
    GENERATION_ERROR = 7


# ============================================================================
# Tool Identity
# ============================================================================

class ToolInfo:
    """Identity reported to remote servers and in generated code."""
    
    NAME: Final[str] = "vocab-builder"
    """Tool name used in the User-Agent and default cache namespace."""
    
    DESCRIPTION: Final[str] = "RDF vocabulary to Python constants generator"
    """Human readable tool description."""


# ============================================================================
# Cache / Build Layout
# ============================================================================

class BuildLayout:
    """Default build directory layout."""
    
    DEFAULT_BUILD_DIR: Final[str] = "build"
    """Long-lived build output directory."""
    
    DEFAULT_OUTPUT_SUBDIR: Final[str] = "generated-sources/vocabularies"
    """Output root for generated modules, relative to the build dir."""
    
    DEFAULT_CACHE_NAMESPACE: Final[str] = f"{ToolInfo.NAME}.cache"
    """Cache directory name inside the build dir."""
    
    UNKNOWN_FORMAT_EXTENSION: Final[str] = "cache"
    """Cache file extension used when the format is not recognized."""
    
    BUILD_STATE_FILE: Final[str] = "build-state.json"
    """Local-file change tracking state, stored inside the cache dir."""
    
    DEFAULT_FILE_EXTENSION: Final[str] = "py"
    """Extension of generated source units."""
    
    PARTIAL_SUFFIX: Final[str] = ".part"
    """Suffix for in-flight downloads before they replace the cache entry."""


# ============================================================================
# HTTP
# ============================================================================

class HTTPConfig:
    """HTTP content negotiation constants."""
    
    NON_PREFERRED_QUALITY: Final[str] = "0.5"
    """Quality weight applied to every media type of non-preferred formats."""
    
    CHUNK_SIZE: Final[int] = 64 * 1024
    """Bytes per chunk when streaming a response body to disk."""
    
    REMOTE_SCHEMES: Final[tuple] = ("http", "https")
    """URL schemes treated as remote vocabulary sources."""


# ============================================================================
# Code Generation
# ============================================================================

class GenerationConfig:
    """Defaults for the vocabulary compiler."""
    
    DEFAULT_INDENT: Final[str] = "\t"
    """Indent unit when no space count is configured."""
    
    DEFAULT_SPACE_INDENT: Final[int] = 4
    """Spaces per indent when the indent flag is given without a number."""
    
    MAX_COMMENT_LENGTH: Final[int] = 100
    """Maximum length of a term's trailing comment."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration constants."""
    
    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""
    
    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log message format."""
    
    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Timestamp format of text log lines."""
    
    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """Timestamp format used by the JSON formatter."""
    
    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Log line style: text or json."""
    
    SUPPORTED_FORMATS: Final[tuple] = ("text", "json")
    """Accepted log line styles."""
    
    DEFAULT_LOG_FILENAME: Final[str] = "vocab_builder.log"
    """Fallback log file name."""
    
    ROTATION_ENABLED: Final[bool] = True
    """Rotate log files by default when logging to a file."""
    
    MAX_LOG_FILE_MB: Final[int] = 10
    """Rotate log files at this size (MB)."""
    
    LOG_BACKUP_COUNT: Final[int] = 3
    """Rotated log files to keep."""
