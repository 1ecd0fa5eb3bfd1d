"""
Command-line interface for vocab-builder.

- parsers: argument parser factory
- helpers: logging setup, console output, exit codes
- commands: command implementations
"""

from .parsers import create_argument_parser, normalize_indent_args
from .helpers import exit_code_for, setup_logging

__all__ = [
    'create_argument_parser',
    'exit_code_for',
    'normalize_indent_args',
    'setup_logging',
]
