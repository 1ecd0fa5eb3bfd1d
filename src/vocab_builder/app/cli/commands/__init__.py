"""
CLI command implementations.

- base.py: Base command class and summary printer
- run.py: RunCommand, one vocabulary from a file or URL
- build.py: BuildCommand, every vocabulary of a configuration file
"""

from .base import BaseCommand, print_build_summary
from .run import RunCommand
from .build import BuildCommand


__all__ = [
    'BaseCommand',
    'BuildCommand',
    'RunCommand',
    'print_build_summary',
]
