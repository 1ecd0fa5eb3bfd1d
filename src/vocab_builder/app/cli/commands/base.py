"""
Base command class.

This module contains the base command class that all CLI commands inherit
from, together with the shared summary printer.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import requests

from ..helpers import print_footer, print_header, setup_logging
from ....formats.rdf import CompilerProtocol, VocabCompiler
from ....shared.models import BuildResult


logger = logging.getLogger(__name__)


# ============================================================================
# Helper Utilities
# ============================================================================

def print_build_summary(result: BuildResult, heading: Optional[str] = None) -> None:
    """Print a consistent summary for a batch build."""
    if heading:
        print_header(heading)
    print(result.get_summary())
    if heading:
        print_footer()


# ============================================================================
# Base Command Class
# ============================================================================

class BaseCommand(ABC):
    """
    Base class for CLI commands.
    
    Provides common functionality like logging setup and lazily created
    collaborators. Subclasses should implement the execute() method.
    """
    
    def __init__(
        self,
        compiler: Optional[CompilerProtocol] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        """
        Initialize the command.
        
        Args:
            compiler: Optional compiler instance (for dependency injection).
            session_factory: Callable returning a new HTTP session (for testing).
        """
        self._compiler = compiler
        self.session_factory = session_factory or requests.Session
    
    def get_compiler(self) -> CompilerProtocol:
        """Get or create the compiler instance."""
        if self._compiler is None:
            self._compiler = VocabCompiler()
        return self._compiler
    
    def setup_logging_from_args(
        self,
        args: argparse.Namespace,
        log_config: Optional[Dict[str, Any]] = None,
    ) -> Optional[str]:
        """Setup logging; command-line flags win over the config's ``logging`` section."""
        return setup_logging(
            level=getattr(args, 'log_level', None),
            log_file=getattr(args, 'log_file', None),
            config=log_config,
        )
    
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
