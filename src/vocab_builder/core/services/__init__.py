"""
Services layer: batch orchestration.
"""

from .orchestrator import Orchestrator

__all__ = ['Orchestrator']
