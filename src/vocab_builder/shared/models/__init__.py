"""
Shared data models for vocab-builder.

Exports:
    VocabularySpec: One configured vocabulary
    CacheEntry: Cached copy of a remote vocabulary
    FetchOutcome, FetchStatus: Tagged retrieval result
    GeneratedArtifact: Target path of a generated module
    SpecOutcome, SpecState, BuildResult: Batch results
"""

from .vocabulary import VocabularySpec
from .results import (
    BuildResult,
    CacheEntry,
    FetchOutcome,
    FetchStatus,
    GeneratedArtifact,
    SpecOutcome,
    SpecState,
    capitalize,
)

__all__ = [
    'BuildResult',
    'CacheEntry',
    'FetchOutcome',
    'FetchStatus',
    'GeneratedArtifact',
    'SpecOutcome',
    'SpecState',
    'VocabularySpec',
    'capitalize',
]
