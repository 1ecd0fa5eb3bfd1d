"""
Core components of vocab-builder.

- errors: VocabularyBuildError and ErrorKind
- cache_store: CacheStore, the staging area for remote vocabularies
- fetcher: Fetcher, conditional HTTP retrieval
- change_tracker: local-file delta checks
- services.orchestrator: Orchestrator, batch execution

Usage:
    from vocab_builder.core import Fetcher, VocabularyBuildError
    from vocab_builder.core.services import Orchestrator
"""

from .errors import ErrorKind, VocabularyBuildError
from .cache_store import CacheStore
from .fetcher import Fetcher, build_user_agent, parse_http_date
from .change_tracker import (
    AlwaysChangedTracker,
    BuildRecorder,
    BuildStateTracker,
    ChangeTracker,
)

__all__ = [
    'ErrorKind',
    'VocabularyBuildError',
    'CacheStore',
    'Fetcher',
    'build_user_agent',
    'parse_http_date',
    'AlwaysChangedTracker',
    'BuildRecorder',
    'BuildStateTracker',
    'ChangeTracker',
]
