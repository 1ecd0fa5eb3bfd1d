"""
Centralized test fixtures for the vocabulary builder test suite.

This package provides reusable fixtures for testing, including:
- RDF sample documents
- Build configuration samples
- Mock HTTP sessions

Usage:
    from fixtures import VOCAB_TTL, make_response, make_session_factory

Or use the pytest fixtures in conftest.py which import from here.
"""

from .ttl_fixtures import (
    VOCAB_NAMESPACE,
    VOCAB_TTL,
    PLAIN_TTL,
    VOCAB_RDFXML,
    VOCAB_JSONLD,
    INVALID_TTL,
    EMPTY_TTL,
)

from .config_fixtures import (
    LOCAL_BUILD_CONFIG,
    REMOTE_BUILD_CONFIG,
)

from .http_fixtures import (
    make_response,
    make_session_factory,
)


__all__ = [
    # RDF documents
    'VOCAB_NAMESPACE',
    'VOCAB_TTL',
    'PLAIN_TTL',
    'VOCAB_RDFXML',
    'VOCAB_JSONLD',
    'INVALID_TTL',
    'EMPTY_TTL',
    
    # Config samples
    'LOCAL_BUILD_CONFIG',
    'REMOTE_BUILD_CONFIG',
    
    # HTTP mocks
    'make_response',
    'make_session_factory',
]
