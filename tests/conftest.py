"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Orchestrator and CLI runs against temp directories
    pytest -m network       # Tests exercising the HTTP layer (always mocked)

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

# Import centralized fixtures
from fixtures import (
    VOCAB_TTL,
    PLAIN_TTL,
    INVALID_TTL,
)

from vocab_builder.app.cli.helpers import _clear_managed_handlers
from vocab_builder.config import BuildConfig


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Orchestrator and CLI runs against temp directories")
    config.addinivalue_line("markers", "network: Tests exercising the HTTP layer with mocked sessions")


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Remove log handlers installed by CLI commands after each test."""
    yield
    _clear_managed_handlers()


# =============================================================================
# RDF Fixtures
# =============================================================================

@pytest.fixture
def vocab_ttl():
    """Turtle vocabulary with an owl:Ontology and multilingual labels."""
    return VOCAB_TTL


@pytest.fixture
def vocab_file(tmp_path) -> Path:
    """The sample vocabulary written to vocab.ttl."""
    path = tmp_path / "vocab.ttl"
    path.write_text(VOCAB_TTL, encoding='utf-8')
    return path


@pytest.fixture
def plain_file(tmp_path) -> Path:
    """A vocabulary without owl:Ontology written to plain.ttl."""
    path = tmp_path / "plain.ttl"
    path.write_text(PLAIN_TTL, encoding='utf-8')
    return path


@pytest.fixture
def invalid_file(tmp_path) -> Path:
    """Malformed Turtle written to bad.ttl."""
    path = tmp_path / "bad.ttl"
    path.write_text(INVALID_TTL, encoding='utf-8')
    return path


# =============================================================================
# Build Fixtures
# =============================================================================

@pytest.fixture
def build_config(tmp_path) -> BuildConfig:
    """Build configuration rooted in the test's temp directory."""
    return BuildConfig(
        output_dir=tmp_path / "generated",
        build_dir=tmp_path / "build",
    )
