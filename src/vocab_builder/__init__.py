"""
vocab-builder - generate Python vocabulary modules from RDF definitions.

Given a list of vocabulary specifications (each naming a remote URL or a
local file), the builder decides which vocabularies need regeneration,
fetches remote definitions with content negotiation and a conditional
cache, and compiles each resolved document into an rdflib
``DefinedNamespace`` module.

Usage:
    from vocab_builder import BuildConfig, Orchestrator, VocabularySpec

    config = BuildConfig(output_dir="build/generated")
    specs = [VocabularySpec(url="https://xmlns.com/foaf/0.1/index.rdf", name="foaf")]
    result = Orchestrator(config).run(specs)
    result.raise_for_failure()
"""

__version__ = "1.0.0"

from .core.errors import ErrorKind, VocabularyBuildError
from .shared.models import (
    BuildResult,
    FetchOutcome,
    FetchStatus,
    SpecOutcome,
    SpecState,
    VocabularySpec,
)
from .config import BuildConfig, build_spec_list, load_build_config
from .core.services.orchestrator import Orchestrator

__all__ = [
    '__version__',
    'BuildConfig',
    'BuildResult',
    'ErrorKind',
    'FetchOutcome',
    'FetchStatus',
    'Orchestrator',
    'SpecOutcome',
    'SpecState',
    'VocabularyBuildError',
    'VocabularySpec',
    'build_spec_list',
    'load_build_config',
]
