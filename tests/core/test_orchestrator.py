"""
Tests for batch orchestration.

Covers the terminal states of each spec, fail-fast batches, offline mode,
idempotent reruns and source root registration. The real compiler is used,
wrapped in a MagicMock so invocations can be counted.

Run:
    pytest -m integration tests/core/test_orchestrator.py
"""

import logging
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from fixtures import INVALID_TTL, VOCAB_TTL, make_response, make_session_factory
from vocab_builder.core import (
    AlwaysChangedTracker,
    CacheStore,
    ErrorKind,
    Fetcher,
    VocabularyBuildError,
)
from vocab_builder.core.services import Orchestrator
from vocab_builder.formats.rdf import FormatResolver, VocabCompiler
from vocab_builder.shared.models import SpecState, VocabularySpec


REMOTE_URL = "https://example.org/onto.ttl"
BODY = VOCAB_TTL.encode('utf-8')
OLD_DATE = "Sat, 01 Jan 2000 00:00:00 GMT"


def make_orchestrator(config, *responses, compiler=None, **kwargs):
    """Orchestrator with a counting compiler and a mocked HTTP session."""
    factory, session = make_session_factory(*responses)
    cache_store = CacheStore(config.cache_dir)
    resolver = FormatResolver(config.default_mime_type)
    compiler = compiler or MagicMock(wraps=VocabCompiler())
    orchestrator = Orchestrator(
        config,
        compiler=compiler,
        cache_store=cache_store,
        resolver=resolver,
        fetcher=Fetcher(cache_store, resolver, session_factory=factory),
        **kwargs,
    )
    return orchestrator, compiler, session


def write(path: Path, content: str) -> Path:
    path.write_text(content, encoding='utf-8')
    return path


# =============================================================================
# Local vocabularies
# =============================================================================

@pytest.mark.integration
class TestLocalVocabularies:
    """Local files are generated when new or changed."""
    
    def test_first_run_generates(self, build_config, tmp_path):
        source = write(tmp_path / "foo.ttl", VOCAB_TTL)
        orchestrator, compiler, _ = make_orchestrator(build_config)
        
        result = orchestrator.run([VocabularySpec(file=source, name="foo")])
        
        assert result.succeeded
        assert compiler.write.call_count == 1
        artifact = build_config.output_dir.absolute() / "Foo.py"
        assert result.generated[0].artifact == artifact
        assert "class Foo(DefinedNamespace):" in artifact.read_text(encoding='utf-8')
    
    def test_unchanged_file_skipped_on_rerun(self, build_config, vocab_file):
        spec = VocabularySpec(file=vocab_file, name="ex")
        first, compiler, _ = make_orchestrator(build_config)
        first.run([spec])
        artifact = build_config.output_dir / "Ex.py"
        generated = artifact.read_bytes()
        
        second, second_compiler, _ = make_orchestrator(build_config)
        result = second.run([spec])
        
        assert result.outcomes[0].state == SpecState.SKIPPED
        second_compiler.write.assert_not_called()
        assert artifact.read_bytes() == generated
    
    def test_modified_file_regenerated(self, build_config, vocab_file):
        spec = VocabularySpec(file=vocab_file, name="ex")
        make_orchestrator(build_config)[0].run([spec])
        
        stat = vocab_file.stat()
        os.utime(vocab_file, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))
        result = make_orchestrator(build_config)[0].run([spec])
        
        assert result.outcomes[0].state == SpecState.GENERATED
    
    def test_forced_tracker_always_generates(self, build_config, vocab_file):
        spec = VocabularySpec(file=vocab_file, name="ex")
        make_orchestrator(build_config)[0].run([spec])
        
        orchestrator, compiler, _ = make_orchestrator(build_config, change_tracker=AlwaysChangedTracker())
        result = orchestrator.run([spec])
        
        assert result.outcomes[0].state == SpecState.GENERATED
        assert compiler.write.call_count == 1
    
    def test_package_directories(self, build_config, vocab_file):
        spec = VocabularySpec(file=vocab_file, name="ex", package_name="org.example.vocab")
        result = make_orchestrator(build_config)[0].run([spec])
        
        expected = build_config.output_dir.absolute() / "org" / "example" / "vocab" / "Ex.py"
        assert result.generated[0].artifact == expected
        assert expected.is_file()
    
    def test_explicit_mime_type_wins_over_extension(self, build_config, tmp_path):
        source = write(tmp_path / "onto.rdf", VOCAB_TTL)
        spec = VocabularySpec(file=source, name="onto", mime_type="text/turtle")
        
        result = make_orchestrator(build_config)[0].run([spec])
        assert result.succeeded
    
    def test_missing_file_is_configuration_error(self, build_config, tmp_path):
        result = make_orchestrator(build_config)[0].run([VocabularySpec(file=tmp_path / "nope.ttl", name="nope")])
        
        assert result.failure.kind == ErrorKind.CONFIGURATION
        assert result.failure.display_name == "nope"


# =============================================================================
# Remote vocabularies
# =============================================================================

@pytest.mark.integration
@pytest.mark.network
class TestRemoteVocabularies:
    """Remote documents are fetched into the cache and compiled from there."""
    
    def test_empty_cache_fetches_and_generates(self, build_config):
        orchestrator, compiler, session = make_orchestrator(build_config, make_response(BODY))
        
        result = orchestrator.run([VocabularySpec(url=REMOTE_URL, name="onto")])
        
        assert result.succeeded
        assert session.get.call_count == 1
        cache_file = build_config.cache_dir / "onto.ttl"
        assert cache_file.read_bytes() == BODY
        compiler.write.assert_called_once()
        assert compiler.write.call_args[0][0] == cache_file
        assert (build_config.output_dir / "Onto.py").is_file()
    
    def test_older_remote_skipped_on_rerun(self, build_config):
        spec = VocabularySpec(url=REMOTE_URL, name="onto")
        make_orchestrator(build_config, make_response(BODY))[0].run([spec])
        artifact = build_config.output_dir / "Onto.py"
        generated = artifact.read_bytes()
        
        orchestrator, compiler, session = make_orchestrator(
            build_config, make_response(BODY, headers={"Last-Modified": OLD_DATE})
        )
        result = orchestrator.run([spec])
        
        assert session.get.call_count == 1
        assert result.outcomes[0].state == SpecState.SKIPPED
        compiler.write.assert_not_called()
        assert artifact.read_bytes() == generated
    
    def test_offline_mode_skips_without_network(self, build_config):
        build_config.offline = True
        orchestrator, compiler, session = make_orchestrator(build_config)
        
        result = orchestrator.run([VocabularySpec(url=REMOTE_URL, name="onto")])
        
        assert result.outcomes[0].state == SpecState.SKIPPED
        assert result.outcomes[0].reason == "offline mode"
        session.get.assert_not_called()
        compiler.write.assert_not_called()
        assert not build_config.cache_dir.exists()
    
    def test_network_failure(self, build_config):
        orchestrator, compiler, _ = make_orchestrator(build_config, requests.ConnectionError("refused"))
        
        result = orchestrator.run([VocabularySpec(url=REMOTE_URL, name="onto")])
        
        assert result.failure.kind == ErrorKind.NETWORK
        assert isinstance(result.failure.__cause__, requests.ConnectionError)
        compiler.write.assert_not_called()
    
    def test_failed_compile_drops_fetched_cache(self, build_config):
        orchestrator, _, _ = make_orchestrator(build_config, make_response(INVALID_TTL.encode('utf-8')))
        
        result = orchestrator.run([VocabularySpec(url=REMOTE_URL, name="onto")])
        
        assert result.failure.kind == ErrorKind.PARSE
        assert not (build_config.cache_dir / "onto.ttl").exists()
    
    def test_user_agent_names_project(self, build_config):
        build_config.project_name = "demo-project"
        factory, session = make_session_factory(make_response(BODY))
        cache_store = CacheStore(build_config.cache_dir)
        orchestrator = Orchestrator(build_config, cache_store=cache_store)
        orchestrator.fetcher.session_factory = factory
        
        orchestrator.run([VocabularySpec(url=REMOTE_URL, name="onto")])
        
        headers = session.get.call_args[1]["headers"]
        assert headers["User-Agent"].endswith(" demo-project")


# =============================================================================
# Batches
# =============================================================================

@pytest.mark.integration
class TestBatch:
    """Specs run in order and the first failure stops the batch."""
    
    def test_invalid_spec_stops_batch(self, build_config, tmp_path):
        good = write(tmp_path / "a.ttl", VOCAB_TTL)
        bad = write(tmp_path / "bad.ttl", VOCAB_TTL)
        never = write(tmp_path / "c.ttl", VOCAB_TTL)
        orchestrator, compiler, _ = make_orchestrator(build_config)
        
        result = orchestrator.run([
            VocabularySpec(file=good, name="a"),
            VocabularySpec(file=bad),
            VocabularySpec(file=never, name="c"),
        ])
        
        assert [o.state for o in result.outcomes] == [SpecState.GENERATED, SpecState.FAILED]
        assert result.failure.kind == ErrorKind.CONFIGURATION
        assert result.not_processed == 1
        assert compiler.write.call_count == 1
        assert (build_config.output_dir / "A.py").is_file()
        assert not (build_config.output_dir / "C.py").exists()
    
    def test_both_sources_rejected_before_io(self, build_config, vocab_file):
        orchestrator, compiler, session = make_orchestrator(build_config)
        
        result = orchestrator.run([VocabularySpec(url=REMOTE_URL, file=vocab_file, name="both")])
        
        assert result.failure.kind == ErrorKind.CONFIGURATION
        session.get.assert_not_called()
        compiler.write.assert_not_called()
    
    def test_parse_failure_keeps_earlier_output(self, build_config, vocab_file, invalid_file):
        orchestrator, _, _ = make_orchestrator(build_config)
        
        result = orchestrator.run([
            VocabularySpec(file=vocab_file, name="ex"),
            VocabularySpec(file=invalid_file, name="bad"),
        ])
        
        assert result.failure.kind == ErrorKind.PARSE
        assert result.failure.display_name == "bad"
        assert (build_config.output_dir / "Ex.py").is_file()
        assert not (build_config.output_dir / "Bad.py").exists()
        with pytest.raises(VocabularyBuildError):
            result.raise_for_failure()
    
    def test_unexpected_compiler_error_is_generation_error(self, build_config, vocab_file):
        compiler = MagicMock()
        compiler.write.side_effect = RuntimeError("template exploded")
        orchestrator, _, _ = make_orchestrator(build_config, compiler=compiler)
        
        result = orchestrator.run([VocabularySpec(file=vocab_file, name="ex")])
        
        assert result.failure.kind == ErrorKind.GENERATION
        assert isinstance(result.failure.__cause__, RuntimeError)
    
    def test_source_root_registered_once(self, build_config, tmp_path):
        callback = MagicMock()
        a = write(tmp_path / "a.ttl", VOCAB_TTL)
        b = write(tmp_path / "b.ttl", VOCAB_TTL)
        orchestrator, _, _ = make_orchestrator(build_config, source_root_callback=callback)
        
        result = orchestrator.run([VocabularySpec(file=a, name="a"), VocabularySpec(file=b, name="b")])
        
        callback.assert_called_once_with(build_config.output_dir.absolute())
        assert result.source_roots == [build_config.output_dir.absolute()]
    
    def test_no_source_root_when_nothing_generated(self, build_config):
        build_config.offline = True
        callback = MagicMock()
        orchestrator, _, _ = make_orchestrator(build_config, source_root_callback=callback)
        
        result = orchestrator.run([VocabularySpec(url=REMOTE_URL, name="onto")])
        
        callback.assert_not_called()
        assert result.source_roots == []
    
    def test_batch_defaults_apply(self, build_config, vocab_file):
        build_config.package_name = "vocabs"
        build_config.preferred_language = "de"
        build_config.indent = "  "
        orchestrator, _, _ = make_orchestrator(build_config)
        
        orchestrator.run([VocabularySpec(file=vocab_file, name="ex")])
        
        code = (build_config.output_dir / "vocabs" / "Ex.py").read_text(encoding='utf-8')
        assert "  Person: URIRef  # Ein Mensch." in code
    
    def test_empty_batch(self, build_config):
        result = make_orchestrator(build_config)[0].run([])
        assert result.succeeded
        assert result.total == 0


# =============================================================================
# Build state
# =============================================================================

@pytest.mark.integration
class TestBuildState:
    """Recorded builds are tied to their target module."""
    
    def test_shared_source_generates_every_target(self, build_config, vocab_file):
        orchestrator, compiler, _ = make_orchestrator(build_config)
        
        result = orchestrator.run([
            VocabularySpec(file=vocab_file, name="ex", class_name="First"),
            VocabularySpec(file=vocab_file, name="ex", class_name="Second"),
        ])
        
        assert [o.state for o in result.outcomes] == [SpecState.GENERATED, SpecState.GENERATED]
        assert compiler.write.call_count == 2
        assert (build_config.output_dir / "First.py").is_file()
        assert (build_config.output_dir / "Second.py").is_file()
    
    def test_shared_source_skipped_per_target_on_rerun(self, build_config, vocab_file):
        specs = [
            VocabularySpec(file=vocab_file, name="ex", class_name="First"),
            VocabularySpec(file=vocab_file, name="ex", class_name="Second"),
        ]
        make_orchestrator(build_config)[0].run(specs)
        
        orchestrator, compiler, _ = make_orchestrator(build_config)
        result = orchestrator.run(specs)
        
        assert [o.state for o in result.outcomes] == [SpecState.SKIPPED, SpecState.SKIPPED]
        compiler.write.assert_not_called()
    
    def test_deleted_artifact_regenerated(self, build_config, vocab_file):
        spec = VocabularySpec(file=vocab_file, name="ex")
        make_orchestrator(build_config)[0].run([spec])
        artifact = build_config.output_dir / "Ex.py"
        artifact.unlink()
        
        result = make_orchestrator(build_config)[0].run([spec])
        
        assert result.outcomes[0].state == SpecState.GENERATED
        assert artifact.is_file()
    
    def test_moved_output_root_regenerated(self, build_config, vocab_file, tmp_path):
        spec = VocabularySpec(file=vocab_file, name="ex")
        make_orchestrator(build_config)[0].run([spec])
        
        build_config.output_dir = tmp_path / "elsewhere"
        result = make_orchestrator(build_config)[0].run([spec])
        
        assert result.outcomes[0].state == SpecState.GENERATED
        assert (tmp_path / "elsewhere" / "Ex.py").is_file()
    
    def test_unwritable_build_state_is_not_fatal(self, build_config, vocab_file, caplog):
        build_config.state_file.mkdir(parents=True)
        orchestrator, _, _ = make_orchestrator(build_config)
        
        with caplog.at_level(logging.WARNING):
            result = orchestrator.run([VocabularySpec(file=vocab_file, name="ex")])
        
        assert result.succeeded
        assert result.outcomes[0].state == SpecState.GENERATED
        assert (build_config.output_dir / "Ex.py").is_file()
        assert "Could not record build state for ex" in caplog.text
    
    def test_spec_indent_overrides_batch_indent(self, build_config, vocab_file):
        build_config.indent = "  "
        orchestrator, _, _ = make_orchestrator(build_config)
        
        orchestrator.run([VocabularySpec(file=vocab_file, name="ex", indent="        ")])
        
        code = (build_config.output_dir / "Ex.py").read_text(encoding='utf-8')
        assert "\n        Person: URIRef" in code
        assert "\n  Person: URIRef" not in code


@pytest.mark.integration
@pytest.mark.network
class TestRemoteDisplayNames:
    """Remote vocabularies own one cache file each."""
    
    def test_duplicate_display_name_rejected_before_io(self, build_config):
        orchestrator, compiler, session = make_orchestrator(build_config, make_response(BODY))
        
        result = orchestrator.run([
            VocabularySpec(url=REMOTE_URL, name="onto"),
            VocabularySpec(url="https://example.org/other.ttl", name="onto", class_name="Other"),
        ])
        
        assert result.failure.kind == ErrorKind.CONFIGURATION
        assert result.failure.display_name == "onto"
        assert result.outcomes[0].display_name == "onto"
        session.get.assert_not_called()
        compiler.write.assert_not_called()
        assert not build_config.cache_dir.exists()
    
    def test_local_and_remote_may_share_display_name(self, build_config, vocab_file):
        orchestrator, compiler, session = make_orchestrator(build_config, make_response(BODY))
        
        result = orchestrator.run([
            VocabularySpec(file=vocab_file, name="onto", class_name="Local"),
            VocabularySpec(url=REMOTE_URL, name="onto"),
        ])
        
        assert result.succeeded
        assert compiler.write.call_count == 2
        assert session.get.call_count == 1
