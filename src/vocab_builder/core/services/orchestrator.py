"""
Vocabulary build orchestration.

The orchestrator processes vocabulary specs strictly in list order. Each spec
ends in one of three terminal states:

    GENERATED  the compiler produced the target module
    SKIPPED    offline mode, unchanged remote document, or unchanged local file
    FAILED     a VocabularyBuildError; processing of the batch stops here

Modules written for earlier specs are left in place when a later spec fails.

Before the first spec, remote specs are checked for duplicate display names.

Per spec:
    1. validate (display name, exactly one source)
    2. resolve the media type and compute the target path
    3. resolve the source (offline skip / conditional fetch / local delta check)
    4. create package directories
    5. compile
    6. register the output root as a source root
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from tqdm import tqdm

from ...config import BuildConfig
from ...formats.rdf.format_resolver import FormatResolver
from ...formats.rdf.vocab_compiler import CompileOptions, CompilerProtocol, VocabCompiler
from ...shared.models import (
    BuildResult,
    FetchStatus,
    GeneratedArtifact,
    SpecOutcome,
    SpecState,
    VocabularySpec,
)
from ..cache_store import CacheStore
from ..change_tracker import BuildRecorder, BuildStateTracker, ChangeTracker
from ..errors import VocabularyBuildError
from ..fetcher import Fetcher, build_user_agent

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Build a batch of vocabularies.
    
    All collaborators are injectable; defaults are derived from ``config``.
    
    Args:
        config: Batch-wide settings.
        compiler: Generates module content (default: VocabCompiler).
        change_tracker: Local-file delta check (default: BuildStateTracker
            persisted in the cache directory).
        cache_store: Staging area for remote documents.
        resolver: Media type resolver.
        fetcher: Conditional HTTP retrieval.
        source_root_callback: Called with the output root after each
            generated module, for build integration.
    """
    
    def __init__(
        self,
        config: BuildConfig,
        *,
        compiler: Optional[CompilerProtocol] = None,
        change_tracker: Optional[ChangeTracker] = None,
        cache_store: Optional[CacheStore] = None,
        resolver: Optional[FormatResolver] = None,
        fetcher: Optional[Fetcher] = None,
        source_root_callback: Optional[Callable[[Path], None]] = None,
    ) -> None:
        self.config = config
        self.compiler = compiler or VocabCompiler()
        self.change_tracker = change_tracker or BuildStateTracker(config.state_file)
        self.cache_store = cache_store or CacheStore(config.cache_dir)
        self.resolver = resolver or FormatResolver(config.default_mime_type)
        self.fetcher = fetcher or Fetcher(
            self.cache_store,
            self.resolver,
            user_agent=build_user_agent(config.project_name),
        )
        self.source_root_callback = source_root_callback
    
    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------
    
    def run(self, specs: Sequence[VocabularySpec]) -> BuildResult:
        """
        Process ``specs`` in order, stopping at the first failure.
        
        Returns:
            The batch result; per-spec failures are reported there rather
            than raised.
        """
        result = BuildResult(total=len(specs))
        logger.info(f"Generating {len(specs)} vocabularies")
        
        try:
            self._prepare(specs)
        except VocabularyBuildError as e:
            logger.error(str(e))
            result.outcomes.append(SpecOutcome(e.display_name, SpecState.FAILED, reason=e.message, error=e))
            return result
        
        for spec in tqdm(specs, desc="Generating vocabularies", unit="vocab", disable=len(specs) < 10):
            try:
                outcome = self.process(spec)
            except VocabularyBuildError as e:
                error = e
                if not e.display_name and spec.display_name:
                    error = e.with_display_name(spec.display_name)
                logger.error(str(error))
                result.outcomes.append(
                    SpecOutcome(spec.display_name, SpecState.FAILED, reason=error.message, error=error)
                )
                break
            
            result.outcomes.append(outcome)
            if outcome.state == SpecState.GENERATED:
                self._register_source_root(result)
        
        if result.succeeded:
            logger.info("Vocabulary generation complete")
        return result
    
    def _prepare(self, specs: Sequence[VocabularySpec]) -> None:
        """
        Check batch-wide invariants, then create the output root and (if
        needed) the cache directory.
        
        Remote vocabularies are cached under their display name, so two remote
        specs must not share one.
        """
        cached_names = set()
        for spec in specs:
            if not spec.is_remote or spec.display_name is None:
                continue
            if spec.display_name in cached_names:
                raise VocabularyBuildError.configuration(
                    f"Duplicate display name for remote vocabularies: {spec.url}",
                    spec.display_name,
                )
            cached_names.add(spec.display_name)
        
        try:
            self.config.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise VocabularyBuildError.configuration(
                f"Cannot create output directory {self.config.output_dir}: {e}"
            ) from e
        
        if not self.config.offline and any(spec.is_remote for spec in specs):
            try:
                self.cache_store.ensure()
            except OSError as e:
                raise VocabularyBuildError.configuration(
                    f"Cannot create cache directory {self.cache_store.directory}: {e}"
                ) from e
    
    def _register_source_root(self, result: BuildResult) -> None:
        root = self.config.output_dir.absolute()
        if root in result.source_roots:
            return
        logger.debug(f"Adding {root} as additional source root")
        result.add_source_root(root)
        if self.source_root_callback is not None:
            self.source_root_callback(root)
    
    # ------------------------------------------------------------------
    # Single spec
    # ------------------------------------------------------------------
    
    def process(self, spec: VocabularySpec) -> SpecOutcome:
        """
        Build one vocabulary.
        
        Returns:
            A GENERATED or SKIPPED outcome.
            
        Raises:
            VocabularyBuildError: On any fatal error for this spec.
        """
        display_name = spec.validate()
        mime_type = self.resolver.resolve(spec)
        fetched_file: Optional[Path] = None
        
        package_name = spec.package_name or self.config.package_name
        artifact = GeneratedArtifact.for_names(
            self.config.output_dir,
            package_name,
            spec.class_name,
            spec.name,
            self.config.file_extension,
        )
        
        if spec.is_remote:
            if self.config.offline:
                logger.info(f"Offline-Mode: Skipping generation of {display_name} from {spec.url}")
                return SpecOutcome(display_name, SpecState.SKIPPED, reason="offline mode")
            
            fetch = self.fetcher.fetch(spec.url, spec, display_name)
            if fetch.status == FetchStatus.UNCHANGED:
                logger.info(f"Skipping {display_name}, vocabulary did not change")
                return SpecOutcome(display_name, SpecState.SKIPPED, reason="remote vocabulary unchanged")
            if fetch.status == FetchStatus.FAILED:
                raise VocabularyBuildError.network(
                    f"Error fetching remote vocabulary from {spec.url}: {fetch.error}",
                    display_name,
                ) from fetch.error
            source = fetched_file = fetch.path
            mime_type = fetch.mime_type or mime_type
        else:
            source = Path(spec.file)
            if not source.is_file():
                raise VocabularyBuildError.configuration(
                    f"Vocabulary file not found: {source}", display_name
                )
            if artifact.path.is_file() and not self.change_tracker.has_changed_since(source, artifact.path):
                logger.debug(f"Skipping {display_name}, vocabulary did not change")
                return SpecOutcome(display_name, SpecState.SKIPPED, reason="local vocabulary unchanged")
        
        try:
            artifact.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise VocabularyBuildError.configuration(
                f"Cannot create package directory {artifact.directory}: {e}", display_name
            ) from e
        
        options = CompileOptions(
            name=spec.name,
            class_name=artifact.class_name,
            package_name=package_name,
            preferred_language=spec.preferred_language or self.config.preferred_language,
            indent=spec.indent if spec.indent is not None else self.config.indent,
            source=spec.source,
        )
        
        try:
            self._compile(display_name, source, mime_type, options, artifact.path)
        except VocabularyBuildError:
            if fetched_file is not None:
                self._invalidate(fetched_file)
            raise
        
        if fetched_file is None and isinstance(self.change_tracker, BuildRecorder):
            try:
                self.change_tracker.record_build(source, artifact.path)
            except OSError as e:
                logger.warning(f"Could not record build state for {display_name}: {e}")
        
        logger.info(f"Generated {display_name}: {artifact.path}")
        return SpecOutcome(display_name, SpecState.GENERATED, artifact=artifact.path)
    
    def _compile(
        self,
        display_name: str,
        source: Path,
        mime_type: Optional[str],
        options: CompileOptions,
        target: Path,
    ) -> None:
        """Invoke the compiler, classifying whatever it raises."""
        try:
            self.compiler.write(source, mime_type, options, target)
        except VocabularyBuildError as e:
            raise e.with_display_name(display_name)
        except OSError as e:
            raise VocabularyBuildError.generation(
                f"Could not write vocabulary to {target}: {e}", display_name
            ) from e
        except Exception as e:
            raise VocabularyBuildError.generation(
                f"Could not generate vocabulary: {e}", display_name
            ) from e
    
    @staticmethod
    def _invalidate(cache_file: Path) -> None:
        """Drop a freshly fetched cache file so the next run fetches it again."""
        try:
            cache_file.unlink()
            logger.debug(f"Removed cache file {cache_file} after failed generation")
        except FileNotFoundError:
            pass
