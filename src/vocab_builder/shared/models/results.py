"""
Result types produced while building vocabularies.

- CacheEntry: a locally staged copy of a remote document
- FetchOutcome: tagged result of one retrieval attempt
- GeneratedArtifact: target file of one generated module
- SpecOutcome / BuildResult: per-spec terminal states and batch summary
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ...core.errors import VocabularyBuildError


# ============================================================================
# Cache
# ============================================================================

@dataclass(frozen=True)
class CacheEntry:
    """A cached remote document, named ``<displayName>.<ext|cache>``."""
    path: Path
    
    @property
    def exists(self) -> bool:
        return self.path.is_file()
    
    @property
    def staged_at(self) -> datetime:
        """Modification time of the cached file (UTC), the staleness baseline."""
        return datetime.fromtimestamp(self.path.stat().st_mtime, tz=timezone.utc)


# ============================================================================
# Fetch
# ============================================================================

class FetchStatus(str, Enum):
    """Discriminant of a FetchOutcome."""
    FETCHED = "fetched"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchOutcome:
    """
    Result of a retrieval attempt.
    
    Attributes:
        status: FETCHED (new local copy at ``path``), UNCHANGED (cached copy at
            ``path`` is current) or FAILED (``error`` holds the cause).
        path: Local file, when one is involved.
        mime_type: Media type the cache file was named after, if resolved.
        error: Cause of a failed retrieval.
    """
    status: FetchStatus
    path: Optional[Path] = None
    mime_type: Optional[str] = None
    error: Optional[BaseException] = None
    
    @classmethod
    def fetched(cls, path: Path, mime_type: Optional[str] = None) -> 'FetchOutcome':
        return cls(FetchStatus.FETCHED, path=path, mime_type=mime_type)
    
    @classmethod
    def unchanged(cls, path: Path, mime_type: Optional[str] = None) -> 'FetchOutcome':
        return cls(FetchStatus.UNCHANGED, path=path, mime_type=mime_type)
    
    @classmethod
    def failed(cls, error: BaseException) -> 'FetchOutcome':
        return cls(FetchStatus.FAILED, error=error)


# ============================================================================
# Generated output
# ============================================================================

def capitalize(value: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    return value[:1].upper() + value[1:]


@dataclass(frozen=True)
class GeneratedArtifact:
    """
    Target file of one generated module:
    ``output_root / package/as/path / <ClassName>.<ext>``.
    """
    output_root: Path
    package_name: Optional[str]
    file_name: str
    
    @property
    def class_name(self) -> str:
        return self.file_name.rsplit('.', 1)[0]
    
    @property
    def directory(self) -> Path:
        if not self.package_name:
            return self.output_root
        return self.output_root.joinpath(*self.package_name.split('.'))
    
    @property
    def path(self) -> Path:
        return self.directory / self.file_name
    
    @classmethod
    def for_names(
        cls,
        output_root: Path,
        package_name: Optional[str],
        class_name: Optional[str],
        name: Optional[str],
        extension: str,
    ) -> 'GeneratedArtifact':
        """
        Resolve the target file from the naming fields of a spec.
        
        Raises:
            VocabularyBuildError: CONFIGURATION if neither class_name nor name
                is available.
        """
        if class_name:
            file_name = f"{class_name}.{extension}"
        elif name:
            file_name = f"{capitalize(name)}.{extension}"
        else:
            raise VocabularyBuildError.configuration(
                "Incomplete Configuration: Vocabulary without className or name"
            )
        return cls(Path(output_root).absolute(), package_name, file_name)


# ============================================================================
# Batch result
# ============================================================================

class SpecState(str, Enum):
    """Terminal state of one vocabulary specification."""
    GENERATED = "generated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class SpecOutcome:
    """Terminal outcome of one specification."""
    display_name: Optional[str]
    state: SpecState
    artifact: Optional[Path] = None
    reason: str = ""
    error: Optional[VocabularyBuildError] = None


@dataclass
class BuildResult:
    """
    Outcome of one batch run.
    
    Specs after the first failure are not processed and have no outcome.
    """
    total: int = 0
    outcomes: List[SpecOutcome] = field(default_factory=list)
    source_roots: List[Path] = field(default_factory=list)
    
    @property
    def generated(self) -> List[SpecOutcome]:
        return [o for o in self.outcomes if o.state == SpecState.GENERATED]
    
    @property
    def skipped(self) -> List[SpecOutcome]:
        return [o for o in self.outcomes if o.state == SpecState.SKIPPED]
    
    @property
    def failure(self) -> Optional[VocabularyBuildError]:
        for outcome in self.outcomes:
            if outcome.state == SpecState.FAILED:
                return outcome.error
        return None
    
    @property
    def succeeded(self) -> bool:
        return self.failure is None
    
    @property
    def not_processed(self) -> int:
        return self.total - len(self.outcomes)
    
    def add_source_root(self, root: Path) -> None:
        if root not in self.source_roots:
            self.source_roots.append(root)
    
    def raise_for_failure(self) -> None:
        """Re-raise the batch's fatal error, if any."""
        failure = self.failure
        if failure is not None:
            raise failure
    
    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Vocabulary Build Summary:",
            f"  Vocabularies: {self.total}",
            f"  Generated: {len(self.generated)}",
            f"  Skipped: {len(self.skipped)}",
        ]
        failure = self.failure
        if failure is not None:
            lines.append(f"  Failed: {failure}")
            if self.not_processed:
                lines.append(f"  Not processed: {self.not_processed}")
        for outcome in self.generated:
            lines.append(f"  ✓ {outcome.display_name}: {outcome.artifact}")
        for outcome in self.skipped:
            lines.append(f"  - {outcome.display_name}: {outcome.reason}")
        return "\n".join(lines)
