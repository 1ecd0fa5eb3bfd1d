"""
Vocabulary specification model.

A ``VocabularySpec`` describes one unit of work: where a vocabulary definition
comes from (exactly one of a remote URL or a local file) and how the generated
module should be named and formatted. Specs are immutable; validation is
performed per spec by the orchestrator, right before the spec is processed,
so an invalid entry never prevents earlier entries of a batch from building.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...constants import GenerationConfig
from ...core.errors import VocabularyBuildError
from ...core.validators.url import URLValidator


def indent_for(spaces: Optional[int]) -> str:
    """Indent unit for a space count; None means a tab."""
    if spaces is None:
        return GenerationConfig.DEFAULT_INDENT
    if spaces < 0:
        raise ValueError("indent must not be negative")
    return " " * spaces


def parse_indent(value: Any) -> Optional[str]:
    """
    Indent unit of a configuration value.
    
    Accepts a number of spaces or a literal tab; None stays None so the
    caller can apply its own default.
    
    Raises:
        VocabularyBuildError: CONFIGURATION for anything else.
    """
    if value is None:
        return None
    if value == "\t":
        return GenerationConfig.DEFAULT_INDENT
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return indent_for(value)
        except ValueError as e:
            raise VocabularyBuildError.configuration(str(e)) from e
    raise VocabularyBuildError.configuration(
        f"'indent' must be a number of spaces, got {value!r}"
    )


@dataclass(frozen=True)
class VocabularySpec:
    """
    One configured vocabulary.
    
    Attributes:
        url: Remote source of the vocabulary definition.
        file: Local source of the vocabulary definition.
        name: Vocabulary display name (also the namespace name).
        class_name: Override for the generated class name.
        package_name: Target package; None means the output root.
        mime_type: Explicit RDF media type of the source.
        preferred_language: Language preferred for labels and comments.
        indent: Indent unit for generated code; None uses the batch default.
    """
    url: Optional[str] = None
    file: Optional[Path] = None
    name: Optional[str] = None
    class_name: Optional[str] = None
    package_name: Optional[str] = None
    mime_type: Optional[str] = None
    preferred_language: Optional[str] = None
    indent: Optional[str] = None
    
    @property
    def display_name(self) -> Optional[str]:
        """Explicit name, else class name, else None."""
        return self.name or self.class_name or None
    
    @property
    def is_remote(self) -> bool:
        return self.url is not None
    
    @property
    def source(self) -> str:
        """The configured source as a string, for logging."""
        if self.url is not None:
            return self.url
        return str(self.file) if self.file is not None else "<no source>"
    
    def validate(self) -> str:
        """
        Check the spec is complete before any I/O happens for it.
        
        Returns:
            The resolved display name.
            
        Raises:
            VocabularyBuildError: CONFIGURATION if the display name cannot be
                resolved, if neither or both source kinds are set, or if the
                URL is not a usable http(s) URL.
        """
        display_name = self.display_name
        if display_name is None:
            raise VocabularyBuildError.configuration(
                "Incomplete Configuration: Vocabulary without className or name"
            )
        if self.url is None and self.file is None:
            raise VocabularyBuildError.configuration(
                "Incomplete Configuration: Vocabulary without url or file",
                display_name,
            )
        if self.url is not None and self.file is not None:
            raise VocabularyBuildError.configuration(
                "Invalid Configuration: Vocabulary has both url and file",
                display_name,
            )
        if self.url is not None:
            try:
                URLValidator.validate_url(self.url)
            except (TypeError, ValueError) as e:
                raise VocabularyBuildError.configuration(
                    f"Invalid URL {self.url!r}: {e}", display_name
                ) from e
        return display_name
    
    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        base_dir: Optional[Union[str, Path]] = None,
    ) -> 'VocabularySpec':
        """
        Create a spec from a declarative configuration entry.
        
        Args:
            data: Entry with keys url, file, name, className, package,
                format (alias mimeType), preferredLanguage and indent.
            base_dir: Directory relative ``file`` paths are resolved against.
            
        Raises:
            VocabularyBuildError: CONFIGURATION if the entry is not a mapping
                or its indent is malformed.
        """
        if not isinstance(data, dict):
            raise VocabularyBuildError.configuration(
                f"Vocabulary entry must be an object, got {type(data).__name__}"
            )
        
        file_value = data.get('file')
        file_path = None
        if file_value:
            file_path = Path(file_value)
            if base_dir is not None and not file_path.is_absolute():
                file_path = Path(base_dir) / file_path
        
        return cls(
            url=data.get('url') or None,
            file=file_path,
            name=data.get('name') or None,
            class_name=data.get('className') or None,
            package_name=data.get('package') or None,
            mime_type=data.get('format') or data.get('mimeType') or None,
            preferred_language=data.get('preferredLanguage') or None,
            indent=parse_indent(data.get('indent')),
        )
