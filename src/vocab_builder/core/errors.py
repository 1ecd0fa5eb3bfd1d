"""
Error taxonomy for vocabulary builds.

Every terminal failure of a vocabulary specification is reported as a single
exception type, ``VocabularyBuildError``, whose ``kind`` discriminant names the
failure category. The offending specification's display name and a
human-readable cause are always carried; the underlying exception (if any) is
chained via ``raise ... from``.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories of a vocabulary build."""
    CONFIGURATION = "configuration"
    UNRECOGNIZED_FORMAT = "unrecognized-format"
    NETWORK = "network"
    PARSE = "parse"
    GENERATION = "generation"

    def __str__(self) -> str:
        return self.value


class VocabularyBuildError(Exception):
    """A fatal error while building one vocabulary.
    
    Attributes:
        kind: Failure category.
        display_name: Display name of the offending specification, if known.
        message: Human-readable cause.
    """
    
    def __init__(self, kind: ErrorKind, message: str, display_name: Optional[str] = None):
        self.kind = kind
        self.message = message
        self.display_name = display_name
        super().__init__(self._format())
    
    def _format(self) -> str:
        if self.display_name:
            return f"[{self.kind}] {self.display_name}: {self.message}"
        return f"[{self.kind}] {self.message}"
    
    def with_display_name(self, display_name: str) -> 'VocabularyBuildError':
        """Return a copy carrying ``display_name``, keeping the cause chain."""
        if self.display_name == display_name:
            return self
        error = VocabularyBuildError(self.kind, self.message, display_name)
        error.__cause__ = self.__cause__
        return error
    
    @classmethod
    def configuration(cls, message: str, display_name: Optional[str] = None) -> 'VocabularyBuildError':
        return cls(ErrorKind.CONFIGURATION, message, display_name)
    
    @classmethod
    def unrecognized_format(cls, message: str, display_name: Optional[str] = None) -> 'VocabularyBuildError':
        return cls(ErrorKind.UNRECOGNIZED_FORMAT, message, display_name)
    
    @classmethod
    def network(cls, message: str, display_name: Optional[str] = None) -> 'VocabularyBuildError':
        return cls(ErrorKind.NETWORK, message, display_name)
    
    @classmethod
    def parse(cls, message: str, display_name: Optional[str] = None) -> 'VocabularyBuildError':
        return cls(ErrorKind.PARSE, message, display_name)
    
    @classmethod
    def generation(cls, message: str, display_name: Optional[str] = None) -> 'VocabularyBuildError':
        return cls(ErrorKind.GENERATION, message, display_name)
