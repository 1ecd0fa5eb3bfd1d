"""
RDF format resolution.

Determines the RDF media type of a vocabulary source and maps media types to
rdflib parser names and cache file extensions.

Resolution order (first match wins):
    1. the spec's explicit media type
    2. a guess from the file name / URL path extension
    3. the batch-wide default media type
    4. (remote sources only) the response's Content-Type, consulted lazily
       by the fetcher once a request is under way

If nothing resolves, the compiler falls back to content auto-detection.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlparse

from rdflib import plugin
from rdflib.parser import Parser

from ...constants import BuildLayout, HTTPConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RDFFormat:
    """
    An RDF serialization.
    
    Attributes:
        name: Human-readable name.
        parser: rdflib parser plugin name.
        mime_types: Media types, default first.
        extensions: File extensions without dot, default first.
    """
    name: str
    parser: str
    mime_types: Tuple[str, ...]
    extensions: Tuple[str, ...]
    
    @property
    def default_mime_type(self) -> str:
        return self.mime_types[0]
    
    @property
    def default_extension(self) -> str:
        return self.extensions[0]


TURTLE = RDFFormat("Turtle", "turtle", ("text/turtle", "application/x-turtle"), ("ttl",))
RDFXML = RDFFormat(
    "RDF/XML", "xml",
    ("application/rdf+xml", "application/xml", "text/xml"),
    ("rdf", "rdfs", "owl", "xml"),
)
NTRIPLES = RDFFormat("N-Triples", "nt", ("application/n-triples", "text/plain"), ("nt",))
N3 = RDFFormat("N3", "n3", ("text/n3", "text/rdf+n3"), ("n3",))
JSONLD = RDFFormat("JSON-LD", "json-ld", ("application/ld+json",), ("jsonld", "json"))
TRIG = RDFFormat("TriG", "trig", ("application/trig", "application/x-trig"), ("trig",))
NQUADS = RDFFormat("N-Quads", "nquads", ("application/n-quads", "text/x-nquads", "text/nquads"), ("nq",))
TRIX = RDFFormat("TriX", "trix", ("application/trix",), ("trix",))

# Extension lookups walk this list in order, so "xml" resolves to RDF/XML.
RDF_FORMATS: Tuple[RDFFormat, ...] = (TURTLE, RDFXML, NTRIPLES, N3, JSONLD, TRIG, NQUADS, TRIX)

PREFERRED_FORMAT = TURTLE


def normalize_mime_type(value: Optional[str]) -> Optional[str]:
    """Strip parameters and case from a media type (``text/turtle; charset=utf-8``)."""
    if not value:
        return None
    mime = value.split(';', 1)[0].strip().lower()
    return mime or None


def registered_formats() -> List[RDFFormat]:
    """Formats whose parser is registered with rdflib."""
    parser_names = {p.name for p in plugin.plugins(kind=Parser)}
    return [fmt for fmt in RDF_FORMATS if fmt.parser in parser_names]


def format_for_mime_type(mime_type: Optional[str]) -> Optional[RDFFormat]:
    """Return the format owning ``mime_type``, or None."""
    mime = normalize_mime_type(mime_type)
    if mime is None:
        return None
    for fmt in RDF_FORMATS:
        if mime in fmt.mime_types:
            return fmt
    return None


def format_for_file_name(file_name: Optional[str]) -> Optional[RDFFormat]:
    """
    Guess the format from a file name or URL.
    
    Query string and fragment of URLs are ignored, so
    ``https://example.org/onto.ttl?v=2`` resolves to Turtle.
    """
    if not file_name:
        return None
    path = str(file_name)
    if '://' in path:
        path = urlparse(path).path
    base = path.replace('\\', '/').rsplit('/', 1)[-1]
    if '.' not in base:
        return None
    extension = base.rsplit('.', 1)[-1].lower()
    for fmt in RDF_FORMATS:
        if extension in fmt.extensions:
            return fmt
    return None


def build_accept_header(
    formats: Optional[Iterable[RDFFormat]] = None,
    preferred: RDFFormat = PREFERRED_FORMAT,
) -> Optional[str]:
    """
    Build an Accept header value listing every media type of ``formats``.
    
    The preferred format's media types are unweighted (implicit q=1.0) and
    listed first; all others carry a lower quality weight.
    
    Returns:
        The header value, or None if there are no formats.
    """
    if formats is None:
        formats = registered_formats()
    ordered = sorted(formats, key=lambda fmt: fmt != preferred)
    params = []
    for fmt in ordered:
        for mime in fmt.mime_types:
            if fmt == preferred:
                params.append(mime)
            else:
                params.append(f"{mime};q={HTTPConfig.NON_PREFERRED_QUALITY}")
    return ", ".join(params) if params else None


class FormatResolver:
    """
    Resolve the media type for vocabulary specs.
    
    Args:
        default_mime_type: Batch-wide fallback media type.
    """
    
    def __init__(self, default_mime_type: Optional[str] = None) -> None:
        self.default_mime_type = normalize_mime_type(default_mime_type)
    
    def resolve(self, spec) -> Optional[str]:
        """
        Resolve the media type of ``spec`` without touching the network.
        
        Returns:
            A media type, or None if unresolved.
        """
        if spec.mime_type:
            return normalize_mime_type(spec.mime_type)
        
        source = spec.url if spec.url is not None else spec.file
        guess = format_for_file_name(str(source)) if source is not None else None
        if guess is not None:
            return guess.default_mime_type
        
        return self.default_mime_type
    
    @staticmethod
    def resolve_with_content_type(resolved: Optional[str], content_type: Optional[str]) -> Optional[str]:
        """Fall back to a response Content-Type if nothing else resolved."""
        if resolved:
            return resolved
        mime = normalize_mime_type(content_type)
        if mime:
            logger.debug(f"Using mime-type from response-header: {mime}")
        return mime
    
    @staticmethod
    def cache_extension(mime_type: Optional[str]) -> Optional[str]:
        """Default file extension for ``mime_type``, or None if unknown."""
        fmt = format_for_mime_type(mime_type)
        return fmt.default_extension if fmt is not None else None
    
    @staticmethod
    def file_extension(mime_type: Optional[str]) -> str:
        """Extension for a staged file: the format's default or ``cache``."""
        return FormatResolver.cache_extension(mime_type) or BuildLayout.UNKNOWN_FORMAT_EXTENSION
