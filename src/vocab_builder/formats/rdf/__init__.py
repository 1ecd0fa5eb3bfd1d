"""
RDF package - format handling and code generation for vocabularies.

Components:
- format_resolver: media type / extension / Accept header handling
- rdf_parser: document loading with format detection
- vocab_compiler: DefinedNamespace module generation
"""

from .format_resolver import (
    RDF_FORMATS,
    PREFERRED_FORMAT,
    RDFFormat,
    FormatResolver,
    build_accept_header,
    format_for_file_name,
    format_for_mime_type,
    normalize_mime_type,
    registered_formats,
)
from .rdf_parser import RDFGraphParser
from .vocab_compiler import (
    CompileOptions,
    CompilerProtocol,
    VocabCompiler,
    select_literal,
)

__all__ = [
    'RDF_FORMATS',
    'PREFERRED_FORMAT',
    'RDFFormat',
    'FormatResolver',
    'build_accept_header',
    'format_for_file_name',
    'format_for_mime_type',
    'normalize_mime_type',
    'registered_formats',
    'RDFGraphParser',
    'CompileOptions',
    'CompilerProtocol',
    'VocabCompiler',
    'select_literal',
]
