"""
RDF Parser Module

Loads a vocabulary document into an rdflib Graph. The media type decides
which rdflib parser is used; when it is missing, the format is guessed from
the file extension and, failing that, sniffed from the document content.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rdflib import Graph
from rdflib.util import guess_format

from ...core.errors import VocabularyBuildError
from .format_resolver import format_for_mime_type

logger = logging.getLogger(__name__)

# Bytes read from the head of a document for content sniffing
SNIFF_BYTES = 4096


class RDFGraphParser:
    """
    Parse vocabulary documents into RDF graphs.
    
    Format detection, in order:
    - the given media type
    - rdflib's extension guess
    - content sniffing (XML, JSON-LD, Turtle)
    """
    
    @staticmethod
    def sniff_format(path: Union[str, Path]) -> Optional[str]:
        """
        Guess an rdflib parser name from the first bytes of a document.
        
        Returns:
            ``xml``, ``json-ld``, ``turtle`` or None.
        """
        with open(path, 'rb') as f:
            head = f.read(SNIFF_BYTES)
        text = head.decode('utf-8', errors='ignore').lstrip('\ufeff').lstrip()
        if not text:
            return None
        if text.startswith('<'):
            return 'xml'
        if text.startswith('{') or text.startswith('['):
            return 'json-ld'
        for marker in ('@prefix', '@base', 'PREFIX', 'BASE', 'prefix ', 'base '):
            if marker in text:
                return 'turtle'
        return None
    
    @classmethod
    def detect_format(cls, path: Union[str, Path], mime_type: Optional[str] = None) -> str:
        """
        Determine the rdflib parser name for a document.
        
        Raises:
            VocabularyBuildError: UNRECOGNIZED_FORMAT if ``mime_type`` is not
                an RDF media type or no format can be detected.
        """
        if mime_type:
            fmt = format_for_mime_type(mime_type)
            if fmt is None:
                raise VocabularyBuildError.unrecognized_format(
                    f"Unsupported RDF media type '{mime_type}'"
                )
            return fmt.parser
        
        guessed = guess_format(str(path))
        if guessed:
            logger.debug(f"Guessed format '{guessed}' from file name {path}")
            return guessed
        
        sniffed = cls.sniff_format(path)
        if sniffed:
            logger.debug(f"Detected format '{sniffed}' from content of {path}")
            return sniffed
        
        raise VocabularyBuildError.unrecognized_format(
            f"Could not determine the RDF format of {path}. Try setting the format explicitly"
        )
    
    @classmethod
    def parse_file(cls, path: Union[str, Path], mime_type: Optional[str] = None) -> Graph:
        """
        Parse a vocabulary document.
        
        Args:
            path: Document to parse.
            mime_type: RDF media type, if known.
            
        Returns:
            The parsed graph.
            
        Raises:
            VocabularyBuildError: UNRECOGNIZED_FORMAT if the format cannot be
                determined, PARSE if the document is malformed or empty.
            FileNotFoundError: If the document does not exist.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Vocabulary file not found: {path}")
        
        rdf_format = cls.detect_format(path, mime_type)
        logger.debug(f"Parsing {path} as {rdf_format}")
        
        graph = Graph()
        try:
            graph.parse(str(path), format=rdf_format)
        except VocabularyBuildError:
            raise
        except Exception as e:
            logger.error(f"Failed to parse {path}: {e}")
            raise VocabularyBuildError.parse(f"Invalid {rdf_format} syntax in {path.name}: {e}") from e
        
        if len(graph) == 0:
            raise VocabularyBuildError.parse(f"No RDF triples found in {path.name}")
        
        logger.debug(f"Successfully parsed {len(graph)} triples from {path}")
        return graph
