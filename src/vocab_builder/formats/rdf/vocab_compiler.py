"""
Vocabulary compiler.

Turns a parsed RDF vocabulary into a Python module declaring an rdflib
``DefinedNamespace`` subclass with one ``URIRef`` attribute per term defined
in the vocabulary's namespace, e.g.::

    class FOAF(DefinedNamespace):
        _NS = Namespace("http://xmlns.com/foaf/0.1/")

        Agent: URIRef  # An agent (eg. person, group, software or physical artifact).

Terms whose local names are not usable as attributes are listed in
``_extras`` and remain reachable via ``FOAF["local-name"]``.
"""

import json
import keyword
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, List, Optional, Protocol, Sequence, Set

from rdflib import DC, DCTERMS, OWL, RDF, RDFS, SKOS, XSD, Graph, Literal, URIRef
from rdflib.namespace import XMLNS

from ...constants import GenerationConfig, ToolInfo
from ...core.errors import VocabularyBuildError
from ...shared.models import capitalize
from .rdf_parser import RDFGraphParser

logger = logging.getLogger(__name__)

LABEL_PROPERTIES = (RDFS.label, SKOS.prefLabel, DCTERMS.title, DC.title)
COMMENT_PROPERTIES = (RDFS.comment, SKOS.definition, DCTERMS.description, DC.description)

# Namespaces that are never the subject of a generated vocabulary by guesswork
STANDARD_NAMESPACES = frozenset(
    str(ns) for ns in (RDF, RDFS, OWL, XSD, SKOS, DC, DCTERMS, XMLNS)
) | frozenset(str(ns) for _, ns in Graph().namespaces())

_WHITESPACE = re.compile(r'\s+')


@dataclass
class CompileOptions:
    """
    Naming and formatting options for one generated module.
    
    Attributes:
        name: Vocabulary name; guessed from the document's prefixes if None.
        class_name: Generated class name; defaults to the capitalized name.
        package_name: Package the module is generated into (documentation only).
        prefix: Namespace IRI; guessed from the document if None.
        preferred_language: Language tag preferred for labels and comments.
        indent: Indent unit of the class body.
        source: Human-readable source (URL or path) noted in the module docstring.
    """
    name: Optional[str] = None
    class_name: Optional[str] = None
    package_name: Optional[str] = None
    prefix: Optional[str] = None
    preferred_language: Optional[str] = None
    indent: str = GenerationConfig.DEFAULT_INDENT
    source: Optional[str] = None


@dataclass
class VocabularyTerm:
    local_name: str
    label: Optional[str] = None
    comment: Optional[str] = None
    
    @property
    def is_attribute(self) -> bool:
        """True if the local name can be declared as a class attribute."""
        return (
            self.local_name.isidentifier()
            and not keyword.iskeyword(self.local_name)
            and not self.local_name.startswith('_')
        )


@dataclass
class VocabularyModel:
    namespace: str
    name: str
    class_name: str
    label: Optional[str] = None
    description: Optional[str] = None
    terms: List[VocabularyTerm] = field(default_factory=list)


class CompilerProtocol(Protocol):
    """Contract of the component that turns a vocabulary document into code."""
    
    def generate(self, source: Path, mime_type: Optional[str], options: CompileOptions) -> str:
        ...
    
    def write(self, source: Path, mime_type: Optional[str], options: CompileOptions, target: Path) -> Path:
        ...

    def write_stream(self, source: Path, mime_type: Optional[str], options: CompileOptions, out: IO[str]) -> None:
        ...


# ============================================================================
# Literal selection
# ============================================================================

def _clean(text: str) -> str:
    return _WHITESPACE.sub(' ', text).strip()


def select_literal(
    graph: Graph,
    subject: URIRef,
    predicates: Sequence[URIRef],
    language: Optional[str] = None,
) -> Optional[str]:
    """
    Pick the best literal value of ``subject`` for ``predicates``.
    
    Predicates are tried in order. For the first predicate with literal
    values the preferred language wins, then an untagged literal, then the
    first remaining literal in sorted order.
    """
    for predicate in predicates:
        literals = sorted(
            (o for o in graph.objects(subject, predicate) if isinstance(o, Literal)),
            key=lambda lit: (lit.language or '', str(lit)),
        )
        if not literals:
            continue
        if language:
            wanted = language.lower()
            for lit in literals:
                if lit.language and lit.language.lower() == wanted:
                    return _clean(str(lit))
            for lit in literals:
                if lit.language and lit.language.lower().split('-')[0] == wanted:
                    return _clean(str(lit))
        for lit in literals:
            if not lit.language:
                return _clean(str(lit))
        return _clean(str(literals[0]))
    return None


# ============================================================================
# Compiler
# ============================================================================

class VocabCompiler:
    """
    Compile RDF vocabularies into rdflib ``DefinedNamespace`` modules.
    
    The compiler holds no state between calls; one instance can serve a whole
    batch.
    """
    
    def __init__(self, parser: Optional[RDFGraphParser] = None) -> None:
        self.parser = parser or RDFGraphParser()
    
    # ------------------------------------------------------------------
    # Namespace and name resolution
    # ------------------------------------------------------------------
    
    @staticmethod
    def _terms_in(graph: Graph, namespace: str) -> Set[str]:
        local_names = set()
        for subject in graph.subjects():
            if not isinstance(subject, URIRef):
                continue
            value = str(subject)
            if not value.startswith(namespace):
                continue
            local_name = value[len(namespace):]
            if local_name and '/' not in local_name and '#' not in local_name:
                local_names.add(local_name)
        return local_names
    
    def guess_namespace(self, graph: Graph) -> str:
        """
        Find the namespace IRI of the vocabulary defined in ``graph``.
        
        Raises:
            VocabularyBuildError: GENERATION if no unique namespace is found.
        """
        ontologies = sorted(str(s) for s in graph.subjects(RDF.type, OWL.Ontology) if isinstance(s, URIRef))
        bound = sorted({str(ns) for _, ns in graph.namespaces()})
        
        if len(ontologies) == 1:
            ontology = ontologies[0]
            if ontology.endswith('#') or ontology.endswith('/'):
                return ontology
            extending = [ns for ns in bound if ns.startswith(ontology) and ns[len(ontology):] in ('#', '/')]
            if len(extending) == 1:
                return extending[0]
            return ontology + '#'
        
        candidates = [
            ns for ns in bound
            if ns not in STANDARD_NAMESPACES and self._terms_in(graph, ns)
        ]
        if len(candidates) == 1:
            return candidates[0]
        
        raise VocabularyBuildError.generation(
            "Could not determine the vocabulary namespace "
            f"({len(ontologies)} ontologies, {len(candidates)} candidate namespaces); "
            "set the prefix explicitly"
        )
    
    @staticmethod
    def guess_name(graph: Graph, namespace: str) -> str:
        """
        Find the prefix ``graph`` binds to ``namespace``.
        
        Raises:
            VocabularyBuildError: GENERATION if the namespace has no named prefix.
        """
        prefixes = sorted(
            prefix for prefix, ns in graph.namespaces()
            if str(ns) == namespace and prefix
        )
        if not prefixes:
            raise VocabularyBuildError.generation(
                f"Could not guess a name for namespace {namespace}; set the name explicitly"
            )
        return prefixes[0]
    
    def build_model(self, graph: Graph, options: CompileOptions) -> VocabularyModel:
        """
        Collect the namespace, names and terms of the vocabulary.
        
        Raises:
            VocabularyBuildError: GENERATION if names cannot be resolved, the
                class name is not an identifier, or the namespace is empty.
        """
        namespace = options.prefix or self.guess_namespace(graph)
        name = options.name
        if not name:
            try:
                name = self.guess_name(graph, namespace)
            except VocabularyBuildError:
                if not options.class_name:
                    raise
                name = options.class_name
        class_name = options.class_name or capitalize(name)
        if not class_name.isidentifier() or keyword.iskeyword(class_name):
            raise VocabularyBuildError.generation(
                f"'{class_name}' is not a valid Python class name"
            )
        
        local_names = sorted(self._terms_in(graph, namespace))
        if not local_names:
            raise VocabularyBuildError.generation(f"No terms found in namespace {namespace}")
        
        language = options.preferred_language
        terms = []
        for local_name in local_names:
            subject = URIRef(namespace + local_name)
            terms.append(VocabularyTerm(
                local_name=local_name,
                label=select_literal(graph, subject, LABEL_PROPERTIES, language),
                comment=select_literal(graph, subject, COMMENT_PROPERTIES, language),
            ))
        
        ontology = URIRef(namespace)
        ontology_alt = URIRef(namespace.rstrip('#/'))
        return VocabularyModel(
            namespace=namespace,
            name=name,
            class_name=class_name,
            label=(select_literal(graph, ontology, LABEL_PROPERTIES, language)
                   or select_literal(graph, ontology_alt, LABEL_PROPERTIES, language)),
            description=(select_literal(graph, ontology, COMMENT_PROPERTIES, language)
                         or select_literal(graph, ontology_alt, COMMENT_PROPERTIES, language)),
            terms=terms,
        )
    
    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    
    @staticmethod
    def _docstring_text(text: str) -> str:
        return text.replace('\\', '\\\\').replace('"""', '\\"\\"\\"')
    
    @staticmethod
    def _term_comment(term: VocabularyTerm) -> str:
        text = term.comment or term.label
        if not text:
            return ""
        if len(text) > GenerationConfig.MAX_COMMENT_LENGTH:
            text = text[:GenerationConfig.MAX_COMMENT_LENGTH - 3].rstrip() + "..."
        return f"  # {text}"
    
    def render(self, model: VocabularyModel, options: CompileOptions) -> str:
        """Render ``model`` as Python source."""
        indent = options.indent
        module_name = model.class_name
        if options.package_name:
            module_name = f"{options.package_name}.{model.class_name}"
        
        lines: List[str] = ['"""']
        lines.append(f"Vocabulary constants for {model.name} ({self._docstring_text(model.namespace)}).")
        lines.append("")
        lines.append(f"Module {module_name}, generated by {ToolInfo.NAME}. Do not edit.")
        if options.source:
            lines.append(f"Source: {self._docstring_text(options.source)}")
        lines.extend(['"""', "", "from rdflib.namespace import DefinedNamespace, Namespace",
                      "from rdflib.term import URIRef", "", ""])
        
        lines.append(f"class {model.class_name}(DefinedNamespace):")
        lines.append(f'{indent}"""')
        lines.append(f"{indent}{self._docstring_text(model.label or model.name)}")
        if model.description:
            lines.append("")
            lines.append(f"{indent}{self._docstring_text(model.description)}")
        lines.append(f'{indent}"""')
        lines.append("")
        lines.append(f"{indent}_NS = Namespace({json.dumps(model.namespace, ensure_ascii=False)})")
        lines.append(f"{indent}_fail = True")
        
        attributes = [t for t in model.terms if t.is_attribute]
        extras = [t for t in model.terms if not t.is_attribute]
        
        if attributes:
            lines.append("")
            for term in attributes:
                lines.append(f"{indent}{term.local_name}: URIRef{self._term_comment(term)}")
        
        if extras:
            lines.append("")
            lines.append(f"{indent}_extras = [")
            for term in extras:
                literal = json.dumps(term.local_name, ensure_ascii=False)
                lines.append(f"{indent}{indent}{literal},{self._term_comment(term)}")
            lines.append(f"{indent}]")
        
        lines.extend(["", "", f"__all__ = [{json.dumps(model.class_name)}]", ""])
        return "\n".join(lines)
    
    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    
    def generate(self, source: Path, mime_type: Optional[str], options: CompileOptions) -> str:
        """
        Parse ``source`` and return the generated module text.
        
        Raises:
            VocabularyBuildError: UNRECOGNIZED_FORMAT, PARSE or GENERATION.
            FileNotFoundError: If ``source`` does not exist.
        """
        graph = self.parser.parse_file(source, mime_type)
        model = self.build_model(graph, options)
        logger.debug(
            f"Compiling {model.class_name}: {len(model.terms)} terms in {model.namespace}"
        )
        return self.render(model, options)
    
    def write(self, source: Path, mime_type: Optional[str], options: CompileOptions, target: Path) -> Path:
        """
        Generate the module for ``source`` and write it to ``target`` (UTF-8).
        
        The file is only opened once generation succeeded, so a failing
        vocabulary never truncates an existing module.
        """
        code = self.generate(source, mime_type, options)
        target = Path(target)
        with open(target, 'w', encoding='utf-8', newline='\n') as f:
            f.write(code)
        return target
    
    def write_stream(self, source: Path, mime_type: Optional[str], options: CompileOptions, out: IO[str]) -> None:
        """Generate the module for ``source`` and write it to an open text stream."""
        out.write(self.generate(source, mime_type, options))
