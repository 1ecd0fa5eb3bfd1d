"""
RDF sample documents for vocabulary builder tests.
"""

# =============================================================================
# Well-formed vocabularies
# =============================================================================

VOCAB_NAMESPACE = "http://example.org/vocab#"

# Ontology with multilingual labels, a keyword-named term and a hyphenated term
VOCAB_TTL = """@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix ex: <http://example.org/vocab#> .

<http://example.org/vocab> a owl:Ontology ;
    rdfs:label "Example Vocabulary"@en , "Beispielvokabular"@de ;
    rdfs:comment "A small vocabulary for tests." .

ex:Person a owl:Class ;
    rdfs:label "Person"@en , "Person"@de ;
    rdfs:comment "A human being."@en , "Ein Mensch."@de .

ex:Organization a owl:Class ;
    rdfs:label "Organization" .

ex:knows a owl:ObjectProperty ;
    rdfs:label "knows" ;
    rdfs:domain ex:Person ;
    rdfs:range ex:Person .

ex:class a rdf:Property ;
    rdfs:comment "A term named like a Python keyword." .

ex:first-name a owl:DatatypeProperty ;
    rdfs:label "first name" .
"""

# Same namespace, no owl:Ontology declaration
PLAIN_TTL = """@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix pl: <http://example.org/plain/> .

pl:Thing a rdfs:Class ;
    rdfs:label "Thing" .

pl:name a rdfs:Property ;
    rdfs:label "name" .
"""

VOCAB_RDFXML = """<?xml version="1.0" encoding="utf-8"?>
<rdf:RDF
    xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
    xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#"
    xmlns:xv="http://example.org/xml#">
  <rdfs:Class rdf:about="http://example.org/xml#Widget">
    <rdfs:label>Widget</rdfs:label>
  </rdfs:Class>
  <rdf:Property rdf:about="http://example.org/xml#size">
    <rdfs:comment>Size of a widget.</rdfs:comment>
  </rdf:Property>
</rdf:RDF>
"""

VOCAB_JSONLD = """{
  "@context": {"rdfs": "http://www.w3.org/2000/01/rdf-schema#"},
  "@id": "http://example.org/json#Gadget",
  "@type": "rdfs:Class",
  "rdfs:label": "Gadget"
}
"""

# =============================================================================
# Malformed documents
# =============================================================================

INVALID_TTL = """@prefix ex: <http://example.org/> .

ex:Broken a ex:Thing ;
    ex:missing
"""

EMPTY_TTL = """@prefix ex: <http://example.org/> .
"""
