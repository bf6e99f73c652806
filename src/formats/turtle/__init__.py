"""
Turtle Export Module

This module maps ECSchema class metadata and repository instances to the
Terse RDF Triple Language (Turtle).

Key Components:
- vocabulary: RDF/RDFS/XSD terms and the fixed "ec" upper vocabulary
- names: RDF name formatting for schema items and instances
- schema_mapper: Schema classes and properties to RDFS declarations
- instance_mapper: Instances and their property values to triples
- triple_sink: Append-only line writer for the output file
- exporter: Export handler driven by the repository traversal
- output_checker: rdflib-based checks of produced files

Usage:
    from formats.turtle import TurtleExporter

    with TurtleExporter.open("out.ttl") as exporter:
        exporter.declare_vocabulary()
        ...
"""

from .errors import (
    TurtleExportError,
    UnsupportedClassKind,
    UnsupportedPrimitiveType,
    UnresolvedReference,
    InvalidPropertyValue,
    IOFailure,
)

from .triple_sink import TripleSink, quote_json, quote_literal

from .vocabulary import (
    Ec,
    Rdf,
    Rdfs,
    Xsd,
    declare_vocabulary,
    write_property_triples,
)

from .names import (
    InstancePrefix,
    RdfNameFormatter,
    format_class_name,
    format_instance_id,
    format_property_name,
)

from .type_mapper import TypeMapper

from .schema_mapper import SchemaMapper

from .instance_mapper import InstanceMapper

from .exporter import TurtleExporter

from .output_checker import (
    OutputReport,
    check_output,
    check_turtle,
    compare_outputs,
)

__all__ = [
    # Errors
    'TurtleExportError',
    'UnsupportedClassKind',
    'UnsupportedPrimitiveType',
    'UnresolvedReference',
    'InvalidPropertyValue',
    'IOFailure',
    # Output
    'TripleSink',
    'quote_json',
    'quote_literal',
    # Vocabulary
    'Ec',
    'Rdf',
    'Rdfs',
    'Xsd',
    'declare_vocabulary',
    'write_property_triples',
    # Names
    'InstancePrefix',
    'RdfNameFormatter',
    'format_class_name',
    'format_instance_id',
    'format_property_name',
    # Mapping
    'TypeMapper',
    'SchemaMapper',
    'InstanceMapper',
    'TurtleExporter',
    # Checking
    'OutputReport',
    'check_output',
    'check_turtle',
    'compare_outputs',
]
