"""RDF / RDFS / XSD terms and the fixed "ec" upper vocabulary.

Every mapped schema subclasses into the ec vocabulary:

    ec:Class            rdfs:subClassOf rdfs:Class
    ec:EntityClass      rdfs:subClassOf ec:Class     (likewise Relationship,
                                                       CustomAttribute, Mixin)
    ec:Enumeration      rdfs:subClassOf rdfs:Class
    ec:Property         rdfs:subClassOf rdf:Property
    ec:*Property        rdfs:subClassOf ec:Property
    ec:GuidString, ec:Id64String, ec:JsonString  rdfs:subClassOf xsd:string
    ec:Point2d, ec:Point3d                       rdfs:subClassOf ec:JsonString

Terms are kept as prefixed names because the writer emits them verbatim.
"""

from enum import Enum
from typing import Optional, Tuple

from rdflib import Namespace

from constants import NamespaceConfig

from .names import format_property_label, format_property_name
from .triple_sink import TripleSink, quote_literal

# --------------------------------------------------------------------------- #
# Namespaces
# --------------------------------------------------------------------------- #

RDF_NS = Namespace("http://www.w3.org/1999/02/22-rdf-syntax-ns#")
RDFS_NS = Namespace("http://www.w3.org/2000/01/rdf-schema#")
XSD_NS = Namespace("http://www.w3.org/2001/XMLSchema#")
EC_NS = Namespace(NamespaceConfig.EC_IRI)

RDF_PREFIX = "rdf"
RDFS_PREFIX = "rdfs"
XSD_PREFIX = "xsd"
EC_PREFIX = "ec"


# --------------------------------------------------------------------------- #
# Terms
# --------------------------------------------------------------------------- #

class Rdf(str, Enum):
    """RDF terms. https://www.w3.org/TR/rdf11-concepts/"""
    TYPE = "rdf:type"
    PROPERTY = "rdf:Property"
    LIST = "rdf:List"


class Rdfs(str, Enum):
    """RDF Schema terms. https://www.w3.org/TR/rdf-schema/"""
    CLASS = "rdfs:Class"
    SUB_CLASS_OF = "rdfs:subClassOf"
    LITERAL = "rdfs:Literal"
    LABEL = "rdfs:label"
    COMMENT = "rdfs:comment"
    RANGE = "rdfs:range"
    DOMAIN = "rdfs:domain"


class Xsd(str, Enum):
    """RDF-compatible XSD types. https://www.w3.org/TR/rdf11-concepts/#dfn-rdf-compatible-xsd-types"""
    BASE64_BINARY = "xsd:base64Binary"
    BOOLEAN = "xsd:boolean"
    DATE = "xsd:date"
    DATE_TIME = "xsd:dateTime"
    DOUBLE = "xsd:double"
    INTEGER = "xsd:integer"
    LONG = "xsd:long"
    STRING = "xsd:string"


class Ec(str, Enum):
    """The ec upper vocabulary, in label order."""
    CLASS = "ec:Class"
    ENTITY_CLASS = "ec:EntityClass"
    RELATIONSHIP_CLASS = "ec:RelationshipClass"
    CUSTOM_ATTRIBUTE_CLASS = "ec:CustomAttributeClass"
    ENUMERATION = "ec:Enumeration"
    IGEOMETRY = "ec:IGeometry"
    MIXIN = "ec:Mixin"
    PROPERTY = "ec:Property"
    PRIMITIVE_PROPERTY = "ec:PrimitiveProperty"
    STRUCT_PROPERTY = "ec:StructProperty"
    PRIMITIVE_ARRAY_PROPERTY = "ec:PrimitiveArrayProperty"
    STRUCT_ARRAY_PROPERTY = "ec:StructArrayProperty"
    NAVIGATION_PROPERTY = "ec:NavigationProperty"
    POINT2D = "ec:Point2d"
    POINT3D = "ec:Point3d"
    EXTENDED_TYPE = "ec:ExtendedType"
    ID64_STRING = "ec:Id64String"
    JSON_STRING = "ec:JsonString"
    GUID_STRING = "ec:GuidString"


# Upper vocabulary hierarchy, emitted in this order
CLASS_HIERARCHY: Tuple[Tuple[str, str], ...] = (
    (Ec.CLASS, Rdfs.CLASS),
    (Ec.ENTITY_CLASS, Ec.CLASS),
    (Ec.RELATIONSHIP_CLASS, Ec.CLASS),
    (Ec.CUSTOM_ATTRIBUTE_CLASS, Ec.CLASS),
    (Ec.MIXIN, Ec.CLASS),
    (Ec.ENUMERATION, Rdfs.CLASS),
)

# (owner, property name, property kind, range, comment)
BUILTIN_PROPERTIES: Tuple[Tuple[str, str, str, str, str], ...] = (
    (Ec.ENTITY_CLASS, "Id", Ec.PRIMITIVE_PROPERTY, Ec.ID64_STRING, "Id of the entity instance"),
    (Ec.RELATIONSHIP_CLASS, "Id", Ec.PRIMITIVE_PROPERTY, Ec.ID64_STRING, "Id of the relationship instance"),
    (Ec.RELATIONSHIP_CLASS, "Source", Ec.NAVIGATION_PROPERTY, Ec.ENTITY_CLASS, "The source of the relationship"),
    (Ec.RELATIONSHIP_CLASS, "Target", Ec.NAVIGATION_PROPERTY, Ec.ENTITY_CLASS, "The target of the relationship"),
)

PROPERTY_HIERARCHY: Tuple[Tuple[str, str], ...] = (
    (Ec.PROPERTY, Rdf.PROPERTY),
    (Ec.PRIMITIVE_PROPERTY, Ec.PROPERTY),
    (Ec.PRIMITIVE_ARRAY_PROPERTY, Ec.PROPERTY),
    (Ec.STRUCT_PROPERTY, Ec.PROPERTY),
    (Ec.STRUCT_ARRAY_PROPERTY, Ec.PROPERTY),
    (Ec.NAVIGATION_PROPERTY, Ec.PROPERTY),
)

PRIMITIVE_HIERARCHY: Tuple[Tuple[str, str], ...] = (
    (Ec.GUID_STRING, Xsd.STRING),
    (Ec.ID64_STRING, Xsd.STRING),
    (Ec.JSON_STRING, Xsd.STRING),
    (Ec.POINT2D, Ec.JSON_STRING),
    (Ec.POINT3D, Ec.JSON_STRING),
)

RELATIONSHIP_SOURCE = f"{Ec.RELATIONSHIP_CLASS.value}-Source"
RELATIONSHIP_TARGET = f"{Ec.RELATIONSHIP_CLASS.value}-Target"


# --------------------------------------------------------------------------- #
# Statement helpers shared by the vocabulary and the schema mapper
# --------------------------------------------------------------------------- #

def write_label(sink: TripleSink, rdf_name: str, label: Optional[str] = None) -> None:
    """Write an rdfs:label, defaulting the label to the RDF name itself."""
    sink.write_triple(rdf_name, Rdfs.LABEL.value, quote_literal(label if label is not None else rdf_name))


def write_comment(sink: TripleSink, rdf_name: str, comment: str) -> None:
    sink.write_triple(rdf_name, Rdfs.COMMENT.value, quote_literal(comment))


def write_property_triples(
    sink: TripleSink,
    class_rdf_name: str,
    property_name: str,
    property_kind: str,
    property_range: Optional[str],
    comment: Optional[str] = None,
) -> str:
    """
    Write the declaration of one property.

    Lines, in order: subClassOf the property kind, domain, range (when
    known), label "<class>.<property>", comment (when present).

    Returns:
        The property's RDF name.
    """
    property_rdf_name = format_property_name(class_rdf_name, property_name)
    sink.write_triple(property_rdf_name, Rdfs.SUB_CLASS_OF.value, _term(property_kind))
    sink.write_triple(property_rdf_name, Rdfs.DOMAIN.value, class_rdf_name)
    if property_range:
        sink.write_triple(property_rdf_name, Rdfs.RANGE.value, _term(property_range))
    write_label(sink, property_rdf_name, format_property_label(class_rdf_name, property_name))
    if comment:
        write_comment(sink, property_rdf_name, comment)
    return property_rdf_name


def _term(value: str) -> str:
    return value.value if isinstance(value, Enum) else value


def declare_vocabulary(sink: TripleSink, ec_iri: str = NamespaceConfig.EC_IRI) -> None:
    """
    Write the complete upper vocabulary.

    Call once per run, before any schema or instance is mapped. Calling it
    again writes the same lines again.
    """
    sink.write_prefix(RDF_PREFIX, str(RDF_NS))
    sink.write_prefix(RDFS_PREFIX, str(RDFS_NS))
    sink.write_prefix(XSD_PREFIX, str(XSD_NS))
    sink.write_prefix(EC_PREFIX, ec_iri)

    for subject, parent in CLASS_HIERARCHY:
        sink.write_triple(_term(subject), Rdfs.SUB_CLASS_OF.value, _term(parent))

    for owner, name, kind, property_range, comment in BUILTIN_PROPERTIES:
        write_property_triples(sink, _term(owner), name, kind, property_range, comment)

    for subject, parent in PROPERTY_HIERARCHY + PRIMITIVE_HIERARCHY:
        sink.write_triple(_term(subject), Rdfs.SUB_CLASS_OF.value, _term(parent))

    for term in Ec:
        write_label(sink, term.value)
