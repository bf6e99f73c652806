"""
Checks for produced Turtle files.

The exporter writes Turtle line by line without an RDF library, so these
checks parse the result with rdflib to confirm it is valid Turtle and to
count what it contains.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

from rdflib import RDF, RDFS, Graph, URIRef

from constants import NamespaceConfig

logger = logging.getLogger(__name__)


@dataclass
class OutputReport:
    """
    Summary of a parsed Turtle export.

    Attributes:
        source: File path or "<string>".
        is_valid: True if the content parsed as Turtle.
        error: Parser error message when invalid.
        triple_count: Number of distinct triples in the graph.
        class_count: Mapped classes (rdfs:subClassOf subjects outside the ec namespace that are not properties).
        property_count: Mapped properties (rdfs:domain subjects outside the ec namespace).
        instance_count: Instances (rdf:type subjects).
    """
    source: str
    is_valid: bool = False
    error: Optional[str] = None
    triple_count: int = 0
    class_count: int = 0
    property_count: int = 0
    instance_count: int = 0

    def get_summary(self) -> str:
        if not self.is_valid:
            return f"{self.source}: invalid Turtle ({self.error})"
        return "\n".join([
            f"{self.source}: valid Turtle",
            f"  Triples: {self.triple_count}",
            f"  Classes: {self.class_count}",
            f"  Properties: {self.property_count}",
            f"  Instances: {self.instance_count}",
        ])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "is_valid": self.is_valid,
            "error": self.error,
            "triple_count": self.triple_count,
            "class_count": self.class_count,
            "property_count": self.property_count,
            "instance_count": self.instance_count,
        }


def _in_ec_namespace(term: Any, ec_iri: str) -> bool:
    return isinstance(term, URIRef) and str(term).startswith(ec_iri)


def get_classes(graph: Graph, ec_iri: str = NamespaceConfig.EC_IRI) -> Set[str]:
    """Mapped class IRIs: rdfs:subClassOf subjects that are neither ec terms nor properties."""
    properties = get_properties(graph, ec_iri)
    return {
        str(s) for s in set(graph.subjects(RDFS.subClassOf, None))
        if not _in_ec_namespace(s, ec_iri) and str(s) not in properties
    }


def get_properties(graph: Graph, ec_iri: str = NamespaceConfig.EC_IRI) -> Set[str]:
    """Mapped property IRIs: rdfs:domain subjects outside the ec namespace."""
    return {str(s) for s in set(graph.subjects(RDFS.domain, None)) if not _in_ec_namespace(s, ec_iri)}


def get_instances(graph: Graph) -> Set[str]:
    return {str(s) for s in set(graph.subjects(RDF.type, None))}


def parse_turtle(content: str) -> Graph:
    """
    Parse Turtle content into a graph.

    Raises:
        Exception: Whatever rdflib raises for malformed content.
    """
    graph = Graph()
    graph.parse(data=content, format="turtle")
    return graph


def check_turtle(content: str, source: str = "<string>", ec_iri: str = NamespaceConfig.EC_IRI) -> OutputReport:
    """Parse Turtle content and report what it contains."""
    report = OutputReport(source=source)
    try:
        graph = parse_turtle(content)
    except Exception as e:
        report.error = str(e)
        logger.error(f"Failed to parse {source}: {e}")
        return report

    report.is_valid = True
    report.triple_count = len(graph)
    report.class_count = len(get_classes(graph, ec_iri))
    report.property_count = len(get_properties(graph, ec_iri))
    report.instance_count = len(get_instances(graph))
    logger.debug(f"Checked {source}: {report.triple_count} triples")
    return report


def check_output(path: Union[str, Path], ec_iri: str = NamespaceConfig.EC_IRI) -> OutputReport:
    """
    Parse a Turtle file and report what it contains.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    return check_turtle(content, source=str(path), ec_iri=ec_iri)


def compare_outputs(ttl1: str, ttl2: str, ec_iri: str = NamespaceConfig.EC_IRI) -> Dict[str, Any]:
    """
    Compare two Turtle exports by their classes, properties and instances.

    The comparison is semantic: line order and duplicate lines do not
    matter.

    Args:
        ttl1: First Turtle string
        ttl2: Second Turtle string

    Returns:
        Dict with "is_equivalent", per-category entries ("classes",
        "properties", "instances") holding count1, count2, only_in_first,
        only_in_second and match, and both triple counts.
    """
    g1 = parse_turtle(ttl1)
    g2 = parse_turtle(ttl2)

    def compare_sets(first: Set[str], second: Set[str]) -> Dict[str, Any]:
        return {
            "count1": len(first),
            "count2": len(second),
            "only_in_first": sorted(first - second),
            "only_in_second": sorted(second - first),
            "match": first == second,
        }

    result: Dict[str, Any] = {
        "classes": compare_sets(get_classes(g1, ec_iri), get_classes(g2, ec_iri)),
        "properties": compare_sets(get_properties(g1, ec_iri), get_properties(g2, ec_iri)),
        "instances": compare_sets(get_instances(g1), get_instances(g2)),
        "triple_count_first": len(g1),
        "triple_count_second": len(g2),
    }
    result["is_equivalent"] = (
        result["classes"]["match"]
        and result["properties"]["match"]
        and result["instances"]["match"]
    )
    return result
