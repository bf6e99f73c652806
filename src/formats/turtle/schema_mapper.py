"""
Schema to RDFS mapping.

For one schema this writes the schema's @prefix and then, for every class
and enumeration it owns, the item's place in the ec vocabulary and the
typing of the properties it declares:

    ts:Widget rdfs:subClassOf ec:EntityClass .
    ts:Widget rdfs:label "ts:Widget" .
    ts:Widget-Name rdfs:subClassOf ec:PrimitiveProperty .
    ts:Widget-Name rdfs:domain ts:Widget .
    ts:Widget-Name rdfs:range xsd:string .
    ts:Widget-Name rdfs:label "ts:Widget.Name" .

Inherited properties are declared once, on the class that declares them.
Navigation relationship classes (no link table anywhere up their chain) are
not written; they surface only as navigation properties.
"""

import logging
from typing import Dict, Optional, Set

from constants import NamespaceConfig, ProcessingLimits
from shared.models import (
    ClassKind,
    ClassMeta,
    EnumMeta,
    ExportResult,
    LINK_TABLE_RELATIONSHIP_MAP,
    PropertyKind,
    PropertyMeta,
    RelationshipClassMeta,
    SchemaRef,
    SchemaRegistry,
    StrengthDirection,
)

from .errors import UnresolvedReference, UnsupportedClassKind
from .names import RdfNameFormatter
from .triple_sink import TripleSink
from .type_mapper import TypeMapper
from .vocabulary import Ec, Rdf, Rdfs, write_comment, write_label, write_property_triples

logger = logging.getLogger(__name__)

# Supertype of a class that does not derive from another class
DEFAULT_PARENT_BY_KIND: Dict[ClassKind, str] = {
    ClassKind.CUSTOM_ATTRIBUTE: Ec.CUSTOM_ATTRIBUTE_CLASS.value,
    ClassKind.ENTITY: Ec.ENTITY_CLASS.value,
    ClassKind.ENUMERATION: Ec.ENUMERATION.value,
    ClassKind.MIXIN: Ec.MIXIN.value,
    ClassKind.RELATIONSHIP: Ec.RELATIONSHIP_CLASS.value,
}


def schema_namespace_iri(schema: SchemaRef, base_iri: str = NamespaceConfig.BASE_IRI) -> str:
    """IRI bound to a schema's alias."""
    return base_iri + NamespaceConfig.SCHEMA_PATH.format(schema_key=schema.schema_key)


class SchemaMapper:
    """
    Writes the RDFS declarations for schemas.

    Each class is declared once per run: a class already declared by this
    mapper is skipped if the traversal hands it over again.
    """

    def __init__(
        self,
        sink: TripleSink,
        registry: SchemaRegistry,
        formatter: Optional[RdfNameFormatter] = None,
        result: Optional[ExportResult] = None,
        base_iri: str = NamespaceConfig.BASE_IRI,
    ) -> None:
        self.sink = sink
        self.registry = registry
        self.formatter = formatter or RdfNameFormatter(registry)
        self.result = result if result is not None else ExportResult()
        self.base_iri = base_iri
        self._declared: Set[str] = set()

    # ------------------------------------------------------------------ #
    # Schemas and items
    # ------------------------------------------------------------------ #

    def map_schema(self, schema: SchemaRef) -> None:
        """Write the schema's prefix and every class and enumeration it owns."""
        if self.registry.get_schema(schema.name) is None:
            self.registry.add(schema)
        self.sink.write_prefix(schema.alias, schema_namespace_iri(schema, self.base_iri))
        logger.debug(f"Mapping schema {schema.schema_key} ({len(schema.items)} items)")

        for item in schema.items:
            if isinstance(item, ClassMeta):
                self.map_class(item)
            elif isinstance(item, EnumMeta):
                self.map_enumeration(item)
        self.result.schemas_mapped += 1

    def map_enumeration(self, enumeration: EnumMeta) -> None:
        enumeration_rdf_name = self.formatter.format_schema_item(enumeration)
        if not self._first_declaration(enumeration_rdf_name):
            return
        self.sink.write_triple(enumeration_rdf_name, Rdfs.SUB_CLASS_OF.value, Ec.ENUMERATION.value)
        write_label(self.sink, enumeration_rdf_name, enumeration.label)
        if enumeration.description:
            write_comment(self.sink, enumeration_rdf_name, enumeration.description)
        self.result.classes_mapped += 1

    def map_class(self, ec_class: ClassMeta) -> None:
        """
        Write one class and the properties it declares.

        Raises:
            UnsupportedClassKind: If the class has no base class and its kind
                has no default supertype.
            UnsupportedPrimitiveType: If a primitive property's type is not mapped.
        """
        if self.is_navigation_relationship(ec_class):
            logger.debug(f"Skipping navigation relationship {ec_class.full_name}")
            self.result.classes_excluded += 1
            return

        class_rdf_name = self.formatter.format_schema_item(ec_class)
        if not self._first_declaration(class_rdf_name):
            return

        self.sink.write_triple(class_rdf_name, Rdfs.SUB_CLASS_OF.value, self._supertype(ec_class))
        write_label(self.sink, class_rdf_name, ec_class.label)
        if ec_class.description:
            write_comment(self.sink, class_rdf_name, ec_class.description)

        for prop in ec_class.properties:
            self.map_property(class_rdf_name, prop)
        self.result.classes_mapped += 1

    def _first_declaration(self, rdf_name: str) -> bool:
        if rdf_name in self._declared:
            logger.debug(f"{rdf_name} already declared, skipping")
            return False
        self._declared.add(rdf_name)
        return True

    def _supertype(self, ec_class: ClassMeta) -> str:
        if ec_class.base_class:
            base = self.registry.get_class(ec_class.base_class)
            if base is not None:
                return self.formatter.format_schema_item(base)
            self._skip("base class", ec_class.base_class, f"base of {ec_class.full_name} is not loaded")

        parent = DEFAULT_PARENT_BY_KIND.get(ec_class.kind)
        if parent is None:
            raise UnsupportedClassKind(ec_class.full_name, getattr(ec_class.kind, "value", ec_class.kind))
        return parent

    def is_navigation_relationship(self, ec_class: ClassMeta) -> bool:
        """
        Check whether a class is a navigation relationship.

        The root of the class's base chain decides: a relationship whose root
        carries no link-table mapping is navigation-only.
        """
        if ec_class.kind != ClassKind.RELATIONSHIP:
            return False
        root = ec_class
        for _ in range(ProcessingLimits.MAX_INHERITANCE_DEPTH):
            base = self.registry.get_base_class(root)
            if base is None:
                break
            root = base
        else:
            logger.warning(f"Base class chain of {ec_class.full_name} exceeds "
                           f"{ProcessingLimits.MAX_INHERITANCE_DEPTH} levels")
        return not root.has_custom_attribute(LINK_TABLE_RELATIONSHIP_MAP)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    def map_property(self, class_rdf_name: str, prop: PropertyMeta) -> None:
        """Write the declaration of one property, dispatching on its shape and kind."""
        if prop.is_array:
            if prop.is_primitive:
                self._write(class_rdf_name, prop, Ec.PRIMITIVE_ARRAY_PROPERTY.value, Rdf.LIST.value)
            else:
                self._write(class_rdf_name, prop, Ec.STRUCT_ARRAY_PROPERTY.value, Rdf.LIST.value)
            return

        if prop.kind == PropertyKind.ENUMERATION:
            enumeration = self.registry.get_enumeration(prop.enumeration) if prop.enumeration else None
            if enumeration is not None:
                enumeration_rdf_name = self.formatter.format_schema_item(enumeration)
                self._write(class_rdf_name, prop, Ec.PRIMITIVE_PROPERTY.value, enumeration_rdf_name)
            elif prop.primitive_type is not None:
                self._write_primitive(class_rdf_name, prop)
            else:
                self._skip("property", f"{class_rdf_name}.{prop.name}",
                           f"enumeration '{prop.enumeration}' is not loaded and no backing type is known")
        elif prop.kind == PropertyKind.NAVIGATION:
            self._write_navigation(class_rdf_name, prop)
        elif prop.kind == PropertyKind.STRUCT:
            self._write(class_rdf_name, prop, Ec.STRUCT_PROPERTY.value, None)
        elif prop.kind == PropertyKind.PRIMITIVE:
            self._write_primitive(class_rdf_name, prop)
        else:
            raise ValueError(f"Unhandled property kind '{prop.kind}' on {class_rdf_name}.{prop.name}")

    def _write_primitive(self, class_rdf_name: str, prop: PropertyMeta) -> None:
        property_range = TypeMapper.get_property_range(prop, class_rdf_name)
        self._write(class_rdf_name, prop, Ec.PRIMITIVE_PROPERTY.value, property_range)

    def _write_navigation(self, class_rdf_name: str, prop: PropertyMeta) -> None:
        property_range = self.navigation_range(class_rdf_name, prop)
        self._write(class_rdf_name, prop, Ec.NAVIGATION_PROPERTY.value, property_range)

    def navigation_range(self, class_rdf_name: str, prop: PropertyMeta) -> Optional[str]:
        """
        Resolve the range of a navigation property.

        Forward properties point at the relationship's target, backward ones
        at its source. Only the first constraint class is used; an empty
        constraint falls back to ec:EntityClass. Returns None when the
        relationship or the constraint class cannot be resolved.
        """
        relationship = self.registry.get_class(prop.relationship_class) if prop.relationship_class else None
        if not isinstance(relationship, RelationshipClassMeta):
            self._skip("navigation range", f"{class_rdf_name}.{prop.name}",
                       f"relationship class '{prop.relationship_class}' is not loaded")
            return None

        if prop.direction == StrengthDirection.BACKWARD:
            constraint = relationship.source
        else:
            constraint = relationship.target
        if not constraint.constraint_classes:
            return Ec.ENTITY_CLASS.value

        try:
            return self.formatter.format_full_name(constraint.constraint_classes[0])
        except UnresolvedReference as e:
            self._skip("navigation range", f"{class_rdf_name}.{prop.name}", str(e))
            return None

    def _write(self, class_rdf_name: str, prop: PropertyMeta, property_kind: str, property_range: Optional[str]) -> None:
        write_property_triples(self.sink, class_rdf_name, prop.name, property_kind, property_range, prop.description)

    def _skip(self, item_type: str, name: str, reason: str) -> None:
        logger.warning(f"Skipped {item_type} '{name}': {reason}")
        self.result.add_skipped(item_type, name, reason)
