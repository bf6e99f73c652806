"""
ECSchema metadata types.

This module defines the read-only class/property metadata that the exporter
maps into RDF. Schemas own their items; everything that points at another
item (base class, relationship class, constraint classes, enumeration) holds
a full-name reference that is resolved through a SchemaRegistry, so the
metadata forms an arena indexed by name rather than a graph of live objects.

Full names are accepted in either "Schema.Item" or "Schema:Item" form and
are matched case-insensitively, as ECSchema names are.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union


class ClassKind(str, Enum):
    """Schema item kinds that can own properties."""
    ENTITY = "EntityClass"
    RELATIONSHIP = "RelationshipClass"
    CUSTOM_ATTRIBUTE = "CustomAttributeClass"
    MIXIN = "Mixin"
    ENUMERATION = "Enumeration"
    STRUCT = "StructClass"


class PrimitiveType(str, Enum):
    """ECSchema primitive types."""
    UNINITIALIZED = "uninitialized"
    BINARY = "binary"
    BOOLEAN = "boolean"
    DATETIME = "dateTime"
    DOUBLE = "double"
    GEOMETRY = "Bentley.Geometry.Common.IGeometry"
    INTEGER = "int"
    LONG = "long"
    POINT2D = "point2d"
    POINT3D = "point3d"
    STRING = "string"


class PropertyKind(str, Enum):
    """What a property's value is made of."""
    PRIMITIVE = "primitive"
    STRUCT = "struct"
    NAVIGATION = "navigation"
    ENUMERATION = "enumeration"


class StrengthDirection(str, Enum):
    """Direction a navigation property points along its relationship."""
    FORWARD = "Forward"
    BACKWARD = "Backward"


# Custom attribute that gives a relationship class its own link table
LINK_TABLE_RELATIONSHIP_MAP = "ECDbMap.LinkTableRelationshipMap"

# Primitive type names as they appear in ECSchema JSON "typeName" values
PRIMITIVE_TYPE_NAMES: Dict[str, PrimitiveType] = {
    "binary": PrimitiveType.BINARY,
    "boolean": PrimitiveType.BOOLEAN,
    "bool": PrimitiveType.BOOLEAN,
    "datetime": PrimitiveType.DATETIME,
    "double": PrimitiveType.DOUBLE,
    "bentley.geometry.common.igeometry": PrimitiveType.GEOMETRY,
    "igeometry": PrimitiveType.GEOMETRY,
    "int": PrimitiveType.INTEGER,
    "integer": PrimitiveType.INTEGER,
    "long": PrimitiveType.LONG,
    "point2d": PrimitiveType.POINT2D,
    "point3d": PrimitiveType.POINT3D,
    "string": PrimitiveType.STRING,
}


def split_full_name(full_name: str) -> Tuple[str, str]:
    """
    Split "Schema.Item" or "Schema:Item" into its two parts.

    Raises:
        ValueError: If the name has no schema qualifier.
    """
    normalized = full_name.replace(".", ":", 1)
    schema_name, sep, item_name = normalized.partition(":")
    if not sep or not schema_name or not item_name:
        raise ValueError(f"Not a qualified schema item name: '{full_name}'")
    return schema_name, item_name


@dataclass
class PropertyMeta:
    """
    A property declared on exactly one class.

    Attributes:
        name: Property name, unique within the owning class's effective properties.
        kind: Primitive, struct, navigation or enumeration-of-primitive.
        is_array: True for array-shaped properties.
        primitive_type: Primitive type (also the backing type of enumeration properties).
        extended_type_name: Free-form hint such as "BeGuid", "Json" or "Id".
        relationship_class: Full name of the relationship (navigation properties).
        direction: Direction along the relationship (navigation properties).
        enumeration: Full name of the enumeration (enumeration properties).
        struct_class: Full name of the struct class (struct properties).
        label: Optional display label.
        description: Optional description.
    """
    name: str
    kind: PropertyKind = PropertyKind.PRIMITIVE
    is_array: bool = False
    primitive_type: Optional[PrimitiveType] = None
    extended_type_name: Optional[str] = None
    relationship_class: Optional[str] = None
    direction: StrengthDirection = StrengthDirection.FORWARD
    enumeration: Optional[str] = None
    struct_class: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None

    @property
    def extended_type(self) -> Optional[str]:
        """Lower-cased extended type name, or None when unset."""
        return self.extended_type_name.lower() if self.extended_type_name else None

    @property
    def is_primitive(self) -> bool:
        """True for primitive and enumeration properties (both carry a primitive value)."""
        return self.kind in (PropertyKind.PRIMITIVE, PropertyKind.ENUMERATION)


@dataclass
class ClassMeta:
    """
    A named class in a schema.

    Attributes:
        schema_name: Name of the owning schema.
        name: Class name, unique within the schema.
        kind: Item kind.
        base_class: Full name of the single base class, if any.
        label: Optional display label.
        description: Optional description.
        properties: Properties declared on this class only, in declaration order.
        custom_attributes: Full names of the custom attributes applied to the class.
    """
    schema_name: str
    name: str
    kind: ClassKind = ClassKind.ENTITY
    base_class: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    properties: List[PropertyMeta] = field(default_factory=list)
    custom_attributes: List[str] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.schema_name}.{self.name}"

    def has_custom_attribute(self, full_name: str) -> bool:
        """Check for a custom attribute, accepting either separator."""
        wanted = full_name.replace(":", ".").lower()
        return any(ca.replace(":", ".").lower() == wanted for ca in self.custom_attributes)


@dataclass
class RelationshipConstraint:
    """
    One end of a relationship class.

    The first constraint class is the one a navigation property's range
    resolves to when several are permitted.
    """
    constraint_classes: List[str] = field(default_factory=list)
    role_label: Optional[str] = None
    polymorphic: bool = True


@dataclass
class RelationshipClassMeta(ClassMeta):
    """A relationship class with source and target constraints."""
    kind: ClassKind = ClassKind.RELATIONSHIP
    source: RelationshipConstraint = field(default_factory=RelationshipConstraint)
    target: RelationshipConstraint = field(default_factory=RelationshipConstraint)


@dataclass
class EnumMeta:
    """An enumeration schema item."""
    schema_name: str
    name: str
    backing_type: PrimitiveType = PrimitiveType.INTEGER
    label: Optional[str] = None
    description: Optional[str] = None
    enumerators: Dict[str, Union[int, str]] = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return f"{self.schema_name}.{self.name}"


SchemaItem = Union[ClassMeta, EnumMeta]


@dataclass
class SchemaRef:
    """
    A schema: a namespace of classes and enumerations.

    Attributes:
        name: Schema name.
        alias: Short, unique alias used as the Turtle prefix.
        version: Version string, e.g. "01.00.13".
        label: Optional display label.
        description: Optional description.
        items: Owned classes and enumerations, in schema order.
    """
    name: str
    alias: str
    version: str = "01.00.00"
    label: Optional[str] = None
    description: Optional[str] = None
    items: List[SchemaItem] = field(default_factory=list)

    @property
    def schema_key(self) -> str:
        """Full versioned key, e.g. "BisCore.01.00.13"."""
        return f"{self.name}.{self.version}"

    def get_item(self, name: str) -> Optional[SchemaItem]:
        wanted = name.lower()
        for item in self.items:
            if item.name.lower() == wanted:
                return item
        return None

    @property
    def classes(self) -> List[ClassMeta]:
        return [item for item in self.items if isinstance(item, ClassMeta)]

    @property
    def enumerations(self) -> List[EnumMeta]:
        return [item for item in self.items if isinstance(item, EnumMeta)]


class SchemaRegistry:
    """
    Arena of loaded schemas, indexed by schema name.

    All cross references in the metadata are resolved here. Lookups return
    None for unknown names; callers decide whether that is fatal.
    """

    def __init__(self, schemas: Optional[List[SchemaRef]] = None) -> None:
        self._schemas: Dict[str, SchemaRef] = {}
        for schema in schemas or []:
            self.add(schema)

    def add(self, schema: SchemaRef) -> None:
        self._schemas[schema.name.lower()] = schema

    def __iter__(self) -> Iterator[SchemaRef]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def get_schema(self, name: str) -> Optional[SchemaRef]:
        schema = self._schemas.get(name.lower())
        if schema is None:
            # Allow lookups by alias as well ("bis:Element")
            for candidate in self._schemas.values():
                if candidate.alias.lower() == name.lower():
                    return candidate
        return schema

    def get_item(self, full_name: str) -> Optional[SchemaItem]:
        try:
            schema_name, item_name = split_full_name(full_name)
        except ValueError:
            return None
        schema = self.get_schema(schema_name)
        if schema is None:
            return None
        return schema.get_item(item_name)

    def get_class(self, full_name: str) -> Optional[ClassMeta]:
        item = self.get_item(full_name)
        return item if isinstance(item, ClassMeta) else None

    def get_enumeration(self, full_name: str) -> Optional[EnumMeta]:
        item = self.get_item(full_name)
        return item if isinstance(item, EnumMeta) else None

    def get_base_class(self, ec_class: ClassMeta) -> Optional[ClassMeta]:
        if not ec_class.base_class:
            return None
        return self.get_class(ec_class.base_class)

    def alias_of(self, schema_name: str) -> Optional[str]:
        schema = self.get_schema(schema_name)
        return schema.alias if schema else None
