"""
RDF name formatting.

Names are prefixed names, never full IRIs:

    class         <alias>:<ClassName>                 bis:Element
    property      <class rdf name>-<PropertyName>     bis:Element-CodeValue
    instance      <kind prefix>:<tag><id>             elementId:e0x1d

Class names never contain a hyphen, so the property separator cannot
collide. The tag letter keeps model and relationship ids apart, as both are
drawn from the same id space.
"""

from enum import Enum
from typing import Optional, Union

from shared.models import ClassMeta, EnumMeta, SchemaRegistry, split_full_name

from .errors import UnresolvedReference


class InstancePrefix(Enum):
    """Instance namespaces: (Turtle prefix, IRI path segment, id tag)."""
    CODE_SPEC = ("codeSpecId", "codeSpec", "c")
    ELEMENT = ("elementId", "element", "e")
    ASPECT = ("aspectId", "aspect", "a")
    MODEL = ("modelId", "model", "m")
    RELATIONSHIP = ("relationshipId", "relationship", "r")

    @property
    def prefix(self) -> str:
        return self.value[0]

    @property
    def path(self) -> str:
        return self.value[1]

    @property
    def tag(self) -> str:
        return self.value[2]


def _require(value: Optional[str], what: str) -> str:
    if not value:
        raise ValueError(f"{what} must not be empty")
    return value


def format_class_name(schema_alias: str, class_name: str) -> str:
    """Format "<alias>:<ClassName>"."""
    return f"{_require(schema_alias, 'Schema alias')}:{_require(class_name, 'Class name')}"


def format_property_name(class_rdf_name: str, property_name: str) -> str:
    """Format "<class rdf name>-<PropertyName>"."""
    return f"{_require(class_rdf_name, 'Class RDF name')}-{_require(property_name, 'Property name')}"


def format_property_label(class_rdf_name: str, property_name: str) -> str:
    """Format the display label "<class rdf name>.<PropertyName>"."""
    return f"{class_rdf_name}.{property_name}"


def format_instance_id(prefix: Union[InstancePrefix, str], instance_id: str, tag: Optional[str] = None) -> str:
    """
    Format "<kind prefix>:<tag><id>".

    Args:
        prefix: Instance namespace, or a raw prefix string (then tag is required).
        instance_id: Repository id.
        tag: Tag letter override.
    """
    if isinstance(prefix, InstancePrefix):
        prefix_name = prefix.prefix
        tag = tag if tag is not None else prefix.tag
    else:
        prefix_name = prefix
    _require(prefix_name, "Instance prefix")
    _require(tag, "Instance tag")
    return f"{prefix_name}:{tag}{_require(instance_id, 'Instance id')}"


class RdfNameFormatter:
    """
    Formats RDF names for schema items and instances.

    Class names need the owning schema's alias, so the formatter resolves
    full names through the schema registry.
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self.registry = registry

    def format_schema_item(self, item: Union[ClassMeta, EnumMeta]) -> str:
        alias = self.registry.alias_of(item.schema_name)
        if alias is None:
            raise UnresolvedReference(item.full_name, "schema not loaded")
        return format_class_name(alias, item.name)

    def format_full_name(self, full_name: str) -> str:
        """
        Format a "Schema.Item" / "Schema:Item" reference.

        Raises:
            UnresolvedReference: If the schema or item is not loaded.
        """
        try:
            schema_name, item_name = split_full_name(full_name)
        except ValueError:
            raise UnresolvedReference(full_name, "not a qualified name")
        schema = self.registry.get_schema(schema_name)
        if schema is None:
            raise UnresolvedReference(full_name, "schema not loaded")
        item = schema.get_item(item_name)
        if item is None:
            raise UnresolvedReference(full_name, f"no such item in schema {schema.name}")
        return format_class_name(schema.alias, item.name)

    def format_code_spec_instance_id(self, code_spec_id: str) -> str:
        return format_instance_id(InstancePrefix.CODE_SPEC, code_spec_id)

    def format_element_instance_id(self, element_id: str) -> str:
        return format_instance_id(InstancePrefix.ELEMENT, element_id)

    def format_aspect_instance_id(self, aspect_id: str) -> str:
        return format_instance_id(InstancePrefix.ASPECT, aspect_id)

    def format_model_instance_id(self, model_id: str) -> str:
        return format_instance_id(InstancePrefix.MODEL, model_id)

    def format_relationship_instance_id(self, relationship_id: str) -> str:
        return format_instance_id(InstancePrefix.RELATIONSHIP, relationship_id)
