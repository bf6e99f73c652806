"""
Instance to triple mapping.

Every instance gets one rdf:type triple and then one triple per property
that has a value, walking its class and then each base class in turn:

    elementId:e0x1d rdf:type ts:Widget .
    elementId:e0x1d ts:Widget-Name "Acme" .

A property without a value produces no triple. A value that cannot be
written (unresolvable id, non-finite number, malformed JSON, text UTF-8
cannot encode) is skipped on its own and recorded; the remaining values of
the instance are still written. Struct and array values are declared by the schema mapping but are
not expanded here.
"""

import json
import logging
import math
from datetime import date, datetime
from typing import Any, Callable, List, Optional, Tuple

from constants import NamespaceConfig, ProcessingLimits
from shared.models import (
    ClassMeta,
    CodeSpec,
    ExportResult,
    INVALID_ID,
    Instance,
    InstanceKind,
    PrimitiveType,
    PropertyKind,
    PropertyMeta,
    SchemaRegistry,
    id_from_json,
    is_valid_id,
)

from .errors import InvalidPropertyValue, TurtleExportError, UnresolvedReference
from .names import RdfNameFormatter, format_property_name
from .triple_sink import TripleSink, quote_json, quote_literal
from .vocabulary import RELATIONSHIP_SOURCE, RELATIONSHIP_TARGET, Rdf, Xsd

logger = logging.getLogger(__name__)

# Navigation properties named "...Model" point at models, all others at elements
MODEL_PROPERTY_SUFFIX = "Model"


def is_absent(value: Any) -> bool:
    """
    Check whether a property value counts as "no value".

    None, the empty string and empty collections are absent. Zero and False
    are values.
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return len(value) == 0
    return False


def format_token(property_name: str, value: Any) -> str:
    """
    Format a value that is written as-is.

    Booleans become true/false, numbers their decimal form, datetime and
    date objects an xsd:dateTime or xsd:date literal. Strings are opaque
    pre-formatted tokens and pass through unchanged.

    Raises:
        InvalidPropertyValue: For non-finite numbers and structured values.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidPropertyValue(property_name, f"non-finite number {value!r}")
        return repr(value)
    if isinstance(value, datetime):
        return f"{quote_literal(value.isoformat())}^^{Xsd.DATE_TIME.value}"
    if isinstance(value, date):
        return f"{quote_literal(value.isoformat())}^^{Xsd.DATE.value}"
    if isinstance(value, str):
        return value
    raise InvalidPropertyValue(property_name, f"cannot write {type(value).__name__} value as a token")


def format_date_time(property_name: str, value: Any) -> str:
    """
    Format a dateTime property value.

    Snapshots carry timestamps as ISO-8601 strings; those are quoted and
    typed xsd:dateTime. Other values go through format_token.
    """
    if isinstance(value, str):
        return f"{quote_literal(value)}^^{Xsd.DATE_TIME.value}"
    return format_token(property_name, value)


def require_utf8(property_name: str, term: str) -> str:
    """
    Return the term unchanged if the output encoding can hold it.

    Raises:
        InvalidPropertyValue: If the term contains characters UTF-8 cannot
            encode, such as lone surrogates.
    """
    try:
        term.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidPropertyValue(property_name, f"not encodable as UTF-8: {e.reason}")
    return term


class InstanceMapper:
    """
    Writes the triples of repository instances.

    Attributes:
        element_class: Full name of the class that declares element codes.
        code_spec_class: Full name of the class code spec instances are typed with.
        strict: Log skipped values at warning level instead of debug.
    """

    def __init__(
        self,
        sink: TripleSink,
        registry: SchemaRegistry,
        formatter: Optional[RdfNameFormatter] = None,
        result: Optional[ExportResult] = None,
        element_class: str = NamespaceConfig.ELEMENT_CLASS,
        code_spec_class: str = NamespaceConfig.CODE_SPEC_CLASS,
        strict: bool = False,
    ) -> None:
        self.sink = sink
        self.registry = registry
        self.formatter = formatter or RdfNameFormatter(registry)
        self.result = result if result is not None else ExportResult()
        self.element_class = element_class
        self.code_spec_class = code_spec_class
        self.strict = strict

    # ------------------------------------------------------------------ #
    # Instances
    # ------------------------------------------------------------------ #

    def map_instance(self, instance: Instance) -> bool:
        """
        Map one instance according to its kind.

        Returns:
            True if the instance was written, False if it was skipped.
        """
        if instance.kind == InstanceKind.ELEMENT:
            return self.map_element(instance)
        if instance.kind == InstanceKind.MODEL:
            return self.map_model(instance)
        if instance.kind == InstanceKind.ASPECT:
            return self.map_aspect(instance)
        if instance.kind == InstanceKind.RELATIONSHIP:
            return self.map_relationship(instance)
        raise ValueError(f"Instance {instance.id} has unsupported kind '{instance.kind}'")

    def map_code_spec(self, code_spec: CodeSpec) -> bool:
        try:
            code_spec_class_rdf_name = self.formatter.format_full_name(self.code_spec_class)
        except UnresolvedReference as e:
            self._skip("code spec", code_spec.name, str(e))
            return False

        subject = self.formatter.format_code_spec_instance_id(code_spec.id)
        self.sink.write_triple(subject, Rdf.TYPE.value, code_spec_class_rdf_name)
        self._write_value(subject, format_property_name(code_spec_class_rdf_name, "Name"), "Name",
                          lambda: quote_literal(code_spec.name))
        self.result.count_instance(InstanceKind.CODE_SPEC.value)
        return True

    def map_element(self, element: Instance) -> bool:
        resolved = self._resolve_class(element)
        if resolved is None:
            return False
        ec_class, class_rdf_name = resolved

        subject = self.formatter.format_element_instance_id(element.id)
        self.sink.write_triple(subject, Rdf.TYPE.value, class_rdf_name)
        if element.code is not None and not element.code.is_empty:
            self._write_code(subject, element)
        self.write_instance_properties(element, ec_class, subject)
        self.result.count_instance(InstanceKind.ELEMENT.value)
        return True

    def map_aspect(self, aspect: Instance) -> bool:
        return self._map_entity(aspect, self.formatter.format_aspect_instance_id, InstanceKind.ASPECT)

    def map_aspects(self, aspects: List[Instance]) -> int:
        """Map a list of multi-aspects; returns how many were written."""
        return sum(1 for aspect in aspects if self.map_aspect(aspect))

    def map_model(self, model: Instance) -> bool:
        return self._map_entity(model, self.formatter.format_model_instance_id, InstanceKind.MODEL)

    def map_relationship(self, relationship: Instance) -> bool:
        resolved = self._resolve_class(relationship)
        if resolved is None:
            return False
        ec_class, class_rdf_name = resolved

        subject = self.formatter.format_relationship_instance_id(relationship.id)
        self.sink.write_triple(subject, Rdf.TYPE.value, class_rdf_name)
        self._write_value(subject, RELATIONSHIP_SOURCE, "Source",
                          lambda: self._element_reference("Source", relationship.source_id))
        self._write_value(subject, RELATIONSHIP_TARGET, "Target",
                          lambda: self._element_reference("Target", relationship.target_id))
        self.write_instance_properties(relationship, ec_class, subject)
        self.result.count_instance(InstanceKind.RELATIONSHIP.value)
        return True

    def _map_entity(self, instance: Instance, format_id: Callable[[str], str], kind: InstanceKind) -> bool:
        resolved = self._resolve_class(instance)
        if resolved is None:
            return False
        ec_class, class_rdf_name = resolved

        subject = format_id(instance.id)
        self.sink.write_triple(subject, Rdf.TYPE.value, class_rdf_name)
        self.write_instance_properties(instance, ec_class, subject)
        self.result.count_instance(kind.value)
        return True

    def _resolve_class(self, instance: Instance) -> Optional[Tuple[ClassMeta, str]]:
        ec_class = self.registry.get_class(instance.class_full_name)
        if ec_class is None:
            self._skip("instance", instance.id, f"class '{instance.class_full_name}' is not loaded")
            return None
        return ec_class, self.formatter.format_schema_item(ec_class)

    def _write_code(self, subject: str, element: Instance) -> None:
        try:
            element_class_rdf_name = self.formatter.format_full_name(self.element_class)
        except UnresolvedReference as e:
            self._skip("code", element.id, str(e), subject)
            return

        code = element.code
        self._write_value(subject, format_property_name(element_class_rdf_name, "CodeSpec"), "CodeSpec",
                          lambda: self._instance_reference("CodeSpec", code.spec, self.formatter.format_code_spec_instance_id))
        self._write_value(subject, format_property_name(element_class_rdf_name, "CodeScope"), "CodeScope",
                          lambda: self._element_reference("CodeScope", code.scope))
        self._write_value(subject, format_property_name(element_class_rdf_name, "CodeValue"), "CodeValue",
                          lambda: quote_literal(code.value))

    # ------------------------------------------------------------------ #
    # Property values
    # ------------------------------------------------------------------ #

    def write_instance_properties(self, instance: Instance, ec_class: ClassMeta, subject: str) -> None:
        """
        Write the values of every property in the class's effective property list.

        Each property is written with the RDF name of the class that declares
        it, starting at the instance's own class and walking up the base
        chain until it ends.
        """
        current: Optional[ClassMeta] = ec_class
        depth = 0
        while current is not None:
            if depth >= ProcessingLimits.MAX_INHERITANCE_DEPTH:
                logger.warning(f"Base class chain of {ec_class.full_name} exceeds "
                               f"{ProcessingLimits.MAX_INHERITANCE_DEPTH} levels, stopping")
                break
            class_rdf_name = self.formatter.format_schema_item(current)
            for prop in current.properties:
                value = instance.get_property_value(prop.name)
                if is_absent(value):
                    continue
                self._write_value(subject, format_property_name(class_rdf_name, prop.name),
                                  f"{class_rdf_name}.{prop.name}",
                                  lambda: self.format_property_value(prop, value))
            current = self.registry.get_base_class(current)
            depth += 1

    def format_property_value(self, prop: PropertyMeta, value: Any) -> Optional[str]:
        """
        Format the object term for one property value.

        Returns:
            The object term, or None when nothing should be written.

        Raises:
            UnresolvedReference: If an id value is not a valid identifier.
            InvalidPropertyValue: If the value cannot be written as a term.
        """
        if is_absent(value) or prop.is_array:
            return None
        if prop.kind == PropertyKind.NAVIGATION:
            if prop.name.endswith(MODEL_PROPERTY_SUFFIX):
                return self._instance_reference(prop.name, value, self.formatter.format_model_instance_id)
            return self._element_reference(prop.name, value)
        if prop.kind == PropertyKind.STRUCT:
            return None
        return self._format_primitive(prop, value)

    def _format_primitive(self, prop: PropertyMeta, value: Any) -> Optional[str]:
        primitive_type = prop.primitive_type
        if primitive_type is None and prop.kind == PropertyKind.ENUMERATION and prop.enumeration:
            enumeration = self.registry.get_enumeration(prop.enumeration)
            primitive_type = enumeration.backing_type if enumeration else None

        extended_type = prop.extended_type
        if primitive_type == PrimitiveType.BINARY:
            # Binary values are only written when their encoding is known
            return quote_literal(value) if extended_type == "beguid" else None
        if primitive_type in (PrimitiveType.POINT2D, PrimitiveType.POINT3D):
            return quote_json(value)
        if primitive_type == PrimitiveType.STRING:
            if extended_type == "json":
                return self._format_json(prop.name, value)
            return quote_literal(value)
        if primitive_type == PrimitiveType.LONG and extended_type == "id":
            return self._element_reference(prop.name, value)
        if primitive_type == PrimitiveType.DATETIME:
            return format_date_time(prop.name, value)
        return format_token(prop.name, value)

    def _format_json(self, property_name: str, value: Any) -> Optional[str]:
        structure = value
        if isinstance(value, str):
            try:
                structure = json.loads(value)
            except ValueError as e:
                raise InvalidPropertyValue(property_name, f"malformed JSON: {e}")
        if is_absent(structure):
            return None
        return quote_json(structure)

    def _element_reference(self, name: str, value: Any) -> Optional[str]:
        return self._instance_reference(name, value, self.formatter.format_element_instance_id)

    def _instance_reference(self, name: str, value: Any, format_id: Callable[[str], str]) -> Optional[str]:
        instance_id = id_from_json(value)
        if instance_id is None or instance_id == INVALID_ID:
            return None
        if not is_valid_id(instance_id):
            raise UnresolvedReference(str(instance_id), f"'{name}' is not a valid id")
        return format_id(instance_id)

    def _write_value(self, subject: str, predicate: str, name: str, produce: Callable[[], Optional[str]]) -> None:
        try:
            obj = produce()
            if obj is not None:
                require_utf8(name, obj)
        except TurtleExportError as e:
            if not e.recoverable:
                raise
            self._skip("property value", name, str(e), subject)
            return
        if obj is not None:
            self.sink.write_triple(subject, predicate, obj)

    def _skip(self, item_type: str, name: str, reason: str, subject: Optional[str] = None) -> None:
        level = logging.WARNING if self.strict else logging.DEBUG
        logger.log(level, f"Skipped {item_type} '{name}': {reason}")
        self.result.add_skipped(item_type, name, reason, subject)
