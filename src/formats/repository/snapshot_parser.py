"""
Repository Snapshot Parser

This module parses repository snapshot JSON files into a RepositorySnapshot.

A snapshot holds the repository id, its schemas in ECSchema-JSON shape and
its instances:

    {
      "repositoryId": "d4d3d1a8-...",
      "schemas": [
        {"name": "TestSchema", "alias": "ts", "version": "01.00.00",
         "items": {
           "Widget": {"schemaItemType": "EntityClass",
                      "baseClass": "BisCore.PhysicalElement",
                      "properties": [{"name": "Name", "type": "PrimitiveProperty",
                                      "typeName": "string"}]}}}
      ],
      "codeSpecs": [{"id": "0x1", "name": "bis:NullCodeSpec"}],
      "models": [{"id": "0x10", "classFullName": "BisCore:PhysicalModel"}],
      "elements": [{"id": "0x1d", "classFullName": "TestSchema:Widget",
                    "model": "0x10", "code": {"spec": "0x1", "scope": "0x1", "value": ""},
                    "name": "Acme",
                    "uniqueAspects": [...], "multiAspects": [...]}],
      "relationships": [{"id": "0x30", "classFullName": "BisCore:ElementRefersToElements",
                         "sourceId": "0x1d", "targetId": "0x1e"}]
    }

Every key of an instance object other than its id, class name, code and
aspect lists is a property value, looked up by the property's JSON name.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from constants import FileExtensions
from shared.models import (
    ClassKind,
    ClassMeta,
    Code,
    CodeSpec,
    EnumMeta,
    Instance,
    InstanceKind,
    PRIMITIVE_TYPE_NAMES,
    PrimitiveType,
    PropertyKind,
    PropertyMeta,
    RelationshipClassMeta,
    RelationshipConstraint,
    SchemaItem,
    SchemaRef,
    StrengthDirection,
    id_from_json,
)

from .snapshot_models import RepositorySnapshot

logger = logging.getLogger(__name__)

# schemaItemType values that become ClassMeta
CLASS_ITEM_TYPES: Dict[str, ClassKind] = {
    "EntityClass": ClassKind.ENTITY,
    "RelationshipClass": ClassKind.RELATIONSHIP,
    "CustomAttributeClass": ClassKind.CUSTOM_ATTRIBUTE,
    "Mixin": ClassKind.MIXIN,
    "StructClass": ClassKind.STRUCT,
}

# Schema items with no RDF counterpart
IGNORED_ITEM_TYPES = {
    "KindOfQuantity",
    "PropertyCategory",
    "Unit",
    "InvertedUnit",
    "Constant",
    "Phenomenon",
    "UnitSystem",
    "Format",
}

# Instance keys that are not property values
RESERVED_INSTANCE_KEYS = {"id", "classFullName", "code", "uniqueAspects", "multiAspects"}


@dataclass
class ParseError:
    """Represents a parsing error."""
    file_path: str
    message: str
    item: Optional[str] = None

    def __str__(self) -> str:
        loc = f" ({self.item})" if self.item else ""
        return f"{self.file_path}{loc}: {self.message}"


@dataclass
class ParseResult:
    """Result of parsing a repository snapshot."""
    snapshot: Optional[RepositorySnapshot] = None
    errors: List[ParseError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    files_parsed: int = 0

    @property
    def success(self) -> bool:
        """Check if parsing was successful (no errors)."""
        return self.snapshot is not None and len(self.errors) == 0

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Parse Summary:",
            f"  Files parsed: {self.files_parsed}",
        ]
        if self.snapshot is not None:
            for name, count in self.snapshot.get_counts().items():
                lines.append(f"  {name.replace('_', ' ').capitalize()}: {count}")
        if self.errors:
            lines.append(f"  Errors: {len(self.errors)}")
            for err in self.errors[:5]:
                lines.append(f"    - {err}")
            if len(self.errors) > 5:
                lines.append(f"    ... and {len(self.errors) - 5} more")
        if self.warnings:
            lines.append(f"  Warnings: {len(self.warnings)}")
        return "\n".join(lines)


class SnapshotParser:
    """
    Parse repository snapshot JSON into a RepositorySnapshot.

    Malformed schema items and instances are reported as errors and left
    out; the rest of the snapshot is still parsed.

    Example usage:
        parser = SnapshotParser()
        result = parser.parse_file("repository.json")
        if result.success:
            print(result.snapshot.get_counts())
    """

    SNAPSHOT_EXTENSIONS = set(FileExtensions.SNAPSHOT_EXTENSIONS)

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the parser.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """
        Parse a snapshot file.

        Args:
            file_path: Path to the snapshot JSON file

        Returns:
            ParseResult with the snapshot and any errors
        """
        path = Path(file_path)
        result = ParseResult()

        if not path.exists():
            result.errors.append(ParseError(str(path), "File not found"))
            return result

        if not path.is_file():
            result.errors.append(ParseError(str(path), "Not a file"))
            return result

        if path.suffix.lower() not in self.SNAPSHOT_EXTENSIONS:
            result.warnings.append(f"Unexpected file extension: {path.suffix}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            result.errors.append(ParseError(str(path), f"Invalid JSON: {e}"))
            return result
        except UnicodeDecodeError as e:
            result.errors.append(ParseError(str(path), f"Encoding error: {e}"))
            return result
        except OSError as e:
            result.errors.append(ParseError(str(path), f"Error reading file: {e}"))
            return result

        result.files_parsed = 1
        self._parse_json_content(data, str(path), result, default_repository_id=path.stem)
        return result

    def parse_string(self, content: str, source_name: str = "<string>") -> ParseResult:
        """
        Parse a snapshot from a JSON string.

        Args:
            content: JSON string containing the snapshot
            source_name: Name to use for error messages

        Returns:
            ParseResult with the snapshot and any errors
        """
        result = ParseResult()

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            result.errors.append(ParseError(source_name, f"Invalid JSON: {e}"))
            return result

        result.files_parsed = 1
        self._parse_json_content(data, source_name, result)
        return result

    # ------------------------------------------------------------------ #
    # Document
    # ------------------------------------------------------------------ #

    def _warn(self, result: ParseResult, source: str, message: str) -> None:
        if self.strict_mode:
            result.errors.append(ParseError(source, message))
        else:
            result.warnings.append(f"{source}: {message}")

    def _parse_json_content(
        self,
        data: Any,
        source: str,
        result: ParseResult,
        default_repository_id: Optional[str] = None,
    ) -> None:
        if not isinstance(data, dict):
            result.errors.append(ParseError(
                source, f"Expected object, got {type(data).__name__}"
            ))
            return

        repository_id = data.get("repositoryId")
        if not repository_id:
            repository_id = default_repository_id or "repository"
            self._warn(result, source, f"No repositoryId, using '{repository_id}'")
        snapshot = RepositorySnapshot(repository_id=str(repository_id))

        for i, schema_data in enumerate(data.get("schemas", [])):
            try:
                snapshot.schemas.append(self._parse_schema(schema_data, source, result))
            except (ValueError, TypeError, KeyError) as e:
                result.errors.append(ParseError(source, f"Error parsing schema: {e}", f"schemas[{i}]"))

        for i, code_spec_data in enumerate(data.get("codeSpecs", [])):
            try:
                snapshot.code_specs.append(self._parse_code_spec(code_spec_data))
            except (ValueError, TypeError, KeyError) as e:
                result.errors.append(ParseError(source, f"Error parsing code spec: {e}", f"codeSpecs[{i}]"))

        for i, model_data in enumerate(data.get("models", [])):
            try:
                snapshot.models.append(self._parse_instance(model_data, InstanceKind.MODEL))
            except (ValueError, TypeError, KeyError) as e:
                result.errors.append(ParseError(source, f"Error parsing model: {e}", f"models[{i}]"))

        for i, element_data in enumerate(data.get("elements", [])):
            try:
                element = self._parse_instance(element_data, InstanceKind.ELEMENT)
            except (ValueError, TypeError, KeyError) as e:
                result.errors.append(ParseError(source, f"Error parsing element: {e}", f"elements[{i}]"))
                continue
            snapshot.elements.append(element)
            self._parse_aspects(element, element_data.get("uniqueAspects", []), snapshot.unique_aspects, source, result)
            self._parse_aspects(element, element_data.get("multiAspects", []), snapshot.multi_aspects, source, result)

        for i, relationship_data in enumerate(data.get("relationships", [])):
            try:
                snapshot.relationships.append(self._parse_instance(relationship_data, InstanceKind.RELATIONSHIP))
            except (ValueError, TypeError, KeyError) as e:
                result.errors.append(ParseError(source, f"Error parsing relationship: {e}", f"relationships[{i}]"))

        result.snapshot = snapshot
        logger.info(f"Parsed snapshot {source}: {snapshot.get_counts()}")

    # ------------------------------------------------------------------ #
    # Schemas
    # ------------------------------------------------------------------ #

    def _parse_schema(self, data: Dict[str, Any], source: str, result: ParseResult) -> SchemaRef:
        name = data.get("name")
        if not name:
            raise ValueError("Schema missing required 'name' field")
        alias = data.get("alias")
        if not alias:
            raise ValueError(f"Schema {name} missing required 'alias' field")

        schema = SchemaRef(
            name=name,
            alias=alias,
            version=data.get("version", "01.00.00"),
            label=data.get("label"),
            description=data.get("description"),
        )

        items = data.get("items", {})
        if isinstance(items, dict):
            entries = list(items.items())
        else:
            entries = [(item.get("name"), item) for item in items if isinstance(item, dict)]

        for item_name, item_data in entries:
            if not item_name:
                self._warn(result, source, f"Unnamed item in schema {name}")
                continue
            try:
                item = self._parse_item(name, item_name, item_data)
            except (ValueError, TypeError, KeyError) as e:
                result.errors.append(ParseError(source, str(e), f"{name}.{item_name}"))
                continue
            if item is None:
                item_type = item_data.get("schemaItemType")
                if item_type not in IGNORED_ITEM_TYPES:
                    self._warn(result, source, f"Unknown schemaItemType '{item_type}' for {name}.{item_name}")
                continue
            schema.items.append(item)

        logger.debug(f"Parsed schema {schema.schema_key}: {len(schema.items)} items")
        return schema

    def _parse_item(self, schema_name: str, name: str, data: Dict[str, Any]) -> Optional[SchemaItem]:
        item_type = data.get("schemaItemType")
        if item_type == "Enumeration":
            return self._parse_enumeration(schema_name, name, data)
        kind = CLASS_ITEM_TYPES.get(item_type)
        if kind is None:
            return None
        return self._parse_class(schema_name, name, kind, data)

    def _parse_class(self, schema_name: str, name: str, kind: ClassKind, data: Dict[str, Any]) -> ClassMeta:
        common = dict(
            schema_name=schema_name,
            name=name,
            base_class=data.get("baseClass"),
            label=data.get("label"),
            description=data.get("description"),
            properties=[self._parse_property(p) for p in data.get("properties", [])],
            custom_attributes=[
                ca["className"] if isinstance(ca, dict) else str(ca)
                for ca in data.get("customAttributes", [])
            ],
        )
        if kind == ClassKind.RELATIONSHIP:
            return RelationshipClassMeta(
                source=self._parse_constraint(data.get("source", {})),
                target=self._parse_constraint(data.get("target", {})),
                **common,
            )
        return ClassMeta(kind=kind, **common)

    def _parse_constraint(self, data: Dict[str, Any]) -> RelationshipConstraint:
        return RelationshipConstraint(
            constraint_classes=list(data.get("constraintClasses", [])),
            role_label=data.get("roleLabel"),
            polymorphic=bool(data.get("polymorphic", True)),
        )

    def _parse_enumeration(self, schema_name: str, name: str, data: Dict[str, Any]) -> EnumMeta:
        backing_name = str(data.get("type", "int")).lower()
        backing_type = PRIMITIVE_TYPE_NAMES.get(backing_name)
        if backing_type not in (PrimitiveType.INTEGER, PrimitiveType.STRING):
            raise ValueError(f"Enumeration backing type must be int or string, got '{backing_name}'")

        enumerators: Dict[str, Union[int, str]] = {}
        for enumerator in data.get("enumerators", []):
            enumerators[enumerator["name"]] = enumerator.get("value")

        return EnumMeta(
            schema_name=schema_name,
            name=name,
            backing_type=backing_type,
            label=data.get("label"),
            description=data.get("description"),
            enumerators=enumerators,
        )

    def _parse_property(self, data: Dict[str, Any]) -> PropertyMeta:
        """
        Parse a property from its ECSchema-JSON form.

        Primitive properties whose typeName is a qualified name refer to an
        enumeration; unknown unqualified type names are kept as
        uninitialized so the schema mapping reports them.
        """
        name = data.get("name")
        if not name:
            raise ValueError("Property missing required 'name' field")

        property_type = data.get("type", "PrimitiveProperty")
        type_name = data.get("typeName")
        prop = PropertyMeta(
            name=name,
            is_array=property_type in ("PrimitiveArrayProperty", "StructArrayProperty"),
            extended_type_name=data.get("extendedTypeName"),
            label=data.get("label"),
            description=data.get("description"),
        )

        if property_type in ("PrimitiveProperty", "PrimitiveArrayProperty"):
            primitive_type = PRIMITIVE_TYPE_NAMES.get(str(type_name).lower()) if type_name else None
            if primitive_type is not None:
                prop.kind = PropertyKind.PRIMITIVE
                prop.primitive_type = primitive_type
            elif type_name and ("." in type_name or ":" in type_name):
                prop.kind = PropertyKind.ENUMERATION
                prop.enumeration = type_name
            else:
                logger.warning(f"Property {name} has unknown primitive type '{type_name}'")
                prop.kind = PropertyKind.PRIMITIVE
                prop.primitive_type = PrimitiveType.UNINITIALIZED
        elif property_type in ("StructProperty", "StructArrayProperty"):
            prop.kind = PropertyKind.STRUCT
            prop.struct_class = type_name
        elif property_type == "NavigationProperty":
            prop.kind = PropertyKind.NAVIGATION
            prop.relationship_class = data.get("relationshipName")
            direction = str(data.get("direction", "Forward")).capitalize()
            prop.direction = StrengthDirection(direction)
        else:
            raise ValueError(f"Unknown property type '{property_type}' for property {name}")
        return prop

    # ------------------------------------------------------------------ #
    # Instances
    # ------------------------------------------------------------------ #

    def _parse_code_spec(self, data: Dict[str, Any]) -> CodeSpec:
        code_spec_id = id_from_json(data.get("id"))
        if not code_spec_id:
            raise ValueError("Code spec missing required 'id' field")
        name = data.get("name")
        if not name:
            raise ValueError(f"Code spec {code_spec_id} missing required 'name' field")
        properties = {k: v for k, v in data.items() if k not in ("id", "name")}
        return CodeSpec(id=code_spec_id, name=name, properties=properties)

    def _parse_code(self, data: Any) -> Optional[Code]:
        if not isinstance(data, dict):
            return None
        return Code(
            spec=id_from_json(data.get("spec")) or "",
            scope=id_from_json(data.get("scope")) or "",
            value=data.get("value") or "",
        )

    def _parse_instance(self, data: Dict[str, Any], kind: InstanceKind) -> Instance:
        instance_id = id_from_json(data.get("id"))
        if not instance_id:
            raise ValueError("Instance missing required 'id' field")
        class_full_name = data.get("classFullName")
        if not class_full_name:
            raise ValueError(f"Instance {instance_id} missing required 'classFullName' field")

        instance = Instance(
            id=instance_id,
            class_full_name=class_full_name,
            kind=kind,
            properties={k: v for k, v in data.items() if k not in RESERVED_INSTANCE_KEYS},
        )
        if kind == InstanceKind.ELEMENT:
            instance.code = self._parse_code(data.get("code"))
            instance.model = id_from_json(data.get("model"))
            instance.parent = id_from_json(data.get("parent"))
        elif kind == InstanceKind.ASPECT:
            instance.element = id_from_json(data.get("element"))
        elif kind == InstanceKind.RELATIONSHIP:
            instance.source_id = id_from_json(data.get("sourceId"))
            instance.target_id = id_from_json(data.get("targetId"))
        return instance

    def _parse_aspects(
        self,
        element: Instance,
        aspects_data: List[Dict[str, Any]],
        target: Dict[str, List[Instance]],
        source: str,
        result: ParseResult,
    ) -> None:
        for i, aspect_data in enumerate(aspects_data):
            try:
                aspect = self._parse_instance(aspect_data, InstanceKind.ASPECT)
            except (ValueError, TypeError, KeyError) as e:
                result.errors.append(ParseError(source, f"Error parsing aspect: {e}", f"element {element.id} aspect[{i}]"))
                continue
            if aspect.element is None:
                aspect.element = element.id
            target.setdefault(element.id, []).append(aspect)
