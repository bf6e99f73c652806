"""
Shared data models for the ECSchema Turtle exporter.

This module contains the core data classes used by the repository reader,
the mapping engine and the CLI: schema metadata, repository instances and
export results.

Usage:
    from shared.models import ClassMeta, PropertyMeta, SchemaRef, SchemaRegistry

    # Or import specific classes
    from shared.models.schema_types import PrimitiveType, PropertyKind
    from shared.models.instance_types import Instance, InstanceKind
    from shared.models.export_result import ExportResult, SkippedItem
"""

from .schema_types import (
    ClassKind,
    PrimitiveType,
    PropertyKind,
    StrengthDirection,
    PropertyMeta,
    ClassMeta,
    RelationshipClassMeta,
    RelationshipConstraint,
    EnumMeta,
    SchemaItem,
    SchemaRef,
    SchemaRegistry,
    LINK_TABLE_RELATIONSHIP_MAP,
    PRIMITIVE_TYPE_NAMES,
    split_full_name,
)
from .instance_types import (
    Code,
    CodeSpec,
    Instance,
    InstanceKind,
)
from .identifiers import (
    INVALID_ID,
    id_from_json,
    is_valid_id,
)
from .export_result import (
    ExportResult,
    SkippedItem,
)
from .base import BaseExportHandler

__all__ = [
    # Schema metadata
    "ClassKind",
    "PrimitiveType",
    "PropertyKind",
    "StrengthDirection",
    "PropertyMeta",
    "ClassMeta",
    "RelationshipClassMeta",
    "RelationshipConstraint",
    "EnumMeta",
    "SchemaItem",
    "SchemaRef",
    "SchemaRegistry",
    "LINK_TABLE_RELATIONSHIP_MAP",
    "PRIMITIVE_TYPE_NAMES",
    "split_full_name",
    # Instances
    "Code",
    "CodeSpec",
    "Instance",
    "InstanceKind",
    # Identifiers
    "INVALID_ID",
    "id_from_json",
    "is_valid_id",
    # Results
    "ExportResult",
    "SkippedItem",
    # Handler base class
    "BaseExportHandler",
]
