"""
Repository traversal.

Drives registered export handlers over a RepositorySnapshot in a fixed
order:

    schemas (referenced schemas before the schemas using them)
    code specs
    models
    elements, each followed by its unique aspects and then its
        multi-aspects grouped by class
    relationships

Every callback runs to completion before the next one starts. A
cancellation token, when given, is checked before each callback.
"""

import logging
from typing import Dict, List, Optional, Set

from tqdm import tqdm

from constants import ProcessingLimits
from core.services.cancellation import CancellationToken
from shared.models import (
    BaseExportHandler,
    ClassMeta,
    Instance,
    PropertyKind,
    RelationshipClassMeta,
    SchemaRef,
    split_full_name,
)

from .snapshot_models import RepositorySnapshot

logger = logging.getLogger(__name__)


def _schema_of(full_name: Optional[str]) -> Optional[str]:
    if not full_name:
        return None
    try:
        return split_full_name(full_name)[0].lower()
    except ValueError:
        return None


def schema_dependencies(schema: SchemaRef) -> Set[str]:
    """
    Names (lower-cased) of the other schemas a schema's items refer to.

    Base classes, relationship constraints and property references
    (relationships, enumerations, structs) are all followed.
    """
    references: Set[Optional[str]] = set()
    for item in schema.items:
        if not isinstance(item, ClassMeta):
            continue
        references.add(_schema_of(item.base_class))
        if isinstance(item, RelationshipClassMeta):
            for constraint in (item.source, item.target):
                references.update(_schema_of(name) for name in constraint.constraint_classes)
        for prop in item.properties:
            if prop.kind == PropertyKind.NAVIGATION:
                references.add(_schema_of(prop.relationship_class))
            elif prop.kind == PropertyKind.ENUMERATION:
                references.add(_schema_of(prop.enumeration))
            elif prop.kind == PropertyKind.STRUCT:
                references.add(_schema_of(prop.struct_class))
    references.discard(None)
    references.discard(schema.name.lower())
    references.discard(schema.alias.lower())
    return {name for name in references if name}


def order_schemas(schemas: List[SchemaRef]) -> List[SchemaRef]:
    """
    Order schemas so that every schema follows the schemas it refers to.

    File order is kept wherever references allow it. References to schemas
    that are not in the list are ignored, and reference cycles are broken
    at the first schema of the cycle in file order.
    """
    by_name: Dict[str, SchemaRef] = {}
    for schema in schemas:
        by_name[schema.name.lower()] = schema
        by_name.setdefault(schema.alias.lower(), schema)

    ordered: List[SchemaRef] = []
    visited: Set[str] = set()

    def visit(schema: SchemaRef) -> None:
        key = schema.name.lower()
        if key in visited:
            return
        visited.add(key)
        for dependency in sorted(schema_dependencies(schema)):
            referenced = by_name.get(dependency)
            if referenced is not None:
                visit(referenced)
        ordered.append(schema)

    for schema in schemas:
        visit(schema)
    return ordered


class RepositoryTraversal:
    """
    Invokes handler callbacks for the contents of a snapshot.

    Example usage:
        traversal = RepositoryTraversal(snapshot)
        traversal.register_handler(exporter)
        traversal.export_all()
    """

    def __init__(
        self,
        snapshot: RepositorySnapshot,
        show_progress: bool = True,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        self.snapshot = snapshot
        self.show_progress = show_progress
        self.cancellation_token = cancellation_token
        self._handlers: List[BaseExportHandler] = []

    @property
    def repository_id(self) -> str:
        return self.snapshot.repository_id

    def register_handler(self, handler: BaseExportHandler) -> None:
        self._handlers.append(handler)
        logger.debug(f"Registered export handler {handler.get_handler_name()}")

    def _check_cancelled(self) -> None:
        if self.cancellation_token is not None:
            self.cancellation_token.throw_if_cancelled()

    def _progress(self, items: List, desc: str, unit: str):
        disabled = not self.show_progress or len(items) < ProcessingLimits.PROGRESS_MIN_ITEMS
        return tqdm(items, desc=desc, unit=unit, disable=disabled)

    def export_all(self) -> None:
        """Export schemas and then all instances."""
        self.export_schemas()
        self.export_instances()

    def export_schemas(self) -> None:
        schemas = order_schemas(self.snapshot.schemas)
        logger.info(f"Exporting {len(schemas)} schemas")
        for schema in self._progress(schemas, "Exporting schemas", "schema"):
            self._check_cancelled()
            for handler in self._handlers:
                handler.on_export_schema(schema)

    def export_instances(self) -> None:
        """Export code specs, models, elements with their aspects and relationships."""
        snapshot = self.snapshot
        logger.info(f"Exporting {snapshot.instance_count} instances")

        for code_spec in self._progress(snapshot.code_specs, "Exporting code specs", "codeSpec"):
            self._check_cancelled()
            for handler in self._handlers:
                handler.on_export_code_spec(code_spec)

        for model in self._progress(snapshot.models, "Exporting models", "model"):
            self._check_cancelled()
            for handler in self._handlers:
                handler.on_export_model(model)

        for element in self._progress(snapshot.elements, "Exporting elements", "element"):
            self._check_cancelled()
            self._export_element(element)

        for relationship in self._progress(snapshot.relationships, "Exporting relationships", "relationship"):
            self._check_cancelled()
            for handler in self._handlers:
                handler.on_export_relationship(relationship)

    def _export_element(self, element: Instance) -> None:
        for handler in self._handlers:
            handler.on_export_element(element)

        for aspect in self.snapshot.unique_aspects.get(element.id, []):
            self._check_cancelled()
            for handler in self._handlers:
                handler.on_export_element_unique_aspect(aspect)

        multi_aspects: Dict[str, List[Instance]] = {}
        for aspect in self.snapshot.multi_aspects.get(element.id, []):
            multi_aspects.setdefault(aspect.class_full_name, []).append(aspect)
        for aspects in multi_aspects.values():
            self._check_cancelled()
            for handler in self._handlers:
                handler.on_export_element_multi_aspects(aspects)
