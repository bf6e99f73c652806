"""
Export handler base class.

The repository traversal drives an export by calling handler callbacks in a
fixed order: every schema first, then code specs, models, elements (each
followed by its aspects) and finally relationships. Handlers implement the
callbacks they care about; the defaults do nothing.
"""

from abc import ABC
from typing import List

from .instance_types import CodeSpec, Instance
from .schema_types import SchemaRef

__all__ = ['BaseExportHandler']


class BaseExportHandler(ABC):
    """
    Abstract base class for handlers invoked by the repository traversal.

    Each callback runs to completion before the next one fires. Handlers
    are not re-entrant; a traversal must serialize its calls.
    """

    def on_export_schema(self, schema: SchemaRef) -> None:
        """Called once for every schema, before any instance."""

    def on_export_code_spec(self, code_spec: CodeSpec) -> None:
        """Called once for every code spec."""

    def on_export_model(self, model: Instance) -> None:
        """Called once for every model."""

    def on_export_element(self, element: Instance) -> None:
        """Called once for every element."""

    def on_export_element_unique_aspect(self, aspect: Instance) -> None:
        """Called for an element's unique aspect, right after the element."""

    def on_export_element_multi_aspects(self, aspects: List[Instance]) -> None:
        """Called with all multi-aspects of one class owned by an element."""

    def on_export_relationship(self, relationship: Instance) -> None:
        """Called once for every link-table relationship instance."""

    def get_handler_name(self) -> str:
        """
        Get the name of this handler.

        Returns:
            Human-readable handler name (e.g., "Turtle").
        """
        return self.__class__.__name__.replace("Exporter", "").replace("Handler", "")
