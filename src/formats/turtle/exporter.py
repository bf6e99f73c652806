"""
Turtle export handler.

TurtleExporter receives the repository traversal's callbacks and writes
one Turtle file:

    1. the upper vocabulary (prefixes, ec hierarchy, labels)
    2. every schema (its prefix, classes, enumerations, properties)
    3. the instance prefixes of the repository
    4. code specs, models, elements with their aspects, relationships

Usage:
    with TurtleExporter.open("out.ttl") as exporter:
        exporter.declare_vocabulary()
        traversal.register_handler(exporter)
        traversal.export_schemas()
        exporter.write_instance_prefixes(traversal.repository_id)
        traversal.export_instances()
    print(exporter.result.get_summary())
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union
from urllib.parse import quote

from constants import NamespaceConfig
from shared.models import (
    BaseExportHandler,
    CodeSpec,
    ExportResult,
    Instance,
    SchemaRef,
    SchemaRegistry,
)

from .instance_mapper import InstanceMapper
from .names import InstancePrefix, RdfNameFormatter
from .schema_mapper import SchemaMapper
from .triple_sink import TripleSink
from .vocabulary import declare_vocabulary

logger = logging.getLogger(__name__)

# Instance namespaces in declaration order
INSTANCE_PREFIX_ORDER: List[InstancePrefix] = [
    InstancePrefix.CODE_SPEC,
    InstancePrefix.ASPECT,
    InstancePrefix.ELEMENT,
    InstancePrefix.MODEL,
    InstancePrefix.RELATIONSHIP,
]


def instance_namespace_root(repository_id: str, base_iri: str = NamespaceConfig.BASE_IRI) -> str:
    """
    IRI under which the instance namespaces of a repository live.

    The repository id is percent-encoded as one path segment.
    """
    if not repository_id:
        raise ValueError("Repository id must not be empty")
    return base_iri + NamespaceConfig.REPOSITORY_PATH.format(repository_id=quote(repository_id, safe=""))


class TurtleExporter(BaseExportHandler):
    """
    Writes schemas and instances received from the traversal as Turtle.

    The exporter owns no traversal state: callbacks may arrive in any order
    the traversal chooses, but prefixes must be written before the names
    using them, so the vocabulary is declared first and the instance
    prefixes between schemas and instances.

    Attributes:
        sink: Output writer.
        registry: Schemas seen so far (and any preloaded ones).
        result: Counts and skipped items of this run.
    """

    def __init__(
        self,
        sink: TripleSink,
        registry: Optional[SchemaRegistry] = None,
        base_iri: str = NamespaceConfig.BASE_IRI,
        ec_iri: str = NamespaceConfig.EC_IRI,
        element_class: str = NamespaceConfig.ELEMENT_CLASS,
        code_spec_class: str = NamespaceConfig.CODE_SPEC_CLASS,
        strict: bool = False,
    ) -> None:
        self.sink = sink
        self.registry = registry if registry is not None else SchemaRegistry()
        self.base_iri = base_iri
        self.ec_iri = ec_iri
        self.result = ExportResult(output_path=sink.name if sink.name != "<stream>" else None)

        formatter = RdfNameFormatter(self.registry)
        self.schema_mapper = SchemaMapper(sink, self.registry, formatter, self.result, base_iri)
        self.instance_mapper = InstanceMapper(
            sink,
            self.registry,
            formatter,
            self.result,
            element_class=element_class,
            code_spec_class=code_spec_class,
            strict=strict,
        )

    @classmethod
    def open(cls, output_path: Union[str, Path], **kwargs: Any) -> "TurtleExporter":
        """
        Create an exporter writing to a new (or truncated) file.

        Raises:
            IOFailure: If the file cannot be created.
        """
        return cls(TripleSink.open(output_path), **kwargs)

    def declare_vocabulary(self) -> None:
        logger.debug("Writing upper vocabulary")
        declare_vocabulary(self.sink, self.ec_iri)
        self._sync_counts()

    def write_instance_prefixes(self, repository_id: str) -> None:
        """Declare the instance namespaces of one repository."""
        root = instance_namespace_root(repository_id, self.base_iri)
        for prefix in INSTANCE_PREFIX_ORDER:
            self.sink.write_prefix(prefix.prefix, f"{root}{prefix.path}#")
        self._sync_counts()

    # ------------------------------------------------------------------ #
    # Traversal callbacks
    # ------------------------------------------------------------------ #

    def on_export_schema(self, schema: SchemaRef) -> None:
        self.schema_mapper.map_schema(schema)
        self._sync_counts()

    def on_export_code_spec(self, code_spec: CodeSpec) -> None:
        self.instance_mapper.map_code_spec(code_spec)
        self._sync_counts()

    def on_export_model(self, model: Instance) -> None:
        self.instance_mapper.map_model(model)
        self._sync_counts()

    def on_export_element(self, element: Instance) -> None:
        self.instance_mapper.map_element(element)
        self._sync_counts()

    def on_export_element_unique_aspect(self, aspect: Instance) -> None:
        self.instance_mapper.map_aspect(aspect)
        self._sync_counts()

    def on_export_element_multi_aspects(self, aspects: List[Instance]) -> None:
        self.instance_mapper.map_aspects(aspects)
        self._sync_counts()

    def on_export_relationship(self, relationship: Instance) -> None:
        self.instance_mapper.map_relationship(relationship)
        self._sync_counts()

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def _sync_counts(self) -> None:
        self.result.triples_written = self.sink.triples_written
        self.result.prefixes_written = self.sink.prefixes_written

    def close(self) -> None:
        self._sync_counts()
        self.sink.close()

    def __enter__(self) -> "TurtleExporter":
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Any) -> None:
        self.close()
