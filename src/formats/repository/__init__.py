"""
Repository Snapshot Module

This module reads repository snapshot files and drives export handlers over
their contents.

Key Components:
- snapshot_models: RepositorySnapshot data class
- snapshot_parser: Parse snapshot JSON (schemas in ECSchema-JSON shape plus instances)
- traversal: Invoke handler callbacks in schema-then-instance order

Usage:
    from formats.repository import SnapshotParser, RepositoryTraversal

    result = SnapshotParser().parse_file("repository.json")
    traversal = RepositoryTraversal(result.snapshot)
    traversal.register_handler(handler)
    traversal.export_all()
"""

from .snapshot_models import RepositorySnapshot

from .snapshot_parser import (
    SnapshotParser,
    ParseError,
    ParseResult,
)

from .traversal import (
    RepositoryTraversal,
    order_schemas,
    schema_dependencies,
)

__all__ = [
    # Models
    'RepositorySnapshot',
    # Parsing
    'SnapshotParser',
    'ParseError',
    'ParseResult',
    # Traversal
    'RepositoryTraversal',
    'order_schemas',
    'schema_dependencies',
]
