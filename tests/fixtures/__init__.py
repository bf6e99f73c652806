"""
Centralized test fixtures for the ECSchema Turtle Exporter test suite.

This package provides reusable fixtures for testing, including:
- Repository snapshot content (schemas and instances)
- Configuration fixtures

Usage:
    from fixtures import (
        SAMPLE_SNAPSHOT,
        BISCORE_SCHEMA,
        SAMPLE_EXPORT_CONFIG,
    )

Or use the pytest fixtures in conftest.py which import from here.
"""

from .snapshot_fixtures import (
    BISCORE_SCHEMA,
    TEST_SCHEMA,
    SAMPLE_REPOSITORY_ID,
    SAMPLE_SNAPSHOT,
    sample_snapshot,
)

from .config_fixtures import (
    SAMPLE_EXPORT_CONFIG,
    MINIMAL_EXPORT_CONFIG,
    RELATIVE_BASE_IRI_CONFIG,
    UNTERMINATED_EC_IRI_CONFIG,
    EMPTY_ELEMENT_CLASS_CONFIG,
)

__all__ = [
    # Snapshot fixtures
    "BISCORE_SCHEMA",
    "TEST_SCHEMA",
    "SAMPLE_REPOSITORY_ID",
    "SAMPLE_SNAPSHOT",
    "sample_snapshot",

    # Config fixtures
    "SAMPLE_EXPORT_CONFIG",
    "MINIMAL_EXPORT_CONFIG",
    "RELATIVE_BASE_IRI_CONFIG",
    "UNTERMINATED_EC_IRI_CONFIG",
    "EMPTY_ELEMENT_CLASS_CONFIG",
]
