"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Integration tests
    pytest -m slow          # Tests that take >1s

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import io
import json
import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

# Import centralized fixtures
from fixtures import (
    SAMPLE_EXPORT_CONFIG,
    MINIMAL_EXPORT_CONFIG,
    sample_snapshot,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Integration tests requiring setup")
    config.addinivalue_line("markers", "slow: Tests that take more than 1 second")


# =============================================================================
# Snapshot Fixtures
# =============================================================================

@pytest.fixture
def snapshot_data():
    """Sample repository snapshot as a JSON-compatible dict."""
    return sample_snapshot()


@pytest.fixture
def temp_snapshot_file(tmp_path, snapshot_data):
    """Write the sample snapshot to a temporary JSON file."""
    snapshot_file = tmp_path / "repository.json"
    snapshot_file.write_text(json.dumps(snapshot_data, indent=2), encoding="utf-8")
    return str(snapshot_file)


@pytest.fixture
def parsed_snapshot(snapshot_data):
    """The sample snapshot parsed into a RepositorySnapshot."""
    from formats.repository import SnapshotParser
    result = SnapshotParser().parse_string(json.dumps(snapshot_data))
    assert result.snapshot is not None
    return result.snapshot


@pytest.fixture
def registry(parsed_snapshot):
    """Schema registry holding every schema of the sample snapshot."""
    from shared.models import SchemaRegistry
    return SchemaRegistry(parsed_snapshot.schemas)


# =============================================================================
# Schema Fixtures
# =============================================================================

@pytest.fixture
def widget_schema():
    """TestSchema (alias ts) with a base-less Widget: string Name, int Count."""
    from shared.models import ClassMeta, PrimitiveType, PropertyMeta, SchemaRef
    widget = ClassMeta(
        schema_name="TestSchema",
        name="Widget",
        properties=[
            PropertyMeta(name="Name", primitive_type=PrimitiveType.STRING),
            PropertyMeta(name="Count", primitive_type=PrimitiveType.INTEGER),
        ],
    )
    return SchemaRef(name="TestSchema", alias="ts", version="01.00.00", items=[widget])


@pytest.fixture
def widget_registry(widget_schema):
    from shared.models import SchemaRegistry
    return SchemaRegistry([widget_schema])


# =============================================================================
# Output Fixtures
# =============================================================================

class StringSink:
    """A TripleSink over an in-memory buffer, with access to the written lines."""

    def __init__(self):
        from formats.turtle import TripleSink
        self.buffer = io.StringIO()
        self.sink = TripleSink(self.buffer)

    @property
    def text(self) -> str:
        return self.buffer.getvalue()

    @property
    def lines(self):
        return self.text.splitlines()


@pytest.fixture
def string_sink():
    """In-memory sink; use .sink to write and .lines to read back."""
    return StringSink()


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample export configuration dictionary."""
    return json.loads(json.dumps(SAMPLE_EXPORT_CONFIG))


@pytest.fixture
def minimal_config():
    """Minimal export configuration dictionary."""
    return json.loads(json.dumps(MINIMAL_EXPORT_CONFIG))


@pytest.fixture
def temp_config_file(tmp_path, minimal_config):
    """Create a temporary configuration file for testing."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(minimal_config, indent=2))
    return str(config_file)


@pytest.fixture
def input_validator():
    """Get InputValidator class for path validation tests."""
    from core.validators import InputValidator
    return InputValidator
