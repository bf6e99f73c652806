"""
Tests for the export pipeline.
"""

import json

import pytest


@pytest.fixture
def pipeline():
    from core.config import ExportConfig
    from core.services.pipeline import ExportPipeline
    return ExportPipeline(ExportConfig(show_progress=False))


class TestExportPipeline:
    """Tests for ExportPipeline.execute."""

    @pytest.mark.integration
    def test_successful_export(self, pipeline, temp_snapshot_file, tmp_path):
        from core.services.pipeline import PipelineState
        from formats.turtle import check_output
        output = tmp_path / "out" / "repository.ttl"
        result = pipeline.execute(temp_snapshot_file, output)

        assert result.success, result.error
        assert result.stats.state == PipelineState.COMPLETED
        assert result.output_path == output
        assert result.stats.schemas == 2
        assert result.stats.classes == 17
        assert result.stats.classes_excluded == 4
        assert result.stats.instances == 8
        assert result.stats.skipped_items == 1
        assert result.stats.prefixes_written == 11
        assert result.stats.errors == 0

        report = check_output(output)
        assert report.is_valid, report.error
        assert report.instance_count == 8

    def test_rerun_truncates_output(self, pipeline, temp_snapshot_file, tmp_path):
        output = tmp_path / "repository.ttl"
        pipeline.execute(temp_snapshot_file, output)
        first = output.read_text(encoding="utf-8")
        pipeline.execute(temp_snapshot_file, output)
        assert output.read_text(encoding="utf-8") == first

    def test_skipped_item_recorded(self, pipeline, temp_snapshot_file, tmp_path):
        result = pipeline.execute(temp_snapshot_file, tmp_path / "out.ttl")
        skipped = result.export_result.skipped_items
        assert [(s.item_type, s.name) for s in skipped] == [("instance", "0x1f")]

    def test_datetime_value_written_as_typed_literal(self, pipeline, temp_snapshot_file, tmp_path):
        from formats.turtle import check_output
        output = tmp_path / "out.ttl"
        pipeline.execute(temp_snapshot_file, output)
        lines = output.read_text(encoding="utf-8").splitlines()
        assert 'modelId:m0x10 bis:Model-LastMod "2024-01-02T03:04:05.000Z"^^xsd:dateTime .' in lines
        assert check_output(output).is_valid

    def test_unencodable_text_skipped(self, pipeline, snapshot_data, tmp_path):
        from formats.turtle import check_output
        widget = next(e for e in snapshot_data["elements"] if e["id"] == "0x1d")
        widget["userLabel"] = "bad \ud800 value"
        snapshot = tmp_path / "repository.json"
        snapshot.write_text(json.dumps(snapshot_data), encoding="utf-8")
        output = tmp_path / "out.ttl"
        result = pipeline.execute(snapshot, output)

        assert result.success, result.error
        skipped = [(s.item_type, s.name) for s in result.export_result.skipped_items]
        assert ("property value", "bis:Element.UserLabel") in skipped
        report = check_output(output)
        assert report.is_valid, report.error
        assert report.instance_count == 8
        assert "elementId:e0x1d bis:Element-UserLabel" not in output.read_text(encoding="utf-8")

    def test_parse_failure(self, pipeline, tmp_path):
        from core.services.pipeline import PipelineState
        snapshot = tmp_path / "broken.json"
        snapshot.write_text("{not json", encoding="utf-8")
        output = tmp_path / "out.ttl"
        result = pipeline.execute(snapshot, output)

        assert result.success is False
        assert result.stats.state == PipelineState.FAILED
        assert result.export_result is None
        assert "Invalid JSON" in result.error
        assert not output.exists()

    def test_cancelled_before_start(self, pipeline, temp_snapshot_file, tmp_path):
        from core.services import PipelineCancelledException, SimpleCancellationToken
        from core.services.pipeline import PipelineState
        from formats.turtle import check_output
        token = SimpleCancellationToken()
        token.cancel()
        output = tmp_path / "out.ttl"
        result = pipeline.execute(temp_snapshot_file, output, cancellation_token=token)

        assert result.success is False
        assert result.stats.state == PipelineState.CANCELLED
        assert isinstance(result.exception, PipelineCancelledException)
        content = output.read_text(encoding="utf-8")
        assert "@prefix ec:" in content
        assert "@prefix bis:" not in content
        report = check_output(output)
        assert report.is_valid
        assert report.class_count == 0

    def test_fatal_mapping_error_keeps_partial_output(self, pipeline, tmp_path, snapshot_data):
        from core.services.pipeline import PipelineState
        from formats.turtle import UnsupportedClassKind, check_output
        snapshot_data["schemas"][0]["items"]["Dimensions"] = {"schemaItemType": "StructClass"}
        snapshot = tmp_path / "repository.json"
        snapshot.write_text(json.dumps(snapshot_data), encoding="utf-8")
        output = tmp_path / "out.ttl"
        result = pipeline.execute(snapshot, output)

        assert result.success is False
        assert result.stats.state == PipelineState.FAILED
        assert isinstance(result.exception, UnsupportedClassKind)
        assert "Dimensions" in result.error
        # BisCore was mapped before the failure
        content = output.read_text(encoding="utf-8")
        assert "@prefix bis:" in content
        assert check_output(output).is_valid

    def test_progress_callback(self, pipeline, temp_snapshot_file, tmp_path):
        states = []
        pipeline.execute(
            temp_snapshot_file,
            tmp_path / "out.ttl",
            progress_callback=lambda stats: states.append(stats.state.value),
        )
        assert states == ["parsing", "exporting_schemas", "exporting_instances"]

    def test_summary(self, pipeline, temp_snapshot_file, tmp_path):
        result = pipeline.execute(temp_snapshot_file, tmp_path / "out.ttl")
        summary = result.stats.get_summary()
        assert "State: completed" in summary
        assert "4 navigation relationships excluded" in summary


class TestExportSnapshot:
    """Tests for ExportPipeline.export_snapshot."""

    def test_export_parsed_snapshot(self, pipeline, parsed_snapshot, tmp_path):
        from core.services.pipeline import PipelineState
        output = tmp_path / "out.ttl"
        result = pipeline.export_snapshot(parsed_snapshot, output)
        assert result.success
        assert result.stats.state == PipelineState.COMPLETED
        assert result.export_result.instances_mapped == {
            "codeSpec": 1, "model": 1, "element": 2, "aspect": 3, "relationship": 1,
        }
        assert result.export_result.output_path == str(output)

    def test_export_summary_lists_skipped(self, pipeline, parsed_snapshot, tmp_path):
        result = pipeline.export_snapshot(parsed_snapshot, tmp_path / "out.ttl")
        assert result.export_result.has_skipped_items
        summary = result.export_result.get_summary()
        assert "  Skipped items: 1" in summary
        assert "    - instance '0x1f':" in summary

    def test_export_summary_without_skipped(self, pipeline, snapshot_data, tmp_path):
        from formats.repository import SnapshotParser
        snapshot_data["elements"] = [e for e in snapshot_data["elements"] if e["id"] != "0x1f"]
        snapshot = SnapshotParser().parse_string(json.dumps(snapshot_data)).snapshot
        result = pipeline.export_snapshot(snapshot, tmp_path / "out.ttl")
        assert not result.export_result.has_skipped_items
        assert "Skipped items" not in result.export_result.get_summary()

    def test_custom_namespaces(self, parsed_snapshot, tmp_path):
        from core.config import ExportConfig
        from core.services.pipeline import ExportPipeline
        config = ExportConfig(
            base_iri="http://data.example.com/",
            ec_iri="http://data.example.com/ec#",
            show_progress=False,
        )
        output = tmp_path / "out.ttl"
        ExportPipeline(config).export_snapshot(parsed_snapshot, output)
        lines = output.read_text(encoding="utf-8").splitlines()
        assert "@prefix ec: <http://data.example.com/ec#> ." in lines
        assert "@prefix bis: <http://data.example.com/schemas/BisCore.01.00.13#> ." in lines
