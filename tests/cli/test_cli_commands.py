"""
Tests for the command-line interface.

Every test passes --config with a temporary configuration file so that a
config.json in the project root never leaks into the run.
"""

import json

import pytest

from formats.turtle import TripleSink, declare_vocabulary


def _main(*argv):
    from main import main
    return main(list(argv))


def _write_vocabulary(path):
    with TripleSink.open(path) as sink:
        declare_vocabulary(sink)
    return str(path)


class TestMain:
    """Tests for the entry point."""

    def test_no_command_prints_help(self, capsys):
        from constants import ExitCode
        assert _main() == ExitCode.ERROR
        assert "export" in capsys.readouterr().out

    def test_unknown_command_exits(self):
        with pytest.raises(SystemExit):
            _main("transmogrify")


class TestExportCommand:
    """Tests for the export command."""

    @pytest.mark.integration
    def test_export(self, temp_snapshot_file, temp_config_file, tmp_path, capsys):
        from constants import ExitCode
        from formats.turtle import check_output
        output = tmp_path / "out.ttl"
        code = _main("export", temp_snapshot_file, "-o", str(output),
                     "--config", temp_config_file, "--no-progress")
        assert code == ExitCode.SUCCESS
        assert check_output(output).is_valid
        out = capsys.readouterr().out
        assert "✓ Exported to:" in out
        assert "1 skipped item(s)" in out

    def test_default_output_path(self, temp_snapshot_file, temp_config_file, tmp_path):
        from constants import ExitCode
        code = _main("export", temp_snapshot_file, "--config", temp_config_file, "--no-progress")
        assert code == ExitCode.SUCCESS
        assert (tmp_path / "repository.ttl").exists()

    def test_missing_snapshot(self, temp_config_file, tmp_path):
        from constants import ExitCode
        code = _main("export", str(tmp_path / "missing.json"), "--config", temp_config_file)
        assert code == ExitCode.FILE_NOT_FOUND

    def test_bad_base_iri(self, temp_snapshot_file, temp_config_file):
        from constants import ExitCode
        code = _main("export", temp_snapshot_file, "--config", temp_config_file,
                     "--base-iri", "not-an-iri")
        assert code == ExitCode.CONFIG_ERROR

    def test_missing_config_file(self, temp_snapshot_file, tmp_path):
        from constants import ExitCode
        code = _main("export", temp_snapshot_file, "--config", str(tmp_path / "none.json"))
        assert code == ExitCode.CONFIG_ERROR

    def test_wrong_output_extension(self, temp_snapshot_file, temp_config_file, tmp_path):
        from constants import ExitCode
        code = _main("export", temp_snapshot_file, "-o", str(tmp_path / "out.json"),
                     "--config", temp_config_file)
        assert code == ExitCode.VALIDATION_ERROR

    def test_unparseable_snapshot(self, temp_config_file, tmp_path):
        from constants import ExitCode
        snapshot = tmp_path / "broken.json"
        snapshot.write_text("{not json", encoding="utf-8")
        code = _main("export", str(snapshot), "--config", temp_config_file, "--no-progress")
        assert code == ExitCode.VALIDATION_ERROR

    def test_fatal_mapping_error(self, snapshot_data, temp_config_file, tmp_path):
        from constants import ExitCode
        snapshot_data["schemas"][0]["items"]["Dimensions"] = {"schemaItemType": "StructClass"}
        snapshot = tmp_path / "repository.json"
        snapshot.write_text(json.dumps(snapshot_data), encoding="utf-8")
        code = _main("export", str(snapshot), "--config", temp_config_file, "--no-progress")
        assert code == ExitCode.MAPPING_ERROR

    def test_save_report(self, temp_snapshot_file, temp_config_file, tmp_path):
        from constants import ExitCode
        output = tmp_path / "out.ttl"
        code = _main("export", temp_snapshot_file, "-o", str(output), "--config", temp_config_file,
                     "--no-progress", "--save-report")
        assert code == ExitCode.SUCCESS
        report = json.loads((tmp_path / "out.ttl.export.json").read_text(encoding="utf-8"))
        assert report["success"] is True
        assert report["state"] == "completed"
        assert report["export"]["skipped_items"][0]["name"] == "0x1f"

    def test_build_export_settings(self, sample_config):
        import argparse
        from app.cli.commands import ExportCommand
        args = argparse.Namespace(base_iri="http://other.example.com/", ec_iri=None,
                                  no_progress=False, strict=True)
        settings = ExportCommand.build_export_settings(sample_config, args)
        assert settings["base_iri"] == "http://other.example.com/"
        assert settings["ec_iri"] == "http://data.example.com/ec#"
        assert settings["strict"] is True


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_file(self, temp_config_file, tmp_path, capsys):
        from constants import ExitCode
        path = _write_vocabulary(tmp_path / "ec.ttl")
        assert _main("validate", path, "--config", temp_config_file) == ExitCode.SUCCESS
        assert "✓ Valid Turtle" in capsys.readouterr().out

    def test_invalid_file(self, temp_config_file, tmp_path):
        from constants import ExitCode
        path = tmp_path / "broken.ttl"
        path.write_text("ts:Widget undeclared:p ts:Other .\n", encoding="utf-8")
        assert _main("validate", str(path), "--config", temp_config_file) == ExitCode.VALIDATION_ERROR

    def test_missing_file(self, temp_config_file, tmp_path):
        from constants import ExitCode
        code = _main("validate", str(tmp_path / "missing.ttl"), "--config", temp_config_file)
        assert code == ExitCode.FILE_NOT_FOUND

    def test_save_report(self, temp_config_file, tmp_path):
        path = _write_vocabulary(tmp_path / "ec.ttl")
        _main("validate", path, "--config", temp_config_file, "--save-report")
        report = json.loads((tmp_path / "ec.ttl.validation.json").read_text(encoding="utf-8"))
        assert report["is_valid"] is True
        assert report["class_count"] == 0


class TestVocabularyCommand:
    """Tests for the vocabulary command."""

    def test_to_file(self, temp_config_file, tmp_path):
        from constants import ExitCode
        from formats.turtle import check_output
        output = tmp_path / "ec.ttl"
        assert _main("vocabulary", "-o", str(output), "--config", temp_config_file) == ExitCode.SUCCESS
        assert check_output(output).is_valid

    def test_to_stdout(self, temp_config_file, capsys):
        from constants import ExitCode
        assert _main("vocabulary", "--config", temp_config_file) == ExitCode.SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("@prefix ")
        assert "@prefix ec: <http://www.example.org/ec#> ." in out

    def test_custom_ec_iri(self, temp_config_file, capsys):
        _main("vocabulary", "--config", temp_config_file, "--ec-iri", "http://data.example.com/ec#")
        assert "@prefix ec: <http://data.example.com/ec#> ." in capsys.readouterr().out

    def test_bad_ec_iri(self, temp_config_file):
        from constants import ExitCode
        code = _main("vocabulary", "--config", temp_config_file, "--ec-iri", "http://x.example.com/ec")
        assert code == ExitCode.CONFIG_ERROR


class TestCompareCommand:
    """Tests for the compare command."""

    def test_equivalent(self, temp_config_file, tmp_path, capsys):
        from constants import ExitCode
        first = _write_vocabulary(tmp_path / "a.ttl")
        second = _write_vocabulary(tmp_path / "b.ttl")
        assert _main("compare", first, second, "--config", temp_config_file) == ExitCode.SUCCESS
        assert "EQUIVALENT" in capsys.readouterr().out

    def test_different(self, temp_snapshot_file, temp_config_file, tmp_path, capsys):
        from constants import ExitCode
        vocabulary = _write_vocabulary(tmp_path / "ec.ttl")
        export = tmp_path / "out.ttl"
        _main("export", temp_snapshot_file, "-o", str(export), "--config", temp_config_file, "--no-progress")
        code = _main("compare", vocabulary, str(export), "--config", temp_config_file)
        assert code == ExitCode.ERROR
        assert "NOT equivalent" in capsys.readouterr().out

    def test_missing_file(self, temp_config_file, tmp_path):
        from constants import ExitCode
        first = _write_vocabulary(tmp_path / "a.ttl")
        code = _main("compare", first, str(tmp_path / "missing.ttl"), "--config", temp_config_file)
        assert code == ExitCode.FILE_NOT_FOUND
