"""
Tests for InputValidator path and IRI validation.
"""

import os

import pytest


class TestFilePaths:
    """Tests for input file validation."""

    def test_valid_snapshot(self, input_validator, temp_snapshot_file):
        path = input_validator.validate_input_snapshot_path(temp_snapshot_file)
        assert path.is_absolute()
        assert path.name == "repository.json"

    def test_path_object_accepted(self, input_validator, tmp_path):
        snapshot = tmp_path / "repository.json"
        snapshot.write_text("{}", encoding="utf-8")
        assert input_validator.validate_input_snapshot_path(snapshot) == snapshot.resolve()

    def test_wrong_extension(self, input_validator, tmp_path):
        path = tmp_path / "repository.xml"
        path.write_text("<x/>", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid file extension"):
            input_validator.validate_input_snapshot_path(str(path))

    def test_missing_file(self, input_validator, tmp_path):
        with pytest.raises(FileNotFoundError):
            input_validator.validate_input_snapshot_path(str(tmp_path / "missing.json"))

    def test_directory_rejected(self, input_validator, tmp_path):
        with pytest.raises(ValueError, match="not a file"):
            input_validator.validate_file_path(str(tmp_path))

    @pytest.mark.parametrize("path", ["../repository.json", "data/../../repository.json", "..\\repository.json"])
    def test_traversal_rejected(self, input_validator, path):
        with pytest.raises(ValueError, match="Path traversal"):
            input_validator.validate_file_path(path, check_exists=False)

    @pytest.mark.parametrize("path", ["", "   "])
    def test_empty_rejected(self, input_validator, path):
        with pytest.raises(ValueError):
            input_validator.validate_file_path(path)

    def test_non_string_rejected(self, input_validator):
        with pytest.raises(TypeError):
            input_validator.validate_file_path(42)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlink_rejected(self, input_validator, tmp_path, temp_snapshot_file):
        link = tmp_path / "link.json"
        try:
            os.symlink(temp_snapshot_file, link)
        except OSError:
            pytest.skip("cannot create symlinks here")
        with pytest.raises(ValueError, match="Symlink"):
            input_validator.validate_input_snapshot_path(str(link))
        # Warning mode accepts the link
        assert input_validator.validate_input_snapshot_path(str(link), reject_symlinks=False).exists()

    @pytest.mark.parametrize("name", ["out.ttl", "out.turtle", "out.n3", "OUT.TTL"])
    def test_ttl_extensions(self, input_validator, tmp_path, name):
        path = tmp_path / name
        path.write_text("", encoding="utf-8")
        assert input_validator.validate_input_ttl_path(str(path)).exists()

    def test_config_must_be_json(self, input_validator, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("export: {}", encoding="utf-8")
        with pytest.raises(ValueError):
            input_validator.validate_config_file_path(str(path))


class TestOutputPaths:
    """Tests for output path validation."""

    def test_new_file_in_missing_directory(self, input_validator, tmp_path):
        path = tmp_path / "new" / "out.ttl"
        assert input_validator.validate_output_file_path(str(path), input_validator.TTL_EXTENSIONS) == path

    def test_directory_rejected(self, input_validator, tmp_path):
        with pytest.raises(ValueError, match="directory"):
            input_validator.validate_output_file_path(str(tmp_path))

    def test_extension_checked(self, input_validator, tmp_path):
        with pytest.raises(ValueError):
            input_validator.validate_output_file_path(str(tmp_path / "out.json"), input_validator.TTL_EXTENSIONS)

    def test_traversal_rejected(self, input_validator):
        with pytest.raises(ValueError):
            input_validator.validate_output_file_path("../out.ttl")


class TestNamespaceIri:
    """Tests for validate_namespace_iri."""

    @pytest.mark.parametrize("iri", [
        "http://www.example.org/",
        "http://www.example.org/ec#",
        "https://data.example.com/repository/",
    ])
    def test_valid(self, input_validator, iri):
        assert input_validator.validate_namespace_iri(iri) == iri

    @pytest.mark.parametrize("iri", [
        "www.example.org/",
        "ftp://www.example.org/",
        "http://www.example.org/ec",
        "http:///path/",
        "http://www.example.org/a b/",
        "http://www.example.org/<x>/",
    ])
    def test_invalid(self, input_validator, iri):
        with pytest.raises(ValueError):
            input_validator.validate_namespace_iri(iri)

    def test_non_string(self, input_validator):
        with pytest.raises(TypeError):
            input_validator.validate_namespace_iri(None)
