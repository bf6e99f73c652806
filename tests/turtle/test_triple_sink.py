"""
Tests for the append-only Turtle writer and literal quoting.
"""

import json

import pytest


class TestQuoting:
    """Tests for quote_literal and quote_json."""

    def test_quote_plain_string(self):
        from formats.turtle import quote_literal
        assert quote_literal("Acme") == '"Acme"'

    def test_quote_escapes_quotes_and_newlines(self):
        from formats.turtle import quote_literal
        assert quote_literal('Main "widget"') == '"Main \\"widget\\""'
        assert quote_literal("a\nb") == '"a\\nb"'

    def test_quote_non_string_uses_str(self):
        from formats.turtle import quote_literal
        assert quote_literal(42) == '"42"'

    def test_quote_keeps_non_ascii(self):
        from formats.turtle import quote_literal
        assert quote_literal("Größe") == '"Größe"'

    def test_quote_json_decodes_twice(self):
        """Decoding the literal yields JSON text that decodes to the structure."""
        from formats.turtle import quote_json
        structure = {"x": 1.5, "y": 2.0, "z": 0.0}
        quoted = quote_json(structure)
        assert quoted == '"{\\"x\\":1.5,\\"y\\":2.0,\\"z\\":0.0}"'
        assert json.loads(json.loads(quoted)) == structure


class TestTripleSink:
    """Tests for TripleSink line output."""

    def test_write_triple_line(self, string_sink):
        string_sink.sink.write_triple("ts:Widget", "rdfs:subClassOf", "ec:EntityClass")
        assert string_sink.text == "ts:Widget rdfs:subClassOf ec:EntityClass .\n"
        assert string_sink.sink.triples_written == 1
        assert string_sink.sink.prefixes_written == 0

    def test_write_prefix_line(self, string_sink):
        string_sink.sink.write_prefix("ec", "http://www.example.org/ec#")
        assert string_sink.text == "@prefix ec: <http://www.example.org/ec#> .\n"
        assert string_sink.sink.prefixes_written == 1
        assert string_sink.sink.triples_written == 0

    def test_enum_terms_written_by_value(self, string_sink):
        from formats.turtle import Ec, Rdfs
        string_sink.sink.write_triple("ts:Widget", Rdfs.SUB_CLASS_OF, Ec.ENTITY_CLASS)
        assert string_sink.lines == ["ts:Widget rdfs:subClassOf ec:EntityClass ."]

    def test_lines_appended_in_call_order(self, string_sink):
        sink = string_sink.sink
        sink.write_prefix("ts", "http://www.example.org/schemas/TestSchema.01.00.00#")
        sink.write_triple("ts:A", "rdfs:label", '"A"')
        sink.write_triple("ts:B", "rdfs:label", '"B"')
        assert string_sink.lines == [
            "@prefix ts: <http://www.example.org/schemas/TestSchema.01.00.00#> .",
            'ts:A rdfs:label "A" .',
            'ts:B rdfs:label "B" .',
        ]

    def test_close_does_not_close_borrowed_stream(self, string_sink):
        string_sink.sink.close()
        assert not string_sink.buffer.closed


class TestTripleSinkFiles:
    """Tests for TripleSink.open and file lifecycle."""

    def test_open_creates_parent_directories(self, tmp_path):
        from formats.turtle import TripleSink
        path = tmp_path / "nested" / "out" / "export.ttl"
        with TripleSink.open(path) as sink:
            sink.write_triple("ec:Class", "rdfs:subClassOf", "rdfs:Class")
        assert path.read_text(encoding="utf-8") == "ec:Class rdfs:subClassOf rdfs:Class .\n"
        assert sink.name == str(path)

    def test_open_truncates_existing_file(self, tmp_path):
        from formats.turtle import TripleSink
        path = tmp_path / "export.ttl"
        path.write_text("old content\n", encoding="utf-8")
        with TripleSink.open(path) as sink:
            sink.write_prefix("ec", "http://www.example.org/ec#")
        assert path.read_text(encoding="utf-8") == "@prefix ec: <http://www.example.org/ec#> .\n"

    def test_open_directory_raises_io_failure(self, tmp_path):
        from formats.turtle import IOFailure, TripleSink
        with pytest.raises(IOFailure) as exc_info:
            TripleSink.open(tmp_path)
        assert exc_info.value.path == str(tmp_path)
        assert exc_info.value.cause is not None

    def test_write_after_close_raises_io_failure(self, tmp_path):
        from formats.turtle import IOFailure, TripleSink
        sink = TripleSink.open(tmp_path / "export.ttl")
        sink.close()
        with pytest.raises(IOFailure):
            sink.write_triple("ec:Class", "rdfs:subClassOf", "rdfs:Class")
        assert sink.triples_written == 0

    def test_each_line_is_flushed(self, tmp_path):
        """Content is on disk before the sink is closed."""
        from formats.turtle import TripleSink
        path = tmp_path / "export.ttl"
        sink = TripleSink.open(path)
        try:
            sink.write_triple("ec:Class", "rdfs:subClassOf", "rdfs:Class")
            assert path.read_text(encoding="utf-8") == "ec:Class rdfs:subClassOf rdfs:Class .\n"
        finally:
            sink.close()

    def test_io_failure_is_not_recoverable(self):
        from formats.turtle import IOFailure
        assert IOFailure("out.ttl").recoverable is False
