"""
Tests for the rdflib-based output checks.
"""

import pytest


VALID_TTL = """\
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .
@prefix ec: <http://www.example.org/ec#> .
@prefix ts: <http://www.example.org/schemas/TestSchema.01.00.00#> .
@prefix elementId: <http://www.example.org/repository/r1/element#> .
ec:EntityClass rdfs:subClassOf ec:Class .
ts:Widget rdfs:subClassOf ec:EntityClass .
ts:Widget-Name rdfs:subClassOf ec:PrimitiveProperty .
ts:Widget-Name rdfs:domain ts:Widget .
elementId:e0x1d rdf:type ts:Widget .
elementId:e0x1d ts:Widget-Name "Acme" .
"""

EXTRA_INSTANCE_TTL = VALID_TTL + "elementId:e0x1e rdf:type ts:Widget .\n"

INVALID_TTL = """\
@prefix ts: <http://www.example.org/schemas/TestSchema.01.00.00#> .
ts:Widget undeclared:predicate ts:Other .
"""


class TestCheckTurtle:
    """Tests for check_turtle and check_output."""

    def test_counts(self):
        from formats.turtle import check_turtle
        report = check_turtle(VALID_TTL)
        assert report.is_valid
        assert report.error is None
        assert report.triple_count == 6
        assert report.class_count == 1
        assert report.property_count == 1
        assert report.instance_count == 1

    def test_invalid_content(self):
        from formats.turtle import check_turtle
        report = check_turtle(INVALID_TTL, source="broken.ttl")
        assert report.is_valid is False
        assert report.error
        assert "invalid Turtle" in report.get_summary()

    def test_summary_and_dict(self):
        from formats.turtle import check_turtle
        report = check_turtle(VALID_TTL, source="good.ttl")
        assert "good.ttl: valid Turtle" in report.get_summary()
        data = report.to_dict()
        assert data["source"] == "good.ttl"
        assert data["triple_count"] == 6

    def test_check_output_reads_file(self, tmp_path):
        from formats.turtle import check_output
        path = tmp_path / "good.ttl"
        path.write_text(VALID_TTL, encoding="utf-8")
        report = check_output(path)
        assert report.is_valid
        assert report.source == str(path)

    def test_check_output_missing_file(self, tmp_path):
        from formats.turtle import check_output
        with pytest.raises(FileNotFoundError):
            check_output(tmp_path / "missing.ttl")


class TestCompareOutputs:
    """Tests for compare_outputs."""

    def test_same_content_equivalent(self):
        from formats.turtle import compare_outputs
        comparison = compare_outputs(VALID_TTL, VALID_TTL)
        assert comparison["is_equivalent"] is True
        assert comparison["classes"]["match"] is True
        assert comparison["triple_count_first"] == comparison["triple_count_second"] == 6

    def test_line_order_ignored(self):
        from formats.turtle import compare_outputs
        header, body = VALID_TTL.split("ec:EntityClass rdfs:subClassOf ec:Class .\n")
        reordered = header + "".join(reversed(body.splitlines(keepends=True))) + \
            "ec:EntityClass rdfs:subClassOf ec:Class .\n"
        assert compare_outputs(VALID_TTL, reordered)["is_equivalent"] is True

    def test_extra_instance_detected(self):
        from formats.turtle import compare_outputs
        comparison = compare_outputs(VALID_TTL, EXTRA_INSTANCE_TTL)
        assert comparison["is_equivalent"] is False
        assert comparison["instances"]["only_in_second"] == [
            "http://www.example.org/repository/r1/element#e0x1e"
        ]
        assert comparison["instances"]["only_in_first"] == []
        assert comparison["classes"]["match"] is True

    def test_invalid_content_raises(self):
        from formats.turtle import compare_outputs
        with pytest.raises(Exception):
            compare_outputs(VALID_TTL, INVALID_TTL)
