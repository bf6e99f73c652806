"""
Tests for the primitive type to rdfs:range mapping.
"""

import pytest


class TestTypeMapper:
    """Tests for TypeMapper.get_range."""

    @pytest.mark.parametrize("primitive,expected", [
        ("BINARY", "xsd:base64Binary"),
        ("BOOLEAN", "xsd:boolean"),
        ("DATETIME", "xsd:dateTime"),
        ("DOUBLE", "xsd:double"),
        ("GEOMETRY", "ec:IGeometry"),
        ("INTEGER", "xsd:integer"),
        ("LONG", "xsd:long"),
        ("POINT2D", "ec:Point2d"),
        ("POINT3D", "ec:Point3d"),
        ("STRING", "xsd:string"),
    ])
    def test_primitive_ranges(self, primitive, expected):
        from formats.turtle import TypeMapper
        from shared.models import PrimitiveType
        assert TypeMapper.get_range(PrimitiveType[primitive]) == expected

    @pytest.mark.parametrize("extended", ["BeGuid", "beguid", "BEGUID"])
    def test_guid_extended_type(self, extended):
        from formats.turtle import TypeMapper
        from shared.models import PrimitiveType
        assert TypeMapper.get_range(PrimitiveType.BINARY, extended) == "ec:GuidString"

    @pytest.mark.parametrize("extended", ["Json", "json"])
    def test_json_extended_type(self, extended):
        from formats.turtle import TypeMapper
        from shared.models import PrimitiveType
        assert TypeMapper.get_range(PrimitiveType.STRING, extended) == "ec:JsonString"

    def test_extended_type_only_applies_to_its_primitive(self):
        from formats.turtle import TypeMapper
        from shared.models import PrimitiveType
        assert TypeMapper.get_range(PrimitiveType.BINARY, "Json") == "xsd:base64Binary"
        assert TypeMapper.get_range(PrimitiveType.STRING, "BeGuid") == "xsd:string"

    def test_unknown_extended_type_ignored(self):
        from formats.turtle import TypeMapper
        from shared.models import PrimitiveType
        assert TypeMapper.get_range(PrimitiveType.LONG, "Id") == "xsd:long"
        assert TypeMapper.get_range(PrimitiveType.STRING, "UrlAddress") == "xsd:string"

    @pytest.mark.parametrize("primitive", [None, "UNINITIALIZED"])
    def test_unmapped_type_raises(self, primitive):
        from formats.turtle import TypeMapper, UnsupportedPrimitiveType
        from shared.models import PrimitiveType
        primitive_type = PrimitiveType[primitive] if primitive else None
        with pytest.raises(UnsupportedPrimitiveType) as exc_info:
            TypeMapper.get_range(primitive_type, property_name="ts:Widget.Odd")
        assert exc_info.value.recoverable is False
        assert "ts:Widget.Odd" in str(exc_info.value)


class TestPropertyRange:
    """Tests for TypeMapper.get_property_range."""

    def test_property_with_extended_type(self):
        from formats.turtle import TypeMapper
        from shared.models import PrimitiveType, PropertyMeta
        prop = PropertyMeta(name="FederationGuid", primitive_type=PrimitiveType.BINARY,
                            extended_type_name="BeGuid")
        assert TypeMapper.get_property_range(prop, "bis:Element") == "ec:GuidString"

    def test_error_names_class_and_property(self):
        from formats.turtle import TypeMapper, UnsupportedPrimitiveType
        from shared.models import PrimitiveType, PropertyMeta
        prop = PropertyMeta(name="Odd", primitive_type=PrimitiveType.UNINITIALIZED)
        with pytest.raises(UnsupportedPrimitiveType) as exc_info:
            TypeMapper.get_property_range(prop, "ts:Widget")
        assert exc_info.value.property_name == "ts:Widget.Odd"
