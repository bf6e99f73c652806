"""
Primitive type to rdfs:range mapping.

    binary    -> xsd:base64Binary   ("BeGuid" extended type -> ec:GuidString)
    boolean   -> xsd:boolean
    dateTime  -> xsd:dateTime
    double    -> xsd:double
    IGeometry -> ec:IGeometry
    int       -> xsd:integer
    long      -> xsd:long
    point2d   -> ec:Point2d
    point3d   -> ec:Point3d
    string    -> xsd:string         ("Json" extended type -> ec:JsonString)

Extended type names are matched case-insensitively; unrecognized ones are
ignored.
"""

import logging
from typing import Dict, Optional

from shared.models import PrimitiveType, PropertyMeta

from .errors import UnsupportedPrimitiveType
from .vocabulary import Ec, Xsd

logger = logging.getLogger(__name__)

PRIMITIVE_TYPE_TO_RANGE: Dict[PrimitiveType, str] = {
    PrimitiveType.BINARY: Xsd.BASE64_BINARY.value,
    PrimitiveType.BOOLEAN: Xsd.BOOLEAN.value,
    PrimitiveType.DATETIME: Xsd.DATE_TIME.value,
    PrimitiveType.DOUBLE: Xsd.DOUBLE.value,
    PrimitiveType.GEOMETRY: Ec.IGEOMETRY.value,
    PrimitiveType.INTEGER: Xsd.INTEGER.value,
    PrimitiveType.LONG: Xsd.LONG.value,
    PrimitiveType.POINT2D: Ec.POINT2D.value,
    PrimitiveType.POINT3D: Ec.POINT3D.value,
    PrimitiveType.STRING: Xsd.STRING.value,
}

# (primitive type, lower-cased extended type name) -> range
EXTENDED_TYPE_TO_RANGE: Dict[tuple, str] = {
    (PrimitiveType.BINARY, "beguid"): Ec.GUID_STRING.value,
    (PrimitiveType.STRING, "json"): Ec.JSON_STRING.value,
}


class TypeMapper:
    """Maps primitive properties to their rdfs:range term."""

    @staticmethod
    def get_range(primitive_type: Optional[PrimitiveType], extended_type: Optional[str] = None, property_name: str = "") -> str:
        """
        Get the range for a primitive type and optional extended type name.

        Raises:
            UnsupportedPrimitiveType: If the primitive type is not mapped.
        """
        if primitive_type not in PRIMITIVE_TYPE_TO_RANGE:
            raise UnsupportedPrimitiveType(property_name, primitive_type)
        if extended_type:
            special = EXTENDED_TYPE_TO_RANGE.get((primitive_type, extended_type.lower()))
            if special:
                return special
        return PRIMITIVE_TYPE_TO_RANGE[primitive_type]

    @classmethod
    def get_property_range(cls, prop: PropertyMeta, class_rdf_name: str = "") -> str:
        """Get the range for a primitive property."""
        qualified = f"{class_rdf_name}.{prop.name}" if class_rdf_name else prop.name
        return cls.get_range(prop.primitive_type, prop.extended_type_name, qualified)
