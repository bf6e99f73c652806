"""
Repository instance types.

Instances are supplied by the repository traversal and are never mutated by
the exporter. Each instance carries its class full name and its property
values by name; a missing key is how an absent value is represented.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class InstanceKind(str, Enum):
    """Kinds of instance the traversal yields."""
    ELEMENT = "element"
    MODEL = "model"
    RELATIONSHIP = "relationship"
    ASPECT = "aspect"
    CODE_SPEC = "codeSpec"


@dataclass
class Code:
    """
    The human-meaningful name of an element.

    An empty value means the element has no code.
    """
    spec: str
    scope: str
    value: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.value


def _json_property_name(name: str) -> str:
    """Lower-camel-case form used for property keys in repository JSON."""
    return name[0].lower() + name[1:] if name else name


@dataclass
class Instance:
    """
    One runtime record of a class.

    Attributes:
        id: Repository identifier ("0x..." hexadecimal string).
        class_full_name: Full name of the instance's most-derived class.
        kind: Which kind of instance this is.
        properties: Property values keyed by property name.
        code: Element code (elements only).
        model: Owning model id (elements only).
        parent: Parent element id (elements only, optional).
        element: Owning element id (aspects only).
        source_id: Source element id (relationships only).
        target_id: Target element id (relationships only).
    """
    id: str
    class_full_name: str
    kind: InstanceKind = InstanceKind.ELEMENT
    properties: Dict[str, Any] = field(default_factory=dict)
    code: Optional[Code] = None
    model: Optional[str] = None
    parent: Optional[str] = None
    element: Optional[str] = None
    source_id: Optional[str] = None
    target_id: Optional[str] = None

    def get_property_value(self, name: str) -> Any:
        """
        Look up a property value by name.

        Accepts both the declared name ("Name") and its JSON form ("name").
        Returns None when the instance has no value for the property.
        """
        if name in self.properties:
            return self.properties[name]
        return self.properties.get(_json_property_name(name))


@dataclass
class CodeSpec:
    """A named code uniqueness rule."""
    id: str
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)
