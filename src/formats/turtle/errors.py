"""
Turtle export errors.

Fatal errors (UnsupportedClassKind, UnsupportedPrimitiveType, IOFailure)
stop the run: the vocabulary would be inconsistent, or the output cannot be
written. Recoverable errors (UnresolvedReference, InvalidPropertyValue)
are isolated to the single triple that could not be formatted.
"""

from typing import Optional


class TurtleExportError(Exception):
    """Base class for all export errors."""

    recoverable = False


class UnsupportedClassKind(TurtleExportError):
    """A class without a base class has a kind outside the mapped set."""

    def __init__(self, class_name: str, kind: object) -> None:
        self.class_name = class_name
        self.kind = kind
        super().__init__(f"Unsupported class kind '{kind}' for class '{class_name}'")


class UnsupportedPrimitiveType(TurtleExportError):
    """A primitive property has a type outside the mapped set."""

    def __init__(self, property_name: str, primitive_type: object) -> None:
        self.property_name = property_name
        self.primitive_type = primitive_type
        super().__init__(f"Unsupported primitive type '{primitive_type}' for property '{property_name}'")


class UnresolvedReference(TurtleExportError):
    """A class, relationship, constraint or identifier reference could not be resolved."""

    recoverable = True

    def __init__(self, reference: str, context: Optional[str] = None) -> None:
        self.reference = reference
        self.context = context
        message = f"Unresolved reference '{reference}'"
        if context:
            message += f" ({context})"
        super().__init__(message)


class InvalidPropertyValue(TurtleExportError):
    """An instance property value cannot be written as a Turtle term."""

    recoverable = True

    def __init__(self, property_name: str, reason: str) -> None:
        self.property_name = property_name
        self.reason = reason
        super().__init__(f"Invalid value for property '{property_name}': {reason}")


class IOFailure(TurtleExportError):
    """The output artifact could not be opened or appended to."""

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Cannot write Turtle output '{path}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
