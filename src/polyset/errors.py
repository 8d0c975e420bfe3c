"""
Exceptions raised by polyset.

Error code ranges:
- E1xx: polygon validation errors
- E2xx: batch / operation selection errors
- E3xx: input format errors
"""

from typing import Optional


class PolysetError(Exception):
    """Base exception for polyset errors."""

    code = "E000"


class ValidationError(PolysetError):
    """A polygon failed one of the structural validation rules (E1xx).

    ``index`` is the position of the offending polygon in its batch, when
    known, and ``rule`` the human-readable rule that failed.
    """

    code = "E100"
    rule = "invalid polygon"

    def __init__(self, index: Optional[int] = None, detail: Optional[str] = None):
        self.index = index
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        where = "polygon" if self.index is None else f"polygon {self.index}"
        message = f"[{self.code}] {where}: {self.rule}"
        if self.detail:
            message += f" ({self.detail})"
        return message


class TooFewVertices(ValidationError):
    code = "E101"
    rule = "polygon must have at least three vertices"


class InvalidCoordinate(ValidationError):
    code = "E102"
    rule = "polygon has an infinite or NaN coordinate"


class DegenerateLeadingTriplet(ValidationError):
    code = "E103"
    rule = "first three vertices of the polygon are collinear"


class NotSimple(ValidationError):
    code = "E104"
    rule = "polygon is not simple (self-intersecting)"


class InsufficientInputs(PolysetError):
    """Fewer than two non-empty polygons were supplied (E201)."""

    code = "E201"

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"[{self.code}] at least two non-empty polygons are required "
            f"for performing an operation, got {count}")


class UnsupportedOperation(PolysetError):
    """The operation selector is not union, intersection or difference (E202)."""

    code = "E202"

    def __init__(self, selector):
        self.selector = selector
        super().__init__(f"[{self.code}] unsupported operation: {selector!r}")


class PolygonFormatError(PolysetError):
    """Polygon input could not be parsed (E301)."""

    code = "E301"

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(f"[{self.code}] {message}")


__all__ = [
    "PolysetError",
    "ValidationError",
    "TooFewVertices",
    "InvalidCoordinate",
    "DegenerateLeadingTriplet",
    "NotSimple",
    "InsufficientInputs",
    "UnsupportedOperation",
    "PolygonFormatError",
]
