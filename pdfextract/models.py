"""
Core data model for pdfextract.

A spatial type is a named category of structural element (text run, margin,
section, ...). Each type owns an ordered list of spatial objects, which are
plain attribute containers produced while the document is streamed.

Classes:
    SpatialObject: ordered attribute mapping with the ``alter`` mutation DSL
    SpatialType: write-once definition of a spatial type
    SpatialLayer: the objects one run produced for one spatial type

Example:
    >>> run = SpatialObject(x=10, y=10, height=10, content="Abstract")
    >>> _ = run.alter({"height": {"grow_by_percent": 1}, "y": {"shrink_by": 5}})
    >>> run["height"], run["y"]
    (20, 5)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from pdfextract.errors import TypeMismatchError, UnknownOperationError


class AttributeKind(Enum):
    """Kind of value stored under a spatial object attribute."""
    NUMERIC = "numeric"
    TEXT = "text"
    MISSING = "missing"


def attribute_kind(value: Any) -> AttributeKind:
    """Classify an attribute value. ``bool`` is not numeric."""
    if value is None:
        return AttributeKind.MISSING
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return AttributeKind.NUMERIC
    return AttributeKind.TEXT


class Operation(str, Enum):
    """Operations understood by ``SpatialObject.alter``."""
    GROW_BY = "grow_by"
    GROW_BY_PERCENT = "grow_by_percent"
    SHRINK_BY = "shrink_by"
    SHRINK_BY_PERCENT = "shrink_by_percent"
    SET_TO = "set_to"
    SET_TO_PERCENT = "set_to_percent"
    WITH = "with"

    @classmethod
    def parse(cls, name: Any) -> "Operation":
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise UnknownOperationError(name) from None

    @property
    def is_numeric(self) -> bool:
        return self not in (Operation.SET_TO, Operation.WITH)


_OPERATIONS: dict[Operation, Callable[[Any, Any], Any]] = {
    Operation.GROW_BY: lambda v, p: v + p,
    Operation.GROW_BY_PERCENT: lambda v, p: v * (1 + p),
    Operation.SHRINK_BY: lambda v, p: v - p,
    Operation.SHRINK_BY_PERCENT: lambda v, p: v * (1 - p),
    Operation.SET_TO: lambda v, p: p,
    Operation.SET_TO_PERCENT: lambda v, p: v * p,
    Operation.WITH: lambda v, p: p(v),
}


class SpatialObject(dict):
    """One concrete instance of a spatial type.

    Attribute values are either numeric (int/float) or text. Numeric values
    support every ``alter`` operation; text values only ``set_to`` and
    ``with``.
    """

    def kind(self, attribute: str) -> AttributeKind:
        return attribute_kind(self.get(attribute))

    def alter(self, schema: Mapping[str, Mapping[Any, Any]]) -> "SpatialObject":
        """Apply a mutation schema to this object.

        ``schema`` maps attribute names to ``{operation: operand}`` mappings.
        Operations on one attribute apply in order, each consuming the
        previous result. Nothing is written unless every operation succeeds.

        Raises:
            UnknownOperationError: operation name is not recognized
            TypeMismatchError: numeric operation on a text or missing value,
                or with a non-numeric operand
        """
        staged: dict[str, Any] = {}
        for attribute, operations in schema.items():
            value = staged.get(attribute, self.get(attribute))
            for name, operand in operations.items():
                op = Operation.parse(name)
                if op.is_numeric and attribute_kind(value) is not AttributeKind.NUMERIC:
                    raise TypeMismatchError(attribute, op.value, value)
                if op.is_numeric and attribute_kind(operand) is not AttributeKind.NUMERIC:
                    raise TypeMismatchError(attribute, op.value, operand, role="operand")
                value = _OPERATIONS[op](value, operand)
            staged[attribute] = value
        self.update(staged)
        return self

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """(x0, y0, x1, y1) built from x/y/width/height, missing values as 0."""
        x = self.get("x", 0)
        y = self.get("y", 0)
        return (x, y, x + self.get("width", 0), y + self.get("height", 0))

    def __repr__(self) -> str:
        return f"SpatialObject({dict.__repr__(self)})"


# Builders receive a pipeline BuildContext; typed loosely to avoid an import cycle.
Builder = Callable[[Any], None]


@dataclass(frozen=True)
class SpatialType:
    """Write-once definition of a spatial type, shareable across runs."""
    name: str
    depends_on: tuple[str, ...] = ()
    builder: Optional[Builder] = None
    index: int = 0
    description: str = ""


@dataclass
class SpatialLayer:
    """Objects produced for one spatial type during one run."""
    name: str
    explicit: bool = False
    objects: list[SpatialObject] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)
