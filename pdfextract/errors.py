"""
Exception hierarchy for pdfextract.

Structural errors (ConfigurationError and its subclasses) are raised before
any document event is read. Mutation errors are scoped to a single
``SpatialObject.alter`` call and leave the object untouched.
"""

from __future__ import annotations

from typing import Iterable


class PdfExtractError(Exception):
    """Base class for every error raised by pdfextract."""


class ConfigurationError(PdfExtractError):
    """The spatial type configuration is invalid."""


class UnknownSpatialTypeError(ConfigurationError):
    """A spatial type name was looked up but never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No such spatial type: {name!r}")


class UnknownDependencyError(ConfigurationError):
    """A spatial type depends on a type that is not registered."""

    def __init__(self, type_name: str, dependency: str):
        self.type_name = type_name
        self.dependency = dependency
        super().__init__(
            f"Spatial type {type_name!r} depends on unregistered type {dependency!r}"
        )


class CyclicDependencyError(ConfigurationError):
    """The dependency relation between spatial types contains a cycle."""

    def __init__(self, cycle: Iterable[str]):
        self.cycle = tuple(cycle)
        path = " -> ".join(self.cycle + self.cycle[:1])
        super().__init__(f"Cyclic spatial type dependency: {path}")


class UnknownEventError(ConfigurationError):
    """A builder listened for an event the document source never emits."""

    def __init__(self, event_name: str, type_name: str | None = None):
        self.event_name = event_name
        self.type_name = type_name
        owner = f" (registered by {type_name!r})" if type_name else ""
        super().__init__(f"Unknown document event {event_name!r}{owner}")


class ReentrantDispatchError(PdfExtractError):
    """A listener handler tried to dispatch another event."""


class MutationError(PdfExtractError):
    """Base class for errors raised by ``SpatialObject.alter``."""


class UnknownOperationError(MutationError):
    def __init__(self, operation: object):
        self.operation = operation
        super().__init__(f"Unknown alter operation: {operation!r}")


class TypeMismatchError(MutationError):
    def __init__(self, attribute: str, operation: str, value: object, role: str = "attribute"):
        self.attribute = attribute
        self.operation = operation
        self.value = value
        self.role = role
        subject = f"attribute {attribute!r}" if role == "attribute" else f"its operand on {attribute!r}"
        super().__init__(
            f"Operation {operation!r} needs a numeric value but "
            f"{subject} is {value!r}"
        )


class MalformedSegmentationInputError(PdfExtractError):
    """Reference segmentation was given something that is not text."""
