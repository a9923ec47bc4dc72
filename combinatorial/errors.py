"""
Exception hierarchy for combinatorial.

Every error raised by the package derives from CombinatorialError, and each
concrete error also derives from the closest builtin so callers can catch
either form (e.g. ``except ValueError`` still sees an InvalidRangeError).
"""

from __future__ import annotations

import inspect


class CombinatorialError(Exception):
    """Base class for all combinatorial errors."""

    pass


class InvalidRangeError(CombinatorialError, ValueError):
    """
    Raised when a range declaration has an invalid argument.

    Attributes:
        argument: Name of the offending argument ("start", "count", "stop",
            "step", "minimum" or "maximum").
    """

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"Argument out of range: {argument}")


class UnsupportedTypeError(CombinatorialError, TypeError):
    """Raised when a type has no default enumeration."""

    def __init__(self, annotation: object) -> None:
        self.annotation = annotation
        super().__init__(
            f"No default values for type {_type_name(annotation)}; "
            "declare a value source for this parameter"
        )


class MissingArgumentError(CombinatorialError, ValueError):
    """Raised when a required input is None."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"Argument must not be None: {argument}")


class MemberDataError(CombinatorialError, LookupError):
    """Raised when a member data source cannot be found or invoked."""

    pass


class DeclarationError(CombinatorialError, TypeError):
    """Raised when a value source cannot be attached to a parameter."""

    pass


def _type_name(annotation: object) -> str:
    if annotation is inspect.Parameter.empty:
        return "<unannotated>"
    name = getattr(annotation, "__qualname__", None)
    if isinstance(name, str):
        return name
    return repr(annotation)
