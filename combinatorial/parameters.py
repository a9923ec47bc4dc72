"""
Parameter descriptors and declaration discovery.

A Parameter pairs one formal parameter of a test function with its static
annotation and the value sources attached to it. Sources are attached in
either of two ways:

    def test_a(x: Annotated[int, count_range(0, 5)]): ...

    @declare(x=[1, 2, None], flag=MemberData("flags"))
    def test_b(x, flag: bool): ...

parameters_of() reads both and returns descriptors in signature order.
"""

from __future__ import annotations

import inspect
import sys
import typing
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from combinatorial.errors import DeclarationError, MissingArgumentError
from combinatorial.sources import Values, ValueSource, step_range

F = TypeVar("F", bound=Callable[..., Any])

DECLARATIONS_ATTR = "__combinatorial_sources__"

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class Parameter:
    """
    One formal parameter of a test function.

    Attributes:
        name: Parameter name.
        annotation: Static type the default enumeration is derived from
            (``inspect.Parameter.empty`` when unannotated).
        sources: Attached value source declarations, in declaration order.
        owner: Object member data is looked up on (enclosing class or
            defining module), or None.
    """

    name: str
    annotation: Any = inspect.Parameter.empty
    sources: tuple[ValueSource, ...] = ()
    owner: Any = None

    def first(self, source_type: type[ValueSource]) -> ValueSource | None:
        """Return the first attached source of ``source_type``, if any."""
        for source in self.sources:
            if isinstance(source, source_type):
                return source
        return None


def as_source(value: Any) -> ValueSource:
    """
    Normalize a declaration shorthand to a ValueSource.

    - ValueSource instances are returned unchanged
    - lists and tuples become Values
    - ``range`` objects become the equivalent INT32 step range

    Raises:
        DeclarationError: If ``value`` is none of the above.
    """
    if isinstance(value, ValueSource):
        return value
    if isinstance(value, (list, tuple)):
        return Values(*value)
    if isinstance(value, range):
        if not value:
            raise DeclarationError(f"Empty {value!r} cannot be used as a value source")
        # range excludes its stop; step_range includes it
        return step_range(value.start, value[-1], value.step)
    raise DeclarationError(
        f"Cannot use {type(value).__name__} as a value source; "
        "pass a list, a range or a value source declaration"
    )


def declare(**sources: Any) -> Callable[[F], F]:
    """
    Attach value sources to a function's parameters by name.

    Each keyword value is a ValueSource, a list/tuple shorthand for Values,
    a ``range``, or a list of ValueSource objects when several declarations
    apply to one parameter.

    Raises:
        DeclarationError: If a name is not a parameter of the decorated
            function, or a value cannot be used as a source.

    Example:
        @declare(x=count_range(0, 3), y=[True, None])
        def test_xy(x, y): ...
    """
    normalized: dict[str, list[ValueSource]] = {}
    for name, value in sources.items():
        if isinstance(value, list) and value and all(isinstance(v, ValueSource) for v in value):
            normalized[name] = list(value)
        else:
            normalized[name] = [as_source(value)]

    def decorator(func: F) -> F:
        names = set(inspect.signature(func).parameters)
        unknown = sorted(set(normalized) - names)
        if unknown:
            raise DeclarationError(
                f"{func.__qualname__} has no parameter(s) named {', '.join(unknown)}"
            )

        existing: dict[str, list[ValueSource]] = dict(getattr(func, DECLARATIONS_ATTR, {}))
        for name, declared in normalized.items():
            existing[name] = existing.get(name, []) + declared
        setattr(func, DECLARATIONS_ATTR, existing)
        return func

    return decorator


def _split_annotated(annotation: Any) -> tuple[Any, list[ValueSource]]:
    """Separate ``Annotated[T, ...]`` into T and its ValueSource metadata."""
    if typing.get_origin(annotation) is typing.Annotated:
        base, *metadata = typing.get_args(annotation)
        return base, [m for m in metadata if isinstance(m, ValueSource)]
    return annotation, []


def _owner_of(func: Callable[..., Any]) -> Any:
    """Find the class enclosing ``func``, falling back to its module."""
    module = sys.modules.get(getattr(func, "__module__", None) or "")
    owner: Any = module
    qualname = getattr(func, "__qualname__", "")
    parts = qualname.split(".")[:-1]
    if "<locals>" in parts:
        # Nested definitions are unreachable from the module; use the globals
        return _Namespace(getattr(func, "__globals__", {}))
    for part in parts:
        owner = getattr(owner, part, None)
        if owner is None:
            return module
    return owner


class _Namespace:
    """Attribute access over a globals mapping."""

    def __init__(self, mapping: dict[str, Any]) -> None:
        self._mapping = mapping

    def __getattr__(self, name: str) -> Any:
        try:
            return self._mapping[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"<globals of {self._mapping.get('__name__', '?')}>"


def parameters_of(func: Callable[..., Any], owner: Any = None) -> list[Parameter]:
    """
    Build parameter descriptors for a test function.

    Args:
        func: The test function or method.
        owner: Object member data is looked up on. Defaults to the
            enclosing class of a method, else the defining module.

    Returns:
        Parameters in signature order. A leading ``self``/``cls`` on a
        method is skipped.

    Raises:
        MissingArgumentError: If ``func`` is None.
        DeclarationError: If the function takes ``*args`` or ``**kwargs``.
    """
    if func is None:
        raise MissingArgumentError("func")

    signature = inspect.signature(func)
    try:
        hints = typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references; fall back to raw annotations
        hints = {}

    if owner is None:
        owner = _owner_of(func)
    declared: dict[str, list[ValueSource]] = getattr(func, DECLARATIONS_ATTR, {})

    params = list(signature.parameters.values())
    if params and params[0].name in ("self", "cls") and "." in func.__qualname__:
        params = params[1:]

    result = []
    for param in params:
        if param.kind in _VARIADIC:
            raise DeclarationError(
                f"{func.__qualname__}: variadic parameter {param.name!r} cannot be enumerated"
            )
        annotation, attached = _split_annotated(hints.get(param.name, param.annotation))
        sources = tuple(attached) + tuple(declared.get(param.name, ()))
        result.append(
            Parameter(name=param.name, annotation=annotation, sources=sources, owner=owner)
        )
    return result
