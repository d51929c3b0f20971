"""Typed service keys.

A `ServiceKey` pairs a registry name with the type its service must satisfy,
so a lookup returns a checked `T` instead of whatever happens to be stored:

    LOGGER = ServiceKey("Logger", logging.Logger)
    locator.register(LOGGER, logging.getLogger("app"))
    log = locator.get(LOGGER)  # typed as logging.Logger

Plain classes are checked with `isinstance`. Other annotations (unions,
parametrized generics, `Callable[..., Any]`, ...) go through a strict pydantic
`TypeAdapter`. Either way the stored object is returned untouched.

Lazy iterables (`Iterable[X]`, `Iterator[X]`, generators) and string forward
references such as `"int"` are rejected with `TypeError` when the key is built:
their contents cannot be checked without consuming or resolving them.
"""
from __future__ import annotations

import collections.abc
import types
from dataclasses import dataclass, field
from typing import Any, Callable, ForwardRef, Generic, TypeVar, Union, get_args, get_origin, is_typeddict

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from .errors import ServiceTypeError

T = TypeVar("T")

_LAZY_ORIGINS = (
    collections.abc.Iterable,
    collections.abc.Iterator,
    collections.abc.Generator,
    collections.abc.AsyncIterable,
    collections.abc.AsyncIterator,
    collections.abc.AsyncGenerator,
)


def _is_plain_class(tp: Any) -> bool:
    return get_origin(tp) is None and isinstance(tp, type) and not is_typeddict(tp)


def _build_checker(name: str, tp: Any) -> Callable[[Any], bool]:
    if tp is Any:
        return lambda value: True

    if isinstance(tp, (str, ForwardRef)):
        raise TypeError(
            f"Service type for key '{name}' must be a type, not the forward reference {tp!r}."
        )

    if _is_plain_class(tp):
        if getattr(tp, "_is_protocol", False) and not getattr(tp, "_is_runtime_protocol", False):
            raise TypeError(
                f"Protocol {tp.__name__} used by key '{name}' must be decorated with "
                "@runtime_checkable."
            )
        return lambda value: isinstance(value, tp)

    if get_origin(tp) in (Union, types.UnionType):
        # unions of arbitrary classes have no pydantic schema
        checkers = [_build_checker(name, arg) for arg in get_args(tp)]
        return lambda value: any(check(value) for check in checkers)

    if get_origin(tp) in _LAZY_ORIGINS:
        raise TypeError(
            f"Service type for key '{name}' cannot be a lazy iterable ({tp!r}); "
            "use a concrete container such as list[...] or the bare class."
        )

    try:
        adapter: TypeAdapter[Any] = TypeAdapter(tp)
    except PydanticSchemaGenerationError as exc:
        raise TypeError(f"Unsupported service type for key '{name}': {tp!r}") from exc

    def _validates(value: Any) -> bool:
        try:
            adapter.validate_python(value, strict=True)
        except ValidationError:
            return False
        return True

    return _validates


@dataclass(frozen=True)
class ServiceKey(Generic[T]):
    """Name of a service together with the type it must satisfy."""

    name: str
    service_type: Any = Any
    _checker: Callable[[Any], bool] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Service key name must be a string, got {type(self.name).__name__}.")
        object.__setattr__(self, "_checker", _build_checker(self.name, self.service_type))

    def accepts(self, value: Any) -> bool:
        """Return True if `value` satisfies this key's type."""
        return self._checker(value)

    def check(self, value: Any) -> T:
        """Return `value` unchanged, or raise ServiceTypeError if it does not fit."""
        if not self._checker(value):
            raise ServiceTypeError(self.name, self.service_type, value)
        return value

    def __str__(self) -> str:
        return self.name
