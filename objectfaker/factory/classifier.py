from __future__ import annotations

import collections.abc
import datetime
import decimal
import enum
import types
import uuid
from collections.abc import Callable, Iterable
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin

import monkay

from objectfaker.utils.compat import is_class_and_subclass

TERMINAL_TYPES: frozenset[type] = frozenset(
    {
        bool,
        int,
        float,
        complex,
        str,
        bytes,
        decimal.Decimal,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
    }
)

DEFAULT_VALUES: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
    decimal.Decimal: decimal.Decimal(0),
    datetime.datetime: datetime.datetime.min,
    datetime.date: datetime.date.min,
    datetime.time: datetime.time(),
    datetime.timedelta: datetime.timedelta(0),
    uuid.UUID: uuid.UUID(int=0),
}

# Origins of single argument containers and the concrete type materializing them.
COLLECTION_BUILDERS: dict[Any, Callable[[Iterable[Any]], Any]] = {
    list: list,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
    collections.deque: collections.deque,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}

_UNION_TYPES = (Union, types.UnionType)


@lru_cache
def _load_extra_terminal_types(paths: tuple[str, ...]) -> frozenset[Any]:
    return frozenset(monkay.load(path) for path in paths)


def get_terminal_types() -> frozenset[Any]:
    from objectfaker.conf import settings

    extra = tuple(settings.extra_terminal_types)
    if not extra:
        return TERMINAL_TYPES
    return TERMINAL_TYPES | _load_extra_terminal_types(extra)


def is_terminal(annotation: Any, terminal_types: frozenset[Any] | None = None) -> bool:
    """
    Tells whether a type is generated directly by its generator.

    Terminal types are the scalar kinds (`bool`, `int`, `float`, `complex`),
    text (`str`, `bytes`), `decimal.Decimal`, the `datetime` value types,
    `uuid.UUID` and the types listed in the `extra_terminal_types` setting.
    Everything else, generic containers included, is composite.
    """
    if terminal_types is None:
        terminal_types = get_terminal_types()
    try:
        return annotation in terminal_types
    except TypeError:
        return False


def is_value_type(annotation: Any) -> bool:
    """
    Value semantics types always have a default instance, even without a
    usable constructor. Enums are the only such types: their default is the
    first member.
    """
    return is_class_and_subclass(annotation, enum.Enum) and get_origin(annotation) is None


def default_value(annotation: Any) -> Any:
    """
    Returns the zero/default value of a type.

    Terminal types have their zero value, enums their first member. Optional
    types and every other type default to `None`.
    """
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if get_origin(annotation) in _UNION_TYPES and type(None) in get_args(annotation):
        return None
    annotation = unwrap_optional(annotation)
    try:
        if annotation in DEFAULT_VALUES:
            return DEFAULT_VALUES[annotation]
    except TypeError:
        return None
    if is_value_type(annotation):
        return next(iter(annotation), None)
    return None


def unwrap_optional(annotation: Any) -> Any:
    """
    `X | None` and `Optional[X]` resolve to `X`. Other unions resolve to their
    first member, `Annotated[X, ...]` to `X`.
    """
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if get_origin(annotation) in _UNION_TYPES:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if args:
            return args[0]
    return annotation


def collection_element(annotation: Any) -> tuple[Callable[[Iterable[Any]], Any], Any] | None:
    """
    Returns `(builder, element type)` for single argument generic containers
    like `list[int]`, `set[str]` or `tuple[float, ...]`, otherwise `None`.
    """
    origin = get_origin(annotation)
    if origin is None:
        return None
    builder = COLLECTION_BUILDERS.get(origin)
    if builder is None:
        return None
    args = get_args(annotation)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return builder, args[0]
        return None
    if len(args) != 1:
        return None
    return builder, args[0]
