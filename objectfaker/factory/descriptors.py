from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import InitVar, dataclass
from functools import lru_cache
from typing import Any, ClassVar, Literal, get_origin, get_type_hints

from loguru import logger

from .classifier import is_value_type

CONSTRUCTOR_MARKER = "__objectfaker_constructor__"

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def constructor(method: Any) -> Any:
    """
    Marks a classmethod as an additional public constructor.

    ```python
    class Money:
        def __init__(self, amount: Decimal, currency: str) -> None: ...

        @constructor
        @classmethod
        def euro(cls, amount: Decimal) -> Money:
            return cls(amount, "EUR")
    ```
    """
    func = method.__func__ if isinstance(method, classmethod) else method
    setattr(func, CONSTRUCTOR_MARKER, True)
    return method


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    annotation: Any
    kind: inspect._ParameterKind = inspect.Parameter.POSITIONAL_OR_KEYWORD
    default: Any = inspect.Parameter.empty

    @property
    def is_annotated(self) -> bool:
        return self.annotation is not Any

    @property
    def has_default(self) -> bool:
        return self.default is not inspect.Parameter.empty


@dataclass(frozen=True)
class ConstructorDescriptor:
    """
    A callable creating instances of a type together with its ordered parameters.
    """

    name: str
    factory: Callable[..., Any]
    parameters: tuple[ParameterDescriptor, ...] = ()

    def invoke(self, arguments: Sequence[Any]) -> Any:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter, argument in zip(self.parameters, arguments):
            if parameter.kind in _POSITIONAL_KINDS:
                args.append(argument)
            else:
                kwargs[parameter.name] = argument
        return self.factory(*args, **kwargs)


@dataclass(frozen=True)
class MemberDescriptor:
    """
    A public field or property of a type.
    """

    name: str
    annotation: Any
    kind: Literal["field", "property"] = "field"
    writable: bool = True

    def get_value(self, instance: Any, default: Any) -> Any:
        return getattr(instance, self.name, default)

    def set_value(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Introspection result of a type: its public constructors, fields and properties.

    Attributes:
        type (Any): The described type.
        constructors (tuple[ConstructorDescriptor, ...]): Public constructors. Empty
            for abstract classes, protocols and value semantics types.
        fields (tuple[MemberDescriptor, ...]): Public annotated attributes, `ClassVar`
            excluded.
        properties (tuple[MemberDescriptor, ...]): Public properties, writable or not.
        is_value_type (bool): Whether the type has an implicit default instance.
    """

    type: Any
    constructors: tuple[ConstructorDescriptor, ...] = ()
    fields: tuple[MemberDescriptor, ...] = ()
    properties: tuple[MemberDescriptor, ...] = ()
    is_value_type: bool = False

    @property
    def members(self) -> tuple[MemberDescriptor, ...]:
        """
        The members eligible for generation: fields followed by writable properties.
        """
        return (*self.fields, *(prop for prop in self.properties if prop.writable))

    def default_instance(self) -> Any:
        if self.is_value_type:
            return next(iter(self.type), None)
        return None


def _safe_type_hints(obj: Any) -> dict[str, Any]:
    try:
        return get_type_hints(obj)
    except Exception as exc:
        # unresolvable forward references, objects without annotations
        logger.debug(f"Type hints of {obj!r} not resolvable: {exc!r}")
        return {}


def _class_type_hints(cls: Any) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except Exception as exc:
        logger.debug(f"Type hints of {cls!r} not resolvable as a whole: {exc!r}")
    hints: dict[str, Any] = {}
    # base classes with unresolvable annotations are skipped one by one
    for klass in reversed(inspect.getmro(cls)):
        try:
            hints.update(inspect.get_annotations(klass, eval_str=True))
        except Exception as exc:
            logger.debug(f"Type hints of {klass!r} skipped: {exc!r}")
    return hints


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _is_class_level(annotation: Any) -> bool:
    return (
        annotation is ClassVar
        or get_origin(annotation) is ClassVar
        or isinstance(annotation, InitVar)
    )


def _has_no_constructor(cls: Any) -> bool:
    return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))


def _describe_parameters(
    signature: inspect.Signature, hints: dict[str, Any], fallback_hints: dict[str, Any]
) -> tuple[ParameterDescriptor, ...]:
    parameters: list[ParameterDescriptor] = []
    for parameter in signature.parameters.values():
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        annotation = hints.get(parameter.name)
        if annotation is None:
            annotation = fallback_hints.get(parameter.name)
        if annotation is None:
            annotation = parameter.annotation
            if annotation is inspect.Parameter.empty or isinstance(annotation, str):
                annotation = Any
        parameters.append(
            ParameterDescriptor(
                name=parameter.name,
                annotation=annotation,
                kind=parameter.kind,
                default=parameter.default,
            )
        )
    return tuple(parameters)


def _describe_constructors(cls: Any, class_hints: dict[str, Any]) -> tuple[ConstructorDescriptor, ...]:
    """
    Collects the public constructors of a class: the class call itself and the
    classmethods marked with `@constructor`, a subclass overriding a marked
    classmethod replacing it.
    """
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # builtins without introspectable signature are default constructible
        signature = inspect.Signature()
    init = cls.__init__ if cls.__init__ is not object.__init__ else cls.__new__
    constructors = [
        ConstructorDescriptor(
            name="__init__",
            factory=cls,
            parameters=_describe_parameters(signature, _safe_type_hints(init), class_hints),
        )
    ]
    for klass in reversed(inspect.getmro(cls)):
        for name, value in vars(klass).items():
            func = getattr(value, "__func__", None)
            if not isinstance(value, classmethod) or not getattr(func, CONSTRUCTOR_MARKER, False):
                continue
            bound = getattr(cls, name)
            constructors = [c for c in constructors if c.name != name]
            constructors.append(
                ConstructorDescriptor(
                    name=name,
                    factory=bound,
                    parameters=_describe_parameters(
                        inspect.signature(bound), _safe_type_hints(func), {}
                    ),
                )
            )
    return tuple(constructors)


def _describe_members(
    cls: Any, class_hints: dict[str, Any]
) -> tuple[tuple[MemberDescriptor, ...], tuple[MemberDescriptor, ...]]:
    properties: dict[str, MemberDescriptor] = {}
    for klass in reversed(inspect.getmro(cls)):
        for name, value in vars(klass).items():
            if not _is_public(name):
                continue
            if isinstance(value, property):
                hints = _safe_type_hints(value.fget) if value.fget is not None else {}
                properties[name] = MemberDescriptor(
                    name=name,
                    annotation=hints.get("return", Any),
                    kind="property",
                    writable=value.fset is not None,
                )
            else:
                properties.pop(name, None)

    fields = tuple(
        MemberDescriptor(name=name, annotation=annotation)
        for name, annotation in class_hints.items()
        if _is_public(name) and name not in properties and not _is_class_level(annotation)
    )
    return fields, tuple(properties.values())


@lru_cache(maxsize=None)
def describe(cls: Any) -> TypeDescriptor:
    """
    Builds the `TypeDescriptor` of a class. Results are cached per type.

    Generic aliases are described through their origin, so `dict[str, int]`
    has the constructors of `dict`.
    """
    cls = get_origin(cls) or cls
    if not inspect.isclass(cls):
        return TypeDescriptor(type=cls)
    class_hints = _class_type_hints(cls)
    fields, properties = _describe_members(cls, class_hints)
    if is_value_type(cls):
        return TypeDescriptor(type=cls, fields=fields, properties=properties, is_value_type=True)
    if _has_no_constructor(cls):
        return TypeDescriptor(type=cls, fields=fields, properties=properties)
    return TypeDescriptor(
        type=cls,
        constructors=_describe_constructors(cls, class_hints),
        fields=fields,
        properties=properties,
    )
