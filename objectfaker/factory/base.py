from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Any, Literal, TypeVar, get_args, get_origin, overload

from faker import Faker
from loguru import logger

from objectfaker.exceptions import DegradeToDefault, GeneratorNotFound
from objectfaker.generators.loader import load_generators

from .classifier import (
    collection_element,
    default_value,
    get_terminal_types,
    is_terminal,
    unwrap_optional,
)
from .context_vars import construction_context
from .descriptors import ParameterDescriptor, TypeDescriptor, describe
from .guard import CircularDependencyGuard
from .heuristics import is_considered_initialized
from .types import ConstructionContext

if TYPE_CHECKING:
    from objectfaker.generators import Generator, GeneratorRegistry

T = TypeVar("T")

ConstructorSelection = Literal["invoke_all", "most_parameters"]


class ObjectFaker:
    """
    Builds fully populated instances of arbitrary types.

    Terminal types (numbers, text, dates, ...) are produced by the generator
    registered for them. Any other type is built recursively: a constructor is
    invoked with generated arguments and the public fields and writable
    properties it left at their default value are generated afterwards.

    `create` never raises. Whatever cannot be built (no public constructor,
    recursion deeper than `max_circular_dependency_depth`, a failing generator)
    degrades to the default value of its type, `None` for most classes.

    Example:
        ```python
        @dataclass
        class Point:
            x: int
            y: int

        point = ObjectFaker().create(Point)
        ```

    Attributes:
        faker (Faker): The Faker instance backing the built-in generators.
        registry (GeneratorRegistry): Generators by target type.
        constructor_selection (ConstructorSelection): `"invoke_all"` invokes every
            constructor, most parameters first, keeping the last instance;
            `"most_parameters"` keeps the first constructor that succeeds.
    """

    def __init__(
        self,
        *,
        registry: GeneratorRegistry | None = None,
        faker: Faker | None = None,
        max_circular_dependency_depth: int | None = None,
        constructor_selection: ConstructorSelection | None = None,
    ) -> None:
        """
        Parameters:
            registry (GeneratorRegistry | None, optional): Generators to use as is.
                When `None`, a registry is populated from the built-in generators
                and the configured plugins.
            faker (Faker | None, optional): Faker instance for the built-in
                generators. Defaults to one built from the `faker_locale` and
                `faker_seed` settings.
            max_circular_dependency_depth (int | None, optional): Defaults to the
                setting of the same name.
            constructor_selection (ConstructorSelection | None, optional): Defaults
                to the setting of the same name.
        """
        from objectfaker.conf import settings

        if faker is None:
            faker = Faker(settings.faker_locale)
            if settings.faker_seed is not None:
                faker.seed_instance(settings.faker_seed)
        self.faker = faker
        self.registry = registry if registry is not None else load_generators(faker, settings=settings)
        self.max_circular_dependency_depth = (
            settings.max_circular_dependency_depth
            if max_circular_dependency_depth is None
            else max_circular_dependency_depth
        )
        self.constructor_selection: ConstructorSelection = (
            constructor_selection or settings.constructor_selection
        )
        self.terminal_types = get_terminal_types()
        self.collection_sizes = (settings.collection_min_size, settings.collection_max_size)

    @property
    def max_circular_dependency_depth(self) -> int:
        return self._max_circular_dependency_depth

    @max_circular_dependency_depth.setter
    def max_circular_dependency_depth(self, value: int) -> None:
        if value < 0:
            raise ValueError("max_circular_dependency_depth must not be negative.")
        self._max_circular_dependency_depth = value

    @property
    def context(self) -> ConstructionContext | None:
        """
        The context of the `create` call of this faker in progress, if any.
        """
        context = construction_context.get(None)
        if context is not None and context.owner is self:
            return context
        return None

    def register_generator(self, target: Any, generator: Generator) -> None:
        self.registry.register(target, generator)

    def is_terminal(self, annotation: Any) -> bool:
        return is_terminal(annotation, self.terminal_types)

    @overload
    def create(self, target: type[T]) -> T: ...

    @overload
    def create(self, target: Any) -> Any: ...

    def create(self, target: Any) -> Any:
        """
        Creates a populated instance of `target`.

        Nested calls made while a graph is being built (from a constructor or a
        generator) join the running construction and share its in-flight stack.

        Parameters:
            target (type[T]): The type to build. Optional types and generic
                containers such as `list[Point]` are accepted as well.

        Returns:
            T: The new instance, or the default value of `target` if it cannot
               be built.
        """
        context = self.context
        if context is not None:
            return self._create(target, context)

        context = ConstructionContext(
            owner=self,
            guard=CircularDependencyGuard(self.max_circular_dependency_depth),
        )
        token = construction_context.set(context)
        try:
            return self._create(target, context)
        finally:
            construction_context.reset(token)
            logger.debug(f"Created {target!r} with {context.constructed} composite instance(s).")

    def _create(self, target: Any, context: ConstructionContext) -> Any:
        """
        Builds one value of `target` within a running construction.

        Terminal types go to their generator and generic aliases to `_resolve`.
        Composite types are constructed under the circular dependency guard.

        Returns:
            Any: The instance, or the default value of `target` when it has no
               public constructor, exceeds the depth limit or cannot be built.
        """
        target = unwrap_optional(target)
        if target is Any:
            return None
        if self.is_terminal(target):
            return self._generate(target)
        if get_origin(target) is not None:
            return self._resolve(target, context)

        try:
            descriptor = describe(target)
        except Exception as exc:
            logger.opt(exception=exc).debug(f"{target!r} cannot be described.")
            return default_value(target)

        if not descriptor.constructors and not descriptor.is_value_type:
            logger.debug(f"{target!r} has no public constructor.")
            return default_value(target)
        if context.guard.exceeds(target):
            logger.debug(
                f"{target!r} is already under construction "
                f"{context.guard.depth_of(target)} time(s), depth limit reached."
            )
            return default_value(target)

        with context.guard.enter(target):
            try:
                instance = self._construct(descriptor, context)
            except DegradeToDefault:
                return default_value(target)
        context.constructed += 1
        return instance

    def _generate(self, target: Any) -> Any:
        try:
            return self.registry.lookup(target).generate()
        except Exception as exc:
            logger.opt(exception=exc).debug(f"No value generated for {target!r}.")
            return default_value(target)

    def _construct(self, descriptor: TypeDescriptor, context: ConstructionContext) -> Any:
        parameters: Sequence[ParameterDescriptor] = ()
        arguments: Sequence[Any] = ()
        if descriptor.is_value_type and not descriptor.constructors:
            instance = descriptor.default_instance()
        else:
            instance, parameters, arguments = self._invoke_constructors(descriptor, context)
        self._populate(instance, descriptor, parameters, arguments, context)
        return instance

    def _invoke_constructors(
        self, descriptor: TypeDescriptor, context: ConstructionContext
    ) -> tuple[Any, Sequence[ParameterDescriptor], Sequence[Any]]:
        """
        Invokes the constructors of a type, most parameters first.

        With `"invoke_all"` every constructor runs and the last successful one
        is kept. With `"most_parameters"` the first successful one is kept.
        Constructors raising an exception are skipped.

        Returns:
            tuple: The instance with the parameters and arguments of the
               constructor that created it.

        Raises:
            DegradeToDefault: If no constructor succeeded.
        """
        result: tuple[Any, Sequence[ParameterDescriptor], Sequence[Any]] | None = None
        ordered = sorted(descriptor.constructors, key=lambda ctor: len(ctor.parameters), reverse=True)
        for ctor in ordered:
            arguments = [self._resolve_parameter(parameter, context) for parameter in ctor.parameters]
            try:
                instance = ctor.invoke(arguments)
            except Exception as exc:
                logger.opt(exception=exc).debug(
                    f"Constructor {ctor.name} of {descriptor.type!r} failed."
                )
                continue
            result = (instance, ctor.parameters, arguments)
            if self.constructor_selection == "most_parameters":
                break
        if result is None:
            raise DegradeToDefault
        return result

    def _populate(
        self,
        instance: Any,
        descriptor: TypeDescriptor,
        parameters: Sequence[ParameterDescriptor],
        arguments: Sequence[Any],
        context: ConstructionContext,
    ) -> None:
        """
        Assigns generated values to the members the constructor left at their
        default. Members that cannot be assigned keep their value.
        """
        for member in descriptor.members:
            default = default_value(member.annotation)
            try:
                current = member.get_value(instance, default)
            except Exception as exc:
                logger.opt(exception=exc).debug(f"Reading {member.name!r} failed.")
                current = default
            if is_considered_initialized(member, current, parameters, arguments):
                continue
            value = self._resolve(member.annotation, context)
            try:
                member.set_value(instance, value)
            except Exception as exc:
                logger.opt(exception=exc).debug(
                    f"Assigning {member.name!r} of {descriptor.type!r} failed."
                )

    def _resolve_parameter(self, parameter: ParameterDescriptor, context: ConstructionContext) -> Any:
        if not parameter.is_annotated and parameter.has_default:
            return parameter.default
        return self._resolve(parameter.annotation, context)

    def _resolve(self, annotation: Any, context: ConstructionContext) -> Any:
        """
        Produces a value for a constructor parameter or a member.

        The registry is consulted first: the generator of the type itself, or
        for single argument containers the `generate_many` of the element
        generator. Without a generator, composite types are built recursively.
        """
        annotation = unwrap_optional(annotation)
        collection = collection_element(annotation)
        try:
            if collection is None:
                return self.registry.lookup(annotation).generate()
            builder, element = collection
            return builder(self.registry.lookup(element).generate_many())
        except GeneratorNotFound:
            pass
        except Exception as exc:
            logger.opt(exception=exc).debug(f"Generator for {annotation!r} failed.")
            return default_value(annotation)

        origin = get_origin(annotation)
        if collection is not None:
            return self._create_collection(*collection, context)
        if origin is tuple:
            return tuple(self._resolve(arg, context) for arg in get_args(annotation))
        if origin is Literal:
            return self.faker.random_element(get_args(annotation))
        if self.is_terminal(annotation):
            return default_value(annotation)
        if origin is not None:
            return self._create(origin, context)
        return self._create(annotation, context)

    def _create_collection(
        self,
        builder: Callable[[Iterable[Any]], Any],
        element: Any,
        context: ConstructionContext,
    ) -> Any:
        """
        Fills a container with recursively built elements of a composite type.

        The size is drawn from `collection_sizes`. Elements that degrade to
        `None` are left out.
        """
        if self.is_terminal(element):
            return builder(())
        min_size, max_size = self.collection_sizes
        size = self.faker.random_int(min=min_size, max=max_size)
        items = [self._create(element, context) for _ in range(size)]
        try:
            return builder(item for item in items if item is not None)
        except TypeError as exc:
            # e.g. unhashable instances for a set
            logger.opt(exception=exc).debug(f"Collection of {element!r} cannot be built.")
            return builder(())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(max_circular_dependency_depth={self.max_circular_dependency_depth}, "
            f"registry={self.registry!r})"
        )
