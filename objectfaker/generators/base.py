from __future__ import annotations

from collections.abc import Sequence
from inspect import getmro, isclass
from typing import Any, ClassVar, Generic, Protocol, TypeVar, get_args, runtime_checkable

from faker import Faker

from objectfaker.exceptions import InvalidGeneratorError
from objectfaker.utils.compat import is_class_and_subclass


T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Generator(Protocol[T_co]):
    """
    The capability consumed by the construction engine.

    A generator produces values of exactly one type. `generate_many` is used
    when the type is the element of a single argument generic container, e.g.
    the `int` generator fills a `list[int]` field.
    """

    def generate(self) -> T_co: ...

    def generate_many(self) -> Sequence[T_co]: ...


class BaseGenerator(Generic[T]):
    """
    Convenience base class for generators backed by a `faker.Faker` instance.

    Subclasses implement `generate`. The generated type is either declared by
    the `target` class attribute or taken from the type argument of the
    `BaseGenerator[...]` base:

    ```python
    class MoneyGenerator(BaseGenerator[Money]):
        def generate(self) -> Money:
            return Money(self.faker.pydecimal(left_digits=4, right_digits=2), "EUR")
    ```

    Attributes:
        target (ClassVar[Any]): Optional explicit target type.
        faker (Faker): The Faker instance used for data generation.
        min_size (int | None): Minimum length of `generate_many` results. `None`
            uses the `collection_sizes` of the `ObjectFaker` building the
            current object graph, or the `collection_min_size` setting outside
            of a construction.
        max_size (int | None): Maximum length of `generate_many` results,
            resolved like `min_size`.
    """

    target: ClassVar[Any] = None

    def __init__(
        self,
        faker: Faker | None = None,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
    ) -> None:
        self.faker = faker if faker is not None else Faker()
        self.min_size = min_size
        self.max_size = max_size

    def generate(self) -> T:
        raise NotImplementedError()

    def get_collection_sizes(self) -> tuple[int, int]:
        from objectfaker.conf import settings
        from objectfaker.factory.context_vars import construction_context

        context = construction_context.get(None)
        if context is not None:
            min_size, max_size = context.owner.collection_sizes
        else:
            min_size, max_size = settings.collection_min_size, settings.collection_max_size
        return (
            min_size if self.min_size is None else self.min_size,
            max_size if self.max_size is None else self.max_size,
        )

    def generate_many(self) -> list[T]:
        min_size, max_size = self.get_collection_sizes()
        return [self.generate() for _ in range(self.faker.random_int(min=min_size, max=max_size))]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={get_target_type(self)!r})"


def get_target_type(generator: Any) -> Any:
    """
    Returns the type a generator (class or instance) produces values for.

    Raises:
        InvalidGeneratorError: If neither a `target` attribute nor a
            parametrized `BaseGenerator[...]` base is found.
    """
    target = getattr(generator, "target", None)
    if target is not None:
        return target
    generator_class = generator if isclass(generator) else type(generator)
    for klass in getmro(generator_class):
        for base in vars(klass).get("__orig_bases__", ()):
            if not is_class_and_subclass(base, BaseGenerator):
                continue
            args = get_args(base)
            if args and not isinstance(args[0], TypeVar):
                return args[0]
    raise InvalidGeneratorError(
        f'Generator "{generator_class.__name__}" does not declare the type it generates.'
    )
