from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TypeVar, overload

from loguru import logger

from objectfaker.exceptions import GeneratorNotFound

from .base import Generator

T = TypeVar("T")


class GeneratorRegistry:
    """
    Maps target types to the generators producing their values.

    Entries are keyed by type identity, one generator per type. Registering a
    second generator for the same type replaces the first one: the last
    registration wins.
    """

    def __init__(self, generators: dict[Any, Generator] | None = None) -> None:
        self._generators: dict[Any, Generator] = {}
        if generators:
            for target, generator in generators.items():
                self.register(target, generator)

    def register(self, target: Any, generator: Generator) -> None:
        previous = self._generators.get(target)
        if previous is not None and previous is not generator:
            logger.debug(f"Generator {previous!r} for {target!r} replaced by {generator!r}.")
        self._generators[target] = generator

    def unregister(self, target: Any) -> None:
        self._generators.pop(target, None)

    def lookup(self, target: Any) -> Generator:
        try:
            return self._generators[target]
        except (KeyError, TypeError):
            # TypeError: unhashable annotations can never be registered.
            raise GeneratorNotFound(f"No generator registered for {target!r}.") from None

    @overload
    def get(self, target: Any) -> Generator | None: ...

    @overload
    def get(self, target: Any, default: T) -> Generator | T: ...

    def get(self, target: Any, default: Any = None) -> Any:
        try:
            return self.lookup(target)
        except GeneratorNotFound:
            return default

    def copy(self) -> GeneratorRegistry:
        return GeneratorRegistry(self._generators)

    def __contains__(self, target: Any) -> bool:
        try:
            return target in self._generators
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Any]:
        return iter(self._generators)

    def __len__(self) -> int:
        return len(self._generators)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} generators)"
