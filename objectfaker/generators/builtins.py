from __future__ import annotations

import datetime
import decimal
import uuid
from typing import Any

from faker import Faker

from .base import BaseGenerator


class FakerMethodGenerator(BaseGenerator[Any]):
    """
    Generates values by calling a named `faker.Faker` provider method.

    Parameters are passed as keyword arguments on each call. Callable parameter
    values are evaluated per call with the Faker instance, which allows values
    depending on other random draws.
    """

    def __init__(
        self,
        target: Any,
        method: str,
        faker: Faker | None = None,
        *,
        parameters: dict[str, Any] | None = None,
        min_size: int | None = None,
        max_size: int | None = None,
    ) -> None:
        super().__init__(faker, min_size=min_size, max_size=max_size)
        self.target = target
        self.method = method
        self.parameters = parameters or {}

    def get_parameters(self) -> dict[str, Any]:
        return {
            name: value(self.faker) if callable(value) else value
            for name, value in self.parameters.items()
        }

    def generate(self) -> Any:
        return getattr(self.faker, self.method)(**self.get_parameters())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={self.target!r}, method={self.method!r})"


class BytesGenerator(BaseGenerator[bytes]):
    def generate(self) -> bytes:
        return self.faker.binary(length=self.faker.random_int(min=0, max=64))


class ComplexGenerator(BaseGenerator[complex]):
    def generate(self) -> complex:
        return complex(self.faker.pyfloat(), self.faker.pyfloat())


class UUIDGenerator(BaseGenerator[uuid.UUID]):
    def generate(self) -> uuid.UUID:
        return uuid.UUID(self.faker.uuid4())


# Target type -> (Faker provider method, parameters).
DEFAULT_MAPPING: dict[Any, tuple[str, dict[str, Any]]] = {
    bool: ("pybool", {}),
    int: ("pyint", {}),
    float: ("pyfloat", {}),
    str: ("name", {}),
    decimal.Decimal: ("pydecimal", {"left_digits": 8, "right_digits": 4}),
    datetime.datetime: ("date_time", {}),
    datetime.date: ("date_object", {}),
    datetime.time: ("time_object", {}),
    datetime.timedelta: ("time_delta", {"end_datetime": "+30d"}),
}

BUILTIN_GENERATOR_CLASSES: tuple[type[BaseGenerator], ...] = (
    BytesGenerator,
    ComplexGenerator,
    UUIDGenerator,
)


def get_builtin_generators(
    faker: Faker,
    *,
    mapping: dict[Any, tuple[str, dict[str, Any]]] | None = None,
) -> list[BaseGenerator]:
    """
    Instantiates the built-in generators of every terminal type.

    Parameters:
        faker (Faker): The Faker instance shared by all built-in generators.
        mapping (dict | None, optional): Overrides or additions to
            `DEFAULT_MAPPING`. Defaults to `None`.

    Returns:
        list[BaseGenerator]: The generators, in registration order.
    """
    mapping = {**DEFAULT_MAPPING, **(mapping or {})}
    generators: list[BaseGenerator] = [
        FakerMethodGenerator(target, method, faker, parameters=parameters)
        for target, (method, parameters) in mapping.items()
    ]
    generators.extend(generator_class(faker) for generator_class in BUILTIN_GENERATOR_CLASSES)
    return generators
