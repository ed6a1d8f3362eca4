from typing import Any, Generic, TypeVar

import pytest
from faker import Faker

import objectfaker
from objectfaker.exceptions import InvalidGeneratorError
from objectfaker.factory.classifier import TERMINAL_TYPES
from objectfaker.generators import BaseGenerator, Generator, get_target_type
from objectfaker.generators.builtins import FakerMethodGenerator, get_builtin_generators

T = TypeVar("T")


class Money:
    pass


class MoneyGenerator(BaseGenerator[Money]):
    def generate(self) -> Money:
        return Money()


class EuroGenerator(MoneyGenerator):
    pass


class TargetedGenerator(BaseGenerator[Any]):
    target = Money

    def generate(self) -> Money:
        return Money()


class UntypedGenerator(BaseGenerator):
    def generate(self) -> Any:
        return None


class IntermediateGenerator(BaseGenerator[T], Generic[T]):
    pass


class ConcreteGenerator(IntermediateGenerator[int]):
    def generate(self) -> int:
        return 1


@pytest.fixture
def faker():
    fake = Faker()
    fake.seed_instance(1)
    return fake


def test_builtins_cover_terminal_types(faker):
    generators = get_builtin_generators(faker)

    assert {get_target_type(generator) for generator in generators} == TERMINAL_TYPES
    for generator in generators:
        assert isinstance(generator, Generator)
        assert isinstance(generator.generate(), get_target_type(generator))


def test_mapping_override(faker):
    generators = get_builtin_generators(faker, mapping={str: ("email", {})})

    (text,) = [generator for generator in generators if get_target_type(generator) is str]
    assert text.method == "email"
    assert "@" in text.generate()


def test_callable_parameters(faker):
    generator = FakerMethodGenerator(
        int, "random_int", faker, parameters={"min": 5, "max": lambda fake: 5}
    )

    assert generator.generate() == 5


def test_generate_many_sizes(faker):
    generator = FakerMethodGenerator(int, "pyint", faker, min_size=3, max_size=3)

    values = generator.generate_many()

    assert len(values) == 3
    assert all(isinstance(value, int) for value in values)


def test_generate_many_uses_settings(faker):
    generator = FakerMethodGenerator(str, "name", faker)
    settings = objectfaker.monkay.settings.model_copy(
        update={"collection_min_size": 4, "collection_max_size": 4}
    )

    with objectfaker.monkay.with_settings(settings):
        assert len(generator.generate_many()) == 4


def test_base_generator_requires_generate(faker):
    with pytest.raises(NotImplementedError):
        BaseGenerator(faker).generate()


def test_target_type():
    assert get_target_type(MoneyGenerator) is Money
    assert get_target_type(MoneyGenerator()) is Money
    assert get_target_type(EuroGenerator) is Money
    assert get_target_type(TargetedGenerator()) is Money
    assert get_target_type(ConcreteGenerator) is int


def test_target_type_missing():
    with pytest.raises(InvalidGeneratorError):
        get_target_type(UntypedGenerator)
