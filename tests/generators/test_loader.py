from dataclasses import dataclass
from typing import Any

import pytest
from faker import Faker

from objectfaker.conf.global_settings import ObjectFakerSettings
from objectfaker.exceptions import PluginLoadError
from objectfaker.generators import GeneratorRegistry, load_generators
from objectfaker.generators import loader
from objectfaker.generators.builtins import FakerMethodGenerator
from tests.generators import sample_plugins


@dataclass
class FakeEntryPoint:
    name: str
    value: Any

    def load(self) -> Any:
        return self.value


@pytest.fixture
def faker():
    return Faker()


def make_settings(**kwargs: Any) -> ObjectFakerSettings:
    kwargs.setdefault("generator_entry_point_group", None)
    return ObjectFakerSettings(**kwargs)


def test_builtins_only(faker):
    registry = load_generators(faker, settings=make_settings())

    assert isinstance(registry.lookup(int), FakerMethodGenerator)
    assert registry.lookup(int).faker is faker
    assert sample_plugins.Money not in registry


def test_module_plugin(faker):
    registry = load_generators(
        faker, settings=make_settings(generators=["tests.generators.sample_plugins"])
    )

    money = registry.lookup(sample_plugins.Money).generate()
    assert money.currency == "EUR"
    # plugins are registered first, the built-in int generator wins
    assert isinstance(registry.lookup(int), FakerMethodGenerator)


def test_builtins_first(faker):
    registry = load_generators(
        faker,
        settings=make_settings(
            generators=["tests.generators.sample_plugins"],
            generator_load_order="builtins_first",
        ),
    )

    assert registry.lookup(int).generate() == 42
    assert registry.lookup(int).faker is faker


@pytest.mark.parametrize(
    "path",
    [
        "tests.generators.sample_plugins.FixedIntGenerator",
        "tests.generators.sample_plugins:FixedIntGenerator",
    ],
)
def test_class_plugin(faker, path):
    registry = load_generators(
        faker, settings=make_settings(generators=[path], generator_load_order="builtins_first")
    )

    assert isinstance(registry.lookup(int), sample_plugins.FixedIntGenerator)
    assert sample_plugins.Money not in registry


def test_instance_plugin(faker):
    registry = load_generators(
        faker,
        settings=make_settings(
            generators=["tests.generators.sample_plugins:greeting_generator"],
            generator_load_order="builtins_first",
        ),
    )

    assert registry.lookup(str) is sample_plugins.greeting_generator


def test_existing_registry_is_populated(faker):
    registry = GeneratorRegistry()

    result = load_generators(faker, settings=make_settings(), registry=registry)

    assert result is registry
    assert int in registry


def test_entry_points(faker, monkeypatch):
    def entry_points(group: str) -> list[FakeEntryPoint]:
        assert group == "objectfaker.generators"
        return [FakeEntryPoint("money", sample_plugins.MoneyGenerator)]

    monkeypatch.setattr(loader, "entry_points", entry_points)

    registry = load_generators(
        faker, settings=make_settings(generator_entry_point_group="objectfaker.generators")
    )

    assert isinstance(registry.lookup(sample_plugins.Money), sample_plugins.MoneyGenerator)


@pytest.mark.parametrize(
    "path",
    [
        "tests.generators.missing_plugins",
        "tests.generators.sample_plugins:not_a_generator",
    ],
)
def test_failing_plugin_is_skipped(faker, capsys, path):
    registry = load_generators(faker, settings=make_settings(generators=[path]))

    assert int in registry
    output = " ".join(capsys.readouterr().out.split())
    assert "could not be loaded" in output


@pytest.mark.parametrize(
    "path",
    [
        "tests.generators.missing_plugins",
        "tests.generators.sample_plugins:not_a_generator",
    ],
)
def test_failing_plugin_raises(faker, path):
    with pytest.raises(PluginLoadError):
        load_generators(
            faker, settings=make_settings(generators=[path], ignore_plugin_errors=False)
        )
