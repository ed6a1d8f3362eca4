import pytest
from pydantic import ValidationError

import objectfaker
from objectfaker import ObjectFaker
from objectfaker.conf import settings
from objectfaker.conf.global_settings import ObjectFakerSettings
from objectfaker.exceptions import GeneratorNotFound
from tests.settings import TestSettings


def test_settings_module():
    assert isinstance(objectfaker.settings, TestSettings)
    assert settings.faker_seed == 1234
    assert settings.generator_entry_point_group is None


def test_settings_override():
    override = objectfaker.monkay.settings.model_copy(
        update={"max_circular_dependency_depth": 3, "constructor_selection": "most_parameters"}
    )

    with objectfaker.monkay.with_settings(override):
        object_faker = ObjectFaker()

    assert object_faker.max_circular_dependency_depth == 3
    assert object_faker.constructor_selection == "most_parameters"
    assert ObjectFaker().max_circular_dependency_depth == 0


def test_environment(monkeypatch):
    monkeypatch.setenv("OBJECTFAKER_MAX_CIRCULAR_DEPENDENCY_DEPTH", "2")

    assert ObjectFakerSettings().max_circular_dependency_depth == 2


def test_collection_sizes_are_validated():
    with pytest.raises(ValidationError):
        ObjectFakerSettings(collection_min_size=5, collection_max_size=1)

    with pytest.raises(ValidationError):
        ObjectFakerSettings(collection_min_size=-1)


def test_seed_makes_values_reproducible():
    assert ObjectFaker().create(str) == ObjectFaker().create(str)


def test_generator_not_found_message():
    exc = GeneratorNotFound("No generator registered for int.")

    assert isinstance(exc, KeyError)
    assert str(exc) == "No generator registered for int."
