import os

import pytest

os.environ.setdefault("OBJECTFAKER_SETTINGS_MODULE", "tests.settings.TestSettings")


@pytest.fixture
def object_faker():
    from objectfaker import ObjectFaker

    return ObjectFaker()
