from __future__ import annotations

import os
from typing import TYPE_CHECKING

from monkay import Monkay

if TYPE_CHECKING:
    from objectfaker.conf.global_settings import ObjectFakerSettings


def create_monkay(global_dict: dict) -> Monkay[None, ObjectFakerSettings]:
    """
    Initializes the Monkay instance backing the lazy `objectfaker` namespace.

    The settings class is resolved from the `OBJECTFAKER_SETTINGS_MODULE`
    environment variable and falls back to
    `objectfaker.conf.global_settings.ObjectFakerSettings`.

    Args:
        global_dict (dict): The globals of the `objectfaker` package.

    Returns:
        Monkay[None, ObjectFakerSettings]: The configured Monkay instance.
    """
    monkay: Monkay[None, ObjectFakerSettings] = Monkay(
        global_dict,
        settings_path=lambda: os.environ.get(
            "OBJECTFAKER_SETTINGS_MODULE",
            "objectfaker.conf.global_settings.ObjectFakerSettings",
        )
        or "",
        settings_preloads_name="preloads",
        uncached_imports={"settings"},
        lazy_imports={
            "settings": lambda: monkay.settings,
            "ObjectFakerSettings": "objectfaker.conf.global_settings:ObjectFakerSettings",
            "ObjectFaker": "objectfaker.factory:ObjectFaker",
            "ConstructionContext": "objectfaker.factory:ConstructionContext",
            "constructor": "objectfaker.factory:constructor",
            "BaseGenerator": "objectfaker.generators:BaseGenerator",
            "Generator": "objectfaker.generators:Generator",
            "GeneratorRegistry": "objectfaker.generators:GeneratorRegistry",
            "ObjectFakerException": "objectfaker.exceptions:ObjectFakerException",
            "GeneratorNotFound": "objectfaker.exceptions:GeneratorNotFound",
        },
        skip_all_update=True,
    )
    return monkay
