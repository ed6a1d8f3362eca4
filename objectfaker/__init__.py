from __future__ import annotations

__version__ = "0.1.0"
from typing import TYPE_CHECKING

from loguru import logger

from ._monkay import create_monkay

if TYPE_CHECKING:
    from .conf.global_settings import ObjectFakerSettings
    from .exceptions import GeneratorNotFound, ObjectFakerException
    from .factory import ConstructionContext, ObjectFaker, constructor
    from .generators import BaseGenerator, Generator, GeneratorRegistry

__all__ = [
    "monkay",
    "settings",
    "ObjectFakerSettings",
    "ObjectFaker",
    "ConstructionContext",
    "constructor",
    "BaseGenerator",
    "Generator",
    "GeneratorRegistry",
    "ObjectFakerException",
    "GeneratorNotFound",
]

# Debug traces of the construction engine. Enable with `logger.enable("objectfaker")`.
logger.disable("objectfaker")

monkay = create_monkay(globals())

del create_monkay, logger
