from .base import BaseGenerator, Generator, get_target_type
from .loader import load_generators
from .registry import GeneratorRegistry

__all__ = ["BaseGenerator", "Generator", "GeneratorRegistry", "get_target_type", "load_generators"]
