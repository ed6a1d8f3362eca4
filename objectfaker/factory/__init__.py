from .base import ObjectFaker
from .context_vars import construction_context
from .descriptors import TypeDescriptor, constructor, describe
from .guard import CircularDependencyGuard
from .heuristics import is_considered_initialized
from .types import ConstructionContext

__all__ = [
    "ObjectFaker",
    "ConstructionContext",
    "CircularDependencyGuard",
    "TypeDescriptor",
    "constructor",
    "construction_context",
    "describe",
    "is_considered_initialized",
]
