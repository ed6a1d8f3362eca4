from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .guard import CircularDependencyGuard

if TYPE_CHECKING:
    from .base import ObjectFaker


@dataclass
class ConstructionContext:
    """
    Live state of one top-level `ObjectFaker.create` call.

    A context is created when `create` is entered without an active context
    of the same `ObjectFaker`, stored in the `construction_context` ContextVar
    while the object graph is built and discarded afterwards. Nested calls
    made by constructors or generators during the build share it.

    Attributes:
        owner (ObjectFaker): The faker that started the call.
        guard (CircularDependencyGuard): The in-flight stack, with the
            `max_circular_dependency_depth` of the owner when the call started.
        constructed (int): Number of composite instances built so far.
    """

    owner: ObjectFaker
    guard: CircularDependencyGuard
    constructed: int = 0

    @property
    def in_flight(self) -> tuple[Any, ...]:
        return self.guard.stack
