from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class CircularDependencyGuard:
    """
    Tracks the composite types under construction on the current call path.

    Before a type is constructed, its occurrences on the stack are counted. If
    the count exceeds `max_depth` the construction is abandoned, which bounds
    self or mutual recursion (a `Node` referencing a `Node`) to `max_depth`
    extra levels of nesting.
    """

    def __init__(self, max_depth: int = 0) -> None:
        self.max_depth = max_depth
        self._stack: list[Any] = []

    @property
    def stack(self) -> tuple[Any, ...]:
        return tuple(self._stack)

    def depth_of(self, target: Any) -> int:
        return sum(1 for entry in self._stack if entry == target)

    def exceeds(self, target: Any) -> bool:
        return self.depth_of(target) > self.max_depth

    @contextmanager
    def enter(self, target: Any) -> Iterator[None]:
        self._stack.append(target)
        try:
            yield
        finally:
            popped = self._stack.pop()
            assert popped is target, f"In-flight stack corrupted: {popped!r} popped for {target!r}."

    def __len__(self) -> int:
        return len(self._stack)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_depth={self.max_depth}, stack={self._stack!r})"
