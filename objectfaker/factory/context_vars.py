from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import ConstructionContext

# Holds the context of the top-level `create` call in progress. Being a
# ContextVar, every thread and asyncio task sees its own value.
construction_context: ContextVar[ConstructionContext] = ContextVar("construction_context")
