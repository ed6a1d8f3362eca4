from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .classifier import default_value

if TYPE_CHECKING:
    from .descriptors import MemberDescriptor, ParameterDescriptor


def values_equal(left: Any, right: Any) -> bool:
    if left is right:
        return True
    try:
        return bool(left == right)
    except Exception:
        # e.g. array-like values refusing truthiness
        return False


def is_considered_initialized(
    member: MemberDescriptor,
    current_value: Any,
    parameters: Sequence[ParameterDescriptor] = (),
    arguments: Sequence[Any] = (),
) -> bool:
    """
    Decides whether a member already holds a meaningful value after construction.

    A member counts as initialized when

    - a constructor parameter with the same name and annotation received a
      value equal to the member's current value, or
    - the member's current value differs from the default value of its type.

    This is a heuristic. The second rule alone suffices, so any non-default
    value is kept whatever set it, and a generator that happened to return the
    default value is indistinguishable from an unset member.
    """
    for parameter, argument in zip(parameters, arguments):
        if (
            parameter.name == member.name
            and parameter.annotation == member.annotation
            and values_equal(argument, current_value)
        ):
            return True
    return not values_equal(default_value(member.annotation), current_value)
