from inspect import isclass
from typing import Any, TypeGuard, TypeVar, get_origin

T = TypeVar("T", bound=type)


def is_class_and_subclass(value: Any, _type: T | tuple[T, ...]) -> TypeGuard[T]:
    """
    Checks if a given `value` is both a class and a subclass of `_type`.

    Generic aliases like `list[str]` are checked through their origin.

    Examples:
        ```python
        assert is_class_and_subclass(MyGenerator, BaseGenerator)
        assert not is_class_and_subclass(MyGenerator(), BaseGenerator)
        assert is_class_and_subclass(list[str], list)
        ```
    """
    original = get_origin(value)

    if not original and not isclass(value):
        return False

    try:
        if original:
            return issubclass(original, _type)
        return issubclass(value, _type)
    except TypeError:
        return False
