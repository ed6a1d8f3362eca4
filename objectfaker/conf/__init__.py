from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from monkay import Monkay

    from objectfaker.conf.global_settings import ObjectFakerSettings


@lru_cache
def get_objectfaker_monkay() -> Monkay[None, ObjectFakerSettings]:
    """
    Returns the package Monkay instance, evaluating the settings (and their
    preloads) on first use.
    """
    from objectfaker import monkay

    monkay.evaluate_settings(on_conflict="error", ignore_import_errors=False)
    return monkay


class SettingsForward:
    """
    Forwards attribute reads to the active settings, so overrides made with
    `monkay.with_settings` are seen by modules holding a reference to
    `settings`.
    """

    def __getattribute__(self, name: str) -> Any:
        return getattr(get_objectfaker_monkay().settings, name)


settings: ObjectFakerSettings = cast("ObjectFakerSettings", SettingsForward())

__all__ = ["settings"]
