from __future__ import annotations

from collections.abc import Iterable
from importlib import import_module
from importlib.metadata import entry_points
from inspect import getmembers, isabstract, isclass, ismodule
from typing import TYPE_CHECKING, Any

import monkay
from loguru import logger
from rich.markup import escape

from objectfaker.exceptions import PluginLoadError
from objectfaker.utils.compat import is_class_and_subclass
from objectfaker.utils.terminal import Print

from .base import BaseGenerator, Generator, get_target_type
from .builtins import get_builtin_generators
from .registry import GeneratorRegistry

if TYPE_CHECKING:
    from faker import Faker

    from objectfaker.conf.global_settings import ObjectFakerSettings

terminal = Print()


def _instantiate(candidate: Any, faker: Faker) -> list[Generator]:
    if ismodule(candidate):
        return [
            value(faker)
            for _, value in getmembers(candidate, isclass)
            if is_class_and_subclass(value, BaseGenerator)
            and value.__module__ == candidate.__name__
            and not isabstract(value)
            and value.generate is not BaseGenerator.generate
        ]
    if is_class_and_subclass(candidate, BaseGenerator):
        return [candidate(faker)]
    if isclass(candidate):
        candidate = candidate()
    if isinstance(candidate, Generator):
        return [candidate]
    raise PluginLoadError(f"{candidate!r} is neither a generator nor a module of generators.")


def load_plugin(path: str) -> Any:
    """
    Loads a plugin object from a dotted path, which may also name a module.
    """
    if ":" not in path:
        try:
            return import_module(path)
        except ModuleNotFoundError as exc:
            # only a miss of the path itself falls through, not of its imports
            if exc.name is None or not path.startswith(exc.name):
                raise
    return monkay.load(path)


def iter_plugin_sources(settings: ObjectFakerSettings) -> Iterable[tuple[str, Any]]:
    """
    Yields `(name, loader)` pairs for every configured plugin.

    The loader is a zero argument callable returning the plugin object, so
    import errors surface when the plugin is actually loaded.
    """
    for path in settings.generators:
        yield path, lambda path=path: load_plugin(path)
    if settings.generator_entry_point_group:
        for entry_point in entry_points(group=settings.generator_entry_point_group):
            yield entry_point.name, entry_point.load


def load_plugin_generators(
    faker: Faker, settings: ObjectFakerSettings
) -> list[tuple[Any, Generator]]:
    """
    Imports and instantiates the configured generator plugins.

    Parameters:
        faker (Faker): Handed to every plugin generator class on instantiation.
        settings (ObjectFakerSettings): Source of the plugin paths, the entry
            point group and the error policy.

    Returns:
        list[tuple[Any, Generator]]: `(target type, generator)` pairs in discovery order.

    Raises:
        PluginLoadError: If a plugin fails and `ignore_plugin_errors` is disabled.
    """
    result: list[tuple[Any, Generator]] = []
    for name, load in iter_plugin_sources(settings):
        try:
            for generator in _instantiate(load(), faker):
                result.append((get_target_type(generator), generator))
        except Exception as exc:
            if not settings.ignore_plugin_errors:
                if isinstance(exc, PluginLoadError):
                    raise
                raise PluginLoadError(f'Generator plugin "{name}" failed to load.', detail=repr(exc)) from exc
            logger.opt(exception=exc).debug(f'Generator plugin "{name}" failed to load.')
            terminal.write_warning(
                f'Generator plugin "{name}" could not be loaded: "{escape(repr(exc))}". Skipped.'
            )
    return result


def load_generators(
    faker: Faker,
    *,
    settings: ObjectFakerSettings | None = None,
    registry: GeneratorRegistry | None = None,
) -> GeneratorRegistry:
    """
    Populates a registry from the built-in generators and the configured plugins.

    Both sources are registered in the order given by `generator_load_order`;
    the last registration for a type wins.

    Parameters:
        faker (Faker): The Faker instance backing the generators.
        settings (ObjectFakerSettings | None, optional): Defaults to the active settings.
        registry (GeneratorRegistry | None, optional): Registry to populate.
            Defaults to a new, empty registry.

    Returns:
        GeneratorRegistry: The populated registry.
    """
    if settings is None:
        from objectfaker.conf import settings as active_settings

        settings = active_settings
    if registry is None:
        registry = GeneratorRegistry()

    builtins = [(get_target_type(generator), generator) for generator in get_builtin_generators(faker)]
    plugins = load_plugin_generators(faker, settings)
    if settings.generator_load_order == "builtins_first":
        ordered = [*builtins, *plugins]
    else:
        ordered = [*plugins, *builtins]
    for target, generator in ordered:
        registry.register(target, generator)
    logger.debug(f"Loaded {len(builtins)} built-in and {len(plugins)} plugin generators.")
    return registry


__all__ = ["load_generators", "load_plugin", "load_plugin_generators", "iter_plugin_sources"]
