from __future__ import annotations

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorSettings(BaseSettings):
    """
    Settings controlling where value generators come from and how collections
    are sized.
    """

    generators: list[str] | tuple[str, ...] = ()
    """
    Dotted paths of generator plugins.

    Each entry may name a generator class (`"myapp.fakes.MoneyGenerator"` or
    `"myapp.fakes:MoneyGenerator"`), a generator instance, or a module. Modules
    are scanned for concrete `BaseGenerator` subclasses defined in them.
    """
    generator_entry_point_group: str | None = "objectfaker.generators"
    """
    Package entry point group scanned for generator plugins. `None` disables
    entry point discovery.
    """
    generator_load_order: Literal["plugins_first", "builtins_first"] = "plugins_first"
    """
    Registration order of plugin and built-in generators. The last registration
    for a type wins, so with the default `"plugins_first"` a built-in generator
    replaces a plugin generator for the same type.
    """
    ignore_plugin_errors: bool = True
    """
    When `True` a plugin that fails to load is reported and skipped, otherwise
    a `PluginLoadError` is raised while the registry is being populated.
    """
    collection_min_size: int = 1
    """Minimum number of elements produced for generated collections."""
    collection_max_size: int = 5
    """Maximum number of elements produced for generated collections."""

    @model_validator(mode="after")
    def check_collection_sizes(self) -> GeneratorSettings:
        if self.collection_min_size < 0:
            raise ValueError("collection_min_size must not be negative.")
        if self.collection_max_size < self.collection_min_size:
            raise ValueError("collection_max_size must be greater or equal collection_min_size.")
        return self


class ObjectFakerSettings(GeneratorSettings):
    """
    Main settings class of objectfaker.

    The active settings class is chosen by the `OBJECTFAKER_SETTINGS_MODULE`
    environment variable and every field can also be set from an environment
    variable prefixed with `OBJECTFAKER_`.
    """

    model_config = SettingsConfigDict(extra="allow", env_prefix="OBJECTFAKER_")

    max_circular_dependency_depth: int = 0
    """
    How many times a composite type may already be under construction on the
    current path before another nested construction of it is abandoned.

    `0` forbids any self-referential nesting: a `Node.next: Node` field stays
    `None`.
    """
    constructor_selection: Literal["invoke_all", "most_parameters"] = "invoke_all"
    """
    How constructors are chosen.

    - `"invoke_all"`: every constructor is invoked, most parameters first, and
      the instance of the last one invoked is kept.
    - `"most_parameters"`: constructors are tried most parameters first and
      the first one that succeeds is kept; the next one is only invoked when
      the previous one raised.
    """
    faker_locale: str | list[str] | None = None
    """Locale(s) handed to the `faker.Faker` instance backing the built-in generators."""
    faker_seed: int | None = None
    """Seed applied to the Faker instance for reproducible values."""
    extra_terminal_types: list[str] | tuple[str, ...] = ()
    """
    Dotted paths of additional types treated as terminal, i.e. generated
    directly by their registered generator instead of being constructed.
    """
    preloads: list[str] | tuple[str, ...] = ()
    """
    Module paths imported when the settings are evaluated, for example modules
    that register generators.
    """
