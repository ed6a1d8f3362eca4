import typing


class ObjectFakerException(Exception):
    """
    Base exception class for all objectfaker errors.

    Object construction itself never raises. These exceptions surface
    configuration problems: unknown generators requested directly from a
    registry, plugins that cannot be loaded or that do not declare the type
    they generate.
    """

    def __init__(
        self,
        *args: typing.Any,
        detail: str = "",
    ):
        """
        Initializes the ObjectFakerException.

        Args:
            *args (typing.Any): Variable length argument list to be included
                in the exception message.
            detail (str, optional): A more detailed explanation of the exception.
                Defaults to an empty string.
        """
        self.detail = detail
        super().__init__(*(str(arg) for arg in args if arg), self.detail)

    def __repr__(self) -> str:
        if self.detail:
            return f"{type(self).__name__} - {self.detail}"
        return type(self).__name__

    def __str__(self) -> str:
        return "".join(self.args).strip()


class GeneratorNotFound(ObjectFakerException, KeyError):
    """
    Raised by `GeneratorRegistry.lookup` when no generator is registered for a type.

    It is also a `KeyError`, so registries can be used like mappings.
    """


class InvalidGeneratorError(ObjectFakerException):
    """
    Raised when a generator does not declare the type it generates values for.
    """


class PluginLoadError(ObjectFakerException):
    """
    Raised when a configured generator plugin cannot be imported or instantiated
    and `ignore_plugin_errors` is disabled.
    """


class DegradeToDefault(BaseException):
    """
    Internal sentinel signalling that the subtree under construction cannot be
    built and must fall back to the default value of its type.

    It inherits from `BaseException` so that the broad `except Exception`
    handlers around generators and constructors do not intercept it.
    """

    ...
