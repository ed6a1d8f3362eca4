from enum import Enum

from rich.console import Console


class OutputColour(str, Enum):
    """
    Colours used for terminal messages, compatible with Rich markup.
    """

    WARNING = "yellow"

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return str(self)


class Print(Console):
    """
    Prints coloured messages to the terminal using Rich's `console.print`.

    Used for user facing notices, for example a configured generator plugin
    that could not be loaded. Internal traces go through loguru instead.
    """

    def write_warning(self, message: str, colour: str = OutputColour.WARNING) -> None:
        self.print(self.message(message, colour))

    def message(self, message: str, colour: str) -> str:
        """
        Wraps a message in Rich colour tags, e.g. `"[yellow]my message[/yellow]"`.
        """
        return f"[{colour}]{message}[/{colour}]"
