"""Console output abstraction.

Tasks report progress through ConsoleProtocol instead of print() or the
logging module. RichConsole renders to the terminal; MockConsole records
output for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()  # commands being run, debug details
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Print a message only in verbose mode."""
        ...

    def header(self, message: str) -> None: ...


class RichConsole:
    """Console implementation using Rich."""

    def __init__(self, *, verbose: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console
        from rich.markup import escape

        self.verbose = verbose
        self._escape = escape
        self._console = Console(highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {self._escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {self._escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {self._escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {self._escape(message)}")

    def debug(self, message: str) -> None:
        if self.verbose:
            self._console.print(f"debug: {message}", style="dim", markup=False)

    def header(self, message: str) -> None:
        self._console.print(f"\n{message}", style="blue bold", markup=False)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing.

    Debug messages are always captured, regardless of ``verbose``.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    verbose: bool = True

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"debug: {message}", Style.DIM))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
