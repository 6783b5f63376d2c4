"""Result type used for every fallible release step.

Operations that talk to git, gh, the GitHub API or the filesystem return
``Ok(value)`` or ``Err(error)`` instead of raising, so the task runners can
decide per call site whether a failure is fatal, a warning or an expected
"already done" outcome.

Usage:
    match repo.tags():
        case Ok(tags):
            print(last_release(tags))
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the carried value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]
