# ABOUTME: Tri-state Resource envelope used to report progress and outcome of async work.
# ABOUTME: Every streaming operation yields Loading, then exactly one Success or Error.

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    """Work for the operation is in progress (or has just stopped)."""

    is_loading: bool = True


@dataclass(frozen=True)
class Success(Generic[T]):
    """Terminal state carrying the operation's complete result."""

    data: T


@dataclass(frozen=True)
class Error:
    """Terminal state for an operation that could not complete."""

    message: str


Resource = Union[Loading, Success[T], Error]


def is_terminal(resource: "Resource") -> bool:
    """Whether the resource ends its stream (Success or Error)."""
    return isinstance(resource, (Success, Error))
