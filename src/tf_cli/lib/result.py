"""Result type for the operations layer.

Operations never raise for expected failures. They return Ok(value) or
Err(error) and callers pattern match:

    match fetch_library(settings, root):
        case Err() as e:
            return e
        case Ok(library_dir):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success case containing a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error case containing an error."""

    error: E


type Result[T, E] = Ok[T] | Err[E]


def unwrap(result: Result[T, E]) -> T:
    """Extract the value from Ok, or raise ValueError if Err.

    Meant for tests and call sites that already checked the result.
    """
    match result:
        case Ok(value):
            return value
        case Err(error):
            raise ValueError(f"Called unwrap on Err: {error}")
