"""Result type for error handling without exceptions.

Every step of the destroy pipeline returns a Result. Callers branch on it
with pattern matching:

    match write_descriptor(workspace, region, bucket, key):
        case Ok(path):
            ...
        case Err(error):
            ...
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Step succeeded with a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Step failed with an error value."""

    error: E


type Result[T, E] = Ok[T] | Err[E]


def map_err(result: Result[T, E], f: Callable[[E], U]) -> Result[T, U]:
    """Convert the error of an Err, pass an Ok through untouched."""
    match result:
        case Ok() as o:
            return o
        case Err(error):
            return Err(f(error))
