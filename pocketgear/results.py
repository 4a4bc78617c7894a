from dataclasses import dataclass
from typing import Awaitable, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: Exception


Result = Union[Ok[T], Err]


async def attempt(awaitable: Awaitable[T]) -> "Result[T]":
    """Await and capture the outcome as a Result instead of raising."""
    try:
        return Ok(await awaitable)
    except Exception as e:
        return Err(e)
