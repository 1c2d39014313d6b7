"""Two-outcome results and the combinators used to sequence them.

Handlers express "parse id, else 400; parse precondition, else 428/400;
run the operation, else 412; else 2xx" as one linear pipeline. Every step
returns either ``Ok(value)`` or ``Err(error)``; the first ``Err`` short-circuits
the rest.

Expected failures travel as values. Exceptions are only raised by the
``*_raise`` helpers, for callers that treat failure as unrecoverable.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterable, Optional, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]


def bind(result: Result, fn: Callable[[Any], Result]) -> Result:
    if isinstance(result, Err):
        return result
    return fn(result.value)


def map_right(result: Result, fn: Callable[[Any], Any]) -> Result:
    if isinstance(result, Err):
        return result
    return Ok(fn(result.value))


def map_left(result: Result, fn: Callable[[Any], Any]) -> Result:
    if isinstance(result, Ok):
        return result
    return Err(fn(result.error))


def coalesce(result: Result) -> Any:
    """Collapse a result whose channels carry the same type into one value."""

    if isinstance(result, Ok):
        return result.value
    return result.error


def match(result: Result, on_ok: Callable[[Any], U], on_err: Callable[[Any], U]) -> U:
    if isinstance(result, Ok):
        return on_ok(result.value)
    return on_err(result.error)


def to_either(value: Optional[T], error: Union[E, Callable[[], E]]) -> Result:
    """Lift an optional into a result; ``None`` becomes ``Err(error)``.

    ``error`` may be a zero-argument callable so it is only built when needed.
    """

    if value is None:
        return Err(error() if callable(error) else error)
    return Ok(value)


def to_optional(result: Result) -> Optional[Any]:
    if isinstance(result, Ok):
        return result.value
    return None


def if_none(value: Optional[T], default: Union[T, Callable[[], T]]) -> T:
    if value is None:
        return default() if callable(default) else default
    return value


def if_none_raise(value: Optional[T], message: str) -> T:
    if value is None:
        raise LookupError(message)
    return value


def if_left_raise(result: Result, exc_type: Callable[[Any], Exception] = ValueError) -> Any:
    """Return the success value or raise ``exc_type(error)``."""

    if isinstance(result, Err):
        raise exc_type(result.error)
    return result.value


def sequence(results: Iterable[Result]) -> Result:
    """Turn an iterable of results into a result of a list; first error wins."""

    values: list[Any] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)


def apply(*results: Result) -> Result:
    """Combine independent results, collecting every error.

    Returns ``Ok(tuple_of_values)`` when all succeed, otherwise
    ``Err(list_of_errors)`` in argument order. An error that is itself a list
    is flattened so nested validations merge cleanly.
    """

    errors: list[Any] = []
    values: list[Any] = []
    for result in results:
        if isinstance(result, Err):
            if isinstance(result.error, list):
                errors.extend(result.error)
            else:
                errors.append(result.error)
        else:
            values.append(result.value)
    if errors:
        return Err(errors)
    return Ok(tuple(values))


async def resolve(value: Union[T, Awaitable[T]]) -> T:
    """Await ``value`` if it is awaitable; callbacks may be sync or async."""

    if inspect.isawaitable(value):
        return await value
    return value


async def bind_async(result: Result, fn: Callable[[Any], Union[Result, Awaitable[Result]]]) -> Result:
    if isinstance(result, Err):
        return result
    return await resolve(fn(result.value))
