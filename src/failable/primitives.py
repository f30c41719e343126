"""Tagged values for pending / success / failure.

Every value carries its tag in the class-level ``state`` discriminant, which
is always one of the recognized ``State`` members. Values are frozen: a
transition always builds a new value.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, ClassVar, TypeGuard

from failable.state import State

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful value."""

    state: ClassVar[State] = State.SUCCESS

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E: BaseException]:
    """A failure, containing the error."""

    state: ClassVar[State] = State.FAILURE

    error: E


@dataclasses.dataclass(frozen=True, slots=True)
class Pending:
    """A pending state. Carries no data."""

    state: ClassVar[State] = State.PENDING

    def __repr__(self) -> str:
        return "pending"


type Failable[T] = Success[T] | Pending | Failure[Exception]
type Result[T] = Success[T] | Failure[Exception]

#: The shared pending value.
PENDING: Pending = Pending()
pending = PENDING

_TAGGED = (Success, Failure, Pending)
_RECOGNIZED = frozenset(State)


def success[T](value: T) -> Success[T]:
    """Construct a success, given a value."""
    return Success(value)


def failure[E: BaseException](error: E) -> Failure[E]:
    """Construct a failure, given an error."""
    return Failure(error)


def is_success[T](f: Failable[T]) -> TypeGuard[Success[T]]:
    return f.state is State.SUCCESS


def is_failure[T](f: Failable[T]) -> TypeGuard[Failure[Exception]]:
    return f.state is State.FAILURE


def is_pending[T](f: Failable[T]) -> TypeGuard[Pending]:
    return f.state is State.PENDING


def is_failable(x: Any) -> TypeGuard[Failable[Any]]:
    """Return True if ``x`` is a three-state tagged value.

    Safe to call on arbitrary input; never raises.
    """
    return isinstance(x, _TAGGED) and type(x).state in _RECOGNIZED


def to_result[T](f: Callable[[], T]) -> Result[T]:
    """Convert a zero-argument call into a Result.

    The return value becomes a success; an ``Exception`` raised by the call
    becomes a failure holding that very exception. Since the call is
    synchronous, the outcome is never pending.
    """
    try:
        return Success(f())
    except Exception as e:
        return Failure(e)


def to_failable[T](f: Callable[[], T]) -> Failable[T]:
    """Same as ``to_result``, typed as a Failable."""
    return to_result(f)


__all__ = [
    "PENDING",
    "Failable",
    "Failure",
    "Pending",
    "Result",
    "Success",
    "failure",
    "is_failable",
    "is_failure",
    "is_pending",
    "is_success",
    "pending",
    "success",
    "to_failable",
    "to_result",
]
