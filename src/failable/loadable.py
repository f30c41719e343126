"""Loadable: six tagged values on an availability x flight lattice.

A Loadable extends the Failable tags with an orthogonal "request in flight"
axis. ``Success``, ``Failure`` and ``PENDING`` are shared with the
three-state model; ``Empty``, ``Reloading`` and ``Retrying`` are added here.

``begin_loading`` is the only transition defined on top of plain
construction:

* ``empty``   -> ``pending``
* ``success`` -> ``reloading`` (value kept)
* ``failure`` -> ``retrying`` (error kept)
* any busy tag -> unchanged

``empty`` is only ever the initial value; nothing transitions back into it.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, ClassVar, TypeGuard

from failable.errors import InvalidStateError, MissingHandlerError
from failable.primitives import PENDING, Failure, Pending, Success
from failable.state import LoadableState

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclasses.dataclass(frozen=True, slots=True)
class Empty:
    """No data and no request in flight."""

    state: ClassVar[LoadableState] = LoadableState.EMPTY

    def __repr__(self) -> str:
        return "empty"


@dataclasses.dataclass(frozen=True, slots=True)
class Reloading[T]:
    """A value that may soon be replaced by the request in flight."""

    state: ClassVar[LoadableState] = LoadableState.RELOADING

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Retrying[E: BaseException]:
    """An error whose recovery is being attempted."""

    state: ClassVar[LoadableState] = LoadableState.RETRYING

    error: E


type Loadable[T] = (
    Empty | Pending | Success[T] | Reloading[T] | Failure[Exception] | Retrying[Exception]
)

EMPTY: Empty = Empty()
empty = EMPTY

_TAGGED = (Empty, Pending, Success, Reloading, Failure, Retrying)


def reloading[T](value: T) -> Reloading[T]:
    return Reloading(value)


def retrying[E: BaseException](error: E) -> Retrying[E]:
    return Retrying(error)


def is_loadable(x: Any) -> TypeGuard[Loadable[Any]]:
    """Return True if ``x`` is one of the six Loadable values. Never raises."""
    return isinstance(x, _TAGGED)


def state_of[T](current: Loadable[T]) -> LoadableState:
    """Return the Loadable tag of ``current``."""
    if not is_loadable(current):
        raise InvalidStateError(getattr(current, "state", current))
    return LoadableState(type(current).state.value)


def is_empty[T](current: Loadable[T]) -> TypeGuard[Empty]:
    return state_of(current) is LoadableState.EMPTY


def is_reloading[T](current: Loadable[T]) -> TypeGuard[Reloading[T]]:
    return state_of(current) is LoadableState.RELOADING


def is_retrying[T](current: Loadable[T]) -> TypeGuard[Retrying[Exception]]:
    return state_of(current) is LoadableState.RETRYING


def is_loading[T](current: Loadable[T]) -> bool:
    """True exactly for ``pending``, ``reloading`` and ``retrying``."""
    return state_of(current).is_busy


def begin_loading[T](current: Loadable[T]) -> Loadable[T]:
    """Return the value ``current`` becomes when a load starts.

    Busy values are returned unchanged (the very same object), which is how
    callers tell a real transition from the no-op.
    """
    match current:
        case Empty():
            return PENDING
        case Success(value=value):
            return Reloading(value)
        case Failure(error=error):
            return Retrying(error)
        case Pending() | Reloading() | Retrying():
            return current
        case _:
            raise InvalidStateError(getattr(current, "state", current))


def match_loadable[T, A, B, C](
    current: Loadable[T],
    *,
    success: Callable[[T, bool], A],
    failure: Callable[[Exception, bool], B],
    pending: Callable[[bool], C] | None = None,
) -> A | B | C:
    """Invoke the handler matching ``current``'s availability.

    Each handler receives ``loading`` as its last argument: True while a
    request is in flight. ``success`` covers success and reloading,
    ``failure`` covers failure and retrying, ``pending`` covers empty and
    pending. As with ``when``, omitting ``pending`` is only safe when ``current``
    holds a value or an error.
    """
    loading = is_loading(current)
    match current:
        case Success(value=value) | Reloading(value=value):
            return success(value, loading)
        case Failure(error=error) | Retrying(error=error):
            return failure(error, loading)
        case _:
            if pending is None:
                raise MissingHandlerError("match_loadable")
            return pending(loading)


__all__ = [
    "EMPTY",
    "Empty",
    "Loadable",
    "Reloading",
    "Retrying",
    "begin_loading",
    "empty",
    "is_empty",
    "is_loadable",
    "is_loading",
    "is_reloading",
    "is_retrying",
    "match_loadable",
    "reloading",
    "retrying",
    "state_of",
]
