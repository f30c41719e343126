"""Exhaustive dispatch of a Failable to caller-supplied handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from failable.errors import InvalidStateError, MissingHandlerError
from failable.primitives import Failure, Pending, Success

if TYPE_CHECKING:
    from collections.abc import Callable

    from failable.primitives import Failable


def when[T, A, B, C](
    f: Failable[T],
    *,
    success: Callable[[T], A],
    failure: Callable[[Exception], B],
    pending: Callable[[], C] | None = None,
) -> A | B | C:
    """Invoke the handler matching ``f``'s state and return its result.

    ``success`` receives the value and ``failure`` the error; ``pending``
    takes no arguments. ``pending`` may be omitted only where ``f`` can
    never be pending: matching a pending value without it raises
    ``MissingHandlerError`` instead of returning nothing.
    """
    match f:
        case Success(value=value):
            return success(value)
        case Failure(error=error):
            return failure(error)
        case Pending():
            if pending is None:
                raise MissingHandlerError("when")
            return pending()
        case _:
            raise InvalidStateError(getattr(f, "state", f))


__all__ = ["when"]
