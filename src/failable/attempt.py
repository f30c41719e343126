"""Try: a wrapper that streamlines handling a single Failable."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from failable.errors import MissingHandlerError, NotFailableError
from failable.matching import when
from failable.primitives import is_failable, is_pending, to_failable

if TYPE_CHECKING:
    from collections.abc import Callable

    from failable.observing import Channel
    from failable.primitives import Failable


class Try[T]:
    """Wrap an existing Failable, or the outcome of a callable that may raise.

    When a ``channel`` is given, the wrapped state is broadcast through it on
    construction, so listeners see every Try as it is created.
    """

    __slots__ = ("failable",)

    def __init__(
        self,
        f: Failable[T] | Callable[[], T],
        *,
        channel: Channel | None = None,
    ) -> None:
        failable: Any = to_failable(f) if callable(f) else f
        if not is_failable(failable):
            raise NotFailableError(f)
        self.failable: Failable[T] = failable
        if channel is not None:
            channel.broadcast(failable)

    def __repr__(self) -> str:
        return f"Try({self.failable!r})"

    def on[A, B, C](
        self,
        *,
        success: Callable[[T], A],
        failure: Callable[[Exception], B],
        pending: Callable[[], C] | None = None,
    ) -> A | B | C:
        """Match the wrapped value; a missing pending handler raises when pending."""
        if pending is None and is_pending(self.failable):
            raise MissingHandlerError("Try.on")
        return when(self.failable, success=success, failure=failure, pending=pending)

    def map[A, B, C](
        self,
        *,
        on_success: Callable[[T], A],
        on_failure: Callable[[Exception], B],
        pending: Callable[[], C] | None = None,
    ) -> A | B | C | None:
        """Like ``on``, but a pending value without a pending handler yields None."""
        return when(
            self.failable,
            success=on_success,
            failure=on_failure,
            pending=pending if pending is not None else _none,
        )


def _none() -> None:
    return None


__all__ = ["Try"]
