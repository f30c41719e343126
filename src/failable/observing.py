"""Matcher composed with a listener registry.

A ``Channel`` owns (or is handed) a ``Dispatcher`` over ``State``. Every value
passed through ``Channel.when`` is first broadcast to the dispatcher, then
matched against the caller's handlers. The broadcast always completes, even
when the caller's match goes on to raise ``MissingHandlerError``.

Example:
    channel = Channel()
    channel.add_listener(State.FAILURE, errors.append)
    channel.when(value, success=render, failure=show_error)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from failable.dispatcher import Dispatcher
from failable.matching import when
from failable.state import State

if TYPE_CHECKING:
    from collections.abc import Callable

    from failable.dispatcher import Handler
    from failable.primitives import Failable


class Channel:
    """An observation point for Failables.

    Channels are explicitly constructed and passed to whoever needs them;
    there is no process-wide registry.
    """

    __slots__ = ("dispatcher",)

    def __init__(self, dispatcher: Dispatcher[State] | None = None) -> None:
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher(State)

    def when[T, A, B, C](
        self,
        f: Failable[T],
        *,
        success: Callable[[T], A],
        failure: Callable[[Exception], B],
        pending: Callable[[], C] | None = None,
    ) -> A | B | C:
        """Broadcast ``f`` to the listeners, then match it like ``when``."""
        self.broadcast(f)
        return when(f, success=success, failure=failure, pending=pending)

    def broadcast[T](self, f: Failable[T]) -> None:
        """Dispatch ``f``'s state and payload without matching it further."""
        when(
            f,
            success=lambda value: self.dispatch(State.SUCCESS, value),
            failure=lambda error: self.dispatch(State.FAILURE, error),
            pending=lambda: self.dispatch(State.PENDING, None),
        )

    def dispatch(self, state: State, data: Any) -> None:
        self.dispatcher.dispatch(state, data)

    def add_listener(self, state: State, handler: Handler) -> None:
        """Register ``handler`` for every value of ``state`` matched here.

        For example, ``channel.add_listener(State.FAILURE, log.warning)``
        logs every error that flows through ``channel.when``.
        """
        self.dispatcher.add_listener(state, handler)

    def remove_listener(self, state: State, handler: Handler | None = None) -> None:
        self.dispatcher.remove_listener(state, handler)

    def clear(self) -> None:
        self.dispatcher.clear()


__all__ = ["Channel"]
