"""Mutable, observable holders around the immutable tagged values.

A holder keeps one current value and replaces it on every transition; the
transition rules are those of the immutable values (``begin_loading`` for
Loadables). Each holder owns a ``Dispatcher`` (``holder.changes``) and
broadcasts the new value under its new state after every transition, so
observers can react without polling.

Lifecycle hooks (``did_become_success`` and friends) are no-ops meant to be
overridden in subclasses. They run after the value is replaced and before
observers are notified.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
import logging
from typing import TYPE_CHECKING, Self

from failable.dispatcher import Dispatcher
from failable.lazy import force
from failable.loadable import EMPTY, begin_loading, match_loadable, state_of
from failable.matching import when
from failable.primitives import PENDING, Failure, Success
from failable.state import Availability, LoadableState, State

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from failable.dispatcher import Handler
    from failable.lazy import Lazy
    from failable.loadable import Loadable
    from failable.primitives import Failable

log = logging.getLogger(__name__)


class _Holder[T, V, S: str](ABC):
    """Shared plumbing: value replacement, observation and ``accept``."""

    def __init__(self, initial: V, changes: Dispatcher[S]) -> None:
        self._value = initial
        self.changes = changes

    @property
    def value(self) -> V:
        """The current immutable value."""
        return self._value

    @property
    @abstractmethod
    def state(self) -> S:
        """The tag of the current value."""

    def __repr__(self) -> str:
        data = getattr(self._value, "value", getattr(self._value, "error", None))
        return f"{type(self).__name__}(state={self.state.value}, data={data!r})"

    def _replace(self, new: V) -> None:
        old_state = self.state
        self._value = new
        log.debug(
            "%s: %s -> %s", type(self).__name__, old_state.value, self.state.value
        )

    def _notify(self) -> None:
        self.changes.dispatch(self.state, self._value)

    def success(self, data: T) -> Self:
        """Become a success holding ``data``. Returns ``self`` for chaining."""
        self._replace(Success(data))
        self.did_become_success(data)
        self._notify()
        return self

    def did_become_success(self, data: T) -> None:
        """Invoked after becoming a success."""

    def failure(self, error: BaseException) -> Self:
        """Become a failure holding ``error``. Returns ``self`` for chaining."""
        self._replace(Failure(error))
        self.did_become_failure(error)
        self._notify()
        return self

    def did_become_failure(self, error: BaseException) -> None:
        """Invoked after becoming a failure."""

    @abstractmethod
    def pending(self) -> Self:
        """Enter the in-flight state. Returns ``self`` for chaining."""

    def subscribe(self, callback: Handler) -> Callable[[], None]:
        """Call ``callback(value)`` after every transition.

        Returns a function that undoes the subscription.
        """
        for state in self.changes.valid_states:
            self.changes.add_listener(state, callback)

        def unsubscribe() -> None:
            for state in self.changes.valid_states:
                self.changes.remove_listener(state, callback)

        return unsubscribe

    def accept(self, awaitable: Awaitable[T]) -> Self:
        """Track an in-flight operation.

        Goes pending right away, then settles to a success or a failure when
        ``awaitable`` completes. Coroutines are scheduled on the running loop.
        Nothing is cancelled: if ``accept`` is called again before the first
        operation settles, whichever settles last determines the value.
        When ``awaitable`` cannot be scheduled (no event loop) the error
        propagates and the holder is left as it was.
        """
        future = asyncio.ensure_future(awaitable)
        self.pending()
        future.add_done_callback(self._settle)
        return self

    def _settle(self, future: asyncio.Future[T]) -> None:
        if future.cancelled():
            log.debug("%s: accepted operation was cancelled", type(self).__name__)
            self.failure(asyncio.CancelledError())
            return
        error = future.exception()
        if error is not None:
            self.failure(error)
        else:
            self.success(future.result())


class FailableHolder[T](_Holder[T, "Failable[T]", State]):
    """A mutable Failable. Starts pending.

    ``success``, ``failure`` and ``pending`` switch between the three states;
    prefer ``match`` over the ``is_*`` properties for day-to-day use.
    """

    def __init__(self, *, dispatcher: Dispatcher[State] | None = None) -> None:
        super().__init__(
            PENDING, dispatcher if dispatcher is not None else Dispatcher(State)
        )

    @property
    def state(self) -> State:
        return State(type(self._value).state.value)

    @property
    def is_success(self) -> bool:
        return self.state is State.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.state is State.FAILURE

    @property
    def is_pending(self) -> bool:
        return self.state is State.PENDING

    def pending(self) -> Self:
        """Become pending, dropping any data. Returns ``self`` for chaining."""
        self._replace(PENDING)
        self.did_become_pending()
        self._notify()
        return self

    def did_become_pending(self) -> None:
        """Invoked after becoming pending."""

    def match[A, B, C](
        self,
        *,
        success: Callable[[T], A],
        failure: Callable[[Exception], B],
        pending: Callable[[], C] | None = None,
    ) -> A | B | C:
        """Invoke the handler for the current state. See ``failable.when``."""
        return when(self._value, success=success, failure=failure, pending=pending)

    def success_or[U](self, default: Lazy[U]) -> T | U:
        """Return the success value, or ``default`` (forced only when needed)."""
        return self.match(
            success=lambda v: v,
            failure=lambda _: force(default),
            pending=lambda: force(default),
        )

    def failure_or[U](self, default: Lazy[U]) -> Exception | U:
        """Return the error, or ``default`` (forced only when needed)."""
        return self.match(
            success=lambda _: force(default),
            failure=lambda e: e,
            pending=lambda: force(default),
        )


class LoadableHolder[T](_Holder[T, "Loadable[T]", LoadableState]):
    """A mutable Loadable. Starts empty.

    ``loading`` starts a request: empty becomes pending, success becomes
    reloading and failure becomes retrying, keeping whatever data was there.
    ``pending`` is an alias of ``loading``; unlike ``FailableHolder.pending``
    it never clears data.
    """

    def __init__(self, *, dispatcher: Dispatcher[LoadableState] | None = None) -> None:
        super().__init__(
            EMPTY, dispatcher if dispatcher is not None else Dispatcher(LoadableState)
        )

    @property
    def state(self) -> LoadableState:
        return state_of(self._value)

    @property
    def is_success(self) -> bool:
        """True for success and reloading."""
        return self.state.availability is Availability.VALUE

    @property
    def is_failure(self) -> bool:
        """True for failure and retrying."""
        return self.state.availability is Availability.ERROR

    @property
    def is_pending(self) -> bool:
        """True for empty and pending."""
        return self.state.availability is Availability.NONE

    @property
    def is_loading(self) -> bool:
        """True for pending, reloading and retrying."""
        return self.state.is_busy

    def loading(self) -> Self:
        """Start loading. Does nothing, hook included, when already busy."""
        new = begin_loading(self._value)
        if new is self._value:
            return self
        self._replace(new)
        self.did_become_loading()
        self._notify()
        return self

    def did_become_loading(self) -> None:
        """Invoked after entering pending, reloading or retrying."""

    def pending(self) -> Self:
        return self.loading()

    def match[A, B, C](
        self,
        *,
        success: Callable[[T, bool], A],
        failure: Callable[[Exception, bool], B],
        pending: Callable[[bool], C] | None = None,
    ) -> A | B | C:
        """Invoke the handler for the current availability.

        Every handler also receives ``loading``. See ``match_loadable``.
        """
        return match_loadable(
            self._value, success=success, failure=failure, pending=pending
        )

    def success_or[U](self, default: Lazy[U]) -> T | U:
        """Return the value (also while reloading), or ``default``."""
        return self.match(
            success=lambda v, _: v,
            failure=lambda _e, _l: force(default),
            pending=lambda _: force(default),
        )

    def failure_or[U](self, default: Lazy[U]) -> Exception | U:
        """Return the error (also while retrying), or ``default``."""
        return self.match(
            success=lambda _v, _l: force(default),
            failure=lambda e, _: e,
            pending=lambda _: force(default),
        )


__all__ = ["FailableHolder", "LoadableHolder"]
