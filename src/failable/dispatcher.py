"""Ordered listener registry keyed by a closed set of state names.

A ``Dispatcher`` maps each valid state to a list of callbacks. ``dispatch``
invokes the callbacks registered under one state, in registration order.
The set of states is fixed at construction; naming any other state is a
programming error and raises ``InvalidStateError``.

Listeners should not raise: an exception propagates out of ``dispatch`` and
the remaining listeners for that call are skipped.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import threading
from typing import Any

from failable.errors import ConfigurationError, InvalidStateError

type Handler = Callable[[Any], Any]


class Dispatcher[S: str]:
    """Broadcast registry over a fixed, finite set of state names."""

    __slots__ = ("_handlers", "_lock", "valid_states")

    def __init__(self, valid_states: Iterable[S]) -> None:
        states = tuple(valid_states)
        if not states:
            raise ConfigurationError(
                "Dispatcher requires at least one state",
                hint="Pass the closed set of names, e.g. Dispatcher(State)",
            )
        for state in states:
            if not isinstance(state, str):
                raise ConfigurationError(
                    f"State names must be strings, got {state!r}",
                    hint="Use str values or a (str, Enum) class",
                )
        if len(set(states)) != len(states):
            raise ConfigurationError(
                f"Duplicate state names in {states!r}",
                hint="Each state may appear once",
            )

        self.valid_states: tuple[S, ...] = states
        self._handlers: dict[S, list[Handler]] = {state: [] for state in states}
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{str.__str__(s)}={len(h)}" for s, h in self._handlers.items()
        )
        return f"Dispatcher({counts})"

    def handlers_of(self, state: S) -> list[Handler]:
        """Return the live handler list of ``state``.

        Intended for low-level utilities and tests; mutations are visible to
        the registry and are not guarded by its lock.
        """
        try:
            handlers = self._handlers.get(state)
        except TypeError as e:
            raise self._invalid(state) from e
        if handlers is None:
            raise self._invalid(state)
        return handlers

    def _invalid(self, state: object) -> InvalidStateError:
        names = ", ".join(map(str.__str__, self.valid_states))
        return InvalidStateError(state, hint=f"Valid states: {names}")

    def add_listener(self, state: S, handler: Handler) -> None:
        """Register ``handler`` under ``state``.

        The same handler may be registered more than once and is then invoked
        once per registration.
        """
        with self._lock:
            self.handlers_of(state).append(handler)

    def remove_listener(self, state: S, handler: Handler | None = None) -> None:
        """Unregister ``handler`` from ``state``, or every handler when omitted.

        Only the first matching registration is removed per call. Removing a
        handler that is not registered does nothing; keep a reference to the
        handler you registered, since an equivalent lambda will not match.
        """
        with self._lock:
            handlers = self.handlers_of(state)
            if handler is None:
                handlers.clear()
            elif handler in handlers:
                handlers.remove(handler)

    def dispatch(self, state: S, data: Any) -> None:
        """Invoke every handler registered under ``state`` with ``data``."""
        with self._lock:
            snapshot = tuple(self.handlers_of(state))
        for handler in snapshot:
            handler(data)

    def clear(self) -> None:
        """Remove every handler of every state. The registry stays usable."""
        with self._lock:
            for handlers in self._handlers.values():
                handlers.clear()


__all__ = ["Dispatcher", "Handler"]
