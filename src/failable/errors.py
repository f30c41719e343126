"""Exception hierarchy for failable."""

from __future__ import annotations

from typing import Any


class FailableError(Exception):
    """Base exception for all failable errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message, followed by the hint when one is set."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(FailableError):
    """Invalid construction arguments."""


class InvariantViolationError(FailableError):
    """A programming error: the library was used in a way it cannot recover from.

    These are never converted into failure values; they surface immediately
    at the point of misuse.
    """


class MissingHandlerError(InvariantViolationError):
    """A pending value was matched without a pending handler."""

    def __init__(self, matcher: str, *, hint: str | None = None) -> None:
        self.matcher = matcher
        super().__init__(
            f"Called `{matcher}` without a pending handler while the value is pending",
            hint=hint
            or "Pass pending=... or make sure the value has settled before matching",
        )


class InvalidStateError(InvariantViolationError):
    """A state name outside the recognized set was used."""

    def __init__(self, state: Any, *, hint: str | None = None) -> None:
        self.state = state
        super().__init__(f"{state!r} is not a valid state", hint=hint)


class NotFailableError(InvariantViolationError):
    """A value expected to be a Failable failed the type guard."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Invariant violation: {value!r} is not a Failable",
            hint="Build one with success(), failure() or pending, or pass a callable",
        )


__all__ = [
    "ConfigurationError",
    "FailableError",
    "InvalidStateError",
    "InvariantViolationError",
    "MissingHandlerError",
    "NotFailableError",
]
