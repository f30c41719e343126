"""Possibly-lazy values."""

from __future__ import annotations

from collections.abc import Callable

#: A value, or a zero-argument callable producing it. The value itself cannot
#: be callable, since it would be mistaken for the producer.
type Lazy[T] = T | Callable[[], T]


def force[T](v: Lazy[T]) -> T:
    """Evaluate ``v``: call it if it is callable, else return it as-is."""
    return v() if callable(v) else v


__all__ = ["Lazy", "force"]
