"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: shared listener doubles and label sets
used across the unit and contract suites.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass
class Recorder:
    """Listener double that records every call in order.

    ``tag`` lets several recorders share one ``calls`` list, which makes
    cross-listener ordering assertions straightforward.
    """

    tag: str = "rec"
    calls: list[tuple[str, Any]] = field(default_factory=list)

    def __call__(self, data: Any) -> None:
        self.calls.append((self.tag, data))

    @property
    def payloads(self) -> list[Any]:
        return [data for _, data in self.calls]


class ABC(str, Enum):
    """An arbitrary closed label set, unrelated to Failable states."""

    A = "a"
    B = "b"
    C = "c"
