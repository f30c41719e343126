"""Closed state enumerations.

``State`` covers the three-state Failable. ``LoadableState`` covers the six
Loadable tags, each of which is a point on two independent axes:

============  ============  ======
tag           availability  flight
============  ============  ======
empty         none          idle
pending       none          busy
success       value         idle
reloading     value         busy
failure       error         idle
retrying      error         busy
============  ============  ======
"""

from __future__ import annotations

from enum import Enum


class State(str, Enum):
    """The three tags of a Failable."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class Availability(str, Enum):
    """Whether a Loadable holds no data, a value, or an error."""

    NONE = "none"
    VALUE = "value"
    ERROR = "error"


class Flight(str, Enum):
    """Whether a Loadable has a load in progress."""

    IDLE = "idle"
    BUSY = "busy"


class LoadableState(str, Enum):
    """The six tags of a Loadable."""

    #: No data and nothing in flight. Only ever the initial state.
    EMPTY = "empty"
    PENDING = "pending"
    SUCCESS = "success"
    RELOADING = "reloading"
    FAILURE = "failure"
    RETRYING = "retrying"

    @property
    def availability(self) -> Availability:
        return _AXES[self][0]

    @property
    def flight(self) -> Flight:
        return _AXES[self][1]

    @property
    def is_busy(self) -> bool:
        return _AXES[self][1] is Flight.BUSY


_AXES: dict[LoadableState, tuple[Availability, Flight]] = {
    LoadableState.EMPTY: (Availability.NONE, Flight.IDLE),
    LoadableState.PENDING: (Availability.NONE, Flight.BUSY),
    LoadableState.SUCCESS: (Availability.VALUE, Flight.IDLE),
    LoadableState.RELOADING: (Availability.VALUE, Flight.BUSY),
    LoadableState.FAILURE: (Availability.ERROR, Flight.IDLE),
    LoadableState.RETRYING: (Availability.ERROR, Flight.BUSY),
}

_BY_AXES: dict[tuple[Availability, Flight], LoadableState] = {
    axes: state for state, axes in _AXES.items()
}


def classify(state: LoadableState) -> tuple[Availability, Flight]:
    """Return the (availability, flight) pair of a Loadable tag."""
    return _AXES[state]


def compose(availability: Availability, flight: Flight) -> LoadableState:
    """Return the Loadable tag at the given point of the lattice."""
    return _BY_AXES[(availability, flight)]


__all__ = [
    "Availability",
    "Flight",
    "LoadableState",
    "State",
    "classify",
    "compose",
]
