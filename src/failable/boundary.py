"""Trust-boundary conversion between tagged values and plain mappings.

Values built in-process are always well-formed. Data arriving from elsewhere
(a message payload, a cached dict) is validated here before it is turned back
into a tagged value; anything with an unknown tag or a malformed payload is
rejected with ``InvalidStateError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from failable.errors import InvalidStateError
from failable.loadable import EMPTY, Reloading, Retrying, state_of
from failable.primitives import PENDING, Failure, Success
from failable.state import Availability, LoadableState, State

if TYPE_CHECKING:
    from collections.abc import Mapping

    from failable.loadable import Loadable
    from failable.primitives import Failable


class Snapshot(BaseModel):
    """A tag plus its payload.

    ``data`` is None for tags without a payload and must be an exception for
    tags that carry an error.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: LoadableState
    data: Any = None

    @model_validator(mode="after")
    def _check_payload(self) -> Snapshot:
        availability = self.state.availability
        if availability is Availability.ERROR and not isinstance(
            self.data, BaseException
        ):
            raise ValueError(f"{self.state.value} requires an exception payload")
        if availability is Availability.NONE and self.data is not None:
            raise ValueError(f"{self.state.value} carries no payload")
        return self


def snapshot(value: Failable[Any] | Loadable[Any]) -> Snapshot:
    """Describe a tagged value as a ``Snapshot``."""
    state = state_of(value)
    data = getattr(value, "value", getattr(value, "error", None))
    return Snapshot(state=state, data=data)


def _parse(raw: Snapshot | Mapping[str, Any]) -> Snapshot:
    if isinstance(raw, Snapshot):
        return raw
    try:
        return Snapshot.model_validate(raw)
    except ValidationError as e:
        state = raw.get("state") if hasattr(raw, "get") else raw
        raise InvalidStateError(state, hint=str(e)) from e


def restore_loadable(raw: Snapshot | Mapping[str, Any]) -> Loadable[Any]:
    """Rebuild a Loadable from a snapshot or an equivalent mapping."""
    snap = _parse(raw)
    match snap.state:
        case LoadableState.EMPTY:
            return EMPTY
        case LoadableState.PENDING:
            return PENDING
        case LoadableState.SUCCESS:
            return Success(snap.data)
        case LoadableState.RELOADING:
            return Reloading(snap.data)
        case LoadableState.FAILURE:
            return Failure(snap.data)
        case LoadableState.RETRYING:
            return Retrying(snap.data)


def restore_failable(raw: Snapshot | Mapping[str, Any]) -> Failable[Any]:
    """Rebuild a Failable; only the three Failable tags are accepted."""
    snap = _parse(raw)
    if snap.state.value not in {s.value for s in State}:
        raise InvalidStateError(
            snap.state.value, hint="Failables are pending, success or failure"
        )
    return restore_loadable(snap)  # type: ignore[return-value]


__all__ = ["Snapshot", "restore_failable", "restore_loadable", "snapshot"]
