"""failable: tagged values for pending / success / failure.

Public API:
    - success(), failure(), pending: Failable constructors
    - when(): strict matching over a Failable
    - Dispatcher: ordered listener registry over a closed set of states
    - Channel: a matcher that broadcasts every matched value to listeners
    - Try: wraps a Failable or a callable that may raise
    - Loadable values and begin_loading(): the six-state extension
    - FailableHolder, LoadableHolder: mutable, observable holders
"""

from __future__ import annotations

import logging

from failable.attempt import Try
from failable.boundary import Snapshot, restore_failable, restore_loadable, snapshot
from failable.dispatcher import Dispatcher, Handler
from failable.errors import (
    ConfigurationError,
    FailableError,
    InvalidStateError,
    InvariantViolationError,
    MissingHandlerError,
    NotFailableError,
)
from failable.holders import FailableHolder, LoadableHolder
from failable.lazy import Lazy, force
from failable.loadable import (
    EMPTY,
    Empty,
    Loadable,
    Reloading,
    Retrying,
    begin_loading,
    empty,
    is_empty,
    is_loadable,
    is_loading,
    is_reloading,
    is_retrying,
    match_loadable,
    reloading,
    retrying,
    state_of,
)
from failable.matching import when
from failable.observing import Channel
from failable.primitives import (
    PENDING,
    Failable,
    Failure,
    Pending,
    Result,
    Success,
    failure,
    is_failable,
    is_failure,
    is_pending,
    is_success,
    pending,
    success,
    to_failable,
    to_result,
)
from failable.state import Availability, Flight, LoadableState, State

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("failable")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("failable").addHandler(logging.NullHandler())

__all__ = [
    "EMPTY",
    "PENDING",
    "Availability",
    "Channel",
    "ConfigurationError",
    "Dispatcher",
    "Empty",
    "Failable",
    "FailableError",
    "FailableHolder",
    "Failure",
    "Flight",
    "Handler",
    "InvalidStateError",
    "InvariantViolationError",
    "Lazy",
    "Loadable",
    "LoadableHolder",
    "LoadableState",
    "MissingHandlerError",
    "NotFailableError",
    "Pending",
    "Reloading",
    "Result",
    "Retrying",
    "Snapshot",
    "State",
    "Success",
    "Try",
    "begin_loading",
    "empty",
    "failure",
    "force",
    "is_empty",
    "is_failable",
    "is_failure",
    "is_loadable",
    "is_loading",
    "is_pending",
    "is_reloading",
    "is_retrying",
    "is_success",
    "match_loadable",
    "pending",
    "reloading",
    "restore_failable",
    "restore_loadable",
    "retrying",
    "snapshot",
    "state_of",
    "success",
    "to_failable",
    "to_result",
    "when",
]
