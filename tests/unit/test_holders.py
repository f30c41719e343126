"""Mutable holders: transitions, hooks, observation and accept()."""

from __future__ import annotations

import asyncio
import logging
import threading

import pytest

from failable import (
    EMPTY,
    PENDING,
    Dispatcher,
    Failure,
    FailableHolder,
    LoadableHolder,
    LoadableState,
    MissingHandlerError,
    Reloading,
    State,
    Success,
)

pytestmark = pytest.mark.unit


class HookedFailable(FailableHolder[int]):
    def __init__(self) -> None:
        super().__init__()
        self.hooks: list[str] = []

    def did_become_success(self, data):
        self.hooks.append("success")

    def did_become_failure(self, error):
        self.hooks.append("failure")

    def did_become_pending(self):
        self.hooks.append("pending")


class HookedLoadable(LoadableHolder[int]):
    def __init__(self) -> None:
        super().__init__()
        self.hooks: list[str] = []

    def did_become_success(self, data):
        self.hooks.append("success")

    def did_become_failure(self, error):
        self.hooks.append("failure")

    def did_become_loading(self):
        self.hooks.append("loading")


class TestFailableHolder:
    def test_starts_pending(self):
        f = FailableHolder()

        assert f.value is PENDING
        assert f.state is State.PENDING
        assert f.is_pending

    def test_success(self):
        f = HookedFailable().success(3)

        assert f.value == Success(3)
        assert (f.is_success, f.is_failure, f.is_pending) == (True, False, False)
        assert f.hooks == ["success"]

    def test_failure(self):
        err = ValueError()
        f = HookedFailable().failure(err)

        assert f.value == Failure(err)
        assert (f.is_success, f.is_failure, f.is_pending) == (False, True, False)
        assert f.hooks == ["failure"]

    def test_pending_drops_data(self):
        f = HookedFailable().success(3).pending()

        assert f.value is PENDING
        assert f.hooks == ["success", "pending"]

    def test_latest_transition_wins(self):
        f = FailableHolder().success(1).failure(KeyError()).success(2)

        assert f.value == Success(2)

    def test_match(self):
        options = {"success": lambda v: v * 10, "failure": lambda _: "f"}

        assert FailableHolder().success(2).match(**options) == 20
        assert FailableHolder().failure(OSError()).match(**options) == "f"
        with pytest.raises(MissingHandlerError):
            FailableHolder().match(**options)

    def test_success_or(self):
        calls: list[int] = []

        def fallback():
            calls.append(1)
            return "fallback"

        assert FailableHolder().success(5).success_or(fallback) == 5
        assert calls == []
        assert FailableHolder().failure(OSError()).success_or(fallback) == "fallback"
        assert FailableHolder().success_or(0) == 0
        assert calls == [1]

    def test_failure_or(self):
        err = OSError()

        assert FailableHolder().failure(err).failure_or(None) is err
        assert FailableHolder().success(1).failure_or(lambda: "none") == "none"
        assert FailableHolder().failure_or("none") == "none"

    def test_repr(self):
        assert repr(FailableHolder().success(1)) == (
            "FailableHolder(state=success, data=1)"
        )
        assert repr(FailableHolder()) == "FailableHolder(state=pending, data=None)"


class TestLoadableHolder:
    def test_starts_empty(self):
        ld = LoadableHolder()

        assert ld.value is EMPTY
        assert ld.state is LoadableState.EMPTY
        assert ld.is_pending
        assert not ld.is_loading

    def test_reachable_states(self, loadables):
        for state, holder in loadables.items():
            assert holder.state is state

    def test_success_and_failure_hooks(self):
        assert HookedLoadable().success(1).hooks == ["success"]
        assert HookedLoadable().failure(OSError()).hooks == ["failure"]

    @pytest.mark.parametrize(
        ("start", "expected"),
        [
            (LoadableState.EMPTY, LoadableState.PENDING),
            (LoadableState.SUCCESS, LoadableState.RELOADING),
            (LoadableState.FAILURE, LoadableState.RETRYING),
        ],
    )
    def test_loading_transitions(self, loadables, start, expected):
        assert loadables[start].loading().state is expected

    def test_reloading_keeps_previous_value(self):
        ld = LoadableHolder().success(3).loading()

        assert ld.value == Reloading(3)
        assert ld.success_or(None) == 3

    def test_retrying_keeps_previous_error(self):
        err = ValueError()
        ld = LoadableHolder().failure(err).loading()

        assert ld.failure_or(None) is err

    @pytest.mark.parametrize(
        "build",
        [
            lambda h: h.loading(),
            lambda h: h.success(1).loading(),
            lambda h: h.failure(OSError()).loading(),
        ],
    )
    def test_loading_while_busy_is_a_no_op(self, build):
        ld = build(HookedLoadable())
        before, hooks = ld.value, list(ld.hooks)

        ld.loading()
        ld.pending()

        assert ld.value is before
        assert ld.hooks == hooks

    def test_pending_is_an_alias_of_loading(self):
        ld = HookedLoadable().success(2).pending()

        assert ld.state is LoadableState.RELOADING
        assert ld.hooks == ["success", "loading"]

    def test_never_returns_to_empty(self):
        ld = LoadableHolder().loading().success(1).loading().failure(OSError())

        for _ in range(3):
            ld.loading()
            assert ld.state is not LoadableState.EMPTY

    @pytest.mark.parametrize(
        ("state", "flags"),
        [
            (LoadableState.EMPTY, (False, False, True, False)),
            (LoadableState.PENDING, (False, False, True, True)),
            (LoadableState.SUCCESS, (True, False, False, False)),
            (LoadableState.RELOADING, (True, False, False, True)),
            (LoadableState.FAILURE, (False, True, False, False)),
            (LoadableState.RETRYING, (False, True, False, True)),
        ],
    )
    def test_availability_properties(self, loadables, state, flags):
        ld = loadables[state]

        assert (ld.is_success, ld.is_failure, ld.is_pending, ld.is_loading) == flags

    def test_match_passes_loading_flag(self, loadables):
        options = {
            "success": lambda v, loading: (v, loading),
            "failure": lambda _, loading: ("f", loading),
            "pending": lambda loading: ("p", loading),
        }

        assert loadables[LoadableState.RELOADING].match(**options) == (3, True)
        assert loadables[LoadableState.FAILURE].match(**options) == ("f", False)
        assert loadables[LoadableState.EMPTY].match(**options) == ("p", False)

    def test_defaults_are_lazy(self, loadables):
        calls: list[str] = []

        def fallback():
            calls.append("forced")
            return -1

        assert loadables[LoadableState.SUCCESS].success_or(fallback) == 3
        assert loadables[LoadableState.RETRYING].failure_or(fallback) is not None
        assert calls == []
        assert loadables[LoadableState.PENDING].success_or(fallback) == -1
        assert loadables[LoadableState.EMPTY].failure_or(fallback) == -1
        assert calls == ["forced", "forced"]


class TestObservation:
    def test_subscribe_sees_every_transition(self):
        ld = LoadableHolder()
        seen = []
        ld.subscribe(seen.append)

        ld.loading().success(1).loading().loading().failure(KeyError("k"))

        assert [type(v).__name__ for v in seen] == [
            "Pending",
            "Success",
            "Reloading",
            "Failure",
        ]

    def test_unsubscribe(self):
        f = FailableHolder()
        seen = []
        unsubscribe = f.subscribe(seen.append)

        f.success(1)
        unsubscribe()
        f.success(2)

        assert seen == [Success(1)]

    def test_state_specific_listeners(self):
        dispatcher = Dispatcher(State)
        values = []
        dispatcher.add_listener(State.FAILURE, values.append)
        f = FailableHolder(dispatcher=dispatcher)

        f.success(1).failure(err := OSError()).pending()

        assert values == [Failure(err)]
        assert f.changes is dispatcher

    def test_hook_runs_before_observers(self):
        order: list[str] = []

        class Ordered(FailableHolder[int]):
            def did_become_success(self, data):
                order.append("hook")

        f = Ordered()
        f.subscribe(lambda _: order.append("observer"))
        f.success(1)

        assert order == ["hook", "observer"]

    def test_transitions_log_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="failable"):
            LoadableHolder().loading()

        assert any("empty -> pending" in r.getMessage() for r in caplog.records)


class TestAccept:
    @pytest.mark.asyncio
    async def test_settles_to_success(self):
        async def work():
            await asyncio.sleep(0)
            return 7

        f = FailableHolder().success(1)
        f.accept(work())
        assert f.is_pending

        await asyncio.sleep(0.01)

        assert f.value == Success(7)

    @pytest.mark.asyncio
    async def test_settles_to_failure(self):
        err = RuntimeError("remote")

        async def work():
            raise err

        ld = LoadableHolder().success(1).accept(work())
        assert ld.state is LoadableState.RELOADING

        await asyncio.sleep(0.01)

        assert ld.state is LoadableState.FAILURE
        assert ld.failure_or(None) is err

    @pytest.mark.asyncio
    async def test_accepts_futures(self):
        future: asyncio.Future[int] = asyncio.get_running_loop().create_future()
        ld = LoadableHolder().accept(future)
        assert ld.state is LoadableState.PENDING

        future.set_result(4)
        await asyncio.sleep(0)

        assert ld.value == Success(4)

    @pytest.mark.asyncio
    async def test_cancelled_future_settles_as_failure(self):
        future: asyncio.Future[int] = asyncio.get_running_loop().create_future()
        f = FailableHolder().accept(future)

        future.cancel()
        await asyncio.sleep(0)

        assert isinstance(f.failure_or(None), asyncio.CancelledError)

    @pytest.mark.asyncio
    async def test_last_settlement_wins(self):
        loop = asyncio.get_running_loop()
        first: asyncio.Future[str] = loop.create_future()
        second: asyncio.Future[str] = loop.create_future()
        f = FailableHolder().accept(first).accept(second)

        second.set_result("second")
        await asyncio.sleep(0)
        assert f.value == Success("second")

        first.set_result("first")
        await asyncio.sleep(0)
        assert f.value == Success("first")

    @pytest.mark.parametrize("build", [HookedFailable, HookedLoadable])
    def test_unschedulable_awaitable_leaves_holder_untouched(self, build):
        async def work():
            return 2

        holder = build().success(1)
        holder.hooks.clear()
        seen: list[object] = []
        holder.subscribe(seen.append)
        coro = work()
        errors: list[RuntimeError] = []

        def run():
            try:
                holder.accept(coro)
            except RuntimeError as e:
                errors.append(e)

        thread = threading.Thread(target=run)
        thread.start()
        thread.join()
        coro.close()

        assert len(errors) == 1
        assert holder.value == Success(1)
        assert holder.hooks == []
        assert seen == []


def test_base_holder_is_abstract():
    from failable.holders import _Holder

    with pytest.raises(TypeError):
        _Holder(PENDING, Dispatcher(State))  # type: ignore[abstract]
