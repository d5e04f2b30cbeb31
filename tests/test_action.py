"""Tests for Action and its combinators."""

import asyncio

import pytest

from zombie.core.action import Action, Result
from zombie.core.errors import ActionError, ActionFailure


async def failure_of(action):
    with pytest.raises(ActionFailure) as info:
        await action.execute()
    return info.value.error


class TestConstructors:
    """Tests for value, error and from_result."""

    @pytest.mark.asyncio
    async def test_value_resolves(self):
        assert await Action.value(42).execute() == 42

    @pytest.mark.asyncio
    async def test_error_fails_with_kind(self):
        assert await failure_of(Action.error(ActionError.NOT_FOUND)) is ActionError.NOT_FOUND

    @pytest.mark.asyncio
    async def test_from_result(self):
        assert await Action.from_result(Result(value="x")).execute() == "x"
        error = await failure_of(Action.from_result(Result(error=ActionError.TIMEOUT)))
        assert error is ActionError.TIMEOUT

    @pytest.mark.asyncio
    async def test_operation_is_lazy_and_reruns(self):
        """Nothing runs until execute, and each execute runs again."""
        calls = []

        async def operation():
            calls.append(1)
            return len(calls)

        action = Action(operation)
        assert calls == []
        assert await action.execute() == 1
        assert await action.execute() == 2

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_network_failure(self):
        async def operation():
            raise RuntimeError("boom")

        assert await failure_of(Action(operation)) is ActionError.NETWORK_REQUEST_FAILURE


class TestMap:
    """Tests for map and flat_map."""

    @pytest.mark.asyncio
    async def test_map_applies_function(self):
        assert await Action.value(3).map(lambda x: x * 2).execute() == 6

    @pytest.mark.asyncio
    async def test_map_skips_function_on_failure(self):
        calls = []

        def f(x):
            calls.append(x)
            return x

        error = await failure_of(Action.error(ActionError.PARSING_FAILURE).map(f))
        assert error is ActionError.PARSING_FAILURE
        assert calls == []

    @pytest.mark.asyncio
    async def test_flat_map_none_is_transform_failure(self):
        error = await failure_of(Action.value(1).flat_map(lambda _: None))
        assert error is ActionError.TRANSFORM_FAILURE

    @pytest.mark.asyncio
    async def test_flat_map_value(self):
        assert await Action.value(1).flat_map(lambda x: x + 1).execute() == 2


class TestAndThen:
    """Tests for and_then and then."""

    @pytest.mark.asyncio
    async def test_and_then_chains_value(self):
        action = Action.value(2).and_then(lambda x: Action.value(x * 10))
        assert await action.execute() == 20

    @pytest.mark.asyncio
    async def test_and_then_short_circuits(self):
        """The dependent Action is never built when the first fails."""
        counter = {"built": 0}

        def build(x):
            counter["built"] += 1
            return Action.value(x)

        error = await failure_of(Action.error(ActionError.NOT_FOUND).and_then(build))
        assert error is ActionError.NOT_FOUND
        assert counter["built"] == 0

    @pytest.mark.asyncio
    async def test_and_then_forwards_second_failure(self):
        action = Action.value(1).and_then(lambda _: Action.error(ActionError.TIMEOUT))
        assert await failure_of(action) is ActionError.TIMEOUT

    @pytest.mark.asyncio
    async def test_then_discards_previous_value(self):
        assert await Action.value(1).then(Action.value("b")).execute() == "b"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("start, f_error, g_error", [
        (Action.value(2), None, None),
        (Action.error(ActionError.NOT_FOUND), None, None),
        (Action.value(2), ActionError.PARSING_FAILURE, None),
        (Action.value(2), None, ActionError.TIMEOUT),
    ])
    async def test_and_then_is_associative(self, start, f_error, g_error):
        def f(x):
            return Action.error(f_error) if f_error else Action.value(x + 1)

        def g(x):
            return Action.error(g_error) if g_error else Action.value(x * 10)

        left = await start.and_then(f).and_then(g).result()
        right = await start.and_then(lambda x: f(x).and_then(g)).result()
        assert left == right


class TestCollect:
    """Tests for collect."""

    @pytest.mark.asyncio
    async def test_collect_until_condition_fails(self):
        steps = []

        def step(x):
            steps.append(x)
            return Action.value(x + 1)

        result = await Action.collect(0, step, lambda x: x < 3).execute()
        assert result == [1, 2, 3]
        assert len(steps) == 3

    @pytest.mark.asyncio
    async def test_collect_failure_discards_values(self):
        def step(x):
            if x == 2:
                return Action.error(ActionError.NOT_FOUND)
            return Action.value(x + 1)

        error = await failure_of(Action.collect(0, step, lambda x: True))
        assert error is ActionError.NOT_FOUND


class TestBatch:
    """Tests for batch."""

    @pytest.mark.asyncio
    async def test_batch_preserves_order(self):
        result = await Action.batch([1, 2, 3], lambda x: Action.value(x * x)).execute()
        assert result == [1, 4, 9]

    @pytest.mark.asyncio
    async def test_batch_stops_at_first_failure(self):
        ran = []

        def f(x):
            ran.append(x)
            if x == 2:
                return Action.error(ActionError.NETWORK_REQUEST_FAILURE)
            return Action.value(x)

        error = await failure_of(Action.batch([1, 2, 3], f))
        assert error is ActionError.NETWORK_REQUEST_FAILURE
        assert ran == [1, 2]

    @pytest.mark.asyncio
    async def test_batch_empty(self):
        assert await Action.batch([], Action.value).execute() == []


class TestCallbackErrors:
    """Exceptions raised by combinator callbacks reach the caller unchanged."""

    @pytest.mark.asyncio
    async def test_map_callback_error_propagates(self):
        with pytest.raises(KeyError):
            await Action.value({}).map(lambda d: d["missing"]).execute()

    @pytest.mark.asyncio
    async def test_and_then_callback_error_propagates(self):
        def build(_):
            raise TypeError("bad chain")

        with pytest.raises(TypeError):
            await Action.value(1).and_then(build).execute()

    @pytest.mark.asyncio
    async def test_collect_until_error_propagates(self):
        def until(_):
            raise ZeroDivisionError

        with pytest.raises(ZeroDivisionError):
            await Action.collect(0, lambda x: Action.value(x + 1), until).execute()

    @pytest.mark.asyncio
    async def test_operation_error_inside_chain_is_still_converted(self):
        async def operation():
            raise RuntimeError("connection reset")

        action = Action.value(1).and_then(lambda _: Action(operation)).map(str)
        assert await failure_of(action) is ActionError.NETWORK_REQUEST_FAILURE

    @pytest.mark.asyncio
    async def test_start_skips_completion_on_callback_error(self, caplog):
        received = []
        task = Action.value(1).map(lambda _: [][0]).start(received.append)
        with pytest.raises(IndexError):
            await task
        await asyncio.sleep(0)
        assert received == []
        assert "Action callback raised" in caplog.text


class TestExecution:
    """Tests for result, start and timeout."""

    @pytest.mark.asyncio
    async def test_result_success(self):
        result = await Action.value("ok").result()
        assert result.is_success
        assert result.value == "ok"

    @pytest.mark.asyncio
    async def test_result_failure(self):
        result = await Action.error(ActionError.INVALID_URL).result()
        assert not result.is_success
        assert result.error is ActionError.INVALID_URL

    @pytest.mark.asyncio
    async def test_start_calls_completion(self):
        received = []
        task = Action.value(7).start(received.append)
        await task
        await asyncio.sleep(0)
        assert received == [Result(value=7)]

    @pytest.mark.asyncio
    async def test_timeout_elapses(self):
        async def slow():
            await asyncio.sleep(1)
            return 1

        error = await failure_of(Action(slow).timeout(0.01))
        assert error is ActionError.TIMEOUT

    @pytest.mark.asyncio
    async def test_timeout_not_reached(self):
        assert await Action.value(5).timeout(1).execute() == 5
