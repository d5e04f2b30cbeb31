"""Tests for post-actions, polling and script helpers."""

import time

import pytest

from tests.conftest import StubEngine
from zombie.browser.common.interface import ContentSlot, PostAction
from zombie.browser.navigator import (apply_post_action, hash_page_content,
                                      selector_present_script, set_attribute_script,
                                      stringify_script_result, wait_for_change, wait_until)
from zombie.core.errors import ActionError, ActionFailure


class TestPostAction:
    """Tests for PostAction construction."""

    def test_kinds(self):
        assert PostAction.none().kind == "none"
        assert PostAction.wait(1.5).duration == 1.5
        assert PostAction.validate("x").script == "x"

    def test_negative_wait(self):
        with pytest.raises(ValueError):
            PostAction.wait(-1)


class TestApplyPostAction:
    """Tests for apply_post_action."""

    @pytest.mark.asyncio
    async def test_none_returns_immediately(self):
        await apply_post_action(StubEngine(scripts={}), PostAction.none())

    @pytest.mark.asyncio
    async def test_wait_pauses(self):
        start = time.monotonic()
        await apply_post_action(StubEngine(scripts={}), PostAction.wait(0.05))
        assert time.monotonic() - start >= 0.04

    @pytest.mark.asyncio
    async def test_validate_succeeds_when_true(self):
        answers = iter(["false", "true"])
        engine = StubEngine(scripts={"ready()": lambda: next(answers)}, timeout_seconds=2.0)
        await wait_until(engine, "ready()", interval=0.01)
        assert engine.ran == ["ready()", "ready()"]

    @pytest.mark.asyncio
    async def test_validate_times_out(self):
        engine = StubEngine(scripts={"ready()": "false"}, timeout_seconds=0.05)
        with pytest.raises(ActionFailure) as info:
            await apply_post_action(engine, PostAction.validate("ready()"))
        assert info.value.error is ActionError.TIMEOUT

    @pytest.mark.asyncio
    async def test_validate_unsupported_engine(self):
        engine = StubEngine(scripts=None)
        with pytest.raises(ActionFailure) as info:
            await wait_until(engine, "ready()", interval=0.01)
        assert info.value.error is ActionError.NOT_SUPPORTED

    @pytest.mark.asyncio
    async def test_script_errors_count_as_not_ready(self):
        engine = StubEngine(
            scripts={"ready()": ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)},
            timeout_seconds=0.05,
        )
        with pytest.raises(ActionFailure) as info:
            await wait_until(engine, "ready()", interval=0.01)
        assert info.value.error is ActionError.TIMEOUT


class TestWaitForChange:
    """Tests for wait_for_change."""

    @pytest.mark.asyncio
    async def test_detects_url_change(self):
        states = iter([("a", "<p>x</p>", True), ("b", "<p>x</p>", True)])

        async def snapshot():
            return next(states)

        assert await wait_for_change(snapshot, ("a", hash_page_content("<p>x</p>")), 1.0, 0.01)

    @pytest.mark.asyncio
    async def test_gives_up(self):
        async def snapshot():
            return "a", "<p>x</p>", True

        assert not await wait_for_change(snapshot, ("a", hash_page_content("<p>x</p>")), 0.03, 0.01)


class TestScripts:
    """Tests for script helpers."""

    def test_stringify(self):
        assert stringify_script_result(None) == ""
        assert stringify_script_result(True) == "true"
        assert stringify_script_result(2) == "2"
        assert stringify_script_result({"a": 1}) == '{"a": 1}'

    def test_selector_present_script(self):
        assert selector_present_script("#x") == 'document.querySelector("#x") !== null'

    def test_set_attribute_script(self):
        script = set_attribute_script("input#q", "value", "hi")
        assert script == 'document.querySelector("input#q").setAttribute("value", "hi");'

    def test_hash_ignores_whitespace(self):
        assert hash_page_content("<p>a  b</p>") == hash_page_content("<p>a b</p>\n")


class TestContentSlot:
    """Tests for ContentSlot."""

    def test_empty_slot_is_not_found(self):
        with pytest.raises(ActionFailure) as info:
            ContentSlot().load()
        assert info.value.error is ActionError.NOT_FOUND

    def test_store_replaces(self):
        slot = ContentSlot()
        slot.store(b"a", "u1")
        slot.store(b"b", "u2")
        assert slot.load() == (b"b", "u2")
