"""Tests for the action/filter hook registry."""

import asyncio

import pytest

from calendula.lib.hooks import HookRegistry, action, filter, hooks


@pytest.fixture
def registry():
    return HookRegistry()


class TestHookRegistry:
    def test_add_and_has(self, registry):
        registry.add_action("rendered", lambda: None)
        registry.add_filter("context", lambda value: value)

        assert registry.has_action("rendered")
        assert registry.has_filter("context")
        assert not registry.has_action("context")

    def test_actions_run_in_priority_order(self, registry):
        calls = []
        registry.add_action("test", lambda: calls.append("late"), priority=20)
        registry.add_action("test", lambda: calls.append("early"), priority=5)
        registry.add_action("test", lambda: calls.append("default"))

        asyncio.run(registry.do_action("test"))

        assert calls == ["early", "default", "late"]

    def test_same_priority_keeps_registration_order(self, registry):
        calls = []
        registry.add_action("test", lambda: calls.append("first"))
        registry.add_action("test", lambda: calls.append("second"))

        asyncio.run(registry.do_action("test"))

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_filters_chain_values(self, registry):
        registry.add_filter("test", lambda value: value + 10, priority=20)
        registry.add_filter("test", lambda value: value * 2, priority=10)

        assert await registry.apply_filters("test", 5) == 20

    @pytest.mark.asyncio
    async def test_filters_receive_extra_arguments(self, registry):
        registry.add_filter("test", lambda value, suffix, *, sep: f"{value}{sep}{suffix}")

        assert await registry.apply_filters("test", "a", "b", sep="-") == "a-b"

    @pytest.mark.asyncio
    async def test_mixed_sync_async_handlers(self, registry):
        async def async_handler(value):
            return value + "_async"

        registry.add_filter("test", lambda value: value + "_sync", priority=10)
        registry.add_filter("test", async_handler, priority=20)

        assert await registry.apply_filters("test", "start") == "start_sync_async"

    @pytest.mark.asyncio
    async def test_unknown_hooks_are_noops(self, registry):
        await registry.do_action("nothing")
        assert await registry.apply_filters("nothing", "value") == "value"

    def test_remove(self, registry):
        def handler(value):
            return value

        registry.add_action("test", handler)
        registry.add_filter("test", handler)

        assert registry.remove_action("test", handler) is True
        assert registry.remove_filter("test", handler) is True
        assert registry.remove_filter("test", handler) is False
        assert not registry.has_action("test")
        assert not registry.has_filter("test")

    def test_clear(self, registry):
        registry.add_action("a", lambda: None)
        registry.add_filter("b", lambda value: value)

        registry.clear()

        assert not registry.has_action("a")
        assert not registry.has_filter("b")


class TestDecorators:
    @pytest.mark.asyncio
    async def test_filter_decorator_registers_globally(self, clean_hooks):
        @filter("test_decorated", priority=5)
        def upper(value):
            return value.upper()

        assert hooks.has_filter("test_decorated")
        assert await hooks.apply_filters("test_decorated", "x") == "X"
        # The decorated function is returned unchanged
        assert upper("y") == "Y"

    @pytest.mark.asyncio
    async def test_action_decorator_registers_globally(self, clean_hooks):
        seen = []

        @action("test_decorated")
        async def record(value):
            seen.append(value)

        await hooks.do_action("test_decorated", 1)

        assert seen == [1]
