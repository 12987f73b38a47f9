"""Unit tests for the hook system infrastructure.

Tests cover:
- Hook registration and unregistration
- Priority ordering
- Filtering
- Error handling
"""

import pytest

from actionbase.core.hooks import (
    EVENT_CATEGORIES,
    HookCategory,
    HookEvent,
    HookRegistry,
    get_all_events,
)
from actionbase.domain.entities.hook_context import HookContext


class TestHookRegistry:
    """Tests for the HookRegistry class."""

    def test_register_returns_unique_ids(self) -> None:
        registry = HookRegistry()

        async def my_hook(event, data, context):
            return data

        hook_ids = {
            registry.register(HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE, my_hook)
            for _ in range(10)
        }

        assert len(hook_ids) == 10
        assert all(hook_id.startswith("hook_") for hook_id in hook_ids)

    def test_unregister(self) -> None:
        registry = HookRegistry()

        async def my_hook(event, data, context):
            return data

        hook_id = registry.register(HookEvent.ON_ACTION_AFTER_CREATE, my_hook)

        assert registry.unregister(hook_id) is True
        assert registry.get_hooks_for_event(HookEvent.ON_ACTION_AFTER_CREATE) == []
        assert registry.unregister(hook_id) is False

    def test_builtin_hooks_cannot_be_unregistered(self) -> None:
        registry = HookRegistry()

        async def my_hook(event, data, context):
            return data

        hook_id = registry.register(HookEvent.ON_ACTION_AFTER_CREATE, my_hook, is_builtin=True)

        assert registry.unregister(hook_id) is False
        assert len(registry.get_hooks_for_event(HookEvent.ON_ACTION_AFTER_CREATE)) == 1

    def test_clear_keeps_builtin_hooks(self) -> None:
        registry = HookRegistry()

        async def my_hook(event, data, context):
            return data

        registry.register(HookEvent.ON_ACTION_AFTER_CREATE, my_hook, is_builtin=True)
        registry.register(HookEvent.ON_ACTION_AFTER_CREATE, my_hook)

        assert registry.clear() == 1
        assert len(registry.get_hooks_for_event(HookEvent.ON_ACTION_AFTER_CREATE)) == 1
        assert registry.clear(include_builtin=True) == 1


@pytest.mark.asyncio
class TestHookTrigger:
    """Tests for HookRegistry.trigger."""

    async def test_trigger_without_hooks(self) -> None:
        registry = HookRegistry()

        result = await registry.trigger(HookEvent.ON_SERVE, data={"a": 1})

        assert result.success is True
        assert result.data == {"a": 1}

    async def test_priority_then_registration_order(self) -> None:
        registry = HookRegistry()
        calls = []

        def make_hook(label):
            async def hook(event, data, context):
                calls.append(label)
            return hook

        registry.register(HookEvent.ON_SERVE, make_hook("low"), priority=-10)
        registry.register(HookEvent.ON_SERVE, make_hook("first"))
        registry.register(HookEvent.ON_SERVE, make_hook("high"), priority=10)
        registry.register(HookEvent.ON_SERVE, make_hook("second"))

        await registry.trigger(HookEvent.ON_SERVE)

        assert calls == ["high", "first", "second", "low"]

    async def test_returned_dict_replaces_data(self) -> None:
        registry = HookRegistry()

        async def enrich(event, data, context):
            return {**data, "enriched": True}

        registry.register(HookEvent.ON_ACTION_AFTER_UPDATE, enrich)

        result = await registry.trigger(HookEvent.ON_ACTION_AFTER_UPDATE, data={"id": "a1"})

        assert result.data == {"id": "a1", "enriched": True}

    async def test_errors_are_collected(self) -> None:
        registry = HookRegistry()
        calls = []

        async def broken(event, data, context):
            raise RuntimeError("boom")

        async def after(event, data, context):
            calls.append("after")

        registry.register(HookEvent.ON_ACTION_AFTER_DELETE, broken, priority=1)
        registry.register(HookEvent.ON_ACTION_AFTER_DELETE, after)

        result = await registry.trigger(HookEvent.ON_ACTION_AFTER_DELETE, data={})

        assert result.success is True
        assert len(result.errors) == 1
        assert "boom" in result.errors[0]
        assert calls == ["after"]

    async def test_stop_on_error_aborts_chain(self) -> None:
        registry = HookRegistry()
        calls = []

        async def broken(event, data, context):
            raise RuntimeError("boom")

        async def after(event, data, context):
            calls.append("after")

        registry.register(HookEvent.ON_ACTION_AFTER_DELETE, broken, priority=1, stop_on_error=True)
        registry.register(HookEvent.ON_ACTION_AFTER_DELETE, after)

        result = await registry.trigger(HookEvent.ON_ACTION_AFTER_DELETE, data={})

        assert result.success is False
        assert calls == []

    async def test_filters(self) -> None:
        registry = HookRegistry()
        calls = []

        async def app_hook(event, data, context):
            calls.append(context.request_id)

        registry.register(
            HookEvent.ON_APPLICATION_AFTER_PUBLISH, app_hook, filters={"application_id": "app1"}
        )

        await registry.trigger(
            HookEvent.ON_APPLICATION_AFTER_PUBLISH,
            context=HookContext(request_id="r1"),
            filters={"application_id": "app1"},
        )
        await registry.trigger(
            HookEvent.ON_APPLICATION_AFTER_PUBLISH,
            context=HookContext(request_id="r2"),
            filters={"application_id": "app2"},
        )

        assert calls == ["r1"]

    async def test_sync_callbacks_are_called(self) -> None:
        registry = HookRegistry()
        calls = []

        def sync_hook(event, data, context):
            calls.append(event)

        registry.register(HookEvent.ON_TERMINATE, sync_hook)

        await registry.trigger(HookEvent.ON_TERMINATE)

        assert calls == [HookEvent.ON_TERMINATE]


def test_every_event_has_a_category():
    events = get_all_events()

    assert set(events) == set(EVENT_CATEGORIES)
    assert EVENT_CATEGORIES[HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE] == (
        HookCategory.ACTION_COLLECTION_OPERATIONS
    )


def test_hook_context_generates_request_id():
    assert HookContext().request_id.startswith("hk_")
    assert HookContext(request_id="fixed").request_id == "fixed"
