"""Unit tests for the built-in hooks."""

import pytest

from actionbase.core.hooks import HookEvent, HookRegistry
from actionbase.domain.entities.hook_context import HookContext
from actionbase.infrastructure.hooks import BUILTIN_HOOKS, analytics_log_hook, register_builtin_hooks


def test_register_builtin_hooks_covers_entity_events():
    registry = HookRegistry()

    hook_ids = register_builtin_hooks(registry)

    assert len(hook_ids) == 7
    for event in (
        HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE,
        HookEvent.ON_ACTION_AFTER_DELETE,
        HookEvent.ON_APPLICATION_AFTER_PUBLISH,
    ):
        hooks = registry.get_hooks_for_event(event)
        assert len(hooks) == 1
        assert hooks[0].is_builtin is True
    assert registry.get_hooks_for_event(HookEvent.ON_BOOTSTRAP) == []


def test_builtin_hooks_survive_clear():
    registry = HookRegistry()
    register_builtin_hooks(registry)

    registry.clear()

    assert len(registry.get_hooks_for_event(HookEvent.ON_ACTION_AFTER_CREATE)) == 1


@pytest.mark.asyncio
async def test_analytics_log_hook_returns_data_unchanged():
    data = {"id": "c1", "name": "utils"}

    result = await analytics_log_hook(
        HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE, data, HookContext(organization_id="org1")
    )

    assert result == {"id": "c1", "name": "utils"}
    assert BUILTIN_HOOKS["analytics_log_hook"] is analytics_log_hook


@pytest.mark.asyncio
async def test_analytics_log_hook_without_context():
    assert await analytics_log_hook(HookEvent.ON_ACTION_AFTER_CREATE, None, None) is None


@pytest.mark.asyncio
async def test_analytics_hook_accepts_payload_overlapping_context():
    registry = HookRegistry()
    register_builtin_hooks(registry)

    result = await registry.trigger(
        HookEvent.ON_ACTION_AFTER_CREATE,
        data={"id": "a1", "organization_id": "org1", "request_id": "r1"},
        context=HookContext(organization_id="org2"),
    )

    assert result.errors == []
    assert result.data == {"id": "a1", "organization_id": "org1", "request_id": "r1"}
