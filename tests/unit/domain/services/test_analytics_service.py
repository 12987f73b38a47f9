"""Unit tests for AnalyticsService."""

from unittest.mock import AsyncMock

import pytest

from actionbase.core.hooks import HookEvent, HookRegistry
from actionbase.domain.entities import (
    ActionCollection,
    ActionCollectionDTO,
    ActionDTO,
    NewAction,
)
from actionbase.domain.services import AnalyticsService


@pytest.fixture
def registry():
    return HookRegistry()


@pytest.fixture
def collection():
    return ActionCollection(
        id="c1",
        application_id="app1",
        organization_id="org1",
        unpublished_collection=ActionCollectionDTO(
            name="utils", page_id="page1", action_ids={"a1", "a2"}
        ),
    )


@pytest.mark.asyncio
async def test_collection_create_event(registry, collection):
    received = []

    async def capture(event, data, context):
        received.append((event, data, context))

    registry.register(HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE, capture)
    service = AnalyticsService(registry)

    result = await service.send_create_event(collection)

    assert result is collection
    assert len(received) == 1
    event, data, context = received[0]
    assert event == HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE
    assert data["id"] == "c1"
    assert data["name"] == "utils"
    assert data["action_count"] == 2
    assert data["published"] is False
    assert context.organization_id == "org1"


@pytest.mark.asyncio
async def test_action_events_use_action_event_names(registry):
    received = []

    async def capture(event, data, context):
        received.append(event)

    registry.register(HookEvent.ON_ACTION_AFTER_DELETE, capture)
    service = AnalyticsService(registry)

    action = NewAction(id="a1", unpublished_action=ActionDTO(name="fetch"))
    await service.send_delete_event(action)

    assert received == [HookEvent.ON_ACTION_AFTER_DELETE]


@pytest.mark.asyncio
async def test_hook_failure_does_not_propagate(registry, collection):
    async def broken(event, data, context):
        raise RuntimeError("warehouse offline")

    registry.register(HookEvent.ON_ACTION_COLLECTION_AFTER_UPDATE, broken)
    service = AnalyticsService(registry)

    assert await service.send_update_event(collection) is collection


@pytest.mark.asyncio
async def test_registry_failure_does_not_propagate(collection):
    registry = AsyncMock(spec=HookRegistry)
    registry.trigger.side_effect = RuntimeError("registry broken")
    service = AnalyticsService(registry)

    assert await service.send_delete_event(collection) is collection


@pytest.mark.asyncio
async def test_publish_event(registry):
    received = []

    async def capture(event, data, context):
        received.append(data)

    registry.register(
        HookEvent.ON_APPLICATION_AFTER_PUBLISH, capture, filters={"application_id": "app1"}
    )
    service = AnalyticsService(registry)

    await service.send_publish_event("app1", {"published_actions": 3})
    await service.send_publish_event("app2", {"published_actions": 1})

    assert received == [{"application_id": "app1", "published_actions": 3}]
