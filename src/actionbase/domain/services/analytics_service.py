"""Analytics event publishing.

Lifecycle events are delivered through the hook registry, where the built-in
analytics hook (and any user hooks) pick them up. Sending never fails the
operation that emitted the event.
"""

from __future__ import annotations

from typing import Any, TypeVar

from actionbase.core.hooks import HookEvent, HookRegistry
from actionbase.core.logging import get_logger
from actionbase.domain.entities import ActionCollection, HookContext, NewAction

logger = get_logger(__name__)

E = TypeVar("E", ActionCollection, NewAction)

_EVENTS: dict[type, dict[str, str]] = {
    ActionCollection: {
        "create": HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE,
        "update": HookEvent.ON_ACTION_COLLECTION_AFTER_UPDATE,
        "delete": HookEvent.ON_ACTION_COLLECTION_AFTER_DELETE,
    },
    NewAction: {
        "create": HookEvent.ON_ACTION_AFTER_CREATE,
        "update": HookEvent.ON_ACTION_AFTER_UPDATE,
        "delete": HookEvent.ON_ACTION_AFTER_DELETE,
    },
}


def _event_data(entity: ActionCollection | NewAction) -> dict[str, Any]:
    if isinstance(entity, ActionCollection):
        draft = entity.unpublished_collection
        return {
            "id": entity.id,
            "name": draft.name,
            "page_id": draft.page_id,
            "application_id": entity.application_id,
            "organization_id": entity.organization_id,
            "action_count": len(draft.action_ids),
            "archived_action_count": len(draft.archived_action_ids),
            "published": entity.is_published,
        }
    return {
        "id": entity.id,
        "name": entity.unpublished_action.name,
        "collection_id": entity.unpublished_action.collection_id,
        "application_id": entity.application_id,
        "organization_id": entity.organization_id,
    }


class AnalyticsService:
    """Emits entity lifecycle events to the hook registry."""

    def __init__(self, hook_registry: HookRegistry, app: Any = None) -> None:
        self.hook_registry = hook_registry
        self.app = app

    async def send_create_event(self, entity: E) -> E:
        return await self._send("create", entity)

    async def send_update_event(self, entity: E) -> E:
        return await self._send("update", entity)

    async def send_delete_event(self, entity: E) -> E:
        return await self._send("delete", entity)

    async def send_publish_event(self, application_id: str, counts: dict[str, int]) -> None:
        """Emit the application publish event."""
        try:
            await self.hook_registry.trigger(
                event=HookEvent.ON_APPLICATION_AFTER_PUBLISH,
                data={"application_id": application_id, **counts},
                context=HookContext(app=self.app),
                filters={"application_id": application_id},
            )
        except Exception as e:
            logger.error(
                "Failed to send analytics event",
                hook_event=HookEvent.ON_APPLICATION_AFTER_PUBLISH,
                application_id=application_id,
                error=str(e),
            )

    async def _send(self, operation: str, entity: E) -> E:
        event = _EVENTS[type(entity)][operation]
        try:
            await self.hook_registry.trigger(
                event=event,
                data=_event_data(entity),
                context=HookContext(app=self.app, organization_id=entity.organization_id),
                filters={"application_id": entity.application_id},
            )
        except Exception as e:
            logger.error(
                "Failed to send analytics event",
                hook_event=event,
                entity_id=entity.id,
                error=str(e),
            )
        return entity
