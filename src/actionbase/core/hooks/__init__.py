"""Hook system core module.

Event-based extensibility: analytics, auditing and plugins subscribe to
entity events through the registry.

Example usage:
    from actionbase.core.hooks import HookEvent, HookRegistry

    registry = HookRegistry()

    async def track(event, data, context):
        await send_to_warehouse(event, data)
        return data

    registry.register(HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE, track)
"""

from actionbase.core.hooks.hook_events import (
    EVENT_CATEGORIES,
    HookCategory,
    HookEvent,
    get_all_events,
)
from actionbase.core.hooks.hook_registry import HookRegistry, RegisteredHook

__all__ = [
    "HookRegistry",
    "RegisteredHook",
    "HookCategory",
    "HookEvent",
    "EVENT_CATEGORIES",
    "get_all_events",
]
