"""Built-in hooks for ActionBase.

These hooks provide core system functionality and CANNOT be disabled.
They are registered as built-in hooks with negative priority so user hooks
see events first.

Built-in hooks:
- analytics_log_hook: Writes every analytics event to the structured log
"""

from typing import Any, Optional

from actionbase.core.hooks.hook_events import EVENT_CATEGORIES, HookCategory
from actionbase.core.hooks.hook_registry import HookRegistry
from actionbase.core.logging import get_logger
from actionbase.domain.entities.hook_context import HookContext

logger = get_logger("actionbase.analytics")

ANALYTICS_CATEGORIES = (
    HookCategory.ACTION_COLLECTION_OPERATIONS,
    HookCategory.ACTION_OPERATIONS,
    HookCategory.APPLICATION_OPERATIONS,
)


async def analytics_log_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Built-in hook that records analytics events in the log.

    Args:
        event: The hook event name.
        data: The event payload.
        context: The hook context.

    Returns:
        The payload, unchanged.
    """
    fields: dict[str, Any] = {}
    if context is not None:
        fields["request_id"] = context.request_id
        fields["organization_id"] = context.organization_id
    # Payload values win over context values
    fields.update(data or {})

    logger.info("Analytics event", analytics_event=event, **fields)
    return data


def register_builtin_hooks(registry: HookRegistry) -> list[str]:
    """Register all built-in hooks.

    Args:
        registry: The HookRegistry to register hooks with.

    Returns:
        List of registered hook IDs.
    """
    hook_ids = []

    # Analytics logging runs after user hooks
    for event, category in EVENT_CATEGORIES.items():
        if category not in ANALYTICS_CATEGORIES:
            continue
        hook_ids.append(
            registry.register(
                event=event,
                callback=analytics_log_hook,
                priority=-100,
                is_builtin=True,
            )
        )

    logger.info(
        "Built-in hooks registered",
        hook_count=len(hook_ids),
    )

    return hook_ids


# Dictionary of built-in hook functions for reference
BUILTIN_HOOKS = {
    "analytics_log_hook": analytics_log_hook,
}
