"""Hook registry: central hook registration and execution engine.

Hooks are async callbacks ``(event, data, context)`` registered per event.
They run in priority order; a failing hook is logged and recorded in the
result, and only aborts the chain when registered with ``stop_on_error``.
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from actionbase.core.logging import get_logger
from actionbase.domain.entities.hook_context import HookContext, HookResult

logger = get_logger(__name__)


@dataclass
class RegisteredHook:
    """Internal representation of a registered hook.

    Attributes:
        id: Unique identifier for this hook registration.
        event: The event this hook is registered for.
        callback: The async function to call.
        filters: Tag-based filters (e.g., {"organization_id": "org-1"}).
        priority: Execution priority (higher = earlier).
        stop_on_error: Whether errors should abort the chain.
        is_builtin: Whether this is a built-in system hook.
        registration_order: Order in which this hook was registered.
    """

    id: str
    event: str
    callback: Callable
    filters: dict[str, Any] = field(default_factory=dict)
    priority: int = 0
    stop_on_error: bool = False
    is_builtin: bool = False
    registration_order: int = 0


class HookRegistry:
    """Central hook registration and execution engine.

    Example:
        registry = HookRegistry()

        hook_id = registry.register(
            event=HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE,
            callback=track_collection,
            priority=10,
        )

        result = await registry.trigger(
            event=HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE,
            data={"id": "col-1", "name": "utils"},
        )
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[RegisteredHook]] = {}
        self._registration_counter: int = 0
        self._hook_map: dict[str, RegisteredHook] = {}

    def register(
        self,
        event: str,
        callback: Callable,
        filters: Optional[dict[str, Any]] = None,
        priority: int = 0,
        stop_on_error: bool = False,
        is_builtin: bool = False,
    ) -> str:
        """Register a hook for an event.

        Args:
            event: Hook event name.
            callback: Async function accepting (event, data, context).
            filters: Hook only fires when every filter matches the trigger filters.
            priority: Higher priority hooks run first. Built-in hooks use
                negative priorities.
            stop_on_error: If True, an error in this hook aborts the chain.
            is_builtin: If True, this hook cannot be unregistered.

        Returns:
            Unique hook_id string for later removal.
        """
        hook_id = f"hook_{uuid.uuid4().hex[:12]}"
        self._registration_counter += 1

        hook = RegisteredHook(
            id=hook_id,
            event=event,
            callback=callback,
            filters=filters or {},
            priority=priority,
            stop_on_error=stop_on_error,
            is_builtin=is_builtin,
            registration_order=self._registration_counter,
        )
        self._hooks.setdefault(event, []).append(hook)
        self._hook_map[hook_id] = hook

        logger.debug(
            "Hook registered",
            hook_id=hook_id,
            hook_event=event,
            priority=priority,
            is_builtin=is_builtin,
        )
        return hook_id

    def unregister(self, hook_id: str) -> bool:
        """Remove a registered hook.

        Returns:
            True if the hook was removed, False if not found or built-in.
        """
        hook = self._hook_map.get(hook_id)
        if not hook:
            logger.warning("Hook not found for unregister", hook_id=hook_id)
            return False

        if hook.is_builtin:
            logger.warning("Cannot unregister built-in hook", hook_id=hook_id, hook_event=hook.event)
            return False

        remaining = [h for h in self._hooks.get(hook.event, []) if h.id != hook_id]
        if remaining:
            self._hooks[hook.event] = remaining
        else:
            self._hooks.pop(hook.event, None)
        del self._hook_map[hook_id]

        logger.debug("Hook unregistered", hook_id=hook_id, hook_event=hook.event)
        return True

    async def trigger(
        self,
        event: str,
        data: Optional[dict[str, Any]] = None,
        context: Optional[HookContext] = None,
        filters: Optional[dict[str, Any]] = None,
    ) -> HookResult:
        """Execute all registered hooks for an event.

        Hooks run by priority (descending), then registration order. A hook
        returning a dict replaces the data handed to the next hook.
        """
        result = HookResult(success=True, data=data)

        matching_hooks = self._filter_hooks(self._hooks.get(event, []), filters)
        if not matching_hooks:
            return result

        sorted_hooks = sorted(
            matching_hooks,
            key=lambda h: (-h.priority, h.registration_order),
        )

        logger.debug("Triggering hooks", hook_event=event, hook_count=len(sorted_hooks))

        current_data = data
        for hook in sorted_hooks:
            try:
                hook_result = await self._execute_hook(hook, event, current_data, context)
                if isinstance(hook_result, dict):
                    current_data = hook_result
                    result.data = current_data
            except Exception as e:
                logger.error(
                    "Hook execution failed",
                    hook_id=hook.id,
                    hook_event=event,
                    error=str(e),
                    stop_on_error=hook.stop_on_error,
                )
                result.errors.append(f"Hook {hook.id} failed: {e}")
                if hook.stop_on_error:
                    result.success = False
                    return result

        return result

    async def _execute_hook(
        self,
        hook: RegisteredHook,
        event: str,
        data: Optional[dict[str, Any]],
        context: Optional[HookContext],
    ) -> Any:
        callback = hook.callback
        if asyncio.iscoroutinefunction(callback):
            return await callback(event, data, context)

        logger.warning("Hook callback is not async, calling directly", hook_id=hook.id, hook_event=event)
        return callback(event, data, context)

    def _filter_hooks(
        self,
        hooks: list[RegisteredHook],
        filters: Optional[dict[str, Any]],
    ) -> list[RegisteredHook]:
        """Select hooks whose filters all match the trigger filters.

        A hook without filters matches everything. When the trigger carries
        no filters, every hook matches.
        """
        if not filters:
            return list(hooks)

        return [
            hook
            for hook in hooks
            if all(filters.get(key) == value for key, value in hook.filters.items())
        ]

    def get_hooks_for_event(self, event: str) -> list[RegisteredHook]:
        """Get all hooks registered for an event."""
        return self._hooks.get(event, []).copy()

    def clear(self, include_builtin: bool = False) -> int:
        """Remove registered hooks, keeping built-in ones unless asked.

        Returns:
            Number of hooks removed.
        """
        if include_builtin:
            count = len(self._hook_map)
            self._hooks.clear()
            self._hook_map.clear()
        else:
            to_remove = [hook_id for hook_id, hook in self._hook_map.items() if not hook.is_builtin]
            for hook_id in to_remove:
                self.unregister(hook_id)
            count = len(to_remove)

        logger.debug("Hooks cleared", count=count, include_builtin=include_builtin)
        return count
