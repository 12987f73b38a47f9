"""Domain entities for ActionBase.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from actionbase.domain.entities.action import ActionDTO, NewAction
from actionbase.domain.entities.action_collection import (
    DEFAULT_PLUGIN_TYPE,
    ActionCollection,
    ActionCollectionDTO,
)
from actionbase.domain.entities.hook_context import HookContext, HookResult
from actionbase.domain.entities.page import NewPage, PageDTO

__all__ = [
    "ActionCollection",
    "ActionCollectionDTO",
    "ActionDTO",
    "DEFAULT_PLUGIN_TYPE",
    "HookContext",
    "HookResult",
    "NewAction",
    "NewPage",
    "PageDTO",
]
