"""Persistence repositories for database operations."""

from actionbase.infrastructure.persistence.repositories.action_collection_repository import (
    ActionCollectionRepository,
)
from actionbase.infrastructure.persistence.repositories.action_repository import (
    ActionRepository,
)
from actionbase.infrastructure.persistence.repositories.page_repository import (
    PageRepository,
)

__all__ = [
    "ActionCollectionRepository",
    "ActionRepository",
    "PageRepository",
]
