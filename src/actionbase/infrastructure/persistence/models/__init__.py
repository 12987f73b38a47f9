"""SQLAlchemy models for ActionBase tables.

All models inherit from the Base class defined in database.py and are
created on application startup outside production.
"""

from actionbase.infrastructure.persistence.models.action import ActionModel
from actionbase.infrastructure.persistence.models.action_collection import ActionCollectionModel
from actionbase.infrastructure.persistence.models.page import PageModel

__all__ = [
    "ActionCollectionModel",
    "ActionModel",
    "PageModel",
]
