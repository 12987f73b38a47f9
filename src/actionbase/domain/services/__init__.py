"""Domain services for ActionBase.

Services contain the business logic of actions, action collections and
their publishing.
"""

from actionbase.domain.services.action_service import ActionService, is_valid_action_name
from actionbase.domain.services.analytics_service import AnalyticsService
from actionbase.domain.services.name_validator import NameValidator
from actionbase.domain.services.page_service import PageService
from actionbase.domain.services.publish_service import PublishService
from actionbase.domain.services.action_collection_service import (
    ActionCollectionService,
    fully_qualified_name,
)

__all__ = [
    "ActionCollectionService",
    "ActionService",
    "AnalyticsService",
    "NameValidator",
    "PageService",
    "PublishService",
    "fully_qualified_name",
    "is_valid_action_name",
]
