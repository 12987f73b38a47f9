"""Publishing of application drafts.

Publishing promotes every draft of an application to its published state.
Drafts marked deleted are removed for good at this point.
"""

from __future__ import annotations

from actionbase.core.exceptions import FieldName, InvalidParameterError
from actionbase.core.logging import get_logger
from actionbase.domain.services.analytics_service import AnalyticsService
from actionbase.infrastructure.persistence.repositories import (
    ActionCollectionRepository,
    ActionRepository,
)

logger = get_logger(__name__)


class PublishService:
    """Copies the drafts of an application to their published states."""

    def __init__(
        self,
        action_repository: ActionRepository,
        collection_repository: ActionCollectionRepository,
        analytics_service: AnalyticsService | None = None,
    ) -> None:
        self.action_repository = action_repository
        self.collection_repository = collection_repository
        self.analytics_service = analytics_service

    async def publish_application(self, application_id: str) -> dict[str, int]:
        """Publish all actions and action collections of an application.

        Args:
            application_id: Application to publish.

        Returns:
            Counts of published and deleted actions and collections.

        Raises:
            InvalidParameterError: If the application id is blank.
        """
        if not application_id or not application_id.strip():
            raise InvalidParameterError(FieldName.APPLICATION_ID)

        counts = {
            "published_actions": 0,
            "deleted_actions": 0,
            "published_collections": 0,
            "deleted_collections": 0,
        }

        for action in await self.action_repository.list_by_application_id(application_id):
            if action.unpublished_action.deleted_at is not None:
                await self.action_repository.delete(action)
                counts["deleted_actions"] += 1
                continue
            action.published_action = action.unpublished_action.copy(id=None)
            await self.action_repository.save(action)
            counts["published_actions"] += 1

        for collection in await self.collection_repository.list_by_application_id(application_id):
            draft = collection.unpublished_collection
            if draft.deleted_at is not None:
                await self.collection_repository.delete(collection)
                counts["deleted_collections"] += 1
                continue
            collection.published_collection = draft.copy(id=None, actions=[], archived_actions=[])
            await self.collection_repository.save(collection)
            counts["published_collections"] += 1

        if self.analytics_service is not None:
            await self.analytics_service.send_publish_event(application_id, counts)

        logger.info("Application published", application_id=application_id, **counts)
        return counts
