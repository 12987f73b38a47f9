"""Name validation for entities that share a page's namespace.

Widgets, standalone actions and action collections on a page are all
addressed by bare name from JS code, so a name may only be used once among
them.
"""

from __future__ import annotations

from actionbase.core.logging import get_logger
from actionbase.domain.entities import PageDTO
from actionbase.domain.services.action_service import ActionService
from actionbase.infrastructure.persistence.repositories import ActionCollectionRepository

logger = get_logger(__name__)


class NameValidator:
    """Checks candidate names against everything already named on a page."""

    def __init__(
        self,
        action_service: ActionService,
        collection_repository: ActionCollectionRepository,
    ) -> None:
        self.action_service = action_service
        self.collection_repository = collection_repository

    async def is_name_allowed(self, page: PageDTO, name: str, view_mode: bool) -> bool:
        """Return False when the name is already taken on the page."""
        if name in page.widget_names:
            logger.debug("Name taken by widget", page_id=page.id, name=name)
            return False

        for action in await self.action_service.find_by_page_id(page.id, view_mode):
            # Collection members are addressed by their fully qualified name.
            if action.collection_id is None and action.name == name:
                logger.debug("Name taken by action", page_id=page.id, name=name)
                return False

        collections = await self.collection_repository.find_all_by_name_and_page_ids_and_view_mode(
            name, [page.id], view_mode
        )
        if collections:
            logger.debug("Name taken by action collection", page_id=page.id, name=name)
            return False

        return True
