"""Page service.

Pages are edited elsewhere; this service only registers them and serves the
page states that action collections are validated against.
"""

from __future__ import annotations

from actionbase.core.exceptions import FieldName, InvalidParameterError
from actionbase.core.logging import get_logger
from actionbase.domain.entities import NewPage, PageDTO
from actionbase.infrastructure.persistence.repositories import PageRepository

logger = get_logger(__name__)


class PageService:
    """Service for page lookups."""

    def __init__(self, repository: PageRepository) -> None:
        self.repository = repository

    async def find_by_id(self, page_id: str, view_mode: bool) -> PageDTO | None:
        """Get one state of a page, or None if the page or state is missing."""
        page = await self.repository.get_by_id(page_id)
        if page is None:
            return None
        return page.state(view_mode)

    async def create_page(
        self,
        application_id: str,
        name: str,
        widget_names: set[str] | None = None,
        publish: bool = False,
    ) -> NewPage:
        """Register a page.

        Args:
            application_id: Application the page belongs to.
            name: Display name of the page.
            widget_names: Names of the widgets placed on the page.
            publish: Also create the published state from the draft.

        Raises:
            InvalidParameterError: If the application id or name is blank.
        """
        if not application_id or not application_id.strip():
            raise InvalidParameterError(FieldName.APPLICATION_ID)
        if not name or not name.strip():
            raise InvalidParameterError(FieldName.NAME)

        draft = PageDTO(name=name, widget_names=set(widget_names or ()))
        page = NewPage(
            application_id=application_id,
            unpublished_page=draft,
            published_page=PageDTO(name=draft.name, widget_names=set(draft.widget_names))
            if publish
            else None,
        )
        saved = await self.repository.save(page)

        logger.info(
            "Page created",
            page_id=saved.id,
            application_id=application_id,
            published=publish,
        )
        return saved
