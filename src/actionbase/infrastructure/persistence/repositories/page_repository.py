"""Repository for page database operations."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from actionbase.domain.entities import NewPage, PageDTO
from actionbase.infrastructure.persistence.models import PageModel


class PageRepository:
    """Repository for page database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: PageModel) -> NewPage:
        return NewPage(
            id=model.id,
            application_id=model.application_id,
            unpublished_page=PageDTO.from_document(model.unpublished_page),
            published_page=PageDTO.from_document(model.published_page)
            if model.published_page is not None
            else None,
        )

    async def get_by_id(self, page_id: str) -> NewPage | None:
        """Get a page by ID.

        Args:
            page_id: Page ID.

        Returns:
            The page if found, None otherwise.
        """
        result = await self.session.execute(select(PageModel).where(PageModel.id == page_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save(self, page: NewPage) -> NewPage:
        """Insert or update a page, assigning an ID on first save.

        Args:
            page: Page to save.

        Returns:
            The saved page.
        """
        now = datetime.now(timezone.utc)
        model = await self.session.get(PageModel, page.id) if page.id else None
        if model is None:
            page.id = page.id or str(uuid.uuid4())
            model = PageModel(id=page.id, created_at=now)
            self.session.add(model)

        model.application_id = page.application_id
        model.unpublished_page = page.unpublished_page.to_document()
        model.published_page = page.published_page.to_document() if page.published_page else None
        model.updated_at = now

        await self.session.flush()
        return page

    async def delete(self, page: NewPage) -> None:
        """Delete a page.

        Args:
            page: Page to delete.
        """
        model = await self.session.get(PageModel, page.id)
        if model is not None:
            await self.session.delete(model)
            await self.session.flush()
