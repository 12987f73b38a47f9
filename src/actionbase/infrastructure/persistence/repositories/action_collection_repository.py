"""Repository for action collection database operations.

Name and page lookups query inside the per-state JSON documents, so the same
queries serve the draft and the published state.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from actionbase.domain.entities import ActionCollection, ActionCollectionDTO
from actionbase.infrastructure.persistence.models import ActionCollectionModel


def _state_column(view_mode: bool):
    if view_mode:
        return ActionCollectionModel.published_collection
    return ActionCollectionModel.unpublished_collection


def _visible(query: Select, view_mode: bool) -> Select:
    """Restrict a query to records that have a live state for the view mode."""
    if view_mode:
        return query.where(ActionCollectionModel.published_collection.is_not(None))
    return query.where(
        ActionCollectionModel.unpublished_collection["deleted_at"].as_string().is_(None)
    )


class ActionCollectionRepository:
    """Repository for action collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: ActionCollectionModel) -> ActionCollection:
        return ActionCollection(
            id=model.id,
            application_id=model.application_id,
            organization_id=model.organization_id,
            unpublished_collection=ActionCollectionDTO.from_document(model.unpublished_collection),
            published_collection=ActionCollectionDTO.from_document(model.published_collection)
            if model.published_collection is not None
            else None,
            policies=list(model.policies or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _fetch(self, query: Select) -> list[ActionCollection]:
        result = await self.session.execute(
            query.order_by(ActionCollectionModel.created_at, ActionCollectionModel.id)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get_by_id(self, collection_id: str) -> ActionCollection | None:
        """Get an action collection by ID.

        Args:
            collection_id: Action collection ID.

        Returns:
            The action collection if found, None otherwise.
        """
        result = await self.session.execute(
            select(ActionCollectionModel).where(ActionCollectionModel.id == collection_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_all_by_name_and_page_ids_and_view_mode(
        self, name: str, page_ids: Iterable[str], view_mode: bool
    ) -> list[ActionCollection]:
        """Find collections with a given name on any of the given pages.

        Args:
            name: Collection name.
            page_ids: Pages to search.
            view_mode: True to match the published state, False the draft.

        Returns:
            Matching collections. Deleted drafts never match in edit mode.
        """
        state = _state_column(view_mode)
        query = select(ActionCollectionModel).where(
            state["name"].as_string() == name,
            state["page_id"].as_string().in_(list(page_ids)),
        )
        return await self._fetch(_visible(query, view_mode))

    async def find_by_page_id(self, page_id: str, view_mode: bool) -> list[ActionCollection]:
        """List the live collections of a page for a view mode."""
        state = _state_column(view_mode)
        query = select(ActionCollectionModel).where(state["page_id"].as_string() == page_id)
        return await self._fetch(_visible(query, view_mode))

    async def find_by_application_id(
        self, application_id: str, view_mode: bool
    ) -> list[ActionCollection]:
        """List the live collections of an application for a view mode."""
        query = select(ActionCollectionModel).where(
            ActionCollectionModel.application_id == application_id
        )
        return await self._fetch(_visible(query, view_mode))

    async def list_by_application_id(self, application_id: str) -> list[ActionCollection]:
        """List every collection of an application, deleted drafts included."""
        return await self._fetch(
            select(ActionCollectionModel).where(
                ActionCollectionModel.application_id == application_id
            )
        )

    async def save(self, collection: ActionCollection) -> ActionCollection:
        """Insert or update a collection, assigning an ID on first save.

        Only membership id sets are written; resolved action lists on the
        states are never persisted.

        Args:
            collection: Action collection to save.

        Returns:
            The saved action collection.
        """
        now = datetime.now(timezone.utc)
        model = (
            await self.session.get(ActionCollectionModel, collection.id) if collection.id else None
        )
        if model is None:
            collection.id = collection.id or str(uuid.uuid4())
            collection.created_at = now
            model = ActionCollectionModel(id=collection.id, created_at=now)
            self.session.add(model)

        model.application_id = collection.application_id
        model.organization_id = collection.organization_id
        model.unpublished_collection = collection.unpublished_collection.to_document()
        model.published_collection = (
            collection.published_collection.to_document()
            if collection.published_collection
            else None
        )
        model.policies = list(collection.policies)
        model.updated_at = collection.updated_at = now

        await self.session.flush()
        return collection

    async def delete(self, collection: ActionCollection) -> None:
        """Delete an action collection.

        Args:
            collection: Action collection to delete.
        """
        model = await self.session.get(ActionCollectionModel, collection.id)
        if model is not None:
            await self.session.delete(model)
            await self.session.flush()
