"""Repository for action database operations."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from actionbase.domain.entities import ActionDTO, NewAction
from actionbase.infrastructure.persistence.models import ActionModel


class ActionRepository:
    """Repository for action database operations.

    Records are returned as ``NewAction`` entities; the per-state JSON
    documents are converted on the way in and out.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: ActionModel) -> NewAction:
        return NewAction(
            id=model.id,
            application_id=model.application_id,
            organization_id=model.organization_id,
            plugin_id=model.plugin_id,
            unpublished_action=ActionDTO.from_document(model.unpublished_action),
            published_action=ActionDTO.from_document(model.published_action)
            if model.published_action is not None
            else None,
        )

    async def get_by_id(self, action_id: str) -> NewAction | None:
        """Get an action by ID.

        Args:
            action_id: Action ID.

        Returns:
            The action if found, None otherwise.
        """
        result = await self.session.execute(select(ActionModel).where(ActionModel.id == action_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_page_id(self, page_id: str, view_mode: bool) -> list[NewAction]:
        """List actions whose state for the view mode is on a page.

        Args:
            page_id: Page ID.
            view_mode: True to match the published state, False the draft.

        Returns:
            Matching actions, oldest first.
        """
        state = ActionModel.published_action if view_mode else ActionModel.unpublished_action
        result = await self.session.execute(
            select(ActionModel)
            .where(state["page_id"].as_string() == page_id)
            .order_by(ActionModel.created_at, ActionModel.id)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list_by_application_id(self, application_id: str) -> list[NewAction]:
        """List every action of an application regardless of state.

        Args:
            application_id: Application ID.

        Returns:
            Actions of the application, oldest first.
        """
        result = await self.session.execute(
            select(ActionModel)
            .where(ActionModel.application_id == application_id)
            .order_by(ActionModel.created_at, ActionModel.id)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def save(self, action: NewAction) -> NewAction:
        """Insert or update an action, assigning an ID on first save.

        Args:
            action: Action to save.

        Returns:
            The saved action.
        """
        now = datetime.now(timezone.utc)
        model = await self.session.get(ActionModel, action.id) if action.id else None
        if model is None:
            action.id = action.id or str(uuid.uuid4())
            model = ActionModel(id=action.id, created_at=now)
            self.session.add(model)

        model.application_id = action.application_id
        model.organization_id = action.organization_id
        model.plugin_id = action.plugin_id
        model.unpublished_action = action.unpublished_action.to_document()
        model.published_action = (
            action.published_action.to_document() if action.published_action else None
        )
        model.updated_at = now

        await self.session.flush()
        return action

    async def delete(self, action: NewAction) -> None:
        """Delete an action.

        Args:
            action: Action to delete.
        """
        model = await self.session.get(ActionModel, action.id)
        if model is not None:
            await self.session.delete(model)
            await self.session.flush()
