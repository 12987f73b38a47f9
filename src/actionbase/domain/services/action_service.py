"""Action service for business logic.

Owns the lifecycle of individual actions and their draft/published states.
The action collection service drives it for every member action.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from actionbase.core.exceptions import FieldName, InvalidParameterError, NoResourceFoundError
from actionbase.core.logging import get_logger
from actionbase.domain.entities import ActionDTO, NewAction
from actionbase.domain.services.analytics_service import AnalyticsService
from actionbase.infrastructure.persistence.repositories import ActionRepository

logger = get_logger(__name__)

# Action names are referenced from JS code, so they must be valid identifiers.
ACTION_NAME_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_valid_action_name(name: str | None) -> bool:
    """Check whether a name can be used as a JS identifier."""
    return bool(name) and ACTION_NAME_PATTERN.match(name) is not None


class ActionService:
    """Service for action business logic."""

    def __init__(
        self,
        repository: ActionRepository,
        analytics_service: AnalyticsService | None = None,
    ) -> None:
        self.repository = repository
        self.analytics_service = analytics_service

    async def create_action(self, action: ActionDTO) -> ActionDTO:
        """Create an action with the given draft.

        Args:
            action: Draft content; any id on it is ignored.

        Returns:
            The draft of the created action, carrying the new id.

        Raises:
            InvalidParameterError: If the name is not a valid identifier.
        """
        if not is_valid_action_name(action.name):
            raise InvalidParameterError(FieldName.NAME)

        record = NewAction(
            application_id=action.application_id,
            organization_id=action.organization_id,
            plugin_id=action.plugin_id,
            unpublished_action=action.copy(id=None),
        )
        saved = await self.repository.save(record)
        if self.analytics_service is not None:
            await self.analytics_service.send_create_event(saved)

        logger.info(
            "Action created",
            action_id=saved.id,
            action_name=action.name,
            collection_id=action.collection_id,
        )
        return saved.unpublished_action.copy(id=saved.id)

    async def update_action(self, action_id: str, action: ActionDTO) -> ActionDTO:
        """Replace the draft of an action.

        Ownership fields missing on the incoming draft keep their stored value.

        Raises:
            NoResourceFoundError: If the action does not exist.
            InvalidParameterError: If the name is not a valid identifier.
        """
        record = await self.repository.get_by_id(action_id)
        if record is None:
            raise NoResourceFoundError(FieldName.ACTION, action_id)

        if action.name is not None and not is_valid_action_name(action.name):
            raise InvalidParameterError(FieldName.NAME)

        current = record.unpublished_action
        record.unpublished_action = action.copy(
            id=None,
            name=action.name or current.name,
            page_id=action.page_id or current.page_id,
            application_id=action.application_id or current.application_id,
            organization_id=action.organization_id or current.organization_id,
            plugin_id=action.plugin_id or current.plugin_id,
            deleted_at=current.deleted_at,
        )
        saved = await self.repository.save(record)
        if self.analytics_service is not None:
            await self.analytics_service.send_update_event(saved)

        logger.debug("Action updated", action_id=action_id)
        return saved.unpublished_action.copy(id=saved.id)

    async def find_action_dto_by_id_and_view_mode(
        self, action_id: str, view_mode: bool
    ) -> ActionDTO | None:
        """Get one state of an action.

        Soft-deleted drafts are not returned in edit mode.
        """
        record = await self.repository.get_by_id(action_id)
        if record is None:
            return None

        state = record.state(view_mode)
        if state is None or (not view_mode and state.deleted_at is not None):
            return None
        return state.copy(id=record.id)

    async def find_by_page_id(self, page_id: str, view_mode: bool) -> list[ActionDTO]:
        """List the visible actions of a page in a view mode."""
        records = await self.repository.find_by_page_id(page_id, view_mode)
        actions = []
        for record in records:
            state = record.state(view_mode)
            if state is None or (not view_mode and state.deleted_at is not None):
                continue
            actions.append(state.copy(id=record.id))
        return actions

    async def delete_unpublished_action(self, action_id: str) -> ActionDTO:
        """Delete the draft of an action.

        An action that was never published is removed outright; otherwise its
        draft is marked deleted until the deletion is published.

        Raises:
            NoResourceFoundError: If the action does not exist.
        """
        record = await self.repository.get_by_id(action_id)
        if record is None:
            raise NoResourceFoundError(FieldName.ACTION, action_id)

        if record.published_action is None:
            await self.repository.delete(record)
            await self._send_delete_event(record)
            logger.info("Action deleted", action_id=action_id)
            return record.unpublished_action.copy(id=record.id)

        record.unpublished_action.deleted_at = datetime.now(timezone.utc)
        saved = await self.repository.save(record)
        await self._send_delete_event(saved)
        logger.info("Action draft soft-deleted", action_id=action_id)
        return saved.unpublished_action.copy(id=saved.id)

    async def delete(self, action_id: str) -> NewAction:
        """Remove an action record with both of its states.

        Raises:
            NoResourceFoundError: If the action does not exist.
        """
        record = await self.repository.get_by_id(action_id)
        if record is None:
            raise NoResourceFoundError(FieldName.ACTION, action_id)

        await self.repository.delete(record)
        await self._send_delete_event(record)
        logger.info("Action deleted", action_id=action_id)
        return record

    async def _send_delete_event(self, record: NewAction) -> None:
        if self.analytics_service is not None:
            await self.analytics_service.send_delete_event(record)
