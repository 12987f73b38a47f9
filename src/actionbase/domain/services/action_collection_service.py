"""Action collection service for business logic.

Keeps an action collection's draft and published states consistent with its
member actions across create, update and delete, and builds the DTOs handed
back to callers.

Member actions are never cached on the collection record: the record stores
id sets only, and every returned DTO resolves them through the action
service at view time.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar

from actionbase.core.exceptions import (
    DuplicateKeyUserError,
    FieldName,
    InvalidParameterError,
    NoResourceFoundError,
)
from actionbase.core.logging import get_logger
from actionbase.domain.entities import (
    ActionCollection,
    ActionCollectionDTO,
    ActionDTO,
    PageDTO,
)
from actionbase.domain.services.ports import (
    ActionCollectionStore,
    ActionSubsystem,
    AnalyticsSink,
    NameValidatorProtocol,
    PageLookup,
)

logger = get_logger(__name__)

T = TypeVar("T")

REQUIRED_CREATE_FIELDS = (
    FieldName.NAME,
    FieldName.PAGE_ID,
    FieldName.APPLICATION_ID,
    FieldName.ORGANIZATION_ID,
    FieldName.PLUGIN_ID,
)

# Edit mode. Every mutation of this service works on the draft.
DRAFT = False


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def fully_qualified_name(collection_name: Optional[str], action_name: Optional[str]) -> str:
    """Build the externally addressable name of a member action."""
    return f"{collection_name}.{action_name}"


class ActionCollectionService:
    """Service for action collection business logic."""

    def __init__(
        self,
        repository: ActionCollectionStore,
        action_service: ActionSubsystem,
        page_service: PageLookup,
        name_validator: NameValidatorProtocol,
        analytics_service: AnalyticsSink,
        fanout_limit: int = 1,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Store for action collection records.
            action_service: Subsystem owning the member actions.
            page_service: Page lookup.
            name_validator: Checks names against the other entities of a page.
            analytics_service: Receives lifecycle events.
            fanout_limit: Maximum number of concurrent per-action calls.
        """
        self.repository = repository
        self.action_service = action_service
        self.page_service = page_service
        self.name_validator = name_validator
        self.analytics_service = analytics_service
        self.fanout_limit = max(1, fanout_limit)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_collection(self, collection: ActionCollectionDTO) -> ActionCollectionDTO:
        """Create a collection and its inline actions.

        Inline actions are created best-effort: an action that fails to be
        created is left out of the result while the collection itself is
        still created.

        Args:
            collection: Draft content, without an id, with the inline
                actions to create in ``actions``.

        Returns:
            The created draft with the successfully created actions.

        Raises:
            InvalidParameterError: If an id is supplied or a required field is blank.
            NoResourceFoundError: If the page does not exist.
            DuplicateKeyUserError: If the name is taken on the page.
        """
        if collection.id:
            raise InvalidParameterError(FieldName.ID)

        for field_name in REQUIRED_CREATE_FIELDS:
            if _is_blank(getattr(collection, field_name)):
                raise InvalidParameterError(field_name)

        page = await self.page_service.find_by_id(collection.page_id, DRAFT)
        if page is None:
            raise NoResourceFoundError(FieldName.PAGE, collection.page_id)

        await self._ensure_name_available(page, collection.name)

        draft = collection.copy(
            id=None,
            action_ids=set(),
            archived_action_ids=set(),
            actions=[],
            archived_actions=[],
            deleted_at=None,
        )
        saved = await self.repository.save(
            ActionCollection(
                application_id=collection.application_id,
                organization_id=collection.organization_id,
                unpublished_collection=draft,
            )
        )

        created = await self._run_best_effort(
            "create_action",
            [
                (action.name or "", self._create_member_action(saved, action))
                for action in collection.actions
            ],
        )
        if created:
            saved.unpublished_collection.action_ids = {action.id for action in created}
            saved = await self.repository.save(saved)

        await self._emit(self.analytics_service.send_create_event, saved)

        logger.info(
            "Action collection created",
            collection_id=saved.id,
            collection_name=draft.name,
            page_id=draft.page_id,
            requested_actions=len(collection.actions),
            created_actions=len(created),
        )

        return saved.unpublished_collection.copy(id=saved.id, actions=created, archived_actions=[])

    async def _create_member_action(
        self, collection: ActionCollection, action: ActionDTO
    ) -> ActionDTO:
        draft = collection.unpublished_collection
        member = action.copy(
            id=None,
            collection_id=collection.id,
            fully_qualified_name=fully_qualified_name(draft.name, action.name),
            page_id=action.page_id or draft.page_id,
            application_id=action.application_id or draft.application_id,
            organization_id=action.organization_id or draft.organization_id,
            plugin_id=action.plugin_id or draft.plugin_id,
        )
        created = await self.action_service.create_action(member)
        if not created.id:
            raise ValueError(f"Action '{action.name}' was created without an id")
        return created

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def update_unpublished_action_collection(
        self, collection_id: Optional[str], collection: ActionCollectionDTO
    ) -> ActionCollectionDTO:
        """Apply a modified draft to a stored collection.

        Membership is reconciled between the stored draft and the request.
        Every live member of the request is updated, which also claims
        members added by this request for the collection. Every archived
        member is updated and stamped with ``archived_at``. Stored members
        missing from both new sets are dropped from membership without
        touching the action.

        Args:
            collection_id: Id of the collection to update (authoritative).
            collection: The modified draft.

        Returns:
            The updated draft with members resolved.

        Raises:
            InvalidParameterError: If the id is missing.
            NoResourceFoundError: If no collection has this id.
            DuplicateKeyUserError: If a rename collides on the page.
        """
        if _is_blank(collection_id):
            raise InvalidParameterError(FieldName.ID)

        action_collection = await self.repository.get_by_id(collection_id)
        if action_collection is None:
            raise NoResourceFoundError(FieldName.ACTION_COLLECTION, collection_id)

        now = datetime.now(timezone.utc)
        draft = action_collection.unpublished_collection

        old_ids = draft.action_ids | draft.archived_action_ids
        new_archived_ids = set(collection.archived_action_ids)
        new_ids = set(collection.action_ids) - new_archived_ids

        to_update = new_ids
        # Members already archived keep their original archived_at
        to_archive = new_archived_ids - draft.archived_action_ids
        dropped = old_ids - new_ids - new_archived_ids
        for action_id in sorted(dropped):
            # TODO: require an explicit archive or delete instead of a silent drop
            logger.info(
                "Action dropped from collection membership",
                collection_id=collection_id,
                action_id=action_id,
            )

        if not _is_blank(collection.name) and collection.name != draft.name:
            await self._rename(action_collection, collection.name)

        definitions = {
            action.id: action
            for action in [*collection.actions, *collection.archived_actions]
            if action.id
        }
        updated = await self._run_all(
            [
                self._update_member_action(
                    action_collection, action_id, definitions.get(action_id), archived_at=None
                )
                for action_id in sorted(to_update)
            ]
            + [
                self._update_member_action(
                    action_collection, action_id, definitions.get(action_id), archived_at=now
                )
                for action_id in sorted(to_archive)
            ]
        )

        if collection.body is not None:
            draft.body = collection.body
            draft.variables = [dict(variable) for variable in collection.variables]
        draft.action_ids = new_ids
        draft.archived_action_ids = new_archived_ids

        saved = await self.repository.save(action_collection)
        await self._emit(self.analytics_service.send_update_event, saved)

        logger.info(
            "Action collection updated",
            collection_id=saved.id,
            updated_actions=len(to_update),
            archived_actions=len(to_archive),
            dropped_actions=len(dropped),
        )

        return await self.populate_action_collection_by_view_mode(
            saved, DRAFT, resolved={action.id: action for action in updated}
        )

    async def _rename(self, action_collection: ActionCollection, new_name: str) -> None:
        draft = action_collection.unpublished_collection
        page = await self.page_service.find_by_id(draft.page_id, DRAFT)
        if page is None:
            raise NoResourceFoundError(FieldName.PAGE, draft.page_id)

        await self._ensure_name_available(page, new_name, exclude_id=action_collection.id)

        logger.info(
            "Action collection renamed",
            collection_id=action_collection.id,
            old_name=draft.name,
            new_name=new_name,
        )
        draft.name = new_name

    async def _update_member_action(
        self,
        action_collection: ActionCollection,
        action_id: str,
        definition: Optional[ActionDTO],
        archived_at: Optional[datetime],
    ) -> ActionDTO:
        if definition is None:
            definition = await self.action_service.find_action_dto_by_id_and_view_mode(
                action_id, DRAFT
            )
            if definition is None:
                raise NoResourceFoundError(FieldName.ACTION, action_id)

        collection_name = action_collection.unpublished_collection.name
        action = definition.copy(
            id=action_id,
            collection_id=action_collection.id,
            fully_qualified_name=fully_qualified_name(collection_name, definition.name),
            archived_at=archived_at,
        )
        updated = await self.action_service.update_action(action_id, action)
        if archived_at is not None and updated.archived_at is None:
            updated.archived_at = archived_at
        return updated

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_unpublished_action_collection(
        self, collection_id: Optional[str]
    ) -> ActionCollectionDTO:
        """Delete the draft of a collection.

        A collection that was never published is removed with all its draft
        members, live and archived. A published collection keeps its record: draft members are
        soft-deleted and the draft is marked deleted until the deletion is
        published.

        Raises:
            InvalidParameterError: If the id is missing.
            NoResourceFoundError: If no collection has this id.
        """
        if _is_blank(collection_id):
            raise InvalidParameterError(FieldName.ID)

        action_collection = await self.repository.get_by_id(collection_id)
        if action_collection is None:
            raise NoResourceFoundError(FieldName.ACTION_COLLECTION, collection_id)

        draft = action_collection.unpublished_collection
        member_ids = sorted(draft.action_ids)

        if action_collection.is_published:
            await self._run_best_effort(
                "delete_unpublished_action",
                [
                    (action_id, self.action_service.delete_unpublished_action(action_id))
                    for action_id in member_ids
                ],
            )
            draft.action_ids = set()
            draft.archived_action_ids = set()
            draft.deleted_at = datetime.now(timezone.utc)
            saved = await self.repository.save(action_collection)
            result = saved.unpublished_collection.copy(id=saved.id, actions=[], archived_actions=[])
            logger.info(
                "Action collection draft soft-deleted",
                collection_id=collection_id,
                member_actions=len(member_ids),
            )
        else:
            archived_ids = sorted(draft.archived_action_ids - draft.action_ids)
            deleted = await self._run_best_effort(
                "delete_action",
                [
                    (action_id, self.action_service.delete(action_id))
                    for action_id in member_ids + archived_ids
                ],
            )
            await self.repository.delete(action_collection)
            removed = [action.unpublished_action.copy(id=action.id) for action in deleted]
            result = draft.copy(
                id=action_collection.id,
                actions=[action for action in removed if action.id in draft.action_ids],
                archived_actions=[action for action in removed if action.id in archived_ids],
            )
            logger.info(
                "Action collection deleted",
                collection_id=collection_id,
                member_actions=len(member_ids) + len(archived_ids),
                deleted_actions=len(deleted),
            )

        await self._emit(self.analytics_service.send_delete_event, action_collection)
        return result

    async def archive_by_id(self, collection_id: str) -> ActionCollectionDTO:
        """Remove a collection and every member action of both states.

        Used when the owning page goes away and no history is kept.

        Raises:
            NoResourceFoundError: If no collection has this id.
        """
        action_collection = await self.repository.get_by_id(collection_id)
        if action_collection is None:
            raise NoResourceFoundError(FieldName.ACTION_COLLECTION, collection_id)

        member_ids: set[str] = set()
        for state in (action_collection.unpublished_collection, action_collection.published_collection):
            if state is not None:
                member_ids |= state.action_ids | state.archived_action_ids

        deleted = await self._run_best_effort(
            "delete_action",
            [(action_id, self.action_service.delete(action_id)) for action_id in sorted(member_ids)],
        )
        await self.repository.delete(action_collection)
        await self._emit(self.analytics_service.send_delete_event, action_collection)

        logger.info(
            "Action collection archived",
            collection_id=collection_id,
            deleted_actions=len(deleted),
        )

        return action_collection.unpublished_collection.copy(
            id=action_collection.id,
            actions=[action.unpublished_action.copy(id=action.id) for action in deleted],
            archived_actions=[],
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_by_id(self, collection_id: str, view_mode: bool = DRAFT) -> ActionCollectionDTO:
        """Get the populated state of a collection for a view mode.

        Raises:
            NoResourceFoundError: If the collection, or its state for the view
                mode, does not exist, or the draft has been deleted.
        """
        action_collection = await self.repository.get_by_id(collection_id)
        if action_collection is None or not self._is_visible(action_collection, view_mode):
            raise NoResourceFoundError(FieldName.ACTION_COLLECTION, collection_id)

        return await self.populate_action_collection_by_view_mode(action_collection, view_mode)

    async def get_populated_action_collections_by_view_mode(
        self,
        view_mode: bool,
        page_id: Optional[str] = None,
        application_id: Optional[str] = None,
    ) -> list[ActionCollectionDTO]:
        """List the populated collections of a page or an application.

        Raises:
            InvalidParameterError: If neither a page nor an application is given.
        """
        if not _is_blank(page_id):
            collections = await self.repository.find_by_page_id(page_id, view_mode)
        elif not _is_blank(application_id):
            collections = await self.repository.find_by_application_id(application_id, view_mode)
        else:
            raise InvalidParameterError(FieldName.PAGE_ID)

        visible = [c for c in collections if self._is_visible(c, view_mode)]
        return [
            await self.populate_action_collection_by_view_mode(c, view_mode) for c in visible
        ]

    async def populate_action_collection_by_view_mode(
        self,
        action_collection: ActionCollection,
        view_mode: bool,
        resolved: Optional[dict[str, ActionDTO]] = None,
    ) -> ActionCollectionDTO:
        """Build the DTO of one state with its members resolved.

        Args:
            action_collection: The stored collection.
            view_mode: True for the published state, False for the draft.
            resolved: Actions already known for some ids (e.g. just updated);
                every other id is fetched from the action service.

        Raises:
            NoResourceFoundError: If the collection has no state for the view mode.
        """
        state = action_collection.state(view_mode)
        if state is None:
            raise NoResourceFoundError(FieldName.ACTION_COLLECTION, action_collection.id)

        known = resolved or {}
        dto = state.copy(id=action_collection.id)
        dto.actions = await self._resolve_actions(action_collection.id, state.action_ids, known, view_mode)
        dto.archived_actions = await self._resolve_actions(
            action_collection.id, state.archived_action_ids, known, view_mode
        )
        return dto

    async def _resolve_actions(
        self,
        collection_id: Optional[str],
        action_ids: Iterable[str],
        known: dict[str, ActionDTO],
        view_mode: bool,
    ) -> list[ActionDTO]:
        ordered = sorted(action_ids)
        pending = [action_id for action_id in ordered if action_id not in known]
        fetched = await self._run_all(
            [
                self.action_service.find_action_dto_by_id_and_view_mode(action_id, view_mode)
                for action_id in pending
            ]
        )

        lookup = dict(known)
        for action_id, action in zip(pending, fetched):
            if action is None:
                logger.warning(
                    "Member action could not be resolved",
                    collection_id=collection_id,
                    action_id=action_id,
                    view_mode=view_mode,
                )
                continue
            lookup[action_id] = action if action.id else action.copy(id=action_id)

        return [lookup[action_id] for action_id in ordered if action_id in lookup]

    @staticmethod
    def _is_visible(action_collection: ActionCollection, view_mode: bool) -> bool:
        state = action_collection.state(view_mode)
        if state is None:
            return False
        return view_mode or state.deleted_at is None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _ensure_name_available(
        self, page: PageDTO, name: str, exclude_id: Optional[str] = None
    ) -> None:
        if not await self.name_validator.is_name_allowed(page, name, DRAFT):
            raise DuplicateKeyUserError(name, FieldName.NAME)

        existing = await self.repository.find_all_by_name_and_page_ids_and_view_mode(
            name, [page.id], DRAFT
        )
        if any(other.id != exclude_id for other in existing):
            raise DuplicateKeyUserError(name, FieldName.NAME)

    def _limiter(self) -> Callable[[Awaitable[T]], Awaitable[T]]:
        semaphore = asyncio.Semaphore(self.fanout_limit)

        async def limited(call: Awaitable[T]) -> T:
            try:
                async with semaphore:
                    return await call
            finally:
                # Calls cancelled while waiting for a slot never started
                if asyncio.iscoroutine(call):
                    call.close()

        return limited

    async def _run_all(self, calls: list[Awaitable[T]]) -> list[T]:
        """Run calls with bounded concurrency.

        The first failure cancels the calls still pending or running, waits
        for them to finish, and then propagates.
        """
        limited = self._limiter()
        tasks = [asyncio.ensure_future(limited(call)) for call in calls]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _run_best_effort(
        self, operation: str, calls: list[tuple[str, Awaitable[T]]]
    ) -> list[T]:
        """Run calls with bounded concurrency and keep only the successes.

        Failures are logged per call and dropped instead of failing the batch.
        """
        limited = self._limiter()
        outcomes = await asyncio.gather(
            *(limited(call) for _, call in calls),
            return_exceptions=True,
        )

        successes: list[T] = []
        for (label, _), outcome in zip(calls, outcomes):
            if isinstance(outcome, Exception):
                logger.warning(
                    "Member action operation failed",
                    operation=operation,
                    target=label,
                    error=str(outcome),
                    error_type=type(outcome).__name__,
                )
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            successes.append(outcome)
        return successes

    async def _emit(
        self,
        send: Callable[[ActionCollection], Awaitable[Any]],
        action_collection: ActionCollection,
    ) -> None:
        try:
            await send(action_collection)
        except Exception as e:
            logger.warning(
                "Analytics event failed",
                collection_id=action_collection.id,
                error=str(e),
            )
