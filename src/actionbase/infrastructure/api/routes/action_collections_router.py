"""Router for action collection management.

Every mutating route works on the draft state; the published state only
changes when the application is published.
"""

from fastapi import APIRouter, status

from actionbase.core.logging import get_logger
from actionbase.infrastructure.api.dependencies import ActionCollectionServiceDep, DbSession
from actionbase.infrastructure.api.schemas import (
    ActionCollectionCreate,
    ActionCollectionResponse,
    ActionCollectionUpdate,
    ErrorResponse,
)

router = APIRouter(tags=["Action Collections"])
logger = get_logger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=ActionCollectionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create an action collection",
)
async def create_action_collection(
    collection_data: ActionCollectionCreate,
    service: ActionCollectionServiceDep,
    session: DbSession,
) -> ActionCollectionResponse:
    """Create an action collection together with its inline actions.

    Inline actions that fail to be created are left out of the response.
    """
    created = await service.create_collection(collection_data.to_dto())
    await session.commit()
    return ActionCollectionResponse.from_dto(created)


@router.get(
    "",
    response_model=list[ActionCollectionResponse],
    responses=ERROR_RESPONSES,
    summary="List action collections",
)
async def list_action_collections(
    service: ActionCollectionServiceDep,
    page_id: str | None = None,
    application_id: str | None = None,
    view_mode: bool = False,
) -> list[ActionCollectionResponse]:
    """List the collections of a page or an application.

    ``view_mode=true`` returns published states, otherwise drafts.
    """
    collections = await service.get_populated_action_collections_by_view_mode(
        view_mode, page_id=page_id, application_id=application_id
    )
    return [ActionCollectionResponse.from_dto(collection) for collection in collections]


@router.get(
    "/{collection_id}",
    response_model=ActionCollectionResponse,
    responses=ERROR_RESPONSES,
    summary="Get an action collection",
)
async def get_action_collection(
    collection_id: str,
    service: ActionCollectionServiceDep,
    view_mode: bool = False,
) -> ActionCollectionResponse:
    collection = await service.find_by_id(collection_id, view_mode)
    return ActionCollectionResponse.from_dto(collection)


@router.put(
    "/{collection_id}",
    response_model=ActionCollectionResponse,
    responses=ERROR_RESPONSES,
    summary="Update the draft of an action collection",
)
async def update_action_collection(
    collection_id: str,
    collection_data: ActionCollectionUpdate,
    service: ActionCollectionServiceDep,
    session: DbSession,
) -> ActionCollectionResponse:
    """Apply a modified draft.

    The path id is authoritative. ``action_ids`` and ``archived_action_ids``
    replace the current membership.
    """
    updated = await service.update_unpublished_action_collection(
        collection_id, collection_data.to_dto()
    )
    await session.commit()
    return ActionCollectionResponse.from_dto(updated)


@router.delete(
    "/{collection_id}",
    response_model=ActionCollectionResponse,
    responses=ERROR_RESPONSES,
    summary="Delete the draft of an action collection",
)
async def delete_action_collection(
    collection_id: str,
    service: ActionCollectionServiceDep,
    session: DbSession,
) -> ActionCollectionResponse:
    """Delete the draft of a collection.

    Never-published collections are removed immediately; published ones
    are marked deleted until the application is published.
    """
    deleted = await service.delete_unpublished_action_collection(collection_id)
    await session.commit()
    logger.info("Action collection delete requested", collection_id=collection_id)
    return ActionCollectionResponse.from_dto(deleted)
