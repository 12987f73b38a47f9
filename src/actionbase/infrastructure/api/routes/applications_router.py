"""Router for application level operations."""

from fastapi import APIRouter

from actionbase.infrastructure.api.dependencies import DbSession, PublishServiceDep
from actionbase.infrastructure.api.schemas import ErrorResponse, PublishResponse

router = APIRouter(tags=["Applications"])


@router.post(
    "/{application_id}/publish",
    response_model=PublishResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Publish an application",
)
async def publish_application(
    application_id: str,
    service: PublishServiceDep,
    session: DbSession,
) -> PublishResponse:
    """Copy every draft of the application to its published state.

    Drafts marked deleted are removed for good.
    """
    counts = await service.publish_application(application_id)
    await session.commit()
    return PublishResponse(application_id=application_id, **counts)
