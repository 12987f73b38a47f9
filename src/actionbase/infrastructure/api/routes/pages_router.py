"""Router for page registration and lookup."""

from fastapi import APIRouter, status

from actionbase.core.exceptions import FieldName, NoResourceFoundError
from actionbase.infrastructure.api.dependencies import DbSession, PageServiceDep
from actionbase.infrastructure.api.schemas import ErrorResponse, PageCreate, PageResponse

router = APIRouter(tags=["Pages"])


@router.post(
    "",
    response_model=PageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Register a page",
)
async def create_page(
    page_data: PageCreate,
    service: PageServiceDep,
    session: DbSession,
) -> PageResponse:
    page = await service.create_page(
        application_id=page_data.application_id,
        name=page_data.name,
        widget_names=set(page_data.widget_names),
        publish=page_data.publish,
    )
    await session.commit()
    return PageResponse.from_dto(page.state(False))


@router.get(
    "/{page_id}",
    response_model=PageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a page",
)
async def get_page(
    page_id: str,
    service: PageServiceDep,
    view_mode: bool = False,
) -> PageResponse:
    page = await service.find_by_id(page_id, view_mode)
    if page is None:
        raise NoResourceFoundError(FieldName.PAGE, page_id)
    return PageResponse.from_dto(page)
