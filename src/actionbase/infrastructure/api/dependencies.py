"""FastAPI dependencies wiring repositories and services per request.

All services of one request share the request's database session, so the
route commits once after the service call returns.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from actionbase.core.config import Settings, get_settings
from actionbase.core.hooks import HookRegistry
from actionbase.domain.services import (
    ActionCollectionService,
    ActionService,
    AnalyticsService,
    NameValidator,
    PageService,
    PublishService,
)
from actionbase.infrastructure.persistence.database import get_db_session
from actionbase.infrastructure.persistence.repositories import (
    ActionCollectionRepository,
    ActionRepository,
    PageRepository,
)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_hook_registry(request: Request) -> HookRegistry:
    """Get the application's hook registry."""
    return request.app.state.hook_registry


def get_analytics_service(
    request: Request,
    hook_registry: Annotated[HookRegistry, Depends(get_hook_registry)],
) -> AnalyticsService:
    return AnalyticsService(hook_registry, app=request.app)


def get_action_service(
    session: DbSession,
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
) -> ActionService:
    return ActionService(ActionRepository(session), analytics_service)


def get_page_service(session: DbSession) -> PageService:
    return PageService(PageRepository(session))


def get_action_collection_service(
    session: DbSession,
    action_service: Annotated[ActionService, Depends(get_action_service)],
    page_service: Annotated[PageService, Depends(get_page_service)],
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ActionCollectionService:
    """Build the action collection service for a request."""
    repository = ActionCollectionRepository(session)
    return ActionCollectionService(
        repository=repository,
        action_service=action_service,
        page_service=page_service,
        name_validator=NameValidator(action_service, repository),
        analytics_service=analytics_service,
        fanout_limit=settings.action_fanout_limit,
    )


def get_publish_service(
    session: DbSession,
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
) -> PublishService:
    return PublishService(
        ActionRepository(session),
        ActionCollectionRepository(session),
        analytics_service,
    )


ActionCollectionServiceDep = Annotated[
    ActionCollectionService, Depends(get_action_collection_service)
]
PageServiceDep = Annotated[PageService, Depends(get_page_service)]
PublishServiceDep = Annotated[PublishService, Depends(get_publish_service)]
