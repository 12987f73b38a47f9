"""API schemas for request and response validation."""

from actionbase.infrastructure.api.schemas.action_collection_schemas import (
    ActionCollectionCreate,
    ActionCollectionResponse,
    ActionCollectionUpdate,
    ActionSchema,
)
from actionbase.infrastructure.api.schemas.application_schemas import PublishResponse
from actionbase.infrastructure.api.schemas.error_schemas import ErrorResponse
from actionbase.infrastructure.api.schemas.page_schemas import PageCreate, PageResponse

__all__ = [
    "ActionCollectionCreate",
    "ActionCollectionResponse",
    "ActionCollectionUpdate",
    "ActionSchema",
    "ErrorResponse",
    "PageCreate",
    "PageResponse",
    "PublishResponse",
]
