"""Pydantic schemas for application level operations."""

from pydantic import BaseModel


class PublishResponse(BaseModel):
    """Schema for the outcome of publishing an application."""

    application_id: str
    published_actions: int = 0
    deleted_actions: int = 0
    published_collections: int = 0
    deleted_collections: int = 0
