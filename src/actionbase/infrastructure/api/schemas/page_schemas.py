"""Pydantic schemas for page operations."""

from pydantic import BaseModel, Field

from actionbase.domain.entities import PageDTO


class PageCreate(BaseModel):
    """Schema for registering a page."""

    application_id: str = Field(..., description="Owning application ID")
    name: str = Field(..., min_length=1, max_length=255, description="Page name")
    widget_names: list[str] = Field(default_factory=list, description="Names of the page's widgets")
    publish: bool = Field(False, description="Also create the published state")


class PageResponse(BaseModel):
    """Schema for one state of a page."""

    id: str
    application_id: str
    name: str | None = None
    widget_names: list[str] = Field(default_factory=list)

    @classmethod
    def from_dto(cls, page: PageDTO) -> "PageResponse":
        return cls(
            id=page.id,
            application_id=page.application_id,
            name=page.name,
            widget_names=sorted(page.widget_names),
        )
