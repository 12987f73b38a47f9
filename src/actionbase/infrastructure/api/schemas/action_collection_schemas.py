"""Pydantic schemas for action collection operations.

Request schemas leave identity and required fields optional so that the
service reports missing values with its own error messages.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from actionbase.domain.entities import DEFAULT_PLUGIN_TYPE, ActionCollectionDTO, ActionDTO


class ActionSchema(BaseModel):
    """An action as sent and returned by the API."""

    id: str | None = Field(None, description="Action ID")
    name: str | None = Field(None, description="Action name (JS identifier)")
    collection_id: str | None = Field(None, description="Owning action collection ID")
    fully_qualified_name: str | None = Field(
        None, description="Collection-qualified name, e.g. 'utils.fetchUsers'"
    )
    page_id: str | None = None
    application_id: str | None = None
    organization_id: str | None = None
    plugin_id: str | None = None
    body: str | None = Field(None, description="Source of the action")
    action_configuration: dict[str, Any] = Field(default_factory=dict)
    archived_at: datetime | None = None
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    def to_dto(self) -> ActionDTO:
        return ActionDTO(**self.model_dump())


class ActionCollectionCreate(BaseModel):
    """Schema for creating an action collection with its inline actions."""

    id: str | None = Field(None, description="Must be empty; IDs are assigned by the server")
    name: str | None = Field(None, description="Collection name, unique on the page")
    page_id: str | None = None
    application_id: str | None = None
    organization_id: str | None = None
    plugin_id: str | None = None
    plugin_type: str = DEFAULT_PLUGIN_TYPE
    body: str | None = None
    variables: list[dict[str, Any]] = Field(default_factory=list)
    actions: list[ActionSchema] = Field(default_factory=list, description="Actions to create")

    def to_dto(self) -> ActionCollectionDTO:
        return ActionCollectionDTO(
            id=self.id,
            name=self.name,
            page_id=self.page_id,
            application_id=self.application_id,
            organization_id=self.organization_id,
            plugin_id=self.plugin_id,
            plugin_type=self.plugin_type,
            body=self.body,
            variables=[dict(variable) for variable in self.variables],
            actions=[action.to_dto() for action in self.actions],
        )


class ActionCollectionUpdate(BaseModel):
    """Schema for updating the draft of an action collection.

    ``action_ids`` and ``archived_action_ids`` are the complete new
    membership; members left out of both are dropped from the collection.
    """

    name: str | None = Field(None, description="New name; omit to keep the current one")
    body: str | None = Field(None, description="New body; omit to keep body and variables")
    variables: list[dict[str, Any]] = Field(default_factory=list)
    action_ids: list[str] = Field(default_factory=list)
    archived_action_ids: list[str] = Field(default_factory=list)
    actions: list[ActionSchema] = Field(default_factory=list)
    archived_actions: list[ActionSchema] = Field(default_factory=list)

    def to_dto(self) -> ActionCollectionDTO:
        return ActionCollectionDTO(
            name=self.name,
            body=self.body,
            variables=[dict(variable) for variable in self.variables],
            action_ids=set(self.action_ids),
            archived_action_ids=set(self.archived_action_ids),
            actions=[action.to_dto() for action in self.actions],
            archived_actions=[action.to_dto() for action in self.archived_actions],
        )


class ActionCollectionResponse(BaseModel):
    """Schema for an action collection state with resolved members."""

    id: str
    name: str | None = None
    page_id: str | None = None
    application_id: str | None = None
    organization_id: str | None = None
    plugin_id: str | None = None
    plugin_type: str = DEFAULT_PLUGIN_TYPE
    body: str | None = None
    variables: list[dict[str, Any]] = Field(default_factory=list)
    action_ids: list[str] = Field(default_factory=list)
    archived_action_ids: list[str] = Field(default_factory=list)
    actions: list[ActionSchema] = Field(default_factory=list)
    archived_actions: list[ActionSchema] = Field(default_factory=list)
    deleted_at: datetime | None = None

    @classmethod
    def from_dto(cls, dto: ActionCollectionDTO) -> "ActionCollectionResponse":
        return cls(
            id=dto.id,
            name=dto.name,
            page_id=dto.page_id,
            application_id=dto.application_id,
            organization_id=dto.organization_id,
            plugin_id=dto.plugin_id,
            plugin_type=dto.plugin_type,
            body=dto.body,
            variables=dto.variables,
            action_ids=sorted(dto.action_ids),
            archived_action_ids=sorted(dto.archived_action_ids),
            actions=[ActionSchema.model_validate(action) for action in dto.actions],
            archived_actions=[ActionSchema.model_validate(action) for action in dto.archived_actions],
            deleted_at=dto.deleted_at,
        )
