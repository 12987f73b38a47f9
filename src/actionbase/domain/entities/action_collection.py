"""Action collection entities.

An action collection groups the actions of one JS object on a page. The
record carries two independent states: the unpublished draft that editors
change and the published snapshot served to viewers.

Only membership id sets are persisted. The ``actions`` and
``archived_actions`` lists are rebuilt from the action store whenever a
collection is returned to a caller.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Optional

from actionbase.domain.entities.action import ActionDTO

DEFAULT_PLUGIN_TYPE = "JS"


def _dump_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _load_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass
class ActionCollectionDTO:
    """One version (draft or published) of an action collection.

    Attributes:
        id: Id of the owning collection (transient, set on returned DTOs).
        name: Name, unique among collections and widgets of the page.
        page_id: Page the collection belongs to.
        application_id: Application the page belongs to.
        organization_id: Owning organization (tenant).
        plugin_id: Execution backend of the member actions.
        plugin_type: Kind of plugin, "JS" for JS objects.
        body: Source text of the JS object.
        variables: Top-level variables of the JS object.
        action_ids: Live member action ids.
        archived_action_ids: Archived member action ids.
        actions: Resolved live members (never persisted).
        archived_actions: Resolved archived members (never persisted).
        deleted_at: Soft-delete marker of this state.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    page_id: Optional[str] = None
    application_id: Optional[str] = None
    organization_id: Optional[str] = None
    plugin_id: Optional[str] = None
    plugin_type: str = DEFAULT_PLUGIN_TYPE
    body: Optional[str] = None
    variables: list[dict[str, Any]] = field(default_factory=list)
    action_ids: set[str] = field(default_factory=set)
    archived_action_ids: set[str] = field(default_factory=set)
    actions: list[ActionDTO] = field(default_factory=list)
    archived_actions: list[ActionDTO] = field(default_factory=list)
    deleted_at: Optional[datetime] = None

    def copy(self, **changes: Any) -> "ActionCollectionDTO":
        """Return a copy that shares no mutable containers with this one."""
        changes.setdefault("variables", [dict(v) for v in self.variables])
        changes.setdefault("action_ids", set(self.action_ids))
        changes.setdefault("archived_action_ids", set(self.archived_action_ids))
        changes.setdefault("actions", list(self.actions))
        changes.setdefault("archived_actions", list(self.archived_actions))
        return replace(self, **changes)

    def to_document(self) -> dict[str, Any]:
        """Serialize the persisted part of the state.

        Sets are stored sorted so documents are stable across saves.
        """
        return {
            "name": self.name,
            "page_id": self.page_id,
            "application_id": self.application_id,
            "organization_id": self.organization_id,
            "plugin_id": self.plugin_id,
            "plugin_type": self.plugin_type,
            "body": self.body,
            "variables": self.variables,
            "action_ids": sorted(self.action_ids),
            "archived_action_ids": sorted(self.archived_action_ids),
            "deleted_at": _dump_datetime(self.deleted_at),
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "ActionCollectionDTO":
        return cls(
            name=document.get("name"),
            page_id=document.get("page_id"),
            application_id=document.get("application_id"),
            organization_id=document.get("organization_id"),
            plugin_id=document.get("plugin_id"),
            plugin_type=document.get("plugin_type") or DEFAULT_PLUGIN_TYPE,
            body=document.get("body"),
            variables=list(document.get("variables") or []),
            action_ids=set(document.get("action_ids") or []),
            archived_action_ids=set(document.get("archived_action_ids") or []),
            deleted_at=_load_datetime(document.get("deleted_at")),
        )


@dataclass
class ActionCollection:
    """Persisted action collection with its draft and published states.

    Attributes:
        id: Unique identifier (UUID string), assigned on first save and
            immutable afterwards.
        application_id: Application the collection belongs to.
        organization_id: Owning organization (tenant).
        unpublished_collection: The editable draft.
        published_collection: The last published snapshot, absent until
            the first publish.
        policies: Access policies, opaque to the collection services.
    """

    id: Optional[str] = None
    application_id: Optional[str] = None
    organization_id: Optional[str] = None
    unpublished_collection: ActionCollectionDTO = field(default_factory=ActionCollectionDTO)
    published_collection: Optional[ActionCollectionDTO] = None
    policies: list[dict[str, Any]] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_published(self) -> bool:
        """Whether the collection has ever been published."""
        return self.published_collection is not None and self.published_collection.name is not None

    def state(self, view_mode: bool) -> Optional[ActionCollectionDTO]:
        """Return the version state for a view mode (True = published)."""
        return self.published_collection if view_mode else self.unpublished_collection
