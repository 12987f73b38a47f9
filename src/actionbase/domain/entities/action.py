"""Action entities.

An action is one executable unit (a JS function or a query) owned by a
collection. Like collections, actions keep an editable draft and an
optional published copy on the same record.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional


def _dump_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _load_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass
class ActionDTO:
    """One version (draft or published) of an action.

    Attributes:
        id: Id of the owning NewAction record (transient on stored states).
        name: Action name, unique on its page.
        collection_id: Id of the owning action collection.
        fully_qualified_name: "{collectionName}.{name}" for collection members.
        body: Source of the action.
        action_configuration: Plugin specific configuration.
        archived_at: Set when the action was moved to its collection's archive.
        deleted_at: Soft-delete marker of the draft.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    collection_id: Optional[str] = None
    fully_qualified_name: Optional[str] = None
    page_id: Optional[str] = None
    application_id: Optional[str] = None
    organization_id: Optional[str] = None
    plugin_id: Optional[str] = None
    body: Optional[str] = None
    action_configuration: dict[str, Any] = field(default_factory=dict)
    archived_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    def copy(self, **changes: Any) -> "ActionDTO":
        """Return a copy with its own configuration dict."""
        changes.setdefault("action_configuration", dict(self.action_configuration))
        return replace(self, **changes)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON document stored per version state.

        The id belongs to the record, not the state, and is left out.
        """
        return {
            "name": self.name,
            "collection_id": self.collection_id,
            "fully_qualified_name": self.fully_qualified_name,
            "page_id": self.page_id,
            "application_id": self.application_id,
            "organization_id": self.organization_id,
            "plugin_id": self.plugin_id,
            "body": self.body,
            "action_configuration": self.action_configuration,
            "archived_at": _dump_datetime(self.archived_at),
            "deleted_at": _dump_datetime(self.deleted_at),
        }

    @classmethod
    def from_document(cls, document: dict[str, Any], action_id: Optional[str] = None) -> "ActionDTO":
        return cls(
            id=action_id,
            name=document.get("name"),
            collection_id=document.get("collection_id"),
            fully_qualified_name=document.get("fully_qualified_name"),
            page_id=document.get("page_id"),
            application_id=document.get("application_id"),
            organization_id=document.get("organization_id"),
            plugin_id=document.get("plugin_id"),
            body=document.get("body"),
            action_configuration=dict(document.get("action_configuration") or {}),
            archived_at=_load_datetime(document.get("archived_at")),
            deleted_at=_load_datetime(document.get("deleted_at")),
        )


@dataclass
class NewAction:
    """Persisted action record holding both version states.

    Attributes:
        id: Unique identifier (UUID string), assigned on first save.
        unpublished_action: The editable draft.
        published_action: The last published copy, absent until publish.
    """

    id: Optional[str] = None
    application_id: Optional[str] = None
    organization_id: Optional[str] = None
    plugin_id: Optional[str] = None
    unpublished_action: ActionDTO = field(default_factory=ActionDTO)
    published_action: Optional[ActionDTO] = None

    def state(self, view_mode: bool) -> Optional[ActionDTO]:
        """Return the version state for a view mode (True = published)."""
        return self.published_action if view_mode else self.unpublished_action
