"""Collaborator interfaces required by the action collection service.

The collection service is constructed with objects satisfying these
protocols; the SQLAlchemy repositories and the services in this package are
the production implementations.
"""

from typing import Iterable, Optional, Protocol

from actionbase.domain.entities import (
    ActionCollection,
    ActionDTO,
    NewAction,
    PageDTO,
)


class PageLookup(Protocol):
    """Resolves the page a collection belongs to."""

    async def find_by_id(self, page_id: str, view_mode: bool) -> Optional[PageDTO]: ...


class NameValidatorProtocol(Protocol):
    """Reports whether a name is free among the entities of a page."""

    async def is_name_allowed(self, page: PageDTO, name: str, view_mode: bool) -> bool: ...


class ActionCollectionStore(Protocol):
    """Persists action collection records."""

    async def get_by_id(self, collection_id: str) -> Optional[ActionCollection]: ...

    async def find_all_by_name_and_page_ids_and_view_mode(
        self, name: str, page_ids: Iterable[str], view_mode: bool
    ) -> list[ActionCollection]: ...

    async def find_by_page_id(self, page_id: str, view_mode: bool) -> list[ActionCollection]: ...

    async def find_by_application_id(
        self, application_id: str, view_mode: bool
    ) -> list[ActionCollection]: ...

    async def save(self, collection: ActionCollection) -> ActionCollection: ...

    async def delete(self, collection: ActionCollection) -> None: ...


class ActionSubsystem(Protocol):
    """Creates, updates, resolves and deletes member actions."""

    async def create_action(self, action: ActionDTO) -> ActionDTO: ...

    async def update_action(self, action_id: str, action: ActionDTO) -> ActionDTO: ...

    async def find_action_dto_by_id_and_view_mode(
        self, action_id: str, view_mode: bool
    ) -> Optional[ActionDTO]: ...

    async def delete_unpublished_action(self, action_id: str) -> ActionDTO: ...

    async def delete(self, action_id: str) -> NewAction: ...


class AnalyticsSink(Protocol):
    """Receives entity lifecycle events. Must never fail the caller."""

    async def send_create_event(self, entity: ActionCollection) -> ActionCollection: ...

    async def send_update_event(self, entity: ActionCollection) -> ActionCollection: ...

    async def send_delete_event(self, entity: ActionCollection) -> ActionCollection: ...
