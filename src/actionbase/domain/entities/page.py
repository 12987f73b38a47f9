"""Page entities.

Pages are owned by the layout engine. The collection services only need a
page's identity and the names already taken on it by widgets.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class PageDTO:
    """One version (draft or published) of a page.

    Attributes:
        id: Id of the owning page (transient).
        application_id: Application the page belongs to.
        name: Display name of the page.
        widget_names: Names of the widgets placed on the page.
    """

    id: Optional[str] = None
    application_id: Optional[str] = None
    name: Optional[str] = None
    widget_names: set[str] = field(default_factory=set)

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "widget_names": sorted(self.widget_names),
        }

    @classmethod
    def from_document(
        cls,
        document: dict[str, Any],
        page_id: Optional[str] = None,
        application_id: Optional[str] = None,
    ) -> "PageDTO":
        return cls(
            id=page_id,
            application_id=application_id,
            name=document.get("name"),
            widget_names=set(document.get("widget_names") or []),
        )


@dataclass
class NewPage:
    """Persisted page record holding both version states."""

    id: Optional[str] = None
    application_id: Optional[str] = None
    unpublished_page: PageDTO = field(default_factory=PageDTO)
    published_page: Optional[PageDTO] = None

    def state(self, view_mode: bool) -> Optional[PageDTO]:
        """Return the page state for a view mode, with ids filled in."""
        page = self.published_page if view_mode else self.unpublished_page
        if page is None:
            return None
        page.id = self.id
        page.application_id = self.application_id
        return page
