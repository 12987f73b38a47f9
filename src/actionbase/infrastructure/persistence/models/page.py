"""SQLAlchemy model for the pages table.

Only the part of a page that action collections depend on is stored: its
name and the names of its widgets, per version state.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from actionbase.infrastructure.persistence.database import Base


class PageModel(Base):
    """SQLAlchemy model for the pages table.

    Attributes:
        id: Primary key (UUID string).
        application_id: Application the page belongs to.
        unpublished_page: Draft state document.
        published_page: Published state document, NULL until published.
    """

    __tablename__ = "pages"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Page ID (UUID)",
    )
    application_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Owning application ID",
    )
    unpublished_page: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Draft page state",
    )
    published_page: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        comment="Published page state",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Page(id={self.id}, application_id={self.application_id})>"
