"""SQLAlchemy model for the action_collections table."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from actionbase.infrastructure.persistence.database import Base


class ActionCollectionModel(Base):
    """SQLAlchemy model for the action_collections table.

    The draft and published states are JSON documents holding the
    collection's name, page, body, variables and member id sets. Member
    actions live in the actions table.

    Attributes:
        id: Primary key (UUID string).
        application_id: Application the collection belongs to.
        organization_id: Owning organization.
        unpublished_collection: Draft state document.
        published_collection: Published state document, NULL until published.
        policies: Access policies, stored opaquely.
    """

    __tablename__ = "action_collections"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Action collection ID (UUID)",
    )
    application_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        index=True,
        comment="Owning application ID",
    )
    organization_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        comment="Owning organization ID",
    )
    unpublished_collection: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Draft collection state",
    )
    published_collection: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        comment="Published collection state",
    )
    policies: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Access policies",
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
        return f"<ActionCollection(id={self.id}, application_id={self.application_id})>"
