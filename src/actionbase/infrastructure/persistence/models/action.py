"""SQLAlchemy model for the actions table.

Each version state of an action is stored as a JSON document so that a
publish is a plain copy of one column into the other.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from actionbase.infrastructure.persistence.database import Base


class ActionModel(Base):
    """SQLAlchemy model for the actions table.

    Attributes:
        id: Primary key (UUID string).
        application_id: Application the action belongs to.
        organization_id: Owning organization.
        plugin_id: Execution backend of the action.
        unpublished_action: Draft state document.
        published_action: Published state document, NULL until published.
    """

    __tablename__ = "actions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Action ID (UUID)",
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
    plugin_id: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        comment="Plugin executing the action",
    )
    unpublished_action: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Draft action state",
    )
    published_action: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        comment="Published action state",
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
        return f"<Action(id={self.id}, application_id={self.application_id})>"
