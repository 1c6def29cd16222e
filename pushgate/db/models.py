"""SQLAlchemy ORM models for consumer projects and their watched sources."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""


class ConsumerProject(Base):
    """A project that push hooks are delivered to, addressed by name."""

    __tablename__ = "consumer_projects"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True)
    kind: Mapped[str] = mapped_column(String(32))
    secret_token: Mapped[str | None] = mapped_column(String(255), default=None)
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    sources: Mapped[list["WatchedSourceRow"]] = relationship(
        back_populates="project",
        order_by="WatchedSourceRow.position",
        cascade="all, delete-orphan",
    )


class WatchedSourceRow(Base):
    """A repository watched by a consumer project, with its exclusion rules.

    ``exclusions`` is an ordered list of ``{"type": "user" | "message", "value": str}``.
    """

    __tablename__ = "watched_sources"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("consumer_projects.id", ondelete="CASCADE"))
    position: Mapped[int] = mapped_column(default=0)
    remote: Mapped[str] = mapped_column(String(1024))
    kind: Mapped[str] = mapped_column(String(32), default="git")
    ignore_on_push_notifications: Mapped[bool] = mapped_column(default=False)
    exclusions: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)

    project: Mapped[ConsumerProject] = relationship(back_populates="sources")

    __table_args__ = (
        UniqueConstraint("project_id", "position", name="uq_watched_sources_project_position"),
    )
