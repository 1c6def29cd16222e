"""Consumer projects and their watched sources.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create consumer_projects and watched_sources."""
    op.create_table(
        "consumer_projects",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("kind", sa.String(32), nullable=False),
        sa.Column("secret_token", sa.String(255), nullable=True),
        sa.Column(
            "updated_at",
            sa.DateTime,
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("name", name="uq_consumer_projects_name"),
    )

    op.create_table(
        "watched_sources",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "project_id",
            sa.Integer,
            sa.ForeignKey("consumer_projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("remote", sa.String(1024), nullable=False),
        sa.Column("kind", sa.String(32), nullable=False, server_default="git"),
        sa.Column(
            "ignore_on_push_notifications",
            sa.Boolean,
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("exclusions", sa.JSON, nullable=False, server_default="[]"),
        sa.UniqueConstraint(
            "project_id", "position", name="uq_watched_sources_project_position"
        ),
    )


def downgrade() -> None:
    """Drop watched_sources and consumer_projects."""
    op.drop_table("watched_sources")
    op.drop_table("consumer_projects")
