"""Unit tests for SQLAlchemy ORM model metadata.

These tests inspect table definitions without requiring a database connection.
"""

from pushgate.db.models import ConsumerProject, WatchedSourceRow


class TestTableNames:
    """Verify each model maps to the expected table name."""

    def test_consumer_project_table_name(self) -> None:
        assert ConsumerProject.__tablename__ == "consumer_projects"

    def test_watched_source_table_name(self) -> None:
        assert WatchedSourceRow.__tablename__ == "watched_sources"


class TestColumns:
    """Verify models have the expected columns."""

    def test_consumer_project_columns(self) -> None:
        column_names = {c.name for c in ConsumerProject.__table__.columns}
        assert column_names == {"id", "name", "kind", "secret_token", "updated_at"}

    def test_watched_source_columns(self) -> None:
        column_names = {c.name for c in WatchedSourceRow.__table__.columns}
        assert column_names == {
            "id",
            "project_id",
            "position",
            "remote",
            "kind",
            "ignore_on_push_notifications",
            "exclusions",
        }

    def test_project_name_is_unique(self) -> None:
        assert ConsumerProject.__table__.c.name.unique is True

    def test_sources_cascade_with_project(self) -> None:
        (fk,) = WatchedSourceRow.__table__.c.project_id.foreign_keys
        assert fk.target_fullname == "consumer_projects.id"
        assert fk.ondelete == "CASCADE"
