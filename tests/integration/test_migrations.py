import pytest
from pathlib import Path
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

PROJECT_ROOT = Path(__file__).resolve().parents[2]

INSERT_PROPERTY = text("""
    INSERT INTO properties (id, name, type, description, created_at, updated_at, deleted_at)
    VALUES (:id, 'user_id', 'string', 'User ID', '2024-01-01', '2024-01-01', :deleted_at)
""")


@pytest.fixture
def migrated_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    config = Config(str(PROJECT_ROOT / "alembic.ini"))

    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")

    yield engine

    engine.dispose()


def test_upgrade_creates_catalog_tables(migrated_engine):
    inspector = inspect(migrated_engine)

    assert {"properties", "events", "tracking_plans"} <= set(inspector.get_table_names())
    assert "property_ids" in {c["name"] for c in inspector.get_columns("events")}
    assert "event_ids" in {c["name"] for c in inspector.get_columns("tracking_plans")}


def test_identity_is_unique_among_active_rows_only(migrated_engine):
    with migrated_engine.begin() as conn:
        conn.execute(INSERT_PROPERTY, {"id": "a", "deleted_at": "2024-01-02"})
        conn.execute(INSERT_PROPERTY, {"id": "b", "deleted_at": None})

    with pytest.raises(IntegrityError):
        with migrated_engine.begin() as conn:
            conn.execute(INSERT_PROPERTY, {"id": "c", "deleted_at": None})
