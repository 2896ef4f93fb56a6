from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from tests.helpers.seed import DEFAULT_TEMPLATES

ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def alembic_config(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", db_url)
    config.attributes["configure_logger"] = False
    return config


def test_upgrade_creates_tables_and_seeds_templates(alembic_config):
    command.upgrade(alembic_config, "head")

    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    with engine.connect() as conn:
        tables = set(inspect(conn).get_table_names())
        assert {"notifications", "notification_templates", "notification_preferences"} <= tables

        rows = conn.execute(text(
            "SELECT template_key, requires_email, is_active, created_at FROM notification_templates"
        )).all()
    engine.dispose()

    assert {row[0] for row in rows} == {t["template_key"] for t in DEFAULT_TEMPLATES}
    assert all(row[1] and row[2] for row in rows)
    assert all(row[3] is not None for row in rows)


def test_preferences_row_gets_server_defaults(alembic_config):
    command.upgrade(alembic_config, "head")

    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    with engine.begin() as conn:
        conn.execute(text("INSERT INTO notification_preferences (user_id) VALUES ('a@example.com')"))
        row = conn.execute(text(
            "SELECT email_notifications, sms_notifications, digest_frequency, created_at FROM notification_preferences"
        )).one()
    engine.dispose()

    assert row[0] and not row[1]
    assert row[2] == "immediate"
    assert row[3] is not None


def test_seed_is_idempotent_and_downgrade_removes_everything(alembic_config):
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "5c1e7a9d2b40")
    command.upgrade(alembic_config, "head")

    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    with engine.connect() as conn:
        assert conn.execute(text("SELECT COUNT(*) FROM notification_templates")).scalar() == len(DEFAULT_TEMPLATES)
    engine.dispose()

    command.downgrade(alembic_config, "base")

    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    with engine.connect() as conn:
        assert "notifications" not in inspect(conn).get_table_names()
    engine.dispose()
