"""Bring the configured database up to the latest Alembic revision."""

from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

import app.database.db as db_module
from app.core.startup import bootstrap

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    # Keep the JSON logging configured by bootstrap().
    cfg.attributes["configure_logger"] = False
    return cfg


def upgrade_database(database_url: str | None = None, revision: str = "head") -> None:
    active_url = database_url or db_module.get_active_database_url()
    command.upgrade(_build_alembic_config(active_url), revision)
    logger.info(
        "database.migrated",
        extra={
            "event": "database.migrated",
            "database_url_scheme": active_url.split("://", 1)[0],
            "revision": revision,
        },
    )


def init_db() -> None:
    bootstrap()
    upgrade_database()


if __name__ == "__main__":
    init_db()
