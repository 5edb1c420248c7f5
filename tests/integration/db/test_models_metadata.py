from __future__ import annotations

from sqlalchemy import create_engine, inspect

import app.models  # noqa: F401
from app.database.init_db import upgrade_database
from app.models import Base

EXPECTED_TABLES = {"users", "leads", "customers", "projects", "project_updates", "contracts", "audit_log"}


def test_model_metadata_contains_portal_tables():
    assert EXPECTED_TABLES == set(Base.metadata.tables.keys())


def test_contract_columns_cover_signature_fields():
    columns = set(Base.metadata.tables["contracts"].columns.keys())
    assert {"signer_name", "signed_at", "signature_ref", "signature_hash", "signer_ip", "status"} <= columns


def test_alembic_baseline_matches_models(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    upgrade_database(url)

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert EXPECTED_TABLES <= tables
        assert "alembic_version" in tables
        for name in EXPECTED_TABLES:
            migrated = {column["name"] for column in inspector.get_columns(name)}
            assert migrated == set(Base.metadata.tables[name].columns.keys()), name
    finally:
        engine.dispose()
