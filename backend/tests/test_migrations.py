"""
Alembic migrations must produce the same tables the models declare.
"""

from pathlib import Path

import sqlalchemy as sa
from alembic import command
from alembic.config import Config
from sqlmodel import SQLModel

import treegen.models  # noqa: F401

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def _config(db_url: str) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def test_upgrade_head_matches_models(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    command.upgrade(_config(db_url), "head")

    inspector = sa.inspect(sa.create_engine(db_url))
    migrated = set(inspector.get_table_names()) - {"alembic_version"}
    assert migrated == set(SQLModel.metadata.tables)

    for name, table in SQLModel.metadata.tables.items():
        columns = {c["name"] for c in inspector.get_columns(name)}
        assert columns == {c.name for c in table.columns}, name


def test_downgrade_to_base_drops_everything(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = _config(db_url)
    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    tables = set(sa.inspect(sa.create_engine(db_url)).get_table_names())
    assert tables <= {"alembic_version"}
