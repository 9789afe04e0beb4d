import os
import sqlite3
from pathlib import Path

from alembic import command
from alembic.config import Config

ROOT = Path(__file__).resolve().parents[2]


def _config(db_path):
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_path}")
    cfg.attributes["configure_logger"] = False
    return cfg


def test_upgrade_creates_tables_and_starter_catalog(tmp_path):
    db_path = tmp_path / "migrated.db"
    command.upgrade(_config(db_path), "head")

    conn = sqlite3.connect(db_path)
    try:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert {"users", "trains", "bookings", "alembic_version"} <= tables
        seeded = conn.execute("SELECT count(*) FROM trains").fetchone()[0]
        assert seeded > 0
        sold_out = conn.execute("SELECT count(*) FROM trains WHERE available_seats = 0").fetchone()[0]
        assert sold_out == 1
    finally:
        conn.close()


def test_downgrade_drops_everything(tmp_path):
    db_path = tmp_path / "migrated.db"
    cfg = _config(db_path)
    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    conn = sqlite3.connect(db_path)
    try:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert not {"users", "trains", "bookings"} & tables
    finally:
        conn.close()
    assert os.path.exists(db_path)
