import sqlite3

import pytest

from core import database
from core.database import DatabaseNotLoadedError, create_schema, get_connection, init_db

TABLES = {"Users", "Classes", "Attendance", "Payments", "Subscriptions", "AppSettings"}


def _tables(conn):
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {r[0] for r in rows}


def test_get_connection_before_init_raises():
    database.close_db()
    with pytest.raises(DatabaseNotLoadedError):
        get_connection()
    assert not database.is_loaded()


def test_init_db_creates_schema(store, data_dir):
    assert TABLES <= _tables(store)
    assert (data_dir / "GymProDesk.db").exists()
    assert database.is_loaded()


def test_init_db_is_idempotent(store):
    store.execute("INSERT INTO Users (name, email) VALUES ('Ann', 'ann@x.com')")
    conn = init_db()
    assert conn.execute("SELECT COUNT(*) FROM Users").fetchone()[0] == 1


def test_init_db_without_path_raises(monkeypatch):
    import config
    monkeypatch.setattr(config, "DB_FILE", None)
    database.close_db()
    with pytest.raises(DatabaseNotLoadedError):
        init_db()


def test_users_role_defaults_to_member(store):
    store.execute("INSERT INTO Users (name, email) VALUES ('Ann', 'ann@x.com')")
    assert store.execute("SELECT role FROM Users").fetchone()[0] == "Member"


def test_users_email_is_unique(store):
    store.execute("INSERT INTO Users (name, email) VALUES ('Ann', 'ann@x.com')")
    with pytest.raises(sqlite3.IntegrityError, match="UNIQUE constraint failed: Users.email"):
        store.execute("INSERT INTO Users (name, email) VALUES ('Other', 'ann@x.com')")


def test_deleting_user_cascades_to_payments(store):
    uid = store.execute("INSERT INTO Users (name, email) VALUES ('Ann', 'ann@x.com')").lastrowid
    store.execute("INSERT INTO Payments (user_id, amount, method, date) VALUES (?, 10, 'Cash', '2024-01-01')", (uid,))
    store.execute("DELETE FROM Users WHERE id = ?", (uid,))
    assert store.execute("SELECT COUNT(*) FROM Payments").fetchone()[0] == 0


def test_schema_failure_rolls_back(tmp_path, monkeypatch):
    conn = sqlite3.connect(str(tmp_path / "x.db"), isolation_level=None)
    broken = list(database.SCHEMA[:2]) + ["CREATE TABLE broken ("]
    monkeypatch.setattr(database, "SCHEMA", broken)
    with pytest.raises(sqlite3.Error):
        create_schema(conn)
    # Nothing from the failed transaction survives
    assert _tables(conn) == set()
    conn.close()
