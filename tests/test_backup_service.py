import sqlite3

import pytest

import config
from services import backup_service, member_service, settings_service
from services.backup_service import create_backup, list_backups, restore_backup


def test_create_backup_writes_file(store, add_member):
    add_member("Ann", "ann@x.com")
    path = create_backup("before changes")
    assert path == config.BACKUP_FOLDER / "before changes.backup"
    conn = sqlite3.connect(str(path))
    assert conn.execute("SELECT email FROM Users").fetchall() == [("ann@x.com",)]
    conn.close()
    assert list_backups() == [path]


@pytest.mark.parametrize("name", ["", "   ", "../evil", "a/b", "semi;colon"])
def test_invalid_backup_names(store, name):
    with pytest.raises(ValueError):
        create_backup(name)


def test_duplicate_backup_name(store):
    create_backup("daily")
    with pytest.raises(ValueError, match="already exists"):
        create_backup("daily")


def test_restore_replaces_data(store, add_member):
    add_member("Ann", "ann@x.com")
    path = create_backup("snapshot")
    add_member("Bob", "bob@x.com")
    assert member_service.count_members() == 2

    restore_backup(path)
    assert [m.name for m in member_service.get_members()] == ["Ann"]


def test_restore_rejects_missing_file(store, tmp_path):
    with pytest.raises(ValueError, match="not found"):
        restore_backup(tmp_path / "nope.backup")


def test_restore_rejects_non_database(store, tmp_path):
    junk = tmp_path / "junk.backup"
    junk.write_text("this is not sqlite " * 200)
    with pytest.raises(ValueError, match="Not a valid backup file"):
        restore_backup(junk)


def test_restore_rejects_foreign_database(store, tmp_path, add_member):
    add_member("Ann", "ann@x.com")
    other = tmp_path / "other.backup"
    conn = sqlite3.connect(str(other))
    conn.execute("CREATE TABLE Things (id INTEGER)")
    conn.commit()
    conn.close()
    with pytest.raises(ValueError, match="missing tables"):
        restore_backup(other)
    assert member_service.count_members() == 1


def test_list_backups_without_folder(monkeypatch):
    monkeypatch.setattr(config, "BACKUP_FOLDER", None)
    assert list_backups() == []
    assert backup_service.REQUIRED_TABLES == {"Users", "Subscriptions"}


def test_restore_recreates_missing_tables(store, tmp_path):
    partial = tmp_path / "partial.backup"
    conn = sqlite3.connect(str(partial))
    conn.execute("CREATE TABLE Users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, email TEXT UNIQUE NOT NULL, "
                 "phone TEXT, role TEXT NOT NULL, membership_type TEXT, start_date TEXT, end_date TEXT)")
    conn.execute("CREATE TABLE Subscriptions (id INTEGER PRIMARY KEY, name TEXT NOT NULL, description TEXT, "
                 "duration_days INTEGER NOT NULL, price REAL NOT NULL)")
    conn.execute("INSERT INTO Users (name, email, role) VALUES ('Ann', 'ann@x.com', 'Member')")
    conn.commit()
    conn.close()

    restore_backup(partial)

    assert settings_service.has_admin_password() is False
    tables = {r[0] for r in store.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert {"Classes", "Attendance", "Payments", "AppSettings"} <= tables
    assert store.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    assert [m.name for m in member_service.get_members()] == ["Ann"]
