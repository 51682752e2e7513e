import logging
import sqlite3
from pathlib import Path
from typing import Optional, Union

import config

logger = logging.getLogger(__name__)

# The one open handle for the lifetime of the process
_conn: Optional[sqlite3.Connection] = None


class DatabaseNotLoadedError(RuntimeError):
    """Raised when the store is used before init_db() succeeded."""

    def __init__(self, message: str = "Database not loaded."):
        super().__init__(message)


SCHEMA = [
    # 1. Users (members, trainers, admins)
    """
    CREATE TABLE IF NOT EXISTS Users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT UNIQUE,
        phone TEXT,
        role TEXT NOT NULL CHECK(role IN ('Member', 'Trainer', 'Admin')) DEFAULT 'Member',
        membership_type TEXT,
        start_date TEXT,
        end_date TEXT
    )
    """,
    # 2. Classes
    """
    CREATE TABLE IF NOT EXISTS Classes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        trainer_id INTEGER REFERENCES Users(id) ON DELETE SET NULL,
        schedule TEXT
    )
    """,
    # 3. Attendance
    """
    CREATE TABLE IF NOT EXISTS Attendance (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES Users(id) ON DELETE CASCADE,
        date TEXT NOT NULL,
        check_in TEXT NOT NULL,
        check_out TEXT
    )
    """,
    # 4. Payments
    """
    CREATE TABLE IF NOT EXISTS Payments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES Users(id) ON DELETE CASCADE,
        amount REAL NOT NULL,
        method TEXT CHECK(method IN ('Cash', 'Card', 'Online', 'Other')),
        date TEXT NOT NULL
    )
    """,
    # 5. Subscription plans
    """
    CREATE TABLE IF NOT EXISTS Subscriptions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        description TEXT,
        duration_days INTEGER NOT NULL,
        price REAL NOT NULL
    )
    """,
    # 6. Application settings (key/value)
    """
    CREATE TABLE IF NOT EXISTS AppSettings (
        key TEXT PRIMARY KEY,
        value BLOB
    )
    """,
]


def create_schema(conn: sqlite3.Connection) -> None:
    """
    Creates every table inside a single transaction.
    Rolls back and re-raises if any statement fails.
    """
    try:
        conn.execute("BEGIN")
        for statement in SCHEMA:
            conn.execute(statement)
        conn.execute("COMMIT")
    except sqlite3.Error:
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error as roll_err:
            logger.error(f"Rollback failed: {roll_err}")
        raise


def init_db(db_file: Optional[Union[str, Path]] = None) -> sqlite3.Connection:
    """
    Opens the SQLite store and verifies the schema.

    Args:
        db_file: Path of the database file. Defaults to config.DB_FILE.

    Returns:
        sqlite3.Connection: The process-wide connection.

    Raises:
        DatabaseNotLoadedError: If no database path is configured.
        sqlite3.Error: If the file cannot be opened or the schema cannot be created.
    """
    global _conn

    path = db_file or config.DB_FILE
    if not path:
        raise DatabaseNotLoadedError("Database path not found in config.")

    if _conn is not None:
        close_db()

    logger.info(f"Attempting to load database: {path}")
    # isolation_level=None: each statement commits on its own, the schema
    # step manages its own BEGIN/COMMIT.
    conn = sqlite3.connect(str(path), isolation_level=None)
    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        create_schema(conn)
    except sqlite3.Error as e:
        logger.error(f"Database initialization or schema setup failed: {e}")
        conn.close()
        raise

    _conn = conn
    logger.info("Database schema verification complete.")
    return conn


def get_connection() -> sqlite3.Connection:
    """Returns the open handle, or raises if the store was never loaded."""
    if _conn is None:
        raise DatabaseNotLoadedError()
    return _conn


def is_loaded() -> bool:
    return _conn is not None


def close_db() -> None:
    global _conn
    if _conn is not None:
        _conn.close()
        _conn = None
