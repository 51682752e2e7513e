import logging
import sqlite3
from pathlib import Path
from typing import List, Union

import config
from core.database import create_schema, get_connection
from core.utils import is_valid_backup_name

logger = logging.getLogger(__name__)

# Tables a file must contain to be accepted as a GymProDesk store
REQUIRED_TABLES = {"Users", "Subscriptions"}


def _backup_folder() -> Path:
    if not config.BACKUP_FOLDER:
        raise ValueError("Backup folder not configured.")
    config.BACKUP_FOLDER.mkdir(parents=True, exist_ok=True)
    return config.BACKUP_FOLDER


def create_backup(name: str) -> Path:
    """
    Copies the live store into BACKUP_FOLDER/<name>.backup using the
    SQLite online backup API.

    Args:
        name (str): Backup name (letters, digits, spaces, '-' and '_').

    Returns:
        Path: The written backup file.

    Raises:
        ValueError: If the name is invalid or a backup with that name exists.
        sqlite3.Error: If the copy fails.
    """
    clean = (name or "").strip()
    if not clean:
        raise ValueError("Backup name cannot be empty.")
    if not is_valid_backup_name(clean):
        raise ValueError("Backup name may only contain letters, digits, spaces, '-' and '_'.")

    target_path = _backup_folder() / f"{clean}{config.BACKUP_EXTENSION}"
    if target_path.exists():
        raise ValueError(f"A backup named '{clean}' already exists.")

    source = get_connection()
    target = sqlite3.connect(str(target_path))
    try:
        source.backup(target)
    except sqlite3.Error as e:
        logger.error(f"Backup to {target_path} failed: {e}")
        target.close()
        target_path.unlink(missing_ok=True)
        raise
    target.close()

    logger.info(f"Backup created: {target_path}")
    return target_path


def list_backups() -> List[Path]:
    """Existing backup files, newest first."""
    if not config.BACKUP_FOLDER or not config.BACKUP_FOLDER.exists():
        return []
    files = config.BACKUP_FOLDER.glob(f"*{config.BACKUP_EXTENSION}")
    return sorted(files, key=lambda p: p.stat().st_mtime, reverse=True)


def _check_backup_file(path: Path) -> None:
    """Raises ValueError unless the file is a readable GymProDesk store."""
    if not path.is_file():
        raise ValueError(f"Backup file not found: {path}")

    uri = f"{path.resolve().as_uri()}?mode=ro"
    try:
        conn = sqlite3.connect(uri, uri=True)
        try:
            rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        finally:
            conn.close()
    except sqlite3.DatabaseError as e:
        raise ValueError(f"Not a valid backup file: {e}") from e

    missing = REQUIRED_TABLES - {r[0] for r in rows}
    if missing:
        raise ValueError(f"Not a GymProDesk backup (missing tables: {', '.join(sorted(missing))}).")


def restore_backup(path: Union[str, Path]) -> None:
    """
    Replaces the content of the live store with a backup file, then brings
    the schema back to the full table set.
    The open handle stays the same, so nothing has to reconnect.

    Raises:
        ValueError: If the file is missing or not a GymProDesk store.
        sqlite3.Error: If the copy fails.
    """
    backup_path = Path(path)
    _check_backup_file(backup_path)

    live = get_connection()
    source = sqlite3.connect(str(backup_path))
    try:
        source.backup(live)
    finally:
        source.close()

    # An older or trimmed backup may lack tables the app needs
    live.execute("PRAGMA foreign_keys = ON")
    create_schema(live)

    logger.info(f"Database restored from {backup_path}")
