import logging
from typing import Optional

import bcrypt

import config
from core.database import get_connection

logger = logging.getLogger(__name__)

ADMIN_PASSWORD_KEY = "admin_password_hash"


def _get_setting(key: str) -> Optional[bytes]:
    row = get_connection().execute("SELECT value FROM AppSettings WHERE key = ?", (key,)).fetchone()
    return row[0] if row else None


def _set_setting(key: str, value: bytes) -> None:
    get_connection().execute(
        "INSERT INTO AppSettings (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
        (key, value),
    )


def has_admin_password() -> bool:
    """True once an admin password has been set from the Settings page."""
    return _get_setting(ADMIN_PASSWORD_KEY) is not None


def verify_admin_password(password: str) -> bool:
    """
    Compares the input password to the stored bcrypt hash.
    Returns False when no password has been set yet.
    """
    hashed = _get_setting(ADMIN_PASSWORD_KEY)
    if hashed is None:
        return False
    return bcrypt.checkpw(password.encode('utf-8'), bytes(hashed))


def change_admin_password(current: str, new: str, confirm: str) -> None:
    """
    Sets a new admin password.

    Args:
        current (str): The existing password (ignored the first time one is set).
        new (str): The new raw password (will be hashed).
        confirm (str): Must repeat `new`.

    Raises:
        ValueError: With a message suitable for the Settings page.
    """
    if has_admin_password() and not verify_admin_password(current or ""):
        raise ValueError("Current password is incorrect.")
    if not new:
        raise ValueError("New password cannot be empty.")
    if len(new) < config.MIN_PASSWORD_LENGTH:
        raise ValueError(f"New password must be at least {config.MIN_PASSWORD_LENGTH} characters.")
    if new != confirm:
        raise ValueError("Passwords do not match.")

    hashed = bcrypt.hashpw(new.encode('utf-8'), bcrypt.gensalt())
    _set_setting(ADMIN_PASSWORD_KEY, hashed)
    logger.info("Admin password changed.")
