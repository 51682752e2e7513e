import logging
import sqlite3
from typing import List, Optional

from core.database import get_connection
from core.validation import MemberInput
from models.member import Member

logger = logging.getLogger(__name__)

MEMBER_ROLE = "Member"
DUPLICATE_EMAIL_MESSAGE = "This email address is already registered."
# Text sqlite puts in the IntegrityError for the email column
EMAIL_CONFLICT_MARKER = "UNIQUE constraint failed: Users.email"


class DuplicateEmailError(ValueError):
    """Raised when the email already belongs to another member."""

    def __init__(self, message: str = DUPLICATE_EMAIL_MESSAGE):
        super().__init__(message)


def _is_email_conflict(err: sqlite3.IntegrityError) -> bool:
    return EMAIL_CONFLICT_MARKER in str(err)


# --- QUERIES ---

def _escape_like(term: str) -> str:
    """Escapes LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_members(search: str = "") -> List[Member]:
    """
    Fetches members ordered by name.

    Args:
        search (str): Optional substring matched against name OR email
                      (case-insensitive). Blank returns everyone.

    Returns:
        List[Member]: Matching members, name ascending.
    """
    conn = get_connection()
    term = (search or "").strip()

    if not term:
        rows = conn.execute(
            "SELECT id, name, email, phone FROM Users WHERE role = ? ORDER BY name ASC, id ASC",
            (MEMBER_ROLE,),
        ).fetchall()
    else:
        pattern = f"%{_escape_like(term)}%"
        rows = conn.execute(
            "SELECT id, name, email, phone FROM Users "
            "WHERE role = ? AND (name LIKE ? ESCAPE '\\' OR email LIKE ? ESCAPE '\\') "
            "ORDER BY name ASC, id ASC",
            (MEMBER_ROLE, pattern, pattern),
        ).fetchall()

    return [Member.from_row(r) for r in rows]


def get_member(member_id: int) -> Optional[Member]:
    """Retrieves one member by id, or None."""
    row = get_connection().execute(
        "SELECT id, name, email, phone FROM Users WHERE id = ? AND role = ?",
        (member_id, MEMBER_ROLE),
    ).fetchone()
    return Member.from_row(row) if row else None


def email_exists(email: str, exclude_id: Optional[int] = None) -> bool:
    """
    Checks if an email is already registered (case-insensitive).
    exclude_id skips the record being edited.
    """
    row = get_connection().execute(
        "SELECT id FROM Users WHERE lower(email) = lower(?) AND id IS NOT ?",
        (email, exclude_id),
    ).fetchone()
    return row is not None


def count_members() -> int:
    row = get_connection().execute(
        "SELECT COUNT(*) FROM Users WHERE role = ?", (MEMBER_ROLE,)
    ).fetchone()
    return int(row[0])


# --- MUTATIONS ---

def add_member(data: MemberInput) -> int:
    """
    Inserts a new member.

    Returns:
        int: The id assigned by the store.

    Raises:
        DuplicateEmailError: If the email is already registered.
        sqlite3.Error: For any other store failure.
    """
    conn = get_connection()
    try:
        cur = conn.execute(
            "INSERT INTO Users (name, email, phone, role) VALUES (?, ?, ?, ?)",
            (data.name, data.email, data.phone, MEMBER_ROLE),
        )
    except sqlite3.IntegrityError as e:
        logger.warning(f"Insert rejected for '{data.email}': {e}")
        if _is_email_conflict(e):
            raise DuplicateEmailError() from e
        raise

    logger.info(f"Member '{data.name}' added with ID {cur.lastrowid}.")
    return cur.lastrowid


def update_member(member_id: int, data: MemberInput) -> bool:
    """
    Updates name, email and phone of an existing member.

    Returns:
        bool: True if a row was changed, False if the id does not exist.
    """
    conn = get_connection()
    try:
        cur = conn.execute(
            "UPDATE Users SET name = ?, email = ?, phone = ? WHERE id = ? AND role = ?",
            (data.name, data.email, data.phone, member_id, MEMBER_ROLE),
        )
    except sqlite3.IntegrityError as e:
        logger.warning(f"Update of member {member_id} rejected: {e}")
        if _is_email_conflict(e):
            raise DuplicateEmailError() from e
        raise

    if cur.rowcount == 0:
        logger.warning(f"Member with ID {member_id} not found for update.")
        return False
    logger.info(f"Member ID {member_id} updated successfully.")
    return True


def delete_member(member_id: int) -> bool:
    """
    Permanently deletes a member.
    Attendance and payment rows go with it (ON DELETE CASCADE).
    """
    cur = get_connection().execute(
        "DELETE FROM Users WHERE id = ? AND role = ?", (member_id, MEMBER_ROLE)
    )
    if cur.rowcount == 0:
        logger.warning(f"No member found with ID {member_id} to delete.")
        return False
    logger.info(f"Member ID {member_id} deleted successfully.")
    return True
