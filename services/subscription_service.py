import logging
from typing import List, Optional

from core.database import get_connection
from core.validation import SubscriptionInput
from models.subscription import Subscription

logger = logging.getLogger(__name__)


def get_subscriptions() -> List[Subscription]:
    """Fetches every subscription plan, name ascending."""
    rows = get_connection().execute(
        "SELECT id, name, description, duration_days, price FROM Subscriptions ORDER BY name ASC, id ASC"
    ).fetchall()
    return [Subscription.from_row(r) for r in rows]


def get_subscription(plan_id: int) -> Optional[Subscription]:
    row = get_connection().execute(
        "SELECT id, name, description, duration_days, price FROM Subscriptions WHERE id = ?",
        (plan_id,),
    ).fetchone()
    return Subscription.from_row(row) if row else None


def add_subscription(data: SubscriptionInput) -> int:
    """
    Inserts a new plan and returns its id.
    Plan names are not unique.
    """
    cur = get_connection().execute(
        "INSERT INTO Subscriptions (name, description, duration_days, price) VALUES (?, ?, ?, ?)",
        (data.name, data.description, data.duration_days, data.price),
    )
    logger.info(f"Subscription '{data.name}' added with ID {cur.lastrowid}.")
    return cur.lastrowid


def update_subscription(plan_id: int, data: SubscriptionInput) -> bool:
    cur = get_connection().execute(
        "UPDATE Subscriptions SET name = ?, description = ?, duration_days = ?, price = ? WHERE id = ?",
        (data.name, data.description, data.duration_days, data.price, plan_id),
    )
    if cur.rowcount == 0:
        logger.warning(f"Subscription with ID {plan_id} not found for update.")
        return False
    logger.info(f"Subscription ID {plan_id} updated successfully.")
    return True


def delete_subscription(plan_id: int) -> bool:
    cur = get_connection().execute("DELETE FROM Subscriptions WHERE id = ?", (plan_id,))
    if cur.rowcount == 0:
        logger.warning(f"No subscription found with ID {plan_id} to delete.")
        return False
    logger.info(f"Subscription ID {plan_id} deleted successfully.")
    return True
