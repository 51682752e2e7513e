import datetime
from dataclasses import dataclass
from typing import Optional

from core.database import get_connection
from core.utils import format_price, format_duration
from services.member_service import MEMBER_ROLE


@dataclass
class GymStatistics:
    """Aggregates shown on the Statistics and Dashboard pages."""
    total_members: int = 0
    members_with_phone: int = 0
    total_plans: int = 0
    average_price: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    average_duration_days: Optional[float] = None
    cheapest_plan: Optional[str] = None
    longest_plan: Optional[str] = None

    @property
    def contact_rate(self) -> int:
        """Percentage of members with a phone number on file."""
        if not self.total_members:
            return 0
        return round(100 * self.members_with_phone / self.total_members)


def get_statistics() -> GymStatistics:
    """
    Computes member and plan aggregates straight from the store.
    """
    conn = get_connection()
    stats = GymStatistics()

    row = conn.execute(
        "SELECT COUNT(*), COUNT(NULLIF(TRIM(COALESCE(phone, '')), '')) FROM Users WHERE role = ?",
        (MEMBER_ROLE,),
    ).fetchone()
    stats.total_members, stats.members_with_phone = int(row[0]), int(row[1])

    row = conn.execute(
        "SELECT COUNT(*), AVG(price), MIN(price), MAX(price), AVG(duration_days) FROM Subscriptions"
    ).fetchone()
    stats.total_plans = int(row[0])
    stats.average_price, stats.min_price, stats.max_price, stats.average_duration_days = row[1], row[2], row[3], row[4]

    if stats.total_plans:
        # Ties go to the alphabetically first plan
        cheapest = conn.execute(
            "SELECT name FROM Subscriptions ORDER BY price ASC, name ASC LIMIT 1"
        ).fetchone()
        longest = conn.execute(
            "SELECT name FROM Subscriptions ORDER BY duration_days DESC, name ASC LIMIT 1"
        ).fetchone()
        stats.cheapest_plan = cheapest[0]
        stats.longest_plan = longest[0]

    return stats


def generate_overview(stats: GymStatistics, target_date: Optional[datetime.date] = None) -> str:
    """
    Builds the markdown brief displayed on the Dashboard page.

    Args:
        stats (GymStatistics): Figures from get_statistics().
        target_date (datetime.date, optional): Date printed in the header. Defaults to today.
    """
    if not target_date:
        target_date = datetime.date.today()

    lines = []
    lines.append(f"📅 **GYM OVERVIEW** ({target_date.strftime('%B %d, %Y')})")
    lines.append("-" * 40)
    lines.append("")

    # Members Section
    if stats.total_members == 0:
        lines.append("👤 **Members:** No members registered yet. Add one from the Members page.")
    elif stats.total_members == 1:
        lines.append("👤 **Members:** You have **1 registered member**.")
    else:
        lines.append(f"👤 **Members:** You have **{stats.total_members} registered members**.")
    if stats.total_members:
        lines.append(f"📞 **Contact Rate:** {stats.contact_rate}% of members left a phone number.")

    lines.append("")

    # Plans Section
    if stats.total_plans == 0:
        lines.append("💳 **Plans:** No subscription plans defined yet.")
    else:
        lines.append(f"💳 **Plans:** {stats.total_plans} subscription plan(s) on offer.")
        lines.append(
            f"💰 **Prices:** from {format_price(stats.min_price)} to {format_price(stats.max_price)} "
            f"(average {format_price(stats.average_price)})."
        )
        lines.append(f"🏷️ **Cheapest:** {stats.cheapest_plan}")
        lines.append(
            f"⏳ **Longest:** {stats.longest_plan} "
            f"(average length {format_duration(round(stats.average_duration_days))})"
        )

    lines.append("")
    lines.append("-" * 40)
    return "\n".join(lines)
