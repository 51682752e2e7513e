import datetime

import pytest

from services.statistics_service import GymStatistics, generate_overview, get_statistics


def test_empty_store(store):
    stats = get_statistics()
    assert stats.total_members == 0
    assert stats.total_plans == 0
    assert stats.contact_rate == 0
    assert stats.average_price is None
    assert stats.cheapest_plan is None


def test_member_figures(store, add_member):
    add_member("Ann", "ann@x.com", "555")
    add_member("Bob", "bob@x.com")
    add_member("Cid", "cid@x.com", "777")
    store.execute("INSERT INTO Users (name, email, role, phone) VALUES ('Coach', 'c@x.com', 'Trainer', '1')")
    stats = get_statistics()
    assert stats.total_members == 3
    assert stats.members_with_phone == 2
    assert stats.contact_rate == 67


def test_plan_figures(add_plan):
    add_plan("Monthly", 30, 25.0)
    add_plan("Yearly", 365, 200.0)
    add_plan("Trial", 7, 0.0)
    stats = get_statistics()
    assert stats.total_plans == 3
    assert stats.min_price == 0.0
    assert stats.max_price == 200.0
    assert stats.average_price == pytest.approx(75.0)
    assert stats.average_duration_days == pytest.approx(134.0)
    assert stats.cheapest_plan == "Trial"
    assert stats.longest_plan == "Yearly"


def test_overview_empty():
    text = generate_overview(GymStatistics(), datetime.date(2024, 3, 5))
    assert "March 05, 2024" in text
    assert "No members registered yet" in text
    assert "No subscription plans defined yet" in text


def test_overview_with_data():
    stats = GymStatistics(
        total_members=2, members_with_phone=1, total_plans=2,
        average_price=50.0, min_price=25.0, max_price=75.0,
        average_duration_days=60.0, cheapest_plan="Monthly", longest_plan="Quarterly",
    )
    text = generate_overview(stats, datetime.date(2024, 1, 1))
    assert "**2 registered members**" in text
    assert "50% of members" in text
    assert "from 25.00 DA to 75.00 DA (average 50.00 DA)" in text
    assert "Quarterly" in text
    assert "60 days" in text


def test_overview_single_member():
    text = generate_overview(GymStatistics(total_members=1), datetime.date(2024, 1, 1))
    assert "**1 registered member**" in text
