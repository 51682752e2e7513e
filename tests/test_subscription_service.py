from core.validation import SubscriptionInput
from services import subscription_service


def test_add_and_get_subscription(add_plan):
    pid = add_plan("Monthly", 30, 25.0, "All access")
    s = subscription_service.get_subscription(pid)
    assert (s.name, s.description, s.duration_days, s.price) == ("Monthly", "All access", 30, 25.0)


def test_subscriptions_ordered_by_name_and_names_not_unique(add_plan):
    add_plan("Yearly", 365, 200.0)
    add_plan("Monthly", 30, 25.0)
    add_plan("Monthly", 31, 27.0)
    names = [s.name for s in subscription_service.get_subscriptions()]
    assert names == ["Monthly", "Monthly", "Yearly"]


def test_update_subscription(add_plan):
    pid = add_plan("Monthly")
    assert subscription_service.update_subscription(pid, SubscriptionInput("Month+", "Pool", 31, 0.0))
    s = subscription_service.get_subscription(pid)
    assert (s.name, s.description, s.duration_days, s.price) == ("Month+", "Pool", 31, 0.0)


def test_update_missing_subscription(store):
    assert subscription_service.update_subscription(5, SubscriptionInput("X", "", 1, 1.0)) is False


def test_delete_subscription(add_plan):
    pid = add_plan("Monthly")
    assert subscription_service.delete_subscription(pid)
    assert subscription_service.get_subscriptions() == []
    assert subscription_service.delete_subscription(pid) is False
