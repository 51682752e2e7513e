import pytest

from controllers.crud_controller import ControllerState
from controllers.subscription_controller import SubscriptionController


def _count(conn):
    return conn.execute("SELECT COUNT(*) FROM Subscriptions").fetchone()[0]


@pytest.fixture
def ctl(store):
    c = SubscriptionController()
    assert c.load()
    return c


def _fill(c, name="", description="", duration="", price=""):
    c.set_field("name", name)
    c.set_field("description", description)
    c.set_field("duration_days", duration)
    c.set_field("price", price)


def _add(c, *args):
    c.open_for_add()
    _fill(c, *args)
    assert c.save(), c.modal_error


def test_add_plan(ctl, store):
    _add(ctl, "Monthly", "All access", "30", "25")
    assert _count(store) == 1
    s = ctl.records[0]
    assert (s.name, s.description, s.duration_days, s.price) == ("Monthly", "All access", 30, 25.0)
    assert ctl.state == ControllerState.IDLE


def test_free_plan_allowed(ctl):
    _add(ctl, "Trial", "", "7", "0")
    assert ctl.records[0].price == 0.0


@pytest.mark.parametrize("duration", ["0", "-3", "abc", ""])
def test_bad_duration_rejected_before_write(ctl, store, duration):
    ctl.open_for_add()
    _fill(ctl, "Monthly", "", duration, "10")
    assert not ctl.save()
    assert ctl.modal_error == "Duration (days) must be a positive whole number."
    assert _count(store) == 0


@pytest.mark.parametrize("price", ["-1", "ten", ""])
def test_bad_price_rejected_before_write(ctl, store, price):
    ctl.open_for_add()
    _fill(ctl, "Monthly", "", "30", price)
    assert not ctl.save()
    assert ctl.modal_error == "Price must be a non-negative number."
    assert _count(store) == 0


def test_edit_form_round_trips_values(ctl):
    _add(ctl, "Monthly", "Gym", "30", "19.99")
    _add(ctl, "Yearly", "", "365", "200")
    monthly, yearly = ctl.records
    ctl.open_for_edit(monthly.id)
    assert ctl.form == {"name": "Monthly", "description": "Gym", "duration_days": "30", "price": "19.99"}
    ctl.close_editor()
    ctl.open_for_edit(yearly.id)
    assert ctl.form["price"] == "200"


def test_edit_with_blank_name_unchanged(ctl, store):
    _add(ctl, "Monthly", "", "30", "25")
    pid = ctl.records[0].id
    ctl.open_for_edit(pid)
    ctl.set_field("name", "")
    assert not ctl.save()
    assert ctl.modal_error == "Name is required."
    assert store.execute("SELECT name FROM Subscriptions WHERE id = ?", (pid,)).fetchone()[0] == "Monthly"


def test_update_plan(ctl):
    _add(ctl, "Monthly", "", "30", "25")
    ctl.open_for_edit(ctl.records[0].id)
    ctl.set_field("price", "27,50")
    assert ctl.save()
    assert ctl.records[0].price == 27.5


def test_update_vanished_record(ctl, store):
    _add(ctl, "Monthly", "", "30", "25")
    pid = ctl.records[0].id
    ctl.open_for_edit(pid)
    store.execute("DELETE FROM Subscriptions WHERE id = ?", (pid,))
    assert not ctl.save()
    assert ctl.modal_error == "This record no longer exists."
    assert ctl.records == []


def test_delete_plan_with_confirmation(ctl, store):
    _add(ctl, "Monthly", "", "30", "25")
    _add(ctl, "Yearly", "", "365", "200")
    assert not ctl.delete(ctl.records[0].id, lambda p: False)
    assert len(ctl.records) == 2
    assert ctl.delete(ctl.records[0].id, lambda p: True)
    assert [s.name for s in ctl.records] == ["Yearly"]
    assert _count(store) == 1


def test_delete_of_vanished_plan_reports_it(ctl, store):
    _add(ctl, "Monthly", "", "30", "25")
    stale_id = ctl.records[0].id
    store.execute("DELETE FROM Subscriptions WHERE id = ?", (stale_id,))

    assert not ctl.delete(stale_id, lambda p: True)
    assert ctl.page_error == "This record no longer exists."
    assert ctl.records == []
