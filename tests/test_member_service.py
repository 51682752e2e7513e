import pytest

from core.validation import MemberInput
from services import member_service
from services.member_service import DuplicateEmailError


def _names(members):
    return [m.name for m in members]


def test_add_member_returns_id_and_row(store, add_member):
    mid = add_member("Ann", "ann@x.com", "555")
    m = member_service.get_member(mid)
    assert (m.id, m.name, m.email, m.phone) == (mid, "Ann", "ann@x.com", "555")
    assert store.execute("SELECT COUNT(*) FROM Users").fetchone()[0] == 1


def test_get_members_orders_by_name(add_member):
    add_member("Bob", "bob@x.com")
    add_member("Ann", "ann@x.com")
    add_member("carl", "carl@x.com")
    assert _names(member_service.get_members()) == ["Ann", "Bob", "carl"]


def test_search_matches_name_or_email_case_insensitive(add_member):
    add_member("Bob", "bob@x.com")
    add_member("Ann", "ann@x.com")
    add_member("Zed", "zed@annex.org")
    assert _names(member_service.get_members("ANN")) == ["Ann", "Zed"]
    assert _names(member_service.get_members("bob@")) == ["Bob"]
    assert _names(member_service.get_members("   ")) == ["Ann", "Bob", "Zed"]


def test_search_treats_wildcards_literally(add_member):
    add_member("Ann", "ann@x.com")
    add_member("Under_Score", "u_s@x.com")
    assert _names(member_service.get_members("_")) == ["Under_Score"]
    assert member_service.get_members("%") == []


def test_members_exclude_other_roles(store, add_member):
    add_member("Ann", "ann@x.com")
    store.execute("INSERT INTO Users (name, email, role) VALUES ('Coach', 'coach@x.com', 'Trainer')")
    assert _names(member_service.get_members()) == ["Ann"]
    assert member_service.count_members() == 1


def test_add_duplicate_email_raises_duplicate_error(store, add_member):
    add_member("Ann", "ann@x.com")
    with pytest.raises(DuplicateEmailError, match="already registered"):
        add_member("Other", "ann@x.com")
    assert store.execute("SELECT COUNT(*) FROM Users").fetchone()[0] == 1


def test_update_member(add_member):
    mid = add_member("Ann", "ann@x.com")
    assert member_service.update_member(mid, MemberInput("Anna", "anna@x.com", None))
    m = member_service.get_member(mid)
    assert (m.name, m.email, m.phone) == ("Anna", "anna@x.com", None)


def test_update_to_taken_email_raises(add_member):
    add_member("Ann", "ann@x.com")
    bob = add_member("Bob", "bob@x.com")
    with pytest.raises(DuplicateEmailError):
        member_service.update_member(bob, MemberInput("Bob", "ann@x.com"))
    assert member_service.get_member(bob).email == "bob@x.com"


def test_update_missing_member_returns_false(store):
    assert member_service.update_member(99, MemberInput("X", "x@x.com")) is False


def test_email_exists(add_member):
    mid = add_member("Ann", "ann@x.com")
    assert member_service.email_exists("ANN@x.com")
    assert not member_service.email_exists("ann@x.com", exclude_id=mid)
    assert not member_service.email_exists("nobody@x.com")


def test_delete_member(store, add_member):
    mid = add_member("Ann", "ann@x.com")
    assert member_service.delete_member(mid)
    assert member_service.get_member(mid) is None
    assert member_service.delete_member(mid) is False
