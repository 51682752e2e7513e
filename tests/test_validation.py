import math

import pytest

from core.validation import (
    ValidationError, normalize_email, is_valid_email, validate_member,
    parse_duration, parse_price, validate_subscription,
)


def test_normalize_email_trims_and_lowercases():
    assert normalize_email("  Ann@Example.COM ") == "ann@example.com"
    assert normalize_email(None) == ""


@pytest.mark.parametrize("email", ["a@b.c", "user.name+tag@mail.example.org", "x@y.co.uk"])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", ["plain", "a@b", "@b.com", "a@.com ", "a b@c.com", "a@@b.com", "a@b."])
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_validate_member_cleans_values():
    data = validate_member("  Ann  ", " ANN@X.com ", "  ")
    assert data.name == "Ann"
    assert data.email == "ann@x.com"
    assert data.phone is None


def test_validate_member_keeps_phone():
    assert validate_member("Bob", "bob@x.com", " 555-1234 ").phone == "555-1234"


def test_validate_member_requires_name():
    with pytest.raises(ValidationError, match="Name is required"):
        validate_member("   ", "ann@x.com")


def test_validate_member_requires_email():
    with pytest.raises(ValidationError, match="Email is required"):
        validate_member("Ann", "  ")


def test_validate_member_rejects_bad_email():
    with pytest.raises(ValidationError, match="Invalid email format"):
        validate_member("Ann", "ann-at-x.com")


@pytest.mark.parametrize("text,expected", [("30", 30), (" 7 ", 7), (365, 365)])
def test_parse_duration_accepts_positive_integers(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["0", "-5", "abc", "", None, "1.5", "thirty", "1_0", "+5", "\u0663\u0660", "1e2"])
def test_parse_duration_rejects(text):
    with pytest.raises(ValidationError, match="Duration"):
        parse_duration(text)


@pytest.mark.parametrize("text,expected", [("0", 0.0), ("25", 25.0), ("19,99", 19.99), (" 12.5 ", 12.5), ("1000", 1000.0), ("1500,5", 1500.5)])
def test_parse_price_accepts_non_negative(text, expected):
    assert math.isclose(parse_price(text), expected)


@pytest.mark.parametrize("text", ["-1", "free", "", None, "nan", "inf", "1e3", "1.2.3", "1_000", "9" * 400])
def test_parse_price_rejects(text):
    with pytest.raises(ValidationError, match="Price"):
        parse_price(text)


def test_validate_subscription():
    data = validate_subscription(" Monthly ", "  All access ", "30", "25.5")
    assert (data.name, data.description, data.duration_days, data.price) == ("Monthly", "All access", 30, 25.5)


def test_validate_subscription_requires_name():
    with pytest.raises(ValidationError, match="Name is required"):
        validate_subscription("", "desc", "30", "10")


@pytest.mark.parametrize("text", ["1,000", "12,500", "1,000,000"])
def test_parse_price_rejects_thousands_separators(text):
    with pytest.raises(ValidationError, match="Price"):
        parse_price(text)
