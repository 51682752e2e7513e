import math
import re
from dataclasses import dataclass
from typing import Optional

# local@domain.tld
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Digits with an optional decimal part, "." or "," as separator
PRICE_PATTERN = re.compile(r"^[0-9]+(?:[.,][0-9]+)?$")
# "1,000" reads as a thousands separator in some locales and a decimal one in others
AMBIGUOUS_PRICE_PATTERN = re.compile(r"^[0-9]{1,3},[0-9]{3}$")


class ValidationError(ValueError):
    """
    Raised for invalid form input.
    Caught by the controllers and shown next to the form, never written to the store.
    """


@dataclass
class MemberInput:
    """Cleaned member form values, ready to be written."""
    name: str
    email: str
    phone: Optional[str] = None


@dataclass
class SubscriptionInput:
    """Cleaned subscription plan form values, ready to be written."""
    name: str
    description: str
    duration_days: int
    price: float


def normalize_email(text: Optional[str]) -> str:
    """Trims and lower-cases an email address."""
    return (text or "").strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def require_text(text: Optional[str], message: str) -> str:
    """
    Returns the trimmed text, or raises ValidationError if nothing is left.
    """
    value = (text or "").strip()
    if not value:
        raise ValidationError(message)
    return value


def validate_member(name: Optional[str], email: Optional[str], phone: Optional[str] = None) -> MemberInput:
    """
    Validates the member form.

    Args:
        name (str): Full name (required).
        email (str): Email address (required, local@domain.tld).
        phone (str, optional): Phone number. Blank becomes None.

    Returns:
        MemberInput: Trimmed name, normalised email and phone.

    Raises:
        ValidationError: On the first failing field.
    """
    clean_name = require_text(name, "Name is required.")
    clean_email = normalize_email(email)
    if not clean_email:
        raise ValidationError("Email is required.")
    if not is_valid_email(clean_email):
        raise ValidationError("Invalid email format! Example: user@example.com")

    clean_phone = (phone or "").strip() or None
    return MemberInput(name=clean_name, email=clean_email, phone=clean_phone)


def parse_duration(text) -> int:
    """
    Parses the plan duration in days. Must be a whole number above zero,
    written with plain digits only.
    """
    message = "Duration (days) must be a positive whole number."
    raw = str(text if text is not None else "").strip()
    if not (raw.isascii() and raw.isdigit()):
        raise ValidationError(message)
    value = int(raw)
    if value <= 0:
        raise ValidationError(message)
    return value


def parse_price(text) -> float:
    """
    Parses the plan price. Accepts ',' or '.' as decimal separator, must be >= 0.
    Thousands separators are not accepted: '1,000' is rejected rather than read as 1.0.
    """
    message = "Price must be a non-negative number."
    raw = str(text if text is not None else "").strip()
    if AMBIGUOUS_PRICE_PATTERN.match(raw):
        raise ValidationError(f"{message} Write it without a thousands separator, e.g. 1000 or 1000.50.")
    if not PRICE_PATTERN.match(raw):
        raise ValidationError(message)
    value = float(raw.replace(",", "."))
    if math.isinf(value):
        raise ValidationError(message)
    return value


def validate_subscription(name: Optional[str], description: Optional[str], duration, price) -> SubscriptionInput:
    """
    Validates the subscription plan form. Name is required, description is free text.
    """
    clean_name = require_text(name, "Name is required.")
    return SubscriptionInput(
        name=clean_name,
        description=(description or "").strip(),
        duration_days=parse_duration(duration),
        price=parse_price(price),
    )
