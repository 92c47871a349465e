"""Shared validation utilities"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

PIN_CODE_PATTERN = re.compile(r"^[0-9]{6}$")
PHONE_PATTERN = re.compile(r"^\+?[0-9]{10,15}$")

TWO_PLACES = Decimal("0.01")
# Largest amount a Numeric(10, 2) column holds
MAX_MONEY = Decimal("99999999.99")


def validate_pin_code(pin_code: Optional[str]) -> Optional[str]:
    """
    Validate an Indian postal pin code.

    Args:
        pin_code: Pin code string

    Returns:
        The stripped pin code

    Raises:
        ValueError: If the pin code is not exactly 6 digits
    """
    if pin_code is None:
        return pin_code

    pin_code = pin_code.strip()
    if not PIN_CODE_PATTERN.match(pin_code):
        raise ValueError("Pin code must be exactly 6 digits")

    return pin_code


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number by dropping spaces, dashes and parentheses.

    Raises:
        ValueError: If what remains is not 10-15 digits with an optional leading +
    """
    if phone is None:
        return phone

    cleaned = re.sub(r"[\s\-()]", "", phone)
    if not PHONE_PATTERN.match(cleaned):
        raise ValueError("Phone number must contain 10 to 15 digits")

    return cleaned


def require_text(value: Optional[str], field_name: str = "Field") -> str:
    """Strip a required text value, rejecting blanks"""
    if value is None or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip an optional text value, mapping blanks to None"""
    if value is None:
        return None
    value = value.strip()
    return value or None


def to_money(value) -> Decimal:
    """Round a numeric value to 2 decimal places (half-up)"""
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_money(value) -> Optional[str]:
    """Render a money amount the way the API returns it: "150.00" """
    if value is None:
        return None
    return str(to_money(value))
