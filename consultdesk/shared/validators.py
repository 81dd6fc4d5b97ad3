"""Shared validation utilities"""

import re
from typing import Optional

PHONE_DIGITS = 10


def format_phone_number(value: Optional[str]) -> str:
    """
    Mask a raw phone entry as a US number while the user types.

    Non-digits are stripped and at most 10 digits are kept:
        "123"        -> "123"
        "123456"     -> "(123) 456"
        "1234567890" -> "(123) 456-7890"
    """
    digits = re.sub(r"\D", "", value or "")[:PHONE_DIGITS]

    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def validate_us_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a US phone number and normalize it to display format.

    Args:
        phone: Phone number string in various formats

    Returns:
        Phone number formatted as (XXX) XXX-XXXX

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    # Handle +1 prefix
    if digits.startswith("1") and len(digits) == PHONE_DIGITS + 1:
        digits = digits[1:]

    if len(digits) != PHONE_DIGITS:
        raise ValueError("Phone number must be 10 digits for US numbers")

    return format_phone_number(digits)


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_name(name: Optional[str]) -> Optional[str]:
    if name is None:
        return name

    name = " ".join(name.split())
    if not name:
        raise ValueError("Name is required")
    if len(name) > 255:
        raise ValueError("Name must be at most 255 characters")
    return name
