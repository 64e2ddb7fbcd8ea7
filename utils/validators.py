"""
Input Validators
Validates user input for signup, login, and catalog forms
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Tuple, List, Optional

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72
MAX_PRICE = Decimal('99999999.99')
CENT = Decimal('0.01')
MIN_PHONE_DIGITS = 10


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate email format
    Returns (is_valid, error_message)
    """
    if not email:
        return False, "Email is required"

    email = email.strip().lower()

    if not EMAIL_PATTERN.match(email):
        return False, "Invalid email format"

    if len(email) > 254:
        return False, "Email address is too long"

    return True, ""


def validate_password(password: str) -> Tuple[bool, List[str]]:
    """
    Validate password length
    Returns (is_valid, list_of_errors)
    """
    errors = []

    if not password:
        return False, ["Password is required"]

    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    # bcrypt only reads the first 72 bytes
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        errors.append(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    return len(errors) == 0, errors


def validate_phone(phone: str) -> Tuple[bool, str]:
    """
    Validate phone number: at least 10 digits, formatting characters allowed
    Returns (is_valid, error_message)
    """
    if not phone:
        return False, "Phone number is required"

    digits = re.sub(r'\D', '', phone)
    if len(digits) < MIN_PHONE_DIGITS:
        return False, "Invalid phone number"

    return True, ""


def validate_required_fields(data: dict, required_fields: List[str]) -> Tuple[bool, List[str]]:
    """
    Validate that all required fields are present and not empty
    Returns (is_valid, list_of_missing_fields)
    """
    missing = []

    for field in required_fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and value.strip() == ""):
            missing.append(f"{field} is required")

    return len(missing) == 0, missing


def validate_slug(slug: str) -> Tuple[bool, str]:
    if not slug:
        return False, "Slug is required"
    if not SLUG_PATTERN.match(slug):
        return False, "Slug may only contain lowercase letters, digits and hyphens"
    return True, ""


def parse_price(value, field_name: str = "Price") -> Tuple[Optional[Decimal], str]:
    """
    Parse a non-negative money value into a Decimal
    Returns (amount, error_message)
    """
    if isinstance(value, bool):
        return None, f"{field_name} must be a valid number"
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None, f"{field_name} must be a valid number"

    if not amount.is_finite():
        return None, f"{field_name} must be a valid number"

    if amount < 0:
        return None, f"{field_name} must be at least 0"

    if amount > MAX_PRICE:
        return None, f"{field_name} must be at most {MAX_PRICE}"

    if amount != amount.quantize(CENT):
        return None, f"{field_name} must have at most 2 decimal places"

    return amount.quantize(CENT), ""


def parse_quantity(value) -> Tuple[Optional[int], str]:
    """
    Parse a positive integer quantity
    Returns (quantity, error_message)
    """
    if isinstance(value, bool):
        return None, "Quantity must be a whole number"
    try:
        quantity = int(value)
    except (ValueError, TypeError):
        return None, "Quantity must be a whole number"

    if isinstance(value, float) and value != quantity:
        return None, "Quantity must be a whole number"

    if quantity < 1:
        return None, "Quantity must be at least 1"

    return quantity, ""
