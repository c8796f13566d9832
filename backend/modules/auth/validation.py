"""
Itemized input validation for the auth and users endpoints.

Each validator returns a list of human-readable problems; an empty list
means the input is acceptable. Callers raise a single ValidationError
carrying the whole list.
"""

import re
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from .phone import is_valid_phone_number

CODE_PATTERN = re.compile(r"^\d{6}$")
INVITATION_TOKEN_PATTERN = re.compile(r"^[0-9a-f]{64}$")

MIN_PASSWORD_LENGTH = 8


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: Optional[str]) -> bool:
    if not email:
        return False
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def password_errors(password: Optional[str]) -> list[str]:
    """Strength rules applied to every password a user chooses."""
    if not password:
        return ["Password is required"]

    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        errors.append("Password must contain at least one number")
    if not re.search(r"[^A-Za-z0-9]", password):
        errors.append("Password must contain at least one special character")
    return errors


def email_errors(email: Optional[str]) -> list[str]:
    if not email or not email.strip():
        return ["Email is required"]
    if not is_valid_email(email):
        return ["Please provide a valid email address"]
    return []


def code_errors(code: Optional[str], label: str = "Verification code") -> list[str]:
    if not code:
        return [f"{label} is required"]
    if not CODE_PATTERN.match(code):
        return [f"{label} must be exactly 6 digits"]
    return []


def phone_errors(phone_number: Optional[str]) -> list[str]:
    if phone_number and not is_valid_phone_number(phone_number):
        return ["Please provide a valid phone number"]
    return []


def registration_errors(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    confirm_password: Optional[str],
    phone_number: Optional[str] = None,
) -> list[str]:
    errors = []
    if not name or not name.strip():
        errors.append("Name is required")
    errors.extend(email_errors(email))
    errors.extend(password_errors(password))
    if not confirm_password:
        errors.append("Password confirmation is required")
    elif password and password != confirm_password:
        errors.append("Passwords do not match")
    errors.extend(phone_errors(phone_number))
    return errors


def new_password_errors(
    new_password: Optional[str],
    confirm_password: Optional[str],
) -> list[str]:
    errors = password_errors(new_password)
    if not confirm_password:
        errors.append("Password confirmation is required")
    elif new_password and new_password != confirm_password:
        errors.append("Passwords do not match")
    return errors
