"""
Field validators shared by the request handlers and the User schema rules.

Every predicate is total: any input, including None or a wrong type,
yields a bool (or None for ``to_age``) and never raises.
"""
# Standard library imports
import re
from typing import Any, Optional

MIN_AGE = 1
MAX_AGE = 100
MIN_PASSWORD_LENGTH = 8

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
LOOSE_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PASSWORD_PATTERN = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*[\W_]).{8,}", re.ASCII | re.DOTALL)
DIGIT_PATTERN = re.compile(r"\d")


def validate_name(name: Any) -> bool:
    """Lenient name format: text with at least 2 non-space characters"""
    if not isinstance(name, str):
        return False
    return len(name.strip()) >= 2


def is_valid_person_name(name: Any) -> bool:
    """
    Name rule applied on register, update and by the User schema

    Args:
        name: Submitted name

    Returns:
        True if name is text, non-empty after trimming and has no digits
    """
    if not isinstance(name, str):
        return False
    value = name.strip()
    return bool(value) and DIGIT_PATTERN.search(value) is None


def to_age(age: Any) -> Optional[int]:
    """
    Convert a number or numeric string to a whole-number age

    Args:
        age: int, float or numeric string ("25", " 25 ", "25.0")

    Returns:
        The integer value, or None if age is not a whole number
    """
    if isinstance(age, bool):
        return None
    if isinstance(age, int):
        return age
    if isinstance(age, str):
        value = age.strip()
        if not value:
            return None
        try:
            age = float(value)
        except ValueError:
            return None
    if isinstance(age, float):
        if not age.is_integer():
            return None
        return int(age)
    return None


def validate_age(age: Any) -> bool:
    """True iff age converts to an integer in [1, 100]"""
    value = to_age(age)
    return value is not None and MIN_AGE <= value <= MAX_AGE


def normalize_email(email: Any) -> str:
    """Trim and lowercase an email for comparison and storage"""
    if email is None:
        return ""
    return str(email).strip().lower()


def validate_email(email: Any) -> bool:
    """True iff email is text matching local-part@domain.tld after normalizing"""
    if not isinstance(email, str):
        return False
    value = normalize_email(email)
    if not value:
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_loose_email(email: Any) -> bool:
    """Permissive pattern used by the availability check (anything@anything.anything)"""
    if not isinstance(email, str) or not email:
        return False
    return LOOSE_EMAIL_PATTERN.fullmatch(email) is not None


def validate_password(password: Any) -> bool:
    """
    Password strength rule

    Args:
        password: Plain text password

    Returns:
        True if the trimmed password has 8+ characters with a lowercase letter,
        an uppercase letter and a special character
    """
    if not isinstance(password, str):
        return False
    value = password.strip()
    if len(value) < MIN_PASSWORD_LENGTH:
        return False
    return PASSWORD_PATTERN.fullmatch(value) is not None
