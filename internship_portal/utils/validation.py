"""Input validation helpers shared by models and services.

All helpers raise ``ValueError`` with a human-readable message; callers in the
service layer turn that into an ``(ok, message)`` result.
"""
import re
from typing import Optional

from .constants import UserType

# Compile once at module import
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")
STUDENT_ID_PATTERN = re.compile(r"^U\d{6,7}[A-Z]$")
STAFF_ID_PATTERN = re.compile(r"^[a-z]+\d+$")


def validate_not_empty(value: Optional[str], field_name: str) -> str:
    """Return the stripped value; raise ValueError if it is None or blank."""
    if value is None or not str(value).strip():
        raise ValueError(f"{field_name} cannot be empty.")
    return str(value).strip()


def validate_email(email: Optional[str]) -> str:
    email = validate_not_empty(email, "Email")
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format.")
    return email


def validate_range(value: int, lo: int, hi: int, field_name: str) -> int:
    if value < lo or value > hi:
        raise ValueError(f"{field_name} must be between {lo} and {hi}.")
    return value


def validate_user_id(user_id: Optional[str], user_type: UserType) -> str:
    """
    Check an ID against the format for its user type:
      - Student: U + 6-7 digits + uppercase letter (e.g. U2310001A)
      - Staff: lowercase letters followed by digits (e.g. sng001)
      - Company representative: their email address
    """
    uid = validate_not_empty(user_id, "User ID")
    if user_type is UserType.STUDENT and not STUDENT_ID_PATTERN.match(uid):
        raise ValueError(
            "Invalid Student ID format. Must be U followed by 6-7 digits "
            "and ending with a letter (e.g., U2310001A)."
        )
    if user_type is UserType.STAFF and not STAFF_ID_PATTERN.match(uid):
        raise ValueError("Invalid Staff ID format (e.g., sng001).")
    if user_type is UserType.COMPANY_REPRESENTATIVE:
        validate_email(uid)
    return uid
