"""Shared service helpers and factories."""

from datetime import datetime, date
from typing import Optional

from ..models.registry import UserRegistry
from ..models.store import PlacementStore
from ..models.user import User, USER_CLASSES
from ..utils.constants import DATE_FMT, UserType, ApprovalStatus
from ..utils.filters import today_local
from ..utils.validation import validate_user_id


def _registry(registry: Optional[UserRegistry] = None) -> UserRegistry:
    """Prefer an injected registry (tests), else the singleton."""
    return registry if registry is not None else UserRegistry.instance()


def _store(store: Optional[PlacementStore] = None) -> PlacementStore:
    """Prefer an injected store (tests), else the singleton."""
    return store if store is not None else PlacementStore.instance()


# -------- date helpers --------
def parse_date(s) -> date:
    """Parse YYYY-MM-DD string to date; dates pass through; raise ValueError on bad input."""
    if isinstance(s, datetime):
        return s.date()
    if isinstance(s, date):
        return s
    return datetime.strptime(str(s).strip(), DATE_FMT).date()


def _today() -> date:
    """Wrapper for easier testing/mocking."""
    return today_local()


def to_int_safe(value) -> Optional[int]:
    """Safely convert to int; return None if invalid."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# -------- lookups by tag --------
def find_user_of_type(user_id: str, user_type: UserType,
                      registry: Optional[UserRegistry] = None) -> Optional[User]:
    """Return the user only when its tag matches ``user_type``."""
    user = _registry(registry).find_by_id(user_id)
    if user is None or user.user_type is not user_type:
        return None
    return user


# -------- dict -> rich model mappers --------
def user_from_dict(d: Optional[dict]) -> Optional[User]:
    """
    Map a raw user record to its variant, selected by the ``role`` tag.
    IDs are checked against the format for their role.
    Records carry either ``password`` (plain, hashed here) or ``password_hash``.
    """
    if not d:
        return None
    try:
        role = UserType(d.get("role"))
    except ValueError:
        raise ValueError(f"Unknown user role: {d.get('role')!r}") from None

    base = dict(
        user_id=validate_user_id(d.get("user_id"), role),
        name=d.get("name") or "",
        password_hash=d.get("password_hash") or "",
        email=d.get("email"),
    )
    if role is UserType.STUDENT:
        base.update(year_of_study=int(d.get("year_of_study") or 1), major=d.get("major") or "")
    elif role is UserType.STAFF:
        base.update(staff_department=d.get("staff_department") or "")
    else:
        status = d.get("approval_status") or ApprovalStatus.PENDING
        base.update(
            company_name=d.get("company_name") or "",
            department=d.get("department") or "",
            position=d.get("position") or "",
            approval_status=ApprovalStatus(getattr(status, "value", str(status).upper())),
        )

    user = USER_CLASSES[role](**base)
    if d.get("password") and not base["password_hash"]:
        user.set_password(d["password"])
    return user
