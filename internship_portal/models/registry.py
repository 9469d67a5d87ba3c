from __future__ import annotations

import threading
from typing import Optional, TYPE_CHECKING

from ..utils.constants import UserType

if TYPE_CHECKING:
    from .user import User, CompanyRepresentative  # noqa: F401


class UserRegistry:
    """
    In-memory map of user_id -> User; the single source of truth for
    "is this a known user, and which one".

    Failures are soft: bad input and duplicate IDs give False / None, never
    an exception. There is no removal operation; entries live as long as the
    registry does.
    """
    _inst = None
    _inst_lock = threading.Lock()

    def __init__(self):
        self._users: dict[str, "User"] = {}
        self._rw = threading.RLock()

    # ---------- Singleton ----------
    @classmethod
    def instance(cls) -> "UserRegistry":
        """Return the global singleton instance of UserRegistry."""
        with cls._inst_lock:
            if cls._inst is None:
                cls._inst = UserRegistry()
                print("[Registry] Created in-memory user registry")
        return cls._inst

    # ---------- Core operations ----------
    def register(self, user: Optional["User"]) -> bool:
        """Insert a user unless it is missing, has no ID, or the ID is taken."""
        if user is None:
            return False
        uid = getattr(user, "user_id", None)
        if uid is None or not str(uid).strip():
            return False
        # check + insert under one lock so two callers can't both win
        with self._rw:
            if uid in self._users:
                print(f"[Registry] Rejected duplicate user ID: {uid}")
                return False
            self._users[uid] = user
            return True

    def find_by_id(self, user_id: Optional[str]) -> Optional["User"]:
        if user_id is None:
            return None
        with self._rw:
            return self._users.get(user_id)

    def exists(self, user_id: Optional[str]) -> bool:
        if user_id is None:
            return False
        with self._rw:
            return user_id in self._users

    # ---------- Queries ----------
    def all_users(self) -> list["User"]:
        with self._rw:
            return list(self._users.values())

    def users_of_type(self, user_type: UserType) -> list["User"]:
        """Users whose tag equals ``user_type`` (accepts the enum or its value)."""
        tag = UserType(user_type)
        return [u for u in self.all_users() if u.user_type is tag]

    def company_reps(self) -> list["CompanyRepresentative"]:
        return self.users_of_type(UserType.COMPANY_REPRESENTATIVE)

    def __len__(self) -> int:
        with self._rw:
            return len(self._users)

    def __contains__(self, user_id) -> bool:
        return self.exists(user_id)
