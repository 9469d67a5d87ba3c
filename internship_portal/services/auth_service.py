from __future__ import annotations

from typing import Optional

from ..exceptions import AuthenticationError
from ..models.registry import UserRegistry
from ..models.user import User, CompanyRepresentative
from ..utils.constants import UserType, ApprovalStatus
from ..utils.security import generate_hash
from ..utils.validation import validate_email, validate_not_empty
from .common import _registry


class AuthService:
    """Login, password change and company representative sign-up."""

    @staticmethod
    def authenticate(user_id: str, password: str, registry: Optional[UserRegistry] = None) -> User:
        """
        Return the logged-in user or raise AuthenticationError.
        Company representatives must be approved by Staff before logging in.
        """
        user = _registry(registry).find_by_id((user_id or "").strip())
        if user is None:
            raise AuthenticationError("Invalid user ID. Please try again.")
        if not user.verify_password(password):
            raise AuthenticationError("Incorrect password. Please try again.")
        if user.user_type is UserType.COMPANY_REPRESENTATIVE and not user.approved:
            if user.approval_status is ApprovalStatus.REJECTED:
                raise AuthenticationError("Your account registration was rejected.")
            raise AuthenticationError(
                "Your account is pending approval. Please wait for Career Center Staff approval."
            )
        user.logged_in = True
        return user

    @staticmethod
    def login(user_id: str, password: str, registry: Optional[UserRegistry] = None):
        """Soft variant of authenticate(): (ok, message, user)."""
        try:
            user = AuthService.authenticate(user_id, password, registry=registry)
        except AuthenticationError as e:
            return False, e.message, None
        return True, f"Welcome, {user.name}", user

    @staticmethod
    def change_password(user_id: str, old_password: str, new_password: str,
                        registry: Optional[UserRegistry] = None):
        user = _registry(registry).find_by_id(user_id)
        if user is None:
            return False, "Invalid user ID."
        try:
            user.change_password(old_password, new_password)
        except ValueError as e:
            return False, str(e)
        return True, "Password changed"

    @staticmethod
    def register_company_rep(payload: dict, registry: Optional[UserRegistry] = None):
        """
        Self-service sign-up. The email doubles as the user ID; the account
        starts PENDING until Staff approve it.
        Returns (ok, message, user_id).
        """
        reg = _registry(registry)
        try:
            email = validate_email(payload.get("email"))
            name = validate_not_empty(payload.get("name"), "Name")
            password = validate_not_empty(payload.get("password"), "Password")
            company = validate_not_empty(payload.get("company_name"), "Company name")
        except ValueError as e:
            return False, str(e), None

        if reg.exists(email):
            return False, "An account with this email already exists. Please login instead.", None

        rep = CompanyRepresentative(
            user_id=email,
            name=name,
            password_hash=generate_hash(password),
            email=email,
            company_name=company,
            department=(payload.get("department") or "").strip(),
            position=(payload.get("position") or "").strip(),
        )
        if not reg.register(rep):
            # lost a race with a concurrent sign-up for the same email
            return False, "Registration failed. Please try again.", None
        return True, "Registration submitted. Awaiting staff approval.", rep.user_id
