from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional, TYPE_CHECKING

from ..utils.constants import UserType, ApprovalStatus, InternshipStatus, ApplicationStatus
from ..utils.security import generate_hash, check_hash
from ..utils.validation import validate_not_empty, validate_email
from .report import Report

if TYPE_CHECKING:
    # Only for type hints; won't execute at runtime
    from .registry import UserRegistry  # noqa: F401
    from .store import PlacementStore  # noqa: F401


@dataclass(kw_only=True, eq=False)
class User(ABC):
    """
    Base user model. Every variant carries a fixed ``user_type`` tag that
    callers branch on (dashboards, access checks) instead of isinstance().
    Identity is the object itself; two users with equal fields are still
    different registry entries.
    """
    user_type: ClassVar[UserType]
    _read_only: ClassVar[tuple[str, ...]] = ("user_id",)

    user_id: str
    name: str
    password_hash: str
    email: Optional[str] = None
    logged_in: bool = False

    def __post_init__(self) -> None:
        if self.user_id is None or not str(self.user_id).strip():
            raise ValueError("User ID is required to construct a user.")

    def __setattr__(self, key, value):
        if key in self._read_only and key in self.__dict__:
            raise AttributeError(f"{key} cannot be changed after creation")
        super().__setattr__(key, value)

    # ---------- Profile ----------
    @abstractmethod
    def profile_text(self) -> str:
        """Human-readable summary built from the current field values."""

    def display_profile(self) -> None:
        print(self.profile_text())

    def get_user_type(self) -> str:
        return self.user_type.value

    def to_dict(self) -> dict:
        """Public fields only; the credential never leaves the model."""
        return {
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.get_user_type(),
        }

    # ---------- Credentials ----------
    def verify_password(self, password: Optional[str]) -> bool:
        return check_hash(password or "", self.password_hash)

    def set_password(self, password: str) -> None:
        validate_not_empty(password, "New password")
        self.password_hash = generate_hash(password)

    def change_password(self, old_password: str, new_password: str) -> None:
        if not self.verify_password(old_password):
            raise ValueError("Incorrect old password.")
        self.set_password(new_password)

    def set_name(self, name: str) -> None:
        self.name = validate_not_empty(name, "Name")

    def set_email(self, email: str) -> None:
        self.email = validate_email(email)

    def logout(self) -> None:
        self.logged_in = False


@dataclass(kw_only=True, eq=False)
class Student(User):
    """
    Students apply for listings matching their major; year of study gates
    Intermediate/Advanced listings. Year and major are fixed at creation.
    """
    user_type: ClassVar[UserType] = UserType.STUDENT
    _read_only: ClassVar[tuple[str, ...]] = ("user_id", "year_of_study", "major")

    year_of_study: int
    major: str

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.year_of_study, bool) or not isinstance(self.year_of_study, int) \
                or self.year_of_study < 1:
            raise ValueError(f"Year of study must be a positive integer, got {self.year_of_study!r}.")
        validate_not_empty(self.major, "Major")

    def profile_text(self) -> str:
        return (f"Student: {self.user_id} | Name: {self.name} | Year: {self.year_of_study}"
                f" | Major: {self.major} | Email: {self.email or '-'}")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update(year_of_study=self.year_of_study, major=self.major)
        return d


@dataclass(kw_only=True, eq=False)
class CompanyRepresentative(User):
    """
    Company staff who post listings. Accounts start PENDING and may not log
    in until a Staff member approves them.
    """
    user_type: ClassVar[UserType] = UserType.COMPANY_REPRESENTATIVE

    company_name: str
    department: str = ""
    position: str = ""
    approval_status: ApprovalStatus = ApprovalStatus.PENDING

    @property
    def approved(self) -> bool:
        return self.approval_status is ApprovalStatus.APPROVED

    def profile_text(self) -> str:
        return (f"Company Representative: {self.user_id} | Name: {self.name}"
                f" | Company: {self.company_name} | Department: {self.department}"
                f" | Position: {self.position} | Status: {self.approval_status.label}")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update(
            company_name=self.company_name,
            department=self.department,
            position=self.position,
            approval_status=self.approval_status.value,
        )
        return d


@dataclass(kw_only=True, eq=False)
class Staff(User):
    """
    Career centre staff. Their actions change the state of entities owned by
    the registry or the placement store, addressed by ID. Transitions are
    unconditional: no check of the prior status is made.
    """
    user_type: ClassVar[UserType] = UserType.STAFF

    staff_department: str

    def profile_text(self) -> str:
        return (f"Staff: {self.user_id} | Name: {self.name} | Dept: {self.staff_department}"
                f" | Email: {self.email or '-'}")

    def set_department(self, department: str) -> None:
        self.staff_department = validate_not_empty(department, "Department")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["staff_department"] = self.staff_department
        return d

    # ---------- Company representative accounts ----------
    def approve_company_rep(self, registry: "UserRegistry", rep_id: str) -> bool:
        return self._set_rep_approval(registry, rep_id, ApprovalStatus.APPROVED)

    def reject_company_rep(self, registry: "UserRegistry", rep_id: str) -> bool:
        return self._set_rep_approval(registry, rep_id, ApprovalStatus.REJECTED)

    @staticmethod
    def _set_rep_approval(registry, rep_id, status: ApprovalStatus) -> bool:
        rep = registry.find_by_id(rep_id)
        if rep is None or rep.user_type is not UserType.COMPANY_REPRESENTATIVE:
            return False
        rep.approval_status = status
        return True

    # ---------- Listings ----------
    def approve_listing(self, store: "PlacementStore", listing_id: int) -> bool:
        return store.set_listing_status(listing_id, InternshipStatus.APPROVED)

    def reject_listing(self, store: "PlacementStore", listing_id: int) -> bool:
        return store.set_listing_status(listing_id, InternshipStatus.REJECTED)

    # ---------- Withdrawal requests ----------
    def approve_withdrawal(self, store: "PlacementStore", application_id: int) -> bool:
        return store.set_application_status(application_id, ApplicationStatus.WITHDRAWN)

    def reject_withdrawal(self, store: "PlacementStore", application_id: int) -> bool:
        return store.set_application_status(application_id, ApplicationStatus.REJECTED)

    # ---------- Reports ----------
    def generate_report(self, criteria: str) -> Report:
        return Report(criteria=criteria, requested_by=self.user_id)


# Tag -> variant, used by factories that build users from raw records
USER_CLASSES: dict[UserType, type[User]] = {
    UserType.STUDENT: Student,
    UserType.STAFF: Staff,
    UserType.COMPANY_REPRESENTATIVE: CompanyRepresentative,
}
