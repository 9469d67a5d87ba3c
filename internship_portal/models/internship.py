from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, TYPE_CHECKING

from ..exceptions import WrongStatusError
from ..utils.constants import (
    InternshipStatus,
    InternshipLevel,
    ApplicationStatus,
    MAX_SLOTS,
    MIN_YEAR_FOR_ADVANCED,
    WITHDRAWABLE_STATES,
)
from ..utils.filters import now_local

if TYPE_CHECKING:
    from .user import Student  # noqa: F401

EDITABLE_FIELDS = (
    "title", "description", "level", "preferred_major",
    "open_date", "close_date", "num_slots",
)


@dataclass
class Internship:
    """
    An internship listing posted by a company representative.
    New listings are PENDING and hidden until Staff approve them.
    """
    listing_id: int
    title: str
    description: str
    level: InternshipLevel
    preferred_major: str
    open_date: date
    close_date: date
    company_name: str
    creator_id: str
    num_slots: int
    visible: bool = False
    status: InternshipStatus = InternshipStatus.PENDING
    filled_slots: int = 0

    def is_visible(self) -> bool:
        return self.visible and self.status is InternshipStatus.APPROVED

    def is_filled(self) -> bool:
        return self.status is InternshipStatus.FILLED or (
            self.status is InternshipStatus.APPROVED and self.filled_slots >= self.num_slots
        )

    def is_open(self, today: date) -> bool:
        return self.open_date <= today <= self.close_date

    def level_allows(self, year_of_study: int) -> bool:
        """Basic listings take any year; Intermediate and Advanced need year 3+."""
        if self.level is InternshipLevel.BASIC:
            return True
        return year_of_study >= MIN_YEAR_FOR_ADVANCED

    def is_visible_to(self, student: "Student", today: date) -> bool:
        """
        A student sees a listing only if it is not filled, is switched on,
        matches their major, suits their year, and is open today.
        """
        if self.is_filled() or not self.is_visible():
            return False
        if not self.preferred_major or not student.major:
            return False
        if self.preferred_major.strip().lower() != student.major.strip().lower():
            return False
        if not self.level_allows(student.year_of_study):
            return False
        return self.is_open(today)

    def can_edit(self) -> bool:
        return self.status is InternshipStatus.PENDING

    def toggle_visibility(self) -> bool:
        """Flip visibility; only approved listings can be toggled."""
        if self.status is InternshipStatus.APPROVED:
            self.visible = not self.visible
        return self.visible

    def set_status(self, status: InternshipStatus) -> None:
        self.status = InternshipStatus(status)
        if self.status is InternshipStatus.APPROVED:
            self.visible = True
        elif self.status is InternshipStatus.REJECTED:
            self.visible = False

    def update_details(self, **fields) -> None:
        """
        Edit a PENDING listing. ``None`` values are skipped; the result must
        still have a known level, 1..MAX_SLOTS slots and open <= close.
        """
        if not self.can_edit():
            raise WrongStatusError(self.status, InternshipStatus.PENDING, entity="Internship")
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in fields.items() if v is not None}
        if "level" in changes:
            changes["level"] = InternshipLevel(changes["level"])
        slots = changes.get("num_slots", self.num_slots)
        if isinstance(slots, bool) or not isinstance(slots, int) or not 1 <= slots <= MAX_SLOTS:
            raise ValueError(f"Number of slots must be between 1 and {MAX_SLOTS}.")
        if changes.get("open_date", self.open_date) > changes.get("close_date", self.close_date):
            raise ValueError("Opening date must be on or before the closing date.")
        for k, v in changes.items():
            setattr(self, k, v)

    def to_dict(self) -> dict:
        return {
            "listing_id": self.listing_id,
            "title": self.title,
            "description": self.description,
            "level": self.level.value,
            "preferred_major": self.preferred_major,
            "open_date": self.open_date.isoformat(),
            "close_date": self.close_date.isoformat(),
            "company_name": self.company_name,
            "creator_id": self.creator_id,
            "num_slots": self.num_slots,
            "filled_slots": self.filled_slots,
            "visible": self.visible,
            "status": self.status.value,
            "display_status": "Filled" if self.is_filled() else "Available",
        }


@dataclass
class Application:
    """A student's application to one listing; both referenced by ID."""
    application_id: int
    listing_id: int
    student_id: str
    date_applied: datetime = field(default_factory=now_local)
    status: ApplicationStatus = ApplicationStatus.PENDING
    previous_status: Optional[ApplicationStatus] = None
    withdrawal_reason: Optional[str] = None

    def set_status(self, status: ApplicationStatus) -> None:
        self.status = ApplicationStatus(status)

    def request_withdrawal(self, reason: Optional[str] = None) -> None:
        if self.status not in WITHDRAWABLE_STATES:
            raise WrongStatusError(self.status, WITHDRAWABLE_STATES)
        self.previous_status = self.status
        self.status = ApplicationStatus.WITHDRAWAL_REQUESTED
        self.withdrawal_reason = reason or ""

    def to_dict(self) -> dict:
        return {
            "application_id": self.application_id,
            "listing_id": self.listing_id,
            "student_id": self.student_id,
            "date_applied": self.date_applied.isoformat(),
            "status": self.status.value,
            "previous_status": self.previous_status.value if self.previous_status else None,
            "withdrawal_reason": self.withdrawal_reason,
        }
