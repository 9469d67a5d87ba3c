from __future__ import annotations

from typing import Optional

from ..models.registry import UserRegistry
from ..models.store import PlacementStore
from ..utils.constants import UserType, InternshipStatus, ApplicationStatus
from .common import _registry, _store, find_user_of_type
from .listing_filter import apply_filters


class StaffService:
    """
    Staff approvals and reports, addressed by ID.
    Each action resolves the acting Staff user first, then delegates to the
    Staff model. Returns (ok, message).
    """

    @staticmethod
    def _staff(staff_id, registry=None):
        return find_user_of_type(staff_id, UserType.STAFF, registry)

    # ---------- Company representatives ----------
    @staticmethod
    def decide_company_rep(staff_id: str, rep_id: str, approve: bool,
                           registry: Optional[UserRegistry] = None):
        staff = StaffService._staff(staff_id, registry)
        if staff is None:
            return False, "Staff account not found"
        reg = _registry(registry)
        action = staff.approve_company_rep if approve else staff.reject_company_rep
        if not action(reg, rep_id):
            return False, "Company representative not found."
        return True, f"Company representative {rep_id} {'approved' if approve else 'rejected'}"

    @staticmethod
    def pending_company_reps(registry: Optional[UserRegistry] = None):
        return [r for r in _registry(registry).company_reps() if not r.approved]

    # ---------- Listings ----------
    @staticmethod
    def decide_listing(staff_id: str, listing_id: int, approve: bool,
                       registry: Optional[UserRegistry] = None,
                       store: Optional[PlacementStore] = None):
        staff = StaffService._staff(staff_id, registry)
        if staff is None:
            return False, "Staff account not found"
        st = _store(store)
        action = staff.approve_listing if approve else staff.reject_listing
        if not action(st, listing_id):
            return False, f"Internship {listing_id} not found"
        return True, f"Internship {listing_id} {'approved' if approve else 'rejected'}"

    @staticmethod
    def pending_listings(store: Optional[PlacementStore] = None, **criteria):
        pending = [i for i in _store(store).listings() if i.status is InternshipStatus.PENDING]
        return apply_filters(pending, **criteria)

    @staticmethod
    def all_listings(store: Optional[PlacementStore] = None, **criteria):
        """Every listing in the system, narrowed by ``criteria``."""
        return apply_filters(_store(store).listings(), **criteria)

    # ---------- Withdrawals ----------
    @staticmethod
    def decide_withdrawal(staff_id: str, application_id: int, approve: bool,
                          registry: Optional[UserRegistry] = None,
                          store: Optional[PlacementStore] = None):
        staff = StaffService._staff(staff_id, registry)
        if staff is None:
            return False, "Staff account not found"
        st = _store(store)
        action = staff.approve_withdrawal if approve else staff.reject_withdrawal
        if not action(st, application_id):
            return False, f"Application {application_id} not found"
        return True, f"Withdrawal for application {application_id} {'approved' if approve else 'rejected'}"

    @staticmethod
    def withdrawal_requests(store: Optional[PlacementStore] = None):
        return [a for a in _store(store).applications()
                if a.status is ApplicationStatus.WITHDRAWAL_REQUESTED]

    # ---------- Profile / reports ----------
    @staticmethod
    def update_department(staff_id: str, department: str, registry: Optional[UserRegistry] = None):
        staff = StaffService._staff(staff_id, registry)
        if staff is None:
            return False, "Staff account not found"
        try:
            staff.set_department(department)
        except ValueError as e:
            return False, str(e)
        return True, "Department updated"

    @staticmethod
    def generate_report(staff_id: str, criteria: str, registry: Optional[UserRegistry] = None):
        """Returns (ok, message, report)."""
        staff = StaffService._staff(staff_id, registry)
        if staff is None:
            return False, "Staff account not found", None
        criteria = (criteria or "").strip()
        if not criteria:
            return False, "Report criteria cannot be empty.", None
        return True, "Report generated", staff.generate_report(criteria)
