"""Student-side placement operations."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..exceptions import (
    IDNotFoundError,
    NotEligibleError,
    TooManyApplicationsError,
    WrongStatusError,
)
from ..models.registry import UserRegistry
from ..models.store import PlacementStore
from ..utils.constants import UserType, ApplicationStatus, MAX_APPLICATIONS
from .common import _store, _today, find_user_of_type
from .listing_filter import apply_filters

# Applications that no longer count toward the per-student limit
CLOSED_STATES = {
    ApplicationStatus.UNSUCCESSFUL,
    ApplicationStatus.WITHDRAWN,
    ApplicationStatus.REJECTED,
}


class StudentService:
    """
    Browse, apply, withdraw, accept.
    Methods raise PortalError subclasses; the app-level error handler turns
    them into JSON responses.
    """

    @staticmethod
    def _student(student_id, registry=None):
        student = find_user_of_type(student_id, UserType.STUDENT, registry)
        if student is None:
            raise IDNotFoundError("student", student_id)
        return student

    @staticmethod
    def available_listings(student_id: str, today: Optional[date] = None,
                           registry: Optional[UserRegistry] = None,
                           store: Optional[PlacementStore] = None, **criteria):
        """Listings this student may see and apply for today, narrowed by ``criteria``."""
        student = StudentService._student(student_id, registry)
        today = today or _today()
        visible = [i for i in _store(store).listings() if i.is_visible_to(student, today)]
        return apply_filters(visible, **criteria)

    @staticmethod
    def my_applications(student_id: str, store: Optional[PlacementStore] = None):
        return _store(store).applications_for_student(student_id)

    @staticmethod
    def apply(student_id: str, listing_id: int, today: Optional[date] = None,
              registry: Optional[UserRegistry] = None,
              store: Optional[PlacementStore] = None):
        """Create a PENDING application; enforces the limit and eligibility."""
        st = _store(store)
        student = StudentService._student(student_id, registry)

        # limit check and insert under one store lock
        with st.lock:
            listing = st.require_listing(listing_id)
            active = [a for a in st.applications_for_student(student_id) if a.status not in CLOSED_STATES]
            if len(active) >= MAX_APPLICATIONS:
                raise TooManyApplicationsError(MAX_APPLICATIONS)
            if any(a.listing_id == listing_id for a in active):
                raise NotEligibleError("You have already applied for this internship.")
            if not listing.is_visible_to(student, today or _today()):
                raise NotEligibleError(
                    "You are not eligible for this internship. "
                    "Check your major, year of study, or visibility status."
                )
            return st.create_application(listing_id, student_id)

    @staticmethod
    def _own_application(student_id, application_id, store):
        app = store.require_application(application_id)
        if app.student_id != student_id:
            raise IDNotFoundError("application", application_id)
        return app

    @staticmethod
    def request_withdrawal(student_id: str, application_id: int, reason: Optional[str] = None,
                           store: Optional[PlacementStore] = None):
        st = _store(store)
        app = StudentService._own_application(student_id, application_id, st)
        with st.lock:
            app.request_withdrawal(reason)
            st.recount_slots(app.listing_id)
        return app

    @staticmethod
    def accept_offer(student_id: str, application_id: int, store: Optional[PlacementStore] = None):
        """
        Accept a SUCCESSFUL offer. Every other application of the student is
        withdrawn, and the listing's filled slots are recounted.
        """
        st = _store(store)
        app = StudentService._own_application(student_id, application_id, st)
        with st.lock:
            if app.status is not ApplicationStatus.SUCCESSFUL:
                raise WrongStatusError(app.status, ApplicationStatus.SUCCESSFUL)
            st.set_application_status(app.application_id, ApplicationStatus.ACCEPTED)
            for other in st.applications_for_student(student_id):
                if other.application_id != app.application_id and other.status not in CLOSED_STATES:
                    st.set_application_status(other.application_id, ApplicationStatus.WITHDRAWN)
        return app

