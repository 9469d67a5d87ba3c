import itertools
import threading
from datetime import date
from typing import Optional

from ..exceptions import IDNotFoundError, WrongStatusError
from ..utils.constants import (
    InternshipStatus,
    InternshipLevel,
    ApplicationStatus,
    FILLING_STATES,
    FIRST_LISTING_ID,
    FIRST_APPLICATION_ID,
)
from .internship import Internship, Application


class PlacementStore:
    """
    Owner of every internship listing and application, keyed by integer ID.
    Other parts of the system hold IDs, not object references; all mutations
    go through this store under its lock.
    """
    _inst = None
    _inst_lock = threading.Lock()

    def __init__(self):
        self.listings_by_id: dict[int, Internship] = {}
        self.applications_by_id: dict[int, Application] = {}
        self._listing_ids = itertools.count(FIRST_LISTING_ID)
        self._application_ids = itertools.count(FIRST_APPLICATION_ID)
        self._rw = threading.RLock()

    # ---------- Singleton ----------
    @classmethod
    def instance(cls) -> "PlacementStore":
        """Return the global singleton instance of PlacementStore."""
        with cls._inst_lock:
            if cls._inst is None:
                cls._inst = PlacementStore()
                print("[Store] Created in-memory placement store")
        return cls._inst

    @property
    def lock(self):
        """Reentrant store lock; hold it across a check-then-create sequence."""
        return self._rw

    # ---------- Listings ----------
    def create_listing(
            self,
            *,
            title: str,
            description: str,
            level: InternshipLevel,
            preferred_major: str,
            open_date: date,
            close_date: date,
            company_name: str,
            creator_id: str,
            num_slots: int,
    ) -> Internship:
        """Create a PENDING, hidden listing and return it."""
        with self._rw:
            listing = Internship(
                listing_id=next(self._listing_ids),
                title=title,
                description=description,
                level=InternshipLevel(level),
                preferred_major=preferred_major,
                open_date=open_date,
                close_date=close_date,
                company_name=company_name,
                creator_id=creator_id,
                num_slots=num_slots,
            )
            self.listings_by_id[listing.listing_id] = listing
            return listing

    def get_listing(self, listing_id) -> Optional[Internship]:
        with self._rw:
            return self.listings_by_id.get(listing_id)

    def require_listing(self, listing_id) -> Internship:
        listing = self.get_listing(listing_id)
        if listing is None:
            raise IDNotFoundError("internship", listing_id)
        return listing

    def listings(self) -> list[Internship]:
        with self._rw:
            return sorted(self.listings_by_id.values(), key=lambda i: i.listing_id)

    def listings_by_creator(self, creator_id: str) -> list[Internship]:
        return [i for i in self.listings() if i.creator_id == creator_id]

    def update_listing(self, listing_id, **fields) -> Internship:
        """Edit a PENDING listing in place (see ``Internship.update_details``)."""
        with self._rw:
            listing = self.require_listing(listing_id)
            listing.update_details(**fields)
            return listing

    def delete_listing(self, listing_id) -> None:
        """Delete a listing that has not been approved or rejected yet."""
        with self._rw:
            listing = self.require_listing(listing_id)
            if not listing.can_edit():
                raise WrongStatusError(listing.status, InternshipStatus.PENDING, entity="Internship")
            del self.listings_by_id[listing_id]
            for aid in [a.application_id for a in self.applications_for_listing(listing_id)]:
                del self.applications_by_id[aid]

    def set_listing_status(self, listing_id, status: InternshipStatus) -> bool:
        """Unconditionally move a listing to ``status``; False for an unknown ID."""
        with self._rw:
            listing = self.listings_by_id.get(listing_id)
            if listing is None:
                return False
            listing.set_status(status)
            return True

    # ---------- Applications ----------
    def create_application(self, listing_id: int, student_id: str) -> Application:
        with self._rw:
            self.require_listing(listing_id)
            app = Application(
                application_id=next(self._application_ids),
                listing_id=listing_id,
                student_id=student_id,
            )
            self.applications_by_id[app.application_id] = app
            self.recount_slots(listing_id)
            return app

    def get_application(self, application_id) -> Optional[Application]:
        with self._rw:
            return self.applications_by_id.get(application_id)

    def require_application(self, application_id) -> Application:
        app = self.get_application(application_id)
        if app is None:
            raise IDNotFoundError("application", application_id)
        return app

    def applications(self) -> list[Application]:
        with self._rw:
            return sorted(self.applications_by_id.values(), key=lambda a: a.application_id)

    def applications_for_student(self, student_id: str) -> list[Application]:
        return [a for a in self.applications() if a.student_id == student_id]

    def applications_for_listing(self, listing_id: int) -> list[Application]:
        return [a for a in self.applications() if a.listing_id == listing_id]

    def set_application_status(self, application_id, status: ApplicationStatus) -> bool:
        """Unconditionally move an application to ``status``; False for an unknown ID."""
        with self._rw:
            app = self.applications_by_id.get(application_id)
            if app is None:
                return False
            app.set_status(status)
            if app.status is not ApplicationStatus.WITHDRAWAL_REQUESTED:
                app.previous_status = None
                app.withdrawal_reason = None
            self.recount_slots(app.listing_id)
            return True

    # ---------- Slots ----------
    def recount_slots(self, listing_id: int) -> None:
        """
        Recount filled slots from SUCCESSFUL/ACCEPTED applications; a pending
        withdrawal keeps its slot until Staff decide on it.
        An approved listing at capacity becomes FILLED; a filled listing
        with a free slot again goes back to APPROVED.
        """
        with self._rw:
            listing = self.listings_by_id.get(listing_id)
            if listing is None:
                return
            listing.filled_slots = sum(
                1 for a in self.applications_by_id.values()
                if a.listing_id == listing_id and _holds_slot(a)
            )
            if listing.status is InternshipStatus.APPROVED and listing.filled_slots >= listing.num_slots:
                listing.status = InternshipStatus.FILLED
            elif listing.status is InternshipStatus.FILLED and listing.filled_slots < listing.num_slots:
                listing.status = InternshipStatus.APPROVED


def _holds_slot(app: Application) -> bool:
    if app.status in FILLING_STATES:
        return True
    return app.status is ApplicationStatus.WITHDRAWAL_REQUESTED and app.previous_status in FILLING_STATES
