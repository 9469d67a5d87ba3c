from __future__ import annotations

from typing import Optional

from ..exceptions import (
    IDNotFoundError,
    ListingLimitError,
    AuthenticationError,
    WrongStatusError,
)
from ..models.registry import UserRegistry
from ..models.store import PlacementStore
from ..utils.constants import (
    UserType,
    InternshipLevel,
    ApplicationStatus,
    MAX_LISTINGS,
    MAX_SLOTS,
)
from ..utils.validation import validate_not_empty, validate_range
from .common import _store, parse_date, to_int_safe, find_user_of_type
from .listing_filter import apply_filters


class CompanyService:
    """Listing management and application review for company representatives."""

    @staticmethod
    def _rep(rep_id, registry=None):
        rep = find_user_of_type(rep_id, UserType.COMPANY_REPRESENTATIVE, registry)
        if rep is None:
            raise IDNotFoundError("company representative", rep_id)
        if not rep.approved:
            raise AuthenticationError("Your account is pending approval.")
        return rep

    @staticmethod
    def _own_listing(rep_id, listing_id, store):
        listing = store.require_listing(listing_id)
        if listing.creator_id != rep_id:
            raise IDNotFoundError("internship", listing_id)
        return listing

    @staticmethod
    def _listing_fields(payload: dict, partial: bool = False) -> dict:
        """
        Validate listing fields from a raw payload. With ``partial`` only the
        keys present (and non-empty) are checked and returned.
        """
        def given(key):
            return not partial or payload.get(key) not in (None, "")

        fields = {}
        if given("title"):
            fields["title"] = validate_not_empty(payload.get("title"), "Title")
        if not partial or payload.get("description") is not None:
            fields["description"] = (payload.get("description") or "").strip()
        if given("preferred_major"):
            fields["preferred_major"] = validate_not_empty(payload.get("preferred_major"), "Preferred major")
        if given("level"):
            try:
                fields["level"] = InternshipLevel(str(payload.get("level") or "Basic").strip().capitalize())
            except ValueError:
                raise ValueError("Level must be Basic, Intermediate or Advanced.") from None
        if given("num_slots"):
            slots = to_int_safe(payload.get("num_slots"))
            if slots is None:
                raise ValueError("Number of slots must be a whole number.")
            fields["num_slots"] = validate_range(slots, 1, MAX_SLOTS, "Number of slots")
        for key in ("open_date", "close_date"):
            if given(key):
                fields[key] = parse_date(payload.get(key))
        if "open_date" in fields and "close_date" in fields and fields["open_date"] > fields["close_date"]:
            raise ValueError("Opening date must be on or before the closing date.")
        return fields

    @staticmethod
    def create_listing(rep_id: str, payload: dict,
                       registry: Optional[UserRegistry] = None,
                       store: Optional[PlacementStore] = None):
        """
        Create a PENDING listing owned by ``rep_id``.
        Bad payloads raise ValueError; limits raise ListingLimitError.
        """
        st = _store(store)
        rep = CompanyService._rep(rep_id, registry)
        fields = CompanyService._listing_fields(payload)

        with st.lock:
            if len(st.listings_by_creator(rep_id)) >= MAX_LISTINGS:
                raise ListingLimitError(MAX_LISTINGS)
            return st.create_listing(
                company_name=rep.company_name,
                creator_id=rep_id,
                **fields,
            )

    @staticmethod
    def edit_listing(rep_id: str, listing_id: int, payload: dict,
                     registry: Optional[UserRegistry] = None,
                     store: Optional[PlacementStore] = None):
        """Change fields of one of the rep's PENDING listings; omitted fields stay as they are."""
        st = _store(store)
        CompanyService._rep(rep_id, registry)
        CompanyService._own_listing(rep_id, listing_id, st)
        return st.update_listing(listing_id, **CompanyService._listing_fields(payload, partial=True))

    @staticmethod
    def my_listings(rep_id: str, store: Optional[PlacementStore] = None, **criteria):
        return apply_filters(_store(store).listings_by_creator(rep_id), **criteria)

    @staticmethod
    def toggle_visibility(rep_id: str, listing_id: int,
                          registry: Optional[UserRegistry] = None,
                          store: Optional[PlacementStore] = None) -> bool:
        CompanyService._rep(rep_id, registry)
        listing = CompanyService._own_listing(rep_id, listing_id, _store(store))
        return listing.toggle_visibility()

    @staticmethod
    def delete_listing(rep_id: str, listing_id: int,
                       registry: Optional[UserRegistry] = None,
                       store: Optional[PlacementStore] = None) -> None:
        st = _store(store)
        CompanyService._rep(rep_id, registry)
        CompanyService._own_listing(rep_id, listing_id, st)
        st.delete_listing(listing_id)

    @staticmethod
    def applications_for_listing(rep_id: str, listing_id: int,
                                 store: Optional[PlacementStore] = None):
        st = _store(store)
        CompanyService._own_listing(rep_id, listing_id, st)
        return st.applications_for_listing(listing_id)

    @staticmethod
    def review_application(rep_id: str, application_id: int, successful: bool,
                           registry: Optional[UserRegistry] = None,
                           store: Optional[PlacementStore] = None):
        """Mark a PENDING application on one of the rep's listings SUCCESSFUL or UNSUCCESSFUL."""
        st = _store(store)
        CompanyService._rep(rep_id, registry)
        app = st.require_application(application_id)
        CompanyService._own_listing(rep_id, app.listing_id, st)
        if app.status is not ApplicationStatus.PENDING:
            raise WrongStatusError(app.status, ApplicationStatus.PENDING)
        new_status = ApplicationStatus.SUCCESSFUL if successful else ApplicationStatus.UNSUCCESSFUL
        st.set_application_status(application_id, new_status)
        return app
