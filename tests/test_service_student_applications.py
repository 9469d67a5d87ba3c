import threading
import time
from datetime import date, timedelta

import pytest

from internship_portal.exceptions import (
    IDNotFoundError,
    NotEligibleError,
    TooManyApplicationsError,
    WrongStatusError,
)
from internship_portal.models.internship import Internship
from internship_portal.services.student_service import StudentService
from internship_portal.utils.constants import (
    ApplicationStatus,
    InternshipLevel,
    InternshipStatus,
    MAX_APPLICATIONS,
)


def test_visible_listings_filter_by_major_level_and_visibility(student, senior, make_listing):
    basic = make_listing()
    advanced = make_listing(level=InternshipLevel.ADVANCED)
    make_listing(major="EEE")
    make_listing(approve=False)

    assert [i.listing_id for i in StudentService.available_listings(student.user_id)] == [basic.listing_id]
    assert [i.listing_id for i in StudentService.available_listings(senior.user_id)] == [
        basic.listing_id, advanced.listing_id,
    ]


def test_closed_window_hides_listing(student, make_listing):
    listing = make_listing()
    later = listing.close_date + timedelta(days=1)
    assert StudentService.available_listings(student.user_id, today=later) == []


def test_hidden_listing_is_not_visible(student, make_listing):
    listing = make_listing()
    assert listing.toggle_visibility() is False
    assert StudentService.available_listings(student.user_id) == []


def test_apply_creates_pending_application(student, store, make_listing):
    listing = make_listing()
    app = StudentService.apply(student.user_id, listing.listing_id)
    assert app.status is ApplicationStatus.PENDING
    assert app.application_id == 500000
    assert store.applications_for_student(student.user_id) == [app]


def test_apply_twice_to_same_listing_is_refused(student, make_listing):
    listing = make_listing()
    StudentService.apply(student.user_id, listing.listing_id)
    with pytest.raises(NotEligibleError):
        StudentService.apply(student.user_id, listing.listing_id)


def test_application_limit(student, make_listing):
    for _ in range(MAX_APPLICATIONS):
        StudentService.apply(student.user_id, make_listing().listing_id)
    with pytest.raises(TooManyApplicationsError) as exc:
        StudentService.apply(student.user_id, make_listing().listing_id)
    assert exc.value.limit == MAX_APPLICATIONS


def test_ineligible_level_is_refused(student, make_listing):
    listing = make_listing(level=InternshipLevel.INTERMEDIATE)
    with pytest.raises(NotEligibleError):
        StudentService.apply(student.user_id, listing.listing_id)


def test_unknown_listing_raises_structured_error(student):
    with pytest.raises(IDNotFoundError) as exc:
        StudentService.apply(student.user_id, 1)
    assert exc.value.entity == "internship"
    assert exc.value.entity_id == 1


def test_accept_requires_successful_status(student, make_listing):
    app = StudentService.apply(student.user_id, make_listing().listing_id)
    with pytest.raises(WrongStatusError) as exc:
        StudentService.accept_offer(student.user_id, app.application_id)
    assert exc.value.current is ApplicationStatus.PENDING
    assert exc.value.required is ApplicationStatus.SUCCESSFUL


def test_accept_withdraws_other_applications(student, store, make_listing):
    a1 = StudentService.apply(student.user_id, make_listing(slots=1).listing_id)
    a2 = StudentService.apply(student.user_id, make_listing().listing_id)
    store.set_application_status(a1.application_id, ApplicationStatus.SUCCESSFUL)

    StudentService.accept_offer(student.user_id, a1.application_id)
    assert a1.status is ApplicationStatus.ACCEPTED
    assert a2.status is ApplicationStatus.WITHDRAWN
    assert store.get_listing(a1.listing_id).status is InternshipStatus.FILLED


def test_withdrawal_request_and_wrong_state(student, make_listing):
    app = StudentService.apply(student.user_id, make_listing().listing_id)
    StudentService.request_withdrawal(student.user_id, app.application_id, "changed plans")
    assert app.status is ApplicationStatus.WITHDRAWAL_REQUESTED
    assert app.previous_status is ApplicationStatus.PENDING
    assert app.withdrawal_reason == "changed plans"
    with pytest.raises(WrongStatusError):
        StudentService.request_withdrawal(student.user_id, app.application_id)


def test_cannot_touch_another_students_application(student, senior, make_listing):
    app = StudentService.apply(senior.user_id, make_listing().listing_id)
    with pytest.raises(IDNotFoundError):
        StudentService.request_withdrawal(student.user_id, app.application_id)


def test_non_student_cannot_apply(staff, make_listing):
    with pytest.raises(IDNotFoundError):
        StudentService.apply(staff.user_id, make_listing().listing_id)


def test_concurrent_apply_respects_limit(student, store, make_listing, monkeypatch):
    listings = [make_listing() for _ in range(MAX_APPLICATIONS + 2)]
    original = Internship.is_visible_to

    def slow_is_visible_to(self, *args, **kwargs):
        time.sleep(0.02)
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Internship, "is_visible_to", slow_is_visible_to)
    barrier = threading.Barrier(len(listings))
    rejected = []

    def worker(listing_id):
        barrier.wait()
        try:
            StudentService.apply(student.user_id, listing_id)
        except TooManyApplicationsError:
            rejected.append(listing_id)

    threads = [threading.Thread(target=worker, args=(i.listing_id,)) for i in listings]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.applications_for_student(student.user_id)) == MAX_APPLICATIONS
    assert len(rejected) == 2


def test_available_listings_accepts_filters(student, make_listing):
    first = make_listing(slots=3)
    second = make_listing(slots=1)
    second.title = "Data Intern"
    assert [i.listing_id for i in StudentService.available_listings(student.user_id, keyword="data")] == [
        second.listing_id,
    ]
    assert [i.listing_id for i in StudentService.available_listings(student.user_id, sort="ID")] == [
        first.listing_id, second.listing_id,
    ]
