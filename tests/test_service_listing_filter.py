"""
Unit tests for listing_filter.apply_filters: status, major, level, company,
keyword and date filters, plus sort orders. Pure-service, no HTTP.
"""
from datetime import date

import pytest

from internship_portal.services.listing_filter import apply_filters, criteria_from_args
from internship_portal.utils.constants import InternshipLevel, InternshipStatus


@pytest.fixture
def listings(store):
    rows = [
        ("Backend Intern", "APIs in Go", InternshipLevel.BASIC, "CSC", "Zeta Labs",
         date(2030, 1, 1), date(2030, 3, 1), 2),
        ("Data Intern", "Pandas pipelines", InternshipLevel.ADVANCED, "DSAI", "Acme",
         date(2030, 2, 1), date(2030, 2, 20), 1),
        ("Chip Intern", "Verilog", InternshipLevel.INTERMEDIATE, "EEE", "acme",
         date(2030, 1, 15), date(2030, 4, 1), 1),
    ]
    out = []
    for title, desc, level, major, company, opens, closes, slots in rows:
        listing = store.create_listing(
            title=title, description=desc, level=level, preferred_major=major,
            open_date=opens, close_date=closes, company_name=company,
            creator_id="hr@acme.com", num_slots=slots,
        )
        store.set_listing_status(listing.listing_id, InternshipStatus.APPROVED)
        out.append(listing)
    # fill the Data listing
    out[1].filled_slots = 1
    out[1].status = InternshipStatus.FILLED
    return out


def _titles(rows):
    return [i.title for i in rows]


def test_no_criteria_returns_input_order(listings):
    assert apply_filters(listings) == listings


def test_status_available_and_filled(listings):
    assert _titles(apply_filters(listings, status="available")) == ["Backend Intern", "Chip Intern"]
    assert _titles(apply_filters(listings, status="FILLED")) == ["Data Intern"]
    assert _titles(apply_filters(listings, status="approved")) == ["Backend Intern", "Chip Intern"]


def test_major_level_and_company_match_case_insensitively(listings):
    assert _titles(apply_filters(listings, major="csc")) == ["Backend Intern"]
    assert _titles(apply_filters(listings, level="advanced")) == ["Data Intern"]
    assert _titles(apply_filters(listings, company="ACME")) == ["Data Intern", "Chip Intern"]


def test_keyword_searches_title_description_and_company(listings):
    assert _titles(apply_filters(listings, keyword="verilog")) == ["Chip Intern"]
    assert _titles(apply_filters(listings, keyword="zeta")) == ["Backend Intern"]
    assert _titles(apply_filters(listings, keyword="intern")) == _titles(listings)


def test_date_window(listings):
    assert _titles(apply_filters(listings, open_from="2030-01-10")) == ["Data Intern", "Chip Intern"]
    assert _titles(apply_filters(listings, close_by=date(2030, 3, 1))) == ["Backend Intern", "Data Intern"]


@pytest.mark.parametrize("sort, expected", [
    ("closing_date", ["Data Intern", "Backend Intern", "Chip Intern"]),
    ("OPENING_DATE", ["Backend Intern", "Chip Intern", "Data Intern"]),
    ("company", ["Chip Intern", "Data Intern", "Backend Intern"]),
    ("level", ["Backend Intern", "Chip Intern", "Data Intern"]),
])
def test_sort_orders(listings, sort, expected):
    assert _titles(apply_filters(listings, sort=sort)) == expected


def test_sort_by_id_restores_creation_order(listings):
    shuffled = list(reversed(listings))
    assert apply_filters(shuffled, sort="ID") == listings


def test_invalid_values_are_ignored(listings):
    rows = apply_filters(listings, status="maybe", open_from="not-a-date", sort="by-mood")
    assert rows == listings


def test_criteria_from_args_drops_blank_and_unknown_keys():
    args = {"major": " CSC ", "level": "", "page": "2", "sort": "ID"}
    assert criteria_from_args(args) == {"major": "CSC", "sort": "ID"}
