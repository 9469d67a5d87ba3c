"""Filtering and sorting of internship listings for every role's list views."""

from typing import Iterable, Mapping, Optional

from ..models.internship import Internship
from ..utils.constants import InternshipLevel, InternshipStatus
from .common import parse_date

FILTER_KEYS = ("status", "major", "level", "open_from", "close_by", "company", "keyword", "sort")

_LEVEL_RANK = {lvl: rank for rank, lvl in enumerate(InternshipLevel)}

SORT_KEYS = {
    "ID": lambda i: i.listing_id,
    "CLOSING_DATE": lambda i: (i.close_date, i.listing_id),
    "OPENING_DATE": lambda i: (i.open_date, i.listing_id),
    "COMPANY": lambda i: (i.company_name.lower(), i.title.lower()),
    "ALPHABETICAL": lambda i: (i.company_name.lower(), i.title.lower()),
    "LEVEL": lambda i: (_LEVEL_RANK[i.level], i.title.lower()),
}


def _lc(s) -> str:
    return (s or "").strip().lower()


def _date_or_none(value):
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError:
        return None


def criteria_from_args(args: Mapping) -> dict:
    """Pick the known, non-empty filter keys out of a query-string mapping."""
    q = {k: (args.get(k) or "").strip() for k in FILTER_KEYS}
    return {k: v for k, v in q.items() if v}


def apply_filters(listings: Iterable[Internship], status=None, major=None, level=None,
                  open_from=None, close_by=None, company=None, keyword=None,
                  sort: Optional[str] = None) -> list:
    """
    Filter then sort listings. Matching is case-insensitive:
      - status: AVAILABLE / FILLED, or a lifecycle status name (PENDING, ...)
      - major, level, company: exact match
      - open_from: opening on or after; close_by: closing on or before
      - keyword: substring of title, description or company name
      - sort: ID, CLOSING_DATE, OPENING_DATE, COMPANY, LEVEL or ALPHABETICAL
    Unrecognised values are ignored; without ``sort`` the input order is kept.
    """
    res = list(listings)

    st = _lc(status).upper()
    if st == "AVAILABLE":
        res = [i for i in res if not i.is_filled()]
    elif st == "FILLED":
        res = [i for i in res if i.is_filled()]
    elif st in InternshipStatus.__members__:
        res = [i for i in res if i.status is InternshipStatus[st]]

    if _lc(major):
        res = [i for i in res if _lc(i.preferred_major) == _lc(major)]
    if _lc(level):
        res = [i for i in res if i.level.value.lower() == _lc(level)]
    if _lc(company):
        res = [i for i in res if _lc(i.company_name) == _lc(company)]

    kw = _lc(keyword)
    if kw:
        res = [i for i in res
               if kw in _lc(i.title) or kw in _lc(i.description) or kw in _lc(i.company_name)]

    min_open = _date_or_none(open_from)
    if min_open is not None:
        res = [i for i in res if i.open_date >= min_open]
    max_close = _date_or_none(close_by)
    if max_close is not None:
        res = [i for i in res if i.close_date <= max_close]

    key = SORT_KEYS.get(_lc(sort).upper())
    if key is not None:
        res.sort(key=key)
    return res
