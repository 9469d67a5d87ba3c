"""Demo accounts and listings for local runs."""
from datetime import timedelta
from typing import Optional

from .models.registry import UserRegistry
from .models.store import PlacementStore
from .services.common import _registry, _store, user_from_dict
from .utils.constants import InternshipStatus, InternshipLevel
from .utils.filters import today_local

DEMO_PASSWORD = "password"

DEMO_USERS = [
    {"role": "Student", "user_id": "U2310001A", "name": "Tan Wei Ling", "email": "weiling@e.ntu.edu.sg",
     "year_of_study": 2, "major": "CSC"},
    {"role": "Student", "user_id": "U2310002B", "name": "Ng Jia Hao", "email": "jiahao@e.ntu.edu.sg",
     "year_of_study": 3, "major": "EEE"},
    {"role": "Staff", "user_id": "sng001", "name": "Dr. Sng", "email": "sng001@ntu.edu.sg",
     "staff_department": "CCDS"},
    {"role": "CompanyRepresentative", "user_id": "hr@acme.com", "name": "Alice Lim", "email": "hr@acme.com",
     "company_name": "Acme Pte Ltd", "department": "HR", "position": "Recruiter",
     "approval_status": "APPROVED"},
]


def seed_demo_data(registry: Optional[UserRegistry] = None, store: Optional[PlacementStore] = None) -> int:
    """
    Register demo users (skipping IDs already present) and, on an empty
    store, one approved listing. Returns the number of users added.
    """
    reg = _registry(registry)
    st = _store(store)

    added = 0
    for record in DEMO_USERS:
        if reg.exists(record["user_id"]):
            continue
        if reg.register(user_from_dict(dict(record, password=DEMO_PASSWORD))):
            added += 1

    if not st.listings():
        today = today_local()
        listing = st.create_listing(
            title="Software Engineering Intern",
            description="Backend services team.",
            level=InternshipLevel.BASIC,
            preferred_major="CSC",
            open_date=today - timedelta(days=7),
            close_date=today + timedelta(days=30),
            company_name="Acme Pte Ltd",
            creator_id="hr@acme.com",
            num_slots=2,
        )
        st.set_listing_status(listing.listing_id, InternshipStatus.APPROVED)

    print(f"[Seed] Added {added} demo users; {len(st.listings())} listings in store")
    return added
