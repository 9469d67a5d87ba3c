import sys, os, pathlib

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

os.environ.setdefault("APP_ENV", "test")

from datetime import date, timedelta

import pytest

from internship_portal.models.registry import UserRegistry
from internship_portal.models.store import PlacementStore
from internship_portal.models.user import Student, Staff, CompanyRepresentative
from internship_portal.utils.constants import ApprovalStatus, InternshipLevel, InternshipStatus
from internship_portal.utils.security import generate_hash

PASSWORD = "Secret123"
# hashing is slow; hash once per session
PASSWORD_HASH = generate_hash(PASSWORD)


@pytest.fixture(autouse=True)
def registry(monkeypatch):
    """
    Swap in a fresh registry singleton for every test, so services that
    call UserRegistry.instance() see the same object as the test.
    """
    reg = UserRegistry()
    monkeypatch.setattr(UserRegistry, "_inst", reg)
    return reg


@pytest.fixture(autouse=True)
def store(monkeypatch):
    st = PlacementStore()
    monkeypatch.setattr(PlacementStore, "_inst", st)
    return st


@pytest.fixture
def student(registry):
    s = Student(user_id="U2310001A", name="Wei Ling", password_hash=PASSWORD_HASH,
                email="weiling@e.ntu.edu.sg", year_of_study=2, major="CSC")
    registry.register(s)
    return s


@pytest.fixture
def senior(registry):
    s = Student(user_id="U2310002B", name="Jia Hao", password_hash=PASSWORD_HASH,
                email="jiahao@e.ntu.edu.sg", year_of_study=3, major="CSC")
    registry.register(s)
    return s


@pytest.fixture
def staff(registry):
    t = Staff(user_id="sng001", name="Dr. Sng", password_hash=PASSWORD_HASH,
              email="sng001@ntu.edu.sg", staff_department="CCDS")
    registry.register(t)
    return t


@pytest.fixture
def rep(registry):
    r = CompanyRepresentative(user_id="hr@acme.com", name="Alice", password_hash=PASSWORD_HASH,
                              email="hr@acme.com", company_name="Acme", department="HR",
                              position="Recruiter", approval_status=ApprovalStatus.APPROVED)
    registry.register(r)
    return r


@pytest.fixture
def listing_payload():
    today = date.today()
    return {
        "title": "Backend Intern",
        "description": "APIs",
        "level": "Basic",
        "preferred_major": "CSC",
        "open_date": (today - timedelta(days=1)).isoformat(),
        "close_date": (today + timedelta(days=30)).isoformat(),
        "num_slots": 2,
    }


@pytest.fixture
def make_listing(store, rep):
    """Factory for listings owned by ``rep``, created directly in the store."""

    def _make(level=InternshipLevel.BASIC, major="CSC", slots=2, approve=True):
        today = date.today()
        listing = store.create_listing(
            title="Intern", description="", level=level, preferred_major=major,
            open_date=today - timedelta(days=1), close_date=today + timedelta(days=30),
            company_name=rep.company_name, creator_id=rep.user_id, num_slots=slots,
        )
        if approve:
            store.set_listing_status(listing.listing_id, InternshipStatus.APPROVED)
        return listing

    return _make


@pytest.fixture
def client():
    from internship_portal import create_app
    app = create_app({"TESTING": True, "SECRET_KEY": "test", "SEED_DEMO_DATA": False})
    with app.test_client() as c:
        yield c

