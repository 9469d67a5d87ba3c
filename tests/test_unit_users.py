import pytest

from internship_portal.models.user import User, Student, Staff, CompanyRepresentative
from internship_portal.utils.constants import ApprovalStatus

from conftest import PASSWORD, PASSWORD_HASH


def test_student_profile_shows_year_and_major(capsys):
    s = Student(user_id="S1", name="Ann", password_hash=PASSWORD_HASH, year_of_study=2, major="CS")
    assert s.display_profile() is None
    out = capsys.readouterr().out
    assert "Year: 2" in out
    assert "Major: CS" in out
    assert out.strip() == s.profile_text()


def test_staff_profile_shows_department(capsys):
    t = Staff(user_id="T1", name="Tom", password_hash=PASSWORD_HASH, staff_department="IT")
    t.display_profile()
    assert "Dept: IT" in capsys.readouterr().out
    assert t.get_user_type() == "Staff"


def test_type_tags_are_unique_per_variant():
    tags = {Student.user_type, Staff.user_type, CompanyRepresentative.user_type}
    assert len(tags) == 3
    assert CompanyRepresentative.user_type.value == "CompanyRepresentative"


def test_user_base_is_abstract():
    with pytest.raises(TypeError):
        User(user_id="X", name="x", password_hash="")


@pytest.mark.parametrize("uid", [None, "", "   "])
def test_missing_user_id_fails_construction(uid):
    with pytest.raises(ValueError):
        Staff(user_id=uid, name="n", password_hash="", staff_department="IT")


@pytest.mark.parametrize("year", [0, -1, "2", True])
def test_student_year_must_be_positive_int(year):
    with pytest.raises(ValueError):
        Student(user_id="S1", name="n", password_hash="", year_of_study=year, major="CS")


def test_identity_and_student_fields_are_read_only():
    s = Student(user_id="S1", name="n", password_hash="", year_of_study=2, major="CS")
    for field, value in (("user_id", "S2"), ("year_of_study", 3), ("major", "EEE")):
        with pytest.raises(AttributeError):
            setattr(s, field, value)
    s.set_name("Renamed")
    assert s.name == "Renamed"


def test_staff_department_is_mutable_but_not_blank():
    t = Staff(user_id="T1", name="Tom", password_hash="", staff_department="IT")
    t.set_department("CCDS")
    assert t.staff_department == "CCDS"
    with pytest.raises(ValueError):
        t.set_department("  ")


def test_change_password_requires_old_password():
    t = Staff(user_id="T1", name="Tom", password_hash=PASSWORD_HASH, staff_department="IT")
    with pytest.raises(ValueError):
        t.change_password("wrong", "NewPass1")
    t.change_password(PASSWORD, "NewPass1")
    assert t.verify_password("NewPass1")
    assert not t.verify_password(PASSWORD)


def test_set_email_validates_format():
    t = Staff(user_id="T1", name="Tom", password_hash="", staff_department="IT")
    with pytest.raises(ValueError):
        t.set_email("not-an-email")
    t.set_email("tom@ntu.edu.sg")
    assert t.email == "tom@ntu.edu.sg"


def test_company_rep_defaults_to_pending():
    r = CompanyRepresentative(user_id="a@b.com", name="A", password_hash="", company_name="Acme")
    assert r.approval_status is ApprovalStatus.PENDING
    assert not r.approved
    assert "Pending Approval" in r.profile_text()


def test_to_dict_never_exposes_credential():
    s = Student(user_id="S1", name="n", password_hash=PASSWORD_HASH, year_of_study=1, major="CS")
    d = s.to_dict()
    assert "password_hash" not in d
    assert d["role"] == "Student"
