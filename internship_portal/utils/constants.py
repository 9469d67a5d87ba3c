# internship_portal/utils/constants.py

"""
Global constants for user tags, statuses, and placement limits.
These constants are imported by both models and services.
"""

from enum import Enum

# Timezone used for application and report timestamps
DEFAULT_TZ = "Asia/Singapore"
DATE_FMT = "%Y-%m-%d"


class UserType(str, Enum):
    """Stable literal tag per user variant; callers branch on this value."""
    STUDENT = "Student"
    STAFF = "Staff"
    COMPANY_REPRESENTATIVE = "CompanyRepresentative"


class InternshipStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    FILLED = "FILLED"


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESSFUL = "SUCCESSFUL"
    UNSUCCESSFUL = "UNSUCCESSFUL"
    ACCEPTED = "ACCEPTED"
    WITHDRAWAL_REQUESTED = "WITHDRAWAL_REQUESTED"
    WITHDRAWN = "WITHDRAWN"
    REJECTED = "REJECTED"


class ApprovalStatus(str, Enum):
    """Company representative account approval."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def label(self) -> str:
        if self is ApprovalStatus.PENDING:
            return "Pending Approval"
        return self.value.capitalize()


class InternshipLevel(str, Enum):
    BASIC = "Basic"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


# --- Limits ---
MAX_APPLICATIONS = 3
MAX_LISTINGS = 5
MAX_SLOTS = 10
MIN_YEAR_FOR_ADVANCED = 3

FIRST_LISTING_ID = 100000
FIRST_APPLICATION_ID = 500000

# Application states that occupy a slot on the listing
FILLING_STATES = {ApplicationStatus.SUCCESSFUL, ApplicationStatus.ACCEPTED}
WITHDRAWABLE_STATES = {
    ApplicationStatus.PENDING,
    ApplicationStatus.SUCCESSFUL,
    ApplicationStatus.ACCEPTED,
}
