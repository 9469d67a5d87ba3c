"""
Custom exception classes for the Internship Portal.

Each exception keeps the offending values as attributes (entity type, id,
current/required status) next to its message, so controllers can render a
friendly response and tests can assert on the data instead of the text.
"""


class PortalError(Exception):
    """Base class for expected domain failures."""

    status_code = 400

    def __init__(self, message: str = "Error: request failed") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "message": self.message}


class IDNotFoundError(PortalError):
    """Raised when a listing, application or user ID cannot be found."""

    status_code = 404

    def __init__(self, entity: str, entity_id) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"Couldn't find {entity} with ID {entity_id}.")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update(entity=self.entity, entity_id=self.entity_id)
        return d


class WrongStatusError(PortalError):
    """Raised when an entity is not in the status an operation needs."""

    def __init__(self, current, required, entity: str = "Application") -> None:
        self.current = current
        self.required = required
        self.entity = entity
        cur = getattr(current, "value", current)
        if isinstance(required, (set, frozenset, list, tuple)):
            req = "/".join(sorted(getattr(r, "value", r) for r in required))
        else:
            req = getattr(required, "value", required)
        super().__init__(f"{entity} is {cur}, needs to be {req}.")

    def to_dict(self) -> dict:
        d = super().to_dict()
        req = self.required
        if isinstance(req, (set, frozenset, list, tuple)):
            req = sorted(getattr(r, "value", r) for r in req)
        else:
            req = getattr(req, "value", req)
        d.update(current=getattr(self.current, "value", self.current), required=req)
        return d


class TooManyApplicationsError(PortalError):
    """Raised when a student already holds the maximum number of applications."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Maximum of {limit} applications allowed.")


class ListingLimitError(PortalError):
    """Raised when a company representative already owns the maximum number of listings."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Maximum of {limit} internship listings allowed.")


class NotEligibleError(PortalError):
    """Raised when a student may not apply for a listing."""

    def __init__(self, reason: str = "You are not eligible for this internship.") -> None:
        self.reason = reason
        super().__init__(reason)


class AuthenticationError(PortalError):
    """Raised on unknown ID, wrong password, or an unapproved account."""

    status_code = 401

    def __init__(self, reason: str = "Invalid credentials.") -> None:
        self.reason = reason
        super().__init__(reason)
