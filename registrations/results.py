"""
Outcomes returned by the registrations core.

Expected failures are values, not exceptions: every core operation returns either
``Ok`` or one of the error kinds below. The HTTP layer turns an error kind into a
status code and a machine-readable body with ``as_dict()``.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Ok:
    """Successful outcome, optionally carrying the affected object."""

    value: Any = None

    ok: ClassVar[bool] = True


OK = Ok()


@dataclass(frozen=True)
class Error:
    """Base class of the expected failure kinds."""

    ok: ClassVar[bool] = False
    kind: ClassVar[str] = "error"
    http_status: ClassVar[int] = 400

    @property
    def detail(self) -> str:
        return self.kind

    def as_dict(self) -> dict:
        data = {"kind": self.kind, "detail": self.detail}
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            data[field.name] = list(value) if isinstance(value, tuple) else value
        return data


@dataclass(frozen=True)
class Unauthenticated(Error):
    kind: ClassVar[str] = "unauthenticated"
    http_status: ClassVar[int] = 401

    @property
    def detail(self) -> str:
        return "Authentication credentials were not provided or are invalid."


@dataclass(frozen=True)
class Forbidden(Error):
    missing_permissions: tuple = ()

    kind: ClassVar[str] = "forbidden"
    http_status: ClassVar[int] = 403

    @property
    def detail(self) -> str:
        return "Missing permissions: {}.".format(", ".join(self.missing_permissions))


@dataclass(frozen=True)
class Incomplete(Error):
    """The student profile lacks mandatory fields."""

    missing_fields: tuple = ()

    kind: ClassVar[str] = "incomplete"

    @property
    def detail(self) -> str:
        return "Please complete your profile before enrollment."


@dataclass(frozen=True)
class Missing(Error):
    """Required document types without an approved document."""

    document_types: tuple = ()

    kind: ClassVar[str] = "missing_documents"

    @property
    def detail(self) -> str:
        return "Required documents not approved: {}.".format(", ".join(self.document_types))


@dataclass(frozen=True)
class IllegalTransition(Error):
    current_state: str = ""
    requested_action: str = ""

    kind: ClassVar[str] = "illegal_transition"

    @property
    def detail(self) -> str:
        return f"Cannot {self.requested_action} an enrollment in state {self.current_state}."


@dataclass(frozen=True)
class NotFound(Error):
    entity: str = ""
    identifier: Any = None

    kind: ClassVar[str] = "not_found"
    http_status: ClassVar[int] = 404

    @property
    def detail(self) -> str:
        return f"{self.entity.capitalize()} {self.identifier} not found."


@dataclass(frozen=True)
class AlreadyEnrolled(Error):
    student_id: Any = None
    course_id: Any = None

    kind: ClassVar[str] = "already_enrolled"
    http_status: ClassVar[int] = 409

    @property
    def detail(self) -> str:
        return "Already enrolled in this course."


@dataclass(frozen=True)
class EnrollmentLimitReached(Error):
    active: int = 0
    maximum: int = 0

    kind: ClassVar[str] = "enrollment_limit_reached"

    @property
    def detail(self) -> str:
        return f"You can only have {self.maximum} active enrollments at a time."


@dataclass(frozen=True)
class AlreadyReviewed(Error):
    document_id: Any = None
    status: str = ""

    kind: ClassVar[str] = "already_reviewed"
    http_status: ClassVar[int] = 409

    @property
    def detail(self) -> str:
        return f"Document {self.document_id} was already reviewed ({self.status})."


@dataclass(frozen=True)
class InvalidReviewStatus(Error):
    status: str = ""

    kind: ClassVar[str] = "invalid_review_status"

    @property
    def detail(self) -> str:
        return f"Invalid review status {self.status!r}. Use APPROVED or REJECTED."
