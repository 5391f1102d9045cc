"""
Admission gates checked before an enrollment is created, and the document review they depend on.
"""

import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .models import Document, Student
from .results import (
    OK,
    AlreadyReviewed,
    Incomplete,
    InvalidReviewStatus,
    Missing,
    NotFound,
    Ok,
)
from .settings import DEFAULT_REQUIRED_DOCUMENTS

logger = logging.getLogger(__name__)

REVIEW_STATUSES = (Document.Status.APPROVED, Document.Status.REJECTED)


def required_document_types() -> tuple[str, ...]:
    """Return the configured required document types, in reporting order."""
    return tuple(getattr(settings, "REGISTRATIONS_REQUIRED_DOCUMENTS", DEFAULT_REQUIRED_DOCUMENTS))


def missing_document_types(student: Student) -> list[str]:
    """Return the required types for which the student has no approved document."""
    approved = set(
        student.documents.filter(status=Document.Status.APPROVED).values_list("type", flat=True)
    )
    return [doc_type for doc_type in required_document_types() if doc_type not in approved]


def check_documents_approved(student_id):
    """
    Check that every required document type has at least one approved document.

    Returns ``OK``, ``Missing`` naming exactly the types still lacking an approved
    document, or ``NotFound`` if the student does not exist.
    """
    student = Student.objects.filter(pk=student_id).first()
    if student is None:
        return NotFound("student", student_id)

    missing = missing_document_types(student)
    if missing:
        logger.warning(
            "[Registrations] Student %s is missing approved documents: %s",
            student_id,
            ", ".join(missing),
        )
        return Missing(document_types=tuple(missing))
    return OK


def check_profile_complete(student_id):
    """
    Check that all mandatory profile fields of the student are filled in.

    Returns ``OK``, ``Incomplete`` listing the empty fields, or ``NotFound``.
    """
    student = Student.objects.filter(pk=student_id).first()
    if student is None:
        return NotFound("student", student_id)

    missing = student.missing_profile_fields()
    if missing:
        logger.warning("[Registrations] Student %s has an incomplete profile: %s", student_id, ", ".join(missing))
        return Incomplete(missing_fields=tuple(missing))
    return OK


def review_document(document_id, status: str, reviewer):
    """
    Approve or reject a pending document.

    A review happens once: a document already approved or rejected yields
    ``AlreadyReviewed`` and is left untouched.
    """
    if status not in REVIEW_STATUSES:
        return InvalidReviewStatus(status=status)

    with transaction.atomic():
        document = Document.objects.select_for_update().filter(pk=document_id).first()
        if document is None:
            return NotFound("document", document_id)
        if document.status != Document.Status.PENDING:
            return AlreadyReviewed(document_id=document.pk, status=document.status)

        now = timezone.now()
        updated = Document.objects.filter(pk=document.pk, status=Document.Status.PENDING).update(
            status=status,
            reviewed_by=reviewer,
            reviewed_at=now,
            modified=now,
        )
        if not updated:
            current = Document.objects.values_list("status", flat=True).get(pk=document.pk)
            return AlreadyReviewed(document_id=document.pk, status=current)

    logger.info(
        "[Registrations] Document %s (%s) of student %s reviewed as %s by %s",
        document.pk,
        document.type,
        document.student_id,
        status,
        getattr(reviewer, "pk", None),
    )
    return Ok(Document.objects.get(pk=document.pk))
