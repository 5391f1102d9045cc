# pylint: disable=redefined-outer-name,unused-argument
"""
Tests for the admission gates and the document review.
"""

import pytest

from registrations.gates import check_documents_approved, check_profile_complete, review_document
from registrations.models import Document
from registrations.results import OK, AlreadyReviewed, Incomplete, InvalidReviewStatus, Missing, NotFound

from .factories import DocumentFactory, StudentFactory, UserFactory


@pytest.mark.django_db
class TestCheckDocumentsApproved:
    """Tests for the document gate."""

    def test_all_types_approved(self, eligible_student):
        """Test that a student with every type approved passes."""
        assert check_documents_approved(eligible_student.pk) is OK

    def test_no_documents(self, student):
        """Test that a student without documents misses every required type."""
        result = check_documents_approved(student.pk)

        assert result == Missing(document_types=("PHOTO", "ID_CARD", "SCHOOL_CERTIFICATE", "PAYMENT_RECEIPT"))

    def test_missing_names_exactly_the_unapproved_types(self, student):
        """
        GIVEN a student with an approved PHOTO, a pending ID_CARD and a rejected SCHOOL_CERTIFICATE
        WHEN the document gate is checked
        THEN the result names ID_CARD, SCHOOL_CERTIFICATE and PAYMENT_RECEIPT
        """
        DocumentFactory(student=student, type=Document.Type.PHOTO, status=Document.Status.APPROVED)
        DocumentFactory(student=student, type=Document.Type.ID_CARD, status=Document.Status.PENDING)
        DocumentFactory(student=student, type=Document.Type.SCHOOL_CERTIFICATE, status=Document.Status.REJECTED)

        result = check_documents_approved(student.pk)

        assert isinstance(result, Missing)
        assert set(result.document_types) == {"ID_CARD", "SCHOOL_CERTIFICATE", "PAYMENT_RECEIPT"}

    def test_one_approved_document_of_a_type_is_enough(self, eligible_student):
        """Test that a rejected extra document does not hide an approved one of the same type."""
        DocumentFactory(student=eligible_student, type=Document.Type.PHOTO, status=Document.Status.REJECTED)

        assert check_documents_approved(eligible_student.pk) is OK

    def test_required_types_follow_settings(self, student, settings):
        """Test that the required document types can be configured."""
        settings.REGISTRATIONS_REQUIRED_DOCUMENTS = [Document.Type.PHOTO]
        DocumentFactory(student=student, type=Document.Type.PHOTO, status=Document.Status.APPROVED)

        assert check_documents_approved(student.pk) is OK

    def test_unknown_student(self):
        """Test that an unknown student is reported as not found."""
        assert check_documents_approved(999999) == NotFound("student", 999999)


@pytest.mark.django_db
class TestCheckProfileComplete:
    """Tests for the profile-completeness gate."""

    def test_complete_profile(self, student):
        """Test that a fully filled profile passes."""
        assert check_profile_complete(student.pk) is OK

    def test_fresh_profile_is_incomplete(self):
        """
        GIVEN a student account created with only its names
        WHEN the profile gate is checked
        THEN the result lists every other mandatory field, in declaration order
        """
        user = UserFactory(first_name="Amina", last_name="Kaci")

        result = check_profile_complete(user.student_profile.pk)

        assert result == Incomplete(
            missing_fields=(
                "date_of_birth",
                "gender",
                "phone_number",
                "nationality",
                "language",
                "education_level",
                "study_location",
            )
        )

    def test_blank_values_count_as_missing(self):
        """Test that whitespace-only values do not complete a field."""
        student = StudentFactory(nationality="   ", study_location="")

        result = check_profile_complete(student.pk)

        assert result == Incomplete(missing_fields=("nationality", "study_location"))

    def test_address_is_optional(self):
        """Test that the address is not a mandatory field."""
        assert check_profile_complete(StudentFactory(address="").pk) is OK

    def test_unknown_student(self):
        """Test that an unknown student is reported as not found."""
        assert isinstance(check_profile_complete(999999), NotFound)


@pytest.mark.django_db
class TestReviewDocument:
    """Tests for the one-shot document review."""

    def test_approve(self, student, admin_user):
        """Test that approving records the reviewer and the review time."""
        document = DocumentFactory(student=student)

        result = review_document(document.pk, Document.Status.APPROVED, admin_user)

        assert result.ok
        assert result.value.status == Document.Status.APPROVED
        assert result.value.reviewed_by == admin_user
        assert result.value.reviewed_at is not None

    def test_review_happens_once(self, student, admin_user):
        """
        GIVEN a rejected document
        WHEN a reviewer tries to approve it
        THEN the result is AlreadyReviewed
        AND the document keeps its first decision
        """
        document = DocumentFactory(student=student)
        review_document(document.pk, Document.Status.REJECTED, admin_user)

        result = review_document(document.pk, Document.Status.APPROVED, admin_user)

        assert result == AlreadyReviewed(document_id=document.pk, status=Document.Status.REJECTED)
        document.refresh_from_db()
        assert document.status == Document.Status.REJECTED

    def test_pending_is_not_a_review_status(self, student, admin_user):
        """Test that a document cannot be reviewed back to Pending."""
        document = DocumentFactory(student=student)

        result = review_document(document.pk, Document.Status.PENDING, admin_user)

        assert isinstance(result, InvalidReviewStatus)

    def test_unknown_document(self, admin_user):
        """Test that an unknown document is reported as not found."""
        assert review_document(999999, Document.Status.APPROVED, admin_user) == NotFound("document", 999999)

    def test_approval_opens_the_document_gate(self, student, admin_user):
        """Test that approving the last missing type makes the document gate pass."""
        for doc_type in Document.Type.values[:-1]:
            DocumentFactory(student=student, type=doc_type, status=Document.Status.APPROVED)
        receipt = DocumentFactory(student=student, type=Document.Type.PAYMENT_RECEIPT)
        assert not check_documents_approved(student.pk).ok

        review_document(receipt.pk, Document.Status.APPROVED, admin_user)

        assert check_documents_approved(student.pk) is OK
