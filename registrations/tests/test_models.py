# pylint: disable=redefined-outer-name,unused-argument
"""
Tests for the registrations models.
"""

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.db.models import ProtectedError

from registrations.lifecycle import Action, apply_transition
from registrations.gates import review_document
from registrations.models import Document, Enrollment, RegistrationHistory, RegistrationStatus, Student, Teacher
from registrations.roles import Role

from .factories import AdminFactory, DocumentFactory, StudentFactory, TeacherFactory, TeacherUserFactory, UserFactory


@pytest.mark.django_db
class TestUser:
    """Tests for the User model."""

    def test_email_is_normalized(self):
        """Test that the email is stored lowercase without surrounding spaces."""
        user = UserFactory(email="  Amina.Kaci@Example.COM ")

        user.refresh_from_db()
        assert user.email == "amina.kaci@example.com"

    def test_email_is_unique(self):
        """Test that two accounts cannot share an email, whatever its case."""
        UserFactory(email="student@example.com")

        with pytest.raises(IntegrityError):
            UserFactory(email="Student@Example.com")

    def test_role_must_match_the_linked_profile(self, student):
        """Test that a student account cannot be turned into a teacher account."""
        student.user.role = Role.TEACHER

        with pytest.raises(ValidationError):
            student.user.full_clean()

    def test_role_change_is_refused_on_save(self, student):
        """
        GIVEN a student account with its profile
        WHEN its role is changed to admin and saved
        THEN the save is refused and the stored role is unchanged
        """
        user = student.user
        user.role = Role.ADMIN

        with pytest.raises(ValidationError):
            user.save()

        user.refresh_from_db()
        assert user.role == Role.STUDENT

    def test_profile_less_role_change_is_allowed(self):
        """Test that an account without a profile can change role."""
        user = AdminFactory()
        user.role = Role.TEACHER
        user.save()

        user.refresh_from_db()
        assert user.role == Role.TEACHER

    def test_admin_has_no_profile(self):
        """Test that admin accounts are created without a profile."""
        admin = AdminFactory()

        assert not Student.objects.filter(user=admin).exists()
        assert not Teacher.objects.filter(user=admin).exists()


@pytest.mark.django_db
class TestProfiles:
    """Tests for the Student and Teacher profiles."""

    def test_student_profile_created_with_account(self):
        """Test that a student account gets its profile with the account names."""
        user = UserFactory(first_name="Amina", last_name="Kaci")

        assert user.student_profile.full_name == "Amina Kaci"
        assert user.student_profile.missing_profile_fields()

    def test_teacher_profile_requires_teacher_account(self):
        """Test that a teacher profile cannot be linked to a student account."""
        with pytest.raises(ValidationError):
            Teacher.objects.create(user=UserFactory(), specialization="Maths")

    def test_student_profile_requires_student_account(self):
        """Test that a student profile cannot be linked to a teacher account."""
        with pytest.raises(ValidationError):
            Student.objects.create(user=TeacherUserFactory())

    def test_teacher_profile(self):
        """Test creating a teacher profile."""
        teacher = TeacherFactory(first_name="Karim", last_name="Benali")

        assert str(teacher) == "Karim Benali"
        assert teacher.user.teacher_profile == teacher

    def test_for_user(self, student):
        """Test that profiles can be looked up by their account."""
        StudentFactory()

        assert list(Student.objects.for_user(student.user)) == [student]


@pytest.mark.django_db
class TestEnrollment:
    """Tests for the Enrollment model guards."""

    def test_new_enrollment_must_be_pending(self, eligible_student, course):
        """Test that an enrollment cannot be created in a later state."""
        with pytest.raises(ValidationError):
            Enrollment.objects.create(
                student=eligible_student, course=course, registration_status=RegistrationStatus.PAID
            )

    def test_status_cannot_be_saved_directly(self, enrollment):
        """
        GIVEN a pending enrollment
        WHEN its status is changed and saved through the model
        THEN the save is refused and the stored state is unchanged
        """
        enrollment.registration_status = RegistrationStatus.FINISHED

        with pytest.raises(ValidationError):
            enrollment.save()

        assert Enrollment.objects.get(pk=enrollment.pk).registration_status == RegistrationStatus.PENDING

    def test_other_fields_can_be_saved(self, enrollment):
        """Test that saving an enrollment without a status change is allowed."""
        enrollment.save()

    def test_engine_change_does_not_block_later_saves(self, enrollment, admin_user):
        """Test that an instance reloaded after a transition can be saved again."""
        apply_transition(enrollment.pk, Action.VALIDATE, actor=admin_user)

        reloaded = Enrollment.objects.get(pk=enrollment.pk)
        reloaded.save()

    def test_cannot_be_deleted(self, enrollment):
        """Test that enrollments are never deleted."""
        with pytest.raises(ValidationError):
            enrollment.delete()

        assert Enrollment.objects.filter(pk=enrollment.pk).exists()


@pytest.mark.django_db
class TestRegistrationHistory:
    """Tests for the append-only history."""

    def test_rows_cannot_be_updated(self, enrollment):
        """Test that a recorded row cannot be changed."""
        row = enrollment.history.get()
        row.new_status = RegistrationStatus.FINISHED

        with pytest.raises(ValidationError):
            row.save()

    def test_rows_cannot_be_deleted(self, enrollment):
        """Test that a recorded row cannot be deleted."""
        with pytest.raises(ValidationError):
            enrollment.history.get().delete()

        assert RegistrationHistory.objects.filter(enrollment=enrollment).count() == 1

    def test_string_representation(self, enrollment):
        """Test the string representation of the creation row."""
        assert str(enrollment.history.get()) == f"from nothing to PENDING for {enrollment}"

    def test_actor_cannot_be_deleted(self, enrollment, admin_user):
        """
        GIVEN an admin who validated an enrollment
        WHEN the admin account is deleted
        THEN the deletion is refused and the history still names the admin
        """
        apply_transition(enrollment.pk, Action.VALIDATE, actor=admin_user)

        with pytest.raises(ProtectedError):
            admin_user.delete()

        assert enrollment.history.last().changed_by_id == admin_user.pk


@pytest.mark.django_db
def test_reviewer_cannot_be_deleted(student, admin_user):
    """Test that the account that reviewed a document cannot be deleted."""
    document = DocumentFactory(student=student)
    review_document(document.pk, Document.Status.APPROVED, admin_user)

    with pytest.raises(ProtectedError):
        admin_user.delete()

    document.refresh_from_db()
    assert document.reviewed_by_id == admin_user.pk
