"""
Identity and profile models: users, student and teacher profiles, student documents.
"""

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _
from model_utils.models import TimeStampedModel

from ..roles import Role


class User(AbstractUser):
    """
    An account able to sign in.

    The role decides the permission set (see ``registrations.roles``) and which profile,
    if any, may be linked to the account: students own a ``Student`` profile, teachers a
    ``Teacher`` profile and admins neither.

    .. pii: email, names
    .. pii_types: email_address, name
    .. pii_retirement: local_api
    """

    email = models.EmailField(_("email address"), unique=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.STUDENT, db_index=True)

    def __str__(self):
        return self.email or self.username

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        self._check_role_matches_profile()
        super().save(*args, **kwargs)

    def clean(self):
        super().clean()
        self._check_role_matches_profile()

    def _check_role_matches_profile(self):
        """Refuse a role that does not fit the profile already linked to the account."""
        if not self.pk:
            return
        if self.role != Role.STUDENT and Student.objects.filter(user_id=self.pk).exists():
            raise ValidationError({"role": _("Only student accounts can own a student profile.")})
        if self.role != Role.TEACHER and Teacher.objects.filter(user_id=self.pk).exists():
            raise ValidationError({"role": _("Only teacher accounts can own a teacher profile.")})


class ProfileQuerySet(models.QuerySet):
    def for_user(self, user):
        return self.filter(user=user) if user.is_authenticated else self.none()


class LinkedProfile(TimeStampedModel):
    """Fields and checks shared by the profiles linked to a user account."""

    owner_role: str = ""

    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    phone_number = models.CharField(max_length=32, blank=True)

    objects = ProfileQuerySet.as_manager()

    class Meta:
        abstract = True

    def clean(self):
        super().clean()
        if self.user_id and self.user.role != self.owner_role:
            raise ValidationError(
                {"user": _("A %(profile)s profile requires a %(role)s account.")
                 % {"profile": self._meta.verbose_name, "role": self.owner_role}}
            )

    def save(self, *args, **kwargs):
        if self.user_id and self.user.role != self.owner_role:
            raise ValidationError(
                f"{self._meta.verbose_name} profile cannot be linked to a {self.user.role} account."
            )
        super().save(*args, **kwargs)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Student(LinkedProfile):
    """
    A learner's profile.

    The profile is created together with a student account (see ``receivers``) and is
    completed later by the student. Enrollments can only be requested once every field
    in ``REQUIRED_PROFILE_FIELDS`` is filled in.

    .. pii: names, date of birth, contact and identity details
    .. pii_types: name, birth_date, phone_number, other
    .. pii_retirement: local_api
    """

    class Gender(models.TextChoices):
        MALE = "MALE", _("Male")
        FEMALE = "FEMALE", _("Female")

    REQUIRED_PROFILE_FIELDS = (
        "first_name",
        "last_name",
        "date_of_birth",
        "gender",
        "phone_number",
        "nationality",
        "language",
        "education_level",
        "study_location",
    )

    owner_role = Role.STUDENT

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="student_profile"
    )
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=16, choices=Gender.choices, blank=True)
    nationality = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=255, blank=True)
    language = models.CharField(max_length=100, blank=True)
    education_level = models.CharField(max_length=100, blank=True)
    study_location = models.CharField(max_length=100, blank=True)

    def __str__(self):
        return self.full_name or str(self.user)

    def missing_profile_fields(self) -> list[str]:
        """Return the mandatory fields that are still empty, in declaration order."""
        missing = []
        for field in self.REQUIRED_PROFILE_FIELDS:
            value = getattr(self, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(field)
        return missing

    @property
    def is_profile_complete(self) -> bool:
        return not self.missing_profile_fields()


class Teacher(LinkedProfile):
    """
    An instructor's profile.

    .. pii: names, phone number
    .. pii_types: name, phone_number
    .. pii_retirement: local_api
    """

    owner_role = Role.TEACHER

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="teacher_profile"
    )
    specialization = models.CharField(max_length=255, blank=True)

    def __str__(self):
        return self.full_name or str(self.user)


class Document(TimeStampedModel):
    """
    A document uploaded by a student, e.g. an ID card.

    Uploading and storing the file happen elsewhere; this row only tracks the type and
    the one-shot review decision.

    .. no_pii:
    """

    class Type(models.TextChoices):
        PHOTO = "PHOTO", _("Photo")
        ID_CARD = "ID_CARD", _("ID card")
        SCHOOL_CERTIFICATE = "SCHOOL_CERTIFICATE", _("School certificate")
        PAYMENT_RECEIPT = "PAYMENT_RECEIPT", _("Payment receipt")

    class Status(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        APPROVED = "APPROVED", _("Approved")
        REJECTED = "REJECTED", _("Rejected")

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="documents")
    type = models.CharField(max_length=32, choices=Type.choices)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING, db_index=True)
    file_url = models.URLField(max_length=500, blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="reviewed_documents",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"{self.get_type_display()} of {self.student} ({self.status})"
