"""
Enrollment models: courses, enrollments and their registration history.
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from model_utils import FieldTracker
from model_utils.models import TimeStampedModel

from .people import Student


class Course(TimeStampedModel):
    """
    A course students can enroll in.

    .. no_pii:
    """

    key = models.SlugField(max_length=100, unique=True)
    title = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return self.key


class RegistrationStatus(models.TextChoices):
    PENDING = "PENDING", _("Pending")
    VALIDATED = "VALIDATED", _("Validated")
    PAID = "PAID", _("Paid")
    FINISHED = "FINISHED", _("Finished")
    REJECTED = "REJECTED", _("Rejected")


class Enrollment(TimeStampedModel):
    """
    A student's registration in a course.

    ``registration_status`` is owned by ``registrations.lifecycle``: a new enrollment
    always starts as Pending, and later changes are written by the lifecycle engine
    together with a ``RegistrationHistory`` row. Saving a changed status through the
    model is refused. Enrollments are never deleted.

    .. no_pii:
    """

    class Meta:
        """Model options."""

        unique_together = ("student", "course")

    student = models.ForeignKey(Student, on_delete=models.PROTECT, related_name="enrollments")
    course = models.ForeignKey(Course, on_delete=models.PROTECT, related_name="enrollments")
    registration_status = models.CharField(
        max_length=16,
        choices=RegistrationStatus.choices,
        default=RegistrationStatus.PENDING,
        db_index=True,
    )
    tracker = FieldTracker(fields=["registration_status"])

    def __str__(self):
        return "{}: {}".format(self.student, self.course)

    def save(self, *args, **kwargs):
        if self._state.adding:
            if self.registration_status != RegistrationStatus.PENDING:
                raise ValidationError(_("New enrollments must start as Pending."))
        elif self.tracker.has_changed("registration_status"):
            raise ValidationError(_("The registration status can only be changed by the lifecycle engine."))
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(_("Enrollments are kept for audit and cannot be deleted."))


class RegistrationHistory(models.Model):
    """
    One applied change of an enrollment's registration status.

    Rows are append-only: they are written in the same transaction as the change they
    record and refuse updates and deletion afterwards. ``old_status`` is empty for the
    row recording the creation of the enrollment.

    .. no_pii:
    """

    class Meta:
        """Model options."""

        ordering = ("changed_at", "id")
        verbose_name_plural = "registration history"

    enrollment = models.ForeignKey(Enrollment, on_delete=models.PROTECT, related_name="history")
    old_status = models.CharField(max_length=16, choices=RegistrationStatus.choices, null=True, blank=True)
    new_status = models.CharField(max_length=16, choices=RegistrationStatus.choices)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="registration_changes",
        help_text=_("Empty for system-initiated changes."),
    )
    changed_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)

    def __str__(self):
        return f"from {self.old_status or 'nothing'} to {self.new_status} for {self.enrollment}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError(_("Registration history rows are immutable."))
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(_("Registration history rows are immutable."))
