"""Django signal handlers for the registrations app."""

# pylint: disable=unused-argument

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from registrations.models import Student
from registrations.roles import Role

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_student_profile(sender, instance, created, **kwargs):
    """
    Create the student profile of a newly created student account.

    The profile starts empty apart from the names copied from the account; the
    student fills in the rest before requesting an enrollment.

    Args:
        sender: User model class.
        instance: The actual instance being saved.
        created: A boolean indicating whether this is a creation and not an update.
    """
    if not created or instance.role != Role.STUDENT:
        logger.debug("[Registrations] Skipping student profile creation for user %s.", instance)
        return

    student, profile_created = Student.objects.get_or_create(
        user=instance,
        defaults={"first_name": instance.first_name, "last_name": instance.last_name},
    )
    if profile_created:
        logger.info("[Registrations] Created student profile %s for user %s", student.pk, instance)
