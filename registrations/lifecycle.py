"""
Enrollment lifecycle engine.

Registration states move forward along a fixed graph::

    PENDING --validate--> VALIDATED --mark-paid--> PAID --finish--> FINISHED
       \\--reject--> REJECTED

FINISHED and REJECTED are terminal. Every change of state is applied in one
transaction together with the ``RegistrationHistory`` row recording it.

Concurrent calls on the same enrollment are serialized twice over: the row is read
with ``SELECT ... FOR UPDATE`` where the database supports it, and the new state is
written with a compare-and-swap ``UPDATE ... WHERE registration_status = <observed>``.
The loser of a race gets ``IllegalTransition`` with the state the winner left behind.
"""

import logging
from types import MappingProxyType

from django.conf import settings
from django.db import IntegrityError, models, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .gates import check_documents_approved, check_profile_complete
from .models import Course, Enrollment, RegistrationHistory, RegistrationStatus, Student
from .results import (
    AlreadyEnrolled,
    EnrollmentLimitReached,
    IllegalTransition,
    NotFound,
    Ok,
)
from .settings import DEFAULT_MAX_ACTIVE_ENROLLMENTS

logger = logging.getLogger(__name__)


class Action(models.TextChoices):
    VALIDATE = "validate", _("Validate")
    REJECT = "reject", _("Reject")
    MARK_PAID = "mark-paid", _("Mark paid")
    FINISH = "finish", _("Finish")


# action -> (the only state it applies to, the state it leads to)
TRANSITIONS = MappingProxyType(
    {
        Action.VALIDATE: (RegistrationStatus.PENDING, RegistrationStatus.VALIDATED),
        Action.REJECT: (RegistrationStatus.PENDING, RegistrationStatus.REJECTED),
        Action.MARK_PAID: (RegistrationStatus.VALIDATED, RegistrationStatus.PAID),
        Action.FINISH: (RegistrationStatus.PAID, RegistrationStatus.FINISHED),
    }
)

INITIAL_STATE = RegistrationStatus.PENDING
TERMINAL_STATES = frozenset({RegistrationStatus.FINISHED, RegistrationStatus.REJECTED})
ACTIVE_STATES = (RegistrationStatus.PENDING, RegistrationStatus.VALIDATED, RegistrationStatus.PAID)


def legal_actions(state: str) -> list[str]:
    """Return the actions that can be applied to an enrollment in ``state``."""
    return [action for action, (source, _target) in TRANSITIONS.items() if source == state]


def _lock_enrollment(enrollment_id):
    return Enrollment.objects.select_for_update().filter(pk=enrollment_id).first()


def _current_state(enrollment_id) -> str:
    return Enrollment.objects.values_list("registration_status", flat=True).get(pk=enrollment_id)


def apply_transition(enrollment_id, action: str, actor=None):
    """
    Apply a named action to an enrollment.

    Returns ``Ok`` with the updated enrollment, ``NotFound``, or ``IllegalTransition``
    when the enrollment is not in the single state the action applies to. Failures
    leave the enrollment and its history untouched, so a retried call that already
    succeeded once fails cleanly instead of applying twice.

    :param actor: the user performing the change, ``None`` for system changes.
    """
    transition = TRANSITIONS.get(action)

    with transaction.atomic():
        enrollment = _lock_enrollment(enrollment_id)
        if enrollment is None:
            return NotFound("enrollment", enrollment_id)

        observed = enrollment.registration_status
        if transition is None or transition[0] != observed:
            logger.warning(
                "[Registrations] Illegal transition %r on enrollment %s in state %s",
                action,
                enrollment_id,
                observed,
            )
            return IllegalTransition(current_state=observed, requested_action=str(action))

        source, target = transition
        updated = Enrollment.objects.filter(pk=enrollment.pk, registration_status=source).update(
            registration_status=target,
            modified=timezone.now(),
        )
        if not updated:
            current = _current_state(enrollment.pk)
            logger.warning(
                "[Registrations] Lost the race to %s enrollment %s: state is now %s",
                action,
                enrollment.pk,
                current,
            )
            return IllegalTransition(current_state=current, requested_action=str(action))

        RegistrationHistory.objects.create(
            enrollment=enrollment,
            old_status=source,
            new_status=target,
            changed_by=actor,
        )

    logger.info(
        "[Registrations] Enrollment %s moved from %s to %s by %s",
        enrollment.pk,
        source,
        target,
        getattr(actor, "pk", None),
    )
    return Ok(Enrollment.objects.select_related("student", "course").get(pk=enrollment.pk))


def create_enrollment(student_id, course_id, actor=None):
    """
    Create a Pending enrollment of a student in a course.

    The profile-completeness gate and the document gate must both pass. The
    enrollment and its initial history row are written in one transaction.

    Returns ``Ok`` with the new enrollment, or one of ``NotFound``, ``Incomplete``,
    ``Missing``, ``AlreadyEnrolled`` and ``EnrollmentLimitReached``.
    """
    if not Student.objects.filter(pk=student_id).exists():
        return NotFound("student", student_id)

    for gate in (check_profile_complete, check_documents_approved):
        result = gate(student_id)
        if not result.ok:
            return result

    course = Course.objects.filter(pk=course_id, is_active=True).first()
    if course is None:
        return NotFound("course", course_id)

    maximum = getattr(settings, "REGISTRATIONS_MAX_ACTIVE_ENROLLMENTS", DEFAULT_MAX_ACTIVE_ENROLLMENTS)
    try:
        with transaction.atomic():
            # Serializes concurrent requests of the same student.
            student = Student.objects.select_for_update().get(pk=student_id)

            if Enrollment.objects.filter(student=student, course=course).exists():
                return AlreadyEnrolled(student_id=student.pk, course_id=course.pk)

            active = Enrollment.objects.filter(student=student, registration_status__in=ACTIVE_STATES).count()
            if active >= maximum:
                logger.warning(
                    "[Registrations] Student %s reached the limit of %d active enrollments",
                    student.pk,
                    maximum,
                )
                return EnrollmentLimitReached(active=active, maximum=maximum)

            enrollment = Enrollment.objects.create(student=student, course=course)
            RegistrationHistory.objects.create(
                enrollment=enrollment,
                old_status=None,
                new_status=INITIAL_STATE,
                changed_by=actor,
            )
    except IntegrityError:
        logger.info(
            "[Registrations] Enrollment already exists for student %s in course %s",
            student_id,
            course_id,
        )
        return AlreadyEnrolled(student_id=student_id, course_id=course_id)

    logger.info(
        "[Registrations] Created enrollment %s for student %s in course %s",
        enrollment.pk,
        student_id,
        course.key,
    )
    return Ok(enrollment)


def get_history(enrollment_id):
    """Return ``Ok`` with the history rows of an enrollment, oldest first, or ``NotFound``."""
    if not Enrollment.objects.filter(pk=enrollment_id).exists():
        return NotFound("enrollment", enrollment_id)
    return Ok(list(RegistrationHistory.objects.filter(enrollment_id=enrollment_id).select_related("changed_by")))
