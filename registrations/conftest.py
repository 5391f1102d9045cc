"""Pytest fixtures."""

# pylint: disable=redefined-outer-name

import pytest

from registrations.lifecycle import Action, apply_transition, create_enrollment
from registrations.models import RegistrationStatus
from registrations.tests.factories import (
    AdminFactory,
    CourseFactory,
    StudentFactory,
    approve_all_documents,
)

# Actions leading from Pending to each state.
PATH_TO_STATE = {
    RegistrationStatus.PENDING: [],
    RegistrationStatus.VALIDATED: [Action.VALIDATE],
    RegistrationStatus.PAID: [Action.VALIDATE, Action.MARK_PAID],
    RegistrationStatus.FINISHED: [Action.VALIDATE, Action.MARK_PAID, Action.FINISH],
    RegistrationStatus.REJECTED: [Action.REJECT],
}


@pytest.fixture
def admin_user():
    """Create an admin account."""
    return AdminFactory()


@pytest.fixture
def student():
    """Create a student with a complete profile and no documents."""
    return StudentFactory()


@pytest.fixture
def eligible_student(student):
    """Create a student who passes both admission gates."""
    approve_all_documents(student)
    return student


@pytest.fixture
def course():
    """Create a single course."""
    return CourseFactory()


@pytest.fixture
def enrollment(eligible_student, course):
    """Create a pending enrollment."""
    return create_enrollment(eligible_student.pk, course.pk, actor=eligible_student.user).value


@pytest.fixture
def enrollment_in_state(enrollment, admin_user):
    """Return a function moving the pending enrollment to the given state through the engine."""

    def _move(state):
        for action in PATH_TO_STATE[state]:
            result = apply_transition(enrollment.pk, action, actor=admin_user)
            assert result.ok, result
        enrollment.refresh_from_db()
        return enrollment

    return _move
