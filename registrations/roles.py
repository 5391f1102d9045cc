"""
Roles, permissions and the static catalog mapping one to the other.

Roles describe who a user is, permissions describe what a user can do.
The catalog is built once at import time and is never mutated afterwards.
"""

from types import MappingProxyType

from django.db import models
from django.utils.translation import gettext_lazy as _


class Role(models.TextChoices):
    """Fixed categories of users."""

    ADMIN = "ADMIN", _("Admin")
    TEACHER = "TEACHER", _("Teacher")
    STUDENT = "STUDENT", _("Student")


class Permission(models.TextChoices):
    """Named capabilities checked by the authorization guard."""

    # Student
    VIEW_OWN_PROFILE = "VIEW_OWN_PROFILE", _("View own profile")
    EDIT_OWN_PROFILE = "EDIT_OWN_PROFILE", _("Edit own profile")
    VIEW_OWN_COURSES = "VIEW_OWN_COURSES", _("View own courses")
    VIEW_OWN_ATTENDANCE = "VIEW_OWN_ATTENDANCE", _("View own attendance")
    VIEW_OWN_RESULTS = "VIEW_OWN_RESULTS", _("View own results")
    VIEW_OWN_FEES = "VIEW_OWN_FEES", _("View own fees")

    # Teacher
    VIEW_ASSIGNED_COURSES = "VIEW_ASSIGNED_COURSES", _("View assigned courses")
    MANAGE_ATTENDANCE = "MANAGE_ATTENDANCE", _("Manage attendance")
    CREATE_EXAMS = "CREATE_EXAMS", _("Create exams")
    UPDATE_EXAMS = "UPDATE_EXAMS", _("Update exams")
    ENTER_RESULTS = "ENTER_RESULTS", _("Enter results")
    VIEW_STUDENTS = "VIEW_STUDENTS", _("View students")

    # Admin
    MANAGE_USERS = "MANAGE_USERS", _("Manage users")
    MANAGE_STUDENTS = "MANAGE_STUDENTS", _("Manage students")
    MANAGE_TEACHERS = "MANAGE_TEACHERS", _("Manage teachers")
    MANAGE_COURSES = "MANAGE_COURSES", _("Manage courses")
    MANAGE_CLASSES = "MANAGE_CLASSES", _("Manage classes")
    MANAGE_ENROLLMENTS = "MANAGE_ENROLLMENTS", _("Manage enrollments")
    MANAGE_SESSIONS = "MANAGE_SESSIONS", _("Manage sessions")
    MANAGE_EXAMS = "MANAGE_EXAMS", _("Manage exams")
    MANAGE_RESULTS = "MANAGE_RESULTS", _("Manage results")
    MANAGE_FEES = "MANAGE_FEES", _("Manage fees")
    MANAGE_PERMISSIONS = "MANAGE_PERMISSIONS", _("Manage permissions")
    MANAGE_DOCUMENTS = "MANAGE_DOCUMENTS", _("Manage documents")
    MANAGE_ANNOUNCEMENTS = "MANAGE_ANNOUNCEMENTS", _("Manage announcements")
    VIEW_REPORTS = "VIEW_REPORTS", _("View reports")


ROLE_PERMISSIONS = MappingProxyType(
    {
        Role.ADMIN: frozenset(
            {
                Permission.MANAGE_USERS,
                Permission.MANAGE_STUDENTS,
                Permission.MANAGE_TEACHERS,
                Permission.MANAGE_COURSES,
                Permission.MANAGE_CLASSES,
                Permission.MANAGE_ENROLLMENTS,
                Permission.MANAGE_SESSIONS,
                Permission.MANAGE_EXAMS,
                Permission.MANAGE_RESULTS,
                Permission.MANAGE_FEES,
                Permission.MANAGE_PERMISSIONS,
                Permission.MANAGE_DOCUMENTS,
                Permission.MANAGE_ANNOUNCEMENTS,
                Permission.VIEW_REPORTS,
            }
        ),
        Role.TEACHER: frozenset(
            {
                Permission.VIEW_ASSIGNED_COURSES,
                Permission.MANAGE_ATTENDANCE,
                Permission.CREATE_EXAMS,
                Permission.UPDATE_EXAMS,
                Permission.ENTER_RESULTS,
                Permission.VIEW_STUDENTS,
            }
        ),
        Role.STUDENT: frozenset(
            {
                Permission.VIEW_OWN_PROFILE,
                Permission.EDIT_OWN_PROFILE,
                Permission.VIEW_OWN_COURSES,
                Permission.VIEW_OWN_ATTENDANCE,
                Permission.VIEW_OWN_RESULTS,
                Permission.VIEW_OWN_FEES,
            }
        ),
    }
)

# Permissions each guarded operation requires from callers acting on someone else's
# resources. Operations marked "self" in the API also admit the resource owner.
OPERATION_PERMISSIONS = MappingProxyType(
    {
        "create_enrollment": frozenset({Permission.MANAGE_ENROLLMENTS}),
        "apply_transition": frozenset({Permission.MANAGE_ENROLLMENTS}),
        "list_enrollments": frozenset({Permission.MANAGE_ENROLLMENTS}),
        "view_enrollment_history": frozenset({Permission.MANAGE_ENROLLMENTS}),
        "view_student_profile": frozenset({Permission.MANAGE_STUDENTS}),
        "review_document": frozenset({Permission.MANAGE_DOCUMENTS}),
    }
)


def permissions_for(role: str) -> frozenset:
    """Return the permission set of ``role``, empty for an unknown role."""
    return ROLE_PERMISSIONS.get(role, frozenset())
