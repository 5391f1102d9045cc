"""
Django Admin for registrations.
"""

from .enrollments import CourseAdmin, EnrollmentAdmin, RegistrationHistoryAdmin
from .people import DocumentAdmin, StudentAdmin, TeacherAdmin, UserAdmin

__all__ = [
    "CourseAdmin",
    "EnrollmentAdmin",
    "RegistrationHistoryAdmin",
    "DocumentAdmin",
    "StudentAdmin",
    "TeacherAdmin",
    "UserAdmin",
]
