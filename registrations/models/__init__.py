"""
Models package for registrations.

Models are organized per feature and re-exported here, so they can be imported
from registrations.models.
"""

from .people import Document, LinkedProfile, Student, Teacher, User
from .enrollments import Course, Enrollment, RegistrationHistory, RegistrationStatus

__all__ = [
    # People
    "User",
    "LinkedProfile",
    "Student",
    "Teacher",
    "Document",
    # Enrollments
    "Course",
    "Enrollment",
    "RegistrationHistory",
    "RegistrationStatus",
]
