"""
Views for registrations.

This module re-exports all views from the feature-based view modules.
"""

# Enrollments
from .enrollments import EnrollmentHistoryView, EnrollmentListCreateView, EnrollmentTransitionView

# Students
from .students import StudentProfileView

# Documents
from .documents import DocumentReviewView

__all__ = [
    # Enrollments
    "EnrollmentListCreateView",
    "EnrollmentTransitionView",
    "EnrollmentHistoryView",
    # Students
    "StudentProfileView",
    # Documents
    "DocumentReviewView",
]
