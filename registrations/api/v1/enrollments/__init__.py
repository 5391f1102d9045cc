"""
Enrollment views and serializers.
"""

from .views import EnrollmentHistoryView, EnrollmentListCreateView, EnrollmentTransitionView
from .serializers import EnrollmentSerializer, RegistrationHistorySerializer

__all__ = [
    # Views
    "EnrollmentListCreateView",
    "EnrollmentTransitionView",
    "EnrollmentHistoryView",
    # Serializers
    "EnrollmentSerializer",
    "RegistrationHistorySerializer",
]
