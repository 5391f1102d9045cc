"""
Student profile views and serializers.
"""

from .views import StudentProfileView
from .serializers import StudentProfileSerializer

__all__ = [
    # Views
    "StudentProfileView",
    # Serializers
    "StudentProfileSerializer",
]
