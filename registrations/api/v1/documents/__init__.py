"""
Document review views and serializers.
"""

from .views import DocumentReviewView
from .serializers import DocumentReviewSerializer

__all__ = [
    # Views
    "DocumentReviewView",
    # Serializers
    "DocumentReviewSerializer",
]
