"""API v1 URLs."""

from django.urls import path

from registrations.api.v1.views import (
    DocumentReviewView,
    EnrollmentHistoryView,
    EnrollmentListCreateView,
    EnrollmentTransitionView,
    StudentProfileView,
)

urlpatterns = [
    path(
        "enrollments/",
        EnrollmentListCreateView.as_view(),
        name="enrollments",
    ),
    path(
        "enrollments/<int:enrollment_id>/transitions/",
        EnrollmentTransitionView.as_view(),
        name="enrollment-transitions",
    ),
    path(
        "enrollments/<int:enrollment_id>/history/",
        EnrollmentHistoryView.as_view(),
        name="enrollment-history",
    ),
    path(
        "students/<int:student_id>/profile/",
        StudentProfileView.as_view(),
        name="student-profile",
    ),
    path(
        "documents/<int:document_id>/review/",
        DocumentReviewView.as_view(),
        name="document-review",
    ),
]
