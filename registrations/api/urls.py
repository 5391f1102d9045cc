"""API URLs."""

from django.urls import include, path

urlpatterns = [
    path("v1/", include("registrations.api.v1.urls")),
]
