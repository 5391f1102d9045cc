"""
URLs for registrations.
"""

from django.urls import include, path

urlpatterns = [
    path("api/registrations/", include("registrations.api.urls")),
]
