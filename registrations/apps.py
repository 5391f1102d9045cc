"""
registrations Django application initialization.
"""

from django.apps import AppConfig


class RegistrationsConfig(AppConfig):
    """
    Configuration for the registrations Django application.
    """

    name = "registrations"
    verbose_name = "Registrations"
    default_auto_field = "django.db.models.AutoField"

    def ready(self):
        """
        Connect signal handlers when the app is ready.
        """
        # Import receivers to ensure signal handlers are registered
        from registrations import receivers  # noqa: F401
