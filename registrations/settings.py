"""Django settings for the registrations app."""

from django.conf import Settings

# Document types a student must have approved before requesting an enrollment.
# The order is the order in which missing types are reported.
DEFAULT_REQUIRED_DOCUMENTS = [
    "PHOTO",
    "ID_CARD",
    "SCHOOL_CERTIFICATE",
    "PAYMENT_RECEIPT",
]

DEFAULT_MAX_ACTIVE_ENROLLMENTS = 3


def plugin_settings(settings: Settings):
    """
    Define app settings.

    Every value can be overridden by the project settings before this is applied.
    """
    settings.REGISTRATIONS_REQUIRED_DOCUMENTS = getattr(
        settings,
        "REGISTRATIONS_REQUIRED_DOCUMENTS",
        list(DEFAULT_REQUIRED_DOCUMENTS),
    )

    # Number of Pending, Validated and Paid enrollments a student may hold at once.
    settings.REGISTRATIONS_MAX_ACTIVE_ENROLLMENTS = getattr(
        settings,
        "REGISTRATIONS_MAX_ACTIVE_ENROLLMENTS",
        DEFAULT_MAX_ACTIVE_ENROLLMENTS,
    )
