"""
Util methods for the registrations API.
"""

from rest_framework.response import Response


def error_response(result) -> Response:
    """Render an error kind of the registrations core with its status code."""
    return Response(result.as_dict(), status=result.http_status)
