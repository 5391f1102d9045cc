"""
Django REST framework permissions backed by the registrations authorization guard.
"""

from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.permissions import BasePermission

from registrations.authorization import authorize, authorize_self_or
from registrations.results import Unauthenticated


def enforce(result) -> bool:
    """Turn a guard result into DRF's authentication and permission errors."""
    if result.ok:
        return True
    if isinstance(result, Unauthenticated):
        raise NotAuthenticated(detail=result.as_dict())
    raise PermissionDenied(detail=result.as_dict())


class HasRolePermissions(BasePermission):
    """
    Permission to allow callers whose role holds every permission the view requires.

    Views declare the permissions they need in ``required_permissions``.
    """

    def has_permission(self, request, view):
        return enforce(authorize(request.user, view.required_permissions))


class IsSelfOrHasRolePermissions(BasePermission):
    """
    Permission to allow the owner of a resource, or callers holding the view's permissions.

    Ownership is checked per object: the view tells who owns an object with
    ``get_owner_id(obj)`` and must call ``check_object_permissions`` itself.
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            raise NotAuthenticated(detail=Unauthenticated().as_dict())
        return True

    def has_object_permission(self, request, view, obj):
        return enforce(authorize_self_or(request.user, view.required_permissions, view.get_owner_id(obj)))
