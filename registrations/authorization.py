"""
Authorization guard protecting the registrations core.

The guard is a pure set-membership test against the role/permission catalog: it
resolves nothing, writes nothing and must run before any gate or lifecycle call.
"""

import logging
from collections.abc import Iterable, Mapping

from .results import OK, Forbidden, Unauthenticated
from .roles import ROLE_PERMISSIONS

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    """Check callers against an immutable role -> permissions catalog."""

    def __init__(self, catalog: Mapping[str, frozenset] = ROLE_PERMISSIONS):
        self._catalog = catalog

    def permissions_for(self, user) -> frozenset:
        if not _is_authenticated(user):
            return frozenset()
        return self._catalog.get(user.role, frozenset())

    def authorize(self, user, required_permissions: Iterable[str]):
        """
        Return ``OK`` if the user's role holds every required permission.

        Otherwise return ``Unauthenticated`` when no identity was resolved, or
        ``Forbidden`` naming the permissions the role lacks.
        """
        if not _is_authenticated(user):
            return Unauthenticated()

        granted = self.permissions_for(user)
        missing = tuple(sorted(str(p) for p in set(required_permissions) - granted))
        if missing:
            logger.warning(
                "[Registrations] Denied user %s (%s): missing permissions %s",
                user.pk,
                user.role,
                ", ".join(missing),
            )
            return Forbidden(missing_permissions=missing)
        return OK

    def authorize_self_or(self, user, required_permissions: Iterable[str], owner_id):
        """
        Return ``OK`` if the user owns the resource, else fall back to ``authorize``.

        ``owner_id`` is the primary key of the user owning the resource being acted on.
        Ownership is decided by the caller of this method for each endpoint.
        """
        if not _is_authenticated(user):
            return Unauthenticated()
        if owner_id is not None and owner_id == user.pk:
            return OK
        return self.authorize(user, required_permissions)


def _is_authenticated(user) -> bool:
    return user is not None and bool(getattr(user, "is_authenticated", False))


guard = AuthorizationGuard()


def authorize(user, required_permissions: Iterable[str]):
    """Check ``user`` against the process-wide guard."""
    return guard.authorize(user, required_permissions)


def authorize_self_or(user, required_permissions: Iterable[str], owner_id):
    """Check ``user`` against the process-wide guard, admitting the resource owner."""
    return guard.authorize_self_or(user, required_permissions, owner_id)
