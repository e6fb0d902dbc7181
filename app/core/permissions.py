"""
Authorization policy for role and ownership checks.

Pure functions over (actor, resource owner). Every mutating service calls
these before it changes anything, so a request is either authorized in full
or rejected before any write happens.
"""

from typing import Iterable, Optional
from uuid import UUID

from app.core.exceptions import ForbiddenError
from app.models.user import User, UserRole


def has_role(actor: User, allowed_roles: Iterable[UserRole]) -> bool:
    """
    Check whether the actor holds one of the allowed roles.

    Args:
        actor: Authenticated user
        allowed_roles: Roles permitted for the operation

    Returns:
        bool: True if actor.role is in allowed_roles
    """
    return actor.role in set(allowed_roles)


def require_role(actor: User, allowed_roles: Iterable[UserRole]) -> None:
    """
    Raise ForbiddenError if the actor's role is not allowed.

    Raises:
        ForbiddenError: 403 if actor.role is not in allowed_roles
    """
    allowed = set(allowed_roles)
    if actor.role not in allowed:
        names = ", ".join(sorted(role.value for role in allowed))
        raise ForbiddenError(f"This action requires role: {names}")


def is_owner(actor: User, owner_id: Optional[UUID]) -> bool:
    """Check whether the actor is the recorded owner of a resource."""
    return owner_id is not None and actor.id == owner_id


def require_ownership(actor: User, owner_id: Optional[UUID], message: str = "Not authorized to access this resource") -> None:
    """
    Raise ForbiddenError unless the actor owns the resource.

    Used directly (job.employer_id, application.candidate_id) and one hop
    removed (application.job.employer_id).

    Raises:
        ForbiddenError: 403 if actor.id != owner_id
    """
    if not is_owner(actor, owner_id):
        raise ForbiddenError(message)
