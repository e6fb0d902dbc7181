"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract the acting user.
"""

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import AuthError
from app.core.permissions import require_role
from app.core.security import verify_token
from app.crud import user as user_crud
from app.models.user import User, UserRole

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error=False so a missing header is reported as our own 401
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Extract and validate the current user from the bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature, expiry and claims
    3. Fetches the user from the database

    Raises:
        AuthError 401: If the token is missing or invalid, or the user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Not authenticated")

    payload = verify_token(credentials.credentials)

    user = user_crud.get_by_id(db, payload.user_id)
    if user is None:
        raise AuthError("User not found")

    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """
    Build a dependency that authenticates the caller and checks their role.

    Usage:
        @router.post("/jobs")
        def create_job(employer: User = Depends(require_roles(UserRole.EMPLOYER))):
            ...

    Raises:
        AuthError 401: Not authenticated
        ForbiddenError 403: Authenticated with a role outside `roles`
    """
    def dependency(user: User = Depends(get_current_user)) -> User:
        require_role(user, roles)
        return user

    return dependency


get_current_employer = require_roles(UserRole.EMPLOYER)
get_current_candidate = require_roles(UserRole.CANDIDATE)
