"""
Registration and login.

Issues signed bearer tokens; token verification lives in app.core.security.
"""

import logging
from typing import Optional, Tuple
from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthError, ValidationError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.crud import user as user_crud
from app.models.user import User
from app.schemas.user import UserRegisterRequest
from app.services import notification_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def register(
    db: Session,
    request: UserRegisterRequest,
    background_tasks: Optional[BackgroundTasks] = None
) -> Tuple[User, str]:
    """
    Create a user account and issue a token.

    Only a bcrypt hash of the password is stored.

    Returns:
        Tuple of (created user, access token)

    Raises:
        ValidationError: If the email is already registered
    """
    if user_crud.get_by_email(db, request.email):
        raise ValidationError("Email already registered")

    profile = request.model_dump(exclude={"email", "password", "role"})

    try:
        user = user_crud.create(
            db,
            email=request.email,
            hashed_password=get_password_hash(request.password),
            role=request.role,
            profile=profile,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ValidationError("Email already registered")

    logger.info(f"New user registered: {user.email} (role: {user.role.value})")

    notification_service.notify_welcome(user, background_tasks)

    return user, create_access_token(user.id, user.role)


def login(db: Session, email: str, password: str) -> Tuple[User, str]:
    """
    Authenticate with email and password.

    Returns:
        Tuple of (user, access token)

    Raises:
        AuthError: Same generic message for unknown email and wrong password
    """
    user = user_crud.get_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        raise AuthError(INVALID_CREDENTIALS)

    logger.info(f"User logged in: {user.email}")

    return user, create_access_token(user.id, user.role)
