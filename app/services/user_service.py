"""
User profile reads and updates.
"""

import logging
from uuid import UUID
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.crud import user as user_crud
from app.models.user import User
from app.schemas.user import UserProfileUpdateRequest

logger = logging.getLogger(__name__)


def update_profile(db: Session, actor: User, request: UserProfileUpdateRequest) -> User:
    """Merge the provided profile fields into the actor's own account."""
    fields = request.model_dump(exclude_unset=True)
    user = user_crud.update(db, actor, fields)

    logger.info(f"Updated profile for user {user.id} fields: {sorted(fields)}")
    return user


def get_public_user(db: Session, user_id: UUID) -> User:
    """
    Raises:
        NotFoundError: If the user does not exist
    """
    user = user_crud.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user
