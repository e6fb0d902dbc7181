"""
CRUD operations for User model.
"""

from typing import Any, Dict, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from app.models.user import User, UserRole


def get_by_id(db: Session, user_id: UUID) -> Optional[User]:
    """
    Retrieve a user by ID.

    Args:
        db: Database session
        user_id: User ID to retrieve

    Returns:
        User instance if found, None otherwise
    """
    return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    """
    Retrieve a user by email, case-insensitively.

    Emails are stored lower-cased, so the lookup lower-cases its input.
    """
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create(
    db: Session,
    email: str,
    hashed_password: str,
    role: UserRole,
    profile: Dict[str, Any]
) -> User:
    """
    Create a new user.

    Args:
        db: Database session
        email: Login email (stored lower-cased)
        hashed_password: bcrypt hash of the password
        role: CANDIDATE or EMPLOYER
        profile: Profile columns (first_name, last_name, ...)

    Returns:
        Created User instance with id

    Raises:
        IntegrityError: If the email is already taken (unique index)
    """
    db_user = User(
        email=email.strip().lower(),
        hashed_password=hashed_password,
        role=role,
        **profile
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return db_user


def update(db: Session, user: User, fields: Dict[str, Any]) -> User:
    """
    Apply a partial update to a user's profile columns.

    Args:
        db: Database session
        user: User to update
        fields: Column name -> new value, only for fields the caller provided

    Returns:
        Updated User instance
    """
    for name, value in fields.items():
        setattr(user, name, value)

    db.commit()
    db.refresh(user)

    return user
