import logging
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_user
from app.models.user import User
from app.schemas.user import PublicUserResponse, UserProfileUpdateRequest, UserResponse
from app.services import user_service

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    request: UserProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the calling user's own profile. Email, role and password are not editable here."""
    return user_service.update_profile(db, current_user, request)


@router.get("/{user_id}", response_model=PublicUserResponse)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    """Public profile of any user."""
    return user_service.get_public_user(db, user_id)
