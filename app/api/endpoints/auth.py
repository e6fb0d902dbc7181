"""
Authentication endpoints for user registration and login.

Implements JWT-based stateless authentication:
- POST /register: Create new user account
- POST /login: Authenticate and receive a JWT
- GET /me: Get current user profile
"""

import logging
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_current_user
from app.models.user import User
from app.schemas.user import AuthResponse, UserLoginRequest, UserRegisterRequest, UserResponse
from app.services import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/register", status_code=201, response_model=AuthResponse)
def register(
    request: UserRegisterRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db)
):
    """
    Register a new CANDIDATE or EMPLOYER account.

    Returns the created user and a bearer token for immediate use.
    A welcome email is queued after the response is sent.
    """
    user, token = auth_service.register(db, request, background_tasks)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate with email and password.

    Unknown email and wrong password both return 401 "Invalid credentials".
    """
    user, token = auth_service.login(db, request.email, request.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    current_user: User = Depends(get_current_user)
):
    """
    Get current authenticated user's profile.

    Requires valid JWT token in Authorization header.
    """
    return current_user
