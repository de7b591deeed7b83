"""
Authentication API Routes
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from careerprep.core.database import get_db
from careerprep.dependencies import get_current_user
from careerprep.models.user import User
from careerprep.repositories.user_repository import UserRepository
from careerprep.schemas.user import RegisterRequest, LoginRequest, AuthResponse, MeResponse, UserResponse
from careerprep.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new account

    Email is stored lower-cased; full name defaults to the email's local part.
    """
    user, token = AuthService(db).register_user(request.email, request.password, request.full_name)

    profile = request.model_dump(include={"phone", "location", "linkedin_url", "github_url"}, exclude_none=True)
    if profile:
        for key, value in profile.items():
            setattr(user, key, value)
        user = UserRepository(db).update(user)

    return {
        "message": "User registered successfully",
        "user": UserResponse.model_validate(user),
        "token": token,
    }


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db)
):
    """Verify credentials and issue an access token"""
    user, token = AuthService(db).authenticate_user(request.email, request.password)
    return {
        "message": "Login successful",
        "user": UserResponse.model_validate(user),
        "token": token,
    }


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)):
    """Current user profile with dashboard analytics"""
    return {"user": UserResponse.model_validate(current_user)}
