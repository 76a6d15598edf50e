"""
Authentication Routes
======================

POST /api/auth/signup  - Create an account and return an access token
POST /api/auth/login   - Login with email/password
GET  /api/auth/me      - Get current user info
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field

from src.tours.errors import ValidationError
from src.utils.safe_logging import get_safe_logger

from ..config import settings
from ..dependencies import create_access_token, get_current_user, CurrentUser
from ..models.database import get_store
from ..services.auth_service import authenticate_user, register_user

router = APIRouter()
logger = get_safe_logger(__name__)


# ============================================================
# Request/Response Models
# ============================================================

class CredentialsRequest(BaseModel):
    """Signup/login request body"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Login response with access token"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user_id: str


class UserResponse(BaseModel):
    """Current user info"""
    user_id: str
    email: str


def _token_response(user: dict) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user['user_id'], user['email']),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user_id=user['user_id'],
    )


# ============================================================
# Endpoints
# ============================================================

@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: CredentialsRequest, store=Depends(get_store)):
    """Register a new account."""
    try:
        user = register_user(store, request.email, request.password)
    except ValidationError as e:
        logger.warning("Signup rejected", email=request.email)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if settings.SEED_FIXTURES:
        store.seed_fixtures(user['user_id'])

    logger.info("Account created", email=request.email)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(request: CredentialsRequest, store=Depends(get_store)):
    """Exchange email/password for an access token."""
    user = authenticate_user(store, request.email, request.password)
    if user is None:
        logger.warning("Login failed", email=request.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    logger.info("Login succeeded", email=request.email)
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def me(user: CurrentUser = Depends(get_current_user)):
    return UserResponse(user_id=user.user_id, email=user.email)
