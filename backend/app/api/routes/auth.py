"""
Authentication routes for registration, login, logout and password reset.
"""
import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.api.dependencies import get_current_user, get_token_service
from app.core.config import settings
from app.core.exceptions import Unauthenticated, ValidationError
from app.core.security import TokenService
from app.core.utils import format_message
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import (
    AuthResponse,
    ResetPassword,
    ResetPasswordRequest,
    UserCreate,
    UserLogin,
    UserResponse,
)
from app.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"
RESET_REQUEST_MESSAGE = "If an account exists for that email, a reset link has been sent"


def set_session_cookie(response: Response, token: str):
    """Attach the session token as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def _auth_response(user: User, response: Response, tokens: TokenService) -> AuthResponse:
    token = tokens.issue(user.id, user.email)
    set_session_cookie(response, token)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service)
):
    """Register a new user and start a session."""
    user = user_service.create_user(user_data.name, user_data.email, user_data.password, db)
    return _auth_response(user, response, tokens)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service)
):
    """Login and start a session."""
    user = user_service.authenticate_user(credentials.email, credentials.password, db)
    if user is None:
        # Same message whether the email or the password was wrong
        raise Unauthenticated(INVALID_CREDENTIALS)
    return _auth_response(user, response, tokens)


@router.post("/logout")
async def logout(response: Response):
    """End the session by clearing the cookie."""
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return format_message("Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user."""
    return current_user


@router.post("/reset-password-request")
async def reset_password_request(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    """
    Request a password reset token.
    Always succeeds so the response cannot be used to probe for accounts.
    """
    token = user_service.request_password_reset(payload.email, db)
    if token is not None and settings.DEBUG:
        # No mail transport is configured; expose the token in the log for development
        logger.debug("Password reset token for %s: %s", payload.email, token)
    return format_message(RESET_REQUEST_MESSAGE)


@router.post("/reset-password")
async def reset_password(payload: ResetPassword, db: Session = Depends(get_db)):
    """Set a new password using a reset token."""
    if not user_service.reset_password(payload.token, payload.password, db):
        raise ValidationError("Invalid or expired reset token", field="token")
    return format_message("Password has been reset")
