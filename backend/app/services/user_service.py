"""
User service: registration, credential checks, profile and password reset.
"""
import logging
from functools import lru_cache
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.exceptions import ValidationError
from app.core.security import (
    generate_reset_token,
    get_password_hash,
    is_reset_token_expired,
    reset_token_expiry,
    verify_password,
)
from app.models.user import User
from app.schemas.user import UserUpdate

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Compared against when the email is unknown so both failure paths cost a bcrypt check
    return get_password_hash("not-a-real-password-0")


def get_user(user_id: int, db: Session) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def create_user(name: str, email: str, password: str, db: Session) -> User:
    """Register a new user. Raises ValidationError if the email is taken."""
    if get_user_by_email(email, db):
        raise ValidationError("Email already exists", field="email")

    user = User(
        name=name,
        email=email.lower(),
        hashed_password=get_password_hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Email already exists", field="email")
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(email: str, password: str, db: Session) -> Optional[User]:
    """Return the user if the credentials match, otherwise None."""
    user = get_user_by_email(email, db)
    if user is None:
        verify_password(password, _dummy_hash())
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def update_profile(user: User, updates: UserUpdate, db: Session) -> User:
    """Apply a partial profile update."""
    for field, value in updates.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def request_password_reset(email: str, db: Session) -> Optional[str]:
    """
    Issue a reset token for the account, if there is one.

    Returns the token so the caller can deliver it; returns None for an
    unknown email. Callers must not reveal which case happened.
    """
    user = get_user_by_email(email, db)
    if user is None:
        logger.info("Password reset requested for unknown email")
        return None

    user.reset_token = generate_reset_token()
    user.reset_token_expiry = reset_token_expiry()
    db.commit()

    logger.info("Password reset token issued for user %s", user.id)
    return user.reset_token


def reset_password(token: str, new_password: str, db: Session) -> bool:
    """Set a new password using a reset token. The token is single-use."""
    user = db.query(User).filter(User.reset_token == token).first()
    if user is None or is_reset_token_expired(user.reset_token_expiry):
        return False

    user.hashed_password = get_password_hash(new_password)
    user.reset_token = None
    user.reset_token_expiry = None
    db.commit()

    logger.info("Password reset completed for user %s", user.id)
    return True
