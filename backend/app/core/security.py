"""
Security utilities: password hashing, reset tokens and JWT session tokens.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import base64
import hashlib
import logging
import secrets
import bcrypt
from jose import JWTError, jwt
from app.core.config import Settings, settings

logger = logging.getLogger(__name__)


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    The digest is base64 encoded (44 bytes) so it never contains NUL bytes.
    """
    digest = hashlib.sha256(password.encode('utf-8')).digest()
    return base64.b64encode(digest)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Returns False on any mismatch."""
    if not plain_password or not hashed_password:
        return False
    pre_hashed = _pre_hash_password(plain_password)
    try:
        return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Refusing to verify password against a malformed hash")
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password.
    Pre-hashes with SHA256 first to support passwords longer than 72 bytes.
    """
    pre_hashed = _pre_hash_password(password)
    hashed = bcrypt.hashpw(pre_hashed, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def generate_reset_token() -> str:
    """Generate an opaque, high-entropy password reset token."""
    return secrets.token_hex(32)


def reset_token_expiry(minutes: Optional[int] = None) -> datetime:
    """Expiry timestamp for a reset token issued now."""
    if minutes is None:
        minutes = settings.RESET_TOKEN_EXPIRE_MINUTES
    return datetime.now(timezone.utc) + timedelta(minutes=minutes)


def is_reset_token_expired(expiry: Optional[datetime]) -> bool:
    """Check if a reset token expiry has passed. A missing expiry counts as expired."""
    if expiry is None:
        return True
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return datetime.now(timezone.utc) >= expiry


@dataclass(frozen=True)
class TokenIdentity:
    """Identity carried inside a verified session token."""
    user_id: int
    email: str


class TokenService:
    """Issues and verifies signed session tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_delta = timedelta(days=expire_days)

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenService":
        return cls(
            secret_key=config.SECRET_KEY,
            algorithm=config.ALGORITHM,
            expire_days=config.ACCESS_TOKEN_EXPIRE_DAYS,
        )

    def issue(self, user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token for a user."""
        expire = datetime.now(timezone.utc) + (expires_delta or self.expire_delta)
        to_encode = {
            "sub": str(user_id),
            "user_id": user_id,
            "email": email,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> Optional[TokenIdentity]:
        """
        Decode and verify a JWT token.
        Returns None for malformed, expired or mis-signed tokens.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        user_id = payload.get("user_id")
        email = payload.get("email")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            return None
        return TokenIdentity(user_id=user_id, email=email)


token_service = TokenService.from_settings(settings)
