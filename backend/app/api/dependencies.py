"""
Shared route dependencies: authentication context and access error mapping.
"""
from dataclasses import dataclass
from typing import NoReturn, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import Forbidden, NotFound, Unauthenticated
from app.core.security import TokenService, token_service
from app.db.session import get_db
from app.models.user import User
from app.services.user_service import get_user

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the authenticated caller."""
    user_id: int
    email: str


def get_token_service() -> TokenService:
    return token_service


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    # Authorization header wins over the session cookie
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_optional_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[AuthContext]:
    """Identity of the caller if a valid credential was sent, otherwise None."""
    identity = tokens.verify(_extract_token(request, credentials))
    if identity is None:
        return None
    return AuthContext(user_id=identity.user_id, email=identity.email)


def get_current_auth(auth: Optional[AuthContext] = Depends(get_optional_auth)) -> AuthContext:
    """Require a valid credential."""
    if auth is None:
        raise Unauthenticated("Authentication required")
    return auth


def get_current_user(
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
) -> User:
    """Load the authenticated user record."""
    user = get_user(auth.user_id, db)
    if user is None:
        raise Unauthenticated("Authentication required")
    return user


def raise_access_error(model, record_id: int, label: str, db: Session) -> NoReturn:
    """
    Explain why a scoped lookup of a child record came back empty:
    404 if the record does not exist, 403 if it exists but is not writable.
    """
    exists = db.query(model.id).filter(model.id == record_id).first() is not None
    if not exists:
        raise NotFound(f"{label} not found")
    raise Forbidden(f"Access denied to this {label.lower()}")
