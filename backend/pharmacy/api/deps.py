"""Request-scoped dependencies: the DB session and the authenticated user.

Tokens are accepted as ``Authorization: Bearer`` (API clients) or from the
httpOnly cookie set at login (browser). The header wins when both are sent.
"""
from typing import Generator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pharmacy.core.config import settings
from pharmacy.core.security import decode_access_token
from pharmacy.db.session import SessionLocal
from pharmacy.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _reject(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _token_from(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.TOKEN_COOKIE_NAME)


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    token = _token_from(request, credentials)
    if not token:
        raise _reject("Not authenticated")

    subject = decode_access_token(token)
    if not subject or not subject.isdigit():
        raise _reject("Invalid or expired token")
    return int(subject)


def get_current_user(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> User:
    """The token's user; a token for a deleted account is rejected."""
    user = db.get(User, user_id)
    if user is None:
        raise _reject("User not found")
    return user
