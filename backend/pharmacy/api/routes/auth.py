"""Auth: registration, login, logout and the current user.

- Passwords hashed with bcrypt
- Token returned in the body and set as an httpOnly, SameSite cookie
- Same error for unknown email and wrong password
"""
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db, get_current_user
from pharmacy.core.audit import AuditLog
from pharmacy.core.config import settings
from pharmacy.core.exceptions import PharmacyError, Unauthorized
from pharmacy.core.security import create_access_token
from pharmacy.models.user import User
from pharmacy.schemas.common import MessageResponse
from pharmacy.schemas.user import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserResponse
from pharmacy.services import user_service

router = APIRouter()


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    """
    Create an account. Customers must supply an address and a 10 digit phone
    number; their customer profile is created with the user.
    """
    try:
        user = user_service.register(
            db,
            full_name=data.full_name,
            email=data.email,
            password=data.password,
            role=data.role,
            address=data.address,
            phone_number=data.phone_number,
        )
    except PharmacyError as e:
        AuditLog.log_authentication("register", data.email, _client_ip(request), False, reason=e.message)
        raise

    AuditLog.log_authentication("register", user.email, _client_ip(request), True)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return RegisterResponse(user_id=user.id)


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    try:
        user = user_service.authenticate(db, data.email, data.password)
    except Unauthorized:
        AuditLog.log_authentication("failed_login", data.email, _client_ip(request), False, reason="bad credentials")
        raise

    token = create_access_token(subject=str(user.id))
    response.set_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        secure=settings.SECURE_COOKIES,
        httponly=True,
        samesite=settings.SAME_SITE_COOKIE,
    )
    AuditLog.log_authentication("login", user.email, _client_ip(request), True)

    return LoginResponse(
        user_id=user.id,
        full_name=user.full_name,
        email=user.email,
        role=user.role,
        access_token=token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response, current_user: User = Depends(get_current_user)):
    response.delete_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        secure=settings.SECURE_COOKIES,
        httponly=True,
        samesite=settings.SAME_SITE_COOKIE,
    )
    AuditLog.log_authentication("logout", current_user.email, _client_ip(request), True)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
