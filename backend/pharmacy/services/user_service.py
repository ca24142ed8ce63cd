"""Users, registration and credential checks.

Email uniqueness is left to the UNIQUE index on users.email: inserts are
attempted directly and the integrity error becomes a Conflict, so two
concurrent registrations cannot both succeed.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from pharmacy.core.config import settings
from pharmacy.core.exceptions import Conflict, NotFound, StorageConstraintError, Unauthorized, ValidationError
from pharmacy.core.security import get_password_hash, verify_password
from pharmacy.db.transaction import transaction
from pharmacy.models.customer import Customer
from pharmacy.models.enums import Role
from pharmacy.models.user import User

logger = logging.getLogger(__name__)


def _duplicate_email(_exc) -> Conflict:
    return Conflict("Email already registered.")


def _check_password(password: str) -> None:
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")


def register(
    db: Session,
    full_name: str,
    email: str,
    password: str,
    role: str,
    address: Optional[str] = None,
    phone_number: Optional[str] = None,
) -> User:
    """
    Create a user and, for customers, the linked customer row.

    Both rows are inserted in one transaction; customer contact details are
    validated before anything is written.
    """
    parsed = Role.parse(role)
    _check_password(password)
    if parsed == Role.CUSTOMER and (not (address or "").strip() or not (phone_number or "").strip()):
        raise ValidationError("Address and PhoneNumber are required for Customer role.")

    user = User(
        full_name=full_name.strip(),
        email=email,
        hashed_password=get_password_hash(password),
        role=parsed.value,
    )
    with transaction(db, on_integrity_error=_duplicate_email):
        db.add(user)
        db.flush()
        if parsed == Role.CUSTOMER:
            db.add(Customer(user_id=user.id, address=address.strip(), phone_number=phone_number.strip()))
    db.refresh(user)

    logger.info(f"Registered user {user.id} with role {user.role}")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.hashed_password):
        raise Unauthorized()
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFound("User")
    return user


def create_user(db: Session, full_name: str, email: str, password: str, role: str) -> User:
    """Staff-side user creation. No customer row is created here."""
    parsed = Role.parse(role)
    _check_password(password)
    user = User(
        full_name=full_name.strip(),
        email=email,
        hashed_password=get_password_hash(password),
        role=parsed.value,
    )
    with transaction(db, on_integrity_error=_duplicate_email):
        db.add(user)
    db.refresh(user)
    logger.info(f"Created user {user.id} ({user.role})")
    return user


def update_user(
    db: Session,
    user_id: int,
    full_name: str,
    email: str,
    role: str,
    password: Optional[str] = None,
) -> User:
    user = get_user(db, user_id)
    parsed = Role.parse(role)
    if password:
        _check_password(password)

    with transaction(db, on_integrity_error=_duplicate_email):
        user.full_name = full_name.strip()
        user.email = email
        user.role = parsed.value
        if password:
            user.hashed_password = get_password_hash(password)
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    with transaction(
        db,
        on_integrity_error=lambda _e: StorageConstraintError("User is linked to existing customers"),
    ):
        db.delete(user)
    logger.info(f"Deleted user {user_id}")


def set_image_url(db: Session, user_id: int, image_url: str) -> User:
    user = get_user(db, user_id)
    with transaction(db):
        user.image_url = image_url
    db.refresh(user)
    return user


def role_options() -> List[str]:
    return [role.value for role in Role]

