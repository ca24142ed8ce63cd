"""Create all tables. Run on app startup.

Seeds a default Admin with a random password (not hardcoded) when the user
table is empty. The password is printed once; change it after first login.
"""
import logging
import secrets

from sqlalchemy.engine import Engine

from pharmacy.core.security import get_password_hash
from pharmacy.db.base import Base
from pharmacy.db.session import engine as default_engine, SessionLocal
from pharmacy import models  # noqa: F401 - register models
from pharmacy.models.enums import Role
from pharmacy.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@onlinepharmacy.in"


def init_db(engine: Engine | None = None) -> None:
    bind = engine or default_engine
    Base.metadata.create_all(bind=bind)

    db = SessionLocal(bind=bind)
    try:
        if db.query(User).count() == 0:
            default_password = secrets.token_urlsafe(16)
            db.add(
                User(
                    full_name="Administrator",
                    email=DEFAULT_ADMIN_EMAIL,
                    hashed_password=get_password_hash(default_password),
                    role=Role.ADMIN.value,
                )
            )
            db.commit()
            logger.warning("Default admin user created; change its password after first login")

            print("\n" + "=" * 70)
            print("DEFAULT ADMIN USER CREATED")
            print("=" * 70)
            print(f"Email:    {DEFAULT_ADMIN_EMAIL}")
            print(f"Password: {default_password}")
            print("=" * 70 + "\n")
    finally:
        db.close()
