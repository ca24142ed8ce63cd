"""Customer profiles linked to user accounts."""
import logging
from typing import List, Tuple

from sqlalchemy.orm import Session, selectinload

from pharmacy.core.exceptions import NotFound, StorageConstraintError, ValidationError
from pharmacy.db.transaction import transaction
from pharmacy.models.customer import Customer
from pharmacy.models.user import User

logger = logging.getLogger(__name__)


def _check_user(db: Session, user_id: int) -> None:
    if db.get(User, user_id) is None:
        raise ValidationError("Invalid UserId")


def list_customers(db: Session) -> List[Customer]:
    return db.query(Customer).options(selectinload(Customer.user)).order_by(Customer.id).all()


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = (
        db.query(Customer)
        .options(selectinload(Customer.user))
        .filter(Customer.id == customer_id)
        .first()
    )
    if not customer:
        raise NotFound("Customer")
    return customer


def customer_for_user(db: Session, user_id: int) -> Customer | None:
    return db.query(Customer).filter(Customer.user_id == user_id).order_by(Customer.id).first()


def create_customer(db: Session, user_id: int, address: str, phone_number: str) -> Customer:
    _check_user(db, user_id)
    customer = Customer(user_id=user_id, address=address.strip(), phone_number=phone_number.strip())
    with transaction(db):
        db.add(customer)
    db.refresh(customer)
    logger.info(f"Created customer {customer.id} for user {user_id}")
    return customer


def update_customer(db: Session, customer_id: int, user_id: int, address: str, phone_number: str) -> Customer:
    customer = get_customer(db, customer_id)
    _check_user(db, user_id)
    with transaction(db):
        customer.user_id = user_id
        customer.address = address.strip()
        customer.phone_number = phone_number.strip()
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    customer = get_customer(db, customer_id)
    with transaction(
        db,
        on_integrity_error=lambda _e: StorageConstraintError("Customer has existing orders and cannot be deleted"),
    ):
        db.delete(customer)
    logger.info(f"Deleted customer {customer_id}")


def customer_dropdown(db: Session) -> List[Tuple[int, str | None]]:
    return (
        db.query(Customer.id, User.full_name)
        .outerjoin(User, Customer.user_id == User.id)
        .order_by(Customer.id)
        .all()
    )
