"""Payment records. Status is recorded as reported; no gateway is called."""
import logging
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from pharmacy.core.audit import AuditLog
from pharmacy.core.exceptions import NotFound, ValidationError
from pharmacy.db.base import utcnow
from pharmacy.db.transaction import transaction
from pharmacy.models.enums import PaymentStatus
from pharmacy.models.order import Order
from pharmacy.models.payment import Payment

logger = logging.getLogger(__name__)


def list_payments(db: Session) -> List[Payment]:
    return db.query(Payment).order_by(Payment.payment_date.desc(), Payment.id.desc()).all()


def get_payment(db: Session, payment_id: int) -> Payment:
    payment = db.get(Payment, payment_id)
    if not payment:
        raise NotFound("Payment")
    return payment


def payments_for_order(db: Session, order_id: int) -> List[Payment]:
    return db.query(Payment).filter(Payment.order_id == order_id).order_by(Payment.id).all()


def record_payment(
    db: Session,
    order_id: int,
    amount_paid: Decimal,
    method: str,
    status: str = PaymentStatus.PENDING.value,
) -> Payment:
    """
    Append a payment to an order.

    Several payments per order are allowed and none is reconciled against
    the order total.
    """
    if db.get(Order, order_id) is None:
        raise ValidationError("Invalid OrderId")
    if not method or not method.strip():
        raise ValidationError("Payment method is required")
    if not status or not status.strip():
        raise ValidationError("Payment status is required")

    payment = Payment(
        order_id=order_id,
        amount_paid=Decimal(str(amount_paid)),
        payment_method=method.strip(),
        payment_status=status.strip(),
        payment_date=utcnow(),
    )
    with transaction(db):
        db.add(payment)
    db.refresh(payment)

    logger.info(f"Payment {payment.id} recorded for order {order_id}: {payment.amount_paid} via {payment.payment_method} ({payment.payment_status})")
    AuditLog.log_action(
        "create", "payment", payment.id,
        changes={"order_id": order_id, "amount": payment.amount_paid, "status": payment.payment_status},
    )
    return payment
