"""
Order lifecycle: place an order, manage its line items, move its status,
cancel it.

CONSISTENCY RULES:
- A line item's unit_price is copied from the medicine when the line is
  created and never recomputed afterwards (receipts stay historical).
- Order.total_amount is whatever the client placed; line item changes do not
  touch it. Order.items_total exposes the computed sum for reconciliation.
- Each operation commits once. Purging an order removes its lines in the same
  transaction.
- Stock moves with line items only when RESERVE_STOCK_ON_ORDER is enabled.

STATUS FLOW:
    Pending -> Processing -> Shipped -> Delivered
    Pending/Processing -> Cancelled
Forward moves may skip steps, re-writing the current status is a no-op
success, Delivered and Cancelled are terminal.
"""
import logging
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session, selectinload

from pharmacy.core.audit import AuditLog
from pharmacy.core.config import settings
from pharmacy.core.exceptions import Conflict, InvalidTransition, NotFound, ValidationError
from pharmacy.db.base import utcnow
from pharmacy.db.transaction import transaction
from pharmacy.models.customer import Customer
from pharmacy.models.enums import OrderStatus
from pharmacy.models.medicine import Medicine
from pharmacy.models.order import Order
from pharmacy.models.order_detail import OrderDetail
from pharmacy.services import inventory_service

logger = logging.getLogger(__name__)

SUCCESS_PATH = [
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]
CANCELLABLE = {OrderStatus.PENDING, OrderStatus.PROCESSING}


def is_legal_transition(current: OrderStatus, target: OrderStatus) -> bool:
    if current == target:
        return True
    if target == OrderStatus.CANCELLED:
        return current in CANCELLABLE
    if current in SUCCESS_PATH and target in SUCCESS_PATH:
        return SUCCESS_PATH.index(target) > SUCCESS_PATH.index(current)
    return False


def check_transition(current: str, requested: str) -> OrderStatus:
    """Parse ``requested`` and validate the move from ``current``.

    Legacy rows holding a status outside the enum can move anywhere.
    """
    target = OrderStatus.parse(requested)
    if not settings.ENFORCE_STATUS_TRANSITIONS:
        return target
    try:
        source = OrderStatus.parse(current)
    except ValidationError:
        return target
    if not is_legal_transition(source, target):
        raise InvalidTransition(source.value, target.value)
    return target


# ------------------------------------------------------------------ orders

def get_order(db: Session, order_id: int) -> Order:
    order = (
        db.query(Order)
        .options(selectinload(Order.details).joinedload(OrderDetail.medicine))
        .filter(Order.id == order_id)
        .first()
    )
    if not order:
        raise NotFound("Order")
    return order


def list_by_customer(db: Session, customer_id: int) -> List[Order]:
    return (
        db.query(Order)
        .options(selectinload(Order.details).joinedload(OrderDetail.medicine))
        .filter(Order.customer_id == customer_id)
        .order_by(Order.order_date.desc(), Order.id.desc())
        .all()
    )


def place_order(
    db: Session,
    customer_id: int,
    total_amount: Decimal,
    status: str = OrderStatus.PENDING.value,
) -> Order:
    """Insert an empty order stamped with the current time. Lines are added separately."""
    initial = OrderStatus.parse(status)
    if db.get(Customer, customer_id) is None:
        raise ValidationError("Invalid CustomerId")

    order = Order(
        customer_id=customer_id,
        total_amount=total_amount,
        status=initial.value,
        order_date=utcnow(),
    )
    with transaction(db):
        db.add(order)
    db.refresh(order)

    logger.info(f"Order {order.id} placed for customer {customer_id}, total {total_amount}")
    AuditLog.log_action("create", "order", order.id, changes={"status": order.status})
    return order


def update_order_status(db: Session, order_id: int, new_status: str) -> Order:
    order = db.get(Order, order_id)
    if not order:
        raise NotFound("Order")

    previous = order.status
    target = check_transition(previous, new_status)
    with transaction(db):
        order.status = target.value
    db.refresh(order)

    logger.info(f"Order {order_id} status {previous} -> {order.status}")
    AuditLog.log_action("status", "order", order_id, changes={"from": previous, "to": order.status})
    return order


def cancel_order(db: Session, order_id: int) -> None:
    """
    Purge an order and its line items.

    Orders with recorded payments are refused: setting the status to
    Cancelled keeps that history instead.
    """
    order = (
        db.query(Order)
        .options(selectinload(Order.details), selectinload(Order.payments))
        .filter(Order.id == order_id)
        .first()
    )
    if not order:
        raise NotFound("Order")
    if order.payments:
        raise Conflict(
            "Order has recorded payments and cannot be deleted. Set its status to Cancelled instead."
        )

    line_count = len(order.details)
    with transaction(db):
        if inventory_service.stock_reservation_enabled():
            for detail in order.details:
                inventory_service.release(db, detail.medicine_id, detail.quantity)
        # details cascade from the relationship, in the same flush as the order
        db.delete(order)

    logger.info(f"Order {order_id} deleted with {line_count} line items")
    AuditLog.log_action("delete", "order", order_id, changes={"line_items": line_count})


# -------------------------------------------------------------- line items

def get_line_item(db: Session, detail_id: int) -> OrderDetail:
    detail = db.get(OrderDetail, detail_id)
    if not detail:
        raise NotFound("Order detail")
    return detail


def get_order_lines(db: Session, order_id: int) -> List[OrderDetail]:
    return get_order(db, order_id).details


def add_line_item(db: Session, order_id: int, medicine_id: int, quantity: int) -> OrderDetail:
    """Append a line, snapshotting the medicine's current price."""
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")
    medicine = db.get(Medicine, medicine_id)
    if not medicine:
        raise NotFound("Medicine")
    if db.get(Order, order_id) is None:
        raise NotFound("Order")

    detail = OrderDetail(
        order_id=order_id,
        medicine_id=medicine_id,
        quantity=quantity,
        unit_price=medicine.price,
    )
    with transaction(db):
        if inventory_service.stock_reservation_enabled():
            inventory_service.reserve(db, medicine_id, quantity)
        db.add(detail)
    db.refresh(detail)

    logger.info(f"Line item {detail.id} added to order {order_id}: medicine {medicine_id} x{quantity} @ {detail.unit_price}")
    return detail


def update_line_item_quantity(db: Session, detail_id: int, quantity: int) -> OrderDetail:
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")
    detail = get_line_item(db, detail_id)

    previous = detail.quantity
    with transaction(db):
        if inventory_service.stock_reservation_enabled():
            inventory_service.adjust_quantity(db, detail.medicine_id, previous - quantity)
        detail.quantity = quantity
    db.refresh(detail)

    logger.info(f"Line item {detail_id} quantity {previous} -> {quantity}")
    return detail


def remove_line_item(db: Session, detail_id: int) -> None:
    detail = get_line_item(db, detail_id)
    order_id = detail.order_id
    with transaction(db):
        if inventory_service.stock_reservation_enabled():
            inventory_service.release(db, detail.medicine_id, detail.quantity)
        db.delete(detail)
    logger.info(f"Line item {detail_id} removed from order {order_id}")
