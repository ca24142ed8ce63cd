"""
Read-only projections: the orders table, CSV export, dashboard counters.

Nothing here writes. Search is case-insensitive, status filters are exact and
the literal "All" disables them.
"""
import csv
import io
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Session, contains_eager, selectinload

from pharmacy.models.customer import Customer
from pharmacy.models.enums import PaymentStatus, Role
from pharmacy.models.medicine import Medicine
from pharmacy.models.order import Order
from pharmacy.models.payment import Payment
from pharmacy.models.user import User
from pharmacy.services.customer_service import customer_for_user

ALL_STATUSES = "All"
EXPORT_HEADER = ["OrderId", "CustomerName", "CustomerEmail", "OrderDate", "TotalAmount", "Status"]


def _orders_with_customer(db: Session):
    return (
        db.query(Order)
        .outerjoin(Customer, Order.customer_id == Customer.id)
        .outerjoin(User, Customer.user_id == User.id)
        .options(contains_eager(Order.customer).contains_eager(Customer.user))
    )


def _apply_status(q, status: Optional[str]):
    if status and status != ALL_STATUSES:
        q = q.filter(Order.status == status)
    return q


def latest_payment(order: Order) -> Optional[Payment]:
    """Most recent payment by date, highest id on ties."""
    if not order.payments:
        return None
    return max(order.payments, key=lambda p: (p.payment_date or datetime.min, p.id))


def list_orders(
    db: Session,
    search: Optional[str] = None,
    status: Optional[str] = None,
    customer_id: Optional[int] = None,
) -> List[dict]:
    q = _orders_with_customer(db).options(selectinload(Order.details), selectinload(Order.payments))

    if customer_id is not None:
        q = q.filter(Order.customer_id == customer_id)
    if search:
        # % and _ in the search text match literally
        q = q.filter(
            or_(
                cast(Order.id, String).contains(search, autoescape=True),
                User.full_name.icontains(search, autoescape=True),
                User.email.icontains(search, autoescape=True),
            )
        )
    q = _apply_status(q, status)

    rows = []
    for order in q.order_by(Order.order_date.desc(), Order.id.desc()).all():
        customer = order.customer
        user = customer.user if customer else None
        payment = latest_payment(order)
        rows.append(
            {
                "id": order.id,
                "reference": f"ORD-{order.id}",
                "customer_id": order.customer_id,
                "customer_name": user.full_name if user else None,
                "customer_email": user.email if user else None,
                "order_date": order.order_date,
                "total_amount": order.total_amount or Decimal("0"),
                "status": order.status,
                "item_count": len(order.details),
                "payment_method": payment.payment_method if payment else None,
                "payment_status": payment.payment_status if payment else None,
                "shipping_address": customer.address if customer else None,
            }
        )
    return rows


def export_orders_csv(db: Session, status: Optional[str] = None) -> str:
    """One row per order. Fields containing commas, quotes or newlines are quoted."""
    orders = _apply_status(_orders_with_customer(db), status).order_by(Order.id).all()

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_HEADER)
    for order in orders:
        user = order.customer.user if order.customer else None
        writer.writerow([
            order.id,
            user.full_name if user else "",
            user.email if user else "",
            order.order_date.strftime("%Y-%m-%d") if order.order_date else "",
            f"{(order.total_amount or Decimal('0')):.2f}",
            order.status,
        ])
    return output.getvalue()


# --------------------------------------------------------------- dashboard

def _successful_revenue(db: Session, customer_id: Optional[int] = None) -> Decimal:
    q = db.query(func.sum(Payment.amount_paid)).filter(Payment.payment_status == PaymentStatus.SUCCESS.value)
    if customer_id is not None:
        q = q.join(Order, Payment.order_id == Order.id).filter(Order.customer_id == customer_id)
    return Decimal(str(q.scalar() or 0))


def dashboard_stats(db: Session, role: str, user_id: int) -> dict:
    parsed = Role.parse(role)

    if parsed.is_staff:
        return {
            "total_medicines": db.query(func.count(Medicine.id)).scalar() or 0,
            "total_orders": db.query(func.count(Order.id)).scalar() or 0,
            "active_customers": db.query(func.count(func.distinct(Customer.id))).scalar() or 0,
            "total_revenue": _successful_revenue(db),
        }

    customer = customer_for_user(db, user_id)
    if customer is None:
        return {"my_orders": 0, "total_orders": 0, "total_revenue": Decimal("0")}

    my_orders = db.query(func.count(Order.id)).filter(Order.customer_id == customer.id).scalar() or 0
    return {
        "my_orders": my_orders,
        "total_orders": my_orders,
        "total_revenue": _successful_revenue(db, customer.id),
    }


def recent_orders(db: Session, role: str, user_id: int, limit: int = 4) -> List[dict]:
    parsed = Role.parse(role)
    q = _orders_with_customer(db)

    if parsed == Role.CUSTOMER:
        customer = customer_for_user(db, user_id)
        if customer is None:
            return []
        q = q.filter(Order.customer_id == customer.id)

    orders = q.order_by(Order.order_date.desc(), Order.id.desc()).limit(limit).all()
    return [
        {
            "id": o.id,
            "customer_name": (
                o.customer.user.full_name
                if parsed != Role.CUSTOMER and o.customer and o.customer.user
                else None
            ),
            "total_amount": o.total_amount or Decimal("0"),
            "status": o.status,
            "order_date": o.order_date,
        }
        for o in orders
    ]
