"""
Order header. Status flow: Pending -> Processing -> Shipped -> Delivered,
or Pending/Processing -> Cancelled (see services.order_service).
"""
from decimal import Decimal

from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, DateTime
from sqlalchemy.orm import relationship
from pharmacy.db.base import Base, utcnow


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True, index=True)
    order_date = Column(DateTime, nullable=False, default=utcnow)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(50), nullable=False, default="Pending")

    customer = relationship("Customer", back_populates="orders")
    details = relationship(
        "OrderDetail",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderDetail.id",
    )
    payments = relationship(
        "Payment",
        back_populates="order",
        passive_deletes="all",
        order_by="Payment.id",
    )

    @property
    def items_total(self):
        """Sum of line totals. Informational; total_amount is not derived from it."""
        return sum((d.line_total for d in self.details), Decimal("0"))
