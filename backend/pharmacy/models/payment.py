from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, DateTime
from sqlalchemy.orm import relationship
from pharmacy.db.base import Base, utcnow


class Payment(Base):
    """Recorded payment. Status is bookkeeping only; nothing is charged here."""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    amount_paid = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(50), nullable=False)
    payment_status = Column(String(50), nullable=False, default="Pending")  # Success | Failed | Pending
    payment_date = Column(DateTime, nullable=False, default=utcnow)

    order = relationship("Order", back_populates="payments")
