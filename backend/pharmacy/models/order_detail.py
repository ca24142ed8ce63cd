from sqlalchemy import Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from pharmacy.db.base import Base


class OrderDetail(Base):
    """One line item. unit_price is a snapshot of Medicine.price at insertion."""
    __tablename__ = "order_details"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="details")
    medicine = relationship("Medicine", back_populates="order_details")

    @property
    def medicine_name(self) -> str | None:
        return self.medicine.name if self.medicine is not None else None

    @property
    def line_total(self):
        return (self.unit_price or 0) * (self.quantity or 0)
