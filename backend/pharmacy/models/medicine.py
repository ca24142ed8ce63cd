from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Date
from sqlalchemy.orm import relationship
from pharmacy.db.base import Base


class Medicine(Base):
    """
    Catalogue entry.

    quantity_in_stock is managed by staff. It only moves with orders when
    RESERVE_STOCK_ON_ORDER is enabled (see services.inventory_service).
    """
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    brand = Column(String(100), nullable=True)
    description = Column(String(255), nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    quantity_in_stock = Column(Integer, nullable=False, default=0)
    expiry_date = Column(Date, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    image_url = Column(String(255), nullable=True)

    category = relationship("Category", back_populates="medicines")
    # passive_deletes="all": the database refuses to drop a medicine still on an order line
    order_details = relationship("OrderDetail", back_populates="medicine", passive_deletes="all")
