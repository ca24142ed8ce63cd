from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from pharmacy.db.base import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    address = Column(String(255), nullable=True)
    phone_number = Column(String(15), nullable=True)

    user = relationship("User", back_populates="customers")
    orders = relationship("Order", back_populates="customer", passive_deletes="all")
