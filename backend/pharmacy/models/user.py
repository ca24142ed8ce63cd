from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from pharmacy.db.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False)  # Admin | Pharmacist | Customer
    created_at = Column(DateTime, nullable=False, default=utcnow)
    image_url = Column(String(255), nullable=True)

    customers = relationship("Customer", back_populates="user", passive_deletes="all")
