from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from pharmacy.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    # Not an owning relationship: deleting a category detaches its medicines
    medicines = relationship("Medicine", back_populates="category", order_by="Medicine.id")
