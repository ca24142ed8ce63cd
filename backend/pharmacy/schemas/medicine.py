from datetime import date
from typing import List, Optional

from pydantic import Field

from pharmacy.schemas.common import CamelModel, Money, NameStr


class MedicineCreate(CamelModel):
    name: NameStr
    brand: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=255)
    price: Money = Field(ge=0, max_digits=10, decimal_places=2)
    quantity_in_stock: int = Field(default=0, ge=0)
    expiry_date: Optional[date] = None
    category_id: Optional[int] = None
    image_url: Optional[str] = Field(default=None, max_length=255)


class MedicineUpdate(MedicineCreate):
    """Full replacement, same shape as create."""


class MedicineCategory(CamelModel):
    id: int
    name: str


class MedicineResponse(CamelModel):
    id: int
    name: str
    brand: Optional[str] = None
    description: Optional[str] = None
    price: Money
    quantity_in_stock: int
    expiry_date: Optional[date] = None
    category_id: Optional[int] = None
    image_url: Optional[str] = None
    category: Optional[MedicineCategory] = None


class MedicinePage(CamelModel):
    total_count: int
    page: int
    page_size: int
    values: List[MedicineResponse]
