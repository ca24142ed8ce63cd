from typing import List

from pharmacy.schemas.common import CamelModel, NameStr
from pharmacy.schemas.medicine import MedicineResponse


class CategoryCreate(CamelModel):
    name: NameStr


class CategoryUpdate(CategoryCreate):
    pass


class CategoryResponse(CamelModel):
    id: int
    name: str


class CategoryWithMedicines(CategoryResponse):
    medicines: List[MedicineResponse] = []
