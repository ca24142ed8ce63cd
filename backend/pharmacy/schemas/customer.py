from typing import Optional

from pydantic import Field

from pharmacy.schemas.common import CamelModel
from pharmacy.schemas.user import UserSummary


class CustomerCreate(CamelModel):
    user_id: int
    address: str = Field(min_length=1, max_length=255)
    phone_number: str = Field(min_length=1, max_length=15)


class CustomerUpdate(CustomerCreate):
    pass


class CustomerResponse(CamelModel):
    id: int
    user_id: Optional[int] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None
    user: Optional[UserSummary] = None
