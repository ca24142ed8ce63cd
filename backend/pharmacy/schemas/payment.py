from datetime import datetime

from pydantic import Field

from pharmacy.schemas.common import CamelModel, Money


class PaymentCreate(CamelModel):
    order_id: int
    amount_paid: Money = Field(ge=0, max_digits=10, decimal_places=2)
    payment_method: str = Field(min_length=1, max_length=50)
    payment_status: str = Field(default="Pending", min_length=1, max_length=50)


class PaymentResponse(CamelModel):
    id: int
    order_id: int
    payment_date: datetime
    amount_paid: Money
    payment_method: str
    payment_status: str
