from pydantic import Field

from pharmacy.schemas.common import CamelModel, Money


class OrderDetailCreate(CamelModel):
    order_id: int
    medicine_id: int
    quantity: int = Field(gt=0)


class OrderDetailUpdate(CamelModel):
    quantity: int = Field(gt=0)


class OrderDetailResponse(CamelModel):
    id: int
    order_id: int
    medicine_id: int
    quantity: int
    unit_price: Money


class OrderLine(OrderDetailResponse):
    """Line item as shown inside an order, with the medicine name and extended price."""
    medicine_name: str | None = None
    line_total: Money
