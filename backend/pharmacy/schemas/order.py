from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from pharmacy.schemas.common import CamelModel, Money
from pharmacy.schemas.order_detail import OrderLine


class OrderCreate(CamelModel):
    customer_id: int
    total_amount: Money = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    status: str = "Pending"


class OrderStatusUpdate(CamelModel):
    status: str = Field(min_length=1, max_length=50)


class OrderResponse(CamelModel):
    id: int
    customer_id: Optional[int] = None
    order_date: datetime
    total_amount: Money
    status: str


class OrderWithLines(OrderResponse):
    details: List[OrderLine] = []
    items_total: Money


class OrderListItem(CamelModel):
    """Flattened row for the orders table."""
    id: int
    reference: str
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    order_date: datetime
    total_amount: Money
    status: str
    item_count: int
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    shipping_address: Optional[str] = None
