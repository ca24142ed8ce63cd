from datetime import datetime
from typing import Optional

from pharmacy.schemas.common import CamelModel, Money


class StaffStats(CamelModel):
    total_medicines: int
    total_orders: int
    active_customers: int
    total_revenue: Money


class CustomerStats(CamelModel):
    my_orders: int
    total_orders: int
    total_revenue: Money


class RecentOrder(CamelModel):
    id: int
    customer_name: Optional[str] = None
    total_amount: Money
    status: str
    order_date: datetime
