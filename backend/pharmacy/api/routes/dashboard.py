"""Dashboard counters, shaped by the caller's role."""
from typing import List, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db
from pharmacy.schemas.dashboard import CustomerStats, RecentOrder, StaffStats
from pharmacy.services import report_service

router = APIRouter()


@router.get("/stats", response_model=Union[StaffStats, CustomerStats])
def dashboard_stats(
    role: str = Query(...),
    user_id: int = Query(..., alias="userId"),
    db: Session = Depends(get_db),
):
    """
    Admin and Pharmacist see shop-wide totals; a Customer sees their own
    order count and successful payments.
    """
    stats = report_service.dashboard_stats(db, role, user_id)
    if "my_orders" in stats:
        return CustomerStats(**stats)
    return StaffStats(**stats)


@router.get("/recent-orders", response_model=List[RecentOrder])
def recent_orders(
    role: str = Query(...),
    user_id: int = Query(..., alias="userId"),
    limit: int = Query(4, ge=1, le=50),
    db: Session = Depends(get_db),
):
    return report_service.recent_orders(db, role, user_id, limit)
