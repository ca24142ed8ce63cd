"""Orders: listing, export, placement, status changes and purge."""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db
from pharmacy.models.enums import ORDER_STATUS_OPTIONS
from pharmacy.schemas.order import OrderCreate, OrderListItem, OrderResponse, OrderStatusUpdate, OrderWithLines
from pharmacy.schemas.order_detail import OrderLine
from pharmacy.services import order_service, report_service

router = APIRouter()


@router.get("", response_model=List[OrderListItem])
def list_orders(
    search: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    customer_id: Optional[int] = Query(None, alias="customerId"),
    db: Session = Depends(get_db),
):
    """Orders table, newest first. ``status=All`` means no status filter."""
    return report_service.list_orders(db, search=search, status=status_filter, customer_id=customer_id)


@router.get("/export")
def export_orders(status_filter: Optional[str] = Query(None, alias="status"), db: Session = Depends(get_db)):
    content = report_service.export_orders_csv(db, status_filter)
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=orders-{date.today():%Y%m%d}.csv"},
    )


@router.get("/status", response_model=List[str])
def order_statuses():
    return ORDER_STATUS_OPTIONS


@router.get("/customer/{customer_id}", response_model=List[OrderWithLines])
def orders_by_customer(customer_id: int, db: Session = Depends(get_db)):
    return order_service.list_by_customer(db, customer_id)


@router.get("/{order_id}", response_model=OrderWithLines)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return order_service.get_order(db, order_id)


@router.get("/{order_id}/details", response_model=List[OrderLine])
def get_order_details(order_id: int, db: Session = Depends(get_db)):
    return order_service.get_order_lines(db, order_id)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def place_order(data: OrderCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    order = order_service.place_order(db, data.customer_id, data.total_amount, data.status)
    response.headers["Location"] = str(request.url_for("get_order", order_id=order.id))
    return order


@router.put("/{order_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def update_order_status(order_id: int, data: OrderStatusUpdate, db: Session = Depends(get_db)):
    order_service.update_order_status(db, order_id, data.status)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_order(order_id: int, db: Session = Depends(get_db)):
    """Delete the order and its line items. Refused once payments exist."""
    order_service.cancel_order(db, order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
