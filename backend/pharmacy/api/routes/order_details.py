"""Order line items."""
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db
from pharmacy.schemas.order_detail import OrderDetailCreate, OrderDetailResponse, OrderDetailUpdate
from pharmacy.services import order_service

router = APIRouter()


@router.get("/{detail_id}", response_model=OrderDetailResponse)
def get_order_detail(detail_id: int, db: Session = Depends(get_db)):
    return order_service.get_line_item(db, detail_id)


@router.post("", response_model=OrderDetailResponse, status_code=status.HTTP_201_CREATED)
def add_order_detail(data: OrderDetailCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    detail = order_service.add_line_item(db, data.order_id, data.medicine_id, data.quantity)
    response.headers["Location"] = str(request.url_for("get_order_detail", detail_id=detail.id))
    return detail


@router.put("/{detail_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_order_detail(detail_id: int, data: OrderDetailUpdate, db: Session = Depends(get_db)):
    order_service.update_line_item_quantity(db, detail_id, data.quantity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{detail_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order_detail(detail_id: int, db: Session = Depends(get_db)):
    order_service.remove_line_item(db, detail_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
