"""Payments recorded against orders."""
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db
from pharmacy.models.enums import PAYMENT_METHOD_OPTIONS, PAYMENT_STATUS_OPTIONS
from pharmacy.schemas.payment import PaymentCreate, PaymentResponse
from pharmacy.services import payment_service

router = APIRouter()


@router.get("", response_model=List[PaymentResponse])
def list_payments(db: Session = Depends(get_db)):
    return payment_service.list_payments(db)


@router.get("/methods", response_model=List[str])
def payment_methods():
    return PAYMENT_METHOD_OPTIONS


@router.get("/status", response_model=List[str])
def payment_statuses():
    return PAYMENT_STATUS_OPTIONS


@router.get("/order/{order_id}", response_model=List[PaymentResponse])
def payments_for_order(order_id: int, db: Session = Depends(get_db)):
    return payment_service.payments_for_order(db, order_id)


@router.get("/{payment_id}", response_model=PaymentResponse)
def get_payment(payment_id: int, db: Session = Depends(get_db)):
    return payment_service.get_payment(db, payment_id)


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def record_payment(data: PaymentCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    payment = payment_service.record_payment(
        db, data.order_id, data.amount_paid, data.payment_method, data.payment_status
    )
    response.headers["Location"] = str(request.url_for("get_payment", payment_id=payment.id))
    return payment
