"""Customer profiles."""
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db
from pharmacy.schemas.common import DropdownItem
from pharmacy.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from pharmacy.services import customer_service

router = APIRouter()


@router.get("", response_model=List[CustomerResponse])
def list_customers(db: Session = Depends(get_db)):
    return customer_service.list_customers(db)


@router.get("/dropdown", response_model=List[DropdownItem])
def customer_dropdown(db: Session = Depends(get_db)):
    return [DropdownItem(value=cid, label=name) for cid, name in customer_service.customer_dropdown(db)]


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    return customer_service.get_customer(db, customer_id)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(data: CustomerCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    customer = customer_service.create_customer(db, data.user_id, data.address, data.phone_number)
    response.headers["Location"] = str(request.url_for("get_customer", customer_id=customer.id))
    return customer


@router.put("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_customer(customer_id: int, data: CustomerUpdate, db: Session = Depends(get_db)):
    customer_service.update_customer(db, customer_id, data.user_id, data.address, data.phone_number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    customer_service.delete_customer(db, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
