"""Medicine categories."""
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db
from pharmacy.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate, CategoryWithMedicines
from pharmacy.schemas.common import DropdownItem
from pharmacy.services import catalog_service

router = APIRouter()


@router.get("", response_model=List[CategoryWithMedicines])
def list_categories(db: Session = Depends(get_db)):
    return catalog_service.list_categories(db)


@router.get("/dropdown", response_model=List[DropdownItem])
def category_dropdown(db: Session = Depends(get_db)):
    return [DropdownItem(value=cid, label=name) for cid, name in catalog_service.category_dropdown(db)]


@router.get("/{category_id}", response_model=CategoryWithMedicines)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return catalog_service.get_category(db, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(data: CategoryCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    category = catalog_service.create_category(db, data.name)
    response.headers["Location"] = str(request.url_for("get_category", category_id=category.id))
    return category


@router.put("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_category(category_id: int, data: CategoryUpdate, db: Session = Depends(get_db)):
    catalog_service.update_category(db, category_id, data.name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
