"""Medicine catalogue. Fixed paths are declared before ``/{medicine_id}``."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db
from pharmacy.schemas.common import DropdownItem
from pharmacy.schemas.medicine import MedicineCreate, MedicinePage, MedicineResponse, MedicineUpdate
from pharmacy.services import catalog_service

router = APIRouter()


@router.get("", response_model=List[MedicineResponse])
def list_medicines(db: Session = Depends(get_db)):
    return catalog_service.list_medicines(db)


@router.get("/paged", response_model=MedicinePage)
def medicines_paged(
    page: int = Query(1),
    page_size: int = Query(9, alias="pageSize"),
    db: Session = Depends(get_db),
):
    total, items = catalog_service.medicines_page(db, page, page_size)
    return {"total_count": total, "page": page, "page_size": page_size, "values": items}


@router.get("/search", response_model=List[MedicineResponse])
def search_medicines(name: str = Query(""), db: Session = Depends(get_db)):
    return catalog_service.search_medicines(db, name)


@router.get("/stock", response_model=List[MedicineResponse])
def low_stock(threshold: Optional[int] = Query(None, ge=0), db: Session = Depends(get_db)):
    """Medicines at or below the low-stock threshold, lowest stock first."""
    return catalog_service.low_stock_medicines(db, threshold)


@router.get("/dropdown", response_model=List[DropdownItem])
def medicine_dropdown(db: Session = Depends(get_db)):
    return [DropdownItem(value=mid, label=name) for mid, name in catalog_service.medicine_dropdown(db)]


@router.get("/bycategory/{category_id}", response_model=List[MedicineResponse])
def medicines_by_category(category_id: int, db: Session = Depends(get_db)):
    return catalog_service.medicines_by_category(db, category_id)


@router.get("/{medicine_id}", response_model=MedicineResponse)
def get_medicine(medicine_id: int, db: Session = Depends(get_db)):
    return catalog_service.get_medicine(db, medicine_id)


@router.post("", response_model=MedicineResponse, status_code=status.HTTP_201_CREATED)
def create_medicine(data: MedicineCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    medicine = catalog_service.create_medicine(db, data)
    response.headers["Location"] = str(request.url_for("get_medicine", medicine_id=medicine.id))
    return medicine


@router.put("/{medicine_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_medicine(medicine_id: int, data: MedicineUpdate, db: Session = Depends(get_db)):
    catalog_service.update_medicine(db, medicine_id, data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{medicine_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_medicine(medicine_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_medicine(db, medicine_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
