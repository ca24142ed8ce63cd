"""Categories and medicines."""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from pharmacy.core.config import settings
from pharmacy.core.exceptions import NotFound, StorageConstraintError, ValidationError
from pharmacy.db.transaction import transaction
from pharmacy.models.category import Category
from pharmacy.models.medicine import Medicine
from pharmacy.schemas.medicine import MedicineCreate

logger = logging.getLogger(__name__)


# -------------------------------------------------------------- categories

def list_categories(db: Session) -> List[Category]:
    return (
        db.query(Category)
        .options(selectinload(Category.medicines))
        .order_by(Category.id)
        .all()
    )


def get_category(db: Session, category_id: int) -> Category:
    category = (
        db.query(Category)
        .options(selectinload(Category.medicines))
        .filter(Category.id == category_id)
        .first()
    )
    if not category:
        raise NotFound("Category")
    return category


def create_category(db: Session, name: str) -> Category:
    category = Category(name=name.strip())
    with transaction(db):
        db.add(category)
    db.refresh(category)
    return category


def update_category(db: Session, category_id: int, name: str) -> Category:
    category = get_category(db, category_id)
    with transaction(db):
        category.name = name.strip()
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> None:
    """Detach the category's medicines, then delete it. The medicines are kept."""
    category = get_category(db, category_id)
    with transaction(db):
        detached = (
            db.query(Medicine)
            .filter(Medicine.category_id == category_id)
            .update({Medicine.category_id: None}, synchronize_session="fetch")
        )
        db.delete(category)
    logger.info(f"Deleted category {category_id}, detached {detached} medicines")


def category_dropdown(db: Session) -> List[Tuple[int, str]]:
    return db.query(Category.id, Category.name).order_by(Category.name).all()


# --------------------------------------------------------------- medicines

def _check_category(db: Session, category_id: Optional[int]) -> None:
    if category_id is not None and db.get(Category, category_id) is None:
        raise ValidationError("Invalid CategoryId")


def list_medicines(db: Session) -> List[Medicine]:
    return (
        db.query(Medicine)
        .options(selectinload(Medicine.category))
        .order_by(Medicine.id)
        .all()
    )


def medicines_page(db: Session, page: int = 1, page_size: int = 9) -> Tuple[int, List[Medicine]]:
    """Plain skip/take over id order. Returns (total_count, page_items)."""
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"pageSize must be between 1 and {settings.MAX_PAGE_SIZE}")

    total = db.query(Medicine).count()
    items = (
        db.query(Medicine)
        .options(selectinload(Medicine.category))
        .order_by(Medicine.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return total, items


def get_medicine(db: Session, medicine_id: int) -> Medicine:
    medicine = (
        db.query(Medicine)
        .options(selectinload(Medicine.category))
        .filter(Medicine.id == medicine_id)
        .first()
    )
    if not medicine:
        raise NotFound("Medicine")
    return medicine


def create_medicine(db: Session, data: MedicineCreate) -> Medicine:
    _check_category(db, data.category_id)
    medicine = Medicine(**data.model_dump())
    medicine.name = medicine.name.strip()
    with transaction(db):
        db.add(medicine)
    db.refresh(medicine)
    logger.info(f"Added medicine {medicine.id} '{medicine.name}' (stock {medicine.quantity_in_stock})")
    return medicine


def update_medicine(db: Session, medicine_id: int, data: MedicineCreate) -> Medicine:
    medicine = get_medicine(db, medicine_id)
    _check_category(db, data.category_id)
    with transaction(db):
        for key, value in data.model_dump().items():
            setattr(medicine, key, value)
        medicine.name = medicine.name.strip()
    db.refresh(medicine)
    return medicine


def delete_medicine(db: Session, medicine_id: int) -> None:
    medicine = get_medicine(db, medicine_id)
    with transaction(
        db,
        on_integrity_error=lambda _e: StorageConstraintError(
            "Medicine is referenced by existing order lines and cannot be deleted"
        ),
    ):
        db.delete(medicine)
    logger.info(f"Deleted medicine {medicine_id}")


def search_medicines(db: Session, term: str) -> List[Medicine]:
    """Case-insensitive substring match on name or brand."""
    term = (term or "").strip()
    q = db.query(Medicine).options(selectinload(Medicine.category))
    if term:
        q = q.filter(
            or_(
                Medicine.name.icontains(term, autoescape=True),
                Medicine.brand.icontains(term, autoescape=True),
            )
        )
    return q.order_by(Medicine.name).all()


def low_stock_medicines(db: Session, threshold: Optional[int] = None) -> List[Medicine]:
    limit = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    return (
        db.query(Medicine)
        .filter(Medicine.quantity_in_stock <= limit)
        .order_by(Medicine.quantity_in_stock.asc(), Medicine.id)
        .all()
    )


def medicines_by_category(db: Session, category_id: int) -> List[Medicine]:
    return get_category(db, category_id).medicines


def medicine_dropdown(db: Session) -> List[Tuple[int, str]]:
    return db.query(Medicine.id, Medicine.name).order_by(Medicine.name).all()
