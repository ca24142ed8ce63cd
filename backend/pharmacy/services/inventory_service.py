"""Stock movements tied to order lines.

Only used when RESERVE_STOCK_ON_ORDER is enabled. These helpers never commit:
they run inside the caller's transaction so the stock change and the line
item change land together or not at all.
"""
import logging

from sqlalchemy.orm import Session

from pharmacy.core.config import settings
from pharmacy.core.exceptions import ValidationError
from pharmacy.models.medicine import Medicine

logger = logging.getLogger(__name__)


def stock_reservation_enabled() -> bool:
    return settings.RESERVE_STOCK_ON_ORDER


def adjust_quantity(db: Session, medicine_id: int, delta: int) -> Medicine | None:
    """
    Move stock by ``delta`` (negative reserves, positive releases).

    The decrement is a single conditional UPDATE, so two concurrent
    reservations cannot both pass the availability check.
    """
    if delta == 0:
        return db.get(Medicine, medicine_id)

    q = db.query(Medicine).filter(Medicine.id == medicine_id)
    if delta < 0:
        q = q.filter(Medicine.quantity_in_stock >= -delta)
    updated = q.update(
        {Medicine.quantity_in_stock: Medicine.quantity_in_stock + delta},
        synchronize_session="fetch",
    )
    if not updated:
        medicine = db.get(Medicine, medicine_id)
        available = medicine.quantity_in_stock if medicine is not None else 0
        raise ValidationError(
            f"Insufficient stock for medicine {medicine_id}: requested {-delta}, available {available}"
        )

    logger.info(f"Stock for medicine {medicine_id} adjusted by {delta}")
    return db.get(Medicine, medicine_id)


def reserve(db: Session, medicine_id: int, quantity: int) -> None:
    adjust_quantity(db, medicine_id, -quantity)


def release(db: Session, medicine_id: int, quantity: int) -> None:
    # Medicine rows cannot be deleted while referenced, so the target exists
    adjust_quantity(db, medicine_id, quantity)
