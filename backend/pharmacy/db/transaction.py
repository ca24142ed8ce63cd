"""Commit/rollback boundary for multi-step service operations."""
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from pharmacy.core.exceptions import PharmacyError, StorageConstraintError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(
    db: Session,
    on_integrity_error: Optional[Callable[[IntegrityError], PharmacyError]] = None,
) -> Iterator[Session]:
    """
    Run the block as one unit of work: commit on success, roll back on any error.

    Integrity errors are translated with ``on_integrity_error`` when given,
    otherwise into a generic StorageConstraintError. A row that vanished
    between load and flush becomes a stale StorageConstraintError (404).
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Integrity error rolled back: {exc.orig}")
        if on_integrity_error is not None:
            raise on_integrity_error(exc) from exc
        raise StorageConstraintError() from exc
    except StaleDataError as exc:
        db.rollback()
        logger.warning(f"Stale row rolled back: {exc}")
        raise StorageConstraintError("The record was modified or deleted by another request", stale=True) from exc
    except Exception:
        db.rollback()
        raise
