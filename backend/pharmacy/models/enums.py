"""Closed vocabularies used at the API boundary.

Stored columns stay plain strings; text coming from clients is parsed into
these enums before it reaches a service.
"""
from enum import Enum

from pharmacy.core.exceptions import ValidationError


class Role(str, Enum):
    ADMIN = "Admin"
    PHARMACIST = "Pharmacist"
    CUSTOMER = "Customer"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Case-insensitive lookup. Unknown or empty text is a ValidationError."""
        text = (value or "").strip().lower()
        for role in cls:
            if role.value.lower() == text:
                return role
        raise ValidationError(f"Invalid role: {value!r}. Expected one of {', '.join(r.value for r in cls)}")

    @property
    def is_staff(self) -> bool:
        return self in (Role.ADMIN, Role.PHARMACIST)


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value: str | None) -> "OrderStatus":
        text = (value or "").strip().lower()
        for status in cls:
            if status.value.lower() == text:
                return status
        raise ValidationError(f"Invalid order status: {value!r}")


class PaymentStatus(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"
    PENDING = "Pending"


class PaymentMethod(str, Enum):
    CARD = "Card"
    UPI = "UPI"
    COD = "COD"


# Dropdown contents served to the client
ORDER_STATUS_OPTIONS = [
    OrderStatus.PENDING.value,
    OrderStatus.PROCESSING.value,
    OrderStatus.DELIVERED.value,
    OrderStatus.CANCELLED.value,
]
PAYMENT_METHOD_OPTIONS = [m.value for m in PaymentMethod]
PAYMENT_STATUS_OPTIONS = [PaymentStatus.SUCCESS.value, PaymentStatus.FAILED.value]
