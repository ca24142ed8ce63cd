from pharmacy.models.category import Category
from pharmacy.models.medicine import Medicine
from pharmacy.models.user import User
from pharmacy.models.customer import Customer
from pharmacy.models.order import Order
from pharmacy.models.order_detail import OrderDetail
from pharmacy.models.payment import Payment

__all__ = ["Category", "Medicine", "User", "Customer", "Order", "OrderDetail", "Payment"]
