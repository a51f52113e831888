from models.users import User
from models.product import Product
from models.order import Order, OrderItem
from models.cart import CartItem
from models.log import Log

__all__ = ["User", "Product", "Order", "OrderItem", "CartItem", "Log"]
