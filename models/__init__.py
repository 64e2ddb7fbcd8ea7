# Models package initialization
# Contains MongoDB document schemas

from .user import User, UserRole, role_satisfies
from .product import Pricing, Product, ProductStatus
from .order import Order, OrderItem, OrderStatus
from .category import Category

__all__ = [
    'User', 'UserRole', 'role_satisfies',
    'Pricing', 'Product', 'ProductStatus',
    'Order', 'OrderItem', 'OrderStatus',
    'Category',
]
