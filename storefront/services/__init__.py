from .category_service import CategoryService
from .product_service import ProductService
from .order_service import OrderService

__all__ = [
    'CategoryService',
    'ProductService',
    'OrderService'
]
