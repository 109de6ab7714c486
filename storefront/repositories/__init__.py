from .category_repository import CategoryRepository
from .product_repository import ProductRepository
from .order_repository import OrderRepository

__all__ = [
    'CategoryRepository',
    'ProductRepository',
    'OrderRepository'
]
