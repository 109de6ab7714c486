from .category import Category, CategoryCreate, CategoryUpdate
from .product import Product, ProductCreate, ProductUpdate
from .order import (
    Order,
    OrderItem,
    OrderStatus,
    OrderLineRequest,
    PlaceOrderRequest,
    OrderFilters
)
from .page import Page

__all__ = [
    'Category',
    'CategoryCreate',
    'CategoryUpdate',
    'Product',
    'ProductCreate',
    'ProductUpdate',
    'Order',
    'OrderItem',
    'OrderStatus',
    'OrderLineRequest',
    'PlaceOrderRequest',
    'OrderFilters',
    'Page'
]
