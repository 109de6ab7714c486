# storefront/models/order.py
from decimal import Decimal
from pydantic import BaseModel, Field
from enum import Enum
from typing import List, Optional
from .base import MAX_INT, TimeStampedModel

class OrderStatus(str, Enum):
    PENDING = "pending"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class OrderItem(BaseModel):
    """Individual item in an order"""
    order_item_id: Optional[int] = None
    product_id: int
    product_name: Optional[str] = None
    quantity: int
    price_per_unit: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.price_per_unit * self.quantity

class Order(TimeStampedModel):
    """Order model for purchases"""
    order_id: int
    user_id: int
    status: OrderStatus
    items: List[OrderItem] = []
    total_amount: Decimal

class OrderLineRequest(BaseModel):
    """One requested line of a placement"""
    product_id: int = Field(gt=0, le=MAX_INT)
    quantity: int = Field(gt=0, le=MAX_INT)

class PlaceOrderRequest(BaseModel):
    user_id: int = Field(gt=0, le=MAX_INT)
    products: List[OrderLineRequest] = Field(min_length=1)

class OrderFilters(BaseModel):
    user_id: Optional[int] = Field(default=None, gt=0, le=MAX_INT)
    status: Optional[OrderStatus] = None
    min_total: Optional[Decimal] = Field(default=None, ge=0)
    max_total: Optional[Decimal] = Field(default=None, ge=0)
