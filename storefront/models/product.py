# storefront/models/product.py
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from .base import MAX_INT, TimeStampedModel

class Product(TimeStampedModel):
    """Product model for catalog goods"""
    product_id: int
    category_id: int
    name: str
    sku: int
    description: Optional[str] = None
    price: Decimal
    # Available-quantity counter consumed by order placement
    stock: int = 0

    # Not stored in the products table, joined when read
    category_name: Optional[str] = None

class ProductCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category_id: int = Field(gt=0, le=MAX_INT)
    name: str = Field(min_length=1, max_length=255)
    sku: int = Field(gt=0, le=MAX_INT)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(default=0, ge=0, le=MAX_INT)

class ProductUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category_id: Optional[int] = Field(default=None, gt=0, le=MAX_INT)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    sku: Optional[int] = Field(default=None, gt=0, le=MAX_INT)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
