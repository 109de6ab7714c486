# storefront/models/page.py
from math import ceil
from typing import Generic, List, TypeVar
from pydantic import BaseModel, computed_field

T = TypeVar("T")

class Page(BaseModel, Generic[T]):
    """One page of a filtered listing"""
    items: List[T]
    page: int
    limit: int
    total: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.page > 1
