# storefront/utils/pricing.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple, Union

Number = Union[Decimal, int, str]

CENT = Decimal("0.01")

def to_decimal(value: Number) -> Decimal:
    """Convert a price to Decimal without passing through float"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise TypeError("Money values must not be floats")
    return Decimal(str(value))

def quantize_money(value: Number) -> Decimal:
    """Round to two decimal places, half-up"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)

def validate_stock(available: int, requested: int) -> bool:
    """Whether the available stock covers the requested quantity"""
    return available >= requested

def compute_total(lines: Iterable[Tuple[Number, int]]) -> Decimal:
    """Sum of unit_price * quantity, rounded once at the total"""
    total = Decimal(0)
    for unit_price, quantity in lines:
        total += to_decimal(unit_price) * quantity
    return quantize_money(total)
