from datetime import datetime, timezone
from decimal import Decimal

from storefront.config import Config
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.utils.formatters import format_datetime, format_order, format_price


def test_format_price():
    assert format_price(Decimal("1234.5")) == "1,234.50"
    assert format_price(Decimal("0.005")) == "0.01"


def test_format_datetime_treats_naive_as_utc(monkeypatch):
    monkeypatch.setattr(Config, "TIMEZONE", "Europe/Berlin")

    assert format_datetime(datetime(2025, 1, 15, 12, 0)) == "2025-01-15 13:00:00"
    assert format_datetime(datetime(2025, 7, 15, 12, 0, tzinfo=timezone.utc)) == "2025-07-15 14:00:00"


def test_format_order(monkeypatch):
    monkeypatch.setattr(Config, "TIMEZONE", "UTC")
    order = Order(
        order_id=12,
        user_id=3,
        status=OrderStatus.PENDING,
        total_amount=Decimal("30.00"),
        created_at=datetime(2025, 8, 27, 9, 30, tzinfo=timezone.utc),
        items=[OrderItem(product_id=1, product_name="Widget", quantity=3,
                         price_per_unit=Decimal("10.00"))],
    )

    text = format_order(order)

    assert "Order #12 (user 3)" in text
    assert "- 3x Widget: 10.00 = 30.00" in text
    assert "Total: 30.00" in text
    assert "Status: pending" in text
    assert "Date: 2025-08-27 09:30:00" in text
