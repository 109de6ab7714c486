# storefront/utils/formatters.py
from datetime import datetime
import pytz
from decimal import Decimal
from ..config import Config
from ..models.order import Order
from .pricing import quantize_money

def format_price(amount: Decimal) -> str:
    """Format a money amount with two decimal places"""
    return f"{quantize_money(amount):,.2f}"

def format_datetime(dt: datetime) -> str:
    """Format a timestamp in the configured timezone"""
    local_tz = pytz.timezone(Config.TIMEZONE)
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(local_tz).strftime("%Y-%m-%d %H:%M:%S")

def format_order(order: Order) -> str:
    """Plain-text summary of an order and its items"""
    items_text = "\n".join([
        f"- {item.quantity}x {item.product_name or item.product_id}: "
        f"{format_price(item.price_per_unit)} = {format_price(item.subtotal)}"
        for item in order.items
    ])

    return (
        f"Order #{order.order_id} (user {order.user_id})\n"
        f"------------------\n"
        f"{items_text}\n"
        f"------------------\n"
        f"Total: {format_price(order.total_amount)}\n"
        f"Status: {order.status.value}\n"
        f"Date: {format_datetime(order.created_at)}\n"
    )
