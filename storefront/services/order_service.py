# storefront/services/order_service.py
from collections import Counter
from typing import Any, Dict, List, Optional
from .base_service import BaseService, handles_db_errors
from ..exceptions import InsufficientStockError, NotFoundError, ValidationError
from ..models.order import (
    Order,
    OrderFilters,
    OrderStatus,
    PlaceOrderRequest
)
from ..models.page import Page
from ..repositories import OrderRepository, ProductRepository
from ..utils.pricing import compute_total, validate_stock

SORT_COLUMNS = {
    'created_at': 'created_at',
    'updated_at': 'updated_at',
    'total_amount': 'total_amount',
    'status': 'status'
}

class OrderService(BaseService):
    """Order placement and order management"""

    def __init__(self, db, orders: Optional[OrderRepository] = None,
                 products: Optional[ProductRepository] = None):
        super().__init__(db)
        self.orders = orders or OrderRepository()
        self.products = products or ProductRepository()

    @handles_db_errors("placing order")
    async def place_order(self, user_id: int, items: List[Dict[str, Any]]) -> Order:
        """Place an order and take its quantities off product stock.

        Every step runs in one transaction: the referenced products are
        row-locked, checked against the requested quantities, the order and
        its items are inserted in request order and stock is decremented.
        Any failure rolls all of it back, so a failed placement leaves no
        order, no items and no stock change behind.

        Raises ValidationError for a malformed request, NotFoundError for an
        unknown or deleted product and InsufficientStockError when a product
        cannot cover the quantity requested for it.
        """
        request = self.parse(PlaceOrderRequest, {'user_id': user_id, 'products': items})
        lines = request.products

        async with self.db.pool.acquire() as conn:
            async with conn.transaction():
                products = await self.products.lock_for_update(
                    conn, [line.product_id for line in lines]
                )

                # Lines are checked in request order; lines naming the same
                # product draw on the same counter
                requested = Counter()
                for line in lines:
                    if line.product_id not in products:
                        raise NotFoundError("Product", line.product_id)

                    requested[line.product_id] += line.quantity
                    available = products[line.product_id]['stock']
                    if not validate_stock(available, requested[line.product_id]):
                        raise InsufficientStockError(
                            line.product_id, available, requested[line.product_id]
                        )

                total_amount = compute_total(
                    (products[line.product_id]['price'], line.quantity) for line in lines
                )

                order_id = await self.orders.create(
                    conn, request.user_id, total_amount, OrderStatus.PENDING.value
                )

                for line in lines:
                    await self.orders.add_item(
                        conn,
                        order_id,
                        line.product_id,
                        line.quantity,
                        products[line.product_id]['price']
                    )

                    if not await self.products.decrement_stock(conn, line.product_id, line.quantity):
                        available = await self.products.get_stock(conn, line.product_id)
                        raise InsufficientStockError(
                            line.product_id, available or 0, line.quantity
                        )

                order = await self.orders.get(conn, order_id)

        self.logger.info(
            f"Order {order_id} placed for user {request.user_id}: "
            f"{len(lines)} items, total {total_amount}"
        )
        return Order.model_validate(order)

    @handles_db_errors("loading order")
    async def get_order(self, order_id: int) -> Order:
        self.check_id(order_id, "order")

        async with self.db.pool.acquire() as conn:
            order = await self.orders.get(conn, order_id)

        if not order:
            raise NotFoundError("Order", order_id)
        return Order.model_validate(order)

    @handles_db_errors("listing orders")
    async def list_orders(self, filters: Optional[Dict[str, Any]] = None, page: int = 1,
                          limit: Optional[int] = None, sort_by: str = 'created_at',
                          sort_order: str = 'DESC') -> Page[Order]:
        page, limit, offset = self.paginate(page, limit)
        column, sort_order = self.sorting(sort_by, sort_order, SORT_COLUMNS)
        conditions = self._filters(filters)

        async with self.db.pool.acquire() as conn:
            rows, total = await self.orders.search(
                conn, conditions, column, sort_order, limit, offset
            )

        return Page[Order](
            items=[Order.model_validate(row) for row in rows],
            page=page,
            limit=limit,
            total=total
        )

    async def get_user_orders(self, user_id: int, limit: Optional[int] = None) -> List[Order]:
        """Most recent orders of one user"""
        self.check_id(user_id, "user")
        result = await self.list_orders({'user_id': user_id}, limit=limit)
        return result.items

    @handles_db_errors("counting orders")
    async def count_orders(self, filters: Optional[Dict[str, Any]] = None) -> int:
        async with self.db.pool.acquire() as conn:
            return await self.orders.count(conn, self._filters(filters))

    @handles_db_errors("loading order")
    async def order_exists(self, order_id: int) -> bool:
        if order_id <= 0:
            return False

        async with self.db.pool.acquire() as conn:
            return await self.orders.exists(conn, order_id)

    @handles_db_errors("updating order")
    async def update_order_status(self, order_id: int, status: OrderStatus) -> Order:
        """Set the order status; stock is left as it is"""
        self.check_id(order_id, "order")
        try:
            status = OrderStatus(status)
        except ValueError:
            raise ValidationError(
                "Status must be one of: " + ", ".join(s.value for s in OrderStatus)
            )

        async with self.db.pool.acquire() as conn:
            if not await self.orders.update_status(conn, order_id, status.value):
                raise NotFoundError("Order", order_id)
            order = await self.orders.get(conn, order_id)

        self.logger.info(f"Order {order_id} status set to {status.value}")
        return Order.model_validate(order)

    @handles_db_errors("deleting order")
    async def delete_order(self, order_id: int):
        self.check_id(order_id, "order")

        async with self.db.pool.acquire() as conn:
            if not await self.orders.soft_delete(conn, order_id):
                raise NotFoundError("Order", order_id)

        self.logger.info(f"Deleted order {order_id}")

    def _filters(self, filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        parsed = self.parse(OrderFilters, filters or {})
        conditions = parsed.model_dump(exclude_none=True)
        if parsed.status is not None:
            conditions['status'] = parsed.status.value
        return conditions
