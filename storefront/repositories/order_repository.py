# storefront/repositories/order_repository.py
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

class OrderRepository:
    """SQL access to the orders and order_items tables"""

    async def create(self, conn, user_id: int, total_amount: Decimal, status: str) -> int:
        """Insert an order header and return its id"""
        return await conn.fetchval("""
            INSERT INTO orders (
                user_id, status, total_amount
            ) VALUES ($1, $2, $3)
            RETURNING order_id
        """, user_id, status, total_amount)

    async def add_item(self, conn, order_id: int, product_id: int,
                       quantity: int, price_per_unit: Decimal) -> int:
        return await conn.fetchval("""
            INSERT INTO order_items (
                order_id, product_id, quantity, price_per_unit
            ) VALUES ($1, $2, $3, $4)
            RETURNING order_item_id
        """, order_id, product_id, quantity, price_per_unit)

    async def get(self, conn, order_id: int) -> Optional[Dict[str, Any]]:
        """Order header with its items, items in insertion order"""
        order = await conn.fetchrow("""
            SELECT *
            FROM orders
            WHERE order_id = $1 AND deleted_at IS NULL
        """, order_id)

        if not order:
            return None

        order = dict(order)
        items = await self.get_items(conn, [order_id])
        order['items'] = items.get(order_id, [])
        return order

    async def get_items(self, conn, order_ids: List[int]) -> Dict[int, List[Dict[str, Any]]]:
        # Soft-deleted products still show up by name on past orders
        rows = await conn.fetch("""
            SELECT oi.order_item_id, oi.order_id, oi.product_id,
                p.name as product_name, oi.quantity, oi.price_per_unit
            FROM order_items oi
            JOIN products p ON p.product_id = oi.product_id
            WHERE oi.order_id = ANY($1::int[])
            ORDER BY oi.order_id, oi.order_item_id
        """, order_ids)

        items: Dict[int, List[Dict[str, Any]]] = {}
        for row in rows:
            items.setdefault(row['order_id'], []).append(dict(row))
        return items

    @staticmethod
    def _build_filters(filters: Dict[str, Any]) -> Tuple[str, List[Any]]:
        conditions = ["deleted_at IS NULL"]
        params = []
        param_index = 1

        if filters.get('user_id'):
            conditions.append(f"user_id = ${param_index}")
            params.append(filters['user_id'])
            param_index += 1

        if filters.get('status'):
            conditions.append(f"status = ${param_index}")
            params.append(filters['status'])
            param_index += 1

        if filters.get('min_total') is not None:
            conditions.append(f"total_amount >= ${param_index}")
            params.append(filters['min_total'])
            param_index += 1

        if filters.get('max_total') is not None:
            conditions.append(f"total_amount <= ${param_index}")
            params.append(filters['max_total'])
            param_index += 1

        return " AND ".join(conditions), params

    async def search(self, conn, filters: Dict[str, Any], sort_by: str, sort_order: str,
                     limit: int, offset: int) -> Tuple[List[Dict[str, Any]], int]:
        """Page of orders matching the filters, each with its items"""
        where, params = self._build_filters(filters)
        param_index = len(params) + 1

        total = await conn.fetchval(f"SELECT COUNT(*) FROM orders WHERE {where}", *params)

        rows = await conn.fetch(f"""
            SELECT *
            FROM orders
            WHERE {where}
            ORDER BY {sort_by} {sort_order}, order_id {sort_order}
            LIMIT ${param_index} OFFSET ${param_index + 1}
        """, *params, limit, offset)

        orders = [dict(row) for row in rows]
        items = await self.get_items(conn, [o['order_id'] for o in orders])
        for order in orders:
            order['items'] = items.get(order['order_id'], [])

        return orders, total

    async def count(self, conn, filters: Dict[str, Any]) -> int:
        where, params = self._build_filters(filters)
        count = await conn.fetchval(f"SELECT COUNT(*) FROM orders WHERE {where}", *params)
        return count or 0

    async def exists(self, conn, order_id: int) -> bool:
        count = await conn.fetchval("""
            SELECT COUNT(*)
            FROM orders
            WHERE order_id = $1 AND deleted_at IS NULL
        """, order_id)
        return bool(count)

    async def update_status(self, conn, order_id: int, status: str) -> bool:
        result = await conn.execute("""
            UPDATE orders
            SET status = $1,
                updated_at = CURRENT_TIMESTAMP
            WHERE order_id = $2 AND deleted_at IS NULL
        """, status, order_id)
        return result == "UPDATE 1"

    async def soft_delete(self, conn, order_id: int) -> bool:
        result = await conn.execute("""
            UPDATE orders
            SET deleted_at = CURRENT_TIMESTAMP
            WHERE order_id = $1 AND deleted_at IS NULL
        """, order_id)
        return result == "UPDATE 1"
