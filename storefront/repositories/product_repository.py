# storefront/repositories/product_repository.py
from typing import Any, Dict, List, Optional, Tuple
import asyncpg
from ..exceptions import ConflictError

PRODUCT_SELECT = """
    SELECT p.*, c.name as category_name
    FROM products p
    LEFT JOIN categories c ON c.category_id = p.category_id
"""

def _affected_rows(status: str) -> int:
    """Row count from an asyncpg command status such as 'UPDATE 3'"""
    return int(status.split()[-1])

class ProductRepository:
    """SQL access to the products table"""

    UPDATABLE_COLUMNS = {'category_id', 'name', 'sku', 'description', 'price', 'stock'}

    async def create(self, conn, product_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            product_id = await conn.fetchval("""
                INSERT INTO products (
                    category_id, name, sku, description, price, stock
                ) VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING product_id
            """,
                product_data['category_id'],
                product_data['name'],
                product_data['sku'],
                product_data.get('description'),
                product_data['price'],
                product_data.get('stock', 0)
            )
        except asyncpg.UniqueViolationError as e:
            raise self._conflict(e, product_data) from e
        return await self.get(conn, product_id)

    async def get(self, conn, product_id: int,
                  include_deleted: bool = False) -> Optional[Dict[str, Any]]:
        product = await conn.fetchrow(PRODUCT_SELECT + """
            WHERE p.product_id = $1 AND ($2 OR p.deleted_at IS NULL)
        """, product_id, include_deleted)
        return dict(product) if product else None

    async def get_by_name(self, conn, name: str) -> Optional[Dict[str, Any]]:
        product = await conn.fetchrow(PRODUCT_SELECT + """
            WHERE p.name = $1 AND p.deleted_at IS NULL
        """, name)
        return dict(product) if product else None

    async def name_exists(self, conn, name: str, exclude_id: Optional[int] = None) -> bool:
        count = await conn.fetchval("""
            SELECT COUNT(*)
            FROM products
            WHERE name = $1
            AND deleted_at IS NULL
            AND ($2::int IS NULL OR product_id <> $2)
        """, name, exclude_id)
        return bool(count)

    async def sku_exists(self, conn, sku: int, exclude_id: Optional[int] = None) -> bool:
        count = await conn.fetchval("""
            SELECT COUNT(*)
            FROM products
            WHERE sku = $1
            AND ($2::int IS NULL OR product_id <> $2)
        """, sku, exclude_id)
        return bool(count)

    async def lock_for_update(self, conn, product_ids: List[int]) -> Dict[int, Dict[str, Any]]:
        """Row-lock the given live products for the rest of the transaction.

        Rows are locked in ascending product_id order, so two placements
        touching the same products always queue on them in the same order.
        Must be called inside a transaction.
        """
        products = await conn.fetch("""
            SELECT product_id, name, price, stock
            FROM products
            WHERE product_id = ANY($1::int[]) AND deleted_at IS NULL
            ORDER BY product_id
            FOR UPDATE
        """, sorted(set(product_ids)))
        return {p['product_id']: dict(p) for p in products}

    async def decrement_stock(self, conn, product_id: int, quantity: int) -> bool:
        """Take quantity off the stock counter unless that would drive it negative"""
        result = await conn.execute("""
            UPDATE products
            SET stock = stock - $1,
                updated_at = CURRENT_TIMESTAMP
            WHERE product_id = $2 AND stock >= $1
        """, quantity, product_id)
        return result == "UPDATE 1"

    async def get_stock(self, conn, product_id: int) -> Optional[int]:
        return await conn.fetchval("""
            SELECT stock
            FROM products
            WHERE product_id = $1 AND deleted_at IS NULL
        """, product_id)

    async def search(self, conn, filters: Dict[str, Any], sort_by: str, sort_order: str,
                     limit: int, offset: int) -> Tuple[List[Dict[str, Any]], int]:
        """Page of live products matching the filters"""
        conditions = ["p.deleted_at IS NULL"]
        params = []
        param_index = 1

        if filters.get('search'):
            conditions.append(
                f"(p.name ILIKE ${param_index} OR p.description ILIKE ${param_index})"
            )
            params.append(f"%{filters['search']}%")
            param_index += 1

        if filters.get('category_id'):
            conditions.append(f"p.category_id = ${param_index}")
            params.append(filters['category_id'])
            param_index += 1

        if filters.get('min_price') is not None:
            conditions.append(f"p.price >= ${param_index}")
            params.append(filters['min_price'])
            param_index += 1

        if filters.get('max_price') is not None:
            conditions.append(f"p.price <= ${param_index}")
            params.append(filters['max_price'])
            param_index += 1

        where = " AND ".join(conditions)

        total = await conn.fetchval(
            f"SELECT COUNT(*) FROM products p WHERE {where}", *params
        )

        products = await conn.fetch(PRODUCT_SELECT + f"""
            WHERE {where}
            ORDER BY p.{sort_by} {sort_order}, p.product_id {sort_order}
            LIMIT ${param_index} OFFSET ${param_index + 1}
        """, *params, limit, offset)

        return [dict(p) for p in products], total

    async def list_by_category(self, conn, category_id: int) -> List[Dict[str, Any]]:
        products = await conn.fetch(PRODUCT_SELECT + """
            WHERE p.category_id = $1 AND p.deleted_at IS NULL
            ORDER BY p.created_at DESC
        """, category_id)
        return [dict(p) for p in products]

    async def update(self, conn, product_id: int, update_data: Dict[str, Any]) -> bool:
        query_parts = []
        params = []
        param_count = 1

        for key, value in update_data.items():
            if key not in self.UPDATABLE_COLUMNS:
                raise ValueError(f"Column {key} cannot be updated")
            query_parts.append(f"{key} = ${param_count}")
            params.append(value)
            param_count += 1

        if not query_parts:
            return False

        params.append(product_id)
        query = f"""
            UPDATE products
            SET {', '.join(query_parts)}, updated_at = CURRENT_TIMESTAMP
            WHERE product_id = ${param_count} AND deleted_at IS NULL
        """

        try:
            result = await conn.execute(query, *params)
        except asyncpg.UniqueViolationError as e:
            raise self._conflict(e, update_data) from e
        return result == "UPDATE 1"

    async def soft_delete(self, conn, product_id: int) -> bool:
        result = await conn.execute("""
            UPDATE products
            SET deleted_at = CURRENT_TIMESTAMP
            WHERE product_id = $1 AND deleted_at IS NULL
        """, product_id)
        return result == "UPDATE 1"

    async def soft_delete_by_category(self, conn, category_id: int) -> int:
        result = await conn.execute("""
            UPDATE products
            SET deleted_at = CURRENT_TIMESTAMP
            WHERE category_id = $1 AND deleted_at IS NULL
        """, category_id)
        return _affected_rows(result)

    async def restore(self, conn, product_id: int) -> bool:
        name = await conn.fetchval("""
            SELECT name FROM products
            WHERE product_id = $1 AND deleted_at IS NOT NULL
        """, product_id)
        if name is None:
            return False

        try:
            result = await conn.execute("""
                UPDATE products
                SET deleted_at = NULL, updated_at = CURRENT_TIMESTAMP
                WHERE product_id = $1 AND deleted_at IS NOT NULL
            """, product_id)
        except asyncpg.UniqueViolationError as e:
            raise ConflictError("Product", "name", name) from e
        return result == "UPDATE 1"

    async def list_deleted(self, conn) -> List[Dict[str, Any]]:
        products = await conn.fetch(PRODUCT_SELECT + """
            WHERE p.deleted_at IS NOT NULL
            ORDER BY p.deleted_at DESC
        """)
        return [dict(p) for p in products]

    @staticmethod
    def _conflict(error: asyncpg.UniqueViolationError, data: Dict[str, Any]) -> ConflictError:
        """Map a unique index violation to the offending field"""
        constraint = getattr(error, 'constraint_name', None) or ''
        if 'sku' in constraint:
            return ConflictError("Product", "sku", data.get('sku'))
        return ConflictError("Product", "name", data.get('name'))
