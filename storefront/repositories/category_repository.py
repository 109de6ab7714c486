# storefront/repositories/category_repository.py
from typing import Any, Dict, List, Optional, Tuple
import asyncpg
from ..exceptions import ConflictError

class CategoryRepository:
    """SQL access to the categories table"""

    UPDATABLE_COLUMNS = {'name'}

    async def create(self, conn, name: str) -> Dict[str, Any]:
        try:
            category = await conn.fetchrow("""
                INSERT INTO categories (name)
                VALUES ($1)
                RETURNING *
            """, name)
        except asyncpg.UniqueViolationError as e:
            raise ConflictError("Category", "name", name) from e
        return dict(category)

    async def get(self, conn, category_id: int,
                  include_deleted: bool = False) -> Optional[Dict[str, Any]]:
        category = await conn.fetchrow("""
            SELECT *
            FROM categories
            WHERE category_id = $1
            AND ($2 OR deleted_at IS NULL)
        """, category_id, include_deleted)
        return dict(category) if category else None

    async def get_by_name(self, conn, name: str) -> Optional[Dict[str, Any]]:
        category = await conn.fetchrow("""
            SELECT *
            FROM categories
            WHERE name = $1 AND deleted_at IS NULL
        """, name)
        return dict(category) if category else None

    async def name_exists(self, conn, name: str, exclude_id: Optional[int] = None) -> bool:
        count = await conn.fetchval("""
            SELECT COUNT(*)
            FROM categories
            WHERE name = $1
            AND deleted_at IS NULL
            AND ($2::int IS NULL OR category_id <> $2)
        """, name, exclude_id)
        return bool(count)

    async def search(self, conn, search: Optional[str], sort_by: str, sort_order: str,
                     limit: int, offset: int) -> Tuple[List[Dict[str, Any]], int]:
        """Page of non-deleted categories whose name contains the search term"""
        pattern = f"%{search}%" if search else None

        total = await conn.fetchval("""
            SELECT COUNT(*)
            FROM categories
            WHERE deleted_at IS NULL
            AND ($1::text IS NULL OR name ILIKE $1)
        """, pattern)

        categories = await conn.fetch(f"""
            SELECT *
            FROM categories
            WHERE deleted_at IS NULL
            AND ($1::text IS NULL OR name ILIKE $1)
            ORDER BY {sort_by} {sort_order}, category_id {sort_order}
            LIMIT $2 OFFSET $3
        """, pattern, limit, offset)

        return [dict(c) for c in categories], total

    async def count(self, conn, search: Optional[str] = None) -> int:
        pattern = f"%{search}%" if search else None
        count = await conn.fetchval("""
            SELECT COUNT(*)
            FROM categories
            WHERE deleted_at IS NULL
            AND ($1::text IS NULL OR name ILIKE $1)
        """, pattern)
        return count or 0

    async def update(self, conn, category_id: int, update_data: Dict[str, Any]) -> bool:
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

        params.append(category_id)
        query = f"""
            UPDATE categories
            SET {', '.join(query_parts)}, updated_at = CURRENT_TIMESTAMP
            WHERE category_id = ${param_count} AND deleted_at IS NULL
        """

        try:
            result = await conn.execute(query, *params)
        except asyncpg.UniqueViolationError as e:
            raise ConflictError("Category", "name", update_data.get('name')) from e
        return result == "UPDATE 1"

    async def soft_delete(self, conn, category_id: int) -> bool:
        result = await conn.execute("""
            UPDATE categories
            SET deleted_at = CURRENT_TIMESTAMP
            WHERE category_id = $1 AND deleted_at IS NULL
        """, category_id)
        return result == "UPDATE 1"

    async def restore(self, conn, category_id: int) -> bool:
        name = await conn.fetchval("""
            SELECT name FROM categories
            WHERE category_id = $1 AND deleted_at IS NOT NULL
        """, category_id)
        if name is None:
            return False

        try:
            result = await conn.execute("""
                UPDATE categories
                SET deleted_at = NULL, updated_at = CURRENT_TIMESTAMP
                WHERE category_id = $1 AND deleted_at IS NOT NULL
            """, category_id)
        except asyncpg.UniqueViolationError as e:
            raise ConflictError("Category", "name", name) from e
        return result == "UPDATE 1"

    async def list_deleted(self, conn) -> List[Dict[str, Any]]:
        categories = await conn.fetch("""
            SELECT *
            FROM categories
            WHERE deleted_at IS NOT NULL
            ORDER BY deleted_at DESC
        """)
        return [dict(c) for c in categories]
