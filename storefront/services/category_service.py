# storefront/services/category_service.py
from typing import Any, Dict, List, Optional
from .base_service import BaseService, handles_db_errors
from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..models.category import Category, CategoryCreate, CategoryUpdate
from ..models.page import Page
from ..repositories import CategoryRepository, ProductRepository

SORT_COLUMNS = {
    'id': 'category_id',
    'name': 'name',
    'created_at': 'created_at',
    'updated_at': 'updated_at'
}

class CategoryService(BaseService):
    """Category management"""

    def __init__(self, db, categories: Optional[CategoryRepository] = None,
                 products: Optional[ProductRepository] = None):
        super().__init__(db)
        self.categories = categories or CategoryRepository()
        self.products = products or ProductRepository()

    @handles_db_errors("creating category")
    async def create_category(self, category_data: Dict[str, Any]) -> Category:
        data = self.parse(CategoryCreate, category_data)

        async with self.db.pool.acquire() as conn:
            if await self.categories.name_exists(conn, data.name):
                raise ConflictError("Category", "name", data.name)

            category = await self.categories.create(conn, data.name)

        self.logger.info(f"Created category {category['category_id']} ({data.name})")
        return Category.model_validate(category)

    @handles_db_errors("loading category")
    async def get_category(self, category_id: int) -> Category:
        self.check_id(category_id, "category")

        async with self.db.pool.acquire() as conn:
            category = await self.categories.get(conn, category_id)

        if not category:
            raise NotFoundError("Category", category_id)
        return Category.model_validate(category)

    @handles_db_errors("loading category")
    async def get_category_by_name(self, name: str) -> Optional[Category]:
        if not name or not name.strip():
            raise ValidationError("Category name is required")

        async with self.db.pool.acquire() as conn:
            category = await self.categories.get_by_name(conn, name.strip())

        return Category.model_validate(category) if category else None

    @handles_db_errors("listing categories")
    async def list_categories(self, search: Optional[str] = None, page: int = 1,
                              limit: Optional[int] = None, sort_by: str = 'created_at',
                              sort_order: str = 'DESC') -> Page[Category]:
        page, limit, offset = self.paginate(page, limit)
        column, sort_order = self.sorting(sort_by, sort_order, SORT_COLUMNS)
        search = search.strip() if search else None

        async with self.db.pool.acquire() as conn:
            rows, total = await self.categories.search(
                conn, search, column, sort_order, limit, offset
            )

        return Page[Category](
            items=[Category.model_validate(row) for row in rows],
            page=page,
            limit=limit,
            total=total
        )

    @handles_db_errors("updating category")
    async def update_category(self, category_id: int, update_data: Dict[str, Any]) -> Category:
        self.check_id(category_id, "category")
        data = self.parse(CategoryUpdate, update_data)

        async with self.db.pool.acquire() as conn:
            if not await self.categories.get(conn, category_id):
                raise NotFoundError("Category", category_id)

            changes = data.model_dump(exclude_unset=True, exclude_none=True)
            if 'name' in changes and await self.categories.name_exists(
                conn, changes['name'], exclude_id=category_id
            ):
                raise ConflictError("Category", "name", changes['name'])

            if changes and not await self.categories.update(conn, category_id, changes):
                raise NotFoundError("Category", category_id)

            category = await self.categories.get(conn, category_id)

        return Category.model_validate(category)

    @handles_db_errors("deleting category")
    async def delete_category(self, category_id: int):
        """Soft-delete a category together with its products"""
        self.check_id(category_id, "category")

        async with self.db.pool.acquire() as conn:
            async with conn.transaction():
                if not await self.categories.get(conn, category_id):
                    raise NotFoundError("Category", category_id)

                removed = await self.products.soft_delete_by_category(conn, category_id)

                if not await self.categories.soft_delete(conn, category_id):
                    raise NotFoundError("Category", category_id)

        self.logger.info(f"Deleted category {category_id} and {removed} products")

    @handles_db_errors("restoring category")
    async def restore_category(self, category_id: int):
        self.check_id(category_id, "category")

        async with self.db.pool.acquire() as conn:
            if not await self.categories.restore(conn, category_id):
                raise NotFoundError("Deleted category", category_id)

    @handles_db_errors("listing deleted categories")
    async def list_deleted_categories(self) -> List[Category]:
        async with self.db.pool.acquire() as conn:
            rows = await self.categories.list_deleted(conn)
        return [Category.model_validate(row) for row in rows]

    @handles_db_errors("counting categories")
    async def count_categories(self, search: Optional[str] = None) -> int:
        async with self.db.pool.acquire() as conn:
            return await self.categories.count(conn, search.strip() if search else None)

    @handles_db_errors("loading category")
    async def category_exists(self, category_id: int) -> bool:
        if category_id <= 0:
            return False

        async with self.db.pool.acquire() as conn:
            return await self.categories.get(conn, category_id) is not None
