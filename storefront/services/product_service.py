# storefront/services/product_service.py
from decimal import Decimal
from typing import Any, Dict, List, Optional
from .base_service import BaseService, handles_db_errors
from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..models.page import Page
from ..models.product import Product, ProductCreate, ProductUpdate
from ..repositories import CategoryRepository, ProductRepository

SORT_COLUMNS = {
    'id': 'product_id',
    'name': 'name',
    'price': 'price',
    'created_at': 'created_at',
    'updated_at': 'updated_at'
}

class ProductService(BaseService):
    """Product catalog management"""

    def __init__(self, db, products: Optional[ProductRepository] = None,
                 categories: Optional[CategoryRepository] = None):
        super().__init__(db)
        self.products = products or ProductRepository()
        self.categories = categories or CategoryRepository()

    @handles_db_errors("creating product")
    async def create_product(self, product_data: Dict[str, Any]) -> Product:
        """Create a product in an existing category"""
        data = self.parse(ProductCreate, product_data)

        async with self.db.pool.acquire() as conn:
            if not await self.categories.get(conn, data.category_id):
                raise NotFoundError("Category", data.category_id)

            if await self.products.name_exists(conn, data.name):
                raise ConflictError("Product", "name", data.name)

            if await self.products.sku_exists(conn, data.sku):
                raise ConflictError("Product", "sku", data.sku)

            values = data.model_dump()
            values['description'] = values['description'] or None
            product = await self.products.create(conn, values)

        self.logger.info(f"Created product {product['product_id']} ({data.name})")
        return Product.model_validate(product)

    @handles_db_errors("loading product")
    async def get_product(self, product_id: int) -> Product:
        self.check_id(product_id, "product")

        async with self.db.pool.acquire() as conn:
            product = await self.products.get(conn, product_id)

        if not product:
            raise NotFoundError("Product", product_id)
        return Product.model_validate(product)

    @handles_db_errors("loading product")
    async def get_product_by_name(self, name: str) -> Optional[Product]:
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        async with self.db.pool.acquire() as conn:
            product = await self.products.get_by_name(conn, name.strip())

        return Product.model_validate(product) if product else None

    @handles_db_errors("listing products")
    async def list_products(self, search: Optional[str] = None,
                            category_id: Optional[int] = None,
                            min_price: Optional[Decimal] = None,
                            max_price: Optional[Decimal] = None,
                            page: int = 1, limit: Optional[int] = None,
                            sort_by: str = 'created_at',
                            sort_order: str = 'DESC') -> Page[Product]:
        """Filtered page of products; limit is capped rather than rejected"""
        page, limit, offset = self.paginate(page, limit, clamp=True)
        column, sort_order = self.sorting(sort_by, sort_order, SORT_COLUMNS)

        filters: Dict[str, Any] = {}
        if search and search.strip():
            filters['search'] = search.strip()
        # Negative bounds are ignored, as are non-positive category ids
        if min_price is not None and min_price >= 0:
            filters['min_price'] = Decimal(str(min_price))
        if max_price is not None and max_price >= 0:
            filters['max_price'] = Decimal(str(max_price))

        if ('min_price' in filters and 'max_price' in filters
                and filters['min_price'] > filters['max_price']):
            raise ValidationError("Min price cannot be greater than max price")

        async with self.db.pool.acquire() as conn:
            if category_id and category_id > 0:
                if not await self.categories.get(conn, category_id):
                    raise NotFoundError("Category", category_id)
                filters['category_id'] = category_id

            rows, total = await self.products.search(
                conn, filters, column, sort_order, limit, offset
            )

        return Page[Product](
            items=[Product.model_validate(row) for row in rows],
            page=page,
            limit=limit,
            total=total
        )

    @handles_db_errors("listing category products")
    async def get_products_by_category(self, category_id: int) -> List[Product]:
        self.check_id(category_id, "category")

        async with self.db.pool.acquire() as conn:
            if not await self.categories.get(conn, category_id):
                raise NotFoundError("Category", category_id)
            rows = await self.products.list_by_category(conn, category_id)

        return [Product.model_validate(row) for row in rows]

    @handles_db_errors("updating product")
    async def update_product(self, product_id: int, product_data: Dict[str, Any]) -> Product:
        """Apply a partial update; only the fields given are touched"""
        self.check_id(product_id, "product")
        data = self.parse(ProductUpdate, product_data)
        changes = data.model_dump(exclude_unset=True)

        # description may be cleared; every other column is NOT NULL
        changes = {
            key: value for key, value in changes.items()
            if value is not None or key == 'description'
        }
        if 'description' in changes:
            changes['description'] = changes['description'] or None

        async with self.db.pool.acquire() as conn:
            if not await self.products.get(conn, product_id):
                raise NotFoundError("Product", product_id)

            if 'name' in changes and await self.products.name_exists(
                conn, changes['name'], exclude_id=product_id
            ):
                raise ConflictError("Product", "name", changes['name'])

            if 'sku' in changes and await self.products.sku_exists(
                conn, changes['sku'], exclude_id=product_id
            ):
                raise ConflictError("Product", "sku", changes['sku'])

            if 'category_id' in changes and not await self.categories.get(
                conn, changes['category_id']
            ):
                raise NotFoundError("Category", changes['category_id'])

            if changes and not await self.products.update(conn, product_id, changes):
                raise NotFoundError("Product", product_id)

            product = await self.products.get(conn, product_id)

        return Product.model_validate(product)

    @handles_db_errors("deleting product")
    async def delete_product(self, product_id: int):
        self.check_id(product_id, "product")

        async with self.db.pool.acquire() as conn:
            if not await self.products.soft_delete(conn, product_id):
                raise NotFoundError("Product", product_id)

        self.logger.info(f"Deleted product {product_id}")

    @handles_db_errors("restoring product")
    async def restore_product(self, product_id: int):
        self.check_id(product_id, "product")

        async with self.db.pool.acquire() as conn:
            if not await self.products.restore(conn, product_id):
                raise NotFoundError("Deleted product", product_id)

    @handles_db_errors("listing deleted products")
    async def list_deleted_products(self) -> List[Product]:
        async with self.db.pool.acquire() as conn:
            rows = await self.products.list_deleted(conn)
        return [Product.model_validate(row) for row in rows]

    @handles_db_errors("loading product")
    async def product_exists(self, product_id: int) -> bool:
        self.check_id(product_id, "product")

        async with self.db.pool.acquire() as conn:
            return await self.products.get(conn, product_id) is not None
