"""Category rules, checked against mocked repositories."""
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from storefront.exceptions import ConflictError, NotFoundError, ValidationError
from storefront.repositories import CategoryRepository, ProductRepository
from storefront.services.category_service import CategoryService
from tests.fakes import FakeDatabase


def category_row(category_id=1, name="Electronics"):
    return {
        'category_id': category_id,
        'name': name,
        'created_at': datetime(2025, 8, 27, tzinfo=timezone.utc),
        'updated_at': None,
        'deleted_at': None,
    }


@pytest.fixture
def categories():
    return AsyncMock(spec=CategoryRepository)


@pytest.fixture
def products():
    return AsyncMock(spec=ProductRepository)


@pytest.fixture
def service(categories, products):
    return CategoryService(FakeDatabase(), categories=categories, products=products)


async def test_create_category_trims_name(service, categories):
    categories.name_exists.return_value = False
    categories.create.return_value = category_row(name="Books")

    category = await service.create_category({'name': "  Books  "})

    assert category.name == "Books"
    categories.create.assert_awaited_once()
    assert categories.create.await_args.args[1] == "Books"


async def test_create_duplicate_category_conflicts(service, categories):
    categories.name_exists.return_value = True

    with pytest.raises(ConflictError) as exc_info:
        await service.create_category({'name': "Electronics"})

    assert exc_info.value.status_code == 409
    assert str(exc_info.value) == "Category with name 'Electronics' already exists"
    categories.create.assert_not_awaited()


@pytest.mark.parametrize("name", ["", "x", "y" * 256])
async def test_create_category_validates_name_length(service, name):
    with pytest.raises(ValidationError):
        await service.create_category({'name': name})


async def test_get_category(service, categories):
    categories.get.return_value = None

    with pytest.raises(ValidationError):
        await service.get_category(0)
    with pytest.raises(NotFoundError):
        await service.get_category(5)

    categories.get.return_value = category_row(5)
    assert (await service.get_category(5)).category_id == 5


async def test_update_category_to_taken_name_conflicts(service, categories):
    categories.get.return_value = category_row(2, "Toys")
    categories.name_exists.return_value = True

    with pytest.raises(ConflictError):
        await service.update_category(2, {'name': "Electronics"})

    categories.name_exists.assert_awaited_once()
    assert categories.name_exists.await_args.kwargs == {'exclude_id': 2}
    categories.update.assert_not_awaited()


async def test_update_category(service, categories):
    categories.get.side_effect = [category_row(2, "Toys"), category_row(2, "Toys & Games")]
    categories.name_exists.return_value = False
    categories.update.return_value = True

    category = await service.update_category(2, {'name': "Toys & Games"})

    assert category.name == "Toys & Games"
    assert categories.update.await_args.args[2] == {'name': "Toys & Games"}


async def test_delete_category_removes_its_products_in_one_transaction(service, categories, products):
    categories.get.return_value = category_row(3)
    categories.soft_delete.return_value = True
    products.soft_delete_by_category.return_value = 4

    await service.delete_category(3)

    products.soft_delete_by_category.assert_awaited_once()
    categories.soft_delete.assert_awaited_once()
    conn = products.soft_delete_by_category.await_args.args[0]
    assert categories.soft_delete.await_args.args[0] is conn


async def test_delete_missing_category(service, categories, products):
    categories.get.return_value = None

    with pytest.raises(NotFoundError):
        await service.delete_category(3)

    products.soft_delete_by_category.assert_not_awaited()


async def test_list_categories_validates_paging(service, categories):
    categories.search.return_value = ([category_row(1), category_row(2, "Books")], 12)

    page = await service.list_categories(search=" o ", page=2, limit=2, sort_by='name', sort_order='asc')

    assert [c.name for c in page.items] == ["Electronics", "Books"]
    assert page.total_pages == 6
    categories.search.assert_awaited_once()
    assert categories.search.await_args.args[1:] == ("o", "name", "ASC", 2, 2)

    with pytest.raises(ValidationError):
        await service.list_categories(limit=101)
    with pytest.raises(ValidationError):
        await service.list_categories(sort_order='SIDEWAYS')
    with pytest.raises(ValidationError):
        await service.list_categories(sort_by='deleted_at')


async def test_restore_category(service, categories):
    categories.restore.return_value = False

    with pytest.raises(NotFoundError):
        await service.restore_category(8)

    categories.restore.return_value = True
    await service.restore_category(8)


async def test_category_exists(service, categories):
    assert await service.category_exists(0) is False

    categories.get.return_value = category_row(1)
    assert await service.category_exists(1) is True
