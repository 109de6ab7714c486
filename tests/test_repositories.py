"""Repository error mapping, checked against a mocked asyncpg connection."""
from unittest.mock import AsyncMock

import asyncpg
import pytest

from storefront.exceptions import ConflictError
from storefront.repositories import CategoryRepository, ProductRepository


@pytest.fixture
def conn():
    return AsyncMock()


@pytest.mark.parametrize("repository, resource, name", [
    (CategoryRepository(), "Category", "Books"),
    (ProductRepository(), "Product", "iPhone 15 Pro"),
])
async def test_restore_onto_reused_name_reports_the_name(conn, repository, resource, name):
    conn.fetchval.return_value = name
    conn.execute.side_effect = asyncpg.UniqueViolationError("duplicate key value")

    with pytest.raises(ConflictError) as exc_info:
        await repository.restore(conn, 3)

    assert exc_info.value.field == "name"
    assert exc_info.value.value == name
    assert str(exc_info.value) == f"{resource} with name '{name}' already exists"
    assert exc_info.value.status_code == 409


@pytest.mark.parametrize("repository", [CategoryRepository(), ProductRepository()])
async def test_restore_of_live_or_missing_row_touches_nothing(conn, repository):
    conn.fetchval.return_value = None

    assert await repository.restore(conn, 3) is False
    conn.execute.assert_not_called()


async def test_restore_clears_deleted_at(conn):
    conn.fetchval.return_value = "Books"
    conn.execute.return_value = "UPDATE 1"

    assert await CategoryRepository().restore(conn, 3) is True
