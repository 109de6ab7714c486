import pytest

from storefront.services.order_service import OrderService
from tests.fakes import FakeDatabase, FakeOrderRepository, FakeProductRepository


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def products():
    return FakeProductRepository()


@pytest.fixture
def orders(products):
    return FakeOrderRepository(products)


@pytest.fixture
def order_service(db, orders, products):
    return OrderService(db, orders=orders, products=products)
