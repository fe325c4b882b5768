import os

# celery runs tasks in-process, no broker in tests
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.data.database import Database
from storefront.data.models import CategoryModel, ProductModel, UserModel
from storefront.services.lock_service import LockService


@pytest.fixture(scope="function")
def database():
    """
    A fresh in-memory SQLite database for each test.
    """
    db = Database("sqlite://")
    db.connect()
    db.create_all()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture(scope="function")
def file_database(tmp_path):
    """
    SQLite on disk: every session gets its own connection, so two sessions can
    interleave the way two requests do.
    """
    db = Database(f"sqlite:///{tmp_path / 'storefront.db'}")
    db.connect()
    db.create_all()
    try:
        yield db
    finally:
        db.drop_all()
        db.dispose()


@pytest.fixture(scope="function")
def session(database):
    db = database.session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_user(database):
    def _make(user_id: int = 1, name: str = "Test User", role: str = "client") -> int:
        with database.session_scope() as db:
            db.add(UserModel(id=user_id, name=name, role=role))
        return user_id

    return _make


@pytest.fixture
def make_product(database):
    def _make(name: str = "Product", price: str = "10.00", quantity_available: int = 100) -> int:
        with database.session_scope() as db:
            product = ProductModel(name=name, price=Decimal(price), quantity_available=quantity_available)
            db.add(product)
            db.flush()
            return product.id

    return _make


@pytest.fixture
def make_category(database):
    def _make(name: str) -> int:
        with database.session_scope() as db:
            category = CategoryModel(name=name)
            db.add(category)
            db.flush()
            return category.id

    return _make


@pytest.fixture
def redis_client():
    """Stands in for redis.Redis: the lock is always free and always released."""
    client = MagicMock()
    client.set.return_value = True
    client.eval.return_value = 1
    return client


@pytest.fixture
def lock_service(redis_client):
    return LockService(client=redis_client)


@pytest.fixture
def client(database, lock_service):
    app = create_app(database, lock_service=lock_service)
    with TestClient(app) as test_client:
        yield test_client
