import os
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pytest
import anyio
import httpx

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

_db_path = BASE_DIR / "test.db"

os.environ.setdefault("DATABASE_URL", "sqlite:///" + str(_db_path))
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DEFAULT_PAGE_SIZE", "50")

from catalog_api.core.config import get_settings
from catalog_api.models import Base, Category, Product
from catalog_api.main import app

get_settings.cache_clear()

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(scope="session")
def engine():
    engine = app.state.database.engine
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if _db_path.exists():
        _db_path.unlink()


@pytest.fixture(scope="session")
def session_factory(engine):
    return app.state.database.session_factory


@pytest.fixture(autouse=True)
def clean_tables(session_factory):
    yield
    session = session_factory()
    try:
        session.query(Product).delete()
        session.query(Category).delete()
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_category(db_session):
    def _make(name: str = "General", description: str | None = None, is_active: bool = True) -> Category:
        category = Category(name=name, description=description, is_active=is_active)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _make


@pytest.fixture()
def make_product(db_session):
    counter = {"n": 0}

    def _make(
        category: Category,
        name: str = "Item",
        *,
        description: str | None = None,
        price: str = "10.00",
        stock_quantity: int = 5,
        is_active: bool = True,
        created_date: datetime | None = None,
    ) -> Product:
        counter["n"] += 1
        product = Product(
            name=name,
            description=description,
            price=Decimal(price),
            category_id=category.id,
            stock_quantity=stock_quantity,
            is_active=is_active,
            created_date=created_date or BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


class _SyncASGIClient:
    def __init__(self, fastapi_app, raise_app_exceptions: bool = True):
        self._client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=fastapi_app, raise_app_exceptions=raise_app_exceptions),
            base_url="http://testserver",
        )

    def request(self, method: str, url: str, **kwargs):
        async def _do_request():
            return await self._client.request(method, url, **kwargs)

        return anyio.run(_do_request)

    def get(self, url: str, **kwargs):
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs):
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs):
        return self.request("PUT", url, **kwargs)

    def delete(self, url: str, **kwargs):
        return self.request("DELETE", url, **kwargs)

    def close(self):
        async def _do_close():
            await self._client.aclose()

        anyio.run(_do_close)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


@pytest.fixture()
def asgi_client_factory():
    return _SyncASGIClient


@pytest.fixture()
def client(engine):
    with _SyncASGIClient(app) as test_client:
        yield test_client
