# tests/conftest.py

import logging
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from acai_control.config.settings import Settings
from acai_control.main import create_app
from acai_control.shared.database.models import ProductType
from acai_control.shared.storage import MemoryStorage, SqlStorage

logger = logging.getLogger(__name__)


class FakeClock:
    """Relógio controlado pelos testes"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> datetime:
        self.now = now
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 15, 10, 0, 0))


@pytest.fixture
def memory_storage(clock):
    return MemoryStorage(clock=clock)


@pytest.fixture
def sql_storage(clock):
    storage = SqlStorage.from_url("sqlite://", clock=clock)
    storage.init()
    yield storage
    storage.close()


@pytest.fixture(params=["memory", "sql"])
def storage(request, clock):
    """Os mesmos cenários rodam contra as duas implementações"""
    if request.param == "memory":
        yield MemoryStorage(clock=clock)
        return

    sql = SqlStorage.from_url("sqlite://", clock=clock)
    sql.init()
    yield sql
    sql.close()


@pytest.fixture
def catalog(storage):
    """Catálogo mínimo usado pelos cenários de venda"""
    acai = storage.create_product(
        name="Açaí 500ml", type=ProductType.acai_500ml.value,
        price=Decimal("8.50"), price_per_liter=None
    )
    custom = storage.create_product(
        name="Açaí Personalizado", type=ProductType.acai_custom.value,
        price=Decimal("0.00"), price_per_liter=Decimal("14.00")
    )
    tapioca = storage.create_product(
        name="Farinha de Tapioca", type=ProductType.tapioca_flour.value,
        price=Decimal("4.50"), price_per_liter=None
    )
    maria = storage.create_vendor(name="Maria Silva", commission_rate=Decimal("0.1000"))
    joao = storage.create_vendor(name="João Santos", commission_rate=Decimal("0.0800"))

    return {
        "acai": acai,
        "custom": custom,
        "tapioca": tapioca,
        "maria": maria,
        "joao": joao,
    }


@pytest.fixture
def app_settings():
    return Settings(storage_backend="memory", seed_catalog=True, debug=False)


@pytest.fixture
def client(app_settings, memory_storage, clock):
    app = create_app(settings=app_settings, storage=memory_storage, clock=clock)
    with TestClient(app) as test_client:
        yield test_client
