"""Pytest fixtures for bank offers tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from bankoffers.database import OfferStore, get_store
from bankoffers.main import app


@pytest.fixture
async def store(tmp_path):
    """Create a fresh SQLite-backed store for each test."""
    offer_store = OfferStore(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await offer_store.create_schema()

    yield offer_store

    await offer_store.dispose()


@pytest.fixture
async def client(store):
    """Create a test client with the store override."""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def axis_flat_offer():
    return {
        "description": "Flat Rs.100 off on AXIS Credit Card",
        "bankName": "AXIS",
        "paymentInstrument": "CREDIT",
        "discountType": "FLAT",
        "discountValue": 100,
        "minTxnValue": 500,
    }
