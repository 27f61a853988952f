"""Tests for offer API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from bankoffers.database import OfferStore, get_store
from bankoffers.main import app


@pytest.mark.asyncio
async def test_root_liveness(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert "running" in response.text


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_post_offer_then_highest_discount(client, axis_flat_offer):
    """One FLAT offer is stored and returned as the best discount."""
    response = await client.post(
        "/offer",
        json={"flipkartOfferApiResponse": {"offers": [axis_flat_offer]}},
    )
    assert response.status_code == 201
    assert response.json() == {"noOfOffersIdentified": 1, "noOfNewOffersCreated": 1}

    response = await client.get(
        "/highest-discount",
        params={"amountToPay": "1000", "bankName": "AXIS", "paymentInstrument": "CREDIT"},
    )
    assert response.status_code == 200
    assert response.json() == {"highestDiscountAmount": 100}


@pytest.mark.asyncio
async def test_post_same_payload_twice_creates_nothing_new(client, axis_flat_offer):
    body = {"flipkartOfferApiResponse": {"offers": [axis_flat_offer]}}

    first = await client.post("/offer", json=body)
    second = await client.post("/offer", json=body)

    assert first.json()["noOfNewOffersCreated"] == 1
    assert second.status_code == 201
    assert second.json() == {"noOfOffersIdentified": 1, "noOfNewOffersCreated": 0}


@pytest.mark.asyncio
async def test_post_without_offers_returns_zero_counts(client):
    response = await client.post("/offer", json={"flipkartOfferApiResponse": {"banner": "no offers today"}})
    assert response.status_code == 200
    assert response.json() == {"noOfOffersIdentified": 0, "noOfNewOffersCreated": 0}


@pytest.mark.asyncio
async def test_post_missing_top_level_field(client):
    response = await client.post("/offer", json={"offers": []})
    assert response.status_code == 400
    assert "flipkartOfferApiResponse" in response.json()["detail"]


@pytest.mark.asyncio
async def test_post_non_object_body(client):
    response = await client.post("/offer", json=["not", "an", "object"])
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_post_malformed_offer_entry(client, axis_flat_offer):
    bad = dict(axis_flat_offer, discountValue="a lot")
    response = await client.post(
        "/offer",
        json={"flipkartOfferApiResponse": {"offers": [axis_flat_offer, bad]}},
    )
    assert response.status_code == 400
    assert "index 1" in response.json()["detail"]

    # Nothing from the rejected payload was stored.
    response = await client.get(
        "/highest-discount",
        params={"amountToPay": "1000", "bankName": "AXIS", "paymentInstrument": "CREDIT"},
    )
    assert response.json() == {"highestDiscountAmount": 0}


@pytest.mark.asyncio
async def test_percentage_offer_is_capped(client):
    offer = {
        "description": "10% off up to Rs.50 on ICICI Debit",
        "bankName": "ICICI",
        "paymentInstrument": "DEBIT",
        "discountType": "PERCENTAGE",
        "discountValue": 10,
        "maxDiscount": 50,
        "minTxnValue": 0,
    }
    await client.post("/offer", json={"flipkartOfferApiResponse": {"offers": [offer]}})

    response = await client.get(
        "/highest-discount",
        params={"amountToPay": "1000", "bankName": "icici", "paymentInstrument": "debit"},
    )
    assert response.status_code == 200
    assert response.json() == {"highestDiscountAmount": 50}


@pytest.mark.asyncio
async def test_highest_discount_below_minimum(client, axis_flat_offer):
    await client.post("/offer", json={"flipkartOfferApiResponse": {"offers": [axis_flat_offer]}})

    response = await client.get(
        "/highest-discount",
        params={"amountToPay": "499.99", "bankName": "AXIS", "paymentInstrument": "CREDIT"},
    )
    assert response.status_code == 200
    assert response.json() == {"highestDiscountAmount": 0}


@pytest.mark.asyncio
async def test_highest_discount_non_numeric_amount(client):
    response = await client.get(
        "/highest-discount",
        params={"amountToPay": "abc", "bankName": "AXIS", "paymentInstrument": "CREDIT"},
    )
    assert response.status_code == 400
    assert "amountToPay" in response.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["nan", "inf"])
async def test_highest_discount_non_finite_amount(client, amount):
    response = await client.get(
        "/highest-discount",
        params={"amountToPay": amount, "bankName": "AXIS", "paymentInstrument": "CREDIT"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"bankName": "AXIS", "paymentInstrument": "CREDIT"},
        {"amountToPay": "1000", "paymentInstrument": "CREDIT"},
        {"amountToPay": "1000", "bankName": "AXIS"},
        {"amountToPay": "1000", "bankName": " ", "paymentInstrument": "CREDIT"},
    ],
)
async def test_highest_discount_missing_params(client, params):
    response = await client.get("/highest-discount", params=params)
    assert response.status_code == 400
    assert "required" in response.json()["detail"]


@pytest.mark.asyncio
async def test_storage_failure_returns_500(tmp_path, axis_flat_offer):
    # Schema never created, so every query fails.
    broken = OfferStore(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    app.dependency_overrides[get_store] = lambda: broken
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            post = await client.post(
                "/offer",
                json={"flipkartOfferApiResponse": {"offers": [axis_flat_offer]}},
            )
            get = await client.get(
                "/highest-discount",
                params={"amountToPay": "1000", "bankName": "AXIS", "paymentInstrument": "CREDIT"},
            )
    finally:
        app.dependency_overrides.clear()
        await broken.dispose()

    assert post.status_code == 500
    assert get.status_code == 500
    assert "internal server error" in post.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["discountValue", "maxDiscount", "minTxnValue"])
@pytest.mark.parametrize("value", ["inf", "nan"])
async def test_post_non_finite_offer_number_is_rejected(client, axis_flat_offer, field, value):
    offer = dict(axis_flat_offer, discountType="PERCENTAGE", maxDiscount=50)
    offer[field] = value
    response = await client.post("/offer", json={"flipkartOfferApiResponse": {"offers": [offer]}})
    assert response.status_code == 400
    assert field in response.json()["detail"]

    response = await client.get(
        "/highest-discount",
        params={"amountToPay": "1000", "bankName": "AXIS", "paymentInstrument": "CREDIT"},
    )
    assert response.status_code == 200
    assert response.json() == {"highestDiscountAmount": 0}


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["", 0, False, None])
async def test_post_empty_top_level_field_is_missing(client, value):
    response = await client.post("/offer", json={"flipkartOfferApiResponse": value})
    assert response.status_code == 400
    assert "flipkartOfferApiResponse" in response.json()["detail"]


@pytest.mark.asyncio
async def test_post_empty_object_returns_zero_counts(client):
    response = await client.post("/offer", json={"flipkartOfferApiResponse": {}})
    assert response.status_code == 200
    assert response.json() == {"noOfOffersIdentified": 0, "noOfNewOffersCreated": 0}
