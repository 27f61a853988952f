"""Offer ingestion and discount lookup endpoints."""

import math

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError

from bankoffers.database import OfferStore, get_store
from bankoffers.schemas.offer import (
    HighestDiscountResponse,
    OfferIngestRequest,
    OfferIngestResponse,
)
from bankoffers.services.offer_normalizer import OfferPayloadError
from bankoffers.services.offers import find_highest_discount, ingest_offers

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.post("/offer", response_model=OfferIngestResponse, status_code=201)
async def create_offers(
    body: OfferIngestRequest,
    response: Response,
    store: OfferStore = Depends(get_store),
):
    """Store the offers found in a Flipkart offer API response.

    Returns 201 with counts, or 200 with zero counts when the payload holds
    no offers. Offers already stored are skipped.
    """
    payload = body.flipkart_offer_api_response
    # Empty scalars count as missing; an empty object means "no offers".
    if payload is None or (isinstance(payload, (str, int, float)) and not payload):
        raise HTTPException(
            status_code=400,
            detail="Missing flipkartOfferApiResponse in request body.",
        )

    try:
        result = await ingest_offers(store, payload)
    except OfferPayloadError as e:
        logger.warning("offers_payload_invalid", index=e.index, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        logger.exception("offers_ingest_failed")
        raise HTTPException(
            status_code=500,
            detail="An internal server error occurred while saving offers.",
        )

    if result.identified == 0:
        response.status_code = 200

    return OfferIngestResponse(
        no_of_offers_identified=result.identified,
        no_of_new_offers_created=result.created,
    )


@router.get("/highest-discount", response_model=HighestDiscountResponse)
async def highest_discount(
    amount_to_pay: str | None = Query(None, alias="amountToPay"),
    bank_name: str | None = Query(None, alias="bankName"),
    payment_instrument: str | None = Query(None, alias="paymentInstrument"),
    store: OfferStore = Depends(get_store),
):
    """Highest discount applicable to a payment of ``amountToPay``."""
    required = (amount_to_pay, bank_name, payment_instrument)
    if any(not (value or "").strip() for value in required):
        raise HTTPException(
            status_code=400,
            detail=(
                "Missing required query parameters: amountToPay, bankName, "
                "and paymentInstrument are required."
            ),
        )

    try:
        amount = float(amount_to_pay)
    except ValueError:
        amount = math.nan
    if not math.isfinite(amount):
        raise HTTPException(status_code=400, detail="Invalid amountToPay. Must be a number.")

    try:
        highest = await find_highest_discount(
            store,
            amount,
            bank_name.strip(),
            payment_instrument.strip(),
        )
    except SQLAlchemyError:
        logger.exception("highest_discount_failed")
        raise HTTPException(
            status_code=500,
            detail="An internal server error occurred while calculating discount.",
        )

    return HighestDiscountResponse(highest_discount_amount=highest)
