"""Pydantic schemas for API request/response validation."""

from bankoffers.schemas.offer import (
    HighestDiscountResponse,
    NormalizedOffer,
    OfferEntry,
    OfferIngestRequest,
    OfferIngestResponse,
)

__all__ = [
    "HighestDiscountResponse",
    "NormalizedOffer",
    "OfferEntry",
    "OfferIngestRequest",
    "OfferIngestResponse",
]
