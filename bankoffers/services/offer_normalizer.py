"""Offer normalization.

Turns the loosely structured Flipkart offer payload into canonical
``NormalizedOffer`` records. Numeric fields are coerced here, once, so the
storage and discount code only ever see floats or ``None``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from bankoffers.schemas.offer import NormalizedOffer, OfferEntry

logger = structlog.get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


class OfferPayloadError(ValueError):
    """Raised when an offer entry in the payload cannot be understood."""

    def __init__(self, index: int, message: str) -> None:
        super().__init__(f"Invalid offer at index {index}: {message}")
        self.index = index


def offer_id_for(description: str) -> str:
    """Identity key for an offer.

    Descriptions that differ only in whitespace or case share a key, so
    "5% off" and " 5%   OFF " are the same offer. Distinct offers whose
    text collapses to the same key are treated as duplicates too.
    """
    return _WHITESPACE.sub("", description).lower()


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()))
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts)


def normalize_offer(raw: Any, index: int = 0) -> NormalizedOffer:
    """Convert one raw payload entry into a canonical record."""
    if not isinstance(raw, Mapping):
        raise OfferPayloadError(index, "offer entry must be an object")

    try:
        entry = OfferEntry.model_validate(dict(raw))
    except ValidationError as exc:
        raise OfferPayloadError(index, _describe(exc)) from exc

    return NormalizedOffer(
        id=offer_id_for(entry.description),
        description=entry.description,
        bank_name=entry.bank_name,
        payment_instrument=entry.payment_instrument,
        discount_type=entry.discount_type,
        discount_value=entry.discount_value,
        max_discount=entry.max_discount,
        min_txn_value=entry.min_txn_value,
    )


def parse_offers_from_payload(payload: Any) -> list[NormalizedOffer]:
    """Extract offers from a Flipkart offer API response.

    Returns [] when the payload is missing or has no offers list. Order of
    the input is preserved and in-payload duplicates are kept; they collapse
    on insert.
    """
    offers = payload.get("offers") if isinstance(payload, Mapping) else None
    if not isinstance(offers, (list, tuple)):
        logger.warning("offers_payload_missing_offers", payload_type=type(payload).__name__)
        return []

    return [normalize_offer(raw, index) for index, raw in enumerate(offers)]
