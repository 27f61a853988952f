"""Discount computation and best-offer selection."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from bankoffers.models.offer import DiscountType


def calculate_discount(offer: Any, amount: float) -> float:
    """Discount a single offer yields for a transaction of ``amount``.

    ``offer`` is anything exposing ``discount_type``, ``discount_value`` and
    ``max_discount`` (ORM rows and ``NormalizedOffer`` both qualify).
    Unknown discount types yield 0.
    """
    discount_type = offer.discount_type
    if discount_type == DiscountType.FLAT.value:
        return float(offer.discount_value)

    if discount_type == DiscountType.PERCENTAGE.value:
        discount = float(offer.discount_value) / 100 * amount
        cap = offer.max_discount
        if cap and discount > cap:
            discount = float(cap)
        return discount

    return 0.0


def select_highest_discount(offers: Iterable[Any], amount: float) -> float:
    """Highest discount across ``offers``, rounded to two decimals.

    Callers pass offers already filtered for bank, instrument and minimum
    transaction value. Returns 0 when nothing yields a positive discount.
    """
    highest = 0.0
    for offer in offers:
        current = calculate_discount(offer, amount)
        if current > highest:
            highest = current
    return round(highest, 2)
