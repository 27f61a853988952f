"""SQLAlchemy models."""

from bankoffers.models.offer import DiscountType, Offer

__all__ = [
    "DiscountType",
    "Offer",
]
