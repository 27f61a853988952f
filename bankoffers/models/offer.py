"""Offer model for bank/payment-instrument discount rules."""

import enum
from typing import Optional

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bankoffers.database import Base


class DiscountType(str, enum.Enum):
    """Known discount computation modes."""

    FLAT = "FLAT"
    PERCENTAGE = "PERCENTAGE"


class Offer(Base):
    """Offer ingested from the Flipkart offer API payload."""

    __tablename__ = "offers"

    # Whitespace-stripped, lower-cased description
    id: Mapped[str] = mapped_column(String(500), primary_key=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)
    bank_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    payment_instrument: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # Stored verbatim; unknown types are kept and yield no discount.
    discount_type: Mapped[str] = mapped_column(String(20), nullable=False)
    discount_value: Mapped[float] = mapped_column(Float, nullable=False)
    max_discount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    min_txn_value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    def __repr__(self) -> str:
        return f"<Offer(id='{self.id}', bank_name='{self.bank_name}')>"
