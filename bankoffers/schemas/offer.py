"""Offer schemas."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OfferEntry(BaseModel):
    """One raw offer as found in the Flipkart offer API payload."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    description: str
    bank_name: str = Field(alias="bankName")
    payment_instrument: str = Field(alias="paymentInstrument")
    discount_type: str = Field(alias="discountType")
    discount_value: float = Field(alias="discountValue")
    max_discount: Optional[float] = Field(default=None, alias="maxDiscount")
    min_txn_value: float = Field(alias="minTxnValue")

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value

    @field_validator("max_discount", mode="before")
    @classmethod
    def _missing_cap_is_none(cls, value: Any) -> Any:
        # 0, "" and null all mean "no cap"
        if not value:
            return None
        return value


class NormalizedOffer(BaseModel):
    """Canonical offer record ready for insertion."""

    id: str
    description: str
    bank_name: str
    payment_instrument: str
    discount_type: str
    discount_value: float
    max_discount: Optional[float] = None
    min_txn_value: float


class OfferIngestRequest(BaseModel):
    """Schema for POST /offer."""

    model_config = ConfigDict(populate_by_name=True)

    # Left loose on purpose; the normalizer decides what counts as offers.
    flipkart_offer_api_response: Optional[Any] = Field(
        default=None, alias="flipkartOfferApiResponse"
    )


class OfferIngestResponse(BaseModel):
    """Counts reported after ingesting a payload."""

    model_config = ConfigDict(populate_by_name=True)

    no_of_offers_identified: int = Field(alias="noOfOffersIdentified")
    no_of_new_offers_created: int = Field(alias="noOfNewOffersCreated")


class HighestDiscountResponse(BaseModel):
    """Best discount for a payment scenario."""

    model_config = ConfigDict(populate_by_name=True)

    highest_discount_amount: float = Field(alias="highestDiscountAmount")
