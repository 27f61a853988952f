"""Offers service - ingestion and highest-discount lookup.

Ties the normalizer, the offer store and the discount selector together.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from bankoffers.database import OfferStore
from bankoffers.models.offer import Offer
from bankoffers.schemas.offer import NormalizedOffer
from bankoffers.services.discounts import select_highest_discount
from bankoffers.services.offer_normalizer import parse_offers_from_payload

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IngestResult:
    identified: int
    created: int


def _insert_ignore_statement(dialect_name: str, rows: list[dict[str, Any]]):
    table = Offer.__table__
    if dialect_name in ("mysql", "mariadb"):
        return mysql_insert(table).values(rows).prefix_with("IGNORE")
    if dialect_name == "sqlite":
        return sqlite_insert(table).values(rows).on_conflict_do_nothing(index_elements=["id"])
    if dialect_name == "postgresql":
        return postgresql_insert(table).values(rows).on_conflict_do_nothing(index_elements=["id"])
    raise RuntimeError(f"Insert-ignore is not supported for dialect '{dialect_name}'")


async def insert_offers_ignore_duplicates(
    store: OfferStore,
    offers: list[NormalizedOffer],
) -> int:
    """Bulk insert offers, skipping ids that already exist.

    Runs as a single statement. Returns the number of rows actually created.
    """
    if not offers:
        return 0

    rows = [offer.model_dump() for offer in offers]
    stmt = _insert_ignore_statement(store.dialect_name, rows)

    async with store.session() as session:
        async with session.begin():
            result = await session.execute(stmt)
            created = result.rowcount

    return max(created or 0, 0)


async def find_applicable_offers(
    store: OfferStore,
    bank_name: str,
    payment_instrument: str,
    amount: float,
) -> list[Offer]:
    """Offers for this bank and instrument whose minimum is met by ``amount``."""
    query = (
        select(Offer)
        .where(Offer.bank_name == bank_name.upper())
        .where(Offer.payment_instrument == payment_instrument.upper())
        .where(Offer.min_txn_value <= amount)
    )

    async with store.session() as session:
        result = await session.execute(query)
        return list(result.scalars().all())


async def ingest_offers(store: OfferStore, payload: Any) -> IngestResult:
    """Normalize a Flipkart offer payload and store the new offers."""
    offers = parse_offers_from_payload(payload)
    if not offers:
        return IngestResult(identified=0, created=0)

    created = await insert_offers_ignore_duplicates(store, offers)
    logger.info("offers_ingested", identified=len(offers), created=created)
    return IngestResult(identified=len(offers), created=created)


async def find_highest_discount(
    store: OfferStore,
    amount: float,
    bank_name: str,
    payment_instrument: str,
) -> float:
    """Best discount available for a payment scenario, 0 if none applies."""
    offers = await find_applicable_offers(store, bank_name, payment_instrument, amount)
    highest = select_highest_discount(offers, amount)
    logger.info(
        "highest_discount_computed",
        bank_name=bank_name.upper(),
        payment_instrument=payment_instrument.upper(),
        amount=amount,
        candidates=len(offers),
        highest=highest,
    )
    return highest
