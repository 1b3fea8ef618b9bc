"""
Merch catalog storage functions and seeding.
"""

import logging
from typing import Dict, List, Optional, Set, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from merchmarket.app.models.merch import Merch
from merchmarket.app.models.purchase import Purchase

logger = logging.getLogger("merchmarket.catalog")

DEFAULT_CATALOG: Dict[str, int] = {
    "t-shirt": 80,
    "cup": 20,
    "book": 50,
    "pen": 10,
    "powerbank": 200,
    "hoody": 300,
    "umbrella": 200,
    "socks": 10,
    "wallet": 50,
    "pink-hoody": 500,
}


async def find_catalog_item_by_name(db: AsyncSession, name: str) -> Optional[Merch]:
    """Find a merch item by its unique name."""
    result = await db.execute(select(Merch).where(Merch.name == name))
    return result.scalar_one_or_none()


async def create_purchase(db: AsyncSession, user_id: int, merch_id: int) -> Purchase:
    """Record one unit of merch bought by a user."""
    purchase = Purchase(user_id=user_id, merch_id=merch_id)
    db.add(purchase)
    await db.flush()
    return purchase


async def count_purchases_by_item(db: AsyncSession, user_id: int) -> List[Tuple[str, int]]:
    """
    Count a user's purchases per merch item.

    Returns:
        (item name, quantity) pairs ordered by the first purchase of each item
    """
    result = await db.execute(
        select(Merch.name, func.count(Purchase.id))
        .join(Merch, Merch.id == Purchase.merch_id)
        .where(Purchase.user_id == user_id)
        .group_by(Merch.name)
        .order_by(func.min(Purchase.id))
    )
    return [(name, quantity) for name, quantity in result.all()]


async def find_catalog_item_names(db: AsyncSession) -> Set[str]:
    result = await db.execute(select(Merch.name))
    return set(result.scalars().all())


async def seed_catalog(db: AsyncSession, catalog: Dict[str, int] = None) -> int:
    """
    Insert catalog items that are not present yet.

    Existing items keep their price. Safe to run on every startup, also
    from several workers at once: a worker that loses the insert race
    rolls back and leaves the rows to the winner.

    Returns:
        Number of items inserted
    """
    catalog = DEFAULT_CATALOG if catalog is None else catalog

    existing = await find_catalog_item_names(db)

    created = 0
    for name, price in catalog.items():
        if name in existing:
            continue
        db.add(Merch(name=name, price=price))
        created += 1

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Catalog seeded concurrently by another worker")
        return 0

    if created:
        logger.info("Seeded %d merch items", created)
    return created
