"""
Ledger storage functions for peer-to-peer coin transfers.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from merchmarket.app.models.ledger_entry import LedgerEntry


async def create_ledger_entry(
    db: AsyncSession,
    from_user_id: int,
    to_user_id: int,
    amount: int
) -> LedgerEntry:
    """Append an immutable transfer record."""
    entry = LedgerEntry(
        from_user_id=from_user_id,
        to_user_id=to_user_id,
        amount=amount
    )
    db.add(entry)
    await db.flush()
    return entry


async def find_ledger_entries_by_source(db: AsyncSession, user_id: int) -> List[LedgerEntry]:
    """Transfers sent by a user, oldest first."""
    result = await db.execute(
        select(LedgerEntry)
        .where(LedgerEntry.from_user_id == user_id)
        .order_by(LedgerEntry.id)
    )
    return list(result.scalars().all())


async def find_ledger_entries_by_destination(db: AsyncSession, user_id: int) -> List[LedgerEntry]:
    """Transfers received by a user, oldest first."""
    result = await db.execute(
        select(LedgerEntry)
        .where(LedgerEntry.to_user_id == user_id)
        .order_by(LedgerEntry.id)
    )
    return list(result.scalars().all())
