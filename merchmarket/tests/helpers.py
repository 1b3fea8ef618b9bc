"""
Read helpers shared by the test modules.

They query columns directly so rolled back state is never served from the
session identity map.
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from merchmarket.app.models.user import User
from merchmarket.app.models.merch import Merch
from merchmarket.app.models.purchase import Purchase


async def balance_of(db: AsyncSession, username: str) -> int:
    return await db.scalar(select(User.coins).where(User.username == username))


async def count_rows(db: AsyncSession, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


async def total_coins_in_circulation(db: AsyncSession) -> int:
    """Sum of balances plus the price of everything bought."""
    balances = await db.scalar(select(func.coalesce(func.sum(User.coins), 0)))
    spent = await db.scalar(
        select(func.coalesce(func.sum(Merch.price), 0))
        .select_from(Purchase)
        .join(Merch, Merch.id == Purchase.merch_id)
    )
    return balances + spent
