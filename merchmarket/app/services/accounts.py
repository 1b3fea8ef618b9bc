"""
Account storage functions.

Lookup, creation and balance updates for user accounts.
"""

from typing import Dict, Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from merchmarket.app.models.user import User


async def find_account_by_username(
    db: AsyncSession,
    username: str,
    for_update: bool = False
) -> Optional[User]:
    """
    Find an account by its username.

    Args:
        db: Database session
        username: Account username
        for_update: Lock the row until the surrounding transaction ends

    Returns:
        User or None if no such account exists
    """
    query = select(User).where(User.username == username)
    if for_update:
        query = query.with_for_update().execution_options(populate_existing=True)

    result = await db.execute(query)
    return result.scalar_one_or_none()


async def create_account(
    db: AsyncSession,
    username: str,
    hashed_password: str,
    coins: int
) -> User:
    """
    Create a new account with a starting balance.

    Raises:
        IntegrityError: If the username is already taken
    """
    user = User(
        username=username,
        hashed_password=hashed_password,
        coins=coins
    )

    db.add(user)
    await db.flush()  # Will raise IntegrityError if unique constraint violated

    return user


async def update_account_balance(
    db: AsyncSession,
    user: User,
    coins: int
) -> User:
    """Set an account balance and flush it within the current transaction."""
    user.coins = coins
    await db.flush()
    return user


async def find_usernames_by_ids(
    db: AsyncSession,
    user_ids: Iterable[int]
) -> Dict[int, str]:
    """
    Resolve user IDs to usernames in one query.

    IDs without a matching account are absent from the result.
    """
    ids = set(user_ids)
    if not ids:
        return {}

    result = await db.execute(
        select(User.id, User.username).where(User.id.in_(ids))
    )
    return {user_id: username for user_id, username in result.all()}
