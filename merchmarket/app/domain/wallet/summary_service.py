"""
Account Summary Service.

Read-only view of a user's balance, inventory and coin history.
"""

from typing import Dict, Iterable, Iterator, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from merchmarket.app.core.exceptions import AccountNotFoundError, InternalError
from merchmarket.app.models.ledger_entry import LedgerEntry
from merchmarket.app.schemas.info import (
    CoinHistory,
    InfoResponse,
    InventoryItem,
    ReceivedCoins,
    SentCoins,
)
from merchmarket.app.services.accounts import find_account_by_username, find_usernames_by_ids
from merchmarket.app.services.catalog import count_purchases_by_item
from merchmarket.app.services.ledger import (
    find_ledger_entries_by_source,
    find_ledger_entries_by_destination,
)


def resolve_counterparties(
    entries: Iterable[LedgerEntry],
    usernames: Dict[int, str],
    counterparty_attr: str
) -> Iterator[Tuple[str, int]]:
    """Yield (counterparty username, amount), skipping entries that don't resolve."""
    for entry in entries:
        username = usernames.get(getattr(entry, counterparty_attr))
        if username is None:
            continue
        yield username, entry.amount


class SummaryService:

    @staticmethod
    async def get_account_summary(db: AsyncSession, username: str) -> InfoResponse:
        """
        Build the balance, inventory and history summary for a user.

        Counterparty usernames are resolved at read time. Entries whose
        counterparty no longer resolves are left out of the history.

        Raises:
            AccountNotFoundError: If the user does not exist
            InternalError: A storage read failed
        """
        try:
            user = await find_account_by_username(db, username)
        except SQLAlchemyError as exc:
            raise InternalError("Не удалось найти пользователя") from exc
        if not user:
            raise AccountNotFoundError("Не удалось найти пользователя", username)

        try:
            purchases = await count_purchases_by_item(db, user.id)
        except SQLAlchemyError as exc:
            raise InternalError("Не удалось получить покупки") from exc
        inventory = [InventoryItem(type=name, quantity=quantity) for name, quantity in purchases]

        try:
            sent_entries = await find_ledger_entries_by_source(db, user.id)
        except SQLAlchemyError as exc:
            raise InternalError("Не удалось получить отправленные транзакции") from exc
        try:
            received_entries = await find_ledger_entries_by_destination(db, user.id)
        except SQLAlchemyError as exc:
            raise InternalError("Не удалось получить полученные транзакции") from exc

        try:
            usernames = await find_usernames_by_ids(
                db,
                [entry.to_user_id for entry in sent_entries]
                + [entry.from_user_id for entry in received_entries]
            )
        except SQLAlchemyError as exc:
            raise InternalError("Не удалось получить пользователей") from exc

        history = CoinHistory(
            sent=[
                SentCoins(to_user=to_user, amount=amount)
                for to_user, amount in resolve_counterparties(sent_entries, usernames, "to_user_id")
            ],
            received=[
                ReceivedCoins(from_user=from_user, amount=amount)
                for from_user, amount in resolve_counterparties(received_entries, usernames, "from_user_id")
            ],
        )

        return InfoResponse(coins=user.coins, inventory=inventory, coin_history=history)
