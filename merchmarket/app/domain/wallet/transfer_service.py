"""
Transfer Service (Domain Logic).

Moves coins between users and spends coins on merch.
Every operation runs in a single DB transaction: balances and ledger rows
are committed together or not at all.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from merchmarket.app.core.exceptions import (
    AccountNotFoundError,
    InputValidationError,
    InsufficientFundsError,
    InternalError,
    ItemNotFoundError,
)
from merchmarket.app.db.session import atomic
from merchmarket.app.models.ledger_entry import LedgerEntry
from merchmarket.app.models.purchase import Purchase
from merchmarket.app.services.accounts import find_account_by_username, update_account_balance
from merchmarket.app.services.catalog import find_catalog_item_by_name, create_purchase
from merchmarket.app.services.ledger import create_ledger_entry

logger = logging.getLogger("merchmarket.wallet")


class TransferService:

    @staticmethod
    async def transfer_coins(
        db: AsyncSession,
        source_username: str,
        dest_username: str,
        amount: int
    ) -> LedgerEntry:
        """
        Send coins from one user to another.

        Flow:
        1. Validate amount (> 0)
        2. Lock and load sender
        3. Check sender balance
        4. Lock and load receiver
        5. Debit sender, credit receiver
        6. Append ledger entry
        7. Commit

        The balance check runs before the receiver lookup, so an
        overdrawn transfer to an unknown user reports insufficient funds.

        Args:
            db: Database session (must not have an open write transaction)
            source_username: Authenticated sender
            dest_username: Receiver
            amount: Coins to move

        Returns:
            Created LedgerEntry

        Raises:
            InputValidationError: amount <= 0
            AccountNotFoundError: sender or receiver does not exist
            InsufficientFundsError: sender balance below amount
            InternalError: storage failure (everything rolled back)
        """
        if amount <= 0:
            raise InputValidationError("Сумма перевода должна быть положительной")

        async with atomic(db, "Ошибка при сохранении транзакции"):
            sender = await find_account_by_username(db, source_username, for_update=True)
            if not sender:
                raise AccountNotFoundError("Ошибка при получении отправителя", source_username)

            if sender.coins < amount:
                raise InsufficientFundsError(balance=sender.coins, required=amount)

            receiver = await find_account_by_username(db, dest_username, for_update=True)
            if not receiver:
                raise AccountNotFoundError("Получатель не найден", dest_username)

            await update_account_balance(db, sender, sender.coins - amount)
            await update_account_balance(db, receiver, receiver.coins + amount)

            entry = await create_ledger_entry(
                db,
                from_user_id=sender.id,
                to_user_id=receiver.id,
                amount=amount
            )

        logger.info("Transferred %d coins from %s to %s", amount, source_username, dest_username)
        return entry

    @staticmethod
    async def purchase_item(
        db: AsyncSession,
        buyer_username: str,
        item_name: str
    ) -> Purchase:
        """
        Buy one unit of a merch item.

        Flow:
        1. Resolve catalog item (read-only)
        2. Lock and load buyer
        3. Check buyer balance against price
        4. Debit price
        5. Append purchase record
        6. Commit

        Raises:
            InputValidationError: empty item name
            ItemNotFoundError: no such merch item
            AccountNotFoundError: buyer does not exist
            InsufficientFundsError: balance below item price
            InternalError: storage failure (everything rolled back)
        """
        if not item_name:
            raise InputValidationError("Не указан предмет для покупки")

        try:
            merch = await find_catalog_item_by_name(db, item_name)
        except SQLAlchemyError as exc:
            await db.rollback()
            raise InternalError("Ошибка при поиске товара") from exc

        if not merch:
            raise ItemNotFoundError(item_name)

        async with atomic(db, "Ошибка при сохранении данных"):
            buyer = await find_account_by_username(db, buyer_username, for_update=True)
            if not buyer:
                raise AccountNotFoundError("Пользователь не найден", buyer_username)

            if buyer.coins < merch.price:
                raise InsufficientFundsError(balance=buyer.coins, required=merch.price)

            await update_account_balance(db, buyer, buyer.coins - merch.price)
            purchase = await create_purchase(db, user_id=buyer.id, merch_id=merch.id)

        logger.info("User %s bought %s for %d coins", buyer_username, merch.name, merch.price)
        return purchase
