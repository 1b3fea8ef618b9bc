"""
Tests for buying merch with coins.
"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import SQLAlchemyError

from merchmarket.app.core.exceptions import (
    AccountNotFoundError,
    InputValidationError,
    InsufficientFundsError,
    InternalError,
    ItemNotFoundError,
)
from merchmarket.app.domain.wallet.summary_service import SummaryService
from merchmarket.app.domain.wallet.transfer_service import TransferService
from merchmarket.app.models.purchase import Purchase
from helpers import balance_of, count_rows, total_coins_in_circulation


@pytest.mark.asyncio
async def test_purchase_debits_price(db_session, make_user):
    user = await make_user("ursula", coins=100)

    purchase = await TransferService.purchase_item(db_session, "ursula", "cup")

    assert purchase.user_id == user.id
    assert await balance_of(db_session, "ursula") == 80
    assert await count_rows(db_session, Purchase) == 1


@pytest.mark.asyncio
async def test_purchase_twice_shows_quantity_two(db_session, make_user):
    """U=100 buys a 20-coin cup twice -> 60 coins, inventory cup x2."""
    await make_user("ursula", coins=100)

    await TransferService.purchase_item(db_session, "ursula", "cup")
    await TransferService.purchase_item(db_session, "ursula", "cup")

    assert await balance_of(db_session, "ursula") == 60
    summary = await SummaryService.get_account_summary(db_session, "ursula")
    assert [(item.type, item.quantity) for item in summary.inventory] == [("cup", 2)]


@pytest.mark.asyncio
async def test_purchase_insufficient_funds(db_session, make_user):
    """U=10 cannot afford a 20-coin cup; nothing changes."""
    await make_user("ursula", coins=10)

    with pytest.raises(InsufficientFundsError):
        await TransferService.purchase_item(db_session, "ursula", "cup")

    assert await balance_of(db_session, "ursula") == 10
    assert await count_rows(db_session, Purchase) == 0


@pytest.mark.asyncio
async def test_purchase_exact_balance(db_session, make_user):
    await make_user("ursula", coins=10)

    await TransferService.purchase_item(db_session, "ursula", "pen")

    assert await balance_of(db_session, "ursula") == 0


@pytest.mark.asyncio
async def test_purchase_unknown_item(db_session, make_user):
    await make_user("ursula", coins=100)

    with pytest.raises(ItemNotFoundError) as exc_info:
        await TransferService.purchase_item(db_session, "ursula", "yacht")

    assert exc_info.value.message == "Товар не найден"
    assert exc_info.value.status_code == 404
    assert await balance_of(db_session, "ursula") == 100


@pytest.mark.asyncio
async def test_purchase_empty_item_name(db_session, make_user):
    await make_user("ursula", coins=100)

    with pytest.raises(InputValidationError) as exc_info:
        await TransferService.purchase_item(db_session, "ursula", "")

    assert exc_info.value.message == "Не указан предмет для покупки"


@pytest.mark.asyncio
async def test_purchase_unknown_buyer(db_session):
    with pytest.raises(AccountNotFoundError) as exc_info:
        await TransferService.purchase_item(db_session, "ghost", "cup")

    assert exc_info.value.message == "Пользователь не найден"
    assert await count_rows(db_session, Purchase) == 0


@pytest.mark.asyncio
async def test_purchase_storage_failure_rolls_back(db_session, make_user, mocker):
    await make_user("ursula", coins=500)

    mocker.patch(
        "merchmarket.app.domain.wallet.transfer_service.create_purchase",
        new=AsyncMock(side_effect=SQLAlchemyError("connection reset")),
    )

    with pytest.raises(InternalError) as exc_info:
        await TransferService.purchase_item(db_session, "ursula", "hoody")

    assert exc_info.value.message == "Ошибка при сохранении данных"
    assert await balance_of(db_session, "ursula") == 500
    assert await count_rows(db_session, Purchase) == 0


@pytest.mark.asyncio
async def test_coins_are_conserved_across_purchases_and_transfers(db_session, make_user):
    await make_user("alice", coins=1000)
    await make_user("bob", coins=1000)
    before = await total_coins_in_circulation(db_session)

    await TransferService.purchase_item(db_session, "alice", "pink-hoody")
    await TransferService.transfer_coins(db_session, "bob", "alice", 300)
    await TransferService.purchase_item(db_session, "alice", "powerbank")
    await TransferService.purchase_item(db_session, "bob", "book")
    with pytest.raises(InsufficientFundsError):
        await TransferService.transfer_coins(db_session, "alice", "bob", 601)

    assert await total_coins_in_circulation(db_session) == before
    assert await balance_of(db_session, "alice") == 600
    assert await balance_of(db_session, "bob") == 650


@pytest.mark.asyncio
async def test_purchase_catalog_lookup_failure(db_session, make_user, mocker):
    await make_user("ursula", coins=100)
    mocker.patch(
        "merchmarket.app.domain.wallet.transfer_service.find_catalog_item_by_name",
        new=AsyncMock(side_effect=SQLAlchemyError("connection reset")),
    )

    with pytest.raises(InternalError) as exc_info:
        await TransferService.purchase_item(db_session, "ursula", "cup")

    assert exc_info.value.message == "Ошибка при поиске товара"
    assert await balance_of(db_session, "ursula") == 100
    assert await count_rows(db_session, Purchase) == 0
