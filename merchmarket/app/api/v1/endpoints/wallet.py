"""
Wallet API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from merchmarket.app.db.session import get_db
from merchmarket.app.schemas.wallet import SendCoinRequest, MessageResponse
from merchmarket.app.core.dependencies import get_current_username
from merchmarket.app.domain.wallet.transfer_service import TransferService

router = APIRouter(tags=["Wallet"])


@router.post("/sendCoin", response_model=MessageResponse)
async def send_coin(
    request: SendCoinRequest,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Send coins from the caller to another user."""
    await TransferService.transfer_coins(db, username, request.to_user, request.amount)
    return MessageResponse(message="Монетки успешно отправлены")
