"""
Merch API endpoints.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from merchmarket.app.db.session import get_db
from merchmarket.app.core.dependencies import get_current_username
from merchmarket.app.domain.wallet.transfer_service import TransferService

router = APIRouter(tags=["Merch"])


@router.get("/buy/{item}", response_class=Response)
async def buy_item(
    item: str,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Spend coins on one unit of a merch item."""
    await TransferService.purchase_item(db, username, item)
    return Response(status_code=status.HTTP_200_OK)
