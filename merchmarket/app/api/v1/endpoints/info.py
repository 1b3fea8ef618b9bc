"""
Account info API endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from merchmarket.app.db.session import get_db
from merchmarket.app.schemas.info import InfoResponse
from merchmarket.app.core.dependencies import get_current_username
from merchmarket.app.domain.wallet.summary_service import SummaryService

router = APIRouter(tags=["Info"])


@router.get("/info", response_model=InfoResponse)
async def get_info(
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Coin balance, inventory and transfer history of the caller."""
    return await SummaryService.get_account_summary(db, username)
