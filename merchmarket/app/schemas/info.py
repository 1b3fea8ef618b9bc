"""
Account info schemas.

Response shape of GET /api/info.
"""

from pydantic import BaseModel, Field
from typing import List


class InventoryItem(BaseModel):
    """Merch owned by the user and how many units."""
    type: str
    quantity: int


class ReceivedCoins(BaseModel):
    from_user: str = Field(..., alias="fromUser")
    amount: int

    class Config:
        populate_by_name = True


class SentCoins(BaseModel):
    to_user: str = Field(..., alias="toUser")
    amount: int

    class Config:
        populate_by_name = True


class CoinHistory(BaseModel):
    received: List[ReceivedCoins] = Field(default_factory=list)
    sent: List[SentCoins] = Field(default_factory=list)


class InfoResponse(BaseModel):
    """Balance, inventory and coin history of the authenticated user."""
    coins: int
    inventory: List[InventoryItem] = Field(default_factory=list)
    coin_history: CoinHistory = Field(default_factory=CoinHistory, alias="coinHistory")

    class Config:
        populate_by_name = True
