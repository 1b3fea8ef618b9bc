"""
Wallet Schemas.
"""

from pydantic import BaseModel, Field


class SendCoinRequest(BaseModel):
    """Schema for sending coins to another user."""
    to_user: str = Field(..., alias="toUser", min_length=1, description="Receiver username")
    amount: int = Field(..., description="Coins to send (must be positive)")

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str
