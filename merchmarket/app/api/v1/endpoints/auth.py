"""
Authentication API endpoints.

A single login endpoint that also registers unseen usernames.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from merchmarket.app.db.session import get_db
from merchmarket.app.schemas.auth import AuthRequest, AuthResponse
from merchmarket.app.core.dependencies import get_identity_gateway
from merchmarket.app.domain.identity.identity_gateway import IdentityGateway

router = APIRouter(tags=["Auth"])


@router.post("/auth", response_model=AuthResponse)
async def authenticate(
    credentials: AuthRequest,
    db: AsyncSession = Depends(get_db),
    gateway: IdentityGateway = Depends(get_identity_gateway)
):
    """
    Authenticate and receive a JWT token.

    Registers a new user with the starting balance if the username is
    unknown, otherwise checks the password.
    """
    token = await gateway.authenticate(db, credentials.username, credentials.password)
    return AuthResponse(token=token)
