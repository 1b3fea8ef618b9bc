"""
Authentication dependencies for FastAPI.

This module provides dependencies for protecting routes with JWT authentication.
The signer and gateway live on app.state and are built by create_app().
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from merchmarket.app.core.exceptions import AuthenticationError
from merchmarket.app.core.jwt import TokenSigner
from merchmarket.app.domain.identity.identity_gateway import IdentityGateway

# HTTP Bearer security scheme (errors are raised below with our own messages)
security = HTTPBearer(auto_error=False)


def get_token_signer(request: Request) -> TokenSigner:
    """Token signer configured for this application."""
    return request.app.state.token_signer


def get_identity_gateway(request: Request) -> IdentityGateway:
    """Identity gateway configured for this application."""
    return request.app.state.identity_gateway


async def get_current_username(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    signer: TokenSigner = Depends(get_token_signer)
) -> str:
    """
    FastAPI dependency for JWT authentication.

    Checks:
    1. Authorization header is present
    2. Header uses the Bearer scheme
    3. Token signature and expiry are valid
    4. Token carries a username

    Returns:
        Username of the authenticated caller

    Raises:
        AuthenticationError: 401 if authentication fails for any reason
    """
    if credentials is None:
        if not request.headers.get("Authorization"):
            raise AuthenticationError("Требуется заголовок Authorization")
        raise AuthenticationError("Неверный формат заголовка Authorization")

    payload = signer.decode_access_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Неверный или просроченный токен")

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        raise AuthenticationError("Пользователь не авторизован")

    return username
