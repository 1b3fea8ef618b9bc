"""
JWT token utilities for authentication.

This module provides the signer used to encode and decode JWT tokens.
The signing secret is handed in at construction time.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt


class TokenSigner:
    """
    Issues and verifies bearer tokens bound to a username.

    Args:
        secret_key: HMAC secret used to sign tokens
        algorithm: JWS algorithm (HS256 by default)
        expires_delta: Token lifetime
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(hours=72)):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def create_access_token(self, username: str, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT access token.

        Args:
            username: Account the token is issued for
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT token string

        Example payload:
            {
                "username": "alice",
                "exp": 1234567890
            }
        """
        expire = datetime.now(timezone.utc) + (expires_delta or self.expires_delta)
        to_encode = {"username": username, "exp": expire}
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Decode and validate a JWT access token.

        Args:
            token: JWT token string to decode

        Returns:
            Decoded token payload if valid and unexpired, None otherwise
        """
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
