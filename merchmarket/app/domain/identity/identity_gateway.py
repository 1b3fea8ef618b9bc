"""
Identity Gateway.

Authenticates a username/password pair and issues a bearer token.
An unseen username is registered on the spot with the starting balance;
there is no separate signup step.
"""

import logging
from jose import JWTError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from merchmarket.app.core.exceptions import AuthenticationError, InternalError
from merchmarket.app.core.jwt import TokenSigner
from merchmarket.app.core.security import PasswordHasher
from merchmarket.app.models.user import User
from merchmarket.app.services.accounts import find_account_by_username, create_account

logger = logging.getLogger("merchmarket.identity")


class IdentityGateway:
    """
    Login-or-register entry point.

    Args:
        signer: Token signer holding the signing secret
        hasher: Password hasher
        initial_balance: Coins granted to a newly created account
    """

    def __init__(self, signer: TokenSigner, hasher: PasswordHasher, initial_balance: int = 1000):
        self.signer = signer
        self.hasher = hasher
        self.initial_balance = initial_balance

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> str:
        """
        Authenticate a user, creating the account on first sight.

        Returns:
            Signed bearer token valid for the signer's lifetime

        Raises:
            AuthenticationError: Wrong password for an existing account
            InternalError: Lookup, hashing, account creation or signing failed
        """
        try:
            user = await find_account_by_username(db, username)
        except SQLAlchemyError as exc:
            raise InternalError("Ошибка при поиске пользователя") from exc

        if user is None:
            user = await self._register(db, username, password)
        else:
            self._check_password(user, password)

        try:
            return self.signer.create_access_token(user.username)
        except JWTError as exc:
            raise InternalError("Не удалось создать токен") from exc

    async def _register(self, db: AsyncSession, username: str, password: str) -> User:
        try:
            hashed_password = self.hasher.hash(password)
        except ValueError as exc:
            raise InternalError("Ошибка при генерации хеша") from exc

        try:
            user = await create_account(db, username, hashed_password, self.initial_balance)
            await db.commit()
        except IntegrityError:
            # Lost a race with a concurrent first login for the same username
            await db.rollback()
            existing = await find_account_by_username(db, username)
            if existing is None:
                raise InternalError("Не удалось создать пользователя")
            self._check_password(existing, password)
            return existing
        except SQLAlchemyError as exc:
            await db.rollback()
            raise InternalError("Не удалось создать пользователя") from exc

        logger.info("Created account %s with %d coins", username, self.initial_balance)
        return user

    def _check_password(self, user: User, password: str) -> None:
        if not self.hasher.verify(password, user.hashed_password):
            logger.warning("Failed login for %s: invalid password", user.username)
            raise AuthenticationError("Неверный пароль")
