"""
User database model.

This module defines the User SQLAlchemy model: an employee account holding
a coin balance.
"""

from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from merchmarket.app.db.session import Base


class User(Base):
    """
    User model for authentication and the coin wallet.

    Created implicitly on the first successful login with an unseen username.
    The balance is only changed by the transfer service.
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("coins >= 0", name="ck_users_coins_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    coins = Column(Integer, default=1000, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', coins={self.coins})>"
