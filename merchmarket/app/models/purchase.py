"""
Purchase database model.

One row per unit of merch bought; repeated purchases produce repeated rows.
"""

from sqlalchemy import Column, Integer, ForeignKey, DateTime
from sqlalchemy.sql import func
from merchmarket.app.db.session import Base


class Purchase(Base):
    """
    Purchase model.

    Immutable link between a user and the merch item they paid for.
    NO updates or deletions allowed.
    """
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    merch_id = Column(Integer, ForeignKey("merch.id"), nullable=False, index=True)

    # Timestamps (Immutable - no updated_at)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Purchase(id={self.id}, user_id={self.user_id}, merch_id={self.merch_id})>"
