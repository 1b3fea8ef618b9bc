"""
Ledger Entry database model.

Immutable record of a peer-to-peer coin transfer.
"""

from sqlalchemy import Column, Integer, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.sql import func
from merchmarket.app.db.session import Base


class LedgerEntry(Base):
    """
    Ledger Entry model.

    Immutable record of coins moving from one user to another.
    Purchases are recorded separately in the purchases table.
    NO updates or deletions allowed.
    """
    __tablename__ = "ledger_entries"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_ledger_entries_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Linkage
    from_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    to_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Financials
    amount = Column(Integer, nullable=False)

    # Timestamps (Immutable - no updated_at)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<LedgerEntry(id={self.id}, from={self.from_user_id}, to={self.to_user_id}, amount={self.amount})>"
