"""
Merch catalog database model.
"""

from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from merchmarket.app.db.session import Base


class Merch(Base):
    """
    Catalog item purchasable with coins.

    Reference data seeded at deployment; read-only to the wallet logic.
    """
    __tablename__ = "merch"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_merch_price_positive"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    price = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Merch(id={self.id}, name='{self.name}', price={self.price})>"
