"""
Database seeding script for the merch catalog.

Creates the tables if needed and inserts the default merch items.
Run this script after the database is set up; existing items are kept.
"""

import asyncio

from merchmarket.app.db.session import AsyncSessionLocal, Base, engine
from merchmarket.app.services.catalog import DEFAULT_CATALOG, seed_catalog

# Import models to ensure they are registered with Base
from merchmarket.app.models.user import User
from merchmarket.app.models.merch import Merch
from merchmarket.app.models.purchase import Purchase
from merchmarket.app.models.ledger_entry import LedgerEntry


async def main():
    """Seed the merch catalog."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        print("🌱 Starting merch seeding...")
        created = await seed_catalog(db)

    await engine.dispose()

    if created:
        print(f"✅ Inserted {created} merch items")
    else:
        print("ℹ️  Catalog already seeded, nothing to do")

    print("\nCatalog:")
    for name, price in DEFAULT_CATALOG.items():
        print(f"  - {name:<11} {price:>4} coins")


if __name__ == "__main__":
    asyncio.run(main())
