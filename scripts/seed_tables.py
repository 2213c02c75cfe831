#!/usr/bin/env python3
"""
Seed script to create the default dining tables
"""

import asyncio

DEFAULT_TABLES = [
    ("Table 1", 2),
    ("Table 2", 2),
    ("Table 3", 4),
    ("Table 4", 4),
    ("Table 5", 6),
]


async def seed_tables():
    """Create the default tables when none exist yet"""
    from sqlalchemy import select, func
    from tablebook.database import SessionLocal
    from tablebook.models.table import Table

    async with SessionLocal() as db:
        result = await db.execute(select(func.count(Table.id)))
        if result.scalar():
            print("Tables already exist. Skipping...")
            return

        for name, capacity in DEFAULT_TABLES:
            db.add(Table(name=name, capacity=capacity))

        await db.commit()

        print(f"Created {len(DEFAULT_TABLES)} tables")


if __name__ == "__main__":
    asyncio.run(seed_tables())
