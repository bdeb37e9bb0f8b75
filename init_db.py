"""
Database initialization script

Creates all tables and seeds the staff directory. Only useful with a
file-backed DATABASE_URL; the default in-memory database is rebuilt on
every API startup.
Usage: python init_db.py [--drop]
"""
import asyncio
from app.core.config import settings
from app.core.database import Base, engine, init_db
from app.core.logging import setup_logging


async def init_database():
    """Create all database tables and seed staff"""
    print(f"Creating database tables in {settings.DATABASE_URL}...")

    await init_db(seed=True)

    print("✅ Database tables created successfully!")
    print("\nTables created:")
    for table in Base.metadata.sorted_tables:
        print(f"  - {table.name}")


async def drop_database():
    """Drop all database tables"""
    print("Dropping all database tables...")

    # Import models so they're registered with Base.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    print("✅ Database tables dropped successfully!")


if __name__ == "__main__":
    import sys

    setup_logging("init_db", settings.LOG_LEVEL)
    if len(sys.argv) > 1 and sys.argv[1] == "--drop":
        asyncio.run(drop_database())
    else:
        asyncio.run(init_database())
