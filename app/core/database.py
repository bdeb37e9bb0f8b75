"""
Database engine, session factory and table initialization
"""
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from app.core.config import settings

Base = declarative_base()


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    In-memory SQLite needs a single shared connection, otherwise every
    pooled connection would see its own empty database.
    """
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return create_async_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(database_url)


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def get_db():
    """FastAPI dependency yielding a session that commits on success"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(bind: AsyncEngine = engine, seed: bool = True) -> None:
    """Create all tables and seed the staff directory when empty"""
    # Import models so they're registered with Base.metadata
    import app.models  # noqa: F401
    from app.core.staff_directory import seed_staff_directory

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if seed:
        session_factory = async_sessionmaker(bind, expire_on_commit=False)
        async with session_factory() as session:
            await seed_staff_directory(session)
            await session.commit()
