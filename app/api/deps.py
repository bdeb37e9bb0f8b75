"""
Shared FastAPI dependencies
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.services.store import ProfileStore


async def get_store(db: AsyncSession = Depends(get_db)) -> ProfileStore:
    """Profile store bound to the request's session"""
    return ProfileStore(db)
