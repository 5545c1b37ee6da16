from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.db.session import async_session

async def get_db():
    async with async_session() as session:
        yield session

async def commit_or_conflict(db: AsyncSession, message: str):
    # unique constraints catch what the pre-checks miss under concurrent writes
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(409, message)
