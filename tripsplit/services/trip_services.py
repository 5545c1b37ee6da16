import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from tripsplit.models.trip import Trip
from tripsplit.core.dependencies import commit_or_conflict
from fastapi import HTTPException

logger = logging.getLogger(__name__)

async def get_trip_or_404(db: AsyncSession, trip_id: int) -> Trip:
    trip = await db.get(Trip, trip_id)
    if not trip:
        raise HTTPException(404, "Trip not found.")
    return trip

async def _name_taken(db: AsyncSession, name: str, exclude_id: int | None = None) -> bool:
    q = select(Trip.id).where(Trip.name == name)
    if exclude_id is not None:
        q = q.where(Trip.id != exclude_id)
    return await db.scalar(q) is not None

async def create_trip(db: AsyncSession, name: str):
    if await _name_taken(db, name):
        raise HTTPException(409, "Trip name already exists.")

    trip = Trip(name=name)
    db.add(trip)
    await commit_or_conflict(db, "Trip name already exists.")
    await db.refresh(trip)

    logger.info("Created trip %s (%s)", trip.id, trip.name)
    return trip

async def list_trips(db: AsyncSession):
    result = await db.execute(select(Trip).order_by(Trip.id))
    return result.scalars().all()

async def rename_trip(db: AsyncSession, trip_id: int, name: str):
    trip = await get_trip_or_404(db, trip_id)

    if await _name_taken(db, name, exclude_id=trip_id):
        raise HTTPException(409, "Trip name already in use.")

    trip.name = name
    await commit_or_conflict(db, "Trip name already in use.")
    await db.refresh(trip)
    return trip

async def delete_trip(db: AsyncSession, trip_id: int):
    trip = await get_trip_or_404(db, trip_id)

    # transactions go with it (delete-orphan cascade)
    await db.delete(trip)
    await db.commit()

    logger.info("Deleted trip %s", trip_id)
    return {"status": "deleted"}
