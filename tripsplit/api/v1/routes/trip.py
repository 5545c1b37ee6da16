from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.core.dependencies import get_db
from tripsplit.schemas.common import ok
from tripsplit.schemas.trip import TripCreate, TripOut
from tripsplit.services.trip_services import create_trip, delete_trip, get_trip_or_404, list_trips, rename_trip

router = APIRouter()


def _out(trip) -> dict:
    return TripOut.model_validate(trip).model_dump()


@router.post("/", status_code=201)
async def create_new_trip(data: TripCreate, db: AsyncSession = Depends(get_db)):
    trip = await create_trip(db, data.name)
    return ok(_out(trip), "Trip created successfully!")

@router.get("/")
async def all_trips(db: AsyncSession = Depends(get_db)):
    return ok([_out(t) for t in await list_trips(db)])

@router.get("/{trip_id}")
async def one_trip(trip_id: int, db: AsyncSession = Depends(get_db)):
    return ok(_out(await get_trip_or_404(db, trip_id)))

@router.put("/{trip_id}")
async def update_trip(trip_id: int, data: TripCreate, db: AsyncSession = Depends(get_db)):
    trip = await rename_trip(db, trip_id, data.name)
    return ok(_out(trip), "Trip updated successfully!")

@router.delete("/{trip_id}")
async def remove_trip(trip_id: int, db: AsyncSession = Depends(get_db)):
    return ok(await delete_trip(db, trip_id), "Trip deleted successfully!")
