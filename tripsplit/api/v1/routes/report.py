from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.core.dependencies import get_db
from tripsplit.schemas.common import ok
from tripsplit.services.report_service import trip_settlements, trip_spending_summary

router = APIRouter()


@router.get("/spendings/{trip_id}")
async def spendings(trip_id: int, db: AsyncSession = Depends(get_db)):
    return ok(await trip_spending_summary(db, trip_id))

@router.get("/{trip_id}")
async def settlements(trip_id: int, db: AsyncSession = Depends(get_db)):
    return ok(await trip_settlements(db, trip_id))
