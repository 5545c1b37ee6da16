from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.core.dependencies import get_db
from tripsplit.services.system_services import check_db_service, system_health, system_metrics

router = APIRouter()

@router.get("/health")
async def health():
    return await system_health()

@router.get("/health/db")
async def check_db():
    return await check_db_service()

@router.get("/metrics")
async def metrics(db: AsyncSession = Depends(get_db)):
    """Row counts per table, trips and transactions included."""
    return await system_metrics(db)
