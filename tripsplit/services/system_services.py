from tripsplit.core.config import settings
from tripsplit.db.session import engine
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.models.user import User
from tripsplit.models.trip import Trip
from tripsplit.models.transaction import Transaction

async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message":"Database is connected"}
    except SQLAlchemyError as e:
        return {"db": False, "error": str(e)}

async def system_health():
    return {
        "status": "ok",
        "app": settings.APP_NAME
    }

async def system_metrics(db: AsyncSession):
    users_res = await db.execute(select(func.count(User.id)))
    trips_res = await db.execute(select(func.count(Trip.id)))
    transactions_res = await db.execute(select(func.count(Transaction.id)))

    return {
        "users": users_res.scalar(),
        "trips": trips_res.scalar(),
        "transactions": transactions_res.scalar()
    }
