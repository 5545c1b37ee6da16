from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.core.dependencies import get_db
from tripsplit.schemas.common import ok
from tripsplit.schemas.transaction import TransactionCreate, TransactionOut, TransactionUpdate
from tripsplit.services.transaction_services import (
    create_transaction,
    delete_transaction,
    edit_transaction,
    get_transaction_or_404,
    list_transactions,
    list_trip_transactions,
)

router = APIRouter()


def _out(transaction) -> dict:
    return TransactionOut.model_validate(transaction).model_dump()


@router.post("/", status_code=201)
async def add_transaction(data: TransactionCreate, db: AsyncSession = Depends(get_db)):
    transaction = await create_transaction(db, data)
    return ok(_out(transaction), "Transaction created successfully!")

@router.get("/")
async def all_transactions(db: AsyncSession = Depends(get_db)):
    return ok([_out(t) for t in await list_transactions(db)])

@router.get("/trip/{trip_id}")
async def trip_transactions(trip_id: int, db: AsyncSession = Depends(get_db)):
    transactions = await list_trip_transactions(db, trip_id)
    if not transactions:
        raise HTTPException(404, "No transactions found for this trip.")
    return ok([_out(t) for t in transactions])

@router.get("/{transaction_id}")
async def fetch(transaction_id: int, db: AsyncSession = Depends(get_db)):
    return ok(_out(await get_transaction_or_404(db, transaction_id)))

@router.put("/{transaction_id}")
async def edit(transaction_id: int, data: TransactionUpdate, db: AsyncSession = Depends(get_db)):
    transaction = await edit_transaction(db, data, transaction_id)
    return ok(_out(transaction), "Transaction updated successfully!")

@router.delete("/{transaction_id}")
async def del_transaction(transaction_id: int, db: AsyncSession = Depends(get_db)):
    return ok(await delete_transaction(db, transaction_id), "Transaction deleted successfully!")
