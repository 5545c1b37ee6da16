import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from tripsplit.models.transaction import Transaction, Contribution
from tripsplit.schemas.transaction import ContributionIn, TransactionCreate, TransactionUpdate
from tripsplit.services.trip_services import get_trip_or_404
from tripsplit.services.user_queries import get_existing_user_ids
from fastapi import HTTPException

logger = logging.getLogger(__name__)


async def _validate_parties(db: AsyncSession, paid_by: int, contribution: list[ContributionIn]):
    user_ids = [c.user_id for c in contribution]

    if len(user_ids) != len(set(user_ids)):
        raise HTTPException(400, "Duplicate users found in contribution")

    wanted = set(user_ids) | {paid_by}
    known = await get_existing_user_ids(db, wanted)

    if known != wanted:
        missing = sorted(wanted - known)
        raise HTTPException(400, f"Unknown users in transaction: {missing}")


def _contributions(contribution: list[ContributionIn]) -> list[Contribution]:
    return [
        Contribution(
            user_id=c.user_id,
            amount=c.amount,
            payment_done=c.payment_done
        )
        for c in contribution
    ]


async def get_transaction_or_404(db: AsyncSession, transaction_id: int) -> Transaction:
    q = (
        select(Transaction)
        .where(Transaction.id == transaction_id)
        .execution_options(populate_existing=True)
    )
    res = await db.execute(q)
    transaction = res.scalar_one_or_none()

    if not transaction:
        raise HTTPException(404, "Transaction not found.")

    return transaction


async def create_transaction(db: AsyncSession, data: TransactionCreate):
    await get_trip_or_404(db, data.trip_id)
    await _validate_parties(db, data.paid_by, data.contribution)

    transaction = Transaction(
        trip_id=data.trip_id,
        paid_by=data.paid_by,
        amount=data.amount,
        description=(data.description or "").strip(),
        contributions=_contributions(data.contribution)
    )

    db.add(transaction)
    await db.commit()

    logger.info("Created transaction %s on trip %s", transaction.id, data.trip_id)
    return await get_transaction_or_404(db, transaction.id)


async def list_transactions(db: AsyncSession):
    q = select(Transaction).order_by(Transaction.created_at.desc(), Transaction.id.desc())
    res = await db.execute(q)
    return res.scalars().all()


async def list_trip_transactions(db: AsyncSession, trip_id: int):
    q = (
        select(Transaction)
        .where(Transaction.trip_id == trip_id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    res = await db.execute(q)
    return res.scalars().all()


async def edit_transaction(db: AsyncSession, data: TransactionUpdate, transaction_id: int):
    transaction = await get_transaction_or_404(db, transaction_id)

    trip_id = data.trip_id if data.trip_id is not None else transaction.trip_id
    paid_by = data.paid_by if data.paid_by is not None else transaction.paid_by

    if data.trip_id is not None:
        await get_trip_or_404(db, trip_id)

    if data.paid_by is not None or data.contribution is not None:
        contribution = data.contribution
        if contribution is None:
            contribution = [
                ContributionIn(user_id=c.user_id, amount=c.amount, payment_done=c.payment_done)
                for c in transaction.contributions
            ]
        await _validate_parties(db, paid_by, contribution)

    if data.amount is not None:
        transaction.amount = data.amount
    if data.description is not None:
        transaction.description = data.description.strip()
    transaction.trip_id = trip_id
    transaction.paid_by = paid_by

    if data.contribution is not None:
        # replaced wholesale, old rows are orphans and get deleted
        transaction.contributions = _contributions(data.contribution)

    await db.commit()
    return await get_transaction_or_404(db, transaction_id)


async def delete_transaction(db: AsyncSession, transaction_id: int):
    transaction = await get_transaction_or_404(db, transaction_id)

    await db.delete(transaction)
    await db.commit()

    logger.info("Deleted transaction %s", transaction_id)
    return {"status": "deleted"}
