import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.core.exceptions import NoExpensesError
from tripsplit.core.records import ExpenseRecord
from tripsplit.core.settlement import settle
from tripsplit.core.spending import summarize
from tripsplit.schemas.report import SettlementOut, SpendingSummaryOut, TripReportOut
from tripsplit.services.transaction_services import list_trip_transactions
from tripsplit.services.trip_services import get_trip_or_404
from tripsplit.services.user_queries import get_user_names

logger = logging.getLogger(__name__)


async def fetch_trip_expenses(db: AsyncSession, trip_id: int) -> List[ExpenseRecord]:
    await get_trip_or_404(db, trip_id)

    transactions = await list_trip_transactions(db, trip_id)
    if not transactions:
        raise NoExpensesError()

    return [
        ExpenseRecord.build(
            payer=t.paid_by,
            amount=t.amount,
            contributions=[(c.user_id, c.amount) for c in t.contributions],
        )
        for t in transactions
    ]


async def trip_settlements(db: AsyncSession, trip_id: int):
    expenses = await fetch_trip_expenses(db, trip_id)
    report = settle(expenses)

    ids = set(report.balances)
    for s in report.settlements:
        ids.update((s.from_id, s.to_id))
    names = await get_user_names(db, ids)

    logger.info(
        "Trip %s: %d transactions -> %d settlements",
        trip_id, len(expenses), len(report.settlements)
    )

    out = TripReportOut(
        balances={names[uid]: float(bal) for uid, bal in report.balances.items()},
        settlements=[
            SettlementOut(
                from_name=names[s.from_id],
                from_id=s.from_id,
                to_name=names[s.to_id],
                to_id=s.to_id,
                amount=float(s.amount),
            )
            for s in report.settlements
        ],
    )
    return out.model_dump(by_alias=True)


async def trip_spending_summary(db: AsyncSession, trip_id: int):
    expenses = await fetch_trip_expenses(db, trip_id)
    summary = summarize(expenses)

    names = await get_user_names(db, (row.participant for row in summary))

    return [
        SpendingSummaryOut(
            user_id=row.participant,
            user_name=names[row.participant],
            total_spent=float(row.total_spent),
            total_spent_on_self=float(row.total_spent_on_self),
        ).model_dump()
        for row in summary
    ]
