from typing import Dict, Iterable, List

from tripsplit.core.records import ParticipantId, SpendingSummary, coerce_record
from tripsplit.core.utils import ZERO


def summarize(expenses: Iterable) -> List[SpendingSummary]:
    """
    Per-participant totals: everything they paid or consumed (total_spent)
    and what was consumed by themselves (total_spent_on_self).

    A record without contributions is all self-spending for the payer.
    Otherwise the payer keeps `amount - sum(shares)` when that is positive;
    over-allocated records just add nothing for the payer.
    """
    summary: Dict[ParticipantId, SpendingSummary] = {}

    def entry(uid: ParticipantId) -> SpendingSummary:
        if uid not in summary:
            summary[uid] = SpendingSummary(participant=uid)
        return summary[uid]

    for raw in expenses:
        record = coerce_record(raw)
        payer = entry(record.payer)
        payer.total_spent += record.amount

        if not record.contributions:
            payer.total_spent_on_self += record.amount
            continue

        contributed = ZERO
        for c in record.contributions:
            contributor = entry(c.participant)
            contributed += c.share
            contributor.total_spent += c.share
            contributor.total_spent_on_self += c.share

        remainder = record.amount - contributed
        if remainder > ZERO:
            payer.total_spent_on_self += remainder

    return list(summary.values())
