"""
Settlement engine.

aggregate() turns expense records into net balances (positive = is owed,
negative = owes), resolve() turns balances into the payments that zero them.

resolve() is the greedy largest-debtor / largest-creditor heuristic. Every
step zeroes at least one of the two selected balances, so it never emits more
than N - 1 payments for N open balances. It is not guaranteed to find the
true minimum number of payments for every distribution.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from tripsplit.core.exceptions import InvalidExpenseError, NoExpensesError, SettlementError
from tripsplit.core.records import (
    BalanceMap,
    ParticipantId,
    SettlementInstruction,
    SettlementReport,
    coerce_record,
)
from tripsplit.core.utils import EPSILON, ZERO, is_settled, qround, to_decimal

logger = logging.getLogger(__name__)


def aggregate(expenses: Iterable) -> BalanceMap:
    balances: Dict[ParticipantId, Decimal] = {}

    for raw in expenses:
        record = coerce_record(raw)

        for c in record.contributions:
            if c.participant == record.payer:
                continue  # nobody owes themselves

            balances[c.participant] = balances.get(c.participant, ZERO) - c.share
            balances[record.payer] = balances.get(record.payer, ZERO) + c.share

    return {uid: qround(bal) for uid, bal in balances.items()}


def _private_copy(balances: BalanceMap) -> Dict[ParticipantId, Decimal]:
    copy: Dict[ParticipantId, Decimal] = {}
    for uid, bal in balances.items():
        try:
            copy[uid] = qround(to_decimal(bal))
        except ValueError as e:
            raise InvalidExpenseError(f"Malformed balance for {uid!r}: {e}") from None
    return copy


def _id_key(uid):
    # mixed id types order by type name first, then by value
    return (type(uid).__name__, uid)


def _largest_creditor(remaining: Dict[ParticipantId, Decimal], candidates: List[ParticipantId]):
    # highest balance, ties go to the smallest identifier
    return min(candidates, key=lambda uid: (-remaining[uid], _id_key(uid)))


def _largest_debtor(remaining: Dict[ParticipantId, Decimal], candidates: List[ParticipantId]):
    # lowest balance, ties go to the smallest identifier
    return min(candidates, key=lambda uid: (remaining[uid], _id_key(uid)))


def resolve(balances: BalanceMap) -> List[SettlementInstruction]:
    """
    Compute the ordered payments that drive `balances` to zero.

    The input mapping is left untouched; the loop works on its own rounded
    copy. If only creditors or only debtors are left (cent residue from
    rounding, or a map that never summed to zero) the loop stops there.
    """
    remaining = _private_copy(balances)
    open_count = sum(1 for bal in remaining.values() if not is_settled(bal))
    max_steps = max(0, open_count - 1)

    settlements: List[SettlementInstruction] = []

    while True:
        creditors = [uid for uid, bal in remaining.items() if bal >= EPSILON]
        debtors = [uid for uid, bal in remaining.items() if bal <= -EPSILON]

        if not creditors and not debtors:
            break

        if not creditors or not debtors:
            residue = {uid: remaining[uid] for uid in creditors + debtors}
            logger.warning("Settlement stopped with one-sided residue: %s", residue)
            break

        if len(settlements) >= max_steps:
            raise SettlementError(
                f"Settlement exceeded {max_steps} steps for {open_count} open balances"
            )

        creditor = _largest_creditor(remaining, creditors)
        debtor = _largest_debtor(remaining, debtors)

        transfer = qround(min(-remaining[debtor], remaining[creditor]))
        settlements.append(SettlementInstruction(from_id=debtor, to_id=creditor, amount=transfer))

        remaining[debtor] = qround(remaining[debtor] + transfer)
        remaining[creditor] = qround(remaining[creditor] - transfer)

    logger.debug("Resolved %d open balances into %d payments", open_count, len(settlements))
    return settlements


def settle(expenses: Iterable) -> SettlementReport:
    expenses = list(expenses)
    if not expenses:
        raise NoExpensesError()

    balances = aggregate(expenses)
    settlements = resolve(balances)

    return SettlementReport(balances=balances, settlements=settlements)
