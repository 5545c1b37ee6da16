from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Hashable, Iterable, List, Tuple

from tripsplit.core.exceptions import InvalidExpenseError
from tripsplit.core.utils import ZERO, to_decimal

ParticipantId = Hashable  # ids of the same type must be orderable
BalanceMap = Dict[ParticipantId, Decimal]


def _money(value: Any, what: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise InvalidExpenseError(f"{what} must be a number: {e}") from None

    if amount < ZERO:
        raise InvalidExpenseError(f"{what} must be non-negative, got {amount}")

    return amount


@dataclass(frozen=True)
class Contribution:
    participant: ParticipantId
    share: Decimal

    @classmethod
    def build(cls, participant: Any, share: Any) -> Contribution:
        if participant is None:
            raise InvalidExpenseError("Contribution is missing a participant")
        return cls(participant=participant, share=_money(share, "Contribution share"))


@dataclass(frozen=True)
class ExpenseRecord:
    payer: ParticipantId
    amount: Decimal
    contributions: Tuple[Contribution, ...] = ()

    @classmethod
    def build(
        cls,
        payer: Any,
        amount: Any,
        contributions: Iterable[Any] = (),
    ) -> ExpenseRecord:
        """
        Validate raw values and return an immutable record.

        `contributions` items may be Contribution objects, (participant, share)
        pairs or mappings with `participant` and `share` keys.
        """
        if payer is None:
            raise InvalidExpenseError("Expense record is missing a payer")

        if contributions is None or isinstance(contributions, (str, bytes, dict)):
            raise InvalidExpenseError("Contributions must be a list")

        parsed: List[Contribution] = []
        for c in contributions:
            if isinstance(c, Contribution):
                parsed.append(Contribution.build(c.participant, c.share))
            elif isinstance(c, dict):
                parsed.append(Contribution.build(c.get("participant"), c.get("share")))
            elif isinstance(c, (tuple, list)) and len(c) == 2:
                parsed.append(Contribution.build(c[0], c[1]))
            else:
                raise InvalidExpenseError(f"Malformed contribution entry: {c!r}")

        return cls(
            payer=payer,
            amount=_money(amount, "Expense amount"),
            contributions=tuple(parsed),
        )


def coerce_record(obj: Any) -> ExpenseRecord:
    # Records built without going through build() are re-checked here.
    if isinstance(obj, ExpenseRecord):
        return ExpenseRecord.build(obj.payer, obj.amount, obj.contributions)
    if isinstance(obj, dict):
        return ExpenseRecord.build(obj.get("payer"), obj.get("amount"), obj.get("contributions", ()))
    raise InvalidExpenseError(f"Not an expense record: {obj!r}")


@dataclass(frozen=True)
class SettlementInstruction:
    from_id: ParticipantId  # debtor
    to_id: ParticipantId  # creditor
    amount: Decimal


@dataclass
class SpendingSummary:
    participant: ParticipantId
    total_spent: Decimal = ZERO
    total_spent_on_self: Decimal = ZERO


@dataclass(frozen=True)
class SettlementReport:
    balances: BalanceMap
    settlements: List[SettlementInstruction] = field(default_factory=list)
