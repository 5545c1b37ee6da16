from decimal import Decimal

import pytest

from tripsplit.core.exceptions import InvalidExpenseError
from tripsplit.core.records import ExpenseRecord
from tripsplit.core.spending import summarize

D = Decimal


def _totals(summary):
    return {row.participant: (row.total_spent, row.total_spent_on_self) for row in summary}


def test_payer_keeps_the_remainder():
    summary = summarize([ExpenseRecord.build("A", 100, [("B", 40)])])

    assert _totals(summary) == {
        "A": (D("100"), D("60")),
        "B": (D("40"), D("40")),
    }


def test_no_contributions_is_all_self_spending():
    summary = summarize([ExpenseRecord.build("A", 25)])

    assert _totals(summary) == {"A": (D("25"), D("25"))}


def test_over_allocated_expense_drops_negative_remainder():
    summary = summarize([ExpenseRecord.build("A", 50, [("B", 30), ("C", 30)])])

    assert _totals(summary) == {
        "A": (D("50"), D("0")),
        "B": (D("30"), D("30")),
        "C": (D("30"), D("30")),
    }


def test_payer_listed_as_contributor():
    summary = summarize([ExpenseRecord.build("A", 300, [("B", 100), ("C", 100), ("A", 100)])])

    assert _totals(summary)["A"] == (D("400"), D("100"))


def test_totals_accumulate_in_first_seen_order():
    summary = summarize([
        ExpenseRecord.build("B", 20, [("C", 5)]),
        ExpenseRecord.build("A", 10, [("B", 10)]),
    ])

    assert [row.participant for row in summary] == ["B", "C", "A"]
    assert _totals(summary)["B"] == (D("30"), D("25"))


def test_empty_input():
    assert summarize([]) == []


def test_rejects_non_numeric_amount():
    with pytest.raises(InvalidExpenseError):
        summarize([{"payer": "A", "amount": "ten", "contributions": []}])
