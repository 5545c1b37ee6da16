import logging
import random
from decimal import Decimal

import pytest

from tripsplit.core.exceptions import InvalidExpenseError, NoExpensesError
from tripsplit.core.records import ExpenseRecord, SettlementInstruction
from tripsplit.core.settlement import aggregate, resolve, settle
from tripsplit.core.utils import EPSILON, qround

D = Decimal


def _apply(balances, settlements):
    after = {uid: D(str(bal)) for uid, bal in balances.items()}
    for s in settlements:
        after[s.from_id] += s.amount
        after[s.to_id] -= s.amount
    return after


def _random_expenses(rng, people, count):
    expenses = []
    for _ in range(count):
        payer = rng.choice(people)
        parts = rng.sample(people, rng.randint(1, len(people)))
        shares = [(p, D(rng.randint(0, 20000)) / 100) for p in parts]
        amount = sum(s for _, s in shares) + D(rng.randint(0, 5000)) / 100
        expenses.append(ExpenseRecord.build(payer, amount, shares))
    return expenses


# ── aggregate ──────────────────────────────────────────────────────────────

def test_aggregate_single_expense():
    expenses = [ExpenseRecord.build("A", 300, [("B", 100), ("C", 100), ("A", 100)])]

    assert aggregate(expenses) == {"A": D("200.00"), "B": D("-100.00"), "C": D("-100.00")}


def test_self_contribution_has_no_effect():
    expenses = [ExpenseRecord.build("A", 100, [("A", 100)])]

    assert aggregate(expenses) == {}


def test_aggregate_accepts_plain_dicts():
    expenses = [{"payer": 1, "amount": "40", "contributions": [{"participant": 2, "share": "15.5"}]}]

    assert aggregate(expenses) == {1: D("15.50"), 2: D("-15.50")}


def test_aggregate_rounds_half_up_to_cents():
    expenses = [ExpenseRecord.build("A", 10, [("B", "2.675")])]

    balances = aggregate(expenses)

    assert balances == {"A": D("2.68"), "B": D("-2.68")}


def test_aggregate_nets_across_expenses():
    expenses = [
        ExpenseRecord.build("A", 60, [("B", 30)]),
        ExpenseRecord.build("B", 50, [("A", 50)]),
    ]

    assert aggregate(expenses) == {"A": D("-20.00"), "B": D("20.00")}


def test_aggregate_is_zero_sum():
    rng = random.Random(1234)
    for _ in range(50):
        balances = aggregate(_random_expenses(rng, ["A", "B", "C", "D", "E"], rng.randint(1, 12)))
        assert abs(sum(balances.values())) < EPSILON


def test_aggregate_rejects_negative_share():
    with pytest.raises(InvalidExpenseError):
        aggregate([{"payer": "A", "amount": 10, "contributions": [("B", -5)]}])


def test_aggregate_rejects_missing_payer():
    with pytest.raises(InvalidExpenseError):
        aggregate([{"amount": 10, "contributions": [("B", 5)]}])


def test_aggregate_rechecks_hand_built_records():
    bad = ExpenseRecord(payer="A", amount=D("NaN"))

    with pytest.raises(InvalidExpenseError):
        aggregate([bad])


# ── resolve ────────────────────────────────────────────────────────────────

def test_resolve_scenario_one():
    settlements = resolve({"A": D("200"), "B": D("-100"), "C": D("-100")})

    assert settlements == [
        SettlementInstruction(from_id="B", to_id="A", amount=D("100.00")),
        SettlementInstruction(from_id="C", to_id="A", amount=D("100.00")),
    ]


def test_resolve_chain_collapse():
    settlements = resolve({"A": 50, "B": -30, "C": -20})

    assert settlements == [
        SettlementInstruction(from_id="B", to_id="A", amount=D("30.00")),
        SettlementInstruction(from_id="C", to_id="A", amount=D("20.00")),
    ]


def test_resolve_within_epsilon_is_settled():
    assert resolve({"A": 0.0000001, "B": -0.0000001}) == []


@pytest.mark.parametrize("balances", [
    {},
    {"A": D("0")},
    {"A": D("0"), "B": D("0"), "C": D("0.00")},
])
def test_resolve_nothing_to_do(balances):
    assert resolve(balances) == []


def test_resolve_ties_go_to_smallest_identifier():
    settlements = resolve({"C": D("100"), "A": D("100"), "B": D("-200")})

    assert [(s.from_id, s.to_id, s.amount) for s in settlements] == [
        ("B", "A", D("100.00")),
        ("B", "C", D("100.00")),
    ]


def test_resolve_is_deterministic_regardless_of_insertion_order():
    a = resolve({1: D("-10"), 2: D("-10"), 3: D("10"), 4: D("10")})
    b = resolve({4: D("10"), 3: D("10"), 2: D("-10"), 1: D("-10")})

    assert a == b
    assert [(s.from_id, s.to_id) for s in a] == [(1, 3), (2, 4)]


def test_resolve_matches_largest_debtor_with_largest_creditor():
    settlements = resolve({"A": D("70"), "B": D("30"), "C": D("-80"), "D": D("-20")})

    assert settlements[0] == SettlementInstruction(from_id="C", to_id="A", amount=D("70.00"))
    assert _apply({"A": 70, "B": 30, "C": -80, "D": -20}, settlements) == {
        "A": D("0"), "B": D("0"), "C": D("0"), "D": D("0"),
    }


def test_resolve_does_not_mutate_input():
    balances = {"A": D("50"), "B": D("-30"), "C": D("-20")}
    snapshot = dict(balances)

    resolve(balances)

    assert balances == snapshot


def test_resolve_stops_on_one_sided_residue(caplog):
    # three shares of 33.333 leave a cent after rounding
    balances = aggregate([ExpenseRecord.build("A", 100, [("B", "33.333"), ("C", "33.333")])])
    assert balances == {"A": D("66.67"), "B": D("-33.33"), "C": D("-33.33")}

    with caplog.at_level(logging.WARNING, logger="tripsplit.core.settlement"):
        settlements = resolve(balances)

    assert [(s.from_id, s.to_id, s.amount) for s in settlements] == [
        ("B", "A", D("33.33")),
        ("C", "A", D("33.33")),
    ]
    assert "residue" in caplog.text


def test_resolve_rejects_garbage_balance():
    with pytest.raises(InvalidExpenseError):
        resolve({"A": "lots", "B": -1})


def test_resolve_settles_random_ledgers_within_bound():
    rng = random.Random(42)
    people = ["ana", "ben", "cai", "dev", "eli", "fay"]

    for _ in range(100):
        balances = aggregate(_random_expenses(rng, people, rng.randint(1, 10)))
        settlements = resolve(balances)

        nonzero = sum(1 for bal in balances.values() if abs(bal) >= EPSILON)
        assert len(settlements) <= max(0, nonzero - 1)
        assert all(s.amount > 0 and s.amount == qround(s.amount) for s in settlements)
        assert all(abs(bal) < EPSILON for bal in _apply(balances, settlements).values())


def test_resolve_on_settled_output_is_idempotent():
    balances = {"A": D("12.5"), "B": D("-7.25"), "C": D("-5.25")}
    after = _apply(balances, resolve(balances))

    assert resolve(after) == []


# ── settle ─────────────────────────────────────────────────────────────────

def test_settle_returns_balances_and_settlements():
    report = settle([ExpenseRecord.build("A", 300, [("B", 100), ("C", 100), ("A", 100)])])

    assert report.balances == {"A": D("200.00"), "B": D("-100.00"), "C": D("-100.00")}
    assert {(s.from_id, s.to_id, s.amount) for s in report.settlements} == {
        ("B", "A", D("100.00")),
        ("C", "A", D("100.00")),
    }


def test_settle_without_expenses():
    with pytest.raises(NoExpensesError):
        settle([])


# ── out-of-range input ─────────────────────────────────────────────────────

def test_aggregate_rejects_amounts_too_large_for_cents():
    with pytest.raises(InvalidExpenseError):
        aggregate([{"payer": "A", "amount": "1e27", "contributions": [("B", "1e27")]}])


def test_resolve_rejects_balances_too_large_for_cents():
    with pytest.raises(InvalidExpenseError):
        resolve({"A": "1e27", "B": "-1e27"})


def test_resolve_ties_across_mixed_id_types():
    settlements = resolve({1: 10, "x": 10, "y": -20})

    assert [(s.from_id, s.to_id, s.amount) for s in settlements] == [
        ("y", 1, D("10.00")),
        ("y", "x", D("10.00")),
    ]
