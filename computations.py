"""
Business logic and computations for SplitLedger

Money is handled as integer cents internally and returned as 2-decimal floats.
Nothing here mutates its inputs.
"""
from __future__ import annotations
import math
import uuid
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from models import (
    EQUAL, EXACT, PERCENTAGE,
    Expense, Group, Settlement, Split, SplitInput, Transaction,
    normalize_category,
)
from utils import from_cents, parse_date, round_half_up, to_cents

TOLERANCE_CENTS = 1  # 0.01


class InvalidInput(ValueError):
    """Raised for malformed split or settlement input"""


# ---------- Splits ----------

def calculate_splits(
    total_amount: float,
    participants: Sequence[str],
    policy: str,
    custom_inputs: Optional[Sequence[SplitInput]] = None,
) -> List[Split]:
    """
    Distribute total_amount under the given split policy.

    equal:      floor share to the cent, remainder to the first participant
    percentage: custom_inputs carry percentages summing to 100
    exact:      custom_inputs carry amounts summing to total_amount

    Arithmetic is exact in cents, so boundary values can differ by a cent from a
    float computation (1.15 at 50% gives 0.58; 0.57 equally over 3 gives 0.19 each).
    """
    if not participants:
        raise InvalidInput("no participants")
    if not _finite(total_amount) or total_amount <= 0:
        raise InvalidInput("non-positive amount")

    if policy == EQUAL:
        return _equal_split(total_amount, participants)
    if policy == PERCENTAGE:
        return _percentage_split(total_amount, custom_inputs or [])
    if policy == EXACT:
        return _exact_split(total_amount, custom_inputs or [])
    raise InvalidInput(f"unknown policy: {policy}")


def _finite(value) -> bool:
    return value is not None and math.isfinite(value)


def _equal_split(total_amount: float, participants: Sequence[str]) -> List[Split]:
    total = to_cents(total_amount)
    n = len(participants)
    base = total // n
    remainder = total - base * n
    return [
        Split(p, from_cents(base + remainder if i == 0 else base))
        for i, p in enumerate(participants)
    ]


def _percentage_split(total_amount: float, inputs: Sequence[SplitInput]) -> List[Split]:
    if not all(_finite(s.percentage or 0) for s in inputs):
        raise InvalidInput("percentages must sum to 100")
    total_pct = sum(float(s.percentage or 0) for s in inputs)
    if abs(total_pct - 100) > 0.01:
        raise InvalidInput("percentages must sum to 100")
    # total * percentage is already in cents; round once
    return [
        Split(s.member, from_cents(round_half_up(Decimal(str(total_amount)) * Decimal(str(s.percentage or 0)))))
        for s in inputs
    ]


def _exact_split(total_amount: float, inputs: Sequence[SplitInput]) -> List[Split]:
    if not all(_finite(s.amount or 0) for s in inputs):
        raise InvalidInput("split amounts must equal total amount")
    provided = sum(to_cents(s.amount or 0) for s in inputs)
    if abs(provided - to_cents(total_amount)) > TOLERANCE_CENTS:
        raise InvalidInput("split amounts must equal total amount")
    return [Split(s.member, float(s.amount or 0)) for s in inputs]


def build_expense(
    payer: str,
    total_amount: float,
    participants: Sequence[str],
    policy: str,
    custom_inputs: Optional[Sequence[SplitInput]] = None,
    **details,
) -> Expense:
    """Compute splits and wrap them in an Expense that records how they were made"""
    splits = calculate_splits(total_amount, participants, policy, custom_inputs)
    expense_id = details.pop("id", None) or uuid.uuid4().hex
    category = normalize_category(details.pop("category", None))
    return Expense(
        id=expense_id,
        payer=payer,
        splits=splits,
        amount=float(total_amount),
        category=category,
        split_policy=policy,
        split_inputs=list(custom_inputs or []),
        **details,
    )


def validate_settlement(payer: str, payee: str, amount: float) -> None:
    """Check a settlement before it is recorded"""
    if not payer or not payee:
        raise InvalidInput("payer and payee are required")
    if payer == payee:
        raise InvalidInput("payer and payee must be different")
    if not _finite(amount) or amount <= 0:
        raise InvalidInput("non-positive amount")


# ---------- Balances ----------

def _balance_cents(
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
) -> Dict[str, int]:
    cents: Dict[str, int] = {}
    for e in expenses:
        split_cents = [(s.member, to_cents(s.amount)) for s in e.splits]
        # credit the split sum, not e.amount, to tolerate split/total drift
        cents[e.payer] = cents.get(e.payer, 0) + sum(c for _, c in split_cents)
        for member, c in split_cents:
            cents[member] = cents.get(member, 0) - c
    for s in settlements:
        c = to_cents(s.amount)
        cents[s.payer] = cents.get(s.payer, 0) + c
        cents[s.payee] = cents.get(s.payee, 0) - c
    return cents


def aggregate_balances(
    expenses: Iterable[Expense],
    settlements: Optional[Iterable[Settlement]] = None,
) -> Dict[str, float]:
    """
    Net balance per member.
    Positive -> member is owed money; negative -> member owes money.
    A settlement moves its payer up and its payee down by the amount.
    """
    cents = _balance_cents(expenses, settlements or [])
    return {m: from_cents(c) for m, c in cents.items()}


# ---------- Debt simplification ----------

def simplify_debts(balances: Dict[str, float]) -> List[Transaction]:
    """
    Greedy settlement: largest debtor pays largest creditor until one side runs out.
    Balances within 0.01 of zero are treated as settled.
    """
    creditors = []
    debtors = []
    for member, balance in balances.items():
        c = to_cents(balance)
        if c > TOLERANCE_CENTS:
            creditors.append([member, c])
        elif c < -TOLERANCE_CENTS:
            debtors.append([member, -c])
    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    transactions = []
    i = j = 0
    while i < len(creditors) and j < len(debtors):
        creditor = creditors[i]
        debtor = debtors[j]
        x = min(creditor[1], debtor[1])
        if x > TOLERANCE_CENTS:
            transactions.append(Transaction(debtor[0], creditor[0], from_cents(x)))
        creditor[1] -= x
        debtor[1] -= x
        if creditor[1] <= TOLERANCE_CENTS:
            i += 1
        if debtor[1] <= TOLERANCE_CENTS:
            j += 1

    return transactions


def apply_transactions(
    balances: Dict[str, float],
    transactions: Iterable[Transaction],
) -> Dict[str, float]:
    """Balances after every transaction has been paid"""
    cents = {m: to_cents(b) for m, b in balances.items()}
    for t in transactions:
        c = to_cents(t.amount)
        cents[t.from_member] = cents.get(t.from_member, 0) + c
        cents[t.to_member] = cents.get(t.to_member, 0) - c
    return {m: from_cents(c) for m, c in cents.items()}


# ---------- Reports ----------

def filter_by_date(records: Iterable, start: Optional[date], end: Optional[date]) -> list:
    """Filter expenses or settlements by inclusive date range"""
    out = []
    for r in records:
        if start is None and end is None:
            out.append(r)
            continue
        if not r.date:
            continue
        d = parse_date(r.date)
        if start and d < start:
            continue
        if end and d > end:
            continue
        out.append(r)
    return out


def compute_summary(
    group: Group,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Dict[str, dict]:
    """
    Compute summary figures for each member.
    Returns dict mapping member -> {paid, share, sent, received, net}
    """
    exps = filter_by_date(group.expenses, start, end)
    stls = filter_by_date(group.settlements, start, end)

    people = list(group.members)
    for e in exps:
        for m in [e.payer] + [s.member for s in e.splits]:
            if m not in people:
                people.append(m)
    for s in stls:
        for m in (s.payer, s.payee):
            if m not in people:
                people.append(m)

    paid = {p: 0 for p in people}
    share = {p: 0 for p in people}
    sent = {p: 0 for p in people}
    received = {p: 0 for p in people}
    for e in exps:
        for s in e.splits:
            c = to_cents(s.amount)
            paid[e.payer] += c
            share[s.member] += c
    for s in stls:
        c = to_cents(s.amount)
        sent[s.payer] += c
        received[s.payee] += c

    return {
        p: {
            "paid": from_cents(paid[p]),
            "share": from_cents(share[p]),
            "sent": from_cents(sent[p]),
            "received": from_cents(received[p]),
            "net": from_cents(paid[p] - share[p] + sent[p] - received[p]),
        } for p in people
    }


def category_totals(expenses: Iterable[Expense]) -> Dict[str, float]:
    """Total expense amount per category"""
    cents: Dict[str, int] = {}
    for e in expenses:
        k = normalize_category(e.category)
        cents[k] = cents.get(k, 0) + to_cents(e.amount)
    return {k: from_cents(v) for k, v in cents.items()}
