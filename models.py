"""
Data models for SplitLedger
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

EQUAL = "equal"
PERCENTAGE = "percentage"
EXACT = "exact"
SPLIT_POLICIES = (EQUAL, PERCENTAGE, EXACT)

CATEGORIES = ("food", "transport", "rent", "utilities", "entertainment", "other")

UNPAID = "unpaid"
PAID = "paid"


def normalize_category(category: Optional[str]) -> str:
    """Map unknown or empty categories to 'other'"""
    c = (category or "").strip().lower()
    return c if c in CATEGORIES else "other"


@dataclass
class SplitInput:
    """Custom per-member entry for percentage and exact splits"""
    member: str
    amount: Optional[float] = None
    percentage: Optional[float] = None


@dataclass
class Split:
    """One member's owed share of an expense"""
    member: str
    amount: float
    status: str = UNPAID  # display only


@dataclass
class Expense:
    """Expense paid by one member and shared by the split members"""
    id: str
    payer: str
    splits: List[Split]
    description: str = ""
    amount: float = 0.0  # total as entered; balances use the split sum
    currency: str = "USD"
    category: str = "other"
    date: str = ""  # YYYY-MM-DD
    split_policy: str = EQUAL
    split_inputs: List[SplitInput] = field(default_factory=list)
    notes: str = ""


@dataclass
class Settlement:
    """Money that moved from payer to payee outside of expenses"""
    id: str
    payer: str
    payee: str
    amount: float
    currency: str = "USD"
    date: str = ""  # YYYY-MM-DD
    notes: str = ""


@dataclass
class Transaction:
    """Suggested payment: from_member pays to_member"""
    from_member: str
    to_member: str
    amount: float


@dataclass
class Group:
    """Complete ledger of one group"""
    name: str
    members: List[str]
    expenses: List[Expense] = field(default_factory=list)
    settlements: List[Settlement] = field(default_factory=list)
    currency: str = "USD"
    version: int = 2
