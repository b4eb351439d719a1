"""
CSV export and import functionality for SplitLedger
"""
from __future__ import annotations
import csv
import logging
from typing import List

from models import Expense, Settlement, Split, Transaction

logger = logging.getLogger(__name__)

EXPENSE_COLUMNS = [
    'id', 'date', 'payer', 'description', 'amount', 'currency',
    'category', 'split_policy', 'splits', 'notes',
]
SETTLEMENT_COLUMNS = ['id', 'date', 'payer', 'payee', 'amount', 'currency', 'notes']


def _encode_splits(splits: List[Split]) -> str:
    return ';'.join([f"{s.member}:{s.amount:.2f}" for s in splits])


def _decode_splits(text: str) -> List[Split]:
    splits = []
    if text:
        for pair in text.split(';'):
            if ':' in pair:
                k, v = pair.rsplit(':', 1)
                splits.append(Split(k.strip(), float(v.strip())))
    return splits


def export_expenses_to_csv(expenses: List[Expense], filepath: str) -> None:
    """
    Export expenses list to CSV file
    Splits are written as 'member:amount;member:amount'
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(EXPENSE_COLUMNS)
        for e in expenses:
            writer.writerow([
                e.id,
                e.date,
                e.payer,
                e.description,
                f"{e.amount:.2f}",
                e.currency,
                e.category,
                e.split_policy,
                _encode_splits(e.splits),
                e.notes,
            ])
    logger.info("Exported %d expenses to %s", len(expenses), filepath)


def import_expenses_from_csv(filepath: str) -> List[Expense]:
    """
    Import expenses list from CSV file
    Policy parameters are not part of the CSV; imported expenses carry no split_inputs.
    """
    expenses = []
    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            expenses.append(Expense(
                id=row['id'],
                payer=row['payer'],
                splits=_decode_splits(row.get('splits', '')),
                description=row.get('description', ''),
                amount=float(row['amount']),
                currency=row.get('currency') or 'USD',
                category=row.get('category') or 'other',
                date=row.get('date', ''),
                split_policy=row.get('split_policy') or 'exact',
                notes=row.get('notes', ''),
            ))
    logger.info("Imported %d expenses from %s", len(expenses), filepath)
    return expenses


def export_settlements_to_csv(settlements: List[Settlement], filepath: str) -> None:
    """Export settlements list to CSV file"""
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(SETTLEMENT_COLUMNS)
        for s in settlements:
            writer.writerow([s.id, s.date, s.payer, s.payee, f"{s.amount:.2f}", s.currency, s.notes])
    logger.info("Exported %d settlements to %s", len(settlements), filepath)


def import_settlements_from_csv(filepath: str) -> List[Settlement]:
    """Import settlements list from CSV file"""
    with open(filepath, 'r', encoding='utf-8') as f:
        settlements = [
            Settlement(
                id=row['id'],
                payer=row['payer'],
                payee=row['payee'],
                amount=float(row['amount']),
                currency=row.get('currency') or 'USD',
                date=row.get('date', ''),
                notes=row.get('notes', ''),
            )
            for row in csv.DictReader(f)
        ]
    logger.info("Imported %d settlements from %s", len(settlements), filepath)
    return settlements


def export_transactions_to_csv(transactions: List[Transaction], filepath: str) -> None:
    """Export suggested transfers to CSV file"""
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['from', 'to', 'amount'])
        for t in transactions:
            writer.writerow([t.from_member, t.to_member, f"{t.amount:.2f}"])
