"""
Configuration and data loading/saving for SplitLedger
"""
from __future__ import annotations
import json
import logging
import os
from typing import List
from dataclasses import asdict

from models import Expense, Group, Settlement, Split, SplitInput
from utils import app_dir

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"


def load_people(path: str) -> List[str]:
    """Load people list from JSON file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return list(data.get("people", []))
    except FileNotFoundError:
        logger.debug("No people file at %s", path)
        return []


def get_default_group(name: str = "My group") -> Group:
    """Create empty group, seeding members from people.json if present"""
    people = load_people(os.path.join(app_dir(), "people.json"))
    return Group(name=name, members=people, currency=DEFAULT_CURRENCY)


def _expense_from_dict(e: dict) -> Expense:
    return Expense(
        id=e["id"],
        payer=e["payer"],
        splits=[Split(**s) for s in e.get("splits", [])],
        description=e.get("description", ""),
        amount=float(e.get("amount", 0.0)),
        currency=e.get("currency", DEFAULT_CURRENCY),
        category=e.get("category", "other"),
        date=e.get("date", ""),
        split_policy=e.get("split_policy", "equal"),
        split_inputs=[SplitInput(**s) for s in e.get("split_inputs", [])],
        notes=e.get("notes", ""),
    )


def _settlement_from_dict(s: dict) -> Settlement:
    return Settlement(
        id=s["id"],
        payer=s["payer"],
        payee=s["payee"],
        amount=float(s["amount"]),
        currency=s.get("currency", DEFAULT_CURRENCY),
        date=s.get("date", ""),
        notes=s.get("notes", ""),
    )


def group_to_dict(group: Group) -> dict:
    """Convert Group object to dictionary for JSON serialization"""
    return {
        "version": group.version,
        "name": group.name,
        "currency": group.currency,
        "members": group.members,
        "expenses": [asdict(e) for e in group.expenses],
        "settlements": [asdict(s) for s in group.settlements],
    }


def dict_to_group(d: dict) -> Group:
    """Convert dictionary from JSON to Group object"""
    return Group(
        version=d.get("version", 2),
        name=d.get("name", ""),
        currency=d.get("currency", DEFAULT_CURRENCY),
        members=list(d.get("members", [])),
        expenses=[_expense_from_dict(e) for e in d.get("expenses", [])],
        settlements=[_settlement_from_dict(s) for s in d.get("settlements", [])],
    )


def load_group(path: str) -> Group:
    """Load group ledger from JSON file"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    group = dict_to_group(data)
    logger.info(
        "Loaded %s: %d expenses, %d settlements",
        path, len(group.expenses), len(group.settlements),
    )
    return group


def save_group(group: Group, path: str) -> None:
    """Save group ledger to JSON file"""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(group_to_dict(group), f, ensure_ascii=False, indent=2)
    logger.info("Saved %s", path)
