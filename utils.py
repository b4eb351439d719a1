"""
Utility functions for SplitLedger
"""
from __future__ import annotations
import os
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥", "INR": "₹"}


def today_str() -> str:
    """Get today's date as ISO string"""
    return date.today().isoformat()


def parse_date(s: str) -> date:
    """Parse YYYY-MM-DD date string"""
    return datetime.strptime(s.strip(), "%Y-%m-%d").date()


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_cents(amount) -> int:
    """Convert a decimal amount to integer cents, rounding half up"""
    return round_half_up(Decimal(str(amount)) * 100)


def from_cents(cents: int) -> float:
    return cents / 100


def format_currency(amount: float, currency: str = "USD") -> str:
    """
    Format amount for display: $1,234.50, -$5.00.
    Currencies without a known symbol render as '12.50 CHF'.
    """
    cents = to_cents(amount)
    sign = "-" if cents < 0 else ""
    body = f"{abs(cents) / 100:,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol is None:
        return f"{sign}{body} {currency.upper()}"
    return f"{sign}{symbol}{body}"


def app_dir() -> str:
    """
    Get application data directory: $SPLITLEDGER_HOME or ~/.splitledger
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("SPLITLEDGER_HOME") or os.path.expanduser("~/.splitledger")
    os.makedirs(path, exist_ok=True)
    return path
