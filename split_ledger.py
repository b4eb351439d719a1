"""
SplitLedger command line
- Record who paid what and how it is shared, record settlements between members.
- Show net balances and the transfers that settle them; export CSV or Excel reports.

Run:
  split-ledger trip.json balances
  split-ledger trip.json add-expense --payer ana --amount 90 --participants ana ben cy
  split-ledger trip.json add-expense --payer ana --amount 100 --policy percentage --shares ana=60 ben=40
  split-ledger trip.json settle

Dependencies:
  pip install openpyxl
"""
from __future__ import annotations
import argparse
import logging
import os
import sys
import uuid
from typing import List, Optional

from models import EXACT, PERCENTAGE, SPLIT_POLICIES, Settlement, SplitInput
from config import get_default_group, load_group, save_group
from computations import (
    InvalidInput,
    aggregate_balances,
    build_expense,
    compute_summary,
    simplify_debts,
    validate_settlement,
)
from csv_handler import (
    export_expenses_to_csv,
    export_settlements_to_csv,
    export_transactions_to_csv,
)
from excel_export import export_excel
from utils import format_currency, parse_date, today_str

logger = logging.getLogger("split_ledger")


def _parse_shares(pairs: List[str], policy: str) -> List[SplitInput]:
    """Parse member=value pairs into split inputs"""
    inputs = []
    for pair in pairs:
        if "=" not in pair:
            raise InvalidInput(f"expected member=value, got {pair!r}")
        member, value = pair.rsplit("=", 1)
        try:
            v = float(value)
        except ValueError:
            raise InvalidInput(f"not a number: {value!r}") from None
        if policy == PERCENTAGE:
            inputs.append(SplitInput(member.strip(), percentage=v))
        else:
            inputs.append(SplitInput(member.strip(), amount=v))
    return inputs


def _add_members(group, names):
    for n in names:
        if n not in group.members:
            group.members.append(n)


def cmd_balances(group, args):
    balances = aggregate_balances(group.expenses, group.settlements)
    for m in group.members + [k for k in balances if k not in group.members]:
        print(f"{m:<20} {format_currency(balances.get(m, 0.0), group.currency):>14}")


def cmd_settle(group, args):
    transactions = simplify_debts(aggregate_balances(group.expenses, group.settlements))
    if not transactions:
        print("All settled up.")
    for t in transactions:
        print(f"{t.from_member} pays {t.to_member} {format_currency(t.amount, group.currency)}")


def cmd_summary(group, args):
    start = parse_date(args.start) if args.start else None
    end = parse_date(args.end) if args.end else None
    print(f"{'member':<20}{'paid':>12}{'share':>12}{'sent':>12}{'received':>12}{'net':>12}")
    for m, s in compute_summary(group, start, end).items():
        print(
            f"{m:<20}{s['paid']:>12.2f}{s['share']:>12.2f}"
            f"{s['sent']:>12.2f}{s['received']:>12.2f}{s['net']:>12.2f}"
        )


def cmd_add_expense(group, args):
    if args.shares and args.policy not in (PERCENTAGE, EXACT):
        raise InvalidInput("--shares needs --policy percentage or exact")
    inputs = _parse_shares(args.shares or [], args.policy) if args.policy in (PERCENTAGE, EXACT) else None
    participants = args.participants or ([s.member for s in inputs] if inputs else list(group.members))
    expense = build_expense(
        args.payer,
        args.amount,
        participants,
        args.policy,
        inputs,
        description=args.description,
        category=args.category,
        currency=group.currency,
        date=args.date or today_str(),
    )
    _add_members(group, [args.payer] + [s.member for s in expense.splits])
    group.expenses.append(expense)
    logger.info("Added expense %s (%s %.2f)", expense.id, expense.split_policy, expense.amount)
    return True


def cmd_add_settlement(group, args):
    validate_settlement(args.payer, args.payee, args.amount)
    group.settlements.append(Settlement(
        id=uuid.uuid4().hex,
        payer=args.payer,
        payee=args.payee,
        amount=args.amount,
        currency=group.currency,
        date=args.date or today_str(),
        notes=args.notes,
    ))
    _add_members(group, [args.payer, args.payee])
    return True


def cmd_export_excel(group, args):
    export_excel(group, args.path)


def cmd_export_csv(group, args):
    export_expenses_to_csv(group.expenses, args.path)
    root, ext = os.path.splitext(args.path)
    transactions = simplify_debts(aggregate_balances(group.expenses, group.settlements))
    export_transactions_to_csv(transactions, f"{root}_transfers{ext or '.csv'}")
    if group.settlements:
        export_settlements_to_csv(group.settlements, f"{root}_settlements{ext or '.csv'}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="split-ledger", description="Shared expense ledger")
    parser.add_argument("ledger", help="ledger JSON file (created if missing)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("balances", help="net balance per member").set_defaults(func=cmd_balances)
    sub.add_parser("settle", help="suggested transfers").set_defaults(func=cmd_settle)

    p = sub.add_parser("summary", help="paid/share/net per member")
    p.add_argument("--start")
    p.add_argument("--end")
    p.set_defaults(func=cmd_summary)

    p = sub.add_parser("add-expense")
    p.add_argument("--payer", required=True)
    p.add_argument("--amount", type=float, required=True)
    p.add_argument("--participants", nargs="*")
    p.add_argument("--policy", choices=SPLIT_POLICIES, default="equal")
    p.add_argument("--shares", nargs="*", help="member=value pairs for percentage/exact")
    p.add_argument("--description", default="")
    p.add_argument("--category", default="other")
    p.add_argument("--date")
    p.set_defaults(func=cmd_add_expense)

    p = sub.add_parser("add-settlement")
    p.add_argument("--payer", required=True)
    p.add_argument("--payee", required=True)
    p.add_argument("--amount", type=float, required=True)
    p.add_argument("--date")
    p.add_argument("--notes", default="")
    p.set_defaults(func=cmd_add_settlement)

    p = sub.add_parser("export-excel")
    p.add_argument("path")
    p.set_defaults(func=cmd_export_excel)

    p = sub.add_parser("export-csv")
    p.add_argument("path")
    p.set_defaults(func=cmd_export_csv)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if os.path.exists(args.ledger):
        group = load_group(args.ledger)
    else:
        group = get_default_group(os.path.splitext(os.path.basename(args.ledger))[0])

    try:
        changed = args.func(group, args)
    except InvalidInput as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if changed:
        save_group(group, args.ledger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
