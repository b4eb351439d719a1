"""
Excel export functionality for SplitLedger
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Group
from computations import (
    aggregate_balances,
    category_totals,
    compute_summary,
    filter_by_date,
    simplify_debts,
)

logger = logging.getLogger(__name__)


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            v = cell.value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _new_sheet(wb, title, headers):
    ws = wb.create_sheet(title)
    ws.append(headers)
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    return ws


def _money_format(ws, columns):
    for r in range(2, ws.max_row + 1):
        for c in columns:
            ws.cell(r, c).number_format = "0.00"


def export_excel(
    group: Group,
    filepath: str,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> None:
    """
    Export group ledger to Excel file with sheets:
    Expenses, Settlements, Summary, Categories, Transfers
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)

    exps = filter_by_date(group.expenses, start, end)
    stls = filter_by_date(group.settlements, start, end)

    # Expenses: one row per expense, one column per member share
    members = list(group.members)
    ws = _new_sheet(
        wb, "Expenses",
        ["date", "description", "category", "payer", "amount", "policy"] + members,
    )
    for e in sorted(exps, key=lambda e: (e.date, e.description)):
        shares = {s.member: s.amount for s in e.splits}
        ws.append(
            [e.date, e.description, e.category, e.payer, e.amount, e.split_policy]
            + [shares.get(m, 0.0) for m in members]
        )
    if ws.max_row >= 2:
        last = ws.max_row
        ws.append(["TOTALS"] + [""] * (ws.max_column - 1))
        trow = ws.max_row
        ws.cell(trow, 1).font = Font(bold=True)
        for col in [5] + list(range(7, 7 + len(members))):
            letter = get_column_letter(col)
            ws.cell(trow, col).value = f"=SUM({letter}2:{letter}{last})"
    _money_format(ws, [5] + list(range(7, 7 + len(members))))
    _autosize_columns(ws)

    ws = _new_sheet(wb, "Settlements", ["date", "payer", "payee", "amount", "notes"])
    for s in sorted(stls, key=lambda s: s.date):
        ws.append([s.date, s.payer, s.payee, s.amount, s.notes])
    _money_format(ws, [4])
    _autosize_columns(ws)

    ws = _new_sheet(wb, "Summary", ["Member", "Paid", "Share", "Sent", "Received", "Net"])
    summary = compute_summary(group, start, end)
    for m, s in summary.items():
        ws.append([m, s["paid"], s["share"], s["sent"], s["received"], s["net"]])
    _money_format(ws, range(2, 7))
    _autosize_columns(ws)

    ws = _new_sheet(wb, "Categories", ["Category", "Total"])
    for cat, total in sorted(category_totals(exps).items()):
        ws.append([cat, total])
    _money_format(ws, [2])
    _autosize_columns(ws)

    ws = _new_sheet(wb, "Transfers", ["From (Debtor)", "To (Creditor)", "Amount"])
    for t in simplify_debts(aggregate_balances(exps, stls)):
        ws.append([t.from_member, t.to_member, t.amount])
    _money_format(ws, [3])
    _autosize_columns(ws)

    wb.save(filepath)
    logger.info("Exported Excel report to %s", filepath)
