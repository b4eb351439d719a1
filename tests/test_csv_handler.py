import csv

from models import Expense, Settlement, Split, Transaction
from csv_handler import (
    export_expenses_to_csv,
    export_settlements_to_csv,
    export_transactions_to_csv,
    import_expenses_from_csv,
    import_settlements_from_csv,
)


def test_expenses_csv(tmp_path):
    path = str(tmp_path / "expenses.csv")
    expenses = [
        Expense(id="e1", payer="ana", splits=[Split("ana", 33.34), Split("ben", 33.33), Split("cy", 33.33)],
                description="Taxi, airport", amount=100.0, category="transport", date="2024-06-01"),
        Expense(id="e2", payer="ben", splits=[Split("cy", 12.5)], amount=12.5, split_policy="exact"),
    ]
    export_expenses_to_csv(expenses, path)

    with open(path, encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["splits"] == "ana:33.34;ben:33.33;cy:33.33"
    assert rows[0]["description"] == "Taxi, airport"

    loaded = import_expenses_from_csv(path)
    assert [e.id for e in loaded] == ["e1", "e2"]
    assert loaded[0].splits == expenses[0].splits
    assert loaded[0].category == "transport"
    assert loaded[1].split_policy == "exact"
    assert loaded[1].split_inputs == []


def test_settlements_csv(tmp_path):
    path = str(tmp_path / "settlements.csv")
    settlements = [Settlement(id="s1", payer="ben", payee="ana", amount=20.0, date="2024-06-02", notes="cash")]
    export_settlements_to_csv(settlements, path)
    assert import_settlements_from_csv(path) == settlements


def test_transactions_csv(tmp_path):
    path = tmp_path / "transfers.csv"
    export_transactions_to_csv([Transaction("cy", "ana", 50.0)], str(path))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == ["from,to,amount", "cy,ana,50.00"]
