import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from debts import Debt, active_debts, load_debts, validate_debt


def test_from_dict_converts_numbers():
    debt = Debt.from_dict(
        {"id": 7, "name": "Visa", "balance": 152.995, "minimum_payment": 35, "apr": 19.99}
    )
    assert debt.id == "7"
    assert debt.balance == Decimal("152.995")
    assert debt.minimum_payment == Decimal("35")
    assert debt.apr == Decimal("19.99")
    assert debt.monthly_rate == Decimal("19.99") / Decimal("1200")


def test_from_dict_accepts_alternate_keys():
    debt = Debt.from_dict({"name": "Loan", "balance": 100, "min_payment": 10, "interest_rate": 4})
    assert debt.id == "Loan"
    assert debt.minimum_payment == Decimal("10")
    assert debt.apr == Decimal("4")


def test_to_dict_round_trips():
    data = {"id": "car", "name": "Car", "balance": 9500.0, "minimum_payment": 260.0, "apr": 6.5}
    assert Debt.from_dict(data).to_dict() == data


def test_load_debts_mixed_input():
    existing = Debt("a", "A", Decimal("1"), Decimal("1"), Decimal("0"))
    loaded = load_debts([existing, {"name": "B", "balance": 5, "minimum_payment": 1, "apr": 0}])
    assert loaded[0] is existing
    assert loaded[1].name == "B"


@pytest.mark.parametrize(
    "fields",
    [
        {"minimum_payment": 0},
        {"minimum_payment": -5},
        {"apr": -1},
        {"apr": 100},
        {"balance": -20},
    ],
)
def test_validate_debt_rejects_bad_records(fields):
    data = {"name": "Bad", "balance": 100, "minimum_payment": 10, "apr": 5}
    data.update(fields)
    with pytest.raises(ValueError):
        validate_debt(Debt.from_dict(data))


def test_validate_debt_accepts_zero_balance():
    validate_debt(Debt.from_dict({"name": "Done", "balance": 0, "minimum_payment": 10, "apr": 0}))


def test_active_debts_filters_unusable_records():
    debts = load_debts(
        [
            {"name": "ok", "balance": 100, "minimum_payment": 10, "apr": 5},
            {"name": "paid", "balance": 0, "minimum_payment": 10, "apr": 5},
            {"name": "no-min", "balance": 100, "minimum_payment": 0, "apr": 5},
            {"name": "bad-rate", "balance": 100, "minimum_payment": 10, "apr": -2},
        ]
    )
    assert [d.name for d in active_debts(debts)] == ["ok"]
