import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(Path(__file__).resolve().parent, "..")))

from debts import Debt
from event_scheduler import project_plan, project_schedule, schedule_by_month
from payoff import MONTH_CAP_REACHED, PAID_OFF
from strategies import compare_strategies, run_strategy


def _debt(id, balance, minimum, apr=0):
    return Debt(id, id.title(), Decimal(str(balance)), Decimal(str(minimum)), Decimal(str(apr)))


def test_single_debt_schedule_tracks_month_ends():
    events = project_schedule([_debt("loan", 300, 100)], 0, as_of=date(2026, 1, 31))
    assert [e.date for e in events] == [date(2026, 1, 31), date(2026, 2, 28), date(2026, 3, 31)]
    assert [e.type for e in events] == ["minimum", "minimum", "payoff"]
    assert [e.balance for e in events] == [Decimal("200"), Decimal("100"), Decimal("0")]
    assert all(e.debt_name == "Loan" for e in events)


def test_extra_payment_goes_to_one_debt_at_a_time():
    debts = [_debt("a", 500, 50), _debt("b", 2000, 50)]
    events = project_schedule(debts, 100, as_of="2026-01-01", strategy="snowball")

    first = [e for e in events if e.date == date(2026, 1, 1)]
    assert [(e.debt_id, e.type, e.amount) for e in first] == [
        ("a", "extra", Decimal("150")),
        ("b", "minimum", Decimal("50")),
    ]

    fourth = [e for e in events if e.date == date(2026, 4, 1)]
    assert [(e.debt_id, e.type) for e in fourth] == [("a", "payoff"), ("b", "extra")]

    # nothing is scheduled for a debt after it is paid off
    assert not [e for e in events if e.debt_id == "a" and e.date > date(2026, 4, 1)]
    assert events[-1].type == "payoff"
    assert events[-1].date == date(2027, 1, 1)


def test_events_sorted_by_date():
    debts = [_debt("card", 2500, 80, 19.9), _debt("loan", 900, 45, 4.5)]
    events = project_schedule(debts, 60, as_of=date(2026, 3, 10))
    dates = [e.date for e in events]
    assert dates == sorted(dates)


def test_schedule_matches_simulation_totals():
    debts = [_debt("card", 2500, 80, 19.9), _debt("loan", 900, 45, 4.5)]
    events = project_schedule(debts, 60, as_of=date(2026, 3, 10), strategy="avalanche")
    result = run_strategy(debts, 60, "avalanche")
    assert abs(sum(e.amount for e in events) - result.total_paid) < Decimal("1e-9")
    assert len(schedule_by_month(events)) == result.total_months


def test_default_strategy_is_the_faster_one():
    debts = [_debt("card", 1000, 50, 24), _debt("loan", 500, 50, 0)]
    as_of = date(2026, 1, 1)
    faster = compare_strategies(debts, 200).faster.strategy
    assert project_schedule(debts, 200, as_of=as_of) == project_schedule(
        debts, 200, as_of=as_of, strategy=faster
    )


def test_horizon_limits_events():
    events = project_schedule([_debt("loan", 1200, 100)], 0, as_of=date(2026, 1, 1), horizon_months=2)
    assert [e.date for e in events] == [date(2026, 1, 1), date(2026, 2, 1)]


def test_schedule_by_month_groups_events():
    debts = [_debt("a", 100, 50), _debt("b", 100, 50)]
    grouped = schedule_by_month(project_schedule(debts, 0, as_of=date(2026, 5, 1)))
    assert sorted(grouped) == [date(2026, 5, 1), date(2026, 6, 1)]
    assert [e.debt_id for e in grouped[date(2026, 6, 1)]] == ["a", "b"]


def test_project_plan_reports_status_with_events():
    result, events = project_plan([_debt("loan", 300, 100)], 0, as_of="2026-01-01")
    assert result.status == PAID_OFF
    assert events == project_schedule([_debt("loan", 300, 100)], 0, as_of="2026-01-01")


def test_capped_plan_has_no_payoff_event():
    # 50 a month never covers 1% monthly interest on 10000
    result, events = project_plan([_debt("loan", 10000, 50, 12)], 0, as_of=date(2026, 1, 1))
    assert result.status == MONTH_CAP_REACHED
    assert not result.converged
    assert len(events) == 360
    assert events[-1].date == date(2055, 12, 1)
    assert all(e.type == "minimum" for e in events)
