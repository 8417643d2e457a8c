from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from config import PROJECTION_HORIZON_MONTHS
from debts import Debt
from goals import parse_date
from payoff import DebtSnapshot, PayoffResult
from strategies import compare_strategies, run_strategy


@dataclass
class PaymentEvent:
    date: date
    debt_id: str
    debt_name: str
    amount: Decimal
    type: str  # 'minimum', 'extra', 'payoff'
    balance: Decimal  # after this payment


def _classify(snapshot: DebtSnapshot) -> str:
    if snapshot.paid_off_this_month:
        return "payoff"
    if snapshot.extra > 0:
        return "extra"
    return "minimum"


def project_plan(
    debts: Iterable[Debt],
    extra_payment: float | Decimal = 0,
    as_of: Optional[date | str] = None,
    strategy: Optional[str] = None,
    horizon_months: int = PROJECTION_HORIZON_MONTHS,
) -> Tuple[PayoffResult, List[PaymentEvent]]:
    """Return the simulation result together with its dated payment events.

    Check ``result.converged`` before treating the events as a full plan. A
    run that hits the month cap still yields events for every simulated
    month up to ``horizon_months``, but none of type ``"payoff"`` for the
    debts left open.
    """
    start = parse_date(as_of) if as_of else date.today()
    debts = list(debts)

    if strategy is None:
        result = compare_strategies(debts, extra_payment).faster
    else:
        result = run_strategy(debts, extra_payment, strategy)

    events: List[PaymentEvent] = []
    for snapshot in result.schedule[:horizon_months]:
        due = start + relativedelta(months=snapshot.month - 1)
        for d in snapshot.debts:
            if d.payment <= 0:
                continue
            events.append(
                PaymentEvent(
                    date=due,
                    debt_id=d.id,
                    debt_name=d.name,
                    amount=d.payment,
                    type=_classify(d),
                    balance=d.balance,
                )
            )

    # sort is stable, so same-day events keep the strategy's priority order
    events.sort(key=lambda e: e.date)
    return result, events


def project_schedule(
    debts: Iterable[Debt],
    extra_payment: float | Decimal = 0,
    as_of: Optional[date | str] = None,
    strategy: Optional[str] = None,
    horizon_months: int = PROJECTION_HORIZON_MONTHS,
) -> List[PaymentEvent]:
    """Return dated payment events for the payoff plan, earliest first.

    Events come from the same simulation used for the strategy comparison.
    When ``strategy`` is ``None`` the faster of snowball and avalanche is used.
    The first payment falls on ``as_of`` and one payment per open debt follows
    each month until the plan ends or ``horizon_months`` have passed.

    If minimum payments never cover the interest the plan does not finish:
    the list then runs to the horizon with no payoff events. Use
    ``project_plan`` to get the run's status alongside the events.
    """
    return project_plan(debts, extra_payment, as_of, strategy, horizon_months)[1]


def schedule_by_month(events: Iterable[PaymentEvent]) -> Dict[date, List[PaymentEvent]]:
    """Group payment events by their date."""
    grouped: Dict[date, List[PaymentEvent]] = defaultdict(list)
    for ev in events:
        grouped[ev.date].append(ev)
    return dict(grouped)
