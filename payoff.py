from __future__ import annotations

"""Month-by-month payoff simulation for a single repayment strategy.

Each month every open debt accrues one month of interest and receives its
minimum payment. The extra payment pool then goes to the first debt, in the
order supplied, that still carries a balance. When the caller budgets an
extra payment, the minimum of every debt that reaches zero is added to that
pool for the following months so freed money keeps rolling forward.

The caller's ``Debt`` objects are never modified; balances are copied into
per-run working state on entry.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from config import MONTH_CAP, ZERO_TOLERANCE
from debts import Debt

logger = logging.getLogger(__name__)

PAID_OFF = "paid_off"
MONTH_CAP_REACHED = "month_cap"

ZERO = Decimal("0")


@dataclass
class DebtSnapshot:
    """State of one debt at the end of a simulated month."""

    id: str
    name: str
    balance: Decimal
    payment: Decimal
    interest: Decimal
    extra: Decimal = ZERO  # part of ``payment`` taken from the extra pool
    paid_off_this_month: bool = False

    @property
    def is_complete(self) -> bool:
        return self.balance == 0


@dataclass
class MonthlySnapshot:
    month: int
    debts: List[DebtSnapshot]

    @property
    def total_payment(self) -> Decimal:
        return sum((d.payment for d in self.debts), ZERO)


@dataclass
class PayoffResult:
    """Outcome of one simulation run.

    ``schedule`` is empty when the run was made with ``record_schedule=False``.
    When ``status`` is ``"month_cap"`` balances were still outstanding at the
    cap and ``total_months`` is not a payoff time.
    """

    strategy: str
    total_months: int
    total_interest: Decimal
    total_paid: Decimal
    status: str
    schedule: List[MonthlySnapshot] = field(default_factory=list)
    payoff_months: Dict[str, int] = field(default_factory=dict)
    remaining_balance: Decimal = ZERO

    @property
    def converged(self) -> bool:
        return self.status == PAID_OFF


def _settle(balance: Decimal) -> Decimal:
    """Snap balances under one cent to zero."""

    if balance < ZERO_TOLERANCE:
        return ZERO
    return balance


def _debt_key(debt: Debt) -> tuple:
    return (debt.id, debt.name, debt.balance, debt.apr, debt.minimum_payment)


def simulate(
    debts: Iterable[Debt],
    extra_payment: float | Decimal = 0,
    strategy: str = "custom",
    record_schedule: bool = True,
    month_cap: int = MONTH_CAP,
) -> PayoffResult:
    """Simulate paying off ``debts`` in the given order.

    Parameters
    ----------
    debts:
        Debts already sorted by the strategy's priority. Debts without a
        balance are ignored.
    extra_payment:
        Monthly amount available beyond all minimum payments.
    strategy:
        Label stored on the result.
    record_schedule:
        When False only totals are produced, which keeps repeated runs from
        the goal solver cheap.
    month_cap:
        Maximum number of months to simulate.

    Raises
    ------
    ValueError
        If ``extra_payment`` is negative.
    """

    extra = Decimal(str(extra_payment))
    if extra < 0:
        raise ValueError("Extra payment cannot be negative")

    order = [d for d in debts if d.balance > 0]
    balances = [d.balance for d in order]
    rollover = extra > 0
    rolled = ZERO

    interest_totals = [ZERO] * len(order)
    paid_totals = [ZERO] * len(order)
    payoff_months: Dict[str, int] = {}
    schedule: List[MonthlySnapshot] = []

    month = 0
    while any(b > 0 for b in balances) and month < month_cap:
        month += 1
        open_at_start = [b > 0 for b in balances]
        payments = [ZERO] * len(order)
        interest = [ZERO] * len(order)
        extras = [ZERO] * len(order)

        # Interest and minimum payments
        for i, debt in enumerate(order):
            if balances[i] <= 0:
                continue
            charge = balances[i] * debt.monthly_rate
            interest[i] = charge
            balance = balances[i] + charge
            payment = min(debt.minimum_payment, balance)
            balances[i] = _settle(balance - payment)
            payments[i] = payment

        # Extra pool goes to the first open debt
        pool = extra + rolled
        if pool > 0:
            target: Optional[int] = next(
                (i for i, b in enumerate(balances) if b > 0), None
            )
            if target is not None:
                applied = min(pool, balances[target])
                balances[target] = _settle(balances[target] - applied)
                payments[target] += applied
                extras[target] = applied

        for i, debt in enumerate(order):
            if open_at_start[i] and balances[i] == 0:
                payoff_months[debt.id] = month
                if rollover:
                    rolled += debt.minimum_payment

        for i in range(len(order)):
            interest_totals[i] += interest[i]
            paid_totals[i] += payments[i]

        if record_schedule:
            schedule.append(
                MonthlySnapshot(
                    month=month,
                    debts=[
                        DebtSnapshot(
                            id=debt.id,
                            name=debt.name,
                            balance=balances[i],
                            payment=payments[i],
                            interest=interest[i],
                            extra=extras[i],
                            paid_off_this_month=open_at_start[i] and balances[i] == 0,
                        )
                        for i, debt in enumerate(order)
                    ],
                )
            )

    # Add per-debt totals in an order that does not depend on the strategy,
    # so equal per-debt histories give bit-identical totals.
    canonical = sorted(range(len(order)), key=lambda i: _debt_key(order[i]))
    total_interest = sum((interest_totals[i] for i in canonical), ZERO)
    total_paid = sum((paid_totals[i] for i in canonical), ZERO)

    status = PAID_OFF
    if any(b > 0 for b in balances):
        status = MONTH_CAP_REACHED
        logger.debug(
            "%s run stopped at %d months with %d debt(s) open",
            strategy,
            month_cap,
            sum(1 for b in balances if b > 0),
        )

    return PayoffResult(
        strategy=strategy,
        total_months=month,
        total_interest=total_interest,
        total_paid=total_paid,
        status=status,
        schedule=schedule,
        payoff_months=payoff_months,
        remaining_balance=sum(balances, ZERO),
    )
