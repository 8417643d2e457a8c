from __future__ import annotations

"""Goal seeking on top of the payoff simulator.

``required_payment_for_date`` answers "how much extra per month to be debt
free by a date?" by searching over whole-dollar extra payments.
``projected_date_for_budget`` answers the reverse question with a single
comparison run. ``required_payment_for_balance`` searches for the payment
that brings the total owed down to a target amount by a date.

Each strategy is searched on its own and the cheaper answer is kept. Months
to payoff never increase as the extra payment grows for a fixed ordering, so
a per-strategy binary search is sound; switching strategies between search steps
would not be.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from config import PAYMENT_SEARCH_UPPER_BOUND
from debts import Debt
from payoff import PAID_OFF, PayoffResult
from strategies import AVALANCHE, SNOWBALL, compare_strategies, run_strategy

logger = logging.getLogger(__name__)

ACHIEVABLE = "achievable"
NOT_ACHIEVABLE = "not_achievable"
INVALID_TARGET = "invalid_target"


def parse_date(value: date | str) -> date:
    """Return ``value`` as a date, parsing ISO ``YYYY-MM-DD`` strings."""

    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def months_until(target: date | str, as_of: date | str) -> int:
    """Return the number of whole calendar months from ``as_of`` to ``target``."""

    delta = relativedelta(parse_date(target), parse_date(as_of))
    return delta.years * 12 + delta.months


@dataclass
class PaymentGoal:
    """Answer to a required-payment question.

    ``required_payment`` is ``None`` unless ``status`` is ``"achievable"``.
    """

    target_date: date
    target_months: int
    status: str
    required_payment: Optional[int] = None
    strategy: Optional[str] = None
    total_months: Optional[int] = None
    total_interest: Optional[Decimal] = None
    target_balance: Optional[Decimal] = None

    @property
    def is_achievable(self) -> bool:
        return self.status == ACHIEVABLE


@dataclass
class DateGoal:
    """Projected debt-free date for a fixed extra payment."""

    extra_payment: Decimal
    projected_date: Optional[date]
    total_months: int
    total_interest: Decimal
    strategy: str
    status: str


def minimal_payment(meets: Callable[[int], bool], upper_bound: int) -> Optional[int]:
    """Return the smallest whole payment in ``[0, upper_bound]`` that ``meets``.

    ``meets`` must be monotone: once true for a payment it stays true for
    every larger one. Returns ``None`` when even ``upper_bound`` fails.
    """

    if not meets(upper_bound):
        return None
    low, high = 0, upper_bound
    while low < high:
        mid = (low + high) // 2
        if meets(mid):
            high = mid
        else:
            low = mid + 1
    return low


def _search(
    meets_for: Callable[[str], Callable[[int], bool]],
    upper_bound: int,
) -> Optional[Tuple[int, str]]:
    candidates: List[Tuple[int, str]] = []
    for strategy in (SNOWBALL, AVALANCHE):
        payment = minimal_payment(meets_for(strategy), upper_bound)
        logger.debug("%s minimal payment: %s", strategy, payment)
        if payment is not None:
            candidates.append((payment, strategy))
    if not candidates:
        return None
    # min() keeps the first of equal payments, so snowball wins ties.
    return min(candidates, key=lambda c: c[0])


def required_payment_for_date(
    debts: Iterable[Debt],
    target_date: date | str,
    as_of: Optional[date | str] = None,
    upper_bound: int = PAYMENT_SEARCH_UPPER_BOUND,
) -> PaymentGoal:
    """Return the smallest extra payment that clears ``debts`` by ``target_date``."""

    as_of = parse_date(as_of) if as_of else date.today()
    target = parse_date(target_date)
    target_months = months_until(target, as_of)
    if target_months <= 0:
        return PaymentGoal(target, target_months, INVALID_TARGET)

    debts = [d for d in debts if d.balance > 0]
    if not debts:
        return PaymentGoal(
            target,
            target_months,
            ACHIEVABLE,
            required_payment=0,
            strategy=SNOWBALL,
            total_months=0,
            total_interest=Decimal("0"),
        )

    def meets_for(strategy: str) -> Callable[[int], bool]:
        def meets(payment: int) -> bool:
            # Capping at the target turns "fast enough" into "converged".
            result = run_strategy(
                debts, payment, strategy, record_schedule=False, month_cap=target_months
            )
            return result.converged

        return meets

    logger.debug(
        "Searching extra payment for %d debts within %d months", len(debts), target_months
    )
    found = _search(meets_for, upper_bound)
    if found is None:
        logger.info("No extra payment up to %s clears debts in %d months", upper_bound, target_months)
        return PaymentGoal(target, target_months, NOT_ACHIEVABLE)

    payment, strategy = found
    result = run_strategy(debts, payment, strategy, record_schedule=False)
    return PaymentGoal(
        target,
        target_months,
        ACHIEVABLE,
        required_payment=payment,
        strategy=strategy,
        total_months=result.total_months,
        total_interest=result.total_interest,
    )


def required_payment_for_balance(
    debts: Iterable[Debt],
    target_balance: float | Decimal,
    target_date: date | str,
    as_of: Optional[date | str] = None,
    upper_bound: int = PAYMENT_SEARCH_UPPER_BOUND,
) -> PaymentGoal:
    """Return the smallest extra payment that brings total debt to ``target_balance``."""

    as_of = parse_date(as_of) if as_of else date.today()
    target = parse_date(target_date)
    target_balance = Decimal(str(target_balance))
    target_months = months_until(target, as_of)
    if target_months <= 0 or target_balance < 0:
        return PaymentGoal(
            target, target_months, INVALID_TARGET, target_balance=target_balance
        )

    debts = [d for d in debts if d.balance > 0]

    def window(payment: int, strategy: str) -> PayoffResult:
        return run_strategy(
            debts, payment, strategy, record_schedule=False, month_cap=target_months
        )

    def meets_for(strategy: str) -> Callable[[int], bool]:
        return lambda payment: window(payment, strategy).remaining_balance <= target_balance

    found = _search(meets_for, upper_bound)
    if found is None:
        return PaymentGoal(
            target, target_months, NOT_ACHIEVABLE, target_balance=target_balance
        )

    payment, strategy = found
    result = window(payment, strategy)
    return PaymentGoal(
        target,
        target_months,
        ACHIEVABLE,
        required_payment=payment,
        strategy=strategy,
        total_months=result.total_months,
        total_interest=result.total_interest,
        target_balance=target_balance,
    )


def projected_date_for_budget(
    debts: Iterable[Debt],
    extra_payment: float | Decimal,
    as_of: Optional[date | str] = None,
) -> DateGoal:
    """Return when the faster strategy clears ``debts`` at ``extra_payment``.

    ``projected_date`` is ``None`` if neither strategy finishes before the
    month cap.
    """

    as_of = parse_date(as_of) if as_of else date.today()
    best = compare_strategies(debts, extra_payment, record_schedule=False).faster
    projected = None
    if best.status == PAID_OFF:
        projected = as_of + relativedelta(months=best.total_months)
    return DateGoal(
        extra_payment=Decimal(str(extra_payment)),
        projected_date=projected,
        total_months=best.total_months,
        total_interest=best.total_interest,
        strategy=best.strategy,
        status=best.status,
    )
