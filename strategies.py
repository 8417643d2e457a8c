"""Snowball and avalanche orderings and the side-by-side comparison."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Iterable, List

from debts import Debt
from payoff import PayoffResult, simulate

logger = logging.getLogger(__name__)

SNOWBALL = "snowball"
AVALANCHE = "avalanche"


def snowball_order(debts: Iterable[Debt]) -> List[Debt]:
    """Smallest balance first."""
    return sorted(debts, key=lambda d: d.balance)


def avalanche_order(debts: Iterable[Debt]) -> List[Debt]:
    """Highest APR first."""
    # ``reverse=True`` would flip ties, so negate the key instead.
    return sorted(debts, key=lambda d: -d.apr)


STRATEGIES: Dict[str, Callable[[Iterable[Debt]], List[Debt]]] = {
    SNOWBALL: snowball_order,
    AVALANCHE: avalanche_order,
}


def run_strategy(
    debts: Iterable[Debt],
    extra_payment: float | Decimal,
    strategy: str,
    record_schedule: bool = True,
    **kwargs,
) -> PayoffResult:
    """Order ``debts`` for ``strategy`` and simulate the payoff."""

    try:
        ordering = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown payoff strategy: {strategy}")
    return simulate(
        ordering(debts),
        extra_payment,
        strategy=strategy,
        record_schedule=record_schedule,
        **kwargs,
    )


def better_result(snowball: PayoffResult, avalanche: PayoffResult) -> PayoffResult:
    """Return whichever result is debt free sooner, preferring snowball on ties."""

    if snowball.converged != avalanche.converged:
        return snowball if snowball.converged else avalanche
    if avalanche.total_months < snowball.total_months:
        return avalanche
    return snowball


@dataclass
class StrategyComparison:
    snowball: PayoffResult
    avalanche: PayoffResult

    @property
    def faster(self) -> PayoffResult:
        return better_result(self.snowball, self.avalanche)

    @property
    def interest_savings(self) -> Decimal:
        """Interest avalanche saves over snowball (negative if it costs more)."""
        return self.snowball.total_interest - self.avalanche.total_interest

    @property
    def months_difference(self) -> int:
        return self.snowball.total_months - self.avalanche.total_months

    @property
    def recommended(self) -> str:
        if self.snowball.converged != self.avalanche.converged:
            return self.faster.strategy
        if self.avalanche.total_interest < self.snowball.total_interest:
            return AVALANCHE
        return SNOWBALL


def compare_strategies(
    debts: Iterable[Debt],
    extra_payment: float | Decimal = 0,
    record_schedule: bool = True,
) -> StrategyComparison:
    """Run both strategies over the same debts."""

    debts = list(debts)
    comparison = StrategyComparison(
        snowball=run_strategy(debts, extra_payment, SNOWBALL, record_schedule),
        avalanche=run_strategy(debts, extra_payment, AVALANCHE, record_schedule),
    )
    for result in (comparison.snowball, comparison.avalanche):
        if not result.converged:
            logger.warning(
                "%s payoff is not finished after %d months; minimum payments "
                "may not cover interest",
                result.strategy,
                result.total_months,
            )
    return comparison
