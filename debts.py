"""Debt records consumed by the payoff engine.

The engine assumes valid input. ``active_debts`` and ``validate_debt`` are the
caller-side checks used before a simulation is run.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List


@dataclass
class Debt:
    """Represents one outstanding obligation."""

    id: str
    name: str
    balance: Decimal
    minimum_payment: Decimal
    apr: Decimal  # nominal annual percent, e.g. Decimal("19.99")

    @property
    def monthly_rate(self) -> Decimal:
        return self.apr / Decimal("1200")

    @classmethod
    def from_dict(cls, d: dict) -> "Debt":
        """Build a ``Debt`` from a JSON-style dictionary."""

        name = d.get("name", "Debt")
        minimum = d.get("minimum_payment", d.get("min_payment", 0))
        apr = d.get("apr", d.get("interest_rate", 0))
        return cls(
            id=str(d.get("id", name)),
            name=name,
            balance=Decimal(str(d.get("balance", 0))),
            minimum_payment=Decimal(str(minimum)),
            apr=Decimal(str(apr)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "balance": float(self.balance),
            "minimum_payment": float(self.minimum_payment),
            "apr": float(self.apr),
        }


def load_debts(items: Iterable[dict | Debt]) -> List[Debt]:
    """Return ``Debt`` objects for a mix of dictionaries and debts."""

    return [d if isinstance(d, Debt) else Debt.from_dict(d) for d in items]


def validate_debt(debt: Debt) -> None:
    """Raise ``ValueError`` if ``debt`` cannot be simulated."""

    if debt.minimum_payment <= 0:
        raise ValueError(f"{debt.name}: minimum payment must be positive")
    if debt.apr < 0:
        raise ValueError(f"{debt.name}: APR cannot be negative")
    if debt.apr >= 100:
        raise ValueError(f"{debt.name}: APR must be below 100")
    if debt.balance < 0:
        raise ValueError(f"{debt.name}: balance cannot be negative")


def active_debts(debts: Iterable[Debt]) -> List[Debt]:
    """Return debts with a balance left that are valid simulation input."""

    return [
        d
        for d in debts
        if d.balance > 0 and d.minimum_payment > 0 and d.apr >= 0
    ]
