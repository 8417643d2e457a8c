"""Engine constants and environment overrides."""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

CENT = Decimal("0.01")

# Balances below this are treated as paid off.
ZERO_TOLERANCE = CENT

# 50 years; guards against negative amortization.
MONTH_CAP = 600

# Largest extra payment the goal solver will try, per month.
PAYMENT_SEARCH_UPPER_BOUND = 50000

PROJECTION_HORIZON_MONTHS = 360

DATA_FILE = Path(
    os.getenv(
        "DEBT_PLANNER_DATA_FILE",
        str(Path(__file__).with_name("financial_data.json")),
    )
)

LOG_LEVEL = os.getenv("DEBT_PLANNER_LOG_LEVEL", "WARNING").upper()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for command-line use."""

    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
