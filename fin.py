"""Command-line interface for planning debt payoff."""

from decimal import Decimal, ROUND_HALF_UP
import json
from typing import Dict, List

import config
from config import CENT, configure_logging
from debts import Debt, active_debts, load_debts, validate_debt
from event_scheduler import project_schedule, schedule_by_month
from goals import projected_date_for_budget, required_payment_for_date
from strategies import compare_strategies


def load_data() -> Dict:
    """Load saved debts from ``config.DATA_FILE``."""
    if config.DATA_FILE.exists():
        with config.DATA_FILE.open() as f:
            return json.load(f)
    return {"debts": [], "extra_payment": 0}


def save_data(data: Dict) -> None:
    """Persist debts and the extra payment to disk."""
    with config.DATA_FILE.open("w") as f:
        json.dump(data, f, indent=2)


def _money(value: Decimal) -> str:
    return f"${value.quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"


def _months(months: int) -> str:
    years, rest = divmod(months, 12)
    if years == 0:
        return f"{months} months"
    return f"{years}y {rest}m"


def _simulation_input(data: Dict) -> List[Debt]:
    return active_debts(load_debts(data.get("debts", [])))


# ---------------------------------------------------------------------------
# Editing helpers


def _delete_item(items: List[dict]) -> None:
    idx = input("Number to delete: ").strip()
    if idx.isdigit() and 1 <= int(idx) <= len(items):
        del items[int(idx) - 1]


def _prompt_debt(current: Dict | None = None) -> Dict:
    """Ask for debt fields; blank answers keep ``current`` values."""
    current = current or {}

    def ask(label: str, key: str, default=None):
        shown = current.get(key, default)
        raw = input(f"{label}{f' [{shown}]' if shown is not None else ''}: ").strip()
        return raw if raw else shown

    name = ask("Name", "name", "Debt")
    entry = {
        "id": current.get("id", name),
        "name": name,
        "balance": float(ask("Balance", "balance")),
        "minimum_payment": float(ask("Minimum payment", "minimum_payment")),
        "apr": float(ask("APR", "apr")),
    }
    validate_debt(Debt.from_dict(entry))
    return entry


def edit_debts(data: Dict) -> None:
    """Add, edit or remove debt entries."""
    debts = data.setdefault("debts", [])
    while True:
        print("\nCurrent debts:")
        for i, d in enumerate(debts, 1):
            debt = Debt.from_dict(d)
            print(
                f"{i}. {debt.name} balance ${debt.balance} min ${debt.minimum_payment} APR {debt.apr}"
            )
        action = input("A)dd, E)dit, D)elete, B)ack: ").strip().lower()
        try:
            if action == "a":
                entry = _prompt_debt()
                existing = {d.get("id") for d in debts}
                if entry["id"] in existing:
                    entry["id"] = f"{entry['id']}-{len(debts) + 1}"
                debts.append(entry)
                save_data(data)
            elif action == "e":
                idx = input("Number to edit: ").strip()
                if idx.isdigit() and 1 <= int(idx) <= len(debts):
                    debts[int(idx) - 1] = _prompt_debt(debts[int(idx) - 1])
                    save_data(data)
            elif action == "d":
                _delete_item(debts)
                save_data(data)
            elif action == "b":
                break
        except (TypeError, ValueError) as exc:
            print(f"Warning: {exc}")


def edit_extra_payment(data: Dict) -> None:
    raw = input(f"Monthly extra payment [{data.get('extra_payment', 0)}]: ").strip()
    if not raw:
        return
    try:
        amount = float(raw)
    except ValueError:
        print("Warning: not a number")
        return
    if amount < 0:
        print("Warning: extra payment cannot be negative")
        return
    data["extra_payment"] = amount
    save_data(data)


# ---------------------------------------------------------------------------
# Reports


def run_comparison(data: Dict) -> None:
    """Print snowball and avalanche results side by side."""
    debts = _simulation_input(data)
    if not debts:
        print("No debts to simulate.")
        return
    extra = data.get("extra_payment", 0)
    comparison = compare_strategies(debts, extra, record_schedule=False)

    print(f"--- Strategy comparison (extra {_money(Decimal(str(extra)))}/month) ---")
    for result in (comparison.snowball, comparison.avalanche):
        if result.converged:
            time = _months(result.total_months)
        else:
            time = f"not paid off within {_months(result.total_months)}"
        print(
            f"{result.strategy.title():<10} {time}, interest {_money(result.total_interest)}"
        )
    savings = comparison.interest_savings
    if savings > 0:
        print(f"Avalanche saves {_money(savings)} in interest.")
    elif savings < 0:
        print(f"Snowball saves {_money(-savings)} in interest.")
    print(f"Recommended: {comparison.recommended}")


def run_goal(data: Dict) -> None:
    """Ask for a target date and print the extra payment needed."""
    debts = _simulation_input(data)
    target = input("Debt-free by (YYYY-MM-DD): ").strip()
    try:
        goal = required_payment_for_date(debts, target)
    except ValueError as exc:
        print(f"Warning: {exc}")
        return

    if goal.status == "invalid_target":
        print("Target date must be at least one month away.")
    elif not goal.is_achievable:
        print(f"Not achievable by {goal.target_date.isoformat()} with any realistic payment.")
    else:
        print(
            f"Pay ${goal.required_payment:,}/month extra using {goal.strategy}: "
            f"debt free in {_months(goal.total_months)}, "
            f"interest {_money(goal.total_interest)}"
        )


def run_projection(data: Dict) -> None:
    """Print the projected debt-free date for a monthly budget."""
    debts = _simulation_input(data)
    raw = input(f"Extra payment [{data.get('extra_payment', 0)}]: ").strip()
    try:
        extra = Decimal(raw) if raw else Decimal(str(data.get("extra_payment", 0)))
        projection = projected_date_for_budget(debts, extra)
    except (ArithmeticError, ValueError) as exc:
        print(f"Warning: {exc}")
        return
    if projection.projected_date is None:
        print("Debts are not paid off within the simulation limit.")
        return
    print(
        f"Debt free by {projection.projected_date.isoformat()} using {projection.strategy} "
        f"({_months(projection.total_months)}, interest {_money(projection.total_interest)})"
    )


def run_schedule(data: Dict) -> None:
    """Print the month-by-month payment calendar."""
    debts = _simulation_input(data)
    events = project_schedule(debts, data.get("extra_payment", 0))
    for day, day_events in sorted(schedule_by_month(events).items()):
        total = sum((ev.amount for ev in day_events), Decimal("0"))
        print(f"{day.isoformat()}: total {_money(total)}")
        for ev in day_events:
            print(
                f"  {ev.debt_name} {_money(ev.amount)} ({ev.type}), "
                f"remaining {_money(ev.balance)}"
            )


# ---------------------------------------------------------------------------
# Menu


def main() -> None:
    """Display the main menu and handle user selections."""
    configure_logging()
    data = load_data()
    while True:
        print("\n--- Debt Payoff Planner ---")
        print("1. Edit debts")
        print("2. Set extra payment")
        print("3. Compare strategies")
        print("4. Required payment for a date")
        print("5. Projected date for a budget")
        print("6. Payment schedule")
        print("7. Quit")
        choice = input("Select an option: ").strip()
        if choice == "1":
            edit_debts(data)
        elif choice == "2":
            edit_extra_payment(data)
        elif choice == "3":
            run_comparison(data)
        elif choice == "4":
            run_goal(data)
        elif choice == "5":
            run_projection(data)
        elif choice == "6":
            run_schedule(data)
        elif choice == "7":
            break
        else:
            print("Invalid option.")


if __name__ == "__main__":
    main()
