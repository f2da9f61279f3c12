"""Fertility-awareness calculators — Standard Days and Calendar Method."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

from src.calculators.calendar_method import (
    evaluate_calendar_cycles,
    evaluate_calendar_method,
)
from src.calculators.standard_days import (
    average_cycle_length,
    evaluate_standard_days,
    evaluate_standard_days_cycles,
)
from src.models.enums import CalculatorType, CalculatorVerdict
from src.schemas.calculators import CalculatorResult

AVERAGE_CYCLE_LENGTH = "average-cycle-length"

# Question ids each calculator reads from a profile, in argument order
CALCULATOR_INPUTS: dict[CalculatorType, tuple[str, ...]] = {
    CalculatorType.STANDARD_DAYS: (AVERAGE_CYCLE_LENGTH,),
    CalculatorType.CALENDAR: ("shortest-cycle-length", "longest-cycle-length"),
}


def run_calculator(
    calculator: CalculatorType,
    values: Mapping[str, object],
    lmp_date: date | None = None,
) -> CalculatorResult:
    """Run a calculator against profile answers.

    Returns a NOT_EVALUATED result when any input is still unanswered.
    Calendar dates are added when `lmp_date` is given.
    """
    inputs = CALCULATOR_INPUTS[calculator]
    missing = [name for name in inputs if name not in values]
    if missing:
        return CalculatorResult(
            calculator=calculator,
            verdict=CalculatorVerdict.NOT_EVALUATED,
            message=f"Waiting for: {', '.join(missing)}",
        )

    if calculator == CalculatorType.STANDARD_DAYS:
        return evaluate_standard_days(float(values[inputs[0]]), lmp_date)

    shortest, longest = (int(values[name]) for name in inputs)
    average = values.get(AVERAGE_CYCLE_LENGTH)
    return evaluate_calendar_method(
        shortest,
        longest,
        lmp_date,
        round(float(average)) if average is not None else None,
    )


__all__ = [
    "CALCULATOR_INPUTS",
    "run_calculator",
    "average_cycle_length",
    "evaluate_standard_days",
    "evaluate_standard_days_cycles",
    "evaluate_calendar_method",
    "evaluate_calendar_cycles",
]
