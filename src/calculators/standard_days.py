"""Standard Days Method (SDM) calculator.

Pure Python, deterministic. Implements the WHO fertility-awareness rule:
- Eligible iff the average cycle length is 26-32 days inclusive
- Fertile window = cycle days 8 through 19 inclusive, whatever the length
- Average taken over exactly 6 recorded cycles
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

from src.models.enums import CalculatorType, CalculatorVerdict
from src.schemas.calculators import CalculatorResult, CycleCalendar, FertileWindow

MIN_CYCLE_LENGTH = 26
MAX_CYCLE_LENGTH = 32
FERTILE_FIRST_DAY = 8
FERTILE_LAST_DAY = 19
REQUIRED_CYCLES = 6

# Dates are laid out over a 32-day cycle, the longest one SDM accepts
_CALENDAR_CYCLE_DAYS = MAX_CYCLE_LENGTH

_ELIGIBLE_MESSAGE = (
    "Your cycles are 26-32 days long, so the Standard Days Method can be used. "
    "Avoid unprotected sex on cycle days 8 through 19."
)
_NOT_ELIGIBLE_MESSAGE = (
    "The Standard Days Method requires cycles 26-32 days long. "
    "Consider a method better suited to your cycle length."
)


def average_cycle_length(cycles: Sequence[int | None]) -> float | None:
    """Mean of exactly six recorded cycles, or None if fewer were recorded."""
    recorded = [c for c in cycles if c is not None]
    if len(recorded) != REQUIRED_CYCLES:
        return None
    return sum(recorded) / REQUIRED_CYCLES


def is_eligible(cycle_length: float) -> bool:
    return MIN_CYCLE_LENGTH <= cycle_length <= MAX_CYCLE_LENGTH


def cycle_calendar(lmp_date: date) -> CycleCalendar:
    """Fertile and safe dates for a cycle starting on `lmp_date` (cycle day 1)."""
    return CycleCalendar(
        lmp_date=lmp_date,
        fertile_start=lmp_date + timedelta(days=FERTILE_FIRST_DAY - 1),
        fertile_end=lmp_date + timedelta(days=FERTILE_LAST_DAY - 1),
        safe_before_start=lmp_date,
        safe_before_end=lmp_date + timedelta(days=FERTILE_FIRST_DAY - 2),
        safe_after_start=lmp_date + timedelta(days=FERTILE_LAST_DAY),
        safe_after_end=lmp_date + timedelta(days=_CALENDAR_CYCLE_DAYS - 1),
    )


def evaluate_standard_days(cycle_length: float, lmp_date: date | None = None) -> CalculatorResult:
    """Gate SDM on the average cycle length.

    Args:
        cycle_length: Average cycle length in days.
        lmp_date: First day of the last menstrual period, for calendar dates.

    Returns:
        CalculatorResult; the fertile window is set only when eligible.
    """
    if not is_eligible(cycle_length):
        return CalculatorResult(
            calculator=CalculatorType.STANDARD_DAYS,
            verdict=CalculatorVerdict.NOT_ELIGIBLE,
            message=_NOT_ELIGIBLE_MESSAGE,
            cycle_length=cycle_length,
        )

    return CalculatorResult(
        calculator=CalculatorType.STANDARD_DAYS,
        verdict=CalculatorVerdict.ELIGIBLE,
        message=_ELIGIBLE_MESSAGE,
        cycle_length=cycle_length,
        fertile_window=FertileWindow(first_day=FERTILE_FIRST_DAY, last_day=FERTILE_LAST_DAY),
        calendar=cycle_calendar(lmp_date) if lmp_date is not None else None,
    )


def evaluate_standard_days_cycles(
    cycles: Sequence[int | None],
    lmp_date: date | None = None,
) -> CalculatorResult:
    """Evaluate SDM from the six most recent cycle lengths."""
    average = average_cycle_length(cycles)
    if average is None:
        return CalculatorResult(
            calculator=CalculatorType.STANDARD_DAYS,
            verdict=CalculatorVerdict.NOT_EVALUATED,
            message=f"Record the length of your last {REQUIRED_CYCLES} cycles first.",
        )
    return evaluate_standard_days(average, lmp_date)
