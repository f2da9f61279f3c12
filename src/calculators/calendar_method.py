"""Calendar (rhythm) Method calculator.

Pure Python, deterministic. WHO evidence-based formula:
- earliest fertile day = shortest cycle - 18 (never before day 1)
- latest fertile day = longest cycle - 11
- every cycle must be 21-35 days, and the window must not be empty
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, timedelta

from src.models.enums import CalculatorType, CalculatorVerdict
from src.schemas.calculators import CalculatorResult, CycleCalendar, FertileWindow

MIN_CYCLE_LENGTH = 21
MAX_CYCLE_LENGTH = 35
SHORTEST_OFFSET = 18
LONGEST_OFFSET = 11
REQUIRED_CYCLES = 6


def fertile_window(shortest: int, longest: int) -> FertileWindow | None:
    """Cycle days at risk of pregnancy, or None when the window is empty."""
    earliest = max(1, shortest - SHORTEST_OFFSET)
    latest = longest - LONGEST_OFFSET
    if earliest > latest:
        return None
    return FertileWindow(first_day=earliest, last_day=latest)


def cycle_calendar(lmp_date: date, window: FertileWindow, average: int) -> CycleCalendar:
    """Map a fertile window onto dates, counting `lmp_date` as cycle day 1."""
    has_safe_before = window.first_day > 1
    return CycleCalendar(
        lmp_date=lmp_date,
        fertile_start=lmp_date + timedelta(days=window.first_day - 1),
        fertile_end=lmp_date + timedelta(days=window.last_day - 1),
        safe_before_start=lmp_date if has_safe_before else None,
        safe_before_end=lmp_date + timedelta(days=window.first_day - 2) if has_safe_before else None,
        safe_after_start=lmp_date + timedelta(days=window.last_day),
        safe_after_end=lmp_date + timedelta(days=max(average, window.last_day + 1) - 1),
    )


def _not_eligible(message: str, shortest: int, longest: int) -> CalculatorResult:
    return CalculatorResult(
        calculator=CalculatorType.CALENDAR,
        verdict=CalculatorVerdict.NOT_ELIGIBLE,
        message=message,
        shortest_cycle=shortest,
        longest_cycle=longest,
    )


def evaluate_calendar_method(
    shortest: int,
    longest: int,
    lmp_date: date | None = None,
    average: int | None = None,
) -> CalculatorResult:
    """Gate the Calendar Method on the shortest and longest recorded cycles.

    Args:
        shortest: Shortest of the recorded cycles, in days.
        longest: Longest of the recorded cycles, in days.
        lmp_date: First day of the last menstrual period, for calendar dates.
        average: Rounded average cycle; the safe period after the fertile
            window runs until its last day. Defaults to `longest`.

    Returns:
        CalculatorResult with the fertile window when eligible.
    """
    if shortest > longest:
        return _not_eligible(
            "The shortest cycle is longer than the longest cycle; the cycle lengths are inconsistent.",
            shortest,
            longest,
        )

    if shortest < MIN_CYCLE_LENGTH or longest > MAX_CYCLE_LENGTH:
        return _not_eligible(
            "The Calendar Method requires every cycle to be 21-35 days long. "
            "Consider a method better suited to your cycles.",
            shortest,
            longest,
        )

    window = fertile_window(shortest, longest)
    if window is None:
        return _not_eligible(
            "Your cycle lengths do not give a valid fertile window.", shortest, longest
        )

    calendar = None
    if lmp_date is not None:
        calendar = cycle_calendar(lmp_date, window, average if average is not None else longest)

    return CalculatorResult(
        calculator=CalculatorType.CALENDAR,
        verdict=CalculatorVerdict.ELIGIBLE,
        message=(
            f"Avoid unprotected sex from cycle day {window.first_day} "
            f"through day {window.last_day}."
        ),
        cycle_length=float(average) if average is not None else None,
        shortest_cycle=shortest,
        longest_cycle=longest,
        fertile_window=window,
        calendar=calendar,
    )


def evaluate_calendar_cycles(
    cycles: Sequence[int | None],
    lmp_date: date | None = None,
) -> CalculatorResult:
    """Evaluate the Calendar Method from the six most recent cycle lengths."""
    recorded = [c for c in cycles if c is not None]
    if len(recorded) != REQUIRED_CYCLES:
        return CalculatorResult(
            calculator=CalculatorType.CALENDAR,
            verdict=CalculatorVerdict.NOT_EVALUATED,
            message=f"Record the length of your last {REQUIRED_CYCLES} cycles first.",
        )
    # Rounded half up, as cycle lengths are whole days
    average = math.floor(sum(recorded) / REQUIRED_CYCLES + 0.5)
    return evaluate_calendar_method(min(recorded), max(recorded), lmp_date, average)
