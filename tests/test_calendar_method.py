"""Tests for the Calendar (rhythm) Method calculator.

Tests cover:
- Fertile window formula (shortest - 18, longest - 11)
- 21-35 day cycle bounds
- Inconsistent inputs
- Calendar dates and the six-cycle entry point
"""

from __future__ import annotations

from datetime import date

from src.calculators import run_calculator
from src.calculators.calendar_method import (
    cycle_calendar,
    evaluate_calendar_cycles,
    evaluate_calendar_method,
    fertile_window,
)
from src.models.enums import CalculatorType, CalculatorVerdict
from src.schemas.calculators import FertileWindow


class TestFertileWindow:
    """WHO formula for the first and last fertile day."""

    def test_regular_cycles(self) -> None:
        window = fertile_window(26, 32)
        assert (window.first_day, window.last_day) == (8, 21)

    def test_widest_accepted_range(self) -> None:
        window = fertile_window(21, 35)
        assert (window.first_day, window.last_day) == (3, 24)

    def test_first_day_never_before_day_one(self) -> None:
        window = fertile_window(15, 30)
        assert window.first_day == 1

    def test_empty_window(self) -> None:
        assert fertile_window(40, 30) is None


class TestEligibility:
    """Every cycle must be 21-35 days long."""

    def test_eligible(self) -> None:
        result = evaluate_calendar_method(26, 32)
        assert result.verdict == CalculatorVerdict.ELIGIBLE
        assert result.fertile_window == FertileWindow(first_day=8, last_day=21)
        assert "day 8" in result.message

    def test_bounds_inclusive(self) -> None:
        assert evaluate_calendar_method(21, 35).eligible is True

    def test_shortest_too_short(self) -> None:
        result = evaluate_calendar_method(20, 30)
        assert result.verdict == CalculatorVerdict.NOT_ELIGIBLE
        assert result.fertile_window is None

    def test_longest_too_long(self) -> None:
        result = evaluate_calendar_method(25, 36)
        assert result.verdict == CalculatorVerdict.NOT_ELIGIBLE

    def test_shortest_above_longest(self) -> None:
        result = evaluate_calendar_method(30, 25)
        assert result.verdict == CalculatorVerdict.NOT_ELIGIBLE
        assert "inconsistent" in result.message


class TestCalendarDates:
    """Fertile and safe periods laid out from the last period."""

    def test_dates(self) -> None:
        result = evaluate_calendar_method(26, 32, lmp_date=date(2026, 3, 1), average=29)
        calendar = result.calendar
        assert calendar.fertile_start == date(2026, 3, 8)
        assert calendar.fertile_end == date(2026, 3, 21)
        assert calendar.safe_before_start == date(2026, 3, 1)
        assert calendar.safe_before_end == date(2026, 3, 7)
        assert calendar.safe_after_start == date(2026, 3, 22)
        assert calendar.safe_after_end == date(2026, 3, 29)

    def test_no_safe_period_before_day_one_window(self) -> None:
        calendar = cycle_calendar(date(2026, 3, 1), FertileWindow(first_day=1, last_day=20), 28)
        assert calendar.fertile_start == date(2026, 3, 1)
        assert calendar.safe_before_start is None
        assert calendar.safe_before_end is None

    def test_average_defaults_to_longest(self) -> None:
        calendar = evaluate_calendar_method(26, 32, lmp_date=date(2026, 3, 1)).calendar
        assert calendar.safe_after_end == date(2026, 4, 1)


class TestSixCycles:
    """Entry point taking the six most recent cycle lengths."""

    def test_incomplete(self) -> None:
        result = evaluate_calendar_cycles([28, 30, None])
        assert result.verdict == CalculatorVerdict.NOT_EVALUATED

    def test_uses_extremes_and_rounded_average(self) -> None:
        result = evaluate_calendar_cycles([26, 28, 30, 27, 29, 32])
        assert result.shortest_cycle == 26
        assert result.longest_cycle == 32
        assert result.cycle_length == 29.0

    def test_one_cycle_out_of_range(self) -> None:
        result = evaluate_calendar_cycles([26, 28, 30, 27, 29, 38])
        assert result.verdict == CalculatorVerdict.NOT_ELIGIBLE


class TestRunCalculator:
    """Calculator bound to profile answers."""

    def test_waits_for_both_lengths(self) -> None:
        result = run_calculator(CalculatorType.CALENDAR, {"shortest-cycle-length": 26})
        assert result.verdict == CalculatorVerdict.NOT_EVALUATED
        assert "longest-cycle-length" in result.message

    def test_reads_profile_answers(self) -> None:
        result = run_calculator(
            CalculatorType.CALENDAR,
            {"shortest-cycle-length": 27, "longest-cycle-length": 31},
        )
        assert result.fertile_window == FertileWindow(first_day=9, last_day=20)
