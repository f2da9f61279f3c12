"""Pydantic schemas for fertility-awareness calculator results.

Pure data classes — no business logic. Used as return types by the
Standard Days and Calendar Method calculators.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from src.models.enums import CalculatorType, CalculatorVerdict


class FertileWindow(BaseModel):
    """Fertile days expressed as cycle days (day 1 = first day of bleeding)."""

    model_config = ConfigDict(frozen=True)

    first_day: int
    last_day: int

    @property
    def length(self) -> int:
        return self.last_day - self.first_day + 1


class CycleCalendar(BaseModel):
    """Calendar dates derived from the last menstrual period (LMP)."""

    model_config = ConfigDict(frozen=True)

    lmp_date: date
    fertile_start: date
    fertile_end: date
    safe_after_start: date
    safe_after_end: date
    # Empty when the fertile window opens on cycle day 1
    safe_before_start: date | None = None
    safe_before_end: date | None = None

    def is_fertile(self, day: date) -> bool:
        return self.fertile_start <= day <= self.fertile_end


class CalculatorResult(BaseModel):
    """Verdict of a calculator, with the fertile window when eligible."""

    model_config = ConfigDict(frozen=True)

    calculator: CalculatorType
    verdict: CalculatorVerdict
    message: str
    cycle_length: float | None = None     # average (SDM) or None
    shortest_cycle: int | None = None     # Calendar Method inputs
    longest_cycle: int | None = None
    fertile_window: FertileWindow | None = None
    calendar: CycleCalendar | None = None

    @property
    def eligible(self) -> bool:
        return self.verdict == CalculatorVerdict.ELIGIBLE
