"""Facts computed from other answers.

Rules may compare a derived fact exactly like a question. A derived fact is
available once every one of its inputs is answered.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from src.catalog.questions import HEIGHT, LONGEST_CYCLE_LENGTH, SHORTEST_CYCLE_LENGTH, WEIGHT
from src.models.enums import AnswerKind
from src.schemas.questionnaire import AnswerValue

BMI = "bmi"
IRREGULAR_PERIODS = "irregular-periods"

# Shortest and longest cycle may differ by at most this many days
MAX_CYCLE_VARIATION = 7


@dataclass(frozen=True)
class DerivedFact:
    """A value computed from answered questions."""

    name: str
    kind: AnswerKind
    inputs: tuple[str, ...]
    compute: Callable[[Mapping[str, AnswerValue]], AnswerValue | None]


def body_mass_index(weight_kg: float, height_cm: float) -> float:
    """BMI = weight (kg) / height (m)². Not rounded.

    Raises:
        ValueError: height is zero or negative.
    """
    if height_cm <= 0:
        raise ValueError(f"height must be positive, got {height_cm}")
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def _bmi(values: Mapping[str, AnswerValue]) -> float | None:
    height = float(values[HEIGHT])
    if height <= 0:
        # Only reachable through rule tables that allow a zero height
        return None
    return body_mass_index(float(values[WEIGHT]), height)


def _irregular(values: Mapping[str, AnswerValue]) -> bool:
    spread = float(values[LONGEST_CYCLE_LENGTH]) - float(values[SHORTEST_CYCLE_LENGTH])
    return spread > MAX_CYCLE_VARIATION


DERIVED_FACTS: dict[str, DerivedFact] = {
    BMI: DerivedFact(
        name=BMI,
        kind=AnswerKind.NUMERIC,
        inputs=(WEIGHT, HEIGHT),
        compute=_bmi,
    ),
    IRREGULAR_PERIODS: DerivedFact(
        name=IRREGULAR_PERIODS,
        kind=AnswerKind.BOOLEAN,
        inputs=(SHORTEST_CYCLE_LENGTH, LONGEST_CYCLE_LENGTH),
        compute=_irregular,
    ),
}


def resolve_facts(
    values: Mapping[str, AnswerValue],
    derived: Mapping[str, DerivedFact] = DERIVED_FACTS,
) -> dict[str, AnswerValue]:
    """Return answers plus every derived fact whose inputs are all answered.

    A fact whose inputs cannot produce a value (a zero height) stays absent.
    """
    facts = dict(values)
    for fact in derived.values():
        if all(name in values for name in fact.inputs):
            value = fact.compute(values)
            if value is not None:
                facts[fact.name] = value
    return facts
