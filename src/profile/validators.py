"""Answer validation against question constraints.

Pure Python. Mirrors the field checks of the questionnaire screens:
booleans are never numbers, numbers stay within the declared range, and
choices come from the declared options. Returns the normalized value.
"""

from __future__ import annotations

import math

from src.errors import InvalidAnswer
from src.models.enums import AnswerKind
from src.schemas.questionnaire import AnswerValue, Question


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _parse_number(question: Question, value: object) -> float | int:
    if isinstance(value, bool):
        raise InvalidAnswer(question.id, value, "expected a number, got a yes/no answer")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        # Persisted sessions may hold numbers as text
        try:
            return float(value.strip())
        except ValueError:
            raise InvalidAnswer(question.id, value, f"'{value}' is not a number") from None
    raise InvalidAnswer(question.id, value, f"expected a number, got {type(value).__name__}")


def validate_numeric(question: Question, value: object) -> float | int:
    number = _parse_number(question, value)
    try:
        finite = math.isfinite(number)
    except OverflowError:
        # ints beyond float range
        finite = False
    if not finite:
        raise InvalidAnswer(question.id, value, "must be a finite number")

    if question.integer:
        if not float(number).is_integer():
            raise InvalidAnswer(question.id, value, "must be a whole number")
        number = int(number)

    low, high = question.minimum, question.maximum
    if (low is not None and number < low) or (high is not None and number > high):
        if low is not None and high is not None:
            reason = f"must be between {_format_bound(low)} and {_format_bound(high)}"
        elif low is not None:
            reason = f"must be at least {_format_bound(low)}"
        else:
            reason = f"must be at most {_format_bound(high)}"
        raise InvalidAnswer(question.id, value, reason)
    return number


def validate_answer(question: Question, value: object) -> AnswerValue:
    """Validate and normalize a raw value for `question`.

    Raises:
        InvalidAnswer: the value violates the question's constraints.
    """
    if value is None:
        raise InvalidAnswer(question.id, value, "an answer is required")

    if question.kind == AnswerKind.BOOLEAN:
        if not isinstance(value, bool):
            raise InvalidAnswer(question.id, value, "expected yes or no")
        return value

    if question.kind == AnswerKind.NUMERIC:
        return validate_numeric(question, value)

    if not isinstance(value, str):
        raise InvalidAnswer(question.id, value, f"expected one of {', '.join(question.options)}")
    if value not in question.options:
        raise InvalidAnswer(
            question.id, value, f"'{value}' is not one of {', '.join(question.options)}"
        )
    return value
