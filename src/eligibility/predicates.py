"""Predicate tree interpreter.

Pure Python, deterministic. Predicates are data (`src.schemas.rules`);
this module walks them to list referenced facts and to evaluate them
against a mapping of answered facts.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Mapping
from typing import Any

from src.errors import RuleEvaluationError
from src.models.enums import Operator
from src.schemas.questionnaire import AnswerValue
from src.schemas.rules import AllOf, Always, AnyOf, Comparison

_COMPARATORS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: operator.eq,
    Operator.NE: operator.ne,
    Operator.LT: operator.lt,
    Operator.LE: operator.le,
    Operator.GT: operator.gt,
    Operator.GE: operator.ge,
    Operator.IN: lambda left, right: left in right,
}


def references(predicate: Any) -> frozenset[str]:
    """Return every question (or derived fact) id a predicate reads."""
    if isinstance(predicate, Comparison):
        return frozenset((predicate.question,))
    if isinstance(predicate, (AllOf, AnyOf)):
        found: set[str] = set()
        for term in predicate.terms:
            found |= references(term)
        return frozenset(found)
    if isinstance(predicate, Always):
        return frozenset()
    raise RuleEvaluationError(f"Unsupported predicate node: {type(predicate).__name__}")


def evaluate(predicate: Any, facts: Mapping[str, AnswerValue], rule_id: str | None = None) -> bool:
    """Evaluate a predicate against answered facts.

    The caller guarantees that every referenced fact is present; a missing
    fact here is malformed rule data, not an incomplete profile.
    """
    if isinstance(predicate, Always):
        return True
    if isinstance(predicate, AllOf):
        return all(evaluate(term, facts, rule_id) for term in predicate.terms)
    if isinstance(predicate, AnyOf):
        return any(evaluate(term, facts, rule_id) for term in predicate.terms)
    if isinstance(predicate, Comparison):
        if predicate.question not in facts:
            raise RuleEvaluationError(
                f"predicate reads '{predicate.question}', which is not answered", rule_id
            )
        left = facts[predicate.question]
        try:
            return bool(_COMPARATORS[predicate.op](left, predicate.value))
        except TypeError as exc:
            raise RuleEvaluationError(
                f"cannot compare {left!r} {predicate.op.value} {predicate.value!r}", rule_id
            ) from exc
    raise RuleEvaluationError(f"Unsupported predicate node: {type(predicate).__name__}", rule_id)
