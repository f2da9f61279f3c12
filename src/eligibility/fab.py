"""Fertility awareness-based methods — symptoms-based and calendar-based.

Each method gets its own A/C/D category from the same answers. Only the
findings at the final category are reported as contributing factors.
During pregnancy the screening does not apply.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache

from src.catalog.fab import (
    ACTIONS,
    EXPLANATIONS,
    FAB_PREGNANT,
    FAB_QUESTIONS,
    FAB_RULES,
    LABELS,
    METHOD_NAMES,
    NOT_APPLICABLE_MESSAGE,
)
from src.eligibility.screening import ScreeningForm, build_form
from src.models.enums import FabCategory, FabMethod
from src.schemas.screening import FabMethodResult, FabResult, TrackOutcome

logger = logging.getLogger(__name__)

FAB = "fab"


@lru_cache(maxsize=1)
def fab_form() -> ScreeningForm:
    return build_form(FAB, FAB_QUESTIONS, FAB_RULES, FabCategory, [m.value for m in FabMethod])


def _method_result(outcome: TrackOutcome) -> FabMethodResult:
    method = FabMethod(outcome.track)
    category = FabCategory(outcome.category)
    return FabMethodResult(
        method=method,
        method_name=METHOD_NAMES[method],
        category=category,
        label=LABELS[category],
        explanation=EXPLANATIONS[method, category],
        action_required=ACTIONS.get(category),
        contributing_factors=outcome.deciding if category != FabCategory.ACCEPT else (),
    )


def evaluate_fab(answers: Mapping[str, object]) -> FabResult:
    """Eligibility of the symptoms-based and calendar-based methods.

    Raises:
        UnknownQuestion: an answer names a question the form does not ask.
        InvalidAnswer: an answer violates its question's constraints.
    """
    form = fab_form()
    values = form.validate(answers)

    if values.get(FAB_PREGNANT) == "yes":
        logger.debug("FAB screening not applicable: pregnant")
        return FabResult(not_applicable=True, message=NOT_APPLICABLE_MESSAGE, complete=True)

    outcome = form.evaluate(values)
    return FabResult(
        methods=tuple(_method_result(track) for track in outcome.tracks),
        advisories=outcome.advisories,
        complete=outcome.complete,
    )
